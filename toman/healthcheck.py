import asyncio
import os
import sys

import httpx
from dotenv import load_dotenv

from toman.config import Settings
from toman.payment.exceptions import InvalidConfigurationError
from toman.payment.providers.zarinpal import ZarinpalGateway

# Healthcheck: validate gateway ENV (merchant id, sandbox flag) and,
# optionally, that the resolved Zarinpal host answers.
#
# Skip the network probe with HEALTHCHECK_SKIP_GATEWAY=1 (offline CI, staging).


async def _check_gateway(host: str) -> bool:
    try:
        timeout = httpx.Timeout(12.0, connect=6.0, read=6.0)
        async with httpx.AsyncClient(timeout=timeout) as client:
            resp = await client.get(host)
            return resp.status_code < 500
    except httpx.HTTPError:
        return False


def main() -> int:
    load_dotenv()
    cfg = Settings()

    if not cfg.merchant_id:
        print("missing ZARINPAL_MERCHANT_ID", file=sys.stderr)
        return 1

    try:
        host = ZarinpalGateway(settings=cfg).host()
    except InvalidConfigurationError as e:
        print(f"invalid ZARINPAL_SANDBOX: {e}", file=sys.stderr)
        return 1

    skip = os.getenv("HEALTHCHECK_SKIP_GATEWAY", "0").strip().lower() in {"1", "true", "yes", "on"}
    if not skip and not asyncio.run(_check_gateway(host)):
        print(f"gateway not reachable: {host}", file=sys.stderr)
        return 1

    print("ok")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
