from __future__ import annotations

import json
from decimal import Decimal
from typing import Any, Callable, Dict, Optional

import httpx

from toman.config import Settings, settings as default_settings


class BaseGateway:
    """Holds the request payload, configuration and HTTP client of one gateway instance.

    Payload fields are stored as given; providers resolve defaults when the
    request is built. An instance is meant to be owned by a single call site.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[httpx.AsyncClient] = None,
        route_resolver: Optional[Callable[[str], str]] = None,
    ) -> None:
        self.settings = settings if settings is not None else default_settings
        self.route_resolver = route_resolver
        self._client = client
        self._data: Dict[str, Any] = {}

    def data(self, key: str, value: Any) -> None:
        self._data[key] = value

    def get_data(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def get_config(self, key: str, default: Any = None) -> Any:
        return getattr(self.settings, key, default)

    async def _post_json(self, url: str, payload: Dict[str, Any]) -> httpx.Response:
        """POST `payload` as JSON and raise httpx.HTTPStatusError on non-2xx."""
        body = json.dumps(payload, default=_json_default, ensure_ascii=False).encode("utf-8")
        headers = {"Content-Type": "application/json", "accept": "application/json"}
        if self._client is not None:
            resp = await self._client.post(url, content=body, headers=headers)
            resp.raise_for_status()
            return resp
        timeout = httpx.Timeout(self.settings.http_timeout, connect=10.0)
        async with httpx.AsyncClient(timeout=timeout) as client:
            resp = await client.post(url, content=body, headers=headers)
            resp.raise_for_status()
            return resp


def _json_default(value: Any) -> Any:
    # Amounts are usually Decimal (rials); whole values go out as integers
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def response_data(resp: httpx.Response) -> Dict[str, Any]:
    """Decoded JSON object of a response, or an empty dict when the body is not one."""
    try:
        data = resp.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}
