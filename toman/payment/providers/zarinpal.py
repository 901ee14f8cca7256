"""
Zarinpal payment provider.

Builds a PaymentRequest.json call from explicitly set fields plus configured
defaults, sends it once and turns the provider answer into a PaymentResult or
a GatewayError. Verification of the callback is handled elsewhere.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterator, Optional, Union

import httpx

from toman.payment.exceptions import GatewayError, InvalidConfigurationError
from toman.payment.providers.base import BaseGateway, response_data
from toman.payment.result import PaymentResult

logger = logging.getLogger(__name__)

SUCCESS_STATUS = 100

UNKNOWN_ERROR_MESSAGE = "An unknown payment gateway error occurred."

STATUS_MESSAGES: Dict[int, str] = {
    -1: "اطلاعات ارسال شده ناقص است.",
    -2: "IP و يا مرچنت كد پذيرنده صحيح نيست",
    -3: "با توجه به محدوديت هاي شاپرك امكان پرداخت با رقم درخواست شده ميسر نمي باشد",
    -4: "سطح تاييد پذيرنده پايين تر از سطح نقره اي است.",
    -11: "درخواست مورد نظر يافت نشد.",
    -12: "امكان ويرايش درخواست ميسر نمي باشد.",
    -21: "هيچ نوع عمليات مالي براي اين تراكنش يافت نشد",
    -22: "تراكنش نا موفق ميباشد",
    -33: "رقم تراكنش با رقم پرداخت شده مطابقت ندارد",
    -34: "سقف تقسيم تراكنش از لحاظ تعداد يا رقم عبور نموده است",
    -40: "اجازه دسترسي به متد مربوطه وجود ندارد.",
    -41: "اطلاعات ارسال شده مربوط به AdditionalData غيرمعتبر ميباشد.",
    -42: "مدت زمان معتبر طول عمر شناسه پرداخت بايد بين 30 دقيه تا 45 روز مي باشد.",
    -54: "درخواست مورد نظر آرشيو شده است",
    101: "عمليات پرداخت موفق بوده و قبلا PaymentVerification تراكنش انجام شده است.",
}

PaymentOutcome = Union[PaymentResult, GatewayError]


def status_message(status: int) -> str:
    return STATUS_MESSAGES.get(status, UNKNOWN_ERROR_MESSAGE)


def _status_code(raw: Any) -> int:
    if isinstance(raw, bool):
        return 0
    try:
        return int(raw)
    except (TypeError, ValueError):
        return 0


def _flatten(value: Any) -> Iterator[Any]:
    # Depth-first; dict values in insertion order
    if isinstance(value, dict):
        value = list(value.values())
    if isinstance(value, (list, tuple)):
        for item in value:
            yield from _flatten(item)
    else:
        yield value


def interpret_response(
    data: Dict[str, Any],
    payment_url_for: Callable[[str], str],
    cause: Optional[BaseException] = None,
) -> PaymentOutcome:
    """Classify a decoded provider body.

    A body that came with a transport or HTTP error (`cause` set) is always a
    failure, whatever it contains.
    """
    authority = data.get("Authority")
    raw_status = data.get("Status")
    # Strict: 100.0, "100" and True are not success
    if cause is None and type(raw_status) is int and raw_status == SUCCESS_STATUS and authority:
        authority = str(authority)
        return PaymentResult(authority, payment_url_for(authority))

    status = _status_code(data.get("Status", 0))
    errors = data.get("errors")
    # null entries carry no text; the first non-null one is reported
    first_error = next((e for e in _flatten(errors) if e is not None), None) if errors else None
    if first_error is not None:
        message = str(first_error)
    else:
        message = status_message(status)
    return GatewayError(message, status, cause)


class ZarinpalGateway(BaseGateway):
    REQUEST_PATH = "/pg/rest/WebGate/PaymentRequest.json"
    START_PAY_PATH = "/pg/StartPay/"

    def callback(self, callback_url: str) -> "ZarinpalGateway":
        self.data("CallbackURL", callback_url)
        return self

    def amount(self, amount: Any) -> "ZarinpalGateway":
        self.data("Amount", amount)
        return self

    def mobile(self, mobile: str) -> "ZarinpalGateway":
        self.data("Mobile", mobile)
        return self

    def email(self, email: str) -> "ZarinpalGateway":
        self.data("Email", email)
        return self

    def merchant(self, merchant_id: str) -> "ZarinpalGateway":
        self.data("MerchantID", merchant_id)
        return self

    def description(self, description: str) -> "ZarinpalGateway":
        self.data("Description", description)
        return self

    set_callback_url = callback
    set_amount = amount
    set_mobile = mobile
    set_email = email
    set_merchant_id = merchant
    set_description = description

    # ---- resolution ----

    def host(self) -> str:
        subdomain = "sandbox" if self._is_sandbox() else "www"
        return f"https://{subdomain}.zarinpal.com"

    def request_url(self) -> str:
        return self.host() + self.REQUEST_PATH

    def payment_url_for(self, transaction_id: str) -> str:
        return f"{self.host()}{self.START_PAY_PATH}{transaction_id}"

    def build_payload(self) -> Dict[str, Any]:
        payload = dict(self._data)
        payload.update(
            {
                "MerchantID": self._merchant_id(),
                "CallbackURL": self._callback_url(),
                "Description": self._description(),
            }
        )
        return payload

    def _is_sandbox(self) -> bool:
        sandbox = self.get_config("sandbox")
        if sandbox is None or sandbox is False:
            return False
        if sandbox is True:
            return True
        raise InvalidConfigurationError("sandbox")

    def _merchant_id(self) -> Optional[str]:
        return self.get_data("MerchantID") or self.get_config("merchant_id")

    def _callback_url(self) -> Optional[str]:
        explicit = self.get_data("CallbackURL")
        if explicit:
            return explicit
        route = self.get_config("callback_route")
        if not route:
            return None
        if self.route_resolver is None:
            return route
        return self.route_resolver(route)

    def _description(self) -> str:
        description = self.get_data("Description") or self.get_config("description") or ""
        amount = self.get_data("Amount")
        return str(description).replace(":amount", "" if amount is None else str(amount))

    # ---- terminal action ----

    async def submit(self) -> PaymentResult:
        payload = self.build_payload()
        url = self.request_url()
        logger.info(
            "zarinpal.payment_request",
            extra={"extra": {"url": url, "amount": payload.get("Amount"), "merchant_id": payload.get("MerchantID")}},
        )
        try:
            resp = await self._post_json(url, payload)
        except httpx.HTTPStatusError as e:
            outcome = interpret_response(response_data(e.response), self.payment_url_for, cause=e)
        except httpx.HTTPError as e:
            outcome = interpret_response({}, self.payment_url_for, cause=e)
        except Exception as e:
            # unencodable payload, closed client
            outcome = interpret_response({}, self.payment_url_for, cause=e)
        else:
            outcome = interpret_response(response_data(resp), self.payment_url_for)

        if isinstance(outcome, GatewayError):
            raise outcome
        logger.info("zarinpal.authority_acquired", extra={"extra": {"authority": outcome.transaction_id}})
        return outcome

    request = submit


__all__ = [
    "STATUS_MESSAGES",
    "UNKNOWN_ERROR_MESSAGE",
    "PaymentOutcome",
    "ZarinpalGateway",
    "interpret_response",
    "status_message",
]
