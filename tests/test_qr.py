from __future__ import annotations

import pytest

from toman.payment.result import PaymentResult
from toman.utils.qr import generate_payment_qr


def _is_png(data: bytes) -> bool:
    return isinstance(data, (bytes, bytearray)) and data.startswith(b"\x89PNG\r\n\x1a\n")


def test_qr_for_start_pay_url() -> None:
    data = generate_payment_qr("https://www.zarinpal.com/pg/StartPay/000000000000000000000000000000123456")
    assert _is_png(data)
    assert len(data) > 100


def test_qr_from_payment_result() -> None:
    result = PaymentResult("A" * 36, "https://sandbox.zarinpal.com/pg/StartPay/" + "A" * 36)
    assert _is_png(result.qr_png(size=200))


@pytest.mark.parametrize("bad", ["", "zarinpal.com/pg/StartPay/A", "ftp://x/y", None])
def test_qr_rejects_non_http_urls(bad: object) -> None:
    with pytest.raises(ValueError):
        generate_payment_qr(bad)  # type: ignore[arg-type]
