from __future__ import annotations

import json
import logging

import pytest

from toman.logging_config import JsonFormatter, SensitiveDataFilter, _sanitize_obj, _sanitize_str, setup_logging


def test_sanitize_authorization_bearer_masked() -> None:
    s = "Authorization: Bearer ABCDEFGHIJKLMNOP"
    out = _sanitize_str(s)
    assert "Bearer [REDACTED]" in out


def test_sanitize_merchant_kv_masked() -> None:
    s = '{"MerchantID":"my-merchant-code","Amount":1000}'
    out = _sanitize_str(s)
    assert '"MerchantID":"[REDACTED]"' in out
    assert '"Amount":1000' in out


def test_sanitize_uuid_keeps_tail_only() -> None:
    s = "merchant d7537698-4d9e-4a23-9457-ae1dbd7d10a2 rejected"
    out = _sanitize_str(s)
    assert "d7537698" not in out
    assert "***10a2" in out


def test_sanitize_mobile_and_email() -> None:
    out = _sanitize_str("payer 09121234567 <buyer@example.com>")
    assert "09121234567" not in out
    assert "***4567" in out
    assert "b***@example.com" in out


def test_sanitize_nested_objects() -> None:
    obj = {
        "MerchantID": "d7537698-4d9e-4a23-9457-ae1dbd7d10a2",
        "nested": [
            {"mobile": "09121234567"},
            {"url": "https://www.zarinpal.com/pg/rest/WebGate/PaymentRequest.json?merchant_id=SECRET"},
        ],
        "Amount": 1000,
    }
    out = _sanitize_obj(obj)
    assert out["MerchantID"] == "***10a2"
    assert out["nested"][0]["mobile"] == "***4567"
    assert "SECRET" not in out["nested"][1]["url"]
    assert out["Amount"] == 1000


def test_filter_and_json_formatter_mask_extra() -> None:
    record = logging.LogRecord("toman.test", logging.INFO, __file__, 1, "zarinpal.payment_request", None, None)
    record.extra = {"merchant_id": "d7537698-4d9e-4a23-9457-ae1dbd7d10a2", "amount": 1000}
    assert SensitiveDataFilter().filter(record) is True

    payload = json.loads(JsonFormatter().format(record))
    assert payload["message"] == "zarinpal.payment_request"
    assert payload["merchant_id"] == "***10a2"
    assert payload["amount"] == 1000


def test_httpx_logger_level_warning_in_production(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_ENV", "production")
    monkeypatch.setenv("LOG_TO_FILE", "0")
    setup_logging()
    logger = logging.getLogger("httpx")
    assert logger.level == logging.WARNING or logger.getEffectiveLevel() == logging.WARNING
