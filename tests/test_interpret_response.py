from __future__ import annotations

import dataclasses

import pytest

from toman.payment.exceptions import GatewayError
from toman.payment.providers.zarinpal import UNKNOWN_ERROR_MESSAGE, interpret_response, status_message
from toman.payment.result import PaymentResult


def _url(authority: str) -> str:
    return "https://www.zarinpal.com/pg/StartPay/" + authority


def test_success_outcome_is_payment_result() -> None:
    out = interpret_response({"Status": 100, "Authority": "000000000000000000000000000000123456"}, _url)
    assert isinstance(out, PaymentResult)
    assert out.redirect_url == _url("000000000000000000000000000000123456")


def test_failure_outcome_is_returned_not_raised() -> None:
    out = interpret_response({"Status": -3}, _url)
    assert isinstance(out, GatewayError)
    assert out.status_code == -3
    assert out.message == status_message(-3)


def test_cause_forces_failure() -> None:
    cause = RuntimeError("boom")
    out = interpret_response({"Status": 100, "Authority": "A"}, _url, cause=cause)
    assert isinstance(out, GatewayError)
    assert out.cause is cause


def test_nested_errors_flatten_depth_first() -> None:
    errors = {"validation": [{"field": "Amount", "detail": ["too small"]}], "code": -1}
    out = interpret_response({"Status": -1, "errors": errors}, _url)
    assert isinstance(out, GatewayError)
    assert out.message == "Amount"


def test_non_numeric_status_is_zero() -> None:
    out = interpret_response({"Status": "oops"}, _url)
    assert isinstance(out, GatewayError)
    assert out.status_code == 0
    assert out.message == UNKNOWN_ERROR_MESSAGE


def test_payment_result_is_immutable() -> None:
    res = PaymentResult("A", _url("A"))
    with pytest.raises(dataclasses.FrozenInstanceError):
        res.transaction_id = "B"  # type: ignore[misc]


def test_null_error_entries_are_skipped() -> None:
    out = interpret_response({"Status": -1, "errors": [None, ["Merchant is not active."]]}, _url)
    assert isinstance(out, GatewayError)
    assert out.message == "Merchant is not active."


def test_only_null_error_entries_fall_back_to_table() -> None:
    out = interpret_response({"Status": -1, "errors": [None]}, _url)
    assert isinstance(out, GatewayError)
    assert out.message == status_message(-1)


@pytest.mark.parametrize("status", [100.0, "100", True])
def test_success_requires_integer_status(status: object) -> None:
    out = interpret_response({"Status": status, "Authority": "A"}, _url)
    assert isinstance(out, GatewayError)
