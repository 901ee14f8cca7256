from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def _parse_sandbox(raw: str | None) -> Any:
    """Map ZARINPAL_SANDBOX to True/False/None.

    Unrecognised values are returned untouched so the gateway can reject
    them with InvalidConfigurationError when a payment is submitted.
    """
    if raw is None:
        return None
    val = raw.strip().lower()
    if not val:
        return None
    if val in _TRUTHY:
        return True
    if val in _FALSY:
        return False
    return raw


def _parse_float(raw: str | None, default: float) -> float:
    try:
        return float(raw) if raw else default
    except ValueError:
        return default


@dataclass
class Settings:
    merchant_id: str = field(default_factory=lambda: os.getenv("ZARINPAL_MERCHANT_ID", ""))
    sandbox: Any = field(default_factory=lambda: _parse_sandbox(os.getenv("ZARINPAL_SANDBOX")))
    callback_route: str = field(default_factory=lambda: os.getenv("ZARINPAL_CALLBACK_ROUTE", ""))
    description: str = field(default_factory=lambda: os.getenv("ZARINPAL_DESCRIPTION", ""))

    http_timeout: float = field(default_factory=lambda: _parse_float(os.getenv("ZARINPAL_HTTP_TIMEOUT"), 30.0))


settings = Settings()
