from __future__ import annotations

from typing import Optional


class GatewayError(Exception):
    """Provider rejected the payment request or could not be reached."""

    def __init__(self, message: str, status_code: int = 0, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.cause = cause
        self.__cause__ = cause

    def __repr__(self) -> str:
        return f"GatewayError(status_code={self.status_code!r}, message={self.message!r})"


class InvalidConfigurationError(Exception):
    def __init__(self, key: str) -> None:
        super().__init__(f"Invalid value for gateway configuration key '{key}'")
        self.key = key
