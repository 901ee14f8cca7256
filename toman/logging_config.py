from __future__ import annotations

import json
import logging
import logging.config
import os
import re
from typing import Any, Dict


# ================= Sensitive Data Masking ================= #
_BEARER_RE = re.compile(r"(Authorization\s*:\s*Bearer\s+)([A-Za-z0-9._-]+)", re.IGNORECASE)
# Zarinpal merchant ids are UUIDs
_UUID_RE = re.compile(r"\b[0-9A-Fa-f]{8}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{12}\b")
# "MerchantID": "..." / merchant_id=... inside serialized payloads
_MERCHANT_KV_RE = re.compile(r"(merchant_?id\"?\s*[:=]\s*\"?)([^\s\",}&]+)", re.IGNORECASE)
# Iranian mobile numbers: 09xxxxxxxxx, +989xxxxxxxxx
_MOBILE_RE = re.compile(r"(?<!\d)(?:\+98|0098|0)9\d{9}(?!\d)")
_EMAIL_RE = re.compile(r"\b([A-Za-z0-9._%+-])[A-Za-z0-9._%+-]*(@[A-Za-z0-9.-]+\.[A-Za-z]{2,})\b")

_MASKED_KEYS = {"merchant_id", "merchantid", "mobile", "email", "token", "authorization"}


def _mask_tail(val: str, keep: int = 4) -> str:
    if not isinstance(val, str):
        return val
    if len(val) <= keep:
        return "[REDACTED]"
    return "***" + val[-keep:]


def _sanitize_str(s: str) -> str:
    if not isinstance(s, str) or not s:
        return s
    s = _BEARER_RE.sub(lambda m: m.group(1) + "[REDACTED]", s)
    s = _MERCHANT_KV_RE.sub(lambda m: m.group(1) + "[REDACTED]", s)
    s = _UUID_RE.sub(lambda m: _mask_tail(m.group(0)), s)
    s = _MOBILE_RE.sub(lambda m: _mask_tail(m.group(0)), s)
    s = _EMAIL_RE.sub(lambda m: m.group(1) + "***" + m.group(2), s)
    return s


def _sanitize_obj(obj: Any) -> Any:
    # Recursively sanitize dict/list/tuple and strings
    try:
        if isinstance(obj, dict):
            out: Dict[str, Any] = {}
            for k, v in obj.items():
                lk = str(k).lower()
                if lk in _MASKED_KEYS:
                    out[k] = _mask_tail(v) if isinstance(v, str) else ("[REDACTED]" if v is not None else None)
                else:
                    out[k] = _sanitize_obj(v)
            return out
        if isinstance(obj, (list, tuple)):
            t = type(obj)
            return t(_sanitize_obj(v) for v in obj)
        if isinstance(obj, str):
            return _sanitize_str(obj)
    except Exception:
        return obj
    return obj


class SensitiveDataFilter(logging.Filter):
    """Masks merchant ids, mobiles, e-mails and bearer tokens in message, args and extra."""

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        try:
            if isinstance(record.msg, str):
                record.msg = _sanitize_str(record.msg)
            if record.args:
                if isinstance(record.args, tuple):
                    record.args = tuple(_sanitize_obj(a) for a in record.args)
                elif isinstance(record.args, dict):
                    record.args = _sanitize_obj(record.args)
            if hasattr(record, "extra") and isinstance(record.extra, dict):
                record.extra = _sanitize_obj(record.extra)
        except Exception:
            # Never break logging
            pass
        return True


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload: Dict[str, Any] = {
            "level": record.levelname,
            "time": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S%z"),
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        if hasattr(record, "extra") and isinstance(record.extra, dict):
            payload.update(record.extra)
        payload = _sanitize_obj(payload)
        return json.dumps(payload, ensure_ascii=False)


def _bool(val: str | None, default: bool) -> bool:
    if val is None:
        return default
    return val.strip().lower() in {"1", "true", "yes", "on"}


def _file_writable(path: str) -> bool:
    try:
        log_dir = os.path.dirname(path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        with open(path, "a", encoding="utf-8"):
            pass
        return True
    except OSError:
        return False


def setup_logging() -> None:
    """Configure structured logging with payment data masking.

    ENV:
      - APP_ENV: production|staging|development (default: production)
      - LOG_LEVEL: DEBUG|INFO|WARNING|ERROR (default: INFO in prod, DEBUG otherwise)
      - LOG_FORMAT: json|text (default: json in prod, text otherwise)
      - LOG_TO_FILE: 1/0 (default: 1 if the log file is writable)
      - LOG_FILE_PATH: path to log file (default: ./logs/toman.log)
    """
    app_env = os.getenv("APP_ENV", "production").lower()
    default_level = "INFO" if app_env == "production" else "DEBUG"
    log_level = os.getenv("LOG_LEVEL", default_level).upper()
    log_format = os.getenv("LOG_FORMAT", "json" if app_env == "production" else "text").lower()
    formatter = "json" if log_format == "json" else "plain"

    log_file_path = os.getenv("LOG_FILE_PATH", os.path.join(os.getcwd(), "logs", "toman.log"))
    env_log_to_file = os.getenv("LOG_TO_FILE")
    if env_log_to_file is None:
        log_to_file = _file_writable(log_file_path)
    else:
        log_to_file = _bool(env_log_to_file, False) and _file_writable(log_file_path)

    handlers: Dict[str, Dict[str, Any]] = {
        "console": {
            "class": "logging.StreamHandler",
            "level": log_level,
            "stream": "ext://sys.stdout",
            "formatter": formatter,
            "filters": ["sensitive"],
        }
    }
    if log_to_file:
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": log_level,
            "filename": log_file_path,
            "maxBytes": 5 * 1024 * 1024,  # 5MB
            "backupCount": 3,
            "encoding": "utf-8",
            "delay": True,
            "formatter": formatter,
            "filters": ["sensitive"],
        }

    httpx_level = "WARNING" if app_env == "production" else "INFO"

    config: Dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {"sensitive": {"()": SensitiveDataFilter}},
        "formatters": {
            "json": {"()": JsonFormatter},
            "plain": {"format": "%(asctime)s %(levelname)s [%(name)s] %(message)s"},
        },
        "handlers": handlers,
        "root": {
            "level": log_level,
            "handlers": list(handlers.keys()),
        },
        "loggers": {
            "toman": {"level": log_level},
            "httpx": {"level": httpx_level},
            "httpcore": {"level": "WARNING"},
        },
    }

    logging.config.dictConfig(config)

    logging.getLogger(__name__).info(
        "logging configured",
        extra={
            "extra": {
                "env": app_env,
                "level": log_level,
                "format": log_format,
                "to_file": log_to_file,
                "file": log_file_path if log_to_file else None,
            }
        },
    )
