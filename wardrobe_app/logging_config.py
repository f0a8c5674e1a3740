"""JSON logging, PII scrubbing and correlation ids for the wardrobe stylist.

Every log line is a single JSON object. Fields passed through ``log_event``
are scrubbed before they reach a handler: wardrobe owners, their locations and
share tokens never appear in clear text, and free text is checked for email
addresses and URLs (item photos are usually hosted URLs).
"""

from __future__ import annotations

import contextlib
import contextvars
import json
import logging
import os
import re
import uuid
from typing import Any, Dict, Iterator, Mapping

CORRELATION_ID: contextvars.ContextVar[str | None] = contextvars.ContextVar("correlation_id", default=None)

# Attributes every LogRecord carries; anything else on a record came in via ``extra``.
_STANDARD_ATTRIBUTES = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}
_SENSITIVE_FIELDS = frozenset(
    {"user_id", "email", "location", "full_name", "image_url", "share_token", "token"}
)
_EMAIL = re.compile(r"[\w.\-]+@[\w.\-]+")
_REDACTED = "[redacted]"


def _scrub_text(text: str) -> str:
    if _EMAIL.search(text):
        return _EMAIL.sub("[redacted-email]", text)
    if text.lower().startswith(("http://", "https://")):
        return "[redacted-url]"
    return text


def redact_for_log(payload: Any) -> Any:
    """Return a copy of ``payload`` that is safe to log."""

    if payload is None or isinstance(payload, (bool, int, float)):
        return payload
    if isinstance(payload, str):
        return _scrub_text(payload)
    if isinstance(payload, Mapping):
        return {
            key: _REDACTED if key in _SENSITIVE_FIELDS else redact_for_log(value)
            for key, value in payload.items()
        }
    if isinstance(payload, (list, tuple, set, frozenset)):
        return [redact_for_log(value) for value in payload]
    return str(payload)


class JsonFormatter(logging.Formatter):
    """Render a record as one JSON object, keeping ``extra`` fields."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        entry: Dict[str, Any] = {
            "timestamp": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "logger": record.name,
            "message": message,
            "event": getattr(record, "event", message),
            "correlation_id": getattr(record, "correlation_id", None) or CORRELATION_ID.get(),
        }
        extras = {
            key: value
            for key, value in vars(record).items()
            if key not in _STANDARD_ATTRIBUTES and key not in entry
        }
        entry.update(redact_for_log(extras))
        return json.dumps(entry, default=str)


def configure_logging(level: int | str | None = None) -> None:
    """Send root logging to stderr as JSON, replacing existing handlers."""

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    logging.basicConfig(level=level or os.getenv("LOG_LEVEL", "INFO"), handlers=[handler], force=True)


def get_logger(name: str) -> logging.Logger:
    """Module logger; configures JSON output if nothing else has."""

    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name)


def ensure_correlation_id(correlation_id: str | None = None) -> str:
    """Adopt ``correlation_id`` if given, else reuse the current one or mint one."""

    if correlation_id:
        CORRELATION_ID.set(correlation_id)
        return correlation_id
    current = CORRELATION_ID.get()
    if current:
        return current
    minted = uuid.uuid4().hex
    CORRELATION_ID.set(minted)
    return minted


@contextlib.contextmanager
def correlation_context(correlation_id: str | None = None) -> Iterator[str]:
    token = CORRELATION_ID.set(correlation_id or ensure_correlation_id())
    try:
        yield CORRELATION_ID.get()
    finally:
        CORRELATION_ID.reset(token)


def log_event(logger: logging.Logger, level: int, event: str, **fields: Any) -> None:
    """Log ``event`` with scrubbed structured fields and the active correlation id."""

    correlation_id = ensure_correlation_id(fields.pop("correlation_id", None))
    exc_info = fields.pop("exc_info", None)
    logger.log(
        level,
        event,
        exc_info=exc_info,
        extra={"event": event, "correlation_id": correlation_id, **redact_for_log(fields)},
    )


@contextlib.contextmanager
def operation_context(name: str, correlation_id: str | None = None) -> Iterator[str]:
    """Run a facade or API operation under its own correlation id."""

    with correlation_context(correlation_id or uuid.uuid4().hex) as scoped_id:
        logging.getLogger(__name__).debug("operation %s started", name, extra={"correlation_id": scoped_id})
        yield scoped_id


__all__ = [
    "CORRELATION_ID",
    "JsonFormatter",
    "configure_logging",
    "correlation_context",
    "ensure_correlation_id",
    "get_logger",
    "log_event",
    "operation_context",
    "redact_for_log",
]
