"""Timing and outcome logging for facade operations."""

from __future__ import annotations

import logging
import time
from functools import wraps
from typing import Any, Callable, Dict, ParamSpec, TypeVar

from wardrobe_app.logging_config import ensure_correlation_id, get_logger, log_event

LOGGER = get_logger(__name__)
P = ParamSpec("P")
R = TypeVar("R")

# Only these keyword arguments are copied into log lines; payloads and ids of people are left out.
_LOGGED_ARGUMENTS = ("occasion", "category", "item_id", "outfit_id", "seed")


def _argument_preview(kwargs: Dict[str, Any]) -> Dict[str, Any]:
    payload = kwargs.get("payload")
    sources = [kwargs, payload] if isinstance(payload, dict) else [kwargs]
    return {
        key: source[key]
        for source in sources
        for key in _LOGGED_ARGUMENTS
        if source.get(key) is not None
    }


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


def instrument_call(operation: str) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Log ``call_started`` then ``call_completed`` or ``call_failed`` with the duration."""

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            correlation_id = ensure_correlation_id()
            log_event(
                LOGGER,
                logging.INFO,
                "call_started",
                operation=operation,
                correlation_id=correlation_id,
                arguments=_argument_preview(kwargs),
            )
            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                # Missing resources and rejected payloads are client errors, not faults.
                client_error = isinstance(exc, (LookupError, ValueError))
                log_event(
                    LOGGER,
                    logging.WARNING if client_error else logging.ERROR,
                    "call_failed",
                    operation=operation,
                    correlation_id=correlation_id,
                    duration_ms=_elapsed_ms(start),
                    error_type=type(exc).__name__,
                    exc_info=not client_error,
                )
                raise
            log_event(
                LOGGER,
                logging.INFO,
                "call_completed",
                operation=operation,
                correlation_id=correlation_id,
                duration_ms=_elapsed_ms(start),
            )
            return result

        return wrapper

    return decorator


__all__ = ["instrument_call"]
