"""API call logging for the weather client and service layers."""

from __future__ import annotations

import functools
import logging
import os
import threading
import time
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])

_LOG_DIR = os.path.join(os.path.expanduser("~"), ".bucharest-weather-cli", "logs")
_LOG_FILE = os.path.join(_LOG_DIR, "api_calls.log")
_LOGGER_NAME = "bucharest_weather.api"

_logger: logging.Logger | None = None
# The handler this module installed; other handlers on the logger are left alone.
_handler: logging.Handler | None = None
_logger_lock = threading.Lock()


def _drop_handler() -> None:
    global _handler
    if _handler is not None:
        logging.getLogger(_LOGGER_NAME).removeHandler(_handler)
        _handler.close()
        _handler = None


def set_log_dir(path: str | os.PathLike[str]) -> None:
    """Redirect the API call log; takes effect for the next logger created."""
    global _LOG_DIR, _LOG_FILE, _logger
    with _logger_lock:
        _LOG_DIR = os.fspath(path)
        _LOG_FILE = os.path.join(_LOG_DIR, "api_calls.log")
        _drop_handler()
        _logger = None


def _get_logger() -> logging.Logger:
    """Return the file logger, creating log dir and handler on first use."""
    global _logger, _handler
    if _logger is not None:
        return _logger

    with _logger_lock:
        if _logger is not None:
            return _logger

        logger = logging.getLogger(_LOGGER_NAME)
        logger.setLevel(logging.DEBUG)
        logger.propagate = False

        _drop_handler()
        try:
            os.makedirs(_LOG_DIR, exist_ok=True)
            handler: logging.Handler = logging.FileHandler(_LOG_FILE, encoding="utf-8")
        except OSError:
            # Unwritable log dir: calls go unlogged.
            handler = logging.NullHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)s | %(message)s"),
        )
        logger.addHandler(handler)
        _handler = handler
        _logger = logger

    return _logger


def _arg_summary(args: tuple[Any, ...], kwargs: dict[str, Any]) -> str:
    # Skip 'self'
    arg_parts = [repr(a) for a in args[1:]]
    arg_parts += [f"{k}={v!r}" for k, v in kwargs.items()]
    return ", ".join(arg_parts)


def log_api_call(fn: F) -> F:
    """Decorator that logs async client endpoint calls to the API log file."""

    @functools.wraps(fn)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        logger = _get_logger()
        arg_str = _arg_summary(args, kwargs)
        logger.info("CALL: %s(%s)", fn.__qualname__, arg_str)

        start = time.monotonic()
        try:
            result = await fn(*args, **kwargs)
            elapsed = time.monotonic() - start
            count = len(result) if isinstance(result, list) else 1
            logger.info(
                "OK: %s(%s) -> %d items (%.3fs)",
                fn.__qualname__, arg_str, count, elapsed,
            )
            return result
        except Exception as exc:
            elapsed = time.monotonic() - start
            logger.error(
                "FAIL: %s(%s) -> %s: %s (%.3fs)",
                fn.__qualname__, arg_str, type(exc).__name__, exc, elapsed,
            )
            raise

    return wrapper  # type: ignore[return-value]


def log_service_call(fn: F) -> F:
    """Decorator that logs async service-layer calls to the API log file."""

    @functools.wraps(fn)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        logger = _get_logger()
        arg_str = _arg_summary(args, kwargs)
        logger.info("SERVICE CALL: %s(%s)", fn.__qualname__, arg_str)

        start = time.monotonic()
        try:
            result = await fn(*args, **kwargs)
            elapsed = time.monotonic() - start
            logger.info(
                "SERVICE OK: %s -> %.3fs", fn.__qualname__, elapsed,
            )
            return result
        except Exception as exc:
            elapsed = time.monotonic() - start
            logger.error(
                "SERVICE FAIL: %s -> %s: %s (%.3fs)",
                fn.__qualname__, type(exc).__name__, exc, elapsed,
            )
            raise

    return wrapper  # type: ignore[return-value]
