"""Centralized console logging configuration."""

from __future__ import annotations

import logging
import sys


def configure_logging(verbose: bool = False) -> None:
    """Send package and httpx log records to stderr.

    Warnings only by default so rendered output on stdout stays clean;
    ``verbose`` switches to DEBUG (cache hits, retries, request lines).
    """
    level = logging.DEBUG if verbose else logging.WARNING
    formatter = logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    for logger_name in ("bucharest_weather", "httpx"):
        logger = logging.getLogger(logger_name)
        logger.setLevel(level if logger_name == "bucharest_weather" else max(level, logging.INFO))

        # Remove existing handlers to avoid duplicate logs
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        logger.propagate = False

        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
