"""Logging infrastructure for the conversion core.

Provides configurable levels and per-conversion tracking so that messages
from concurrent, independent conversions can be told apart.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

# Conversion ID tracking for document-level correlation
conversion_id_ctx: ContextVar[str | None] = ContextVar("conversion_id", default=None)


def get_conversion_id() -> str | None:
    """Get the current conversion ID if available."""
    return conversion_id_ctx.get()


@contextmanager
def conversion_scope(conversion_id: str) -> Iterator[str]:
    """Tag every log record emitted inside the block with ``conversion_id``."""
    token = conversion_id_ctx.set(conversion_id)
    try:
        yield conversion_id
    finally:
        conversion_id_ctx.reset(token)


class _ConversionIdFilter(logging.Filter):
    """Make ``%(conversion_id)s`` usable for records from any logger."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "conversion_id"):
            record.conversion_id = get_conversion_id() or "-"
        return True


def setup_logging(
    level: int | str | None = None,
    format_string: str | None = None,
) -> logging.Logger:
    """Configure logging for the application.

    Args:
        level: Logging level (e.g., 'DEBUG', 'INFO', 'ERROR').
               Defaults to LOGGING_LEVEL env var or 'INFO'.
        format_string: Custom log format string. Defaults to a structured format.

    Returns:
        The root logger configured for the application.
    """
    if level is None:
        level = os.environ.get("LOGGING_LEVEL", "INFO")

    if format_string is None:
        format_string = (
            "%(asctime)s [%(levelname)s] [%(name)s] [conversion=%(conversion_id)s] %(message)s"
        )

    logger = logging.getLogger()
    logger.setLevel(level)
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(format_string))
    console_handler.addFilter(_ConversionIdFilter())

    logger.addHandler(console_handler)
    return logger


class ConversionLoggerAdapter(logging.LoggerAdapter[Any]):
    """Logger adapter that tags records with the active conversion ID.

    An explicit ``conversion_id`` in ``extra`` is kept as given.
    """

    def process(self, msg: str, kwargs: Any) -> tuple[str, Any]:
        extra = dict(kwargs.get("extra") or {})
        conversion_id = get_conversion_id()
        if conversion_id is not None:
            extra.setdefault("conversion_id", conversion_id)
        kwargs["extra"] = extra
        return msg, kwargs


def create_logger(name: str) -> ConversionLoggerAdapter:
    """Create a logger for a module (typically ``__name__``) that tags records
    with the conversion ID of the active :func:`conversion_scope`."""
    return ConversionLoggerAdapter(logging.getLogger(name), {})
