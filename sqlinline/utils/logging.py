"""Logging helpers for sqlinline.

Every logger lives under the ``sqlinline`` namespace. Records carry their
structured data in an ``extra_fields`` attribute: rendered queries add
``template`` and ``parameter_count``, rendering fallbacks add ``type`` and
``reason``. :class:`StructuredFormatter` writes those records as JSON lines.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Final

import msgspec

if TYPE_CHECKING:
    from logging import LogRecord

    from sqlinline.config import RenderConfig
    from sqlinline.typing import QueryArguments

__all__ = ("ROOT_LOGGER_NAME", "StructuredFormatter", "get_logger", "log_query", "log_with_context")

ROOT_LOGGER_NAME: Final[str] = "sqlinline"


def _encode_fallback(value: Any) -> str:
    return str(value)


_json_encoder = msgspec.json.Encoder(enc_hook=_encode_fallback)


class StructuredFormatter(logging.Formatter):
    """Formats sqlinline records as one JSON object per line.

    The record's ``extra_fields`` become top-level keys next to ``level``,
    ``logger`` and ``message``. Values msgspec cannot encode are written with
    ``str()``.
    """

    def format(self, record: LogRecord) -> str:
        entry: dict[str, Any] = {"level": record.levelname, "logger": record.name, "message": record.getMessage()}
        extra_fields = getattr(record, "extra_fields", None)
        if extra_fields:
            entry.update(extra_fields)
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return _json_encoder.encode(entry).decode("utf-8")


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger namespaced under ``sqlinline``.

    Args:
        name: Logger name. If not provided, returns the ``sqlinline`` logger.

    Returns:
        The logger.
    """
    if name is None or name == ROOT_LOGGER_NAME:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def log_with_context(logger: logging.Logger, level: int, message: str, **extra_fields: Any) -> None:
    """Log a message with structured extra fields.

    Args:
        logger: The logger to use
        level: Log level
        message: Log message
        **extra_fields: Fields stored on the record as ``extra_fields``
    """
    if logger.isEnabledFor(level):
        logger.log(level, message, extra={"extra_fields": extra_fields})


def log_query(
    logger: logging.Logger,
    template: str,
    args: QueryArguments,
    *,
    level: int = logging.DEBUG,
    config: RenderConfig | None = None,
) -> None:
    """Render a query template with its arguments and log the result.

    Nothing is rendered when ``level`` is disabled for ``logger``.

    Args:
        logger: The logger to use
        template: Query template with ``$N`` placeholders
        args: Positional arguments for the template
        level: Log level
        config: Optional render configuration
    """
    if not logger.isEnabledFor(level):
        return

    from sqlinline.core.template import render_query

    rendered = render_query(template, args, config=config)
    log_with_context(logger, level, rendered, template=template, parameter_count=len(args))
