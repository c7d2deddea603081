"""
Structured JSON logging for event set owners.

Viewers keep event sets alive for a whole session and reblock them many
times, so it helps to have every log line carry the version and block
count it refers to. ``EventSetLoggerAdapter`` attaches that context and
``StructuredJsonFormatter`` writes it out as one JSON object per line.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import IO, Any

import numpy as np

PACKAGE_LOGGER = "blocked_events"

# Attributes every LogRecord has; anything else came in through ``extra``
_RECORD_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}


class StructuredJsonFormatter(logging.Formatter):
    """
    Render a log record as a single-line JSON object.

    Fields: ``timestamp`` (record creation time, ISO 8601 UTC), ``level``,
    ``logger``, ``message``, ``exception`` when present, then every extra
    attribute. Numpy values are converted to plain numbers and lists.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key in _RECORD_ATTRS or key.startswith("_"):
                continue
            payload[key] = _jsonable(value)

        return json.dumps(payload, default=str)


def _jsonable(value: Any) -> Any:
    if isinstance(value, (np.ndarray, np.generic)):
        return value.tolist()
    try:
        json.dumps(value)
    except (TypeError, ValueError):
        return str(value)
    return value


def configure_structured_logging(
    level: int = logging.INFO,
    logger_name: str | None = PACKAGE_LOGGER,
    stream: IO[str] | None = None,
) -> logging.Logger:
    """
    Send a logger's records to a stream as JSON lines.

    Existing handlers on the logger are replaced, so calling this twice
    does not duplicate output.

    Args:
        level: Logging level (default: INFO)
        logger_name: Logger to configure (default: the package logger;
            None configures the root logger)
        stream: Output stream (default: stdout at call time)

    Returns:
        The configured logger
    """
    target = logging.getLogger(logger_name)
    target.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(StructuredJsonFormatter())
    target.addHandler(handler)
    target.setLevel(level)
    return target


def get_index_logger(name: str) -> logging.Logger:
    """Get the logger for an indexing component, named ``blocked_events.<name>``."""
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")


class EventSetLoggerAdapter(logging.LoggerAdapter):
    """
    Tag records with the live state of one event set.

    ``version`` and ``number_blocks`` are read when each record is
    emitted, so lines logged after a reblock show the new values. Fixed
    context (a dataset name, say) goes in ``extra``; per-call ``extra``
    wins over both.
    """

    def __init__(self, logger: logging.Logger, event_set: Any, extra: dict[str, Any] | None = None):
        super().__init__(logger, extra or {})
        self.event_set = event_set

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        context = dict(self.extra)
        context["version"] = self.event_set.get_version_id()
        context["number_blocks"] = self.event_set.get_number_blocks()
        context.update(kwargs.get("extra") or {})
        kwargs["extra"] = context
        return msg, kwargs
