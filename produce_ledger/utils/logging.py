"""
Logging setup for the produce ledger.

What gets logged, and at which level:

- INFO: a record entering the ledger (`Produce recorded`, `Added to the
  ledger` while seeding) and custody changes (`Produce holder changed`),
  tagged with the record's `key`, `product` and `holder`.
- DEBUG: every dispatched command (`command`, `arg_count`) and completed range
  scans with their bounds and entry count.
- WARNING: commands that fail, tagged with `command` and the `error` code, and
  connection pools that do not close cleanly.
- INFO from the PostgreSQL backend: pool open and ledger table creation.

The console formatter appends these tags as `name=value` pairs after the
message so custody events stay readable in a terminal. With LOG_JSON=true each
event is one JSON object with the tags promoted to top-level fields.

Usage:
    from produce_ledger.utils.logging import configure_logging, get_logger

    configure_logging(level="INFO", json_logs=False)
    log = get_logger(__name__)
    log.info("Produce recorded", extra={"key": "6", "holder": "Alice"})
"""

from __future__ import annotations

import json
import logging
import logging.config
from typing import Any, Dict, Optional

# Attributes every LogRecord carries; anything else arrived through `extra=`.
_STANDARD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
) | {"message", "asctime", "taskName"}


def _extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    """Collect the tags a caller attached through `extra=`, in insertion order."""
    fields = {
        name: value
        for name, value in vars(record).items()
        if name not in _STANDARD_ATTRS and name != "extra"
    }
    nested = getattr(record, "extra", None)
    if isinstance(nested, dict):
        fields.update(nested)
    return fields


def _json_formatter(record: logging.LogRecord) -> str:
    """Render a log record as JSON string."""
    payload: Dict[str, Any] = {
        "level": record.levelname,
        "logger": record.name,
        "message": record.getMessage(),
    }
    if record.exc_info:
        payload["exc_info"] = logging.Formatter().formatException(record.exc_info)
    if record.stack_info:
        payload["stack_info"] = record.stack_info
    payload.update(_extra_fields(record))
    return json.dumps(payload, default=str)


class JsonFormatter(logging.Formatter):
    """One JSON object per event."""

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        return _json_formatter(record)


class LedgerConsoleFormatter(logging.Formatter):
    """Human formatter that keeps `key=6 holder=Bob` style tags on the line."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        tags = _extra_fields(record)
        if not tags:
            return line
        head, sep, tail = line.partition("\n")
        suffix = " ".join(f"{name}={value}" for name, value in tags.items())
        return f"{head} | {suffix}{sep}{tail}"


def configure_logging(
    level: str = "INFO",
    json_logs: bool = False,
) -> None:
    """
    Configure root logging.

    Parameters
    ----------
    level : str
        Logging level name, case-insensitive (LOG_LEVEL).
    json_logs : bool
        Emit one JSON object per event (LOG_JSON) instead of console lines.
    """
    formatter_name = "json" if json_logs else "console"

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "console": {
                    "()": LedgerConsoleFormatter,
                    "fmt": "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
                "json": {
                    "()": JsonFormatter,
                },
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "formatter": formatter_name,
                    "level": level.upper(),
                }
            },
            "root": {
                "handlers": ["default"],
                "level": level.upper(),
            },
        }
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger with the given name. If name is None, returns the root logger.
    """
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger", "JsonFormatter", "LedgerConsoleFormatter"]
