"""
Logging setup for the fleet optimizer.

Call ``configure_logging(config)`` once at CLI or dashboard entry. Library
modules only ever use ``logging.getLogger(__name__)``.

Fleet fields
------------
Log calls that concern one generated fleet pass its profile through
``extra``::

    logger.info("Generated %d tables", n, extra=fleet_extra("gaming"))

Every handler installed here stamps ``profile="-"`` on records that carry no
such field, so the text format can always render it::

    2026-10-19T15:00:00Z [INFO] fleet_optimizer.simulation.generator [profile=gaming]: Generated 45 tables

With ``json_format = true`` each line is one JSON object and the fleet fields
appear as top-level keys::

    {"ts": "...", "level": "INFO", "logger": "...", "msg": "...", "profile": "gaming"}
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from fleet_optimizer.config import LoggingConfig

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s [profile=%(profile)s]: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

NO_PROFILE = "-"

# Attributes every LogRecord carries; anything else came from ``extra=``.
_STANDARD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__.keys()
) | {"message", "asctime"}


def fleet_extra(profile: str, **fields: Any) -> dict[str, Any]:
    """Build the ``extra=`` mapping for a log call about one fleet."""
    return {"profile": profile, **fields}


class _FleetFieldsFilter(logging.Filter):
    """Default the ``profile`` field on records logged without one."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "profile"):
            record.profile = NO_PROFILE
        return True


class _JsonFormatter(logging.Formatter):
    """One JSON object per line: ``ts``, ``level``, ``logger``, ``msg`` plus extras."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).strftime(
                LOG_DATE_FORMAT
            ),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        for key, val in record.__dict__.items():
            if key not in _STANDARD_ATTRS and not key.startswith("_"):
                payload[key] = val
        return json.dumps(payload, default=str)


def configure_logging(config: "LoggingConfig") -> None:
    """Configure the root logger from a ``LoggingConfig`` instance.

    Console output goes to stderr so CLI reports on stdout stay pipeable.
    A file handler is added when ``config.log_file`` is non-empty.

    Args:
        config: Logging configuration section from ``AppConfig``.
    """
    level = getattr(logging, config.level.upper(), logging.INFO)

    formatter: logging.Formatter
    if config.json_format:
        formatter = _JsonFormatter()
    else:
        formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    fleet_fields = _FleetFieldsFilter()
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        handler.addFilter(fleet_fields)

    logging.basicConfig(level=level, handlers=handlers, force=True)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
