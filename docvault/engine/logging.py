"""
DocVault Logging — Structured JSON log output for the ``docvault`` logger tree.

Every module logs through ``logging.getLogger("docvault.<module>")``.
``init_logging`` attaches one handler to the ``docvault`` root logger,
either to stderr or to ``{directory}/docvault.jsonl``.

JSON line shape:
    {"ts": "...", "level": "INFO", "logger": "docvault.security.admin", "message": "..."}
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from docvault.engine.config import LoggingConfig

ROOT_LOGGER = "docvault"
LOG_FILENAME = "docvault.jsonl"

# LogRecord attributes that are not user-supplied ``extra`` fields
_RESERVED_ATTRS = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}

_handler: Optional[logging.Handler] = None


class JsonLogFormatter(logging.Formatter):
    """Formats a LogRecord as a compact single-line JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        data: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                data[key] = value
        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(data, default=str, separators=(",", ":"))


def init_logging(config: Optional[LoggingConfig] = None) -> logging.Logger:
    """
    Configure the ``docvault`` logger. Safe to call repeatedly; the previous
    handler is replaced.
    """
    global _handler

    if config is None:
        from docvault.engine.config import get_platform_config
        config = get_platform_config().logging

    root = logging.getLogger(ROOT_LOGGER)
    shutdown_logging()

    if config.directory:
        log_dir = Path(config.directory)
        log_dir.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_dir / LOG_FILENAME, encoding="utf-8")
    else:
        handler = logging.StreamHandler()

    if config.format == "json":
        handler.setFormatter(JsonLogFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )

    root.addHandler(handler)
    root.setLevel(config.level)
    _handler = handler

    root.debug(f"Logging initialized (level={config.level}, format={config.format})")
    return root


def shutdown_logging() -> None:
    """Detach and close the handler installed by init_logging."""
    global _handler
    if _handler is None:
        return
    root = logging.getLogger(ROOT_LOGGER)
    root.removeHandler(_handler)
    _handler.close()
    _handler = None
