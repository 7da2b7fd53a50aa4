# getby/utils/logger.py
from __future__ import annotations

import json
import logging
import threading
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional

from rich.console import Console
from rich.logging import RichHandler

from getby.utils.config import get_settings, LogLevel


__all__ = [
    "configure_logging",
    "get_logger",
    "set_log_level",
    "bind",
    "unbind",
]

PACKAGE_LOGGER = "getby"

_config_lock = threading.Lock()
_configured = False
_global_extra: Dict[str, Any] = {}  # context merged into every record


class JsonFormatter(logging.Formatter):
    """One JSON object per line; bound context is merged at the top level."""

    default_time_format = "%Y-%m-%dT%H:%M:%S"

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).strftime(self.default_time_format),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        if isinstance(getattr(record, "extra", None), dict):
            payload.update(record.extra)
        return json.dumps(payload, ensure_ascii=False)


def configure_logging() -> logging.Logger:
    """
    Give the `getby` logger its own Rich console handler (stderr) and, when
    LOG_TO_FILE is set, a rotating JSON file. The root logger is left alone,
    so importing the library never changes a host application's logging.

    Only the CLI calls this; library code just logs. Runs once per process.
    """
    global _configured
    pkg = logging.getLogger(PACKAGE_LOGGER)
    if _configured:
        return pkg

    with _config_lock:
        if _configured:
            return pkg

        settings = get_settings()
        level = getattr(logging, settings.LOG_LEVEL.value, logging.INFO)
        pkg.setLevel(level)
        pkg.propagate = False

        console = Console(stderr=True, color_system="auto" if settings.COLORIZED_OUTPUT else None)
        rich_handler = RichHandler(console=console, show_path=False, rich_tracebacks=True, markup=False)
        rich_handler.setFormatter(logging.Formatter("%(message)s"))
        pkg.addHandler(rich_handler)

        if settings.LOG_TO_FILE:
            settings.LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                filename=str(settings.LOG_FILE),
                maxBytes=2 * 1024 * 1024,
                backupCount=3,
                encoding="utf-8",
                delay=True,
            )
            file_handler.setFormatter(JsonFormatter())
            pkg.addHandler(file_handler)

        _configured = True
    return pkg


def get_logger(name: Optional[str] = None) -> logging.LoggerAdapter:
    """Logger carrying the globally bound context. Does not install handlers."""
    return logging.LoggerAdapter(logging.getLogger(name or PACKAGE_LOGGER), extra={"extra": _global_extra})


def set_log_level(level: LogLevel | str) -> None:
    lvl = level if isinstance(level, str) else level.value
    configure_logging().setLevel(getattr(logging, lvl.upper(), logging.INFO))


def bind(**kwargs: Any) -> None:
    """Attach context (e.g. source="queries/login.yaml") to every later record."""
    _global_extra.update(kwargs)


def unbind(*keys: str) -> None:
    for k in keys:
        _global_extra.pop(k, None)
