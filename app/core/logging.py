"""
app/core/logging.py

Purpose: Logging configuration

- One stdout handler: JSON lines in production, compact console lines otherwise
- Per-request context (endpoint, recipient count, encoding, gateway code)
  kept in a ContextVar, so concurrent requests never see each other's fields
- Quiets httpx, whose request logs would print the api_key query parameter
"""

import json
import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, Optional

from app.core.config import settings

LOGGER_NAMESPACE = "smsproxy"

# Each asyncio task gets its own copy; values are replaced, never mutated
_log_context: ContextVar[Optional[Dict[str, Any]]] = ContextVar("smsproxy_log_context", default=None)


def current_log_context() -> Dict[str, Any]:
    """Fields bound to the running request, if any."""
    return dict(_log_context.get() or {})


@contextmanager
def log_context(**fields: Any) -> Iterator[None]:
    """
    Binds fields to every record logged inside the block.

    Usage:
        with log_context(endpoint="send-sms-bulk", recipient_count=42):
            logger.info("Forwarding bulk send")
    """
    token = _log_context.set({**current_log_context(), **fields})
    try:
        yield
    finally:
        _log_context.reset(token)


class ContextFilter(logging.Filter):
    """Copies the current request context onto the record as `record.context`."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.context = current_log_context()
        return True


class JsonFormatter(logging.Formatter):
    """One JSON object per line for log shipping in production."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(getattr(record, "context", {}))

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class ConsoleFormatter(logging.Formatter):
    """Readable single-line output for local development."""

    LEVEL_COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelname, self.RESET)
        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        line = f"{color}[{timestamp}] {record.levelname:<8}{self.RESET} {record.name}: {record.getMessage()}"

        context = getattr(record, "context", {})
        if context:
            line += " [" + ", ".join(f"{key}={value}" for key, value in context.items()) + "]"

        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)

        return line


def setup_logging() -> logging.Logger:
    """
    Installs the stdout handler on the root logger.
    Safe to call more than once; the previous handlers are replaced.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(ContextFilter())
    handler.setFormatter(JsonFormatter() if settings.is_production else ConsoleFormatter())

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    for noisy in ("httpx", "httpcore", "uvicorn.access"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    logger = logging.getLogger(LOGGER_NAMESPACE)
    logger.info(f"Logging configured (level={settings.LOG_LEVEL}, environment={settings.ENVIRONMENT})")
    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger under the service namespace, e.g. smsproxy.app.api.sms"""
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")
