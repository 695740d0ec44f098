"""Structured launcher event logging.

Events go to a rotating JSON-lines file only; the terminal is owned by the UI
or by the child process while a command runs.
"""

from __future__ import annotations

import logging
import uuid
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import structlog

from ..config.settings import settings

DEFAULT_LOG_FILE = "logs/callbot-events.log"
MAX_LOG_BYTES = 2 * 1024 * 1024
BACKUP_LOG_FILES = 3
_LOGGER_NAME = "callbot.events"


def _event_log_path() -> Path:
    if settings.logging.file_path:
        return Path(settings.logging.file_path).expanduser()
    return Path(__file__).resolve().parents[2] / DEFAULT_LOG_FILE


def _event_logger() -> logging.Logger:
    logger = logging.getLogger(_LOGGER_NAME)
    if logger.handlers:
        return logger

    path = _event_log_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        path,
        maxBytes=MAX_LOG_BYTES,
        backupCount=BACKUP_LOG_FILES,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, settings.logging.level, logging.INFO))
    logger.propagate = False
    return logger


def set_log_level(level_name: str) -> None:
    """Override the configured level, e.g. from ``--log-level``."""
    _event_logger().setLevel(getattr(logging, level_name.upper(), logging.INFO))


def bind_session(**values: Any) -> str:
    """Tag every following event with a fresh session id plus ``values``."""
    session_id = uuid.uuid4().hex[:12]
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(session=session_id, **values)
    return session_id


_event_logger()
structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)
_logger = structlog.get_logger(_LOGGER_NAME)


def log_tui_event(event: str, **payload: Any) -> None:
    _logger.info(event, **payload)


def log_tui_error(event: str, **payload: Any) -> None:
    _logger.error(event, **payload)
