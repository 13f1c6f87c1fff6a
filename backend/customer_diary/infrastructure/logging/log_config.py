"""Centralized logging configuration.

Applies per-category log levels from Settings so the SQL echo, outbound
HTTP chatter and the editor trace can each be turned up or down on their own.
Both the API server and editor clients call :func:`setup_logging` once.

Usage:
    from customer_diary.infrastructure.logging.log_config import setup_logging
    setup_logging()
"""

import logging
import sys

from customer_diary.config import Settings, get_settings
from customer_diary.infrastructure.logging.editor_logger import EDITOR_LOGGER_NAME

# Settings field → logger names it controls
_CATEGORY_MAP: dict[str, list[str]] = {
    "log_level_sql": [
        "sqlalchemy.engine",
        "sqlalchemy.pool",
        "aiosqlite",
    ],
    "log_level_http": [
        "httpx",
        "httpcore",
    ],
    "log_level_uvicorn": [
        "uvicorn",
        "uvicorn.access",
        "uvicorn.error",
    ],
    "log_level_editor": [
        EDITOR_LOGGER_NAME,
        "customer_diary.application.services",
        "customer_diary.infrastructure.drafts",
        "customer_diary.infrastructure.http",
        "customer_diary.infrastructure.notifications",
    ],
}

_FORMAT = "%(asctime)s %(levelname)-8s %(name)s — %(message)s"


def setup_logging(settings: Settings | None = None) -> dict[str, int]:
    """Apply the root and per-category levels; returns the levels set per category."""
    settings = settings or get_settings()

    root = logging.getLogger()
    root.setLevel(_parse_level(settings.log_level))
    # uvicorn installs its own handlers; scripts and tests may have none
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%H:%M:%S"))
        root.addHandler(handler)

    applied: dict[str, int] = {}
    for settings_field, logger_names in _CATEGORY_MAP.items():
        level = _parse_level(getattr(settings, settings_field, "INFO"))
        applied[settings_field] = level
        for name in logger_names:
            logging.getLogger(name).setLevel(level)

    logging.getLogger(__name__).debug(
        "Logging configured — root=%s %s",
        settings.log_level,
        " ".join(f"{k}={logging.getLevelName(v)}" for k, v in applied.items()),
    )
    return applied


def _parse_level(raw: str) -> int:
    """Convert a level name string to a logging constant, defaulting to INFO."""
    numeric = getattr(logging, raw.upper(), None)
    if isinstance(numeric, int):
        return numeric
    return logging.INFO
