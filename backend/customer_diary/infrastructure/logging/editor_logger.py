"""Colored editor logger — ANSI-colored console tracing for draft-aware editing.

Each editor stage gets its own color so a load → edit → commit cycle can be
followed in the terminal at a glance.

Color scheme:
    🔵 Blue    — Load / reconcile
    🟡 Yellow  — Draft writes
    🟣 Magenta — Commits
    🔴 Red     — Errors
    🟢 Green   — Completed commits
    ⚪ Gray    — Details / timing
"""

import logging
import time
from contextlib import contextmanager
from typing import Any

EDITOR_LOGGER_NAME = "customer_diary.editor"


class _Colors:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    GRAY = "\033[90m"


class EditorStage:
    """Editor stages as ``(label, color, icon)``."""

    LOAD = ("LOAD", _Colors.BLUE, "📥")
    DRAFT = ("DRAFT", _Colors.YELLOW, "✏️")
    COMMIT = ("COMMIT", _Colors.MAGENTA, "📤")
    ERROR = ("ERROR", _Colors.RED, "❌")
    COMPLETE = ("COMPLETE", _Colors.GREEN, "✅")


def _format_details(kwargs: dict[str, Any]) -> str:
    return " | ".join(f"{k}={v}" for k, v in kwargs.items())


class EditorLogger:
    """Color-coded logger for one editing component.

    Usage:
        log = EditorLogger("CommitPipeline")
        with log.timed_step(EditorStage.COMMIT, "diary-draft:42"):
            record = await concern.commit(...)
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger(f"{EDITOR_LOGGER_NAME}.{component_name}")

    def step(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        label, color, icon = stage
        formatted = (
            f"{color}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} "
            f"{color}{message}{_Colors.RESET}"
        )
        if kwargs:
            formatted += f" {_Colors.GRAY}({_format_details(kwargs)}){_Colors.RESET}"
        self._logger.info(formatted)

    def step_error(
        self, stage: tuple[str, str, str], message: str, error: Exception | None = None
    ) -> None:
        label, _, _ = stage
        formatted = (
            f"{_Colors.RED}{_Colors.BOLD}❌ [{label}]{_Colors.RESET} "
            f"{_Colors.RED}{message}{_Colors.RESET}"
        )
        if error:
            formatted += f" {_Colors.DIM}→ {type(error).__name__}: {error}{_Colors.RESET}"
        # Expected failures (rejections, offline) are warnings, not errors
        self._logger.warning(formatted)

    def detail(self, message: str, **kwargs: Any) -> None:
        formatted = f"   {_Colors.GRAY}├─ {message}{_Colors.RESET}"
        if kwargs:
            formatted += f" {_Colors.DIM}({_format_details(kwargs)}){_Colors.RESET}"
        self._logger.debug(formatted)

    @contextmanager
    def timed_step(self, stage: tuple[str, str, str], message: str, **kwargs: Any):
        """Log start and end of a step with its elapsed time."""
        self.step(stage, message, **kwargs)
        start = time.perf_counter()
        try:
            yield
        except Exception as e:
            elapsed = time.perf_counter() - start
            self.step_error(stage, f"{message} — failed after {elapsed:.2f}s", error=e)
            raise
        else:
            elapsed = time.perf_counter() - start
            self.step(EditorStage.COMPLETE, f"{message} — {elapsed:.2f}s")
