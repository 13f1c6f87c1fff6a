"""Debouncer — run an async callback after a quiet period, cancel-and-reschedule."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

logger = logging.getLogger(__name__)


class Debouncer:
    """Delays ``callback`` until ``delay`` seconds pass without a new ``schedule()``.

    Each ``schedule()`` cancels the pending timer and starts a fresh one. Once
    the timer fires, the callback runs to completion: a later ``schedule()``
    starts a new timer but never cancels a callback that is already running.
    """

    def __init__(self, delay: float, callback: Callable[[], Awaitable[Any]]):
        self.delay = delay
        self._callback = callback
        self._timer: asyncio.Task | None = None

    @property
    def pending(self) -> bool:
        return self._timer is not None and not self._timer.done()

    def schedule(self) -> None:
        self.cancel()
        self._timer = asyncio.get_running_loop().create_task(self._fire_later())
        self._timer.add_done_callback(self._report_failure)

    def cancel(self) -> None:
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = None

    async def flush(self) -> Any:
        """Run the callback now if a timer is pending; returns its result or None."""
        if not self.pending:
            return None
        self.cancel()
        return await self._callback()

    async def _fire_later(self) -> Any:
        await asyncio.sleep(self.delay)
        # Detach first so a schedule() from inside the callback starts a new timer
        self._timer = None
        return await self._callback()

    @staticmethod
    def _report_failure(task: asyncio.Task) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Debounced callback failed", exc_info=exc)
