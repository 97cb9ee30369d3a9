"""Debounced change notification, one pending flush per key."""

from __future__ import annotations

import asyncio
import contextlib
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from collections.abc import Callable

logger = structlog.get_logger()

AUTOSAVE_DELAY_SECONDS = 0.5


class AutoSaver:
    """Coalesces rapid edits into a single flush per key.

    ``schedule`` cancels the pending flush for the same key and starts a new
    delay, so the callback fires once per quiet period. Must be used from a
    running event loop.
    """

    def __init__(
        self,
        on_flush: Callable[[str], None],
        *,
        delay: float = AUTOSAVE_DELAY_SECONDS,
    ) -> None:
        self._on_flush = on_flush
        self.delay = delay
        self._pending: dict[str, asyncio.Task[None]] = {}

    def is_pending(self, key: str) -> bool:
        return key in self._pending

    @property
    def pending_keys(self) -> list[str]:
        return list(self._pending)

    def schedule(self, key: str) -> None:
        """(Re)start the delay for ``key``."""
        self.cancel(key)
        self._pending[key] = asyncio.create_task(self._flush_later(key))

    def cancel(self, key: str) -> bool:
        """Drop the pending flush for ``key``. Returns True if one existed."""
        task = self._pending.pop(key, None)
        if task is None:
            return False
        task.cancel()
        return True

    def cancel_all(self) -> int:
        """Drop every pending flush. Returns the number dropped."""
        keys = list(self._pending)
        for key in keys:
            self.cancel(key)
        return len(keys)

    def flush_all(self) -> int:
        """Fire every pending flush now. Returns the number flushed."""
        keys = list(self._pending)
        for key in keys:
            self.cancel(key)
            self._on_flush(key)
        return len(keys)

    async def aclose(self) -> None:
        """Cancel every pending flush and wait for the tasks to finish."""
        tasks = list(self._pending.values())
        self._pending.clear()
        for task in tasks:
            task.cancel()
        for task in tasks:
            with contextlib.suppress(asyncio.CancelledError):
                await task

    async def _flush_later(self, key: str) -> None:
        await asyncio.sleep(self.delay)
        if self._pending.get(key) is asyncio.current_task():
            del self._pending[key]
        try:
            self._on_flush(key)
        except Exception:
            logger.exception("autosave_flush_failed", key=key)
