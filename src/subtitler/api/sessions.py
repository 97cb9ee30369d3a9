"""In-memory editor session store with TTL-based cleanup."""

from __future__ import annotations

import asyncio
import contextlib
import time
import uuid
from dataclasses import dataclass, field

import structlog

from subtitler.api.constants import (
    CLEANUP_INTERVAL_SECONDS,
    EVENT_QUEUE_SIZE,
    SSEEvent,
)
from subtitler.core import AutoSaver
from subtitler.session import EditorSession
from subtitler.utils.config import get_settings

logger = structlog.get_logger()


@dataclass
class ManagedSession:
    """An editor session exposed over the API."""

    id: str
    editor: EditorSession
    event_queue: asyncio.Queue[dict[str, object]] = field(
        default_factory=lambda: asyncio.Queue(maxsize=EVENT_QUEUE_SIZE)
    )
    touched_at: float = field(default_factory=time.monotonic)

    def touch(self) -> None:
        """Mark the session as used now."""
        self.touched_at = time.monotonic()

    def publish_change(self, interval_id: str) -> None:
        """Enqueue the settled state of an interval for SSE listeners.

        When nobody drains the queue the oldest event is dropped.
        """
        store = self.editor.store
        if interval_id in store:
            interval = store.get(interval_id)
            event = {
                "event": SSEEvent.INTERVAL_SAVED,
                "data": {
                    "id": interval.id,
                    "start_time": interval.start_time,
                    "end_time": interval.end_time,
                    "text": interval.text,
                },
            }
        else:
            event = {"event": SSEEvent.INTERVAL_DELETED, "data": {"id": interval_id}}
        if self.event_queue.full():
            dropped = self.event_queue.get_nowait()
            logger.debug(
                "session_event_dropped", session_id=self.id, event=dropped["event"]
            )
        self.event_queue.put_nowait(event)


class SessionManager:
    """Manages in-memory editor session lifecycle with automatic cleanup."""

    def __init__(self, ttl_seconds: float | None = None) -> None:
        settings = get_settings()
        self.ttl_seconds = (
            settings.session_ttl_seconds if ttl_seconds is None else ttl_seconds
        )
        self._sessions: dict[str, ManagedSession] = {}
        self._cleanup_task: asyncio.Task[None] | None = None

    def __contains__(self, session_id: object) -> bool:
        """Check for a live session without refreshing its TTL."""
        return session_id in self._sessions

    def create_session(
        self,
        duration: float = 0.0,
        file_name: str | None = None,
        language: str | None = None,
    ) -> ManagedSession:
        """Create a new editor session and store it."""
        settings = get_settings()
        session_id = uuid.uuid4().hex[:12]
        editor = EditorSession(
            duration=duration,
            file_name=file_name,
            language=language,
            settings=settings,
        )
        managed = ManagedSession(id=session_id, editor=editor)
        editor.autosaver = AutoSaver(
            managed.publish_change, delay=settings.autosave_delay
        )
        self._sessions[session_id] = managed
        logger.info(
            "session_created",
            session_id=session_id,
            duration=duration,
            file_name=file_name,
        )
        return managed

    def get_session(self, session_id: str) -> ManagedSession | None:
        """Get a session by ID, returns None if not found."""
        managed = self._sessions.get(session_id)
        if managed is not None:
            managed.touch()
        return managed

    def cleanup_expired(self) -> int:
        """Remove sessions idle longer than the TTL. Returns count removed."""
        now = time.monotonic()
        expired = [
            sid
            for sid, managed in self._sessions.items()
            if now - managed.touched_at > self.ttl_seconds
        ]
        for sid in expired:
            managed = self._sessions.pop(sid)
            if managed.editor.autosaver is not None:
                managed.editor.autosaver.cancel_all()
        if expired:
            logger.info("sessions_cleaned_up", count=len(expired))
        return len(expired)

    async def start_cleanup_loop(self) -> None:
        """Start periodic cleanup task."""
        self._cleanup_task = asyncio.create_task(self._cleanup_loop())

    async def stop_cleanup_loop(self) -> None:
        """Stop the periodic cleanup task."""
        if self._cleanup_task is not None:
            self._cleanup_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._cleanup_task
            self._cleanup_task = None

    async def close(self) -> None:
        """Stop cleanup and flush every session's pending notifications."""
        await self.stop_cleanup_loop()
        for managed in self._sessions.values():
            if managed.editor.autosaver is not None:
                managed.editor.autosaver.flush_all()
                await managed.editor.autosaver.aclose()

    async def _cleanup_loop(self) -> None:
        """Periodically clean up expired sessions."""
        while True:
            await asyncio.sleep(CLEANUP_INTERVAL_SECONDS)
            self.cleanup_expired()
