"""Tests for the in-memory session manager."""

import asyncio
import time

import pytest

from subtitler.api.constants import EVENT_QUEUE_SIZE, SSEEvent
from subtitler.api.sessions import ManagedSession, SessionManager
from subtitler.session import EditorSession


@pytest.mark.unit
class TestManagedSession:
    def test_default_values(self) -> None:
        managed = ManagedSession(id="abc", editor=EditorSession(duration=10.0))
        assert managed.event_queue.empty()
        assert managed.touched_at <= time.monotonic()

    def test_publish_saved_interval(self) -> None:
        managed = ManagedSession(id="abc", editor=EditorSession(duration=10.0))
        interval_id = managed.editor.store.create(1.0, 2.0, "Hi")

        managed.publish_change(interval_id)

        event = managed.event_queue.get_nowait()
        assert event["event"] == SSEEvent.INTERVAL_SAVED
        assert event["data"] == {
            "id": interval_id,
            "start_time": 1.0,
            "end_time": 2.0,
            "text": "Hi",
        }

    def test_publish_deleted_interval(self) -> None:
        managed = ManagedSession(id="abc", editor=EditorSession(duration=10.0))

        managed.publish_change("gone")

        event = managed.event_queue.get_nowait()
        assert event == {"event": SSEEvent.INTERVAL_DELETED, "data": {"id": "gone"}}

    def test_queue_drops_oldest_when_full(self) -> None:
        managed = ManagedSession(id="abc", editor=EditorSession(duration=10.0))

        for index in range(EVENT_QUEUE_SIZE + 5):
            managed.publish_change(f"gone-{index}")

        assert managed.event_queue.qsize() == EVENT_QUEUE_SIZE
        assert managed.event_queue.get_nowait()["data"] == {"id": "gone-5"}


@pytest.mark.unit
class TestSessionManager:
    def test_create_session(self) -> None:
        manager = SessionManager()
        managed = manager.create_session(duration=30.0, file_name="a.mp4")
        assert len(managed.id) == 12
        assert managed.editor.duration == 30.0
        assert managed.editor.autosaver is not None

    def test_get_existing_session(self) -> None:
        manager = SessionManager()
        managed = manager.create_session()
        assert manager.get_session(managed.id) is managed

    def test_get_nonexistent_session(self) -> None:
        manager = SessionManager()
        assert manager.get_session("nonexistent") is None

    def test_contains_does_not_touch(self) -> None:
        manager = SessionManager()
        managed = manager.create_session()
        managed.touched_at = 0.0

        assert managed.id in manager
        assert "nonexistent" not in manager
        assert managed.touched_at == 0.0

    def test_get_refreshes_idle_time(self) -> None:
        manager = SessionManager(ttl_seconds=10)
        managed = manager.create_session()
        managed.touched_at = time.monotonic() - 100
        manager.get_session(managed.id)
        assert manager.cleanup_expired() == 0

    def test_cleanup_removes_expired(self) -> None:
        manager = SessionManager(ttl_seconds=10)
        managed = manager.create_session()
        managed.touched_at = time.monotonic() - 100

        assert manager.cleanup_expired() == 1
        assert manager.get_session(managed.id) is None

    def test_cleanup_keeps_fresh_sessions(self) -> None:
        manager = SessionManager(ttl_seconds=10)
        managed = manager.create_session()

        assert manager.cleanup_expired() == 0
        assert manager.get_session(managed.id) is managed


@pytest.mark.unit
@pytest.mark.asyncio
class TestSessionManagerAsync:
    async def test_settled_edit_is_published(self, monkeypatch) -> None:
        monkeypatch.setenv("SUBTITLER_AUTOSAVE_DELAY", "0.01")
        manager = SessionManager()
        managed = manager.create_session(duration=60.0)

        interval_id = managed.editor.create_interval(1.0, 2.0)
        managed.editor.update_interval(interval_id, text="typed")
        await asyncio.sleep(0.05)

        event = managed.event_queue.get_nowait()
        assert event["data"]["text"] == "typed"
        assert managed.event_queue.empty()
        await manager.close()

    async def test_close_flushes_pending(self) -> None:
        manager = SessionManager()
        managed = manager.create_session(duration=60.0)
        managed.editor.create_interval(1.0, 2.0)

        await manager.close()

        assert managed.event_queue.qsize() == 1
        assert managed.editor.autosaver.pending_keys == []

    async def test_cleanup_loop_start_stop(self) -> None:
        manager = SessionManager()
        await manager.start_cleanup_loop()
        await manager.stop_cleanup_loop()
        await manager.stop_cleanup_loop()
