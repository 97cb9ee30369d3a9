"""Tests for the debounced auto-saver."""

import asyncio

import pytest

from subtitler.core.autosave import AutoSaver


@pytest.fixture
def flushed() -> list[str]:
    return []


@pytest.fixture
async def saver(flushed: list[str]):
    autosaver = AutoSaver(flushed.append, delay=0.02)
    yield autosaver
    await autosaver.aclose()


@pytest.mark.unit
@pytest.mark.asyncio
class TestAutoSaver:
    async def test_flush_after_delay(self, saver: AutoSaver, flushed: list[str]) -> None:
        saver.schedule("a")
        assert saver.is_pending("a")
        assert flushed == []
        await asyncio.sleep(0.1)
        assert flushed == ["a"]
        assert not saver.is_pending("a")

    async def test_rapid_edits_coalesce(
        self, saver: AutoSaver, flushed: list[str]
    ) -> None:
        for _ in range(5):
            saver.schedule("a")
            await asyncio.sleep(0.005)
        await asyncio.sleep(0.1)
        assert flushed == ["a"]

    async def test_keys_are_independent(
        self, saver: AutoSaver, flushed: list[str]
    ) -> None:
        saver.schedule("a")
        saver.schedule("b")
        assert sorted(saver.pending_keys) == ["a", "b"]
        await asyncio.sleep(0.1)
        assert sorted(flushed) == ["a", "b"]

    async def test_cancel(self, saver: AutoSaver, flushed: list[str]) -> None:
        saver.schedule("a")
        assert saver.cancel("a") is True
        assert saver.cancel("a") is False
        await asyncio.sleep(0.1)
        assert flushed == []

    async def test_flush_all(self, saver: AutoSaver, flushed: list[str]) -> None:
        saver.schedule("a")
        saver.schedule("b")
        assert saver.flush_all() == 2
        assert sorted(flushed) == ["a", "b"]
        await asyncio.sleep(0.1)
        assert len(flushed) == 2

    async def test_failing_callback_is_logged(self) -> None:
        calls: list[str] = []

        def explode(key: str) -> None:
            calls.append(key)
            raise RuntimeError("disk full")

        autosaver = AutoSaver(explode, delay=0.01)
        autosaver.schedule("a")
        await asyncio.sleep(0.05)
        assert calls == ["a"]
        assert autosaver.pending_keys == []
        autosaver.schedule("b")
        await asyncio.sleep(0.05)
        assert calls == ["a", "b"]

    async def test_aclose_drops_pending(
        self, saver: AutoSaver, flushed: list[str]
    ) -> None:
        saver.schedule("a")
        await saver.aclose()
        await asyncio.sleep(0.05)
        assert flushed == []
        assert saver.pending_keys == []

    async def test_cancel_all(self, saver: AutoSaver, flushed: list[str]) -> None:
        saver.schedule("a")
        saver.schedule("b")
        assert saver.cancel_all() == 2
        await asyncio.sleep(0.1)
        assert flushed == []
