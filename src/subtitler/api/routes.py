"""API route definitions."""

from __future__ import annotations

import asyncio
import contextlib
import json
from typing import TYPE_CHECKING
from urllib.parse import quote

import structlog
from fastapi import APIRouter, Request, Response
from sse_starlette.sse import EventSourceResponse

from subtitler.api.constants import SSE_KEEPALIVE_SECONDS, SSEEvent, ViewportAction
from subtitler.api.errors import (
    CORE_ERRORS,
    InvalidRequestError,
    SessionNotFoundError,
    from_core_error,
)
from subtitler.api.schemas import (
    DurationRequest,
    ImportRequest,
    ImportResponse,
    InsertAfterResponse,
    IntervalCreateRequest,
    IntervalResponse,
    IntervalUpdateRequest,
    ListRowResponse,
    PlayheadRequest,
    PointerRequest,
    PointerResponse,
    ReadingStatsResponse,
    SessionCreateRequest,
    SessionCreateResponse,
    SessionStateResponse,
    ViewportRequest,
    ViewportResponse,
)
from subtitler.core import parse_time
from subtitler.formats import ExportFormat

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Iterator

    from subtitler.api.sessions import ManagedSession, SessionManager
    from subtitler.core import SubtitleInterval
    from subtitler.session import EditorSession

router = APIRouter(prefix="/api")
logger = structlog.get_logger()


@contextlib.contextmanager
def _core_errors() -> Iterator[None]:
    """Re-raise known core errors as ApiError."""
    try:
        yield
    except tuple(CORE_ERRORS) as exc:
        raise from_core_error(exc) from exc


def _get_session_manager(request: Request) -> SessionManager:
    """Get the SessionManager from app state."""
    manager: SessionManager = request.app.state.session_manager
    return manager


def _get_session_or_404(request: Request, session_id: str) -> ManagedSession:
    """Get a session by ID or raise 404."""
    managed = _get_session_manager(request).get_session(session_id)
    if managed is None:
        raise SessionNotFoundError(session_id)
    return managed


def _viewport(editor: EditorSession) -> ViewportResponse:
    viewport = editor.viewport
    return ViewportResponse(
        view_start=viewport.view_start,
        view_span=viewport.view_span,
        total_duration=viewport.total_duration,
        markers=[marker.time for marker in viewport.time_markers()],
    )


def _interval(interval: SubtitleInterval) -> IntervalResponse:
    return IntervalResponse.model_validate(interval)


def _seconds(value: float | str | None) -> float | None:
    if isinstance(value, str):
        return parse_time(value)
    return value


@router.post("/sessions", response_model=SessionCreateResponse)
async def create_session(
    body: SessionCreateRequest, request: Request
) -> SessionCreateResponse:
    """Open a new editor session."""
    managed = _get_session_manager(request).create_session(
        duration=body.duration,
        file_name=body.file_name,
        language=body.language,
    )
    return SessionCreateResponse(session_id=managed.id)


@router.get("/sessions/{session_id}", response_model=SessionStateResponse)
async def get_session_state(session_id: str, request: Request) -> SessionStateResponse:
    """Get a snapshot of an editor session."""
    managed = _get_session_or_404(request, session_id)
    editor = managed.editor
    return SessionStateResponse(
        session_id=managed.id,
        language=editor.language,
        file_name=editor.file_name,
        duration=editor.duration,
        interval_count=len(editor.store),
        selected_id=editor.selected_id,
        playhead=editor.playhead.current_time,
        drag_state=editor.machine.state,
        viewport=_viewport(editor),
    )


@router.get("/sessions/{session_id}/intervals", response_model=list[ListRowResponse])
async def list_intervals(
    session_id: str, request: Request, q: str = ""
) -> list[ListRowResponse]:
    """List intervals in time order, optionally filtered by a search term."""
    editor = _get_session_or_404(request, session_id).editor
    return [
        ListRowResponse(number=row.number, interval=_interval(row.interval))
        for row in editor.search(q)
    ]


@router.post("/sessions/{session_id}/intervals", response_model=IntervalResponse)
async def create_interval(
    session_id: str, body: IntervalCreateRequest, request: Request
) -> IntervalResponse:
    """Create an interval at explicit times."""
    editor = _get_session_or_404(request, session_id).editor
    with _core_errors():
        interval_id = editor.create_interval(body.start_time, body.end_time, body.text)
    return _interval(editor.store.get(interval_id))


@router.patch(
    "/sessions/{session_id}/intervals/{interval_id}", response_model=IntervalResponse
)
async def update_interval(
    session_id: str,
    interval_id: str,
    body: IntervalUpdateRequest,
    request: Request,
) -> IntervalResponse:
    """Edit an interval's times and/or text."""
    editor = _get_session_or_404(request, session_id).editor
    with _core_errors():
        interval = editor.update_interval(
            interval_id,
            start_time=_seconds(body.start_time),
            end_time=_seconds(body.end_time),
            text=body.text,
        )
    return _interval(interval)


@router.delete("/sessions/{session_id}/intervals/{interval_id}")
async def delete_interval(
    session_id: str, interval_id: str, request: Request
) -> dict[str, bool]:
    """Delete an interval. Deleting an unknown id is not an error."""
    editor = _get_session_or_404(request, session_id).editor
    with _core_errors():
        deleted = editor.delete_interval(interval_id)
    return {"deleted": deleted}


@router.post(
    "/sessions/{session_id}/intervals/{interval_id}/insert-after",
    response_model=InsertAfterResponse,
)
async def insert_after(
    session_id: str, interval_id: str, request: Request
) -> InsertAfterResponse:
    """Create an interval in the gap following another one."""
    editor = _get_session_or_404(request, session_id).editor
    with _core_errors():
        created_id = editor.insert_after(interval_id)
    if created_id is None:
        return InsertAfterResponse()
    return InsertAfterResponse(created=_interval(editor.store.get(created_id)))


@router.get(
    "/sessions/{session_id}/intervals/{interval_id}/stats",
    response_model=ReadingStatsResponse,
)
async def interval_stats(
    session_id: str, interval_id: str, request: Request
) -> ReadingStatsResponse:
    """Reading speed guidelines for an interval."""
    editor = _get_session_or_404(request, session_id).editor
    with _core_errors():
        stats = editor.reading_stats(interval_id)
    return ReadingStatsResponse.model_validate(stats)


@router.post("/sessions/{session_id}/pointer", response_model=PointerResponse)
async def pointer_input(
    session_id: str, body: PointerRequest, request: Request
) -> PointerResponse:
    """Feed one pointer input to the timeline."""
    editor = _get_session_or_404(request, session_id).editor
    outcome = editor.pointer(body.kind, body.fraction)
    created = None
    if outcome.created_id is not None:
        created = _interval(editor.store.get(outcome.created_id))
    return PointerResponse(
        state=outcome.state,
        selected_id=outcome.selected_id,
        seek_time=outcome.seek_time,
        created=created,
    )


@router.post("/sessions/{session_id}/viewport", response_model=ViewportResponse)
async def change_viewport(
    session_id: str, body: ViewportRequest, request: Request
) -> ViewportResponse:
    """Zoom or pan the timeline."""
    editor = _get_session_or_404(request, session_id).editor
    if body.action == ViewportAction.ZOOM_IN:
        editor.zoom_in()
    elif body.action == ViewportAction.ZOOM_OUT:
        editor.zoom_out()
    else:
        editor.pan_by(body.fraction)
    return _viewport(editor)


@router.post("/sessions/{session_id}/playhead", response_model=ViewportResponse)
async def playhead_update(
    session_id: str, body: PlayheadRequest, request: Request
) -> ViewportResponse:
    """Report the media position; the timeline follows it."""
    editor = _get_session_or_404(request, session_id).editor
    editor.on_time_update(body.current_time)
    return _viewport(editor)


@router.post("/sessions/{session_id}/duration", response_model=ViewportResponse)
async def duration_update(
    session_id: str, body: DurationRequest, request: Request
) -> ViewportResponse:
    """Report the media duration once it is known."""
    editor = _get_session_or_404(request, session_id).editor
    editor.on_duration_change(body.duration)
    return _viewport(editor)


@router.post("/sessions/{session_id}/import", response_model=ImportResponse)
async def import_srt(
    session_id: str, body: ImportRequest, request: Request
) -> ImportResponse:
    """Load SRT content into the session."""
    editor = _get_session_or_404(request, session_id).editor
    with _core_errors():
        ids = editor.import_srt(body.content, replace=body.replace)
    return ImportResponse(imported=len(ids))


@router.get("/sessions/{session_id}/export/{export_format}")
async def export_subtitles(
    session_id: str, export_format: str, request: Request
) -> Response:
    """Download the intervals as SRT, WebVTT or plain text."""
    try:
        fmt = ExportFormat(export_format)
    except ValueError as err:
        raise InvalidRequestError(
            f"Invalid export format: {export_format}",
            detail=f"Must be one of: {', '.join(ExportFormat)}",
        ) from err

    editor = _get_session_or_404(request, session_id).editor
    with _core_errors():
        content = editor.export(fmt)
    filename = editor.export_filename(fmt)
    logger.info(
        "subtitles_exported",
        session_id=session_id,
        format=str(fmt),
        count=len(editor.store),
    )
    return Response(
        content=content,
        media_type="text/plain; charset=utf-8",
        headers={
            "Content-Disposition": f"attachment; filename*=UTF-8''{quote(filename)}"
        },
    )


async def _event_stream(
    managed: ManagedSession, manager: SessionManager
) -> AsyncIterator[dict[str, str]]:
    """Yield queued events and keepalive pings until the session is removed."""
    while managed.id in manager:
        try:
            event = await asyncio.wait_for(
                managed.event_queue.get(), timeout=SSE_KEEPALIVE_SECONDS
            )
            yield {
                "event": str(event["event"]),
                "data": json.dumps(event["data"]),
            }
        except TimeoutError:
            # Send keepalive ping
            yield {"event": SSEEvent.PING, "data": ""}
    logger.info("session_stream_closed", session_id=managed.id)


@router.get("/sessions/{session_id}/events")
async def session_events(session_id: str, request: Request) -> EventSourceResponse:
    """SSE stream of settled interval changes."""
    managed = _get_session_or_404(request, session_id)
    return EventSourceResponse(
        _event_stream(managed, _get_session_manager(request))
    )


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}
