"""Pydantic v2 request/response schemas."""

from typing import Self

from pydantic import BaseModel, Field, model_validator

from subtitler.api.constants import ViewportAction
from subtitler.core import DragState, PointerKind


class SessionCreateRequest(BaseModel):
    """Request body for opening an editor session."""

    model_config = {"allow_inf_nan": False}

    duration: float = Field(default=0.0, ge=0)
    file_name: str | None = None
    language: str | None = None


class SessionCreateResponse(BaseModel):
    """Response body after creating a session."""

    session_id: str


class ErrorDetail(BaseModel):
    """Structured error information."""

    code: str
    message: str
    detail: str | None = None


class IntervalResponse(BaseModel):
    """A subtitle interval."""

    model_config = {"from_attributes": True}

    id: str
    start_time: float
    end_time: float
    text: str
    duration: float


class IntervalCreateRequest(BaseModel):
    """Request body for creating an interval at explicit times."""

    model_config = {"allow_inf_nan": False}

    start_time: float
    end_time: float
    text: str = ""


class IntervalUpdateRequest(BaseModel):
    """Partial interval edit.

    Times are seconds, or ``HH:MM:SS.mmm`` strings as typed in the timing
    fields (malformed strings read as 0).
    """

    model_config = {"allow_inf_nan": False}

    start_time: float | str | None = None
    end_time: float | str | None = None
    text: str | None = None

    @model_validator(mode="after")
    def validate_not_empty(self) -> Self:
        if self.start_time is None and self.end_time is None and self.text is None:
            raise ValueError("at least one of start_time, end_time, text is required")
        return self


class ListRowResponse(BaseModel):
    """One numbered row of the subtitle list."""

    number: int
    interval: IntervalResponse


class InsertAfterResponse(BaseModel):
    """Result of a gap-filling insert; ``created`` is null when there was no room."""

    created: IntervalResponse | None = None


class ReadingStatsResponse(BaseModel):
    """Reading guidelines for one interval."""

    model_config = {"from_attributes": True}

    duration: float
    word_count: int
    words_per_minute: int
    duration_ok: bool
    duration_hint: str
    length_ok: bool
    speed_ok: bool


class PointerRequest(BaseModel):
    """A raw pointer input at a fractional track position."""

    model_config = {"allow_inf_nan": False}

    kind: PointerKind
    fraction: float = 0.0


class PointerResponse(BaseModel):
    """What a pointer input did."""

    state: DragState
    selected_id: str | None = None
    seek_time: float | None = None
    created: IntervalResponse | None = None


class ViewportRequest(BaseModel):
    """Zoom or pan the timeline."""

    model_config = {"allow_inf_nan": False}

    action: ViewportAction
    fraction: float = 0.0


class ViewportResponse(BaseModel):
    """Visible time window."""

    view_start: float
    view_span: float
    total_duration: float
    markers: list[float] = []


class PlayheadRequest(BaseModel):
    """Time update reported by the media element."""

    model_config = {"allow_inf_nan": False}

    current_time: float = Field(ge=0)


class DurationRequest(BaseModel):
    """Media duration, reported once it is known."""

    model_config = {"allow_inf_nan": False}

    duration: float = Field(ge=0)


class SessionStateResponse(BaseModel):
    """Snapshot of an editor session."""

    session_id: str
    language: str
    file_name: str | None = None
    duration: float
    interval_count: int
    selected_id: str | None = None
    playhead: float
    drag_state: DragState
    viewport: ViewportResponse


class ImportRequest(BaseModel):
    """SRT content to load into the session."""

    content: str
    replace: bool = True


class ImportResponse(BaseModel):
    """Number of intervals created by an import."""

    imported: int
