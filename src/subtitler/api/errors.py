"""API error hierarchy and the mapping from editor errors to HTTP errors."""

from subtitler.core import IntervalLockedError, IntervalNotFoundError, InvalidRangeError
from subtitler.formats import EmptyExportError, SRTParseError


class ApiError(Exception):
    """An error rendered to clients as ``{code, message, detail}``."""

    def __init__(
        self,
        *,
        status_code: int,
        code: str,
        message: str,
        detail: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.code = code
        self.message = message
        self.detail = detail
        super().__init__(message)

    def to_content(self) -> dict[str, str | None]:
        """JSON body for the error response."""
        return {"code": self.code, "message": self.message, "detail": self.detail}


class SessionNotFoundError(ApiError):
    """Raised when a requested editor session does not exist."""

    def __init__(self, session_id: str) -> None:
        super().__init__(
            status_code=404,
            code="session_not_found",
            message=f"Session {session_id} not found",
        )


class InvalidRequestError(ApiError):
    """Raised when the client sends an invalid request."""

    def __init__(self, message: str, *, detail: str | None = None) -> None:
        super().__init__(
            status_code=422,
            code="invalid_request",
            message=message,
            detail=detail,
        )


# Editor errors -> (status_code, error_code, user_message)
CORE_ERRORS: dict[type[Exception], tuple[int, str, str]] = {
    IntervalNotFoundError: (404, "interval_not_found", "Interval not found"),
    IntervalLockedError: (409, "interval_locked", "Interval is being dragged"),
    InvalidRangeError: (422, "invalid_range", "Invalid time range"),
    SRTParseError: (422, "invalid_srt", "Failed to parse SRT content"),
    EmptyExportError: (422, "nothing_to_export", "No subtitles to export"),
}


def from_core_error(exc: Exception) -> ApiError:
    """Convert an editor exception to ApiError; unknown errors become a 500."""
    for exc_type, (status_code, code, message) in CORE_ERRORS.items():
        if isinstance(exc, exc_type):
            return ApiError(
                status_code=status_code, code=code, message=message, detail=str(exc)
            )
    return ApiError(
        status_code=500,
        code="internal_error",
        message="Unexpected error",
        detail=str(exc),
    )
