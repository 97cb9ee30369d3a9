"""Domain errors raised by the interval model and editor session."""


class InvalidRangeError(ValueError):
    """Raised when an interval gets an empty, inverted or non-finite range."""

    def __init__(self, start_time: float, end_time: float) -> None:
        self.start_time = start_time
        self.end_time = end_time
        super().__init__(
            f"Start time {start_time} must be non-negative and before "
            f"end time {end_time}"
        )


class IntervalNotFoundError(KeyError):
    """Raised when an interval id is not present in the store."""

    def __init__(self, interval_id: str) -> None:
        self.interval_id = interval_id
        super().__init__(interval_id)

    def __str__(self) -> str:
        return f"Interval {self.interval_id} not found"


class IntervalLockedError(RuntimeError):
    """Raised when an edit targets the interval held by an active drag."""

    def __init__(self, interval_id: str) -> None:
        self.interval_id = interval_id
        super().__init__(f"Interval {interval_id} is being dragged")
