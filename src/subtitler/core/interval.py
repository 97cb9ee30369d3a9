"""Subtitle interval domain models."""

import math
from dataclasses import dataclass

MIN_DURATION = 0.1
"""Shortest allowed interval length in seconds."""


@dataclass(frozen=True)
class SubtitleInterval:
    """A subtitle's time span plus its text.

    Instances are values: the store hands out copies and replaces them on
    every mutation, so a reference held by a caller never changes under it.
    """

    id: str
    start_time: float
    end_time: float
    text: str = ""

    @property
    def duration(self) -> float:
        """Length of the interval in seconds."""
        return self.end_time - self.start_time

    def contains(self, time: float) -> bool:
        """Return True when ``time`` falls inside the closed interval."""
        return self.start_time <= time <= self.end_time


@dataclass(frozen=True)
class SubtitleCue:
    """Timing and text without identity, e.g. a block read from an SRT file."""

    start_time: float
    end_time: float
    text: str = ""

    def __post_init__(self):
        """Validate cue constraints."""
        if self.start_time < 0:
            raise ValueError(f"Start time {self.start_time} must be non-negative")
        if self.start_time >= self.end_time:
            raise ValueError(
                f"Start time {self.start_time} must be before end time {self.end_time}"
            )


def min_end(start_time: float, min_duration: float = MIN_DURATION) -> float:
    """Return the earliest end time that satisfies the minimum duration.

    ``start + min_duration`` can round to a value whose difference with
    ``start`` is a hair below ``min_duration``; step up until it is not.
    """
    end_time = start_time + min_duration
    while end_time - start_time < min_duration:
        end_time = math.nextafter(end_time, math.inf)
    return end_time


def max_start(end_time: float, min_duration: float = MIN_DURATION) -> float:
    """Return the latest start time that satisfies the minimum duration."""
    start_time = end_time - min_duration
    while end_time - start_time < min_duration:
        start_time = math.nextafter(start_time, -math.inf)
    return start_time
