"""Time text formatting and lenient parsing."""

import math


def _split_millis(seconds: float) -> tuple[int, int, int, int]:
    # Round away float noise (1.001 * 1000 == 1000.9999...) before flooring
    total_millis = math.floor(round(max(0.0, seconds) * 1000, 6))
    total_seconds, millis = divmod(total_millis, 1000)
    hours, rest = divmod(total_seconds, 3600)
    minutes, secs = divmod(rest, 60)
    return hours, minutes, secs, millis


def format_timestamp(seconds: float, separator: str = ",") -> str:
    """Format seconds as ``HH:MM:SS,mmm``.

    Hours, minutes, seconds and milliseconds are floored. Use ``"."`` as
    separator for WebVTT.
    """
    hours, minutes, secs, millis = _split_millis(seconds)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}{separator}{millis:03d}"


def format_clock(seconds: float) -> str:
    """Format seconds the way the timing fields show them: ``HH:MM:SS.mmm``."""
    return format_timestamp(seconds, ".")


def format_short(seconds: float) -> str:
    """Format seconds as ``M:SS.ss`` for list rows."""
    # Round to hundredths before splitting off minutes
    minutes, hundredths = divmod(math.floor(seconds * 100 + 0.5), 6000)
    return f"{minutes}:{hundredths / 100:05.2f}"


def _number(text: str, parse: type[int] | type[float]) -> float:
    try:
        value = parse(text.strip())
    except ValueError:
        return 0
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    return value


def parse_time(text: str) -> float:
    """Parse ``HH:MM:SS.mmm`` (or ``HH:MM:SS,mmm``) into seconds.

    Parsing is lenient: anything without exactly three ``:`` separated parts
    yields 0 and a segment that is not a number counts as 0. Never raises.
    """
    parts = text.split(":")
    if len(parts) != 3:
        return 0.0

    hours = _number(parts[0], int)
    minutes = _number(parts[1], int)
    seconds = _number(parts[2].replace(",", "."), float)
    return float(max(0.0, hours * 3600 + minutes * 60 + seconds))
