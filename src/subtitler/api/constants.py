"""Constants and enums for the API layer."""

from enum import StrEnum


class SSEEvent(StrEnum):
    """Server-Sent Events event types."""

    INTERVAL_SAVED = "interval_saved"
    INTERVAL_DELETED = "interval_deleted"
    PING = "ping"


class ViewportAction(StrEnum):
    """Timeline view controls."""

    ZOOM_IN = "zoom_in"
    ZOOM_OUT = "zoom_out"
    PAN = "pan"


CLEANUP_INTERVAL_SECONDS = 300
SSE_KEEPALIVE_SECONDS = 30
EVENT_QUEUE_SIZE = 100
