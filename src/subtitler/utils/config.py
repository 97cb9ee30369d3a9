"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Attributes:
        min_duration: Shortest allowed interval length in seconds
        default_duration: Length of intervals created by gap-fill
        initial_view_span: Seconds visible on the timeline for a new session
        min_view_span: Zoom-in floor in seconds
        handle_fraction: Width of the resize handles as a fraction of the track
        click_tolerance: Pointer travel (track fraction) still treated as a click
        resync_threshold: Divergence in seconds that forces a media seek
        autosave_delay: Quiet period in seconds before edits are flushed
        default_language: Language code used for export file names
        session_ttl_seconds: Idle lifetime of an API editor session
        log_level: Minimum level passed to structlog
        log_json: Render logs as JSON lines instead of console output
    """

    min_duration: float = 0.1
    default_duration: float = 3.0

    initial_view_span: float = 15.0
    min_view_span: float = 1.0
    handle_fraction: float = 0.01
    click_tolerance: float = 0.003

    resync_threshold: float = 0.5
    autosave_delay: float = 0.5

    default_language: str = "hi"

    session_ttl_seconds: int = 3600

    log_level: str = "INFO"
    log_json: bool = False

    model_config = SettingsConfigDict(
        env_prefix="SUBTITLER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Returns:
        Settings instance loaded from environment

    Note:
        Settings are cached for performance. Use get_settings.cache_clear()
        to reload settings in tests.
    """
    return Settings()
