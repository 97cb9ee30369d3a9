"""Unit tests for configuration utilities."""

import pytest

from subtitler.utils.config import Settings, get_settings


class TestSettings:
    """Test cases for Settings class."""

    @pytest.fixture
    def no_env_file(self, tmp_path, monkeypatch):
        """Run test in a directory without .env file."""
        monkeypatch.chdir(tmp_path)
        get_settings.cache_clear()
        yield
        get_settings.cache_clear()

    def test_settings_defaults(self, no_env_file):
        """Should fall back to the editor defaults."""
        settings = get_settings()

        assert settings.min_duration == 0.1
        assert settings.default_duration == 3.0
        assert settings.initial_view_span == 15.0
        assert settings.resync_threshold == 0.5
        assert settings.default_language == "hi"

    def test_settings_loads_from_prefixed_env(self, monkeypatch, no_env_file):
        """Should load SUBTITLER_* variables from the environment."""
        monkeypatch.setenv("SUBTITLER_DEFAULT_DURATION", "2.5")
        monkeypatch.setenv("SUBTITLER_DEFAULT_LANGUAGE", "en")
        monkeypatch.setenv("SUBTITLER_LOG_JSON", "true")

        settings = get_settings()

        assert settings.default_duration == 2.5
        assert settings.default_language == "en"
        assert settings.log_json is True

    def test_env_names_are_case_insensitive(self, monkeypatch, no_env_file):
        """Should accept lower-case variable names."""
        monkeypatch.setenv("subtitler_autosave_delay", "1.5")

        assert get_settings().autosave_delay == 1.5

    def test_settings_reads_env_file(self, tmp_path, monkeypatch, no_env_file):
        """Should read values from a .env file in the working directory."""
        (tmp_path / ".env").write_text("SUBTITLER_MIN_VIEW_SPAN=2\n")

        assert get_settings().min_view_span == 2.0

    def test_get_settings_is_cached(self, monkeypatch):
        """Should return cached settings on subsequent calls."""
        monkeypatch.setenv("SUBTITLER_DEFAULT_LANGUAGE", "fr")

        settings1 = get_settings()
        monkeypatch.setenv("SUBTITLER_DEFAULT_LANGUAGE", "de")
        settings2 = get_settings()

        # Same instance due to caching
        assert settings1 is settings2
        assert settings1.default_language == "fr"

    def test_cache_clear_reloads_settings(self, monkeypatch):
        """Should reload settings after cache clear."""
        monkeypatch.setenv("SUBTITLER_DEFAULT_LANGUAGE", "fr")
        settings1 = get_settings()

        get_settings.cache_clear()
        monkeypatch.setenv("SUBTITLER_DEFAULT_LANGUAGE", "de")
        settings2 = get_settings()

        assert settings1.default_language == "fr"
        assert settings2.default_language == "de"
        assert settings1 is not settings2

    def test_direct_construction_overrides(self):
        """Should accept keyword overrides for tests and embedding."""
        assert Settings(default_duration=1.0).default_duration == 1.0
