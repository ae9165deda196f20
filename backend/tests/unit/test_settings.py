"""
Unit tests for Pydantic Settings configuration.

Tests settings loading and validation.
"""

import pytest
from pydantic import ValidationError

from college_advisor.config.settings import Settings, get_settings


class TestSettings:
    """Tests for Settings configuration."""

    def test_settings_has_defaults(self):
        """Completion parameters default to the counselor request values."""
        s = Settings()
        assert s.openai_model == "gpt-3.5-turbo"
        assert s.completion_temperature == 0.7
        assert s.completion_max_tokens == 256
        assert s.completion_top_p == 1.0
        assert s.completion_frequency_penalty == 0.0
        assert s.completion_presence_penalty == 0.0
        assert s.database_read_only is True

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        monkeypatch.setenv("ENRICH_COLLEGES", "false")
        s = Settings()
        assert s.openai_api_key == "sk-test"
        assert s.enrich_colleges is False

    def test_rejects_non_sqlite_database(self):
        with pytest.raises(ValidationError):
            Settings(database_url="postgresql+asyncpg://localhost/db")

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()
