"""
Tests pour Settings (pydantic-settings).
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from movieviewer.config import Settings


class TestSettings:
    """Tests des valeurs par defaut et des surcharges d'environnement."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("MOVIEVIEWER_TMDB_API_KEY", raising=False)

        settings = Settings(_env_file=None)

        assert settings.tmdb_base_url == "https://api.themoviedb.org/3"
        assert settings.database_url == "sqlite:///movieviewer.db"
        assert settings.start_offline is False
        assert settings.store_workers == 4
        assert settings.tmdb_enabled is False

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("MOVIEVIEWER_TMDB_API_KEY", "abc123")
        monkeypatch.setenv("MOVIEVIEWER_START_OFFLINE", "true")
        monkeypatch.setenv("MOVIEVIEWER_LOG_LEVEL", "DEBUG")

        settings = Settings(_env_file=None)

        assert settings.tmdb_api_key == "abc123"
        assert settings.tmdb_enabled is True
        assert settings.start_offline is True
        assert settings.log_level == "DEBUG"

    def test_log_file_expands_home(self):
        settings = Settings(_env_file=None, log_file="~/movieviewer.log")

        assert settings.log_file == Path.home() / "movieviewer.log"

    def test_invalid_timeout_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, request_timeout=0)

    def test_invalid_store_workers_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, store_workers=0)
