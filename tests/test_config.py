"""Tests for environment-driven settings."""

import pytest

from mockdata.config import Settings, get_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate settings from the developer's environment and .env file."""
    for name in ("MAX_COUNT", "DEFAULT_COUNT", "RATE_LIMIT_PER_HOUR", "DISABLE_RATE_LIMIT", "CORS_ORIGIN", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self):
        settings = Settings()

        assert settings.max_count == 100
        assert settings.default_count == 1
        assert settings.rate_limit_per_hour == 1000
        assert settings.disable_rate_limit is False
        assert settings.rate_limit_enabled is True
        assert settings.allowed_origins == []

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("MAX_COUNT", "5")
        monkeypatch.setenv("RATE_LIMIT_PER_HOUR", "0")

        settings = Settings()
        assert settings.max_count == 5
        assert settings.rate_limit_enabled is False

    @pytest.mark.parametrize("value,expected", [
        ("1", True),
        ("on", True),
        ("YES", True),
        ("false", False),
        ("whatever", False),
    ])
    def test_disable_rate_limit_flag(self, monkeypatch, value, expected):
        monkeypatch.setenv("DISABLE_RATE_LIMIT", value)
        assert Settings().disable_rate_limit is expected

    def test_allowed_origins(self, monkeypatch):
        monkeypatch.setenv("CORS_ORIGIN", "https://a.example, https://b.example,")
        assert Settings().allowed_origins == ["https://a.example", "https://b.example"]

    @pytest.mark.parametrize("value", ["*", "true"])
    def test_wildcard_origins(self, monkeypatch, value):
        monkeypatch.setenv("CORS_ORIGIN", value)
        assert Settings().allowed_origins == []

    def test_env_file(self, tmp_path):
        (tmp_path / ".env").write_text("MAX_COUNT=7\n")
        assert Settings().max_count == 7

    def test_get_settings_cached(self, monkeypatch):
        monkeypatch.setenv("MAX_COUNT", "9")
        assert get_settings() is get_settings()
        assert get_settings().max_count == 9
