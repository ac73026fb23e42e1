"""
Unit Tests for settings and time helpers
"""

from phoenix.config import AppSettings
from phoenix.utils.time_utils import DEFAULT_TZ_NAME, from_timestamp, get_current_time


class TestAppSettings:
    def test_defaults(self, monkeypatch):
        for name in ("API_FOOTBALL_KEY", "APP_TIMEZONE", "PORT", "CACHE_TTL_SECONDS",
                     "CORS_ORIGINS", "REDIS_HOST", "ENABLE_SCHEDULER", "LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)

        settings = AppSettings.from_env()

        assert settings.demo_mode is True
        assert settings.timezone == "Africa/Casablanca"
        assert settings.port == 10000
        assert settings.cache_ttl_seconds == 86400
        assert settings.cors_origins == []
        assert settings.redis_host is None
        assert settings.enable_scheduler is False

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("API_FOOTBALL_KEY", "abc")
        monkeypatch.setenv("APP_TIMEZONE", "Europe/Madrid")
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("CORS_ORIGINS", "https://a.test, https://b.test,")
        monkeypatch.setenv("ENABLE_SCHEDULER", "true")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        settings = AppSettings.from_env()

        assert settings.demo_mode is False
        assert settings.timezone == "Europe/Madrid"
        assert settings.port == 8080
        assert settings.cors_origins == ["https://a.test", "https://b.test"]
        assert settings.enable_scheduler is True
        assert settings.log_level == "DEBUG"


class TestTimeUtils:
    def test_current_time_is_aware(self):
        now = get_current_time()
        assert now.tzinfo is not None
        assert DEFAULT_TZ_NAME == "Africa/Casablanca"

    def test_from_timestamp(self):
        kickoff = from_timestamp(1792339200, "UTC")
        assert kickoff.strftime("%Y-%m-%d") == "2026-10-18"

    def test_missing_timestamp_falls_back_to_now(self):
        assert from_timestamp(None).tzinfo is not None

    def test_numeric_string_timestamp(self):
        kickoff = from_timestamp("1792339200", "UTC")
        assert kickoff.strftime("%Y-%m-%d %H:%M") == "2026-10-18 16:00"

    def test_garbage_timestamp_falls_back_to_now(self):
        before = get_current_time("UTC")
        kickoff = from_timestamp("kickoff tbc", "UTC")
        assert kickoff >= before
