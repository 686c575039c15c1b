"""Tests for environment-backed Settings."""

from tg_files.core.config import Settings, get_settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("TELEGRAM_API_ROOT", raising=False)
        monkeypatch.delenv("TELEGRAM_ENVIRONMENT", raising=False)
        settings = Settings(_env_file=None)
        assert settings.telegram_api_root == "https://api.telegram.org"
        assert settings.telegram_environment == "prod"
        assert settings.download_chunk_size == 64 * 1024
        assert settings.temp_dir is None

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "42:xyz")
        monkeypatch.setenv("TELEGRAM_API_ROOT", "http://localhost:8081")
        monkeypatch.setenv("DOWNLOAD_TIMEOUT", "5")
        settings = Settings(_env_file=None)
        assert settings.telegram_bot_token == "42:xyz"
        assert settings.telegram_api_root == "http://localhost:8081"
        assert settings.download_timeout == 5.0

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()
