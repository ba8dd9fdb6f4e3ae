"""Tests for configuration loading."""

from src.utils.config import Config, get_config, reset_config


class TestConfig:
    def test_database_url_override(self):
        config = get_config()

        assert config.database_url == "sqlite:///:memory:"
        assert config.database_exists()

    def test_default_database_url(self, monkeypatch, tmp_path):
        monkeypatch.delenv("PARCEL_TRACKER_DATABASE_URL")
        monkeypatch.setattr(Config, "_get_project_data_dir", lambda self: tmp_path / "data")

        config = Config("development")

        assert config.database_url.startswith("sqlite:///")
        assert config.database_url.endswith("parcel_tracker.db")
        assert (tmp_path / "data").is_dir()
        assert not config.database_exists()

    def test_strict_transitions_default_off(self):
        assert get_config().strict_transitions is False

    def test_strict_transitions_from_env(self, monkeypatch):
        monkeypatch.setenv("PARCEL_TRACKER_STRICT_TRANSITIONS", "yes")
        reset_config()

        assert get_config().strict_transitions is True

    def test_password_iterations_and_log_level(self, monkeypatch):
        monkeypatch.setenv("PARCEL_TRACKER_LOG_LEVEL", "debug")
        reset_config()

        config = get_config()

        assert config.password_iterations == 1000
        assert config.log_level == "DEBUG"

    def test_singleton_keeps_environment(self):
        first = get_config()

        assert get_config("production") is first
        assert first.environment == "development"
