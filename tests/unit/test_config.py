"""Tests for configuration loading and environment overrides."""

import json

import pytest

from freelance_market.config import ConfigManager, FreelanceConfig, get_config


@pytest.fixture
def manager(tmp_path, monkeypatch):
    monkeypatch.setenv("FREELANCE_CONFIG_FILE", str(tmp_path / "config.json"))
    for name in ("FREELANCE_DATABASE_URL", "DATABASE_URL", "FREELANCE_DEBUG", "FREELANCE_PORT",
                 "FREELANCE_LOG_LEVEL", "FREELANCE_LOG_TO_FILE"):
        monkeypatch.delenv(name, raising=False)
    return ConfigManager()


@pytest.mark.unit
class TestConfigManager:
    def test_defaults(self, manager):
        config = manager.load_config()

        assert config.database.url == "sqlite:///freelance_market.db"
        assert config.server.port == 3001
        assert config.market.profile_header == "profile_id"
        assert config.market.best_clients_default_limit == 2
        assert manager.validate_config() == []

    def test_config_is_cached_until_reload(self, manager, monkeypatch):
        first = manager.load_config()
        monkeypatch.setenv("FREELANCE_PORT", "4000")

        assert manager.load_config() is first
        assert manager.load_config(reload=True).server.port == 4000

    def test_environment_overrides(self, manager, monkeypatch):
        monkeypatch.setenv("FREELANCE_DATABASE_URL", "sqlite:///other.db")
        monkeypatch.setenv("FREELANCE_DEBUG", "true")
        monkeypatch.setenv("FREELANCE_LOG_TO_FILE", "0")

        config = manager.load_config()

        assert config.database.url == "sqlite:///other.db"
        assert config.server.debug is True
        assert config.app.log_level == "DEBUG"
        assert config.app.log_to_file is False

    def test_invalid_port_is_ignored(self, manager, monkeypatch):
        monkeypatch.setenv("FREELANCE_PORT", "not-a-port")

        assert manager.load_config().server.port == 3001

    def test_file_values_are_loaded(self, manager, tmp_path):
        (tmp_path / "config.json").write_text(
            json.dumps({"market": {"best_clients_default_limit": 5}, "server": {"port": 8080}})
        )

        config = manager.load_config()

        assert config.market.best_clients_default_limit == 5
        assert config.server.port == 8080
        assert config.market.profile_header == "profile_id"

    def test_broken_file_falls_back_to_defaults(self, manager, tmp_path):
        (tmp_path / "config.json").write_text("{not json")

        assert manager.load_config().server.port == 3001

    def test_save_and_round_trip(self, manager, tmp_path):
        config = manager.load_config()
        config.server.port = 9999

        assert manager.save_config() is True
        saved = json.loads((tmp_path / "config.json").read_text())
        assert FreelanceConfig.from_dict(saved).server.port == 9999

    def test_validate_reports_problems(self, manager):
        config = manager.load_config()
        config.server.port = 70000
        config.market.best_clients_default_limit = 0
        config.app.log_level = "LOUD"

        issues = manager.validate_config()

        assert len(issues) == 3


@pytest.mark.unit
def test_test_suite_runs_against_scratch_database():
    assert "freelance-market-tests-" in get_config().database.url
