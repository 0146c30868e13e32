"""
Unit tests for AppSettings and the per-user .env helpers.
"""
from __future__ import annotations

import pytest

from core import config as config_module
from core.config import AppSettings, MissingCredentialError, write_user_env_vars
from core.domain.models import Config


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.delenv("CHAT_ROUTER_DAUMMAP_APP_KEY", raising=False)


class TestAppSettings:

    def test_defaults(self):
        settings = AppSettings(_env_file=None)
        assert settings.daummap_app_key is None
        assert settings.geocoding_max_pages == 3
        assert settings.http_timeout_seconds > 0

    def test_reads_prefixed_env(self, monkeypatch):
        monkeypatch.setenv("CHAT_ROUTER_DAUMMAP_APP_KEY", "abc123")
        monkeypatch.setenv("CHAT_ROUTER_GEOCODING_MAX_PAGES", "5")
        settings = AppSettings(_env_file=None)
        assert settings.daummap_app_key == "abc123"
        assert settings.geocoding_max_pages == 5

    def test_to_config(self):
        assert AppSettings(_env_file=None, daummap_app_key="abc123").to_config() == Config(daummap_app_key="abc123")

    def test_to_config_without_key(self):
        with pytest.raises(MissingCredentialError):
            AppSettings(_env_file=None).to_config()

    def test_reads_project_env_file(self, tmp_path):
        (tmp_path / ".env").write_text("CHAT_ROUTER_DAUMMAP_APP_KEY=from-file\n", encoding="utf-8")
        assert AppSettings(_env_file=str(tmp_path / ".env")).daummap_app_key == "from-file"


class TestUserEnv:

    def test_user_config_dir_honours_xdg(self, tmp_path, monkeypatch):
        monkeypatch.setattr(config_module.sys, "platform", "linux")
        assert config_module.get_user_config_dir() == tmp_path / "xdg" / "chat-router"

    def test_write_merges_existing_values(self, monkeypatch):
        monkeypatch.setattr(config_module.sys, "platform", "linux")
        write_user_env_vars({"CHAT_ROUTER_LOG_LEVEL": "DEBUG"})
        path = write_user_env_vars({"CHAT_ROUTER_DAUMMAP_APP_KEY": "k"})

        text = path.read_text(encoding="utf-8")
        assert "CHAT_ROUTER_LOG_LEVEL=DEBUG" in text
        assert "CHAT_ROUTER_DAUMMAP_APP_KEY=k" in text
