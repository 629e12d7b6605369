"""Tests for settings and the per-user .env file."""

from __future__ import annotations

import sys

import pytest
from pydantic import ValidationError

from core.config import AppSettings, get_user_env_file, write_user_env_vars

linux_only = pytest.mark.skipif(
    sys.platform.startswith("win") or sys.platform == "darwin",
    reason="XDG_CONFIG_HOME only applies on Linux",
)


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    for name in ("API_BASE_URL", "PAGE_SIZE", "DATABASE_PATH", "LOG_LEVEL"):
        monkeypatch.delenv(f"BLOG_SYNC_{name}", raising=False)
    return tmp_path


class TestAppSettings:
    def test_defaults(self, isolated_env):
        settings = AppSettings()

        assert settings.api_base_url == "https://jsonplaceholder.typicode.com"
        assert settings.page_size == 20
        assert settings.log_level == "WARNING"

    def test_environment_overrides(self, isolated_env, monkeypatch):
        monkeypatch.setenv("BLOG_SYNC_PAGE_SIZE", "5")
        monkeypatch.setenv("BLOG_SYNC_DATABASE_PATH", str(isolated_env / "cache.db"))

        settings = AppSettings()

        assert settings.page_size == 5
        assert settings.resolved_database_path() == isolated_env / "cache.db"

    def test_page_size_must_be_positive(self, isolated_env, monkeypatch):
        monkeypatch.setenv("BLOG_SYNC_PAGE_SIZE", "0")

        with pytest.raises(ValidationError):
            AppSettings()

    def test_project_env_file_is_read(self, isolated_env):
        (isolated_env / ".env").write_text("BLOG_SYNC_PAGE_SIZE=7\n", encoding="utf-8")

        assert AppSettings().page_size == 7


@linux_only
class TestUserEnvFile:
    def test_database_defaults_to_user_config_dir(self, isolated_env):
        path = AppSettings().resolved_database_path()

        assert path == isolated_env / "config" / "blog-sync" / "blog.db"

    def test_write_merges_with_existing_values(self, isolated_env):
        write_user_env_vars({"BLOG_SYNC_PAGE_SIZE": "10"})
        env_path = write_user_env_vars({"BLOG_SYNC_API_BASE_URL": "https://blog.test"})

        assert env_path == get_user_env_file()
        text = env_path.read_text(encoding="utf-8")
        assert "BLOG_SYNC_PAGE_SIZE=10" in text
        assert "BLOG_SYNC_API_BASE_URL=https://blog.test" in text
