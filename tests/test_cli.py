"""CLI tests with typer's CliRunner.

The HTTP adapter is swapped for FakeBlogApi; the SQLite cache is a real
file under tmp_path.
"""

from __future__ import annotations

import pytest
from typer.testing import CliRunner

import cli.main as cli_main
from conftest import FakeBlogApi, make_comment, make_posts, make_user
from core.errors import NetworkError

runner = CliRunner()


@pytest.fixture
def api(tmp_path, monkeypatch):
    fake = FakeBlogApi(
        users=[make_user(1)],
        comments=[make_comment(1, post_id=1), make_comment(2, post_id=2)],
        posts_by_page={1: make_posts(20), 2: make_posts(20, start=21), 3: make_posts(5, start=41)},
    )
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("BLOG_SYNC_DATABASE_PATH", str(tmp_path / "blog.db"))
    monkeypatch.setenv("BLOG_SYNC_PAGE_SIZE", "20")
    monkeypatch.setattr(cli_main, "BlogApi", lambda settings: fake)
    return fake


class TestPostsCommand:
    def test_loads_requested_pages(self, api):
        result = runner.invoke(cli_main.app, ["posts", "--pages", "2", "--no-banner"])

        assert result.exit_code == 0, result.output
        assert "Posts 1-20" in result.output
        assert "Posts 21-40" in result.output
        assert api.post_calls == [(1, 20), (2, 20)]

    def test_stops_at_last_page(self, api):
        result = runner.invoke(cli_main.app, ["posts", "--pages", "10", "--no-banner"])

        assert result.exit_code == 0, result.output
        assert "No more posts." in result.output
        assert api.post_calls == [(1, 20), (2, 20), (3, 20), (4, 20)]

    def test_second_run_is_served_from_cache(self, api):
        runner.invoke(cli_main.app, ["posts", "--no-banner"])

        result = runner.invoke(cli_main.app, ["posts", "--no-banner"])

        assert result.exit_code == 0, result.output
        assert api.post_calls == [(1, 20)]

    def test_offline_first_run_fails_with_generic_message(self, api):
        api.error = NetworkError("offline")

        result = runner.invoke(cli_main.app, ["posts", "--no-banner"])

        assert result.exit_code == 1
        assert "Could not load posts" in result.output

    def test_interactive_opens_post_detail(self, api):
        runner.invoke(cli_main.app, ["posts", "--no-banner"])

        result = runner.invoke(
            cli_main.app,
            ["posts", "--interactive", "--no-banner"],
            input="2\nq\n",
        )

        assert result.exit_code == 0, result.output
        assert "Post 2" in result.output
        assert "1 comments" in result.output


class TestOtherCommands:
    def test_post_requires_cached_post(self, api):
        result = runner.invoke(cli_main.app, ["post", "1"])

        assert result.exit_code == 1
        assert "not cached" in result.output

    def test_users_lists_remote_users(self, api):
        result = runner.invoke(cli_main.app, ["users"])

        assert result.exit_code == 0, result.output
        assert "user1" in result.output
        assert api.user_calls == 1

    def test_comments_filter_by_post(self, api):
        result = runner.invoke(cli_main.app, ["comments", "--post-id", "2"])

        assert result.exit_code == 0, result.output
        assert "reader2@example.com" in result.output
        assert "reader1@example.com" not in result.output

    def test_users_network_failure_exits_with_error(self, api):
        api.error = NetworkError("offline")

        result = runner.invoke(cli_main.app, ["users"])

        assert result.exit_code == 1
        assert "Could not load users" in result.output


class TestUnusableDatabase:
    """A cache path that cannot be opened fails cleanly with exit code 1."""

    def test_posts_with_directory_as_database(self, api, tmp_path, monkeypatch):
        monkeypatch.setenv("BLOG_SYNC_DATABASE_PATH", str(tmp_path))

        result = runner.invoke(cli_main.app, ["posts", "--no-banner"])

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Could not load posts" in result.output
        assert api.post_calls == []

    def test_post_with_directory_as_database(self, api, tmp_path, monkeypatch):
        monkeypatch.setenv("BLOG_SYNC_DATABASE_PATH", str(tmp_path))

        result = runner.invoke(cli_main.app, ["post", "1"])

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Could not load post 1" in result.output

    def test_users_with_non_sqlite_file(self, api, tmp_path, monkeypatch):
        path = tmp_path / "notes.db"
        path.write_text("plain text, not a database\n" * 40, encoding="utf-8")
        monkeypatch.setenv("BLOG_SYNC_DATABASE_PATH", str(path))

        result = runner.invoke(cli_main.app, ["users"])

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Could not load users" in result.output

    def test_doctor_reports_non_sqlite_file(self, api, tmp_path, monkeypatch):
        import cli.doctor as doctor

        async def api_ok(settings):
            return True, "HTTP 200"

        path = tmp_path / "notes.db"
        path.write_text("plain text, not a database\n" * 40, encoding="utf-8")
        monkeypatch.setenv("BLOG_SYNC_DATABASE_PATH", str(path))
        monkeypatch.setattr(doctor, "_check_api", api_ok)

        result = runner.invoke(cli_main.app, ["doctor", "run"])

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "FAIL" in result.output
