"""blog-sync command line.

The CLI only wires things together: settings -> SQLite DAOs + API client ->
repository -> presenter -> console view. Every command drains the pending
cache writes before the event loop closes.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from adapters.blog_api import BlogApi
from adapters.sqlite_store import BlogDatabase, CommentDao, PostDao, UserDao
from cli.doctor import app as doctor_app
from cli.pagination import PaginationListener
from cli.posts_view import ConsolePostsView
from cli.ui_components import (
    build_comments_table,
    build_post_detail_panel,
    build_users_table,
    print_banner,
)
from core.config import AppSettings
from core.domain.models import Comment, User
from core.errors import BlogSyncError
from core.services.blog_repository import BlogRepository
from core.services.posts_presenter import PostsPresenter

app = typer.Typer(no_args_is_help=True, help="Local-first browser for a blog API.")
app.add_typer(doctor_app, name="doctor")

_console = Console()

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@asynccontextmanager
async def open_repository(settings: AppSettings) -> AsyncIterator[BlogRepository]:
    """Repository over the SQLite cache and the HTTP API."""

    db = BlogDatabase(settings.resolved_database_path())
    api = BlogApi(settings)
    repository = BlogRepository(PostDao(db), CommentDao(db), UserDao(db), api)
    try:
        yield repository
    finally:
        await repository.drain()
        await api.aclose()
        db.close()


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Override BLOG_SYNC_LOG_LEVEL (DEBUG, INFO, WARNING, ERROR).",
    ),
) -> None:
    settings = AppSettings()
    configure_logging(log_level or settings.log_level)


async def _show_detail(repository: BlogRepository, post_id: int) -> bool:
    try:
        detail = await repository.get_post_detail(post_id)
    except BlogSyncError as exc:
        logger.debug("Detail for post %d failed: %s", post_id, exc)
        _console.print(f"[red]Could not load post {post_id}.[/red]")
        return False
    if detail is None:
        _console.print(
            f"[yellow]Post {post_id} is not cached. Run `blog-sync posts` first.[/yellow]"
        )
        return False
    _console.print(build_post_detail_panel(detail))
    return True


async def _browse_posts(settings: AppSettings, *, pages: int, interactive: bool) -> bool:
    """Run the posts screen. Returns False when nothing could be shown."""

    async with open_repository(settings) as repository:
        selected: list[int] = []
        requested: list[asyncio.Task[None]] = []
        view = ConsolePostsView(_console, navigate=selected.append)
        presenter = PostsPresenter(repository, page_size=settings.page_size)
        listener = PaginationListener(
            load_more=lambda: requested.append(presenter.load_posts(load_more=True)),
            is_loading=lambda: view.is_loading,
            is_last_page=lambda: view.is_last_page,
        )

        async def scroll_to_bottom() -> bool:
            shown = len(view.posts)
            if not listener.on_scrolled(visible_count=shown, first_visible=0, total_count=shown):
                return False
            await requested[-1]
            return True

        try:
            await presenter.bind(view)
            if interactive:
                while True:
                    answer = await asyncio.to_thread(
                        typer.prompt,
                        "[Enter] more, <id> open post, q quit",
                        default="",
                        show_default=False,
                    )
                    answer = answer.strip().lower()
                    if answer in ("q", "quit", "exit"):
                        break
                    if answer.isdigit():
                        post = next((p for p in view.posts if p.id == int(answer)), None)
                        if post is None:
                            _console.print(f"[yellow]Post {answer} is not in the list.[/yellow]")
                            continue
                        presenter.show_details(post)
                        while selected:
                            await _show_detail(repository, selected.pop(0))
                        continue
                    if not await scroll_to_bottom() and view.is_last_page:
                        _console.print("[dim]Already at the last page.[/dim]")
            else:
                for _ in range(pages - 1):
                    if not await scroll_to_bottom():
                        break
        finally:
            presenter.unbind()

        return bool(view.posts) or view.last_error is None


@app.command()
def posts(
    pages: int = typer.Option(1, "--pages", "-p", min=1, help="Pages to load (non-interactive)."),
    interactive: bool = typer.Option(False, "--interactive", "-i", help="Browse page by page."),
    banner: bool = typer.Option(True, "--banner/--no-banner", help="Show the banner."),
) -> None:
    """List posts: the cache first, then page after page from the API."""

    settings = AppSettings()
    if banner:
        print_banner(_console)
    try:
        ok = asyncio.run(_browse_posts(settings, pages=pages, interactive=interactive))
    except BlogSyncError as exc:
        _console.print(f"[red]Could not load posts:[/red] {exc}")
        raise typer.Exit(code=1) from exc
    if not ok:
        raise typer.Exit(code=1)


@app.command()
def post(post_id: int = typer.Argument(..., min=1, help="Post id.")) -> None:
    """Show a cached post with its author and comments."""

    settings = AppSettings()

    async def _run() -> bool:
        async with open_repository(settings) as repository:
            return await _show_detail(repository, post_id)

    try:
        ok = asyncio.run(_run())
    except BlogSyncError as exc:
        _console.print(f"[red]Could not load post {post_id}:[/red] {exc}")
        raise typer.Exit(code=1) from exc
    if not ok:
        raise typer.Exit(code=1)


@app.command()
def users(
    refresh: bool = typer.Option(False, "--refresh", help="Fetch from the API even if cached."),
) -> None:
    """List users."""

    settings = AppSettings()

    async def _run() -> list[User]:
        async with open_repository(settings) as repository:
            return await repository.get_users(refresh=refresh)

    try:
        result = asyncio.run(_run())
    except BlogSyncError as exc:
        _console.print(f"[red]Could not load users:[/red] {exc}")
        raise typer.Exit(code=1) from exc
    _console.print(build_users_table(result))


@app.command()
def comments(
    post_id: Optional[int] = typer.Option(None, "--post-id", min=1, help="Only this post."),
    refresh: bool = typer.Option(False, "--refresh", help="Fetch from the API even if cached."),
) -> None:
    """List comments."""

    settings = AppSettings()

    async def _run() -> list[Comment]:
        async with open_repository(settings) as repository:
            return await repository.get_comments(refresh=refresh)

    try:
        result = asyncio.run(_run())
    except BlogSyncError as exc:
        _console.print(f"[red]Could not load comments:[/red] {exc}")
        raise typer.Exit(code=1) from exc
    if post_id is not None:
        result = [comment for comment in result if comment.post_id == post_id]
    _console.print(build_comments_table(result))


def run() -> None:
    app()
