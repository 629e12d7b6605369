"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from adapters.sqlite_store import BlogDatabase
from core.config import AppSettings, get_user_env_file, write_user_env_vars
from core.errors import StorageError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_api(settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get("/posts", params={"_page": 1, "_limit": 1})
        return response.is_success, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, str(exc) or exc.__class__.__name__


def _check_database(settings: AppSettings) -> tuple[bool, str]:
    path = settings.resolved_database_path()
    try:
        db = BlogDatabase(path)
    except StorageError as exc:
        return False, str(exc)
    try:
        counts = {table: db.count(table) for table in ("posts", "comments", "users")}
    except StorageError as exc:
        return False, str(exc)
    finally:
        db.close()
    summary = ", ".join(f"{count} {table}" for table, count in counts.items())
    return True, f"{path} ({summary})"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="blog-sync Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("API base_url", "OK", settings.api_base_url)
    table.add_row("Page size", "OK", str(settings.page_size))
    env_file = get_user_env_file()
    table.add_row("User config", "OK" if env_file.exists() else "OPTIONAL", str(env_file))

    ok_api, detail_api = asyncio.run(_check_api(settings))
    table.add_row("API connectivity", "OK" if ok_api else "FAIL", detail_api)

    ok_db, detail_db = _check_database(settings)
    table.add_row("SQLite cache", "OK" if ok_db else "FAIL", detail_db)

    _console.print(table)

    if not ok_api:
        _console.print(
            "\n[yellow]Note:[/yellow] cached posts are still served offline; "
            "only load-more and empty collections need the API."
        )
    if not (ok_api and ok_db):
        raise typer.Exit(code=1)


@app.command()
def configure() -> None:
    """Interactive setup (stores config in the user config .env)."""

    current = AppSettings()
    base_url = typer.prompt("API base URL", default=current.api_base_url, show_default=True).strip()
    page_size = typer.prompt("Page size", default=current.page_size, type=int, show_default=True)

    if not base_url.startswith(("http://", "https://")):
        raise typer.BadParameter("base URL must start with http:// or https://")
    if not 1 <= page_size <= 100:
        raise typer.BadParameter("page size must be between 1 and 100")

    env_path = write_user_env_vars(
        {
            "BLOG_SYNC_API_BASE_URL": base_url,
            "BLOG_SYNC_PAGE_SIZE": str(page_size),
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
