"""Core configuration.

Why here:
- Centralizes environment variables (pydantic-settings) away from the CLI.
- Adapters (HTTP, SQLite) read their settings from one consistent contract.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "blog-sync"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "blog-sync"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "blog-sync"
    return Path.home() / ".config" / "blog-sync"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str]) -> Path:
    """Write or update variables in the user's global .env."""

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        try:
            existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))
        except OSError:
            existing = {}

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# blog-sync user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Application settings.

    One typed contract shared by the CLI and the adapters, validated at the
    edge (environment variables and .env files).
    """

    model_config = SettingsConfigDict(
        env_prefix="BLOG_SYNC_",
        extra="ignore",
        case_sensitive=False,
        # Project .env first (development), then the user's global config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    api_base_url: str = Field(
        default="https://jsonplaceholder.typicode.com",
        min_length=8,
        description="Base URL of the blog API (users, comments, posts).",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Per-request timeout (seconds).",
    )
    user_agent: str = Field(
        default="blog-sync/0.1 (+https://local)",
        min_length=1,
        description="User-Agent sent to the blog API.",
    )

    page_size: int = Field(
        default=20,
        ge=1,
        le=100,
        description="Number of posts requested per page.",
    )
    database_path: Path | None = Field(
        default=None,
        description="SQLite cache file. Defaults to <user config dir>/blog.db.",
    )

    log_level: str = Field(
        default="WARNING",
        min_length=1,
        description="Logging level for the CLI (DEBUG, INFO, WARNING, ...).",
    )

    def resolved_database_path(self) -> Path:
        return self.database_path or get_user_config_dir() / "blog.db"
