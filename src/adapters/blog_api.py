"""Blog API adapter (JSONPlaceholder-style REST endpoints).

Endpoints:
- GET /users
- GET /comments
- GET /posts?_page=<page>&_limit=<limit>

Everything that can go wrong on the way (transport, HTTP status, invalid
JSON, payloads that do not validate) surfaces as `NetworkError`.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.models import Comment, Post, User
from core.errors import NetworkError

logger = logging.getLogger(__name__)

M = TypeVar("M")

_USERS = TypeAdapter(list[User])
_COMMENTS = TypeAdapter(list[Comment])
_POSTS = TypeAdapter(list[Post])


class BlogApi:
    """Remote source for users, comments and posts."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._client = client or build_async_client(self._settings)

    async def __aenter__(self) -> BlogApi:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch_users(self) -> list[User]:
        return await self._get_list("/users", _USERS)

    async def fetch_comments(self) -> list[Comment]:
        return await self._get_list("/comments", _COMMENTS)

    async def fetch_posts(self, page: int, limit: int) -> list[Post]:
        """Page `page` (1-based) of `limit` posts; an empty list past the end."""

        return await self._get_list("/posts", _POSTS, params={"_page": page, "_limit": limit})

    async def _get_list(
        self,
        path: str,
        adapter: TypeAdapter[list[M]],
        *,
        params: dict[str, Any] | None = None,
    ) -> list[M]:
        try:
            resp = await self._client.get(path, params=params)
            resp.raise_for_status()
            payload = resp.json()
        except httpx.HTTPStatusError as exc:
            raise NetworkError(f"GET {path} returned HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            raise NetworkError(f"GET {path} failed: {exc}") from exc
        except ValueError as exc:
            raise NetworkError(f"GET {path} returned invalid JSON") from exc

        try:
            items = adapter.validate_python(payload)
        except ValidationError as exc:
            raise NetworkError(f"GET {path} returned an unexpected payload: {exc}") from exc

        logger.debug("GET %s params=%s -> %d items", path, params, len(items))
        return items
