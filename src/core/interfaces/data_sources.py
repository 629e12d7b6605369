"""Contracts of the data layer collaborators.

Why Protocol:
- Structural contracts (duck typing) without rigid inheritance.
- The HTTP client, the SQLite DAOs and the test doubles are interchangeable
  without coupling the Core to a concrete implementation.
"""

from __future__ import annotations

from typing import Protocol, Sequence, TypeVar, runtime_checkable

from core.domain.models import Comment, Post, User

T = TypeVar("T")


@runtime_checkable
class RemoteSource(Protocol):
    """Blog API. Every method raises `NetworkError` on failure."""

    async def fetch_users(self) -> list[User]:
        ...

    async def fetch_comments(self) -> list[Comment]:
        ...

    async def fetch_posts(self, page: int, limit: int) -> list[Post]:
        ...


@runtime_checkable
class LocalStore(Protocol[T]):
    """Per-collection cache. Every method raises `StorageError` on failure.

    `insert_all` is an upsert: duplicate ids replace the stored record.
    """

    async def get_all(self) -> list[T]:
        ...

    async def insert_all(self, items: Sequence[T]) -> None:
        ...

    async def get(self, item_id: int) -> T | None:
        ...


class PostsProvider(Protocol):
    """What the posts presenter needs from the repository."""

    async def get_posts(self, page: int, limit: int, load_more: bool = False) -> list[Post]:
        ...
