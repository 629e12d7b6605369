"""Pytest configuration and shared fixtures.

`src/` is put on the path by `pythonpath` in pyproject.toml; this module
only provides builders and test doubles for the data layer.
"""

from __future__ import annotations

from typing import Iterator

import pytest

from adapters.sqlite_store import BlogDatabase, CommentDao, PostDao, UserDao
from core.domain.models import Comment, Post, User
from core.domain.screen_state import PostScreenState


def make_posts(count: int, *, start: int = 1, user_id: int = 1) -> list[Post]:
    return [
        Post(id=i, user_id=user_id, title=f"Post {i}", body=f"Body of post {i}")
        for i in range(start, start + count)
    ]


def make_user(user_id: int = 1) -> User:
    return User(
        id=user_id,
        name=f"User {user_id}",
        username=f"user{user_id}",
        email=f"user{user_id}@example.com",
    )


def make_comment(comment_id: int, post_id: int) -> Comment:
    return Comment(
        id=comment_id,
        post_id=post_id,
        name=f"Comment {comment_id}",
        email=f"reader{comment_id}@example.com",
        body=f"Comment {comment_id} on post {post_id}",
    )


class RecordingView:
    """PostsView that keeps every rendered state."""

    def __init__(self) -> None:
        self.states: list[PostScreenState] = []

    def render(self, state: PostScreenState) -> None:
        self.states.append(state)

    def kinds(self) -> list[str]:
        return [type(state).__name__ for state in self.states]

    def clear(self) -> None:
        self.states.clear()


class FakeBlogApi:
    """In-memory RemoteSource that counts calls.

    `posts_by_page` maps a page number to the posts returned for it; pages
    not listed come back empty. Setting `error` makes every call fail.
    """

    def __init__(
        self,
        *,
        users: list[User] | None = None,
        comments: list[Comment] | None = None,
        posts_by_page: dict[int, list[Post]] | None = None,
    ) -> None:
        self.users = users or []
        self.comments = comments or []
        self.posts_by_page = posts_by_page or {}
        self.error: Exception | None = None
        self.user_calls = 0
        self.comment_calls = 0
        self.post_calls: list[tuple[int, int]] = []

    async def fetch_users(self) -> list[User]:
        self.user_calls += 1
        if self.error:
            raise self.error
        return list(self.users)

    async def fetch_comments(self) -> list[Comment]:
        self.comment_calls += 1
        if self.error:
            raise self.error
        return list(self.comments)

    async def fetch_posts(self, page: int, limit: int) -> list[Post]:
        self.post_calls.append((page, limit))
        if self.error:
            raise self.error
        return list(self.posts_by_page.get(page, []))[:limit]

    async def aclose(self) -> None:
        return None


@pytest.fixture
def db() -> Iterator[BlogDatabase]:
    """In-memory cache database."""
    database = BlogDatabase(":memory:")
    yield database
    database.close()


@pytest.fixture
def post_dao(db: BlogDatabase) -> PostDao:
    return PostDao(db)


@pytest.fixture
def comment_dao(db: BlogDatabase) -> CommentDao:
    return CommentDao(db)


@pytest.fixture
def user_dao(db: BlogDatabase) -> UserDao:
    return UserDao(db)


@pytest.fixture
def fake_api() -> FakeBlogApi:
    return FakeBlogApi()


@pytest.fixture
def view() -> RecordingView:
    return RecordingView()

