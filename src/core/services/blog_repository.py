"""Repository for users, comments and posts.

Each collection is served through `resolve` with its own DAO (local) and API
call (remote). The repository owns the `WriteBehind` that runs the cache
writes, so those outlive any screen that triggered them.
"""

from __future__ import annotations

import logging

from core.domain.models import Comment, Post, PostDetail, User
from core.interfaces.data_sources import LocalStore, RemoteSource
from core.services.sync_policy import WriteBehind, resolve

logger = logging.getLogger(__name__)


class BlogRepository:
    def __init__(
        self,
        post_dao: LocalStore[Post],
        comment_dao: LocalStore[Comment],
        user_dao: LocalStore[User],
        blog_api: RemoteSource,
        *,
        writer: WriteBehind | None = None,
    ) -> None:
        self._post_dao = post_dao
        self._comment_dao = comment_dao
        self._user_dao = user_dao
        self._api = blog_api
        self._writer = writer or WriteBehind()

    @property
    def writer(self) -> WriteBehind:
        return self._writer

    async def get_users(self, refresh: bool = False) -> list[User]:
        return await resolve(
            local=self._user_dao.get_all,
            remote=self._api.fetch_users,
            insert=self._user_dao.insert_all,
            writer=self._writer,
            force_remote=refresh,
            label="users",
        )

    async def get_comments(self, refresh: bool = False) -> list[Comment]:
        return await resolve(
            local=self._comment_dao.get_all,
            remote=self._api.fetch_comments,
            insert=self._comment_dao.insert_all,
            writer=self._writer,
            force_remote=refresh,
            label="comments",
        )

    async def get_posts(self, page: int, limit: int, load_more: bool = False) -> list[Post]:
        """Cached posts, or page `page` of size `limit` from the API.

        `load_more` forces the remote fetch: it is how the list asks for the
        next page once the cache has been shown.
        """

        async def remote() -> list[Post]:
            return await self._api.fetch_posts(page, limit)

        return await resolve(
            local=self._post_dao.get_all,
            remote=remote,
            insert=self._post_dao.insert_all,
            writer=self._writer,
            force_remote=load_more,
            label="posts",
        )

    async def get_post(self, post_id: int) -> Post | None:
        return await self._post_dao.get(post_id)

    async def get_post_detail(self, post_id: int) -> PostDetail | None:
        """Post plus its author and comments, or None for an unknown post."""

        post = await self.get_post(post_id)
        if post is None:
            logger.debug("Post %d is not cached", post_id)
            return None

        users = await self.get_users()
        comments = await self.get_comments()
        author = next((user for user in users if user.id == post.user_id), None)
        return PostDetail(
            post=post,
            author=author,
            comments=[comment for comment in comments if comment.post_id == post.id],
        )

    async def drain(self) -> None:
        await self._writer.drain()
