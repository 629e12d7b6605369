"""Presenter of the posts list.

Drives `get_posts` page after page and turns every outcome into screen
states for the bound view. The page bookkeeping lives in a single
`PaginationState` value that is swapped, never mutated.
"""

from __future__ import annotations

import asyncio
import logging

from core.domain.models import Post
from core.domain.pagination import PaginationState
from core.domain.screen_state import (
    DataAvailable,
    Error,
    FinishedLoading,
    Loading,
    PostScreenState,
    PostSelected,
)
from core.errors import PaginationConflictError
from core.interfaces.data_sources import PostsProvider
from core.interfaces.view import PostsView

logger = logging.getLogger(__name__)


class PostsPresenter:
    def __init__(self, posts: PostsProvider, *, page_size: int = 20) -> None:
        self._posts = posts
        self._page_size = page_size
        self._state = PaginationState(limit=page_size)
        self._view: PostsView | None = None
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def state(self) -> PaginationState:
        return self._state

    def bind(self, view: PostsView) -> asyncio.Task[None]:
        """Attach a screen and start its initial (cache-first) load.

        Loads still running for a previous screen are cancelled first.
        """

        self._cancel_loads()
        self._view = view
        self._state = PaginationState(limit=self._page_size)
        return self.load_posts()

    def unbind(self) -> None:
        """Detach the screen and cancel its outstanding loads.

        Cache writes already spawned by the repository are not affected.
        """

        self._cancel_loads()
        self._view = None

    def show_details(self, post: Post) -> None:
        self._render(PostSelected(post))

    def load_posts(self, load_more: bool = False) -> asyncio.Task[None]:
        """Start loading a page.

        `Loading` is rendered before this returns; the rest of the states
        arrive when the returned task completes.

        Args:
            load_more: fetch the next page from the API instead of serving
                the cache.
        """

        started = self._state.start_loading()
        self._state = started
        self._render(Loading())

        task = asyncio.get_running_loop().create_task(self._load(started, load_more))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _load(self, started: PaginationState, load_more: bool) -> None:
        try:
            posts = await self._posts.get_posts(started.page, started.limit, load_more)
        except Exception as exc:
            logger.warning("Loading page %d failed: %s", started.page, exc)
            self._swap(started, started.settle())
            self._fail(exc)
            return

        if not self._swap(started, started.advance(len(posts), load_more=load_more)):
            logger.warning("Discarding page %d: a concurrent load replaced its state", started.page)
            self._fail(PaginationConflictError(f"page {started.page} was loaded concurrently"))
            return

        self._render(DataAvailable(posts))
        self._render(FinishedLoading(self._state.is_last_page))

    def _cancel_loads(self) -> None:
        for task in list(self._tasks):
            task.cancel()
        self._tasks.clear()

    def _swap(self, expected: PaginationState, new: PaginationState) -> bool:
        if self._state is not expected:
            return False
        self._state = new
        return True

    def _fail(self, cause: BaseException) -> None:
        self._render(Error(cause))
        self._render(FinishedLoading(self._state.is_last_page))

    def _render(self, state: PostScreenState) -> None:
        if self._view is not None:
            self._view.render(state)
