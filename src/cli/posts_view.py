"""Terminal rendering of the posts screen."""

from __future__ import annotations

import logging
from typing import Callable

from rich.console import Console

from cli.ui_components import build_posts_table
from core.domain.models import Post
from core.domain.screen_state import (
    DataAvailable,
    Error,
    FinishedLoading,
    Loading,
    PostScreenState,
    PostSelected,
)

logger = logging.getLogger(__name__)

LOAD_POSTS_ERROR_MESSAGE = "Could not load posts. Check your connection and try again."


class ConsolePostsView:
    """`PostsView` that prints to a Rich console.

    Tracks the two flags the scroll guard consults (`is_loading`,
    `is_last_page`) and the posts shown so far.
    """

    def __init__(
        self,
        console: Console,
        *,
        navigate: Callable[[int], None] | None = None,
    ) -> None:
        self._console = console
        self._navigate = navigate
        self.posts: list[Post] = []
        self.is_loading = False
        self.is_last_page = False
        self.last_error: BaseException | None = None

    def render(self, state: PostScreenState) -> None:
        if isinstance(state, Loading):
            self.is_loading = True
            self.last_error = None
            self._console.print("[dim]Loading posts…[/dim]")
        elif isinstance(state, DataAvailable):
            self._show_posts(state.posts)
        elif isinstance(state, Error):
            self._show_error(state.cause)
        elif isinstance(state, FinishedLoading):
            self.is_loading = False
            self.is_last_page = state.last_page
            if state.last_page:
                self._console.print("[dim]No more posts.[/dim]")
        elif isinstance(state, PostSelected):
            if self._navigate is not None:
                self._navigate(state.post.id)
        else:  # pragma: no cover
            logger.warning("Unknown screen state: %r", state)

    def _show_posts(self, posts: list[Post]) -> None:
        if not posts:
            return
        start = len(self.posts)
        self.posts.extend(posts)
        self._console.print(
            build_posts_table(posts, title=f"Posts {start + 1}-{len(self.posts)}")
        )

    def _show_error(self, cause: BaseException) -> None:
        self.last_error = cause
        self._console.print(f"[red]{LOAD_POSTS_ERROR_MESSAGE}[/red]")
