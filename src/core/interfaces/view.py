"""Contract of the presentation layer."""

from __future__ import annotations

from typing import Protocol

from core.domain.screen_state import PostScreenState


class PostsView(Protocol):
    """Renders the states produced by `PostsPresenter`.

    `render` is always called from the event loop thread, in the order the
    states were produced.
    """

    def render(self, state: PostScreenState) -> None:
        ...
