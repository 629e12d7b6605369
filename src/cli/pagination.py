"""Scroll guard for the posts list.

The presenter does not queue requests: whoever asks for the next page must
check first that no load is running and that the last page has not been
reached. In the terminal, "scrolling" is the user asking for more rows.
"""

from __future__ import annotations

from typing import Callable


class PaginationListener:
    """Calls `load_more` when the end of the list is visible.

    Args:
        load_more: triggers the next page.
        is_loading: true while a load is in flight.
        is_last_page: true once the API ran out of pages.
    """

    def __init__(
        self,
        *,
        load_more: Callable[[], object],
        is_loading: Callable[[], bool],
        is_last_page: Callable[[], bool],
    ) -> None:
        self._load_more = load_more
        self._is_loading = is_loading
        self._is_last_page = is_last_page

    def on_scrolled(self, *, visible_count: int, first_visible: int, total_count: int) -> bool:
        """Return True when a new page was requested."""

        if self._is_loading() or self._is_last_page():
            return False
        if first_visible < 0 or visible_count + first_visible < total_count:
            return False
        self._load_more()
        return True
