"""Page bookkeeping for the posts list."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class PaginationState:
    """Immutable snapshot of the paging progress of one screen.

    The presenter never mutates it: each transition builds a new value and
    swaps it in, so a stale snapshot can be detected by identity.
    """

    page: int = 1
    limit: int = 20
    previous_count: int = 0
    is_loading: bool = False
    is_last_page: bool = False

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError(f"page must be >= 1, got {self.page}")
        if self.limit < 1:
            raise ValueError(f"limit must be > 0, got {self.limit}")
        if self.previous_count < 0:
            raise ValueError(f"previous_count must be >= 0, got {self.previous_count}")

    def start_loading(self) -> PaginationState:
        return replace(self, is_loading=True)

    def settle(self) -> PaginationState:
        """State after a failed load: only the loading flag changes."""

        return replace(self, is_loading=False)

    def advance(self, received: int, *, load_more: bool) -> PaginationState:
        """State after a successful load that returned `received` items.

        The page only moves when something came back:
        - load-more pages are remote pages, so they advance one by one;
        - a plain load may be served from the cache, so the page is realigned
          with however many items the cache already holds.

        The last-page flag is evaluated on the page *after* this adjustment.
        """

        page = self.page
        if received:
            page = page + 1 if load_more else received // self.limit + 1
        return replace(
            self,
            page=page,
            previous_count=received,
            is_loading=False,
            is_last_page=page > 1 and received == 0,
        )
