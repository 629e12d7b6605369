"""Screen states emitted by the posts presenter.

Each load produces `Loading`, then `DataAvailable` or `Error`, then
`FinishedLoading`. `PostSelected` is a pass-through for user selection and is
not part of the fetch cycle.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from core.domain.models import Post


@dataclass(frozen=True)
class Loading:
    """A load has started."""


@dataclass(frozen=True)
class DataAvailable:
    posts: list[Post] = field(default_factory=list)


@dataclass(frozen=True)
class FinishedLoading:
    """Terminal signal of every load, successful or not."""

    last_page: bool = False


@dataclass(frozen=True)
class Error:
    cause: BaseException


@dataclass(frozen=True)
class PostSelected:
    post: Post


PostScreenState = Union[Loading, DataAvailable, FinishedLoading, Error, PostSelected]
