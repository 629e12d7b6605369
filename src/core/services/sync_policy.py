"""Local-first fetch policy shared by every collection.

The same routine serves users, comments and posts: the collection is chosen
by the three callables passed in (`local`, `remote`, `insert`), not by the
routine itself.

Rules:
- A non-empty cache wins unless the caller forces a remote fetch.
- At most one remote fetch per call and no retries.
- The remote result is the complete answer; persisting it is a background
  write that never fails (nor delays) the read.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Sequence, TypeVar

from core.errors import NetworkError, StorageError

logger = logging.getLogger(__name__)

T = TypeVar("T")

ErrorReporter = Callable[[BaseException], None]


class WriteBehind:
    """Owner of fire-and-forget persistence tasks.

    Holds a strong reference to every pending task (the event loop only keeps
    weak ones) and routes failures to the log plus an optional reporter.
    Tasks are never cancelled from here; `drain` waits for them.
    """

    def __init__(self, reporter: ErrorReporter | None = None) -> None:
        self._reporter = reporter
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def spawn(self, write: Awaitable[None], *, label: str) -> asyncio.Task[None]:
        async def run() -> None:
            await write

        task = asyncio.get_running_loop().create_task(run(), name=f"write-behind:{label}")
        self._tasks.add(task)
        task.add_done_callback(self._finished)
        return task

    def _finished(self, task: asyncio.Task[None]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is None:
            return
        logger.error("Background write %s failed", task.get_name(), exc_info=exc)
        if self._reporter is not None:
            self._reporter(exc)

    async def drain(self) -> None:
        """Wait until every pending write has finished (successfully or not)."""

        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)


async def resolve(
    *,
    local: Callable[[], Awaitable[list[T]]],
    remote: Callable[[], Awaitable[list[T]]],
    insert: Callable[[Sequence[T]], Awaitable[None]],
    writer: WriteBehind,
    force_remote: bool = False,
    label: str = "collection",
) -> list[T]:
    """Serve `local()` or fall through to `remote()` and persist the result.

    Raises:
        StorageError: reading the cache failed (remote is not attempted).
        NetworkError: the remote fetch failed (the cache is left untouched).
    """

    try:
        cached = await local()
    except StorageError:
        raise
    except Exception as exc:
        raise StorageError(f"failed to read cached {label}: {exc}") from exc

    if cached and not force_remote:
        logger.debug("Serving %d cached %s", len(cached), label)
        return cached

    try:
        fresh = await remote()
    except NetworkError:
        raise
    except Exception as exc:
        raise NetworkError(f"failed to fetch {label}: {exc}") from exc

    logger.debug(
        "Fetched %d %s remotely (cache had %d, forced=%s)",
        len(fresh),
        label,
        len(cached),
        force_remote,
    )
    writer.spawn(insert(fresh), label=label)
    return fresh
