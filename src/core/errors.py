"""Error taxonomy of the data layer.

Adapters translate library exceptions (sqlite3, httpx, pydantic) into these
types at the boundary, so the Core only ever reasons about:

- `StorageError`: the local cache could not be read or written.
- `NetworkError`: the remote API could not be reached or returned garbage.
"""

from __future__ import annotations


class BlogSyncError(Exception):
    """Base class for every error raised by the data layer."""


class StorageError(BlogSyncError):
    """Local store read/write failure."""


class NetworkError(BlogSyncError):
    """Remote fetch failure (transport, HTTP status or payload)."""


class PaginationConflictError(BlogSyncError):
    """A load completed after its starting page state had been replaced.

    Raised when two loads run concurrently for the same screen; the late
    completion is discarded instead of overwriting the newer state.
    """
