"""SQLite cache for users, comments and posts.

Layout:
- One table per collection: `id INTEGER PRIMARY KEY, payload TEXT`.
- `payload` is the model serialized with its wire aliases, so a stored row
  validates exactly like an API item.

`sqlite3` is blocking: DAO calls run in `asyncio.to_thread` and share one
connection guarded by a lock.
"""

from __future__ import annotations

import asyncio
import logging
import sqlite3
import threading
from pathlib import Path
from typing import ClassVar, Generic, Sequence, TypeVar

from pydantic import BaseModel, ValidationError

from core.domain.models import Comment, Post, User
from core.errors import StorageError

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

_TABLES = ("users", "comments", "posts")


class BlogDatabase:
    """Connection to the cache file (or `:memory:`)."""

    def __init__(self, db_path: str | Path = ":memory:") -> None:
        self.db_path = str(db_path)
        try:
            if self.db_path != ":memory:":
                Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
            self.conn = sqlite3.connect(self.db_path, check_same_thread=False)
        except (OSError, sqlite3.Error) as exc:
            raise StorageError(f"cannot open database {self.db_path}: {exc}") from exc
        self.lock = threading.Lock()
        try:
            self._init_db()
        except sqlite3.Error as exc:
            self.conn.close()
            raise StorageError(f"cannot initialize database {self.db_path}: {exc}") from exc
        logger.debug("Database ready at %s", self.db_path)

    def _init_db(self) -> None:
        with self.lock, self.conn:
            for table in _TABLES:
                self.conn.execute(
                    f"CREATE TABLE IF NOT EXISTS {table} ("
                    "id INTEGER PRIMARY KEY, "
                    "payload TEXT NOT NULL)"
                )

    def close(self) -> None:
        with self.lock:
            self.conn.close()

    def count(self, table: str) -> int:
        if table not in _TABLES:
            raise ValueError(f"unknown table {table!r}")
        with self.lock:
            try:
                row = self.conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()
            except sqlite3.Error as exc:
                raise StorageError(f"cannot count {table}: {exc}") from exc
        return int(row[0])


class _Dao(Generic[M]):
    table: ClassVar[str]
    model: ClassVar[type[BaseModel]]

    def __init__(self, db: BlogDatabase) -> None:
        self._db = db

    async def get_all(self) -> list[M]:
        return await asyncio.to_thread(self._get_all)

    async def insert_all(self, items: Sequence[M]) -> None:
        await asyncio.to_thread(self._insert_all, list(items))

    async def get(self, item_id: int) -> M | None:
        return await asyncio.to_thread(self._get, item_id)

    def _get_all(self) -> list[M]:
        with self._db.lock:
            try:
                rows = self._db.conn.execute(
                    f"SELECT payload FROM {self.table} ORDER BY id"
                ).fetchall()
            except sqlite3.Error as exc:
                raise StorageError(f"cannot read {self.table}: {exc}") from exc
        return [self._decode(payload) for (payload,) in rows]

    def _insert_all(self, items: list[M]) -> None:
        if not items:
            return
        rows = [(item.id, item.model_dump_json(by_alias=True)) for item in items]  # type: ignore[attr-defined]
        with self._db.lock:
            try:
                with self._db.conn:
                    self._db.conn.executemany(
                        f"INSERT OR REPLACE INTO {self.table} (id, payload) VALUES (?, ?)",
                        rows,
                    )
            except sqlite3.Error as exc:
                raise StorageError(f"cannot write {self.table}: {exc}") from exc
        logger.debug("Stored %d rows in %s", len(rows), self.table)

    def _get(self, item_id: int) -> M | None:
        with self._db.lock:
            try:
                row = self._db.conn.execute(
                    f"SELECT payload FROM {self.table} WHERE id = ?",
                    (item_id,),
                ).fetchone()
            except sqlite3.Error as exc:
                raise StorageError(f"cannot read {self.table}/{item_id}: {exc}") from exc
        if row is None:
            return None
        return self._decode(row[0])

    def _decode(self, payload: str) -> M:
        try:
            return self.model.model_validate_json(payload)  # type: ignore[return-value]
        except ValidationError as exc:
            raise StorageError(f"corrupt row in {self.table}: {exc}") from exc


class UserDao(_Dao[User]):
    table = "users"
    model = User


class CommentDao(_Dao[Comment]):
    table = "comments"
    model = Comment


class PostDao(_Dao[Post]):
    table = "posts"
    model = Post
