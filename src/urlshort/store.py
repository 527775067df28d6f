"""Persistent key-value store of redirects, backed by SQLite.

One bucket (a table) holds ``path -> url`` pairs as UTF-8 blobs. The
store is only touched at startup: it is opened with a bounded lock
timeout, seeded if the bucket is new, read into memory, and closed.

Blocking sqlite3 calls run in a worker thread via ``anyio.to_thread``
so startup can share an event loop with other async work.
"""

import logging
import sqlite3
from collections.abc import Callable
from typing import Any

import anyio.to_thread

from urlshort.errors import StoreError
from urlshort.mapping import RedirectMap, freeze_map, has_control_characters

logger = logging.getLogger("urlshort.store")

DEFAULT_BUCKET = "URLRedirects"
DEFAULT_TIMEOUT = 10.0

# Written once, when the bucket is first created
SEED_PATH = "/urlshort-bolt"
SEED_URL = "https://github.com/bcpoole/urlshort"


def _run_sync(func: Callable[..., Any], *args: Any) -> Any:
    """Run blocking call in anyio worker thread."""
    return anyio.to_thread.run_sync(func, *args)


class RedirectStore:
    """An open store file with one redirect bucket.

    Use :meth:`open` rather than the constructor::

        async with await RedirectStore.open("bolt.db") as store:
            redirects = await store.snapshot()
    """

    __slots__ = ("_conn", "bucket", "path")

    def __init__(self, conn: sqlite3.Connection, path: str, bucket: str) -> None:
        self._conn = conn
        self.path = path
        self.bucket = bucket

    @classmethod
    async def open(
        cls,
        path: str,
        *,
        bucket: str = DEFAULT_BUCKET,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> "RedirectStore":
        """Open (creating if absent) the store file at *path*.

        *timeout* bounds how long to wait for a lock held by another
        process using the same file.

        Raises:
            StoreError: The file cannot be opened or is not a store.
        """
        if not bucket.isidentifier():
            msg = f"invalid bucket name {bucket!r}"
            raise StoreError(msg)
        try:
            conn = await _run_sync(
                lambda: sqlite3.connect(
                    path, timeout=timeout, autocommit=True, check_same_thread=False
                )
            )
        except sqlite3.Error as exc:
            msg = f"cannot open store {path!r}: {exc}"
            raise StoreError(msg) from exc
        return cls(conn, path, bucket)

    async def __aenter__(self) -> "RedirectStore":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()

    # -- Bucket lifecycle --

    async def ensure_bucket(self) -> bool:
        """Create and seed the bucket if it does not exist.

        Runs under an immediate write lock so two processes opening a
        fresh file cannot both seed it. Returns True if the bucket was
        created by this call.
        """
        return await self._call(self._ensure_bucket_sync)

    def _ensure_bucket_sync(self) -> bool:
        conn = self._conn
        conn.execute("BEGIN IMMEDIATE")
        try:
            row = conn.execute(
                "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = ?",
                (self.bucket,),
            ).fetchone()
            if row is not None:
                conn.execute("COMMIT")
                return False
            conn.execute(
                f'CREATE TABLE "{self.bucket}" (key BLOB PRIMARY KEY, value BLOB NOT NULL)'
            )
            conn.execute(
                f'INSERT INTO "{self.bucket}" (key, value) VALUES (?, ?)',
                (SEED_PATH.encode("utf-8"), SEED_URL.encode("utf-8")),
            )
            conn.execute("COMMIT")
        except BaseException:
            conn.execute("ROLLBACK")
            raise
        logger.info("Created bucket %s in %s", self.bucket, self.path)
        return True

    # -- Key-value access --

    async def get(self, key: str) -> str | None:
        """Return the URL stored for *key*, or None."""

        def _get() -> str | None:
            row = self._conn.execute(
                f'SELECT value FROM "{self.bucket}" WHERE key = ?',
                (key.encode("utf-8"),),
            ).fetchone()
            return None if row is None else _decode(row[0])

        return await self._call(_get)

    async def put(self, key: str, value: str) -> None:
        """Store *value* under *key*, replacing any previous value."""
        await self._call(
            lambda: self._conn.execute(
                f'INSERT OR REPLACE INTO "{self.bucket}" (key, value) VALUES (?, ?)',
                (key.encode("utf-8"), value.encode("utf-8")),
            )
        )

    async def items(self) -> list[tuple[str, str]]:
        """Every ``(key, value)`` pair in the bucket, in key order."""

        def _items() -> list[tuple[str, str]]:
            rows = self._conn.execute(
                f'SELECT key, value FROM "{self.bucket}" ORDER BY key'
            ).fetchall()
            return [(_decode(key), _decode(value)) for key, value in rows]

        return await self._call(_items)

    async def snapshot(self) -> RedirectMap:
        """Read the whole bucket into a read-only in-memory mapping."""
        items = await self.items()
        for key, value in items:
            if has_control_characters(key) or has_control_characters(value):
                msg = f"store {self.path!r}: entry {key!r} contains control characters"
                raise StoreError(msg)
        return freeze_map(dict(items))

    async def close(self) -> None:
        await _run_sync(self._conn.close)

    async def _call(self, func: Callable[[], Any]) -> Any:
        try:
            return await _run_sync(func)
        except (sqlite3.Error, UnicodeDecodeError) as exc:
            msg = f"store {self.path!r}: {exc}"
            raise StoreError(msg) from exc


def _decode(value: bytes | str) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return value


async def load_store(
    path: str,
    *,
    bucket: str = DEFAULT_BUCKET,
    timeout: float = DEFAULT_TIMEOUT,
) -> RedirectMap:
    """Open *path*, seed it if new, and return its full snapshot.

    The store is closed before returning; nothing reads it afterwards.
    """
    async with await RedirectStore.open(path, bucket=bucket, timeout=timeout) as store:
        await store.ensure_bucket()
        redirects = await store.snapshot()
    logger.debug("Loaded %d redirect(s) from %s", len(redirects), path)
    return redirects
