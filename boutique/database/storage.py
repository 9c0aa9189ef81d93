"""
database/storage.py

Whole-collection key/value store on top of a single SQLite table.

Every logical collection (products, customers, orders, expenses and the
`initialized` flag) is one row whose payload is the JSON-encoded list of
records. Callers read the full collection, build the new list and write it
back in one `put`; there is no per-record update.

Public API
----------
- CollectionStore(conn)
    .get(name) -> list[dict]
    .put(name, records) -> None
    .transaction()  (context manager; nested use joins the outer one)
    .close()
- open_store(db_path) -> CollectionStore
"""

from __future__ import annotations

import json
import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from ..constants import TABLE_COLLECTIONS
from ..errors import StorageUnavailableError
from .schema import apply_schema

__all__ = ["CollectionStore", "open_store"]

_log = logging.getLogger(__name__)


class CollectionStore:
    """
    Read/write whole collections of JSON records.

    The connection must be in autocommit mode (isolation_level=None); this
    class issues BEGIN/COMMIT/ROLLBACK itself so a multi-collection mutation
    either lands completely or not at all.
    """

    def __init__(self, conn: sqlite3.Connection):
        conn.isolation_level = None
        self.conn = conn
        self._depth = 0

    # --- contract ----------------------------------------------------------

    def get(self, name: str) -> list[dict]:
        """Return the stored records for `name` (empty list when never written)."""
        try:
            row = self.conn.execute(
                f"SELECT payload FROM {TABLE_COLLECTIONS} WHERE name=?", (name,)
            ).fetchone()
        except sqlite3.Error as e:
            _log.error("read of collection %r failed: %s", name, e)
            raise StorageUnavailableError(f"Could not read '{name}'.") from e
        if row is None:
            return []
        data = json.loads(row[0])
        return data if isinstance(data, list) else [data]

    def put(self, name: str, records: list[dict]) -> None:
        """Replace the whole collection `name` with `records`."""
        payload = json.dumps(list(records), ensure_ascii=False)
        try:
            self.conn.execute(
                f"INSERT INTO {TABLE_COLLECTIONS}(name, payload) VALUES (?, ?) "
                f"ON CONFLICT(name) DO UPDATE SET payload=excluded.payload",
                (name, payload),
            )
        except sqlite3.Error as e:
            _log.error("write of collection %r failed: %s", name, e)
            raise StorageUnavailableError(f"Could not write '{name}'.") from e

    def has(self, name: str) -> bool:
        try:
            row = self.conn.execute(
                f"SELECT 1 FROM {TABLE_COLLECTIONS} WHERE name=?", (name,)
            ).fetchone()
        except sqlite3.Error as e:
            raise StorageUnavailableError(f"Could not read '{name}'.") from e
        return row is not None

    # --- transactions ------------------------------------------------------

    @contextmanager
    def transaction(self) -> Iterator["CollectionStore"]:
        """
        Group reads and writes of one logical operation.

        Only the outermost block talks to SQLite; any exception rolls every
        write in the block back and propagates unchanged.
        """
        if self._depth:
            self._depth += 1
            try:
                yield self
            finally:
                self._depth -= 1
            return

        try:
            self.conn.execute("BEGIN IMMEDIATE")
        except sqlite3.Error as e:
            raise StorageUnavailableError("Could not start a transaction.") from e

        self._depth = 1
        try:
            yield self
        except BaseException:
            self._depth = 0
            try:
                self.conn.execute("ROLLBACK")
            except sqlite3.Error as e:
                _log.error("rollback failed: %s", e)
            raise
        else:
            self._depth = 0
            try:
                self.conn.execute("COMMIT")
            except sqlite3.Error as e:
                _log.error("commit failed: %s", e)
                try:
                    self.conn.execute("ROLLBACK")
                except sqlite3.Error as rb_err:
                    _log.error("rollback after failed commit failed: %s", rb_err)
                raise StorageUnavailableError("Could not commit changes.") from e

    @property
    def in_transaction(self) -> bool:
        return self._depth > 0

    def close(self) -> None:
        self.conn.close()


def open_store(db_path: Path | str) -> CollectionStore:
    """
    Open (creating if needed) the SQLite file at `db_path` and return a store.
    Pass ":memory:" for a throwaway store.
    """
    if str(db_path) != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    try:
        conn = sqlite3.connect(str(db_path), isolation_level=None)
        if str(db_path) != ":memory:":
            conn.execute("PRAGMA journal_mode = WAL;")
        apply_schema(conn)
    except sqlite3.Error as e:
        raise StorageUnavailableError(f"Could not open store at {db_path!s}.") from e
    return CollectionStore(conn)
