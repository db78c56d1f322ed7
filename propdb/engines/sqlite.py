"""Single-file engine on SQLite."""

from __future__ import annotations

import os
import sqlite3
from pathlib import Path

from propdb.core.models import Datum
from propdb.engines.base import missing_key_error, translate_error

_SCHEMA = """
CREATE TABLE IF NOT EXISTS props (
    key BLOB PRIMARY KEY,
    value BLOB NOT NULL
);
"""

_Params = tuple[bytes | None, ...]


class SqliteEngine:
    """Engine backed by the stdlib ``sqlite3`` module.

    Keys are iterated in rowid order, which is insertion order until rows
    are deleted and their rowids reused.
    """

    name = "sqlite"
    owns_datums = False
    primary_ext = None
    secondary_ext = None
    auxiliary_exts = ("-journal",)

    def is_available(self) -> bool:
        return True

    def open(self, path: Path, read_only: bool, mode: int) -> sqlite3.Connection:
        # Handles may move between threads as long as callers serialize them.
        try:
            if read_only:
                conn = sqlite3.connect(
                    f"{path.resolve().as_uri()}?mode=ro", uri=True, check_same_thread=False
                )
            else:
                # Create the file ourselves so it gets the requested permissions.
                os.close(os.open(path, os.O_RDWR | os.O_CREAT, mode))
                conn = sqlite3.connect(path, check_same_thread=False)
                try:
                    conn.executescript(_SCHEMA)
                except sqlite3.Error:
                    conn.close()
                    raise
        except (OSError, sqlite3.Error) as e:
            raise translate_error(self.name, e) from e
        return conn

    def close(self, native: sqlite3.Connection) -> None:
        native.close()

    def fetch(self, native: sqlite3.Connection, key: Datum) -> Datum:
        return self._one(native, "SELECT value FROM props WHERE key = ?", (key.data,))

    def store(self, native: sqlite3.Connection, key: Datum, value: Datum) -> None:
        self._write(
            native,
            """
            INSERT INTO props (key, value) VALUES (?, ?)
            ON CONFLICT(key) DO UPDATE SET value = excluded.value
            """,
            (key.data, value.data),
        )

    def delete(self, native: sqlite3.Connection, key: Datum) -> None:
        if self._write(native, "DELETE FROM props WHERE key = ?", (key.data,)) == 0:
            raise missing_key_error(self.name, key)

    def exists(self, native: sqlite3.Connection, key: Datum) -> bool:
        return bool(self.fetch(native, key))

    def first_key(self, native: sqlite3.Connection) -> Datum:
        return self._one(native, "SELECT key FROM props ORDER BY rowid LIMIT 1", ())

    def next_key(self, native: sqlite3.Connection, key: Datum) -> Datum:
        if key.data is None:
            return Datum()
        return self._one(
            native,
            """
            SELECT key FROM props
            WHERE rowid > (SELECT rowid FROM props WHERE key = ?)
            ORDER BY rowid
            LIMIT 1
            """,
            (key.data,),
        )

    def free_datum(self, datum: Datum) -> None:
        pass

    def _one(self, native: sqlite3.Connection, sql: str, params: _Params) -> Datum:
        try:
            row = native.execute(sql, params).fetchone()
        except sqlite3.OperationalError as e:
            # A read-only open of a file without our table has no properties.
            if "no such table" in str(e):
                return Datum()
            raise translate_error(self.name, e) from e
        except sqlite3.Error as e:
            raise translate_error(self.name, e) from e
        return Datum(row[0] if row is not None else None)

    def _write(self, native: sqlite3.Connection, sql: str, params: _Params) -> int:
        """Run one modifying statement and commit; returns the row count."""
        try:
            cursor = native.execute(sql, params)
            native.commit()
        except sqlite3.Error as e:
            err = translate_error(self.name, e)
            try:
                native.rollback()
            except sqlite3.Error:
                pass  # the original failure is what gets reported
            raise err from e
        return cursor.rowcount
