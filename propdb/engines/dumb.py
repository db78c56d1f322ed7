"""Two-file engine on ``dbm.dumb``.

A database named ``base`` lives in ``base.dir`` (the key index) and
``base.dat`` (the value pages). The index is rewritten after every
modification so a later reader sees the change without a close.
"""

from __future__ import annotations

import dbm.dumb
from pathlib import Path
from typing import Any

from propdb.core.models import Datum
from propdb.engines.base import missing_key_error, translate_error


class DumbFile:
    """An open dumb database plus its iteration snapshot."""

    __slots__ = ("db", "_order", "_positions")

    def __init__(self, db: Any) -> None:
        self.db = db
        self._order: list[bytes] = []
        self._positions: dict[bytes, int] = {}

    def rescan(self) -> bytes | None:
        self._order = list(self.db.keys())
        self._positions = {key: i for i, key in enumerate(self._order)}
        return self._order[0] if self._order else None

    def after(self, key: bytes) -> bytes | None:
        i = self._positions.get(key)
        if i is None or i + 1 >= len(self._order):
            return None
        return self._order[i + 1]


class DumbEngine:
    """Engine backed by the pure-Python ``dbm.dumb`` module."""

    name = "dumb"
    owns_datums = False
    primary_ext = ".dir"
    secondary_ext = ".dat"
    auxiliary_exts = (".bak",)

    def is_available(self) -> bool:
        return True

    def open(self, path: Path, read_only: bool, mode: int) -> DumbFile:
        try:
            db = dbm.dumb.open(str(path), "r" if read_only else "c", mode)
        except OSError as e:
            raise translate_error(self.name, e) from e
        except (SyntaxError, ValueError) as e:
            # The .dir index is parsed as Python literals.
            raise translate_error(self.name, e, f"Damaged index {path}.dir: {e}") from e
        return DumbFile(db)

    def close(self, native: DumbFile) -> None:
        native.db.close()

    def fetch(self, native: DumbFile, key: Datum) -> Datum:
        try:
            return Datum(native.db[key.data])
        except KeyError:
            return Datum()

    def store(self, native: DumbFile, key: Datum, value: Datum) -> None:
        try:
            native.db[key.data] = value.data
            native.db.sync()
        except OSError as e:
            raise translate_error(self.name, e) from e

    def delete(self, native: DumbFile, key: Datum) -> None:
        try:
            del native.db[key.data]
            native.db.sync()
        except KeyError:
            raise missing_key_error(self.name, key) from None
        except OSError as e:
            raise translate_error(self.name, e) from e

    def exists(self, native: DumbFile, key: Datum) -> bool:
        # No native existence check: fetch and drop the value.
        return bool(self.fetch(native, key))

    def first_key(self, native: DumbFile) -> Datum:
        return Datum(native.rescan())

    def next_key(self, native: DumbFile, key: Datum) -> Datum:
        if key.data is None:
            return Datum()
        return Datum(native.after(key.data))

    def free_datum(self, datum: Datum) -> None:
        pass
