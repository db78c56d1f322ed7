"""Single-file engine on GNU dbm (``dbm.gnu``).

Only present when the interpreter was built against libgdbm, so the
module is imported on first use rather than at package import.
"""

from __future__ import annotations

import importlib
from pathlib import Path
from types import ModuleType
from typing import Any

from propdb.core.exceptions import EngineUnavailableError
from propdb.core.models import Datum
from propdb.engines.base import missing_key_error, translate_error


def _gdbm() -> ModuleType:
    try:
        return importlib.import_module("dbm.gnu")
    except ImportError as e:
        raise EngineUnavailableError("dbm.gnu is not available in this Python build") from e


class GnuEngine:
    """Engine backed by ``dbm.gnu``.

    GDBM allows one writer or many readers; a conflicting open fails
    immediately with an error rather than waiting.
    """

    name = "gnu"
    owns_datums = True
    primary_ext = None
    secondary_ext = None
    auxiliary_exts = ()

    def is_available(self) -> bool:
        try:
            _gdbm()
        except EngineUnavailableError:
            return False
        return True

    def open(self, path: Path, read_only: bool, mode: int) -> Any:
        gdbm = _gdbm()
        try:
            return gdbm.open(str(path), "r" if read_only else "c", mode)
        except gdbm.error as e:
            raise translate_error(self.name, e) from e

    def close(self, native: Any) -> None:
        native.close()

    def fetch(self, native: Any, key: Datum) -> Datum:
        return Datum(native.get(key.data))

    def store(self, native: Any, key: Datum, value: Datum) -> None:
        try:
            native[key.data] = value.data
        except _gdbm().error as e:
            raise translate_error(self.name, e) from e

    def delete(self, native: Any, key: Datum) -> None:
        try:
            del native[key.data]
        except KeyError:
            raise missing_key_error(self.name, key) from None
        except _gdbm().error as e:
            raise translate_error(self.name, e) from e

    def exists(self, native: Any, key: Datum) -> bool:
        return key.data in native

    def first_key(self, native: Any) -> Datum:
        return Datum(native.firstkey())

    def next_key(self, native: Any, key: Datum) -> Datum:
        if key.data is None:
            return Datum()
        return Datum(native.nextkey(key.data))

    def free_datum(self, datum: Datum) -> None:
        datum.release()
