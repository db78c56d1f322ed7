"""Database handle: one open session on one property database."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import ExitStack
from pathlib import Path
from typing import Any

from propdb.core.config import StoreConfig
from propdb.core.exceptions import HandleClosedError, StorageEngineError
from propdb.core.models import Datum, StateFiles
from propdb.core.resources import Resource
from propdb.engines import get_engine
from propdb.engines.base import StorageEngine
from propdb.store.paths import ensure_state_dir, get_state_files, state_files_for_base

logger = logging.getLogger(__name__)

KeyLike = Datum | bytes | str


class Handle:
    """An open property database.

    Not safe for concurrent use; callers serialize operations on one
    handle. Datums returned by fetch and iteration are only guaranteed
    until the next operation on the handle or until passed to free_datum,
    which every caller does exactly once per datum. Storing or deleting
    during an iteration leaves the rest of that iteration undefined.
    """

    __slots__ = ("engine", "path", "read_only", "state_files", "scope", "_native")

    def __init__(
        self,
        engine: StorageEngine,
        native: Any,
        path: Path,
        read_only: bool,
        state_files: StateFiles,
    ) -> None:
        self.engine = engine
        self.path = path
        self.read_only = read_only
        self.state_files = state_files
        self._native = native
        self.scope = ExitStack()
        self.scope.callback(self._release)

    def _release(self) -> None:
        native, self._native = self._native, None
        if native is not None:
            self.engine.close(native)
            logger.debug("closed %s database %s", self.engine.name, self.path)

    @property
    def closed(self) -> bool:
        return self._native is None

    def _file(self) -> Any:
        if self._native is None:
            raise HandleClosedError(f"Database {self.path} is closed")
        return self._native

    def close(self) -> None:
        """Release the engine file. Calling it again does nothing."""
        self.scope.close()

    def __enter__(self) -> Handle:
        return self

    def __exit__(self, exc_type: type | None, exc_val: Exception | None, exc_tb: object) -> None:
        self.close()

    def fetch(self, key: KeyLike) -> Datum:
        """Get the value for key; an absent Datum means not found."""
        return self.engine.fetch(self._file(), _present(key, "key"))

    def exists(self, key: KeyLike) -> bool:
        return self.engine.exists(self._file(), _present(key, "key"))

    def store(self, key: KeyLike, value: KeyLike) -> None:
        """Store value under key, replacing any existing value."""
        self.engine.store(self._file(), _present(key, "key"), _present(value, "value"))

    def delete(self, key: KeyLike) -> None:
        """Delete key. Raises StorageEngineError if the key is absent."""
        self.engine.delete(self._file(), _present(key, "key"))

    def first_key(self) -> Datum:
        """Start (or restart) a key scan."""
        return self.engine.first_key(self._file())

    def next_key(self, key: KeyLike) -> Datum:
        """Key after ``key`` in the current scan; absent at the end."""
        return self.engine.next_key(self._file(), Datum.of(key))

    def free_datum(self, datum: Datum) -> None:
        """Release a datum obtained from fetch or iteration."""
        self.engine.free_datum(datum)

    def iter_keys(self) -> Iterator[bytes]:
        """Yield every key once, in engine order."""
        key = self.first_key()
        while key:
            data = key.data or b""
            yield data
            # Keep a copy: free_datum may clear the engine-owned buffer.
            nxt = self.next_key(Datum(data))
            self.free_datum(key)
            key = nxt

    def __repr__(self) -> str:
        state = "closed" if self.closed else ("ro" if self.read_only else "rw")
        return f"Handle({self.engine.name}, {str(self.path)!r}, {state})"


def _present(value: KeyLike, what: str) -> Datum:
    datum = Datum.of(value)
    if datum.is_absent:
        raise ValueError(f"{what} must not be an absent datum")
    return datum


def open_direct(
    pathname: Path | str,
    read_only: bool,
    config: StoreConfig | None = None,
    engine: StorageEngine | None = None,
    scope: ExitStack | None = None,
) -> Handle | None:
    """Open the database at an explicit path.

    Returns None when a read-only open fails: a resource without
    properties has no database yet. A failed writable open raises
    StorageEngineError. When ``scope`` is given, the handle is closed
    together with it.
    """
    config = config or StoreConfig()
    engine = engine or get_engine(config.engine)
    path = Path(pathname)

    try:
        native = engine.open(path, read_only, config.file_mode)
    except StorageEngineError:
        if not read_only:
            raise
        logger.debug("no %s database at %s", engine.name, path)
        return None

    db = Handle(engine, native, path, read_only, state_files_for_base(path, engine))
    if scope is not None:
        scope.callback(db.close)
    logger.debug("opened %s database %s (%s)", engine.name, path, "ro" if read_only else "rw")
    return db


def open_db(
    resource: Resource,
    read_only: bool,
    config: StoreConfig | None = None,
    engine: StorageEngine | None = None,
    scope: ExitStack | None = None,
) -> Handle | None:
    """Open the property database belonging to ``resource``."""
    config = config or StoreConfig()
    engine = engine or get_engine(config.engine)

    dirpath, fname = resource.dir_file_name()
    if not read_only:
        ensure_state_dir(dirpath, config)

    files = get_state_files(dirpath, fname, config, engine)
    # Concurrent writers are not arbitrated: whether this open waits,
    # fails or succeeds while another writer holds the file is up to
    # the engine.
    return open_direct(files.base, read_only, config=config, engine=engine, scope=scope)
