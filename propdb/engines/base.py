"""Protocol for storage engines and the shared error translation."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol

from propdb.core.exceptions import StorageEngineError
from propdb.core.models import Datum

GENERIC_IO_ERROR = 1
ITEM_NOT_FOUND = 15  # matches GDBM_ITEM_NOT_FOUND


class StorageEngine(Protocol):
    """Protocol for embedded key-value engines.

    ``open`` returns an engine-native file object; every other operation
    takes that object back. Keys and values cross this boundary as Datum.
    Failures are raised as StorageEngineError, never as the engine's own
    exception types.
    """

    name: str
    # True when fetched datums carry engine-allocated buffers that
    # free_datum must release.
    owns_datums: bool
    # Extension of the first physical file, for engines that append their
    # own (two-file engines). None when the open path is the file itself.
    primary_ext: str | None
    secondary_ext: str | None
    # Transient files the engine may leave next to the database.
    auxiliary_exts: tuple[str, ...]

    def is_available(self) -> bool:
        """Check if the engine's library is present in this interpreter."""
        ...

    def open(self, path: Path, read_only: bool, mode: int) -> Any:
        """Open (or, when writable, create) the database at ``path``."""
        ...

    def close(self, native: Any) -> None: ...

    def fetch(self, native: Any, key: Datum) -> Datum: ...

    def store(self, native: Any, key: Datum, value: Datum) -> None: ...

    def delete(self, native: Any, key: Datum) -> None: ...

    def exists(self, native: Any, key: Datum) -> bool: ...

    def first_key(self, native: Any) -> Datum: ...

    def next_key(self, native: Any, key: Datum) -> Datum: ...

    def free_datum(self, datum: Datum) -> None: ...


def translate_error(engine: str, exc: BaseException, message: str | None = None) -> StorageEngineError:
    """Wrap an engine exception in the uniform StorageEngineError.

    The errno is read off the exception first, so nothing that runs during
    cleanup can replace it.
    """
    saved_errno = getattr(exc, "errno", None)
    if not isinstance(saved_errno, int):
        saved_errno = 0

    code = getattr(exc, "sqlite_errorcode", None)
    if not isinstance(code, int):
        code = saved_errno or GENERIC_IO_ERROR

    if message is None:
        message = getattr(exc, "strerror", None) or str(exc) or "I/O error occurred."
    return StorageEngineError(message, code=code, saved_errno=saved_errno, engine=engine)


def missing_key_error(engine: str, key: Datum) -> StorageEngineError:
    """Error for deleting a key that is not in the database."""
    return StorageEngineError(
        f"Item not found: {key.data!r}",
        code=ITEM_NOT_FOUND,
        saved_errno=0,
        engine=engine,
    )
