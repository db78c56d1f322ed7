"""Data models for propdb."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


class Datum:
    """An opaque byte string used for keys and values.

    ``data`` is None for an absent datum (key not found, end of iteration).
    A present datum may still be empty (``b""``), so truthiness means
    "present", not "non-empty". Datums are unhashable: release() changes
    their value.
    """

    __slots__ = ("_data",)

    def __init__(self, data: bytes | bytearray | memoryview | None = None) -> None:
        self._data = bytes(data) if data is not None else None

    @classmethod
    def of(cls, value: Datum | bytes | str) -> Datum:
        """Coerce bytes or text (UTF-8) into a Datum."""
        if isinstance(value, Datum):
            return value
        if isinstance(value, str):
            return cls(value.encode("utf-8"))
        return cls(value)

    @property
    def data(self) -> bytes | None:
        return self._data

    @property
    def size(self) -> int:
        return len(self._data) if self._data is not None else 0

    @property
    def is_absent(self) -> bool:
        return self._data is None

    def release(self) -> None:
        """Drop the backing buffer. The datum reads as absent afterwards."""
        self._data = None

    def __bool__(self) -> bool:
        return self._data is not None

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Datum):
            return self._data == other._data
        if isinstance(other, (bytes, bytearray)):
            return self._data == bytes(other)
        return NotImplemented

    def __repr__(self) -> str:
        if self._data is None:
            return "Datum(<absent>)"
        return f"Datum({self._data!r})"


@dataclass(frozen=True)
class StateFiles:
    """The on-disk location of one logical property database.

    ``primary`` is the path engines are opened with (or the first physical
    file, for engines that append their own extensions). ``secondary`` is
    the sibling file of two-file engines, None otherwise.
    """

    state_dir: Path
    base: Path
    primary: Path
    secondary: Path | None = None

    @property
    def paths(self) -> list[Path]:
        """All physical member files, in order."""
        if self.secondary is None:
            return [self.primary]
        return [self.primary, self.secondary]

    def exists(self) -> bool:
        """True if any member file of the set exists."""
        return any(p.exists() for p in self.paths)
