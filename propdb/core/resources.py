"""Resource collaborator: maps a resource to (directory, filename)."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class Resource(Protocol):
    """Anything that can say where its property database belongs."""

    def dir_file_name(self) -> tuple[Path, str | None]:
        """Return the containing directory and the filename.

        The filename is None when the resource is a directory; its own
        property database then uses the reserved directory state name.
        """
        ...


class FileResource:
    """A resource backed by a plain filesystem path."""

    __slots__ = ("path", "_is_dir")

    def __init__(self, path: Path | str, is_dir: bool | None = None) -> None:
        self.path = Path(path)
        self._is_dir = is_dir

    @property
    def is_dir(self) -> bool:
        if self._is_dir is not None:
            return self._is_dir
        return self.path.is_dir()

    def dir_file_name(self) -> tuple[Path, str | None]:
        if self.is_dir:
            return self.path, None
        return self.path.parent, self.path.name

    def __repr__(self) -> str:
        return f"FileResource({str(self.path)!r})"
