"""Where property databases live on disk.

Every directory gets one hidden state subdirectory holding the property
databases of its direct children, named after each child, plus one for
the directory itself under a reserved name:

    docs/
        report.txt
        .DAV/
            report.txt.dir     # two-file engines: <name>.dir + <name>.dat
            report.txt.dat
            .state_for_dir.dir
            .state_for_dir.dat
"""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Callable
from pathlib import Path

from propdb.core.config import StoreConfig
from propdb.core.models import StateFiles
from propdb.core.resources import Resource
from propdb.engines.base import StorageEngine

logger = logging.getLogger(__name__)


def get_state_files(
    dirpath: Path, fname: str | None, config: StoreConfig, engine: StorageEngine
) -> StateFiles:
    """Compute the state directory and database file set for a resource.

    Pure path computation; nothing is touched on disk.
    """
    state_dir = Path(dirpath) / config.state_dir
    base = state_dir / (fname if fname is not None else config.state_file_for_dir)
    return state_files_for_base(base, engine)


def state_files_for_base(base: Path, engine: StorageEngine) -> StateFiles:
    """Compute the file set for a database opened at ``base``."""
    base = Path(base)
    if engine.primary_ext is None:
        return StateFiles(state_dir=base.parent, base=base, primary=base)

    primary = str(base) + engine.primary_ext
    secondary = None
    if engine.secondary_ext is not None:
        # Swap the fixed-length primary extension for the secondary one.
        secondary = Path(primary[: -len(engine.primary_ext)] + engine.secondary_ext)
    return StateFiles(state_dir=base.parent, base=base, primary=Path(primary), secondary=secondary)


def state_files_for(resource: Resource, config: StoreConfig, engine: StorageEngine) -> StateFiles:
    """File set of a resource's property database."""
    dirpath, fname = resource.dir_file_name()
    return get_state_files(dirpath, fname, config, engine)


def ensure_state_dir(dirpath: Path, config: StoreConfig) -> None:
    """Create the hidden state subdirectory of ``dirpath`` if missing.

    Failures are ignored; they show up as an open failure afterwards.
    """
    _make_dir_quietly(Path(dirpath) / config.state_dir)


def _make_dir_quietly(pathname: Path) -> None:
    try:
        os.mkdir(pathname)
    except FileExistsError:
        pass
    except OSError as e:
        logger.debug("could not create state dir %s: %s", pathname, e)


def _auxiliary(files: StateFiles, engine: StorageEngine) -> list[Path]:
    return [Path(str(files.base) + ext) for ext in engine.auxiliary_exts]


def remove_state_files(files: StateFiles, engine: StorageEngine) -> int:
    """Delete every member file of a database. Returns the count removed."""
    removed = 0
    for path in files.paths + _auxiliary(files, engine):
        try:
            path.unlink()
        except FileNotFoundError:
            continue
        removed += 1
    return removed


def copy_state_files(src: StateFiles, dst: StateFiles) -> int:
    """Copy a database file set onto another resource's file set."""
    return _transfer(src, dst, shutil.copy2)


def move_state_files(src: StateFiles, dst: StateFiles) -> int:
    """Move a database file set onto another resource's file set."""
    return _transfer(src, dst, os.replace)


def _transfer(src: StateFiles, dst: StateFiles, op: Callable[[Path, Path], object]) -> int:
    if len(src.paths) != len(dst.paths):
        raise ValueError("source and destination use different file layouts")
    _make_dir_quietly(dst.state_dir)
    count = 0
    for src_path, dst_path in zip(src.paths, dst.paths):
        if not src_path.exists():
            continue
        op(src_path, dst_path)
        count += 1
    return count
