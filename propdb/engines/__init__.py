"""
Storage engines: interchangeable embedded key-value stores.

Exactly one engine is active for a given StoreConfig. Each engine adapts
the uniform operations (open, close, fetch, store, delete, exists,
first/next key, free datum) onto one library and translates its
failures into StorageEngineError.

Engines:
    - dumb: dbm.dumb, two files per database (.dir index + .dat pages)
    - gnu: dbm.gnu, one file, native existence check and key cursor
    - sqlite: sqlite3, one file, rowid-ordered iteration

Adding an engine:
    1. Create a class implementing the StorageEngine protocol
    2. Register an instance in ENGINES under its name
"""

from __future__ import annotations

import logging

from propdb.core.exceptions import EngineUnavailableError
from propdb.engines.base import StorageEngine, translate_error
from propdb.engines.dumb import DumbEngine
from propdb.engines.gnu import GnuEngine
from propdb.engines.sqlite import SqliteEngine

logger = logging.getLogger(__name__)

ENGINES: dict[str, StorageEngine] = {
    "dumb": DumbEngine(),
    "gnu": GnuEngine(),
    "sqlite": SqliteEngine(),
}


def get_engine(name: str) -> StorageEngine:
    """Look up a registered engine, checking that its library is present."""
    try:
        engine = ENGINES[name]
    except KeyError:
        known = ", ".join(sorted(ENGINES))
        raise EngineUnavailableError(f"Unknown engine '{name}' (known: {known})") from None
    if not engine.is_available():
        raise EngineUnavailableError(f"Engine '{name}' is not available in this Python build")
    logger.debug("selected engine %s", name)
    return engine


def available_engines() -> list[str]:
    """Names of registered engines usable in this interpreter."""
    return [name for name, engine in ENGINES.items() if engine.is_available()]


__all__ = [
    "ENGINES",
    "StorageEngine",
    "DumbEngine",
    "GnuEngine",
    "SqliteEngine",
    "available_engines",
    "get_engine",
    "translate_error",
]
