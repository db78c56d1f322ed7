"""Hook table: the engine-agnostic entry points callers dispatch through."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from functools import partial
from pathlib import Path

from propdb.core.config import StoreConfig
from propdb.core.models import Datum, StateFiles
from propdb.core.resources import Resource
from propdb.engines import get_engine
from propdb.engines.base import StorageEngine
from propdb.store.handle import Handle, KeyLike, open_db, open_direct
from propdb.store.paths import state_files_for


@dataclass(frozen=True)
class DbHooks:
    """Operations a property manager needs, bound to one engine and config."""

    config: StoreConfig
    engine: StorageEngine
    open: Callable[[Resource, bool], Handle | None]
    open_direct: Callable[[Path | str, bool], Handle | None]
    close: Callable[[Handle], None]
    fetch: Callable[[Handle, KeyLike], Datum]
    store: Callable[[Handle, KeyLike, KeyLike], None]
    delete: Callable[[Handle, KeyLike], None]
    exists: Callable[[Handle, KeyLike], bool]
    first_key: Callable[[Handle], Datum]
    next_key: Callable[[Handle, KeyLike], Datum]
    free_datum: Callable[[Handle, Datum], None]

    def state_files(self, resource: Resource) -> StateFiles:
        """File set of a resource's database, for existence checks and cleanup."""
        return state_files_for(resource, self.config, self.engine)


def make_hooks(config: StoreConfig | None = None) -> DbHooks:
    """Build the hook table for the engine named in ``config``."""
    config = config or StoreConfig()
    engine = get_engine(config.engine)
    return DbHooks(
        config=config,
        engine=engine,
        open=partial(open_db, config=config, engine=engine),
        open_direct=partial(open_direct, config=config, engine=engine),
        close=Handle.close,
        fetch=Handle.fetch,
        store=Handle.store,
        delete=Handle.delete,
        exists=Handle.exists,
        first_key=Handle.first_key,
        next_key=Handle.next_key,
        free_datum=Handle.free_datum,
    )
