"""
Store layer: opening and operating on per-resource property databases.

Components:
    - paths: where a resource's database and hidden state directory live
    - Handle: one open database session (fetch/store/delete/iterate)
    - DbHooks: the engine-agnostic operation table handed to callers

Typical use:
    hooks = make_hooks(StoreConfig(engine="sqlite"))
    db = hooks.open(FileResource("docs/report.txt"), False)
    hooks.store(db, b"color", b"red")
    hooks.close(db)
"""

from propdb.store.handle import Handle, open_db, open_direct
from propdb.store.hooks import DbHooks, make_hooks
from propdb.store.paths import (
    copy_state_files,
    ensure_state_dir,
    get_state_files,
    move_state_files,
    remove_state_files,
    state_files_for,
    state_files_for_base,
)

__all__ = [
    "DbHooks",
    "Handle",
    "copy_state_files",
    "ensure_state_dir",
    "get_state_files",
    "make_hooks",
    "move_state_files",
    "open_db",
    "open_direct",
    "remove_state_files",
    "state_files_for",
    "state_files_for_base",
]
