"""
Propdb: per-resource property databases for filesystem-backed documents.

Every file and directory can carry a small key/value database of
properties (e.g. WebDAV dead properties), kept in a hidden state
subdirectory next to it. Keys and values are opaque byte strings.

Usage:
    from propdb.core import FileResource, StoreConfig
    from propdb.store import make_hooks

    hooks = make_hooks(StoreConfig())
    db = hooks.open(FileResource(Path("notes.txt")), False)
    try:
        hooks.store(db, b"color", b"red")
    finally:
        hooks.close(db)
"""

import logging

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
