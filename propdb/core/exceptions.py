"""Propdb custom exceptions."""

from __future__ import annotations

from http import HTTPStatus


class PropDBError(Exception):
    """Base exception for propdb errors."""


class StorageEngineError(PropDBError):
    """A storage engine reported a failure.

    Carries the engine-specific error code and message plus the errno that
    was current when the failure happened. ``status`` is what an outer
    HTTP layer should surface.
    """

    status = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: str, code: int = 1, saved_errno: int = 0, engine: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.saved_errno = saved_errno
        self.engine = engine

    def __str__(self) -> str:
        return (
            f"{self.message} (engine={self.engine or '?'}, code={self.code}, "
            f"errno={self.saved_errno})"
        )


class EngineUnavailableError(PropDBError):
    """Requested engine is unknown or not built into this interpreter."""


class ConfigError(PropDBError):
    """Invalid configuration value."""


class HandleClosedError(PropDBError):
    """Operation attempted on a closed database handle."""
