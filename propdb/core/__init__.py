"""
Core module: data models, exceptions, configuration, and resources.

Models (models.py):
    - Datum: Opaque byte string used for keys and values
    - StateFiles: Physical file set of one logical property database

Exceptions (exceptions.py):
    - PropDBError: Base exception for all propdb errors
    - StorageEngineError: Uniform wrapper for engine failures
    - EngineUnavailableError, ConfigError, HandleClosedError

Config (config.py):
    - StoreConfig: Active engine, state directory naming, file mode

Resources (resources.py):
    - Resource: Protocol mapping a resource to (directory, filename)
    - FileResource: Resource over a plain filesystem path
"""

from propdb.core.config import StoreConfig, load_config
from propdb.core.exceptions import (
    ConfigError,
    EngineUnavailableError,
    HandleClosedError,
    PropDBError,
    StorageEngineError,
)
from propdb.core.models import Datum, StateFiles
from propdb.core.resources import FileResource, Resource

__all__ = [
    # Models
    "Datum",
    "StateFiles",
    # Exceptions
    "PropDBError",
    "StorageEngineError",
    "EngineUnavailableError",
    "ConfigError",
    "HandleClosedError",
    # Config
    "StoreConfig",
    "load_config",
    # Resources
    "Resource",
    "FileResource",
]
