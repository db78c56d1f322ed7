"""StoreConfig: which engine is active and where property databases live.

Settings come from, in increasing precedence: built-in defaults, a TOML file
with a ``[propdb]`` table, and ``PROPDB_*`` environment variables.

propdb.toml example:

    [propdb]
    engine = "sqlite"               # dumb | gnu | sqlite
    state_dir = ".DAV"              # hidden per-directory subdirectory
    state_file_for_dir = ".state_for_dir"
    file_mode = "0660"              # octal, applied when a database is created
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

from propdb.core.exceptions import ConfigError

DEFAULT_ENGINE = "dumb"
DEFAULT_STATE_DIR = ".DAV"
DEFAULT_STATE_FILE_FOR_DIR = ".state_for_dir"
DEFAULT_FILE_MODE = 0o660  # S_IRUSR | S_IWUSR | S_IRGRP | S_IWGRP

_ENV_PREFIX = "PROPDB_"


@dataclass(frozen=True)
class StoreConfig:
    """Settings shared by every handle opened through one hook table."""

    engine: str = DEFAULT_ENGINE
    state_dir: str = DEFAULT_STATE_DIR
    state_file_for_dir: str = DEFAULT_STATE_FILE_FOR_DIR
    file_mode: int = DEFAULT_FILE_MODE

    def __post_init__(self) -> None:
        _check_component("state_dir", self.state_dir)
        _check_component("state_file_for_dir", self.state_file_for_dir)
        if not self.engine:
            raise ConfigError("engine must not be empty")
        if not 0 <= self.file_mode <= 0o777:
            raise ConfigError(f"file_mode out of range: {oct(self.file_mode)}")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], base: StoreConfig | None = None) -> StoreConfig:
        """Build a config from a plain mapping, on top of ``base``."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigError(f"unknown config keys: {', '.join(sorted(unknown))}")
        values = dict(data)
        if "file_mode" in values:
            values["file_mode"] = _parse_mode(values["file_mode"])
        for key in ("engine", "state_dir", "state_file_for_dir"):
            if key in values and not isinstance(values[key], str):
                raise ConfigError(f"{key} must be a string, got {type(values[key]).__name__}")
        return replace(base or cls(), **values)

    @classmethod
    def from_env(
        cls, environ: Mapping[str, str] | None = None, base: StoreConfig | None = None
    ) -> StoreConfig:
        """Apply ``PROPDB_*`` environment overrides on top of ``base``."""
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        for f in fields(cls):
            raw = env.get(_ENV_PREFIX + f.name.upper())
            if raw is not None:
                values[f.name] = raw
        return cls.from_mapping(values, base=base)


def load_config(path: Path | None = None, environ: Mapping[str, str] | None = None) -> StoreConfig:
    """Load config from a TOML file (if it exists) plus the environment."""
    config = StoreConfig()
    if path is not None and path.exists():
        try:
            with path.open("rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Cannot parse {path}: {e}") from e
        section = data.get("propdb", {})
        if not isinstance(section, dict):
            raise ConfigError(f"[propdb] in {path} must be a table")
        config = StoreConfig.from_mapping(section, base=config)
    return StoreConfig.from_env(environ, base=config)


def _parse_mode(value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"file_mode must be an octal string or int, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value, 8)
        except ValueError:
            raise ConfigError(f"file_mode is not an octal number: {value!r}") from None
    raise ConfigError(f"file_mode must be an octal string or int, got {value!r}")


def _check_component(name: str, value: str) -> None:
    if not isinstance(value, str) or not value or value in (".", ".."):
        raise ConfigError(f"{name} must be a single path component, got {value!r}")
    if "/" in value or os.sep in value or (os.altsep and os.altsep in value):
        raise ConfigError(f"{name} must not contain path separators: {value!r}")
