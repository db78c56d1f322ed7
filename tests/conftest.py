"""Shared fixtures: temporary directories and per-engine configs."""

import tempfile
from pathlib import Path

import pytest

from propdb.core import StoreConfig
from propdb.store import DbHooks, make_hooks

ENGINE_NAMES = ["dumb", "gnu", "sqlite"]


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as td:
        yield Path(td)


@pytest.fixture(params=ENGINE_NAMES)
def engine_name(request: pytest.FixtureRequest) -> str:
    """Every engine usable in this interpreter."""
    if request.param == "gnu":
        pytest.importorskip("dbm.gnu")
    return request.param


@pytest.fixture
def config(engine_name: str) -> StoreConfig:
    return StoreConfig(engine=engine_name)


@pytest.fixture
def hooks(config: StoreConfig) -> DbHooks:
    return make_hooks(config)
