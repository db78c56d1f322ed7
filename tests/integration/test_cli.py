"""Tests for the propdb command line."""

import json
from dataclasses import replace
from pathlib import Path

import pytest
import typer
from typer.testing import CliRunner

from propdb.cli import app, open_writable
from propdb.core import StoreConfig
from propdb.store import make_hooks

runner = CliRunner()


@pytest.fixture
def doc(temp_dir: Path) -> Path:
    path = temp_dir / "notes.txt"
    path.write_text("hello")
    return path


def invoke(engine: str, *args: str):
    return runner.invoke(app, ["--engine", engine, *args])


class TestCommands:
    """Tests for set/get/list/delete."""

    def test_set_then_get(self, engine_name: str, doc: Path) -> None:
        """Test storing and reading back a property."""
        result = invoke(engine_name, "set", str(doc), "color", "red")
        assert result.exit_code == 0, result.output

        result = invoke(engine_name, "get", str(doc), "color", "--json")
        assert result.exit_code == 0
        assert json.loads(result.output) == {"key": "color", "value": "red"}

    def test_get_missing(self, engine_name: str, doc: Path) -> None:
        """Test that a missing property exits with status 1."""
        result = invoke(engine_name, "get", str(doc), "size", "--json")

        assert result.exit_code == 1
        assert json.loads(result.output) == {"key": "size", "value": None}

    def test_list(self, engine_name: str, doc: Path) -> None:
        """Test listing every property as JSON."""
        invoke(engine_name, "set", str(doc), "a", "1")
        invoke(engine_name, "set", str(doc), "b", "2")

        result = invoke(engine_name, "list", str(doc), "--json")

        assert result.exit_code == 0
        assert json.loads(result.output) == {"a": "1", "b": "2"}

    def test_list_without_database(self, engine_name: str, doc: Path) -> None:
        """Test that a resource with no properties lists as empty."""
        result = invoke(engine_name, "list", str(doc), "--json")

        assert result.exit_code == 0
        assert json.loads(result.output) == {}

    def test_delete(self, engine_name: str, doc: Path) -> None:
        """Test deleting an existing and a missing property."""
        invoke(engine_name, "set", str(doc), "a", "1")

        assert invoke(engine_name, "delete", str(doc), "a").exit_code == 0
        result = invoke(engine_name, "delete", str(doc), "a")
        assert result.exit_code == 1
        assert "Cannot delete" in result.output

    def test_directory_properties(self, engine_name: str, temp_dir: Path) -> None:
        """Test properties on a directory itself."""
        invoke(engine_name, "set", str(temp_dir), "owner", "me")

        result = invoke(engine_name, "get", str(temp_dir), "owner", "--json")

        assert json.loads(result.output)["value"] == "me"
        assert (temp_dir / ".DAV").is_dir()


class TestInfo:
    """Tests for files/engines and option handling."""

    def test_files(self, doc: Path) -> None:
        """Test reporting the two-file layout and existence."""
        invoke("dumb", "set", str(doc), "a", "1")

        result = invoke("dumb", "files", str(doc), "--json")

        data = json.loads(result.output)
        assert data["engine"] == "dumb"
        assert [Path(f["path"]).name for f in data["files"]] == ["notes.txt.dir", "notes.txt.dat"]
        assert all(f["exists"] for f in data["files"])

    def test_engines(self) -> None:
        """Test listing engines."""
        result = runner.invoke(app, ["engines"])

        assert result.exit_code == 0
        assert "dumb" in result.output
        assert "sqlite" in result.output

    def test_unknown_engine(self, doc: Path) -> None:
        """Test that a bad engine name exits with status 2."""
        result = invoke("nosuch", "list", str(doc))

        assert result.exit_code == 2
        assert "nosuch" in result.output

    def test_config_file(self, doc: Path, temp_dir: Path) -> None:
        """Test selecting the engine from a TOML config file."""
        config = temp_dir / "propdb.toml"
        config.write_text('[propdb]\nengine = "sqlite"\nstate_dir = ".props"\n')

        result = runner.invoke(app, ["--config", str(config), "set", str(doc), "a", "1"])

        assert result.exit_code == 0, result.output
        assert (temp_dir / ".props" / "notes.txt").is_file()


def test_writable_open_without_handle_exits(doc: Path) -> None:
    """Test that a hook table returning no handle for a write exits cleanly."""
    hooks = replace(make_hooks(StoreConfig()), open=lambda resource, read_only: None)

    with pytest.raises(typer.Exit) as exc_info:
        open_writable(hooks, doc)

    assert exc_info.value.exit_code == 1
