"""CLI entry point for propdb."""

import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from propdb.core import FileResource, PropDBError, StorageEngineError, load_config
from propdb.engines import ENGINES
from propdb.store import DbHooks, Handle, make_hooks

app = typer.Typer(
    name="propdb",
    help="Inspect and edit per-resource property databases.",
    no_args_is_help=True,
)
console = Console()


def _text(data: bytes | None) -> str:
    return "" if data is None else data.decode("utf-8", errors="replace")


def get_hooks(ctx: typer.Context) -> DbHooks:
    """Build the hook table from the global options."""
    opts = ctx.obj or {}
    try:
        config = load_config(opts.get("config"))
        if opts.get("engine"):
            config = replace(config, engine=opts["engine"])
        return make_hooks(config)
    except PropDBError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(2) from e



def open_writable(hooks: DbHooks, path: Path) -> Handle:
    """Open a property database for writing or exit with status 1."""
    db = hooks.open(FileResource(path.resolve()), False)
    if db is None:
        console.print(f"[red]Cannot open the property database of {path}[/red]")
        raise typer.Exit(1)
    return db


@app.callback()
def main(
    ctx: typer.Context,
    engine: Annotated[
        str | None, typer.Option("--engine", "-E", help="Storage engine: dumb, gnu, sqlite")
    ] = None,
    config: Annotated[
        Path | None, typer.Option("--config", "-c", help="TOML file with a [propdb] table")
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
) -> None:
    """Per-resource property databases."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(name)s %(message)s")
    ctx.obj = {"engine": engine, "config": config}


@app.command("list")
def list_(
    ctx: typer.Context,
    path: Annotated[Path, typer.Argument(help="File or directory")],
    output_json: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
) -> None:
    """Show every property of a file or directory."""
    hooks = get_hooks(ctx)
    result: dict[str, str] = {}

    db = hooks.open(FileResource(path.resolve()), True)
    if db is not None:
        with db:
            for key in db.iter_keys():
                value = db.fetch(key)
                result[_text(key)] = _text(value.data)
                db.free_datum(value)

    if output_json:
        print(json.dumps(result))
        return
    if not result:
        console.print(f"No properties for [cyan]{path}[/cyan]")
        return
    table = Table("Key", "Value")
    for key, value in result.items():
        table.add_row(key, value)
    console.print(table)


@app.command()
def get(
    ctx: typer.Context,
    path: Annotated[Path, typer.Argument(help="File or directory")],
    key: Annotated[str, typer.Argument(help="Property key")],
    output_json: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
) -> None:
    """Show one property value."""
    hooks = get_hooks(ctx)
    text: str | None = None

    db = hooks.open(FileResource(path.resolve()), True)
    if db is not None:
        with db:
            value = db.fetch(key)
            if value:
                text = _text(value.data)
            db.free_datum(value)

    if output_json:
        print(json.dumps({"key": key, "value": text}))
    elif text is None:
        console.print(f"[yellow]{key}[/] not set on [cyan]{path}[/cyan]")
    else:
        console.print(text)
    if text is None:
        raise typer.Exit(1)


@app.command("set")
def set_(
    ctx: typer.Context,
    path: Annotated[Path, typer.Argument(help="File or directory")],
    key: Annotated[str, typer.Argument(help="Property key")],
    value: Annotated[str, typer.Argument(help="Property value")],
) -> None:
    """Store a property, replacing any existing value."""
    hooks = get_hooks(ctx)
    try:
        db = open_writable(hooks, path)
        with db:
            db.store(key, value)
    except StorageEngineError as e:
        console.print(f"[red]Cannot store {key}: {e}[/red]")
        raise typer.Exit(1) from e
    console.print(f"[green]Set[/green] {key} on [cyan]{path}[/cyan]")


@app.command()
def delete(
    ctx: typer.Context,
    path: Annotated[Path, typer.Argument(help="File or directory")],
    key: Annotated[str, typer.Argument(help="Property key")],
) -> None:
    """Delete a property."""
    hooks = get_hooks(ctx)
    try:
        db = open_writable(hooks, path)
        with db:
            db.delete(key)
    except StorageEngineError as e:
        console.print(f"[red]Cannot delete {key}: {e}[/red]")
        raise typer.Exit(1) from e
    console.print(f"[green]Deleted[/green] {key} from [cyan]{path}[/cyan]")


@app.command()
def files(
    ctx: typer.Context,
    path: Annotated[Path, typer.Argument(help="File or directory")],
    output_json: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
) -> None:
    """Show where the property database of a file or directory lives."""
    hooks = get_hooks(ctx)
    state = hooks.state_files(FileResource(path.resolve()))

    if output_json:
        result = {
            "engine": hooks.engine.name,
            "state_dir": str(state.state_dir),
            "files": [{"path": str(p), "exists": p.exists()} for p in state.paths],
        }
        print(json.dumps(result))
        return

    console.print(f"Engine: [cyan]{hooks.engine.name}[/cyan]")
    console.print(f"State dir: {state.state_dir}")
    for p in state.paths:
        marker = "[green]exists[/]" if p.exists() else "[dim]missing[/]"
        console.print(f"  {p} {marker}")


@app.command()
def engines() -> None:
    """List storage engines and whether this Python can use them."""
    for name, engine in ENGINES.items():
        status = "[green]available[/]" if engine.is_available() else "[red]unavailable[/]"
        layout = "two files" if engine.secondary_ext else "one file"
        console.print(f"[cyan]{name}[/cyan] ({layout}) {status}")


if __name__ == "__main__":
    app()
