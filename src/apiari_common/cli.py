"""CLI entry point for inspecting streams and state files."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console

from apiari_common.errors import PersistenceError
from apiari_common.ipc import JsonlReader
from apiari_common.settings import settings
from apiari_common.shell import sanitize as sanitize_text
from apiari_common.shell import shell_quote
from apiari_common.state import load_state

logger = logging.getLogger(__name__)

console = Console()
app = typer.Typer(name="apiari-common", help="Inspect JSONL streams and state files")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else settings.log_level)


def _print_records(records: list[Any]) -> None:
    for record in records:
        console.print_json(data=record)


@app.command()
def tail(
    path: Path,
    offset: int = typer.Option(0, help="Byte offset to resume from."),
    from_end: bool = typer.Option(False, "--from-end", help="Skip existing records."),
    once: bool = typer.Option(False, "--once", help="Poll a single time and exit."),
    interval: Optional[float] = typer.Option(None, help="Seconds between polls."),
) -> None:
    """Print records appended to a JSONL stream."""
    reader: JsonlReader[Any] = JsonlReader.with_offset(path, offset)
    if from_end:
        reader.skip_to_end()
    delay = interval if interval is not None else settings.poll_interval

    try:
        while True:
            try:
                _print_records(reader.poll())
            except PersistenceError as exc:
                if once:
                    console.print(f"[red]Error:[/] {exc}")
                    raise typer.Exit(code=1)
                logger.warning("Poll failed, retrying: %s", exc)
            if once:
                console.print(f"[dim]offset {reader.offset}[/]")
                return
            time.sleep(delay)
    except KeyboardInterrupt:
        console.print(f"[dim]stopped at offset {reader.offset}[/]")


@app.command()
def state(path: Path) -> None:
    """Print the JSON value stored in a state file."""
    try:
        value = load_state(path, Any, default_factory=dict)
    except PersistenceError as exc:
        console.print(f"[red]Error:[/] {exc}")
        raise typer.Exit(code=1)
    console.print_json(data=value)


@app.command()
def quote(text: str) -> None:
    """Print TEXT quoted for a shell command line."""
    console.print(shell_quote(text), markup=False, highlight=False)


@app.command()
def sanitize(text: str) -> None:
    """Print TEXT reduced to a branch/directory-safe token."""
    console.print(sanitize_text(text), markup=False, highlight=False)


if __name__ == "__main__":
    app()
