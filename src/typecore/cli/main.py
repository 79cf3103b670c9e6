"""
typecore Command Line Interface

Inspect and manage the locally persisted snapshot.

Usage:
    typecore --help
    typecore [--config PATH] [--verbose] COMMAND

Examples:
    typecore show
    typecore pbs --mode time
    typecore export --output snapshot.json
    typecore reset --yes

Environment Variables:
    TYPECORE_CONFIG_PATH: Path to configuration file
    TYPECORE_STORAGE_BACKEND: memory | sqlite | json
    TYPECORE_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Annotated, Any, Awaitable, Callable, Dict, Optional, TypeVar

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from typecore import __version__
from typecore.config.settings import TypeCoreSettings, load_settings
from typecore.core.store import SnapshotStore
from typecore.exceptions import ConfigurationError, SnapshotInitError
from typecore.models.enums import Mode
from typecore.models.snapshot import Snapshot
from typecore.utils.logging import configure_logger

console = Console()
logger = logging.getLogger(__name__)

app = typer.Typer(
    name="typecore",
    help="Local typing-practice data core",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)

# Shared objects set up by the callback
state: Dict[str, Any] = {"settings": None}

T = TypeVar("T")


def _setup_logging(level: str) -> None:
    handler = RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    configure_logger("typecore", level, handler=handler)


def _settings() -> TypeCoreSettings:
    settings = state.get("settings")
    return settings if settings is not None else TypeCoreSettings()


async def _with_store(action: Callable[[SnapshotStore], Awaitable[T]]) -> T:
    store = SnapshotStore.from_settings(_settings())
    try:
        await store.init()
        return await action(store)
    finally:
        await store.close()


async def _snapshot_of(store: SnapshotStore) -> Snapshot:
    return store.get()


def _run(coro):
    try:
        return asyncio.run(coro)
    except SnapshotInitError as e:
        console.print(f"[red]Failed to load snapshot ({e.response_code}): {e.message}[/]")
        raise typer.Exit(code=1) from None


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"typecore {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable verbose output.")] = False,
    config_path: Annotated[Optional[str], typer.Option("--config", "-c", help="Path to configuration file.")] = None,
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show the version and exit."),
    ] = None,
) -> None:
    """
    typecore CLI.
    """
    try:
        settings = load_settings(config_path)
    except ConfigurationError as e:
        console.print(f"[red]Configuration error: {e.message}[/]")
        raise typer.Exit(code=1) from None

    state["settings"] = settings
    _setup_logging("DEBUG" if verbose else settings.log_level)
    logger.debug("Using %s storage backend", settings.storage.backend.value)


@app.command()
def show() -> None:
    """Summarize the local snapshot."""
    async def _collect(store: SnapshotStore):
        return store.get(), await store.storage.last_saved()

    snapshot, last_saved = _run(_with_store(_collect))

    table = Table(title="Local Snapshot", show_header=False)
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value")

    stats = snapshot.typing_stats
    table.add_row("Name", snapshot.name or "-")
    table.add_row("Results", str(len(snapshot.results or [])))
    table.add_row("Tests started", str(stats.started_tests))
    table.add_row("Tests completed", str(stats.completed_tests))
    table.add_row("Time typing", f"{stats.time_typing:.0f}s")
    table.add_row("XP", str(snapshot.xp))
    table.add_row("Streak", f"{snapshot.streak} (max {snapshot.max_streak})")
    table.add_row("Tags", ", ".join(tag.name for tag in snapshot.tags) or "-")
    table.add_row("Custom themes", str(len(snapshot.custom_themes)))
    table.add_row("Last saved", str(last_saved) if last_saved is not None else "-")

    console.print(table)


@app.command()
def pbs(
    mode: Annotated[Optional[Mode], typer.Option("--mode", "-m", help="Only show one mode.")] = None,
    tag: Annotated[Optional[str], typer.Option("--tag", "-t", help="Show the personal bests of a tag id.")] = None,
) -> None:
    """List personal bests."""
    snapshot: Snapshot = _run(_with_store(_snapshot_of))

    personal_bests = snapshot.personal_bests
    title = "Personal Bests"
    if tag is not None:
        found = snapshot.get_tag(tag)
        if found is None:
            console.print(f"[red]Unknown tag '{tag}'.[/]")
            raise typer.Exit(code=1)
        personal_bests = found.personal_bests
        title = f"Personal Bests ({found.name})"

    table = Table(title=title)
    table.add_column("Mode", style="cyan", no_wrap=True)
    table.add_column("Mode2", style="cyan")
    table.add_column("Language")
    table.add_column("Difficulty")
    table.add_column("Flags", style="magenta")
    table.add_column("WPM", justify="right", style="bold")
    table.add_column("Acc", justify="right")

    rows = 0
    for current in [mode] if mode is not None else list(Mode):
        for mode2 in sorted(personal_bests.bucket(current)):
            for pb in personal_bests.cell(current, mode2) or []:
                flags = [
                    name
                    for name, enabled in (
                        ("punctuation", pb.punctuation),
                        ("numbers", pb.numbers),
                        ("lazy", pb.lazy_mode),
                    )
                    if enabled
                ]
                table.add_row(
                    current.value,
                    mode2,
                    pb.language,
                    pb.difficulty.value,
                    ", ".join(flags) or "-",
                    f"{pb.wpm:.2f}",
                    f"{pb.acc:.2f}%",
                )
                rows += 1

    if rows == 0:
        console.print("[yellow]No personal bests recorded.[/]")
        return
    console.print(table)


@app.command()
def export(
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write the snapshot to this file instead of stdout."),
    ] = None,
    overwrite: Annotated[bool, typer.Option("--overwrite", help="Replace an existing output file.")] = False,
) -> None:
    """Export the snapshot as camelCase JSON."""
    snapshot = _run(_with_store(_snapshot_of))
    payload = json.dumps(snapshot.to_wire(), indent=2)

    if output is None:
        typer.echo(payload)
        return

    if output.exists() and not overwrite:
        console.print(f"[red]Destination '{output}' already exists. Use --overwrite to replace it.[/]")
        raise typer.Exit(code=1)

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(payload + "\n", encoding="utf-8")
    console.print(f"[green]Exported snapshot to {output}.[/]")


@app.command()
def reset(
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Do not ask for confirmation.")] = False,
) -> None:
    """Delete the local snapshot and start from an empty one."""
    if not yes:
        typer.confirm("This deletes all local results and personal bests. Continue?", abort=True)

    async def _reset() -> None:
        store = SnapshotStore.from_settings(_settings())
        try:
            try:
                await store.init()
            except SnapshotInitError as e:
                # init leaves a default snapshot behind, which is what reset wants
                logger.warning("Resetting over an unreadable snapshot: %s", e.message)
            await store.reset()
        finally:
            await store.close()

    _run(_reset())
    console.print("[green]Local snapshot reset.[/]")


if __name__ == "__main__":
    app()
