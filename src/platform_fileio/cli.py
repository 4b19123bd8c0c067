"""CLI commands using Typer."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

if TYPE_CHECKING:
    from platform_fileio.context import AppContext
    from platform_fileio.types import FileInfo

import click
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from platform_fileio import __version__
from platform_fileio.context import create_context
from platform_fileio.paths import parent_path
from platform_fileio.types import AccessMode, Status
from platform_fileio.walker import UNLIMITED_DEPTH

app = typer.Typer(
    name="platform-fileio",
    help="Inspect and create directory trees through the platform file layer",
    no_args_is_help=True,
)

config_app = typer.Typer(help="Configuration commands")
app.add_typer(config_app, name="config")

console = Console()

DEFAULT_CHUNK_SIZE = 64 * 1024


def show_success(message: str) -> None:
    """Print a success line."""
    console.print(f"[green]✓[/green] {message}")


def show_error(message: str) -> None:
    """Print an error line."""
    console.print(f"[red]✗[/red] {message}")


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"platform-fileio v{__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route log records through rich; DEBUG when verbose, else WARNING."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
    config: Annotated[
        Path | None, typer.Option("--config", "-c", help="Path to a YAML config file")
    ] = None,
) -> None:
    """Inspect and create directory trees through the platform file layer."""
    configure_logging(verbose)
    # Subcommand contexts inherit obj from this one
    ctx.obj = config


def _config_path() -> Path | None:
    """Get the --config path of the running invocation, if any."""
    ctx = click.get_current_context(silent=True)
    return ctx.obj if ctx is not None else None


def _get_context(context: AppContext | None) -> AppContext:
    """Return the injected context or build one from the --config option."""
    if context is not None:
        return context
    try:
        return create_context(config_path=_config_path())
    except (FileNotFoundError, ValueError) as e:
        show_error(f"Invalid configuration: {e}")
        raise typer.Exit(1) from e


def _apply_exclusions(ctx: AppContext, exclude: list[str] | None) -> None:
    """Add command-line exclusions on top of the configured ones."""
    for name in exclude or []:
        ctx.exclusions.add_excluded_directory(name)


# ============================================================================
# Traversal Commands
# ============================================================================


@app.command("dirs")
def dump_dirs(
    path: Annotated[str, typer.Argument(help="Root directory")],
    depth: Annotated[
        int, typer.Option("--depth", "-d", help="Levels to descend (-1 for unlimited)")
    ] = UNLIMITED_DEPTH,
    no_root: Annotated[bool, typer.Option("--no-root", help="Do not list the root itself")] = False,
    relative: Annotated[
        bool, typer.Option("--relative", "-r", help="Print paths relative to the root")
    ] = False,
    exclude: Annotated[
        list[str] | None, typer.Option("--exclude", "-x", help="Directory name to skip")
    ] = None,
    _context=None,
) -> None:
    """List the directories below a root."""
    ctx = _get_context(_context)
    _apply_exclusions(ctx, exclude)

    directories: list[str] = []
    if not ctx.walker.dump_directories(path, directories, depth, not no_root, relative):
        show_error(f"Cannot open directory '{path}'")
        raise typer.Exit(1)

    for directory in directories:
        console.print(directory, markup=False, highlight=False)


def _files_table(files: list[FileInfo]) -> Table:
    """Build a table of file entries."""
    table = Table(title="Files")
    table.add_column("Directory", style="cyan")
    table.add_column("Name")
    table.add_column("Size", justify="right")
    for info in files:
        table.add_row(info.full_path, info.file_name, str(info.file_size))
    return table


@app.command("files")
def dump_files(
    path: Annotated[str, typer.Argument(help="Root directory")],
    depth: Annotated[
        int, typer.Option("--depth", "-d", help="Levels to descend (-1 for unlimited)")
    ] = UNLIMITED_DEPTH,
    exclude: Annotated[
        list[str] | None, typer.Option("--exclude", "-x", help="Directory name to skip")
    ] = None,
    _context=None,
) -> None:
    """List the files below a root with their sizes."""
    ctx = _get_context(_context)
    _apply_exclusions(ctx, exclude)

    files: list[FileInfo] = []
    if not ctx.walker.dump_path(path, files, depth):
        show_error(f"Cannot open directory '{path}'")
        raise typer.Exit(1)

    if not files:
        console.print("[dim]No files found[/dim]")
        return
    console.print(_files_table(files))


@app.command("has-subdir")
def has_subdir(
    path: Annotated[str, typer.Argument(help="Directory to check")],
    _context=None,
) -> None:
    """Report whether a directory has a subdirectory that is not excluded."""
    ctx = _get_context(_context)
    if ctx.walker.has_sub_directory(path):
        console.print(f"{path} has subdirectories", markup=False, highlight=False)
    else:
        console.print(f"{path} does not have subdirectories", markup=False, highlight=False)


# ============================================================================
# Path Commands
# ============================================================================


@app.command("mkpath")
def make_path(
    path: Annotated[str, typer.Argument(help="Path to create; end with / for a directory")],
    _context=None,
) -> None:
    """Create a path and any missing parent directories."""
    ctx = _get_context(_context)
    if not ctx.filesystem.create_path(path):
        show_error(f"Failed to create '{path}'")
        raise typer.Exit(1)
    show_success(f"Created '{path}'")


@app.command("touch")
def touch(
    path: Annotated[str, typer.Argument(help="Existing file")],
    _context=None,
) -> None:
    """Set a file's access and modification times to now."""
    ctx = _get_context(_context)
    if not ctx.filesystem.touch(path):
        show_error(f"Failed to touch '{path}'")
        raise typer.Exit(1)
    show_success(f"Touched '{path}'")


@app.command("times")
def file_times(
    path: Annotated[str, typer.Argument(help="File or directory")],
    _context=None,
) -> None:
    """Show a path's change and modification times."""
    ctx = _get_context(_context)
    times = ctx.filesystem.get_file_times(path)
    if times is None:
        show_error(f"Cannot stat '{path}'")
        raise typer.Exit(1)
    console.print(f"  Changed:  {times.create_time:.0f}")
    console.print(f"  Modified: {times.modify_time:.0f}")


@app.command("copy")
def copy_file(
    src: Annotated[str, typer.Argument(help="Source file")],
    dst: Annotated[str, typer.Argument(help="Destination file")],
    chunk_size: Annotated[
        int, typer.Option("--chunk-size", min=1, help="Bytes per read")
    ] = DEFAULT_CHUNK_SIZE,
    _context=None,
) -> None:
    """Copy a file through FileHandle, creating the destination's directories."""
    ctx = _get_context(_context)

    if os.path.exists(src) and os.path.exists(dst) and os.path.samefile(src, dst):
        show_error(f"'{src}' and '{dst}' are the same file")
        raise typer.Exit(1)

    parent = parent_path(dst)
    if parent is not None and not ctx.filesystem.create_path(parent):
        show_error(f"Failed to create '{parent}'")
        raise typer.Exit(1)

    with ctx.new_file() as source, ctx.new_file() as target:
        if source.open(src, AccessMode.READ) is not Status.OK:
            show_error(f"Cannot open '{src}' for reading ({source.status.value})")
            raise typer.Exit(1)
        if target.open(dst, AccessMode.WRITE) is not Status.OK:
            show_error(f"Cannot open '{dst}' for writing ({target.status.value})")
            raise typer.Exit(1)

        buffer = bytearray(chunk_size)
        total = 0
        while source.status is Status.OK:
            result = source.read(chunk_size, buffer)
            if result.status.is_error:
                show_error(f"Read failed on '{src}' ({result.status.value})")
                raise typer.Exit(1)
            if result.count:
                written = target.write(result.count, buffer)
                if written.status.is_error:
                    show_error(f"Write failed on '{dst}' ({written.status.value})")
                    raise typer.Exit(1)
                total += written.count

        if target.flush().is_error:
            show_error(f"Flush failed on '{dst}' ({target.status.value})")
            raise typer.Exit(1)

    show_success(f"Copied {total} bytes to '{dst}'")


# ============================================================================
# Config Commands
# ============================================================================


@config_app.command("show")
def config_show(
    _context=None,
) -> None:
    """Show current configuration."""
    ctx = _get_context(_context)
    config = ctx.config

    console.print("\n[bold]Configuration[/bold]")
    console.print(f"  Excluded directories: {', '.join(config.excluded_directories) or '(none)'}")
    console.print(f"  Strict contracts: {config.strict_contracts}")
    console.print(f"  Max path length: {config.max_path_length}")
    console.print(f"  Directory mode: {config.directory_mode:o}")


if __name__ == "__main__":
    app()
