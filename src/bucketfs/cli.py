"""CLI entry point.

Connection settings come from BUCKETFS_* environment variables (see
`bucketfs.core.config.Settings`).
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from pathlib import Path
from typing import TypeVar

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from bucketfs.adapter.s3 import S3Adapter
from bucketfs.core.config import get_settings
from bucketfs.core.exceptions import BucketFSError
from bucketfs.factory import create_adapter
from bucketfs.models import MetadataRecord, Result, WriteConfig

T = TypeVar("T")

app = typer.Typer(
    name="bucketfs",
    help="Browse and manage an object-storage bucket as a filesystem",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)


def _run(operation: Callable[[S3Adapter], Awaitable[T]]) -> T:
    """Open an adapter from the environment, run ``operation``, close it."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )

    async def runner() -> T:
        async with create_adapter(settings) as fs:
            return await operation(fs)

    try:
        return asyncio.run(runner())
    except BucketFSError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e


def _check(result: Result[T], message: str) -> T:
    if not result:
        err_console.print(f"[red]{message}:[/red] {result.reason}")
        raise typer.Exit(1)
    return result.value


def _modified(record: MetadataRecord) -> str:
    if record.timestamp is None:
        return ""
    return datetime.fromtimestamp(record.timestamp, tz=UTC).strftime("%Y-%m-%d %H:%M:%S")


@app.command()
def version() -> None:
    """Show version."""
    from bucketfs import __version__

    console.print(f"bucketfs {__version__}")


@app.command()
def info() -> None:
    """Show system information and the active configuration."""
    import sys

    from bucketfs import __version__

    settings = get_settings()
    console.print(f"[bold]bucketfs[/bold] {__version__}")
    console.print(f"Python {sys.version}")
    console.print(f"Backend: {settings.client_backend}  Bucket: {settings.bucket or '-'}  Prefix: {settings.prefix or '-'}")


@app.command("ls")
def list_command(
    directory: str = typer.Argument("", help="Directory to list"),
    recursive: bool = typer.Option(False, "--recursive", "-r", help="Include nested entries"),
) -> None:
    """List a directory."""
    records = _run(lambda fs: fs.list_contents(directory, recursive=recursive))

    table = Table(show_header=True, header_style="bold")
    table.add_column("Type")
    table.add_column("Path")
    table.add_column("Size", justify="right")
    table.add_column("Modified")
    for record in sorted(records, key=lambda r: (r.type.value != "dir", r.path)):
        size = "" if record.size is None else str(record.size)
        table.add_row(record.type.value, record.path, size, _modified(record))
    console.print(table)


@app.command()
def stat(path: str = typer.Argument(..., help="File path")) -> None:
    """Show file metadata."""
    record = _run(lambda fs: fs.get_metadata(path))
    if record is None:
        err_console.print(f"[red]Not found:[/red] {path}")
        raise typer.Exit(1)
    for name, value in record.to_dict().items():
        console.print(f"[bold]{name}[/bold]: {value}")


@app.command()
def cat(path: str = typer.Argument(..., help="File path")) -> None:
    """Print a file's contents."""
    record = _run(lambda fs: fs.read(path))
    if record is None:
        err_console.print(f"[red]Not found:[/red] {path}")
        raise typer.Exit(1)
    typer.echo(record.contents or b"", nl=False)


@app.command()
def put(
    source: Path = typer.Argument(..., exists=True, dir_okay=False, help="Local file to upload"),
    path: str = typer.Argument(..., help="Destination path"),
    public: bool = typer.Option(False, "--public", help="Make the file publicly readable"),
    mimetype: str | None = typer.Option(None, "--mimetype", help="Override the guessed MIME type"),
) -> None:
    """Upload a local file."""
    config = WriteConfig(visibility="public" if public else None, mimetype=mimetype)

    async def upload(fs: S3Adapter) -> Result[MetadataRecord]:
        with source.open("rb") as stream:
            return await fs.write_stream(path, stream, config)

    record = _check(_run(upload), "Upload failed")
    console.print(f"Uploaded {record.path}")


@app.command()
def rm(
    path: str = typer.Argument(..., help="Path to delete"),
    directory: bool = typer.Option(False, "--dir", "-d", help="Delete a directory and its contents"),
) -> None:
    """Delete a file or directory."""
    if directory:
        _check(_run(lambda fs: fs.delete_dir(path)), "Delete failed")
    else:
        _check(_run(lambda fs: fs.delete(path)), "Delete failed")
    console.print(f"Deleted {path}")


@app.command()
def mkdir(path: str = typer.Argument(..., help="Directory to create")) -> None:
    """Create a directory."""
    record = _check(_run(lambda fs: fs.create_dir(path)), "Create failed")
    console.print(f"Created {record.path}/")


@app.command()
def cp(
    source: str = typer.Argument(..., help="Source path"),
    destination: str = typer.Argument(..., help="Destination path"),
) -> None:
    """Copy a file, keeping its visibility."""
    _check(_run(lambda fs: fs.copy(source, destination)), "Copy failed")
    console.print(f"Copied {source} -> {destination}")


@app.command()
def mv(
    source: str = typer.Argument(..., help="Source path"),
    destination: str = typer.Argument(..., help="Destination path"),
) -> None:
    """Move a file."""
    _check(_run(lambda fs: fs.rename(source, destination)), "Move failed")
    console.print(f"Moved {source} -> {destination}")


@app.command()
def visibility(
    path: str = typer.Argument(..., help="File path"),
    set_to: str | None = typer.Option(None, "--set", help="public or private"),
) -> None:
    """Show or change a file's visibility."""
    if set_to is not None:
        result = _check(_run(lambda fs: fs.set_visibility(path, set_to)), "Visibility change failed")
    else:
        result = _run(lambda fs: fs.get_visibility(path))
    console.print(f"{result.path}: {result.visibility.value}")


if __name__ == "__main__":
    app()
