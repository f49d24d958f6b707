"""CLI implementation for ioslice."""

import json
import logging
import os
import sys
from pathlib import Path
from typing import Optional

import typer

from . import open_slice_path
from .core.util import info_asdict
from .io.base import DEFAULT_CHUNK_SIZE
from .io.local import file_size

logger = logging.getLogger(__name__)

app = typer.Typer(add_completion=False, help="Read, write and inspect byte windows of files.")

_PATH = typer.Argument(..., exists=True, dir_okay=False, help="File holding the window")
_START = typer.Option(0, "--start", "-s", min=0, help="Absolute offset of the first byte of the window")
_LENGTH = typer.Option(..., "--length", "-n", min=0, help="Size of the window in bytes")


def _configure_logging(verbose: bool) -> None:
    level = "DEBUG" if verbose else os.environ.get("IOSLICE_LOG_LEVEL")
    if level:
        logging.basicConfig(level=level.upper(), format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)


@app.callback()
def main(verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging")):
    """Work on the byte range [start, start+length) of a file."""
    _configure_logging(verbose)


@app.command("read")
def read_window(
    path: Path = _PATH,
    start: int = _START,
    length: int = _LENGTH,
    output: Optional[Path] = typer.Option(None, "-o", "--output", help="Write to PATH instead of stdout"),
    chunk_size: int = typer.Option(DEFAULT_CHUNK_SIZE, "--chunk-size", min=1, help="Bytes per read"),
):
    """Copy the window to stdout or a file."""
    if output and output.exists() and output.samefile(path):
        typer.echo("Error: output is the input file; it would be truncated before it is read", err=True)
        raise typer.Exit(code=1)

    copied = 0
    try:
        with open_slice_path(path, start, length) as view:
            # open the sink only once the input is open
            sink = open(output, "wb") if output else typer.get_binary_stream("stdout")
            try:
                for chunk in view.iter_chunks(chunk_size):
                    sink.write(chunk)
                    copied += len(chunk)
            finally:
                if output:
                    sink.close()
                else:
                    sink.flush()
    except OSError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    logger.debug("Copied %d bytes of %s", copied, path)
    if copied < length:
        typer.echo(f"Error: file ended after {copied} of {length} bytes of the window", err=True)
        raise typer.Exit(code=1)


@app.command("write")
def write_window(
    path: Path = _PATH,
    start: int = _START,
    length: int = _LENGTH,
    input: Optional[Path] = typer.Option(None, "-i", "--input", exists=True, dir_okay=False,
                                         help="Read data from PATH instead of stdin"),
    allow_partial: bool = typer.Option(False, "--allow-partial",
                                       help="Write the part of the input that fits instead of failing"),
):
    """Overwrite the window with data from stdin or a file."""
    if input:
        data = input.read_bytes()
    else:
        data = typer.get_binary_stream("stdin").read()

    if len(data) > length and not allow_partial:
        typer.echo(f"Error: input is {len(data)} bytes but the window holds {length}", err=True)
        raise typer.Exit(code=1)

    payload = data[:length]
    try:
        with open_slice_path(path, start, length, mode="r+b") as view:
            view.write_all(payload)
            view.flush()
    except OSError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(json.dumps({"bytes_written": len(payload), "truncated": len(payload) < len(data)}))


@app.command("info")
def window_info(
    path: Path = _PATH,
    start: int = _START,
    length: int = _LENGTH,
    fields: Optional[str] = typer.Option(None, "--fields", help="Comma-separated subset of keys to emit"),
):
    """Describe the window as JSON."""
    sel_fields = set(fields.split(",")) if fields else None
    try:
        with open_slice_path(path, start, length) as view:
            info = view.info()
        info.resource_size = file_size(path)
    except OSError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(json.dumps(info_asdict(info, fields=sel_fields), indent=2))


if __name__ == "__main__":
    app()
