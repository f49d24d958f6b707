"""Views over local files."""

import logging
import os
from pathlib import Path
from typing import BinaryIO, Union

from .view import BoundedView

logger = logging.getLogger(__name__)

_OPEN_FLAGS = {
    "rb": os.O_RDONLY,
    "r+b": os.O_RDWR,
    "rb+": os.O_RDWR,
    "wb": os.O_WRONLY,
}


def _open_existing(path: Union[Path, str], mode: str) -> BinaryIO:
    """Open an existing file without creating or truncating it."""
    try:
        flags = _OPEN_FLAGS[mode]
    except KeyError:
        raise ValueError(f"Unsupported mode {mode!r}: expected one of {', '.join(_OPEN_FLAGS)}") from None
    fd = os.open(path, flags | getattr(os, "O_BINARY", 0))
    try:
        return os.fdopen(fd, mode)
    except BaseException:
        os.close(fd)
        raise


def file_size(path: Union[Path, str]) -> int:
    """Return the size of the file at `path` in bytes."""
    return os.stat(path).st_size


def open_slice_path(path: Union[Path, str], start: int, length: int, *, mode: str = "rb") -> BoundedView:
    """Open `path` and return a view owning the new file handle.

    "rb" gives a read-only view, "r+b" a read-write view and "wb" a
    write-only view. The file must already exist; nothing is truncated.
    """
    handle = _open_existing(path, mode)
    try:
        view = BoundedView(handle, start, length, owned=True)
    except BaseException:
        handle.close()
        raise
    logger.debug("Opened %s for %r", path, view)
    return view
