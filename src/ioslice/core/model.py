from __future__ import annotations
from dataclasses import dataclass


@dataclass(slots=True)
class SliceInfo:
    start: int
    length: int
    position: int
    remaining: int
    readable: bool
    writable: bool
    resource_size: int | None = None    # only known when the resource can report it


class SliceError(RuntimeError):
    """Base class for errors raised by ioslice itself (not by the resource)."""
    pass


class WindowExhausted(SliceError, EOFError):
    """Raised when a write would go past the end of the window."""
    pass


class IncompleteRead(SliceError, EOFError):
    """Raised by read_exact when fewer bytes are available than requested."""
    pass
