"""Capability protocols for the resources a view can wrap."""

import os
from typing import Any, Protocol, Union, runtime_checkable

try:
    import fcntl
except ImportError:  # Windows has no fcntl; the mode attribute check still applies
    fcntl = None


DEFAULT_CHUNK_SIZE = 64 * 1024  # 64 KB


@runtime_checkable
class SeekableResource(Protocol):
    """Anything that can be positioned at an absolute offset."""

    def seek(self, offset: int, whence: int = 0) -> int:
        """Move to absolute offset `offset` and return the new position."""
        ...


@runtime_checkable
class ReadableResource(SeekableResource, Protocol):
    """Seekable resource offering sequential reads.

    Views call `readinto` instead of `read` when the resource has it.
    """

    def read(self, size: int = -1) -> bytes:
        """Return up to `size` bytes; an empty result means end of resource."""
        ...


@runtime_checkable
class WritableResource(SeekableResource, Protocol):
    """Seekable resource offering sequential writes."""

    def write(self, data: bytes) -> int:
        """Write `data` and return the number of bytes accepted."""
        ...


def _supports(resource: Any, method: str, probe: str) -> bool:
    if not callable(getattr(resource, method, None)):
        return False
    # io objects carry both read and write, so ask them which one is real
    check = getattr(resource, probe, None)
    if callable(check):
        return bool(check())
    return True


def is_readable(resource: Any) -> bool:
    return _supports(resource, "readinto", "readable") or _supports(resource, "read", "readable")


def is_writable(resource: Any) -> bool:
    return _supports(resource, "write", "writable")


def is_seekable(resource: Any) -> bool:
    return callable(getattr(resource, "seek", None))


def capabilities(resource: Any) -> tuple[bool, bool]:
    """Return (readable, writable) for `resource`.

    Raises TypeError when the resource cannot seek or offers neither
    capability, since no view can be built over it.
    """
    if not is_seekable(resource):
        raise TypeError(f"{type(resource).__name__} object does not support seek()")
    readable, writable = is_readable(resource), is_writable(resource)
    if not (readable or writable):
        raise TypeError(f"{type(resource).__name__} object is neither readable nor writable")
    return readable, writable


Resource = Union[ReadableResource, WritableResource]


def is_append_mode(resource: Any) -> bool:
    """Return True when writes to `resource` always land at its end.

    Append-mode handles ignore seeks for writes, so a view cannot keep
    them inside its window.
    """
    mode = getattr(resource, "mode", None)
    if isinstance(mode, str) and "a" in mode:
        return True
    fileno = getattr(resource, "fileno", None)
    if fcntl is None or not callable(fileno):
        return False
    try:
        fd = fileno()
    except (OSError, ValueError):
        # BytesIO and friends raise io.UnsupportedOperation
        return False
    return bool(fcntl.fcntl(fd, fcntl.F_GETFL) & os.O_APPEND)
