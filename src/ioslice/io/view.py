"""Bounded views over seekable byte resources.

A view restricts every read and write to the window ``[start, start + length)``
of the wrapped resource. The view keeps its own cursor and seeks the resource
to ``start + cursor`` before every transfer, so other users of the same
resource may move its position freely between view operations.
"""

from __future__ import annotations

import io
import logging
import os
from typing import Any, Iterator, Optional

from ..core.model import IncompleteRead, SliceInfo, WindowExhausted
from ..core.util import check_offset
from .base import (
    DEFAULT_CHUNK_SIZE, ReadableResource, Resource, WritableResource,
    capabilities, is_append_mode, is_readable, is_seekable, is_writable,
)

logger = logging.getLogger(__name__)


class BoundedView:
    """A window of ``length`` bytes starting at absolute offset ``start``.

    ``BoundedView(resource, start, length)`` returns a :class:`ReadableView`,
    :class:`WritableView` or :class:`ReadWriteView` depending on what the
    resource supports. Views over a read-only resource have no ``write``
    attribute at all, and vice versa.

    With ``owned=True`` (the default) closing the view closes the resource.
    Pass ``owned=False`` to borrow a resource the caller keeps using.
    """

    def __new__(cls, resource: Resource, start: int, length: int, *, owned: bool = True):
        if cls is BoundedView:
            readable, writable = capabilities(resource)
            if readable and writable:
                cls = ReadWriteView
            elif readable:
                cls = ReadableView
            else:
                cls = WritableView
        return super().__new__(cls)

    def __init__(self, resource: Resource, start: int, length: int, *, owned: bool = True):
        self._check_resource(resource)
        self._start = check_offset("start", start)
        self._length = check_offset("length", length)
        self._resource = resource
        self._cursor = 0
        self._closed = False
        self.owned = owned
        logger.debug("%s over %s: window [%d, %d)", type(self).__name__,
                     type(resource).__name__, self._start, self._start + self._length)

    def _check_resource(self, resource: Any) -> None:
        if not is_seekable(resource):
            raise TypeError(f"{type(resource).__name__} object does not support seek()")

    # --- window geometry ---
    @property
    def resource(self) -> Resource:
        return self._resource

    @property
    def start(self) -> int:
        return self._start

    @property
    def length(self) -> int:
        return self._length

    @property
    def end(self) -> int:
        """Absolute offset one past the last byte of the window."""
        return self._start + self._length

    @property
    def position(self) -> int:
        return self._cursor

    @property
    def remaining(self) -> int:
        return self._length - self._cursor

    def tell(self) -> int:
        self._check_closed()
        return self._cursor

    def __len__(self) -> int:
        return self._length

    def readable(self) -> bool:
        return False

    def writable(self) -> bool:
        return False

    def seekable(self) -> bool:
        # the cursor only moves forward
        return False

    def info(self) -> SliceInfo:
        return SliceInfo(
            start=self._start,
            length=self._length,
            position=self._cursor,
            remaining=self.remaining,
            readable=self.readable(),
            writable=self.writable(),
        )

    # --- positioning ---
    def _seek_to_cursor(self) -> int:
        target = self._start + self._cursor
        landed = self._resource.seek(target)
        if landed is not None and landed != target:
            raise OSError(f"Seek to offset {target} landed at {landed}")
        return target

    # --- copies ---
    def clone(self) -> "BoundedView":
        """Return a view of the same window and cursor borrowing the same resource."""
        self._check_closed()
        other = type(self)(self._resource, self._start, self._length, owned=False)
        other._cursor = self._cursor
        return other

    def dup(self) -> "BoundedView":
        """Return a view of the same window and cursor over a duplicated file descriptor.

        The new view owns its descriptor. Raises io.UnsupportedOperation when the
        resource is not backed by one.
        """
        self._check_closed()
        fileno = getattr(self._resource, "fileno", None)
        if fileno is None:
            raise io.UnsupportedOperation(f"{type(self._resource).__name__} object has no fileno()")
        fd = os.dup(fileno())
        try:
            handle = os.fdopen(fd, self._dup_mode())
        except BaseException:
            os.close(fd)
            raise
        other = type(self)(handle, self._start, self._length, owned=True)
        other._cursor = self._cursor
        return other

    def _dup_mode(self) -> str:
        # reopening an existing descriptor never truncates, even with "w"
        if self.readable() and self.writable():
            return "rb+"
        return "rb" if self.readable() else "wb"

    # --- lifecycle ---
    @property
    def closed(self) -> bool:
        return self._closed

    def _check_closed(self) -> None:
        if self._closed:
            raise ValueError("I/O operation on closed view")

    def close(self) -> None:
        """Close the view, and the resource too when the view owns it."""
        if self._closed:
            return
        self._closed = True
        if self.owned:
            close = getattr(self._resource, "close", None)
            if close is not None:
                close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __repr__(self) -> str:
        return (f"<{type(self).__name__} start={self._start} length={self._length} "
                f"position={self._cursor} owned={self.owned}>")


class ReadableView(BoundedView):
    """View over a readable resource."""

    def _check_resource(self, resource: ReadableResource) -> None:
        if not is_readable(resource):
            raise TypeError(f"{type(resource).__name__} object is not readable")
        super()._check_resource(resource)

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> Optional[int]:
        """Read up to len(buffer) bytes of the window into `buffer`.

        Returns the number of bytes read; 0 once the window is exhausted.
        Short reads from the resource are returned as they are.
        """
        self._check_closed()
        dest = memoryview(buffer).cast("B")
        want = min(dest.nbytes, self.remaining)
        if want == 0:
            return 0
        try:
            offset = self._seek_to_cursor()
            count = self._read_into(dest[:want])
        except OSError:
            logger.debug("Read of %d bytes at offset %d failed", want,
                         self._start + self._cursor, exc_info=True)
            raise
        if count is None:
            # non-blocking resource with nothing available
            return None
        self._cursor += count
        logger.debug("Read %d/%d bytes at offset %d", count, want, offset)
        return count

    def _read_into(self, dest: memoryview) -> Optional[int]:
        readinto = getattr(self._resource, "readinto", None)
        if readinto is not None:
            count = readinto(dest)
        else:
            data = self._resource.read(len(dest))
            if data is None:
                return None
            count = len(data)
            if count <= len(dest):
                dest[:count] = data
        if count is not None and count > len(dest):
            raise OSError(f"Resource returned {count} bytes for a {len(dest)} byte request")
        return count

    def read(self, size: Optional[int] = -1) -> Optional[bytes]:
        """Read up to `size` bytes, or the rest of the window when size is negative."""
        if size is None or size < 0:
            return self.readall()
        self._check_closed()
        buffer = bytearray(min(size, self.remaining))
        count = self.readinto(buffer)
        if count is None:
            return None
        del buffer[count:]
        return bytes(buffer)

    def readall(self) -> bytes:
        """Read until the window is exhausted or the resource runs out of data."""
        self._check_closed()
        return b"".join(self.iter_chunks())

    def read_exact(self, size: int) -> bytes:
        """Read exactly `size` bytes or nothing.

        Raises IncompleteRead, leaving the cursor where it was, when the
        window or the resource ends before `size` bytes are available.
        """
        self._check_closed()
        size = check_offset("size", size)
        if size > self.remaining:
            raise IncompleteRead(f"Cannot read {size} bytes: only {self.remaining} left in window "
                                 f"[{self._start}, {self.end})")
        cursor = self._cursor
        buffer = bytearray(size)
        dest = memoryview(buffer)
        filled = 0
        try:
            while filled < size:
                count = self.readinto(dest[filled:])
                if not count:
                    raise IncompleteRead(f"Resource ended after {filled} of {size} bytes at offset "
                                         f"{self._start + cursor}")
                filled += count
        except BaseException:
            self._cursor = cursor
            raise
        return bytes(buffer)

    def iter_chunks(self, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[bytes]:
        """Yield successive chunks of at most `chunk_size` bytes until no more data."""
        self._check_closed()
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        while self.remaining:
            chunk = self.read(min(chunk_size, self.remaining))
            if not chunk:
                return
            yield chunk


class WritableView(BoundedView):
    """View over a writable resource."""

    def _check_resource(self, resource: WritableResource) -> None:
        if not is_writable(resource):
            raise TypeError(f"{type(resource).__name__} object is not writable")
        if is_append_mode(resource):
            raise ValueError(f"{type(resource).__name__} object is in append mode; "
                             "writes would ignore the window")
        super()._check_resource(resource)

    def writable(self) -> bool:
        return True

    def write(self, data) -> int:
        """Write as much of `data` as fits in the window and return the count.

        Raises WindowExhausted when no room is left. The caller resubmits
        whatever was not accepted, as with any short write.
        """
        self._check_closed()
        if self.remaining == 0:
            logger.debug("Write rejected: window [%d, %d) is exhausted", self._start, self.end)
            raise WindowExhausted(f"Window [{self._start}, {self.end}) is exhausted")
        src = memoryview(data).cast("B")
        want = min(src.nbytes, self.remaining)
        if want == 0:
            return 0
        try:
            offset = self._seek_to_cursor()
            count = self._resource.write(src[:want])
        except OSError:
            logger.debug("Write of %d bytes at offset %d failed", want,
                         self._start + self._cursor, exc_info=True)
            raise
        if count is None:
            # file-likes that do not report a count accept everything
            count = want
        elif count > want:
            raise OSError(f"Resource reported {count} bytes written for a {want} byte request")
        self._cursor += count
        logger.debug("Wrote %d/%d bytes at offset %d", count, want, offset)
        return count

    def write_all(self, data) -> None:
        """Write all of `data`, or nothing if it does not fit in the window."""
        self._check_closed()
        src = memoryview(data).cast("B")
        if src.nbytes > self.remaining:
            raise WindowExhausted(
                f"Cannot write {src.nbytes} bytes: only {self.remaining} left in window "
                f"[{self._start}, {self.end})"
            )
        while src.nbytes:
            count = self.write(src)
            if count == 0:
                raise OSError(f"Resource accepted 0 bytes at offset {self._start + self._cursor}")
            src = src[count:]

    def flush(self) -> None:
        self._check_closed()
        flush = getattr(self._resource, "flush", None)
        if flush is not None:
            flush()


class ReadWriteView(ReadableView, WritableView):
    """View over a resource that is both readable and writable."""
    pass
