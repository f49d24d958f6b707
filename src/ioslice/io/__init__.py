"""I/O layer for ioslice - bounded views over seekable resources."""

from pathlib import Path
from typing import Union

# Re-export these for import convenience
from .base import ReadableResource, WritableResource, SeekableResource, Resource, DEFAULT_CHUNK_SIZE
from .view import BoundedView, ReadableView, WritableView, ReadWriteView
from .local import open_slice_path


def open_slice(source: Union[Resource, Path, str], start: int, length: int, *, mode: str = "rb", owned=None) -> BoundedView:
    """Factory function to create a view over a file-like object or a path.

    File-like objects are borrowed unless `owned` is true; paths are opened
    with `mode` and always owned by the returned view.
    """
    if hasattr(source, 'seek'):  # file-like
        return BoundedView(source, start, length, owned=bool(owned))
    if owned is False:
        raise ValueError("A view over a path always owns the file it opens")
    return open_slice_path(source, start, length, mode=mode)
