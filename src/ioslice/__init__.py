"""ioslice - bounded read/write views over byte ranges of seekable resources."""

from .core.model import SliceInfo, SliceError, WindowExhausted, IncompleteRead  # re-export
from .io import open_slice, open_slice_path
from .io.view import BoundedView, ReadableView, WritableView, ReadWriteView

__all__ = [
    "BoundedView", "ReadableView", "WritableView", "ReadWriteView",
    "open_slice", "open_slice_path",
    "SliceInfo", "SliceError", "WindowExhausted", "IncompleteRead",
]
