import io
import typing

import pytest

from ioslice.core.model import SliceInfo, SliceError, WindowExhausted
from ioslice.core.util import check_offset, info_asdict
from ioslice.io.view import BoundedView, ReadableView, WritableView
from ioslice.io.base import (
    ReadableResource, WritableResource, SeekableResource,
    Resource, capabilities, is_append_mode, is_readable, is_writable, is_seekable,
)


class TestErrors:
    """Test the exception taxonomy."""

    def test_window_exhausted_hierarchy(self):
        err = WindowExhausted("full")
        assert isinstance(err, SliceError)
        assert isinstance(err, RuntimeError)
        assert isinstance(err, EOFError)
        # must not be mistaken for a resource failure
        assert not isinstance(err, OSError)


class TestCheckOffset:
    """Test window argument validation."""

    def test_accepts_non_negative_ints(self):
        assert check_offset("start", 0) == 0
        assert check_offset("start", 2**63) == 2**63

    def test_rejects_negative(self):
        with pytest.raises(ValueError, match="start cannot be negative: -3"):
            check_offset("start", -3)

    def test_rejects_non_integers(self):
        with pytest.raises(TypeError, match="length must be an integer, not str"):
            check_offset("length", "10")
        with pytest.raises(TypeError, match="not float"):
            check_offset("length", 10.0)


class TestInfoAsdict:
    """Test SliceInfo serialisation."""

    def test_full_payload(self):
        info = SliceInfo(start=10, length=20, position=5, remaining=15,
                         readable=True, writable=False, resource_size=25)
        payload = info_asdict(info)
        assert payload == {
            "start": 10, "length": 20, "end": 30, "position": 5, "remaining": 15,
            "readable": True, "writable": False, "resource_size": 25, "complete": False,
        }

    def test_unknown_size_skipped(self):
        info = SliceInfo(0, 4, 0, 4, True, True)
        payload = info_asdict(info)
        assert "resource_size" not in payload
        assert "complete" not in payload

    def test_field_filter(self):
        info = SliceInfo(0, 4, 0, 4, True, True, resource_size=4)
        assert info_asdict(info, fields=["end", "complete", "bogus"]) == {"end": 4, "complete": True}


class TestCapabilities:
    """Test capability detection on real io objects."""

    def test_bytes_io(self):
        bio = io.BytesIO()
        assert capabilities(bio) == (True, True)
        assert isinstance(bio, ReadableResource)
        assert isinstance(bio, WritableResource)

    def test_buffered_reader(self, tmp_path):
        path = tmp_path / "f.bin"
        path.write_bytes(b"abc")
        with open(path, "rb") as f:
            # BufferedReader has a write() that always raises; writable() tells the truth
            assert is_readable(f)
            assert not is_writable(f)
            assert capabilities(f) == (True, False)

    def test_buffered_writer(self, tmp_path):
        with open(tmp_path / "f.bin", "wb") as f:
            assert capabilities(f) == (False, True)

    def test_not_seekable(self):
        class Pipe:
            def read(self, n=-1):
                return b""

        assert not is_seekable(Pipe())
        assert not isinstance(Pipe(), SeekableResource)
        with pytest.raises(TypeError, match="does not support seek"):
            capabilities(Pipe())

    def test_append_mode_detection(self, tmp_path):
        path = tmp_path / "f.bin"
        path.write_bytes(b"abc")
        assert not is_append_mode(io.BytesIO())
        with open(path, "r+b") as f:
            assert not is_append_mode(f)
        with open(path, "ab") as f:
            assert is_append_mode(f)

    def test_view_annotations_use_protocols(self):
        """The view's resource parameters are typed with the capability protocols."""
        assert typing.get_type_hints(BoundedView.__init__)["resource"] == Resource
        assert typing.get_type_hints(ReadableView._check_resource)["resource"] is ReadableResource
        assert typing.get_type_hints(WritableView._check_resource)["resource"] is WritableResource
