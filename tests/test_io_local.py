"""Tests for views over local files."""

import os

import pytest
import tempfile
from pathlib import Path

from ioslice import ReadableView, WritableView, ReadWriteView, WindowExhausted
from ioslice.io.local import open_slice_path, file_size


class TestOpenSlicePath:
    """Test opening views over paths."""

    @pytest.fixture
    def blob(self, tmp_path):
        """A 100-byte file of known content."""
        path = tmp_path / "blob.bin"
        path.write_bytes(bytes(range(100)))
        return path

    def test_read_only(self, blob):
        """Test the default read-only mode."""
        with open_slice_path(blob, 10, 5) as view:
            assert isinstance(view, ReadableView)
            assert not view.writable()
            assert view.read() == bytes(range(10, 15))
            assert view.read(1) == b""
        assert view.resource.closed

    def test_read_write(self, blob):
        """Test r+b gives a read-write view that updates the file in place."""
        with open_slice_path(blob, 20, 4, mode="r+b") as view:
            assert isinstance(view, ReadWriteView)
            assert view.write(b"ABCDEF") == 4
            with pytest.raises(WindowExhausted):
                view.write(b"G")

        data = blob.read_bytes()
        assert len(data) == 100
        assert data[20:24] == b"ABCD"
        assert data[:20] == bytes(range(20))
        assert data[24:] == bytes(range(24, 100))

    def test_write_only_does_not_truncate(self, blob):
        """Test wb opens the existing file write-only without truncating it."""
        with open_slice_path(blob, 90, 10, mode="wb") as view:
            assert isinstance(view, WritableView)
            assert not hasattr(view, "read")
            view.write_all(b"z" * 10)

        data = blob.read_bytes()
        assert len(data) == 100
        assert data[:90] == bytes(range(90))
        assert data[90:] == b"z" * 10

    def test_window_past_end_of_file(self, blob):
        """Test a window running past EOF reads what exists and grows the file on write."""
        with open_slice_path(blob, 95, 10) as view:
            assert view.read() == bytes(range(95, 100))
            assert view.remaining == 5

        with open_slice_path(blob, 98, 4, mode="r+b") as view:
            view.write_all(b"wxyz")
        assert file_size(blob) == 102

    def test_str_path(self, blob):
        """Test using a str path."""
        with open_slice_path(str(blob), 0, 3) as view:
            assert view.read() == b"\x00\x01\x02"

    def test_missing_file(self, tmp_path):
        """Test that missing files are not created."""
        missing = tmp_path / "missing.bin"
        with pytest.raises(FileNotFoundError):
            open_slice_path(missing, 0, 10, mode="r+b")
        assert not missing.exists()

    def test_bad_mode(self, blob):
        with pytest.raises(ValueError, match="Unsupported mode"):
            open_slice_path(blob, 0, 10, mode="ab")

    def test_bad_window_closes_file(self, blob, monkeypatch):
        """Test the file handle is closed when the window is rejected."""
        opened = []
        real_fdopen = os.fdopen

        def tracking_fdopen(fd, mode):
            handle = real_fdopen(fd, mode)
            opened.append(handle)
            return handle

        monkeypatch.setattr("ioslice.io.local.os.fdopen", tracking_fdopen)
        with pytest.raises(ValueError):
            open_slice_path(blob, -1, 10)
        assert len(opened) == 1
        assert opened[0].closed


class TestFileSize:
    """Test file_size helper."""

    def test_file_size(self):
        with tempfile.NamedTemporaryFile() as f:
            f.write(b"0123456789")
            f.flush()
            assert file_size(f.name) == 10
            assert file_size(Path(f.name)) == 10
