"""Seek/transfer counts for reading a window with different chunk sizes.

Every view operation seeks the resource first; this shows how many seeks a
full read of a window costs for a given chunk size. Meant for manual runs.
"""

import io
import sys
import time
from pathlib import Path

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from ioslice import BoundedView


class CountingBytesIO(io.BytesIO):
    """BytesIO that counts seeks and bytes read."""

    def __init__(self, data):
        super().__init__(data)
        self.seeks = 0
        self.bytes_read = 0

    def seek(self, offset, whence=0):
        self.seeks += 1
        return super().seek(offset, whence)

    def readinto(self, buffer):
        n = super().readinto(buffer)
        self.bytes_read += n
        return n


def run(chunk_size: int, size: int = 16 * 1024 * 1024, start: int = 4096) -> None:
    resource = CountingBytesIO(bytes(size))
    length = size - 2 * start
    view = BoundedView(resource, start, length)

    t0 = time.perf_counter()
    total = sum(len(chunk) for chunk in view.iter_chunks(chunk_size))
    elapsed = time.perf_counter() - t0

    assert total == length, f"read {total} of {length} bytes"
    assert resource.bytes_read == length
    print(f"chunk={chunk_size:>8}  seeks={resource.seeks:>6}  "
          f"bytes={resource.bytes_read}  {elapsed * 1000:8.1f} ms")


if __name__ == "__main__":
    print("ioslice seek benchmark")
    print("=" * 40)

    for chunk_size in (512, 4096, 64 * 1024, 1024 * 1024):
        run(chunk_size)

    print("\nBenchmark complete!")
