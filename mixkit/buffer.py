"""Ring buffer of float samples handing out contiguous read and write regions."""

from __future__ import annotations

from array import array
from contextlib import contextmanager
from typing import Iterator, Optional, Tuple


def _zeroed(size: int) -> array:
    return array("f", bytes(4 * size))


class Buffer:
    """A single-producer, single-consumer ring of 32-bit float samples.

    Writers request a contiguous region, fill it and commit it with
    ``finish_write``; readers do the same with ``request_read`` and
    ``finish_read``.  Regions never wrap: a region always ends at the end of
    the storage or at the opposing cursor.
    """

    def __init__(self, size: int):
        if size < 0:
            raise ValueError(f"buffer size must not be negative, got {size}")
        self.size = size
        self.virtual = False
        self._data = _zeroed(size)
        self._read = 0
        self._write = 0
        self._full = False

    def __repr__(self) -> str:
        return (
            f"Buffer(size={self.size}, readable={self.available_read()}, "
            f"writable={self.available_write()})"
        )

    def available_read(self) -> int:
        """Number of committed samples readable in one contiguous region."""
        if self._read < self._write:
            return self._write - self._read
        if self._write < self._read or self._full:
            return self.size - self._read
        return 0

    def available_write(self) -> int:
        """Number of samples writable in one contiguous region."""
        if self._read < self._write:
            return self.size - self._write
        if self._write < self._read:
            return self._read - self._write
        if self._full:
            return 0
        return self.size - self._write

    def _region(self, start: int, count: int) -> memoryview:
        return memoryview(self._data)[start:start + count]

    def request_read(self, count: Optional[int] = None) -> memoryview:
        """Return a view of up to ``count`` readable samples (all if None).

        The view is empty when nothing has been committed yet.
        """
        available = self.available_read()
        if count is not None:
            available = min(available, count)
        return self._region(self._read, available)

    def finish_read(self, count: int) -> None:
        """Mark ``count`` samples as consumed."""
        if count < 0 or self.available_read() < count:
            raise ValueError(
                f"cannot consume {count} samples, only {self.available_read()} readable"
            )
        if count:
            self._read = (self._read + count) % self.size
            self._full = False

    def request_write(self, count: Optional[int] = None) -> memoryview:
        """Return a view of up to ``count`` writable samples (all if None)."""
        available = self.available_write()
        if count is not None:
            available = min(available, count)
        return self._region(self._write, available)

    def finish_write(self, count: int) -> None:
        """Commit ``count`` written samples so that readers can see them."""
        if count < 0 or self.available_write() < count:
            raise ValueError(
                f"cannot commit {count} samples, only {self.available_write()} writable"
            )
        if count:
            self._write = (self._write + count) % self.size
            if self._write == self._read:
                self._full = True

    def clear(self) -> None:
        """Drop all contents and reset both cursors."""
        self._read = 0
        self._write = 0
        self._full = False

    def resize(self, size: int) -> None:
        """Replace the storage with a zeroed one of ``size`` samples, discarding contents."""
        if size < 0:
            raise ValueError(f"buffer size must not be negative, got {size}")
        self._data = _zeroed(size)
        self.size = size
        self.clear()

    def share_from(self, other: "Buffer") -> None:
        """Make this buffer a view onto the storage and cursors of ``other``."""
        self._data = other._data
        self.size = other.size
        self._read = other._read
        self._write = other._write
        self._full = other._full
        self.virtual = True

    def _release(self) -> None:
        self._data = _zeroed(0)
        self.size = 0
        self.virtual = False
        self.clear()


@contextmanager
def transfer_samples(
    source: Buffer, target: Buffer
) -> Iterator[Tuple[memoryview, memoryview]]:
    """Yield matching input and output views; commit both on normal exit.

    When ``source`` is ``target`` the same readable view is yielded twice and
    nothing is committed, so the data can be processed in place.
    """
    if source is target:
        view = source.request_read()
        yield view, view
        return
    count = min(source.available_read(), target.available_write())
    inp = source.request_read(count)
    out = target.request_write(count)
    yield inp, out
    source.finish_read(count)
    target.finish_write(count)


def transfer(source: Buffer, target: Buffer) -> int:
    """Move readable samples from ``source`` into ``target``; return the count."""
    if source is target:
        return source.available_read()
    with transfer_samples(source, target) as (inp, out):
        out[:] = inp
        return len(out)


def copy(source: Buffer, target: Buffer) -> int:
    """Copy readable samples into ``target`` without consuming them."""
    if source is target:
        return source.available_read()
    count = min(source.available_read(), target.available_write())
    target.request_write(count)[:] = source.request_read(count)
    target.finish_write(count)
    return count