"""A growable byte buffer and a pool for reusing buffers."""

from __future__ import annotations

from collections import deque


class ByteBuffer:
    """Byte buffer that can be used as a binary writer."""

    __slots__ = ("b",)

    def __init__(self, data: bytes = b"") -> None:
        self.b = bytearray(data)

    def write(self, p) -> int:
        """Append p and return the number of bytes written."""
        self.b += p
        return len(p)

    def write_string(self, s: str) -> int:
        """Append s encoded as UTF-8 and return the number of bytes written."""
        data = s.encode("utf-8")
        self.b += data
        return len(data)

    def set(self, p) -> None:
        """Replace the contents with p."""
        self.b[:] = p

    def set_string(self, s: str) -> None:
        """Replace the contents with s encoded as UTF-8."""
        self.b[:] = s.encode("utf-8")

    def reset(self) -> None:
        """Make the buffer empty."""
        self.b.clear()

    def __bytes__(self) -> bytes:
        return bytes(self.b)

    def __len__(self) -> int:
        return len(self.b)

    def __repr__(self) -> str:
        return f"ByteBuffer({bytes(self.b)!r})"


_pool: deque[ByteBuffer] = deque(maxlen=1024)


def acquire_byte_buffer() -> ByteBuffer:
    """Return an empty buffer, reusing a released one when available."""
    try:
        return _pool.pop()
    except IndexError:
        return ByteBuffer()


def release_byte_buffer(buf: ByteBuffer) -> None:
    """Return a buffer to the pool; it must not be used afterwards."""
    buf.reset()
    _pool.append(buf)