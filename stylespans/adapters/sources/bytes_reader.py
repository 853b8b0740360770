"""In-memory byte source that reports its absolute read offset."""

from __future__ import annotations


class ByteReader:
    """
    Implements ByteSourcePort over a bytes-like buffer.

    One reader is created per tokenize call; it never reads past the end of
    the buffer and returns b"" once exhausted.

    Args:
        data: The input buffer. Copied to bytes, so later mutation of a
              bytearray argument does not affect offsets.
    """

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0

    def __len__(self) -> int:
        return len(self._data)

    @property
    def position(self) -> int:
        """Number of bytes consumed so far."""
        return self._pos

    @property
    def remaining(self) -> int:
        return len(self._data) - self._pos

    def read(self, size: int = -1) -> bytes:
        """Return up to size bytes (all remaining if size is negative)."""
        if self._pos >= len(self._data):
            return b""
        end = len(self._data) if size < 0 else min(self._pos + size, len(self._data))
        chunk = self._data[self._pos : end]
        self._pos = end
        return chunk
