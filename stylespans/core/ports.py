"""
Port interfaces for stylespans.

These are Python Protocol classes defining the contracts that adapters must satisfy.
The core domain imports ONLY from this file (and models.py) for any external dependency.

Adapters implement these protocols without inheriting from them (structural subtyping).
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Protocol

from stylespans.core.models import Token


class ByteSourcePort(Protocol):
    """
    Interface for the input buffer as seen by a tokenizer.

    Exposes the bytes in chunks plus the absolute read offset, so a tokenizer
    can translate its own positions into offsets into the original input.
    """

    @property
    def position(self) -> int:
        """Number of bytes consumed so far."""
        ...

    def read(self, size: int = -1) -> bytes:
        """Return up to size bytes (all remaining if negative); b"" at end of input."""
        ...


class TokenizerPort(Protocol):
    """
    Interface for HTML tokenization.

    Implementations must yield, in input order, one token per run of text and
    one per tag, with tag names lower-cased and each token's raw bytes and
    half-open [start, end) input range. Exhausting the iterator means end of
    input; any other lexing failure raises TokenizationError.
    """

    def tokenize(self, data: bytes) -> Iterator[Token]:
        """Yield the tokens of data in order."""
        ...
