"""
Core data models for stylespans.

These are plain dataclasses with no external dependencies beyond the standard
library. Offsets are always byte offsets: ``start``/``end`` index the caller's
input buffer, ``clean_start``/``clean_end`` index the cleaned output buffer.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class TokenKind(Enum):
    """Classification of a lexed piece of markup."""

    TEXT = "text"
    START_TAG = "start_tag"
    END_TAG = "end_tag"
    SELF_CLOSING_TAG = "self_closing_tag"
    COMMENT = "comment"
    DOCTYPE = "doctype"
    OTHER = "other"  # processing instructions, CDATA, markup the lexer discards


@dataclass(frozen=True)
class Token:
    """A single token produced by a tokenizer, with its half-open input range."""

    kind: TokenKind
    raw: bytes
    start: int
    end: int
    tag: str = ""  # lower-cased tag name for tag kinds


@dataclass(frozen=True)
class Span:
    """One run of plain text with the style flags active where it was seen."""

    start: int
    end: int
    bold: bool = False
    italic: bool = False
    clean_start: int | None = None  # only set by the rewriting variant
    clean_end: int | None = None

    def text(self, source: bytes) -> bytes:
        """Return the bytes this span covers in the original input."""
        return bytes(source[self.start : self.end])

    def clean_text(self, cleaned: bytes) -> bytes:
        """Return the bytes this span covers in the cleaned buffer."""
        if self.clean_start is None or self.clean_end is None:
            raise ValueError("span has no cleaned offsets")
        return bytes(cleaned[self.clean_start : self.clean_end])


@dataclass
class Portions:
    """
    Ordered text spans extracted from one input buffer.

    The parallel-array properties (``positions``, ``bolded``, ``italicised``,
    ``adjusted``) present the same data index-aligned, for callers that prefer
    columns over records.
    """

    spans: list[Span] = field(default_factory=list)
    cleaned: bytes | None = None

    def __len__(self) -> int:
        return len(self.spans)

    def __iter__(self) -> Iterator[Span]:
        return iter(self.spans)

    @property
    def positions(self) -> list[tuple[int, int]]:
        return [(s.start, s.end) for s in self.spans]

    @property
    def bolded(self) -> list[bool]:
        return [s.bold for s in self.spans]

    @property
    def italicised(self) -> list[bool]:
        return [s.italic for s in self.spans]

    @property
    def adjusted(self) -> list[tuple[int, int]] | None:
        """Cleaned-buffer ranges, or None when no cleaned offsets were tracked."""
        if self.cleaned is None:
            return None
        return [(s.clean_start or 0, s.clean_end or 0) for s in self.spans]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        d: dict[str, Any] = {
            "positions": [list(p) for p in self.positions],
            "bolded": self.bolded,
            "italicised": self.italicised,
        }
        adjusted = self.adjusted
        if adjusted is not None:
            d["adjusted"] = [list(a) for a in adjusted]
        return d
