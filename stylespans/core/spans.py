"""
Style-tagged span tracking over a token stream.

A single forward pass keeps two cursors in lockstep: one into the source
buffer and, when rewriting, one into a freshly built cleaned buffer that holds
only text plus canonical ``<b>``/``<i>`` tags and a space per ``<br>``.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from stylespans.core.errors import UnbalancedMarkupError
from stylespans.core.models import Portions, Span, Token, TokenKind

BOLD = "b"
ITALIC = "i"
BREAK = "br"

STYLE_TAGS: tuple[str, ...] = (BOLD, ITALIC)

OPEN_LITERALS: dict[str, bytes] = {BOLD: b"<b>", ITALIC: b"<i>"}
CLOSE_LITERALS: dict[str, bytes] = {BOLD: b"</b>", ITALIC: b"</i>"}
BREAK_LITERAL = b" "


class DepthTable:
    """Nesting depth per style tag; a depth may never drop below zero."""

    def __init__(self, tags: Iterable[str] = STYLE_TAGS) -> None:
        self._depth: dict[str, int] = {tag: 0 for tag in tags}

    def __contains__(self, tag: str) -> bool:
        return tag in self._depth

    def open(self, tag: str) -> None:
        self._depth[tag] += 1

    def close(self, tag: str, offset: int) -> None:
        """Decrement the depth for tag. Raises UnbalancedMarkupError at zero."""
        if self._depth[tag] == 0:
            raise UnbalancedMarkupError(tag, offset)
        self._depth[tag] -= 1

    def active(self, tag: str) -> bool:
        return self._depth[tag] > 0


@dataclass
class _Cursor:
    """Source and cleaned-buffer write positions, advanced together per token."""

    source: int = 0
    clean: int = 0
    out: bytearray = field(default_factory=bytearray)

    def emit(self, literal: bytes) -> None:
        self.out += literal
        self.clean += len(literal)


def track_spans(tokens: Iterable[Token], *, rewrite: bool = False) -> Portions:
    """
    Walk tokens and collect style-tagged text spans.

    Args:
        tokens: Token stream in input order.
        rewrite: Also build the cleaned buffer and record each span's range in it.

    Returns:
        Portions with one Span per text token. With rewrite, ``cleaned`` holds the
        cleaned buffer and every span carries ``clean_start``/``clean_end``.

    Raises:
        UnbalancedMarkupError: An end tag for b or i with no open counterpart.
        TokenizationError: Propagated from the token stream.
    """
    depth = DepthTable()
    cursor = _Cursor()
    spans: list[Span] = []

    for token in tokens:
        kind = token.kind
        if kind is TokenKind.TEXT:
            length = len(token.raw)
            clean_start = clean_end = None
            if rewrite:
                clean_start = cursor.clean
                cursor.emit(token.raw)
                clean_end = cursor.clean
            spans.append(
                Span(
                    start=cursor.source,
                    end=cursor.source + length,
                    bold=depth.active(BOLD),
                    italic=depth.active(ITALIC),
                    clean_start=clean_start,
                    clean_end=clean_end,
                )
            )
        elif kind is TokenKind.START_TAG:
            if token.tag in depth:
                depth.open(token.tag)
                if rewrite:
                    cursor.emit(OPEN_LITERALS[token.tag])
            elif token.tag == BREAK and rewrite:
                cursor.emit(BREAK_LITERAL)
        elif kind is TokenKind.END_TAG:
            if token.tag in depth:
                depth.close(token.tag, token.start)
                if rewrite:
                    cursor.emit(CLOSE_LITERALS[token.tag])
        elif kind is TokenKind.SELF_CLOSING_TAG:
            if token.tag == BREAK and rewrite:
                cursor.emit(BREAK_LITERAL)
        # Every token, text included, moves the source cursor to its end.
        cursor.source = token.end

    if not rewrite:
        return Portions(spans=spans)
    return Portions(spans=spans, cleaned=bytes(cursor.out))
