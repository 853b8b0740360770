"""
Tokenizer adapter built on the standard library's html.parser.

HTMLParser reports markup through callbacks and only knows line/column
positions, so this adapter records a mark per callback, converts positions to
absolute byte offsets, and turns the marks into Tokens that tile the input:
every input byte belongs to exactly one token, in order.

Input is decoded as latin-1, which maps each byte to one character, so
character offsets inside the parser equal byte offsets into the input.
"""

from __future__ import annotations

import html.parser
from collections.abc import Iterator
from dataclasses import dataclass

from stylespans.adapters.sources.bytes_reader import ByteReader
from stylespans.core.errors import TokenizationError
from stylespans.core.models import Token, TokenKind

DEFAULT_CHUNK_SIZE = 4096

_SEMICOLON = ord(";")


@dataclass
class _Mark:
    kind: TokenKind
    start: int
    length: int | None  # None = runs up to the next mark
    tag: str = ""


class _TokenCollector(html.parser.HTMLParser):
    def __init__(self, data: bytes) -> None:
        super().__init__(convert_charrefs=False)
        self._data = data
        self._line_starts: list[int] = [0]
        self._marks: list[_Mark] = []
        self._emitted = 0  # end offset of the last token handed out

    # ── feeding ────────────────────────────────────────────────────────────

    def feed_chunk(self, chunk: bytes, base: int) -> None:
        """Feed chunk, which starts at absolute offset base."""
        newline = chunk.find(b"\n")
        while newline >= 0:
            self._line_starts.append(base + newline + 1)
            newline = chunk.find(b"\n", newline + 1)
        try:
            self.feed(chunk.decode("latin-1"))
        except AssertionError as e:
            raise TokenizationError(f"html.parser failed near byte {base}: {e}") from e

    def finish(self) -> None:
        # A trailing unterminated reference ("a&x") is text; html.parser would
        # otherwise drop its "&" when closing.
        pending = self.rawdata
        if pending.startswith("&") and "<" not in pending and not self.cdata_elem:
            self._text(len(pending))
            self.rawdata = ""
        try:
            self.close()
        except AssertionError as e:
            raise TokenizationError(f"html.parser failed at end of input: {e}") from e

    def _offset(self) -> int:
        lineno, column = self.getpos()
        return self._line_starts[lineno - 1] + column

    # ── marks ──────────────────────────────────────────────────────────────

    def _text(self, length: int) -> None:
        start = self._offset()
        last = self._marks[-1] if self._marks else None
        if (
            last is not None
            and last.kind is TokenKind.TEXT
            and last.length is not None
            and last.start + last.length == start
        ):
            last.length += length
            return
        self._marks.append(_Mark(TokenKind.TEXT, start, length))

    def _ref_length(self, prefix: int, name: str) -> int:
        # The parser consumes a trailing ";" when present, and only then.
        length = prefix + len(name)
        end = self._offset() + length
        if end < len(self._data) and self._data[end] == _SEMICOLON:
            length += 1
        return length

    def _mark(self, kind: TokenKind, length: int | None = None, tag: str = "") -> None:
        self._marks.append(_Mark(kind, self._offset(), length, tag))

    # ── HTMLParser callbacks ───────────────────────────────────────────────

    def handle_data(self, data: str) -> None:
        if data:
            self._text(len(data))

    def handle_entityref(self, name: str) -> None:
        self._text(self._ref_length(1, name))

    def handle_charref(self, name: str) -> None:
        self._text(self._ref_length(2, name))

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self._mark(TokenKind.START_TAG, len(self.get_starttag_text() or ""), tag.lower())

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        length = len(self.get_starttag_text() or "")
        self._mark(TokenKind.SELF_CLOSING_TAG, length, tag.lower())

    def handle_endtag(self, tag: str) -> None:
        start = self._offset()
        if self._data[start + 2 : start + 3].isspace():
            # "</ b>" is a bogus comment, not an end tag.
            self._marks.append(_Mark(TokenKind.COMMENT, start, None))
            return
        self._marks.append(_Mark(TokenKind.END_TAG, start, None, tag.lower()))

    def handle_comment(self, data: str) -> None:
        self._mark(TokenKind.COMMENT)

    def handle_decl(self, decl: str) -> None:
        self._mark(TokenKind.DOCTYPE)

    def handle_pi(self, data: str) -> None:
        self._mark(TokenKind.OTHER)

    def unknown_decl(self, data: str) -> None:
        self._mark(TokenKind.OTHER)

    # ── draining ───────────────────────────────────────────────────────────

    def drain(self, *, final: bool = False) -> list[Token]:
        """
        Convert settled marks to tokens.

        Until the end of input the last mark stays pending: text may continue
        in the next chunk and an end tag's extent is only known once the next
        mark starts.
        """
        marks = self._marks
        ready = len(marks) if final else len(marks) - 1
        tokens: list[Token] = []
        for index in range(max(ready, 0)):
            mark = marks[index]
            limit = marks[index + 1].start if index + 1 < len(marks) else len(self._data)
            if mark.start < self._emitted:
                raise TokenizationError(f"token at byte {mark.start} overlaps previous token")
            if mark.start > self._emitted:
                tokens.append(self._gap(self._emitted, mark.start))
            end = limit if mark.length is None else mark.start + mark.length
            tokens.append(self._token(mark.kind, mark.start, end, mark.tag))
        if ready > 0:
            del marks[:ready]
        if final and self._emitted < len(self._data):
            tokens.append(self._gap(self._emitted, len(self._data)))
        return tokens

    def _gap(self, start: int, end: int) -> Token:
        # Bytes the parser consumed without a callback: markup unless they
        # start outside a tag.
        is_markup = self._data[start : start + 1] == b"<"
        return self._token(TokenKind.OTHER if is_markup else TokenKind.TEXT, start, end)

    def _token(self, kind: TokenKind, start: int, end: int, tag: str = "") -> Token:
        self._emitted = end
        return Token(kind=kind, raw=self._data[start:end], start=start, end=end, tag=tag)


class HtmlParserTokenizer:
    """
    Implements TokenizerPort using html.parser.HTMLParser.

    Args:
        chunk_size: Number of bytes read from the byte source per parser feed.
    """

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be > 0, got {chunk_size}")
        self._chunk_size = chunk_size

    def tokenize(self, data: bytes) -> Iterator[Token]:
        """Yield the tokens of data in input order."""
        reader = ByteReader(data)
        collector = _TokenCollector(bytes(data))
        while True:
            base = reader.position
            chunk = reader.read(self._chunk_size)
            if not chunk:
                break
            collector.feed_chunk(chunk, base)
            yield from collector.drain()
        collector.finish()
        yield from collector.drain(final=True)
