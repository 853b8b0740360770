"""
Tests that mock adapters correctly satisfy the Port protocols.
This ensures our Protocol definitions are complete and usable.
"""

from __future__ import annotations

from collections.abc import Iterator

from stylespans.adapters.sources.bytes_reader import ByteReader
from stylespans.adapters.tokenizers.html_parser import HtmlParserTokenizer
from stylespans.api import clean_preserving_style_tags, extract_spans
from stylespans.core.models import Token, TokenKind
from stylespans.core.ports import ByteSourcePort, TokenizerPort


class WordTokenizer:
    """Minimal tokenizer that satisfies TokenizerPort: one text token per word."""

    def tokenize(self, data: bytes) -> Iterator[Token]:
        pos = 0
        for word in data.split(b" "):
            yield Token(TokenKind.TEXT, word, pos, pos + len(word))
            pos += len(word)
            if pos < len(data):
                yield Token(TokenKind.OTHER, b" ", pos, pos + 1)
                pos += 1


def test_mock_tokenizer_drives_public_api() -> None:
    tokenizer: TokenizerPort = WordTokenizer()
    portions = extract_spans(b"ab cd", tokenizer=tokenizer)
    assert portions.positions == [(0, 2), (3, 5)]
    assert clean_preserving_style_tags(b"ab cd", tokenizer=tokenizer) == b"abcd"


def test_adapters_satisfy_ports() -> None:
    tokenizer: TokenizerPort = HtmlParserTokenizer()
    source: ByteSourcePort = ByteReader(b"x")
    assert list(tokenizer.tokenize(b"x"))[0].raw == b"x"
    assert source.read() == b"x"
