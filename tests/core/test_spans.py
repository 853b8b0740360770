"""Tests for the span-tracking loop, driven by hand-built token streams."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from stylespans.core.errors import TokenizationError, UnbalancedMarkupError
from stylespans.core.models import Token, TokenKind
from stylespans.core.spans import DepthTable, track_spans


def _stream(*pieces: tuple[TokenKind, str, str]) -> list[Token]:
    """Build a tiling token stream from (kind, raw, tag) pieces."""
    tokens: list[Token] = []
    pos = 0
    for kind, raw, tag in pieces:
        data = raw.encode()
        tokens.append(Token(kind=kind, raw=data, start=pos, end=pos + len(data), tag=tag))
        pos += len(data)
    return tokens


def text(raw: str) -> tuple[TokenKind, str, str]:
    return (TokenKind.TEXT, raw, "")


def start(tag: str, raw: str | None = None) -> tuple[TokenKind, str, str]:
    return (TokenKind.START_TAG, raw or f"<{tag}>", tag)


def end(tag: str) -> tuple[TokenKind, str, str]:
    return (TokenKind.END_TAG, f"</{tag}>", tag)


def selfclosing(tag: str) -> tuple[TokenKind, str, str]:
    return (TokenKind.SELF_CLOSING_TAG, f"<{tag}/>", tag)


class TestDepthTable:
    def test_open_and_close(self) -> None:
        depth = DepthTable()
        depth.open("b")
        depth.open("b")
        assert depth.active("b")
        depth.close("b", 0)
        assert depth.active("b")
        depth.close("b", 0)
        assert not depth.active("b")

    def test_close_at_zero_raises(self) -> None:
        depth = DepthTable()
        with pytest.raises(UnbalancedMarkupError) as exc_info:
            depth.close("i", 7)
        assert exc_info.value.tag == "i"
        assert exc_info.value.offset == 7

    def test_membership_is_limited_to_style_tags(self) -> None:
        depth = DepthTable()
        assert "b" in depth
        assert "i" in depth
        assert "br" not in depth
        assert "span" not in depth


class TestTrackSpans:
    def test_style_flags_follow_depth(self) -> None:
        tokens = _stream(
            start("b"), text("bold "), start("i"), text("both"), end("i"), end("b"), text("none")
        )
        portions = track_spans(tokens)
        assert [(s.bold, s.italic) for s in portions] == [
            (True, False),
            (True, True),
            (False, False),
        ]
        assert portions.positions == [(3, 8), (11, 15), (23, 27)]
        assert portions.cleaned is None
        assert portions.adjusted is None

    def test_nested_same_tag_stays_active_until_outermost_close(self) -> None:
        tokens = _stream(start("i"), start("i"), end("i"), text("x"), end("i"), text("y"))
        assert track_spans(tokens).italicised == [True, False]

    def test_rewrite_builds_cleaned_buffer(self) -> None:
        tokens = _stream(
            start("b", '<b class="x">'),
            text("bold"),
            end("b"),
            selfclosing("br"),
            start("span"),
            text("tail"),
            end("span"),
        )
        portions = track_spans(tokens, rewrite=True)
        assert portions.cleaned == b"<b>bold</b> tail"
        assert portions.adjusted == [(3, 7), (12, 16)]
        assert portions.positions == [(13, 17), (32, 36)]

    def test_literal_lengths_drive_clean_offsets(self) -> None:
        tokens = _stream(start("b"), start("i"), text("x"), end("i"), end("b"), text("y"))
        portions = track_spans(tokens, rewrite=True)
        assert portions.cleaned == b"<b><i>x</i></b>y"
        assert portions.adjusted == [(6, 7), (15, 16)]

    def test_br_start_tag_emits_space(self) -> None:
        tokens = _stream(text("a"), start("br"), text("b"))
        portions = track_spans(tokens, rewrite=True)
        assert portions.cleaned == b"a b"
        assert portions.adjusted == [(0, 1), (2, 3)]

    def test_self_closing_style_tags_are_dropped(self) -> None:
        tokens = _stream(selfclosing("b"), text("x"), selfclosing("i"))
        portions = track_spans(tokens, rewrite=True)
        assert portions.cleaned == b"x"
        assert portions.bolded == [False]

    def test_comments_and_other_tokens_only_move_the_source_cursor(self) -> None:
        tokens = _stream(
            (TokenKind.COMMENT, "<!-- c -->", ""),
            (TokenKind.DOCTYPE, "<!DOCTYPE html>", ""),
            (TokenKind.OTHER, "</>", ""),
            text("x"),
        )
        portions = track_spans(tokens, rewrite=True)
        assert portions.positions == [(28, 29)]
        assert portions.cleaned == b"x"

    def test_adjacent_text_tokens_do_not_overlap(self) -> None:
        # Some tokenizers split one run of text; each piece keeps its own range.
        tokens = _stream(text("Fish "), text("&amp;"), text(" chips"))
        portions = track_spans(tokens, rewrite=True)
        assert portions.positions == [(0, 5), (5, 10), (10, 16)]
        assert portions.adjusted == [(0, 5), (5, 10), (10, 16)]

    def test_unbalanced_end_tag_raises(self) -> None:
        tokens = _stream(start("b"), text("hi"), end("b"), end("b"))
        with pytest.raises(UnbalancedMarkupError) as exc_info:
            track_spans(tokens)
        assert exc_info.value.tag == "b"
        assert exc_info.value.offset == 9

    def test_unbalanced_italic_raises_in_rewrite_mode(self) -> None:
        with pytest.raises(UnbalancedMarkupError):
            track_spans(_stream(end("i")), rewrite=True)

    def test_unknown_end_tag_is_not_an_error(self) -> None:
        portions = track_spans(_stream(end("p"), text("x")))
        assert portions.positions == [(4, 5)]

    def test_tokenization_error_propagates(self) -> None:
        def failing() -> Iterator[Token]:
            yield from _stream(start("b"), text("partial"))
            raise TokenizationError("lexer failed")

        with pytest.raises(TokenizationError):
            track_spans(failing())

    def test_empty_stream(self) -> None:
        portions = track_spans([], rewrite=True)
        assert portions.spans == []
        assert portions.cleaned == b""
