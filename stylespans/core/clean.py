"""
Offset-free cleaners.

Same dispatch as the span tracker restricted to output writes. No depth is
tracked, so tags are re-emitted regardless of nesting balance.
"""

from __future__ import annotations

from collections.abc import Iterable

from stylespans.core.models import Token, TokenKind
from stylespans.core.spans import BREAK, BREAK_LITERAL, CLOSE_LITERALS, OPEN_LITERALS


def clean_tokens(tokens: Iterable[Token], *, keep_style: bool = False) -> bytes:
    """
    Concatenate the text of tokens, optionally keeping canonical style markup.

    Args:
        tokens: Token stream in input order.
        keep_style: Re-emit b/i start and end tags as ``<b>``, ``</b>``, ``<i>``,
            ``</i>`` and each ``<br>`` as a single space. All other tags are dropped.

    Raises:
        TokenizationError: Propagated from the token stream.
    """
    out = bytearray()
    for token in tokens:
        kind = token.kind
        if kind is TokenKind.TEXT:
            out += token.raw
        elif not keep_style:
            continue
        elif kind is TokenKind.START_TAG:
            if token.tag in OPEN_LITERALS:
                out += OPEN_LITERALS[token.tag]
            elif token.tag == BREAK:
                out += BREAK_LITERAL
        elif kind is TokenKind.END_TAG:
            if token.tag in CLOSE_LITERALS:
                out += CLOSE_LITERALS[token.tag]
        elif kind is TokenKind.SELF_CLOSING_TAG and token.tag == BREAK:
            out += BREAK_LITERAL
    return bytes(out)
