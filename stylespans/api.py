"""
Public operations.

Each call builds its own token stream and state; nothing is shared between
calls, so the functions are safe to use from several threads on independent
inputs.
"""

from __future__ import annotations

from loguru import logger

from stylespans.adapters.tokenizers.html_parser import HtmlParserTokenizer
from stylespans.core.clean import clean_tokens
from stylespans.core.errors import MarkupError
from stylespans.core.models import Portions
from stylespans.core.ports import TokenizerPort
from stylespans.core.spans import track_spans


def _as_bytes(data: bytes) -> bytes:
    if isinstance(data, str):
        raise TypeError("expected a bytes-like object, got str; encode the markup first")
    return bytes(data)


def _tokenizer(tokenizer: TokenizerPort | None) -> TokenizerPort:
    return tokenizer if tokenizer is not None else HtmlParserTokenizer()


def extract_spans(data: bytes, *, tokenizer: TokenizerPort | None = None) -> Portions:
    """
    Return the style-tagged text spans of an HTML fragment.

    Args:
        data: The markup as bytes. Returned offsets index this buffer.
        tokenizer: Token source to use; defaults to HtmlParserTokenizer.

    Raises:
        UnbalancedMarkupError: A </b> or </i> with no open counterpart.
        TokenizationError: The tokenizer failed.
    """
    data = _as_bytes(data)
    try:
        portions = track_spans(_tokenizer(tokenizer).tokenize(data))
    except MarkupError as e:
        logger.debug("extract_spans: {}", e)
        raise
    logger.debug("extract_spans: {} spans from {} bytes", len(portions), len(data))
    return portions


def extract_spans_and_clean(
    data: bytes, *, tokenizer: TokenizerPort | None = None
) -> tuple[Portions, bytes]:
    """
    Return spans in both source and cleaned coordinates, plus the cleaned markup.

    The cleaned markup keeps only text, ``<b>``/``<i>`` and their end tags, and
    a single space per ``<br>``. For well-formed input,
    ``cleaned[s.clean_start:s.clean_end] == data[s.start:s.end]`` for every span.

    Raises:
        UnbalancedMarkupError: A </b> or </i> with no open counterpart.
        TokenizationError: The tokenizer failed.
    """
    data = _as_bytes(data)
    try:
        portions = track_spans(_tokenizer(tokenizer).tokenize(data), rewrite=True)
    except MarkupError as e:
        logger.debug("extract_spans_and_clean: {}", e)
        raise
    cleaned = portions.cleaned or b""
    logger.debug(
        "extract_spans_and_clean: {} spans, {} -> {} bytes",
        len(portions),
        len(data),
        len(cleaned),
    )
    return portions, cleaned


def clean_plain_text(data: bytes, *, tokenizer: TokenizerPort | None = None) -> bytes:
    """Return the text content of data with every tag removed."""
    data = _as_bytes(data)
    return clean_tokens(_tokenizer(tokenizer).tokenize(data))


def clean_preserving_style_tags(data: bytes, *, tokenizer: TokenizerPort | None = None) -> bytes:
    """Return text plus canonical b/i tags, with a space for each br; other tags removed."""
    data = _as_bytes(data)
    return clean_tokens(_tokenizer(tokenizer).tokenize(data), keep_style=True)
