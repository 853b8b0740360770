"""Extract style-tagged text spans from restricted HTML fragments."""

from __future__ import annotations

from loguru import logger

from stylespans.api import (
    clean_plain_text,
    clean_preserving_style_tags,
    extract_spans,
    extract_spans_and_clean,
)
from stylespans.core.errors import MarkupError, TokenizationError, UnbalancedMarkupError
from stylespans.core.models import Portions, Span, Token, TokenKind

# Library code stays quiet unless the application enables it.
logger.disable("stylespans")

__all__ = [
    "MarkupError",
    "Portions",
    "Span",
    "Token",
    "TokenKind",
    "TokenizationError",
    "UnbalancedMarkupError",
    "clean_plain_text",
    "clean_preserving_style_tags",
    "extract_spans",
    "extract_spans_and_clean",
]
