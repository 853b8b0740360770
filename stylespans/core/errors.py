"""Exceptions raised by the extraction and cleaning operations."""

from __future__ import annotations


class MarkupError(ValueError):
    """Base class for input that cannot be processed."""


class TokenizationError(MarkupError):
    """The tokenizer failed on the input for a reason other than end of input."""


class UnbalancedMarkupError(MarkupError):
    """An end tag closed a style that was not open."""

    def __init__(self, tag: str, offset: int) -> None:
        self.tag = tag
        self.offset = offset
        super().__init__(f"unbalanced </{tag}> at byte {offset}: no open <{tag}>")
