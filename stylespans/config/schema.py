"""
Configuration schema for stylespans.

Settings are loaded from a JSON file (default: ~/.stylespans/config.json).
The file is optional; every field has a default.
"""

from __future__ import annotations

import codecs
import json
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

DEFAULT_CONFIG_PATH = Path.home() / ".stylespans" / "config.json"


class TokenizerConfig(BaseModel):
    """Configuration for the html.parser tokenizer."""

    chunk_size: int = 4096  # bytes fed to the parser per read

    @field_validator("chunk_size")
    @classmethod
    def _validate_chunk_size(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("tokenizer.chunk_size must be > 0")
        return value


class OutputConfig(BaseModel):
    """How the CLI renders bytes and JSON."""

    encoding: str = "utf-8"
    errors: str = "replace"  # codec error handler used when decoding for display
    json_indent: int = 2

    @field_validator("encoding")
    @classmethod
    def _validate_encoding(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError as e:
            raise ValueError(f"output.encoding: unknown encoding '{value}'") from e
        return value

    @field_validator("json_indent")
    @classmethod
    def _validate_json_indent(cls, value: int) -> int:
        if value < 0:
            raise ValueError("output.json_indent must be >= 0")
        return value


class Settings(BaseModel):
    """Root configuration object for stylespans."""

    tokenizer: TokenizerConfig = Field(default_factory=TokenizerConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @classmethod
    def load(cls, path: Path = DEFAULT_CONFIG_PATH) -> Settings:
        """
        Load settings from a JSON file.

        Missing keys use their default values.
        The file is optional: if it doesn't exist, all defaults apply.
        """
        if not path.exists():
            return cls()
        data = json.loads(path.read_text(encoding="utf-8"))
        return cls.model_validate(data)

    def save(self, path: Path = DEFAULT_CONFIG_PATH) -> None:
        """Persist settings to a JSON file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            self.model_dump_json(indent=2, exclude_none=False),
            encoding="utf-8",
        )
