"""
CLI entry point for stylespans.

Commands:
  stylespans spans FILE            List text spans with their bold/italic flags
  stylespans spans FILE --clean    Also show offsets into the cleaned markup
  stylespans spans FILE --json     Emit the spans as JSON
  stylespans clean FILE            Print the text content with all tags removed
  stylespans clean FILE --keep-style  Keep <b>, <i> and a space per <br>
  stylespans status                Show the effective configuration
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Annotated, NoReturn

import cyclopts

from stylespans.config.schema import DEFAULT_CONFIG_PATH, Settings
from stylespans.core.errors import MarkupError

app = cyclopts.App(name="stylespans", help="Extract style-tagged text spans from HTML fragments.")


@app.command
def spans(
    path: Path,
    clean: bool = False,
    as_json: Annotated[bool, cyclopts.Parameter(name="--json")] = False,
    config: Path = DEFAULT_CONFIG_PATH,
    log_level: str = "WARNING",
) -> None:
    """
    List the text spans of an HTML fragment.

    With --clean, spans also carry their range in the cleaned markup.
    """
    from stylespans.adapters.tokenizers.html_parser import HtmlParserTokenizer
    from stylespans.api import extract_spans, extract_spans_and_clean

    _setup_logging(log_level)
    settings = Settings.load(config)
    data = path.read_bytes()
    tokenizer = HtmlParserTokenizer(chunk_size=settings.tokenizer.chunk_size)

    try:
        if clean:
            portions, _ = extract_spans_and_clean(data, tokenizer=tokenizer)
        else:
            portions = extract_spans(data, tokenizer=tokenizer)
    except MarkupError as e:
        _fail(path, e)

    if as_json:
        print(json.dumps(portions.to_dict(), indent=settings.output.json_indent or None))
        return

    if not portions.spans:
        print("No text spans.")
        return

    out = settings.output
    for span in portions:
        text = span.text(data).decode(out.encoding, errors=out.errors)
        line = (
            f"[{span.start}:{span.end}] italicised: {span.italic}, bold: {span.bold}, "
            f"text: {text!r}"
        )
        if span.clean_start is not None:
            line += f"  clean: [{span.clean_start}:{span.clean_end}]"
        print(line)


@app.command
def clean(
    path: Path,
    keep_style: bool = False,
    config: Path = DEFAULT_CONFIG_PATH,
    log_level: str = "WARNING",
) -> None:
    """Print the text content of an HTML fragment, optionally keeping b/i/br markup."""
    from stylespans.adapters.tokenizers.html_parser import HtmlParserTokenizer
    from stylespans.api import clean_plain_text, clean_preserving_style_tags

    _setup_logging(log_level)
    settings = Settings.load(config)
    tokenizer = HtmlParserTokenizer(chunk_size=settings.tokenizer.chunk_size)
    cleaner = clean_preserving_style_tags if keep_style else clean_plain_text
    try:
        result = cleaner(path.read_bytes(), tokenizer=tokenizer)
    except MarkupError as e:
        _fail(path, e)
    print(result.decode(settings.output.encoding, errors=settings.output.errors))


@app.command
def status(config: Path = DEFAULT_CONFIG_PATH) -> None:
    """Show the effective configuration."""
    settings = Settings.load(config)
    source = str(config) if config.exists() else "defaults (no config file)"
    print(f"Config:     {source}")
    print(f"Chunk size: {settings.tokenizer.chunk_size} bytes")
    print(f"Encoding:   {settings.output.encoding} (errors={settings.output.errors})")
    print(f"JSON:       indent {settings.output.json_indent}")


def _fail(path: Path, error: MarkupError) -> NoReturn:
    print(f"error: {path}: {error}", file=sys.stderr)
    raise SystemExit(1)


_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _setup_logging(level: str) -> None:
    """
    Configure loguru for CLI output.

    Removes the default loguru stderr handler, installs one with a consistent
    timestamp+level format, and enables the stylespans namespace that the
    package disables on import.

    Args:
        level: Log level string (case-insensitive), e.g. "INFO", "DEBUG".

    Raises:
        SystemExit: If the level is not a valid log level name.
    """
    from loguru import logger

    normalised = level.upper()
    if normalised not in _VALID_LOG_LEVELS:
        valid = ", ".join(sorted(_VALID_LOG_LEVELS))
        print(f"error: invalid --log-level '{level}'. Valid values: {valid}", file=sys.stderr)
        raise SystemExit(1)

    logger.remove()  # remove loguru's built-in default handler
    logger.add(
        sys.stderr,
        level=normalised,
        format=("<green>{time:YYYY-MM-DD HH:mm:ss}</green> <level>{level:<8}</level> {message}"),
        colorize=True,
    )
    logger.enable("stylespans")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
