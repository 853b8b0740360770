"""Deterministic local performance baseline runner.

This script benchmarks the four public operations on synthetic HTML fragments
of increasing size. It prints stable key=value lines for easy diffing and also
writes the same output to .perf/evidence/baseline.txt.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from statistics import median
from time import perf_counter

from stylespans import (
    clean_plain_text,
    clean_preserving_style_tags,
    extract_spans,
    extract_spans_and_clean,
)

FRAGMENT_SIZES: tuple[int, ...] = (1_000, 10_000, 100_000)
REPEATS = 5
EVIDENCE_PATH = Path(".perf/evidence/baseline.txt")

_PARAGRAPH = (
    "Plain text with <b>bold</b>, <i>italic</i> and <b><i>both</i></b>.<br/>"
    '<span class="x">dropped tag</span> &amp; an entity<br>\n'
)


def _build_fragment(min_bytes: int) -> bytes:
    unit = _PARAGRAPH.encode("utf-8")
    return unit * (min_bytes // len(unit) + 1)


def _measure_sync_call_ms(function: Callable[[], object], repeats: int) -> float:
    function()
    samples_ms: list[float] = []
    for _ in range(repeats):
        start = perf_counter()
        function()
        samples_ms.append((perf_counter() - start) * 1000.0)
    return median(samples_ms)


def _collect_metrics() -> list[tuple[str, float]]:
    operations: dict[str, Callable[[bytes], object]] = {
        "extract_spans": extract_spans,
        "extract_spans_and_clean": extract_spans_and_clean,
        "clean_plain_text": clean_plain_text,
        "clean_preserving_style_tags": clean_preserving_style_tags,
    }
    metrics: list[tuple[str, float]] = []
    for size in FRAGMENT_SIZES:
        fragment = _build_fragment(size)
        for name, operation in operations.items():
            value = _measure_sync_call_ms(lambda op=operation: op(fragment), REPEATS)
            metrics.append((f"{name}_{size // 1000}k_ms", value))
    return metrics


def _render_lines(metrics: list[tuple[str, float]]) -> list[str]:
    return [f"{key}={value:.3f}" for key, value in metrics]


def _write_evidence(lines: list[str]) -> None:
    EVIDENCE_PATH.parent.mkdir(parents=True, exist_ok=True)
    EVIDENCE_PATH.write_text("\n".join(lines) + "\n", encoding="utf-8")


def main() -> int:
    lines = _render_lines(_collect_metrics())
    for line in lines:
        print(line)
    _write_evidence(lines)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
