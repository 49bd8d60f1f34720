"""Utilities for building CLI artifact output paths."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Optional

from randpath.config import GeneratorConfig, TrendConfig

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.-]+")


def trend_prefix(generator: GeneratorConfig, trend: TrendConfig) -> str:
    """Return the file stem identifying a trend run.

    Fields are joined with ``x``:
    ``<method>x<segment_length>x<max_iterations>x<delta>x<nodes>x<margin>x<notes>``,
    where ``method`` is the numeric method code. Characters outside
    ``[A-Za-z0-9_.-]`` in the notes are replaced with ``_``.
    """
    notes = _UNSAFE_CHARS.sub("_", trend.notes.strip())
    fields = [
        int(generator.method),
        generator.segment_length,
        trend.max_iterations,
        trend.delta,
        generator.node_count,
        generator.margin_length,
    ]
    return "x".join(str(f) for f in fields) + f"x{notes}"


def build_artifact_path(output_dir: Optional[Path], prefix: str, suffix: str) -> Path:
    """Compose an artifact path as output_dir / (prefix + suffix).

    If ``output_dir`` is None, the path is relative to the current working
    directory.
    """
    base = output_dir if output_dir is not None else Path.cwd()
    return base / f"{prefix}{suffix}"


def trend_csv_path(
    generator: GeneratorConfig,
    trend: TrendConfig,
    output_dir: Optional[Path] = None,
) -> Path:
    """Path of the CSV written for a trend run."""
    return build_artifact_path(output_dir, trend_prefix(generator, trend), ".csv")
