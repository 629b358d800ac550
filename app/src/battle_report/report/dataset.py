"""Utilities for locating saved battle reports on disk."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable

DEFAULT_PATTERNS: tuple[str, ...] = ("*.report", "*.txt")


def discover_reports(
    directory: str | Path,
    *,
    patterns: Iterable[str] = DEFAULT_PATTERNS,
) -> list[Path]:
    """Scan a directory for saved report files."""

    base = Path(directory)
    if not base.is_dir():
        raise NotADirectoryError(f"Report directory not found: {base}")

    paths: list[Path] = []
    for pattern in patterns:
        paths.extend(sorted(path for path in base.glob(pattern) if path.is_file()))
    return [path.resolve() for path in paths]


def expand_sources(sources: Iterable[str | Path], *, patterns: Iterable[str] = DEFAULT_PATTERNS) -> list[Path]:
    """Expand directories into the report files they contain; keep files as given."""

    patterns = tuple(patterns)
    expanded: list[Path] = []
    for source in sources:
        path = Path(source)
        if path.is_dir():
            expanded.extend(discover_reports(path, patterns=patterns))
        else:
            expanded.append(path)
    return expanded
