"""CLI for inspecting how each line of a report is classified."""
from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Sequence

from ..report.classifier import LineClassifier
from ..report.loader import ReportLoaderConfig, load_report_text
from ..report.vocabulary import Vocabulary, load_vocabulary
from ..settings import get_settings


def classify_lines(
    path: Path,
    *,
    vocabulary: Vocabulary | None = None,
    max_bytes: int | None = None,
) -> list[dict[str, object]]:
    config = ReportLoaderConfig() if max_bytes is None else ReportLoaderConfig(max_bytes=max_bytes)
    loaded = load_report_text(path, config=config)
    classifier = LineClassifier(vocabulary)
    results: list[dict[str, object]] = []
    for number, line in enumerate(loaded.text.splitlines(), start=1):
        classified = classifier.classify(line, line_number=number)
        results.append(
            {
                "line": classified.line_number,
                "kind": classified.kind.value,
                "slots": dict(classified.slots),
                "section": classified.section,
            }
        )
    return results


def main(argv: Sequence[str] | None = None) -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Classify each line of a battle report")
    parser.add_argument("report", type=Path, help="Path to a saved report")
    parser.add_argument("--vocabulary", type=Path, default=None, help="YAML file with extra phrases")
    args = parser.parse_args(argv)

    logging.basicConfig(level=settings.log_level.upper())

    vocabulary_path = args.vocabulary or settings.vocabulary_path
    vocabulary = load_vocabulary(vocabulary_path) if vocabulary_path else None

    for row in classify_lines(args.report, vocabulary=vocabulary, max_bytes=settings.max_report_bytes):
        print(json.dumps(row, ensure_ascii=False))


if __name__ == "__main__":  # pragma: no cover
    main()
