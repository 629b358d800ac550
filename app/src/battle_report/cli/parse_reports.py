"""CLI to parse saved battle reports and print one JSON record per report."""
from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Iterable, Sequence

from ..report.dataset import expand_sources
from ..report.enums import UnrecognizedPolicy
from ..report.errors import ReportParseError
from ..report.loader import ReportLoaderConfig, ReportLoaderError, load_report_text
from ..report.parser import make_parser
from ..report.vocabulary import Vocabulary, load_vocabulary
from ..settings import get_settings

logger = logging.getLogger(__name__)


def parse_reports(
    sources: Iterable[str | Path],
    *,
    policy: UnrecognizedPolicy | str = UnrecognizedPolicy.STRICT,
    vocabulary: Vocabulary | None = None,
    max_bytes: int | None = None,
) -> list[dict[str, object]]:
    parser = make_parser(policy=policy, vocabulary=vocabulary)
    config = ReportLoaderConfig() if max_bytes is None else ReportLoaderConfig(max_bytes=max_bytes)

    results: list[dict[str, object]] = []
    for path in expand_sources(sources):
        row: dict[str, object] = {"file": str(path)}
        try:
            loaded = load_report_text(path, config=config)
            row["report"] = parser.parse(loaded.text).as_dict()
        except ReportParseError as exc:
            logger.error("Failed to parse %s: %s", path, exc)
            row["error"] = exc.as_dict()
        except (ReportLoaderError, FileNotFoundError) as exc:
            logger.error("Failed to read %s: %s", path, exc)
            row["error"] = {"reason": "unreadable", "detail": str(exc)}
        results.append(row)
    return results


def print_results(results: Iterable[dict[str, object]], *, indent: int | None = None) -> None:
    for row in results:
        print(json.dumps(row, ensure_ascii=False, indent=indent))


def main(argv: Sequence[str] | None = None) -> int:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Parse battle reports into JSON")
    parser.add_argument("sources", nargs="+", type=Path, help="Report files or directories of reports")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--lenient", dest="policy", action="store_const", const=UnrecognizedPolicy.LENIENT)
    mode.add_argument("--strict", dest="policy", action="store_const", const=UnrecognizedPolicy.STRICT)
    parser.add_argument("--vocabulary", type=Path, default=None, help="YAML file with extra phrases")
    parser.add_argument("--indent", type=int, default=None, help="Pretty-print JSON with this indent")
    args = parser.parse_args(argv)

    logging.basicConfig(level=settings.log_level.upper())

    vocabulary_path = args.vocabulary or settings.vocabulary_path
    vocabulary = load_vocabulary(vocabulary_path) if vocabulary_path else None

    results = parse_reports(
        args.sources,
        policy=args.policy or settings.unrecognized_policy,
        vocabulary=vocabulary,
        max_bytes=settings.max_report_bytes,
    )
    print_results(results, indent=args.indent)
    return 1 if any("error" in row for row in results) else 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
