"""Report parsing pipeline orchestration."""
from __future__ import annotations

from pathlib import Path
from typing import BinaryIO, Iterator

from .builder import ReportBuilder
from .classifier import ClassifiedLine, LineClassifier
from .enums import LineKind, UnrecognizedPolicy
from .loader import ReportLoaderConfig, load_report_text
from .models import BattleReport
from .vocabulary import Vocabulary


class ReportParser:
    """Coordinates line classification and report building."""

    def __init__(
        self,
        *,
        classifier: LineClassifier | None = None,
        builder: ReportBuilder | None = None,
    ) -> None:
        self.classifier = classifier or LineClassifier()
        self.builder = builder or ReportBuilder()

    def classify_all(self, text: str) -> Iterator[ClassifiedLine]:
        for number, line in enumerate(text.splitlines(), start=1):
            classified = self.classifier.classify(line, line_number=number)
            if classified.kind != LineKind.BLANK:
                yield classified

    def parse(self, text: str) -> BattleReport:
        return self.builder.build(self.classify_all(text))


def make_parser(
    *,
    policy: UnrecognizedPolicy | str = UnrecognizedPolicy.STRICT,
    vocabulary: Vocabulary | None = None,
) -> ReportParser:
    return ReportParser(classifier=LineClassifier(vocabulary), builder=ReportBuilder(policy))


def parse_report(
    text: str,
    *,
    policy: UnrecognizedPolicy | str = UnrecognizedPolicy.STRICT,
    vocabulary: Vocabulary | None = None,
) -> BattleReport:
    """Parse the full text of one battle report."""
    return make_parser(policy=policy, vocabulary=vocabulary).parse(text)


def parse_report_bytes(
    data: bytes,
    *,
    policy: UnrecognizedPolicy | str = UnrecognizedPolicy.STRICT,
    vocabulary: Vocabulary | None = None,
) -> BattleReport:
    return parse_report(data.decode("utf-8", errors="replace"), policy=policy, vocabulary=vocabulary)


def parse_report_file(
    source: str | Path | BinaryIO,
    *,
    max_bytes: int | None = None,
    policy: UnrecognizedPolicy | str = UnrecognizedPolicy.STRICT,
    vocabulary: Vocabulary | None = None,
) -> BattleReport:
    config = ReportLoaderConfig() if max_bytes is None else ReportLoaderConfig(max_bytes=max_bytes)
    loaded = load_report_text(source, config=config)
    return parse_report(loaded.text, policy=policy, vocabulary=vocabulary)
