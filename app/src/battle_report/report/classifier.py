"""Line classifier: decides which event shape a report line has."""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Mapping

from .enums import TARGETED_KINDS, LineKind
from .vocabulary import TABLE_KEYS, Vocabulary, default_vocabulary

_NEVER = r"(?!)"
_CLOCK = r"\d{1,2}:\d{2}(?::\d{2})?"
_TIME = rf"(?:(?P<time>{_CLOCK})\s+)?"
_WHITESPACE = re.compile(r"\s+")

# Table columns are separated by a tab or a run of two or more spaces; a cell
# holds single-spaced words only.
_SEP = r"(?:[ ]*\t\s*|\s{2,})"
_CELL = r"\S+(?: \S+)*"
_NUM = r"\d[\d,]*"
_RESEARCH = rf"{_NUM}(?: ?\+ ?\([^()]*\) ?{_NUM})*(?: ?= ?{_NUM})?"


@dataclass(frozen=True)
class ClassifiedLine:
    """Kind tag plus the raw, unparsed substring for each matched slot.

    ``section`` names the table a header line opens.
    """

    line_number: int
    kind: LineKind
    text: str
    slots: Mapping[str, str] = field(default_factory=dict)
    section: str | None = None

    def slot(self, name: str) -> str | None:
        return self.slots.get(name)


@dataclass(frozen=True)
class LineMatcher:
    kind: LineKind
    pattern: re.Pattern[str]
    columns: bool = False
    section: str | None = None

    def match(self, text: str) -> dict[str, str] | None:
        found = self.pattern.fullmatch(text)
        if not found:
            return None
        return {name: value for name, value in found.groupdict().items() if value is not None}


def _phrase(phrase: str) -> str:
    return r"\s+".join(re.escape(part) for part in phrase.split())


def _alternation(phrases: Iterable[str]) -> str:
    ordered = sorted(dict.fromkeys(p for p in phrases if p.strip()), key=len, reverse=True)
    if not ordered:
        return _NEVER
    return "(?:" + "|".join(_phrase(p) for p in ordered) + ")"


def _compile(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern, re.IGNORECASE)


def build_table_matchers(vocabulary: Vocabulary) -> list[LineMatcher]:
    """Matchers for the columnar part of the report: headers, then rows."""

    sl = _alternation(vocabulary.silverlion_units)
    rp = _alternation(vocabulary.research_units)
    reward = rf"(?P<silverlions>{_NUM})\s*{sl}(?:{_SEP}(?P<research>{_RESEARCH})\s*{rp})?"

    matchers = []
    for key in TABLE_KEYS:
        name = _alternation(vocabulary.tables(key))
        header = (
            rf"(?P<table>{name}){_SEP}(?P<count>{_NUM})"
            rf"(?:{_SEP}(?P<silverlions>{_NUM})\s*{sl})?"
            rf"(?:{_SEP}(?P<research>{_RESEARCH})\s*{rp})?"
        )
        matchers.append(LineMatcher(LineKind.TABLE_HEADER, _compile(header), columns=True, section=key))

    other = _alternation(vocabulary.labels("other_awards"))
    matchers.append(
        LineMatcher(
            LineKind.SUMMARY,
            _compile(
                rf"{other}\s*:?{_SEP}(?P<other_silverlions>{_NUM})\s*{sl}"
                rf"(?:{_SEP}(?P<other_research>{_RESEARCH})\s*{rp})?"
            ),
            columns=True,
        )
    )

    timed_row = rf"(?P<time>{_CLOCK}){_SEP}(?P<subject>{_CELL})(?:{_SEP}(?P<object>{_CELL}))?(?:{_SEP}×)?{_SEP}{reward}"
    played_row = (
        rf"(?P<subject>{_CELL}){_SEP}(?P<activity>{_NUM})\s*%{_SEP}(?P<played>{_CLOCK})"
        rf"{_SEP}(?P<research>{_RESEARCH})\s*{rp}"
    )
    matchers.append(LineMatcher(LineKind.TABLE_ROW, _compile(timed_row), columns=True))
    matchers.append(LineMatcher(LineKind.TABLE_ROW, _compile(played_row), columns=True))
    return matchers


def build_matchers(vocabulary: Vocabulary) -> list[LineMatcher]:
    """Build the ordered dispatch table, most specific shape first."""

    victory = _alternation(vocabulary.victory_words)
    defeat = _alternation(vocabulary.defeat_words)
    outcome = rf"(?:(?P<win>{victory})|(?P<loss>{defeat}))"
    sl = _alternation(vocabulary.silverlion_units)
    rp = _alternation(vocabulary.research_units)

    tail = (
        rf"(?:\s+{_alternation(vocabulary.vehicle_connectives)}\s+(?P<vehicle>.+?))?"
        rf"(?:\s+{_alternation(vocabulary.points_connectives)}\s+(?P<points>\S+)"
        rf"\s+{_alternation(vocabulary.points_units)})?"
    )
    target_vehicle = rf"(?:\s+{_alternation(vocabulary.target_vehicle_connectives)}\s+(?P<target_vehicle>.+?))?"

    def label(key: str) -> str:
        return rf"{_alternation(vocabulary.labels(key))}\s*:"

    summary_patterns = (
        rf"{outcome}\s+{_alternation(vocabulary.mission_prefixes)}\s+(?P<mission>.+?)"
        rf"(?:\s+{_alternation(vocabulary.mission_suffixes)})?!?",
        rf"{label('mission')}\s*(?P<mission>.+)",
        rf"{label('result')}\s*{outcome}",
        rf"{label('session')}\s*(?P<session>\S+)",
        rf"{label('score')}\s*(?P<score>\S+)",
        rf"{_alternation(vocabulary.labels('rewards'))}\s*:?\s+(?P<silverlions>\S+)\s+{sl}"
        rf"(?:\s+(?P<research>.+?)\s+{rp})?",
        rf"{label('activity')}\s*(?P<activity>\S+?)\s*%",
    )
    matchers = build_table_matchers(vocabulary)
    matchers.extend(LineMatcher(LineKind.SUMMARY, _compile(p)) for p in summary_patterns)

    for kind in TARGETED_KINDS:
        verb = _alternation(vocabulary.phrases(kind))
        matchers.append(
            LineMatcher(
                kind,
                _compile(rf"{_TIME}(?P<actor>.+?)\s+{verb}\s+(?P<target>.+?){target_vehicle}{tail}"),
            )
        )

    capture = _alternation(vocabulary.phrases(LineKind.CAPTURE))
    # zone is lazily optional so "captured in <vehicle>" leaves it unset
    matchers.append(
        LineMatcher(LineKind.CAPTURE, _compile(rf"{_TIME}(?P<actor>.+?)\s+{capture}(?:\s+(?P<zone>.+?))??{tail}"))
    )

    repair = _alternation(vocabulary.phrases(LineKind.REPAIR))
    matchers.append(LineMatcher(LineKind.REPAIR, _compile(rf"{_TIME}(?P<actor>.+?)\s+{repair}{tail}")))
    return matchers


class LineClassifier:
    """Applies the matcher table to single lines of report text.

    Columnar matchers see the stripped line; sentence matchers see it with
    every whitespace run folded to one space, so matching stays linear in the
    length of the line.
    """

    def __init__(self, vocabulary: Vocabulary | None = None) -> None:
        self.vocabulary = vocabulary or default_vocabulary()
        self.matchers = build_matchers(self.vocabulary)

    def classify(self, line: str, line_number: int = 1) -> ClassifiedLine:
        text = (line or "").strip()
        if not text:
            return ClassifiedLine(line_number=line_number, kind=LineKind.BLANK, text="")

        folded = _WHITESPACE.sub(" ", text)
        for matcher in self.matchers:
            slots = matcher.match(text if matcher.columns else folded)
            if slots is not None:
                return ClassifiedLine(
                    line_number=line_number,
                    kind=matcher.kind,
                    text=text,
                    slots=slots,
                    section=matcher.section,
                )

        return ClassifiedLine(line_number=line_number, kind=LineKind.UNRECOGNIZED, text=text)


def classify_line(line: str, *, vocabulary: Vocabulary | None = None, line_number: int = 1) -> ClassifiedLine:
    return LineClassifier(vocabulary).classify(line, line_number=line_number)
