"""Report builder: resolves classified lines into a BattleReport."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, fields
from typing import Any, Iterable

from .classifier import ClassifiedLine
from .enums import EVENT_KINDS, BattleResult, LineKind, TableSection, UnrecognizedPolicy
from .errors import (
    EmptyReportError,
    MalformedIdentifierError,
    MalformedNumeralError,
    UnrecognizedLineError,
)
from .models import (
    EVENT_TYPES,
    Award,
    BattleReport,
    Capture,
    Event,
    PlayerIdentifier,
    ReportTotals,
    Reward,
    Summary,
    TargetedEvent,
    Unrecognized,
    VehicleStats,
)

logger = logging.getLogger(__name__)

_SUFFIX_TAG = re.compile(r"(?P<name>.*?)\s*\((?P<squad>[^()]*)\)")
_PREFIX_TAG = re.compile(r"\[(?P<squad>[^\[\]]*)\]\s*(?P<name>.*)")
_EQUALS_TAG = re.compile(r"=(?P<squad>[^=\s]*)=\s*(?P<name>.*)")
_NUMERAL = re.compile(r"\d{1,3}(?:,\d{3})+|\d+")
_CLOCK = re.compile(r"(\d{1,2}):(\d{2})(?::(\d{2}))?")
_BRACKET_CHARS = frozenset("()[]")


def parse_identifier(text: str, line: ClassifiedLine) -> PlayerIdentifier:
    """Split a squad tag from a display name.

    Accepts ``Name (TAG)``, ``[TAG] Name`` and ``=TAG= Name``.
    """
    raw = text.strip()
    name, squad = raw, None
    for pattern in (_PREFIX_TAG, _EQUALS_TAG, _SUFFIX_TAG):
        found = pattern.fullmatch(raw)
        if found:
            name, squad = found.group("name").strip(), found.group("squad").strip()
            break

    if not name:
        raise MalformedIdentifierError(line.line_number, line.text, f"empty display name in {raw!r}")
    if _BRACKET_CHARS.intersection(name):
        raise MalformedIdentifierError(line.line_number, line.text, f"unbalanced squad tag in {raw!r}")
    return PlayerIdentifier(name=name, squad=squad)


def parse_numeral(text: str, line: ClassifiedLine) -> int:
    raw = text.strip()
    if not _NUMERAL.fullmatch(raw):
        raise MalformedNumeralError(line.line_number, line.text, f"not an integer: {raw!r}")
    return int(raw.replace(",", ""))


def parse_research(text: str, line: ClassifiedLine) -> int:
    # "10 + (PA)10 + (Booster)10 = 30" carries its total after the last "="
    _, _, total = text.rpartition("=")
    return parse_numeral(total, line)


def parse_clock(text: str, line: ClassifiedLine) -> int:
    """Convert ``M:SS`` or ``H:MM:SS`` to seconds."""
    found = _CLOCK.fullmatch(text.strip())
    if not found:
        raise MalformedNumeralError(line.line_number, line.text, f"bad clock value {text!r}")
    first, second, third = found.groups()
    if third is None:
        hours, minutes, seconds = 0, int(first), int(second)
    else:
        hours, minutes, seconds = int(first), int(second), int(third)
        if minutes > 59:
            raise MalformedNumeralError(line.line_number, line.text, f"bad clock value {text!r}")
    if seconds > 59:
        raise MalformedNumeralError(line.line_number, line.text, f"bad clock value {text!r}")
    return hours * 3600 + minutes * 60 + seconds


def parse_percent(text: str, line: ClassifiedLine) -> int:
    value = parse_numeral(text, line)
    if value > 100:
        raise MalformedNumeralError(line.line_number, line.text, f"percentage above 100: {text!r}")
    return value


def resolve_reward(line: ClassifiedLine, silverlions: str = "silverlions", research: str = "research") -> Reward | None:
    slots = line.slots
    if silverlions not in slots and research not in slots:
        return None
    return Reward(
        silverlions=parse_numeral(slots[silverlions], line) if silverlions in slots else None,
        research=parse_research(slots[research], line) if research in slots else None,
    )


def resolve_summary(line: ClassifiedLine) -> Summary:
    slots = line.slots
    result = None
    if "win" in slots:
        result = BattleResult.WIN
    elif "loss" in slots:
        result = BattleResult.LOSS

    def numeral(name: str) -> int | None:
        return parse_numeral(slots[name], line) if name in slots else None

    return Summary(
        mission=slots.get("mission"),
        result=result,
        session_id=slots.get("session"),
        score=numeral("score"),
        silverlions=numeral("silverlions"),
        research=parse_research(slots["research"], line) if "research" in slots else None,
        activity=parse_percent(slots["activity"], line) if "activity" in slots else None,
        other_awards=resolve_reward(line, "other_silverlions", "other_research"),
    )


def resolve_event(line: ClassifiedLine) -> Event:
    slots = line.slots
    kwargs: dict[str, Any] = {
        "actor": parse_identifier(slots.get("actor", ""), line),
        "vehicle": slots.get("vehicle"),
        "points": parse_numeral(slots["points"], line) if "points" in slots else None,
        "time": parse_clock(slots["time"], line) if "time" in slots else None,
        "line_number": line.line_number,
    }
    event_type = EVENT_TYPES[line.kind]
    if issubclass(event_type, TargetedEvent):
        kwargs["target"] = parse_identifier(slots.get("target", ""), line)
        kwargs["target_vehicle"] = slots.get("target_vehicle")
    elif event_type is Capture:
        kwargs["zone"] = slots.get("zone")
    return event_type(**kwargs)


def resolve_table_event(line: ClassifiedLine, kind: LineKind) -> Event:
    """Turn a row of an event table into an event of the report's owner."""
    slots = line.slots
    kwargs: dict[str, Any] = {
        "vehicle": slots["subject"],
        "reward": resolve_reward(line),
        "time": parse_clock(slots["time"], line),
        "line_number": line.line_number,
    }
    event_type = EVENT_TYPES[kind]
    if issubclass(event_type, TargetedEvent):
        kwargs["target_vehicle"] = slots.get("object")
    elif event_type is Capture:
        kwargs["zone"] = slots.get("object")
    return event_type(**kwargs)


@dataclass
class _Table:
    section: str
    line: ClassifiedLine
    expected: int
    rows: int = 0


@dataclass
class _Draft:
    mission: str | None = None
    result: BattleResult = BattleResult.UNKNOWN
    session_id: str | None = None
    totals: dict[str, int] = field(default_factory=dict)
    other_awards: Reward | None = None
    events: list[Event] = field(default_factory=list)
    awards: list[Award] = field(default_factory=list)
    vehicles: dict[str, dict[str, Any]] = field(default_factory=dict)
    unrecognized: list[Unrecognized] = field(default_factory=list)
    table: _Table | None = None
    recognized: int = 0

    def apply(self, summary: Summary) -> None:
        # later lines overwrite earlier ones field by field
        if summary.mission is not None:
            self.mission = summary.mission
        if summary.result is not None:
            self.result = summary.result
        if summary.session_id is not None:
            self.session_id = summary.session_id
        if summary.other_awards is not None:
            self.other_awards = summary.other_awards
        for item in fields(ReportTotals):
            value = getattr(summary, item.name)
            if value is not None:
                self.totals[item.name] = value

    def open_table(self, line: ClassifiedLine) -> None:
        resolve_reward(line)  # the announced total must still be well formed
        self.table = _Table(line.section or "", line, parse_numeral(line.slots["count"], line))

    def close_table(self) -> None:
        table = self.table
        if table is not None and table.rows != table.expected:
            logger.debug(
                "Table on line %d announces %d rows, found %d", table.line.line_number, table.expected, table.rows
            )
        self.table = None

    def add_row(self, line: ClassifiedLine) -> bool:
        """Attach a row to the open table; False when it does not fit there."""
        if self.table is None:
            return False
        section, slots = self.table.section, line.slots
        if section == TableSection.TIME_PLAYED.value:
            if "time" in slots:
                return False
            self._vehicle(slots["subject"]).update(
                activity=parse_percent(slots["activity"], line),
                time_played=parse_clock(slots["played"], line),
                played_research=parse_research(slots["research"], line),
            )
        elif "time" not in slots:
            return False
        elif section in (TableSection.AWARDS.value, TableSection.ACTIVITY_TIME.value):
            if "object" in slots:
                return False
            time, reward = parse_clock(slots["time"], line), resolve_reward(line)
            if section == TableSection.AWARDS.value:
                self.awards.append(Award(time, slots["subject"], reward, line_number=line.line_number))
            else:
                self._vehicle(slots["subject"]).update(time=time, reward=reward)
        else:
            self.events.append(resolve_table_event(line, LineKind(section)))
        self.table.rows += 1
        return True

    def _vehicle(self, name: str) -> dict[str, Any]:
        return self.vehicles.setdefault(name, {})

    def freeze(self) -> BattleReport:
        return BattleReport(
            mission=self.mission,
            result=self.result,
            session_id=self.session_id,
            events=tuple(self.events),
            totals=ReportTotals(**self.totals),
            awards=tuple(self.awards),
            vehicles=tuple(VehicleStats(name=name, **values) for name, values in self.vehicles.items()),
            other_awards=self.other_awards,
            unrecognized=tuple(self.unrecognized),
        )


class ReportBuilder:
    """Accumulates classified lines, in order, into one BattleReport.

    A table header opens a table; the rows that follow belong to it until any
    other recognized line closes it.
    """

    def __init__(self, policy: UnrecognizedPolicy | str = UnrecognizedPolicy.STRICT) -> None:
        self.policy = UnrecognizedPolicy(policy)

    def build(self, lines: Iterable[ClassifiedLine]) -> BattleReport:
        draft = _Draft()
        for line in lines:
            if line.kind == LineKind.BLANK:
                continue
            if line.kind == LineKind.TABLE_ROW:
                if draft.add_row(line):
                    draft.recognized += 1
                else:
                    self._skip(draft, line)
                continue
            if line.kind == LineKind.UNRECOGNIZED:
                self._skip(draft, line)
                continue

            draft.close_table()
            draft.recognized += 1
            if line.kind == LineKind.TABLE_HEADER:
                draft.open_table(line)
            elif line.kind == LineKind.SUMMARY:
                draft.apply(resolve_summary(line))
            elif line.kind in EVENT_KINDS:
                draft.events.append(resolve_event(line))

        draft.close_table()
        if not draft.recognized:
            raise EmptyReportError()
        return draft.freeze()

    def _skip(self, draft: _Draft, line: ClassifiedLine) -> None:
        if self.policy == UnrecognizedPolicy.STRICT:
            raise UnrecognizedLineError(line.line_number, line.text)
        logger.debug("Skipping unrecognized line %d: %s", line.line_number, line.text)
        draft.unrecognized.append(Unrecognized(line_number=line.line_number, text=line.text))
