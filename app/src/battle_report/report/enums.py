"""Shared enumeration types for the report parser."""
from __future__ import annotations

from enum import Enum


class LineKind(str, Enum):
    BLANK = "blank"
    KILL = "kill"
    ASSIST = "assist"
    CAPTURE = "capture"
    CRITICAL_HIT = "critical_hit"
    REPAIR = "repair"
    SCOUTING = "scouting"
    SCOUTED_DAMAGE = "scouted_damage"
    SCOUTED_DESTRUCTION = "scouted_destruction"
    SUMMARY = "summary"
    TABLE_HEADER = "table_header"
    TABLE_ROW = "table_row"
    UNRECOGNIZED = "unrecognized"


EVENT_KINDS: tuple[LineKind, ...] = (
    LineKind.KILL,
    LineKind.ASSIST,
    LineKind.CAPTURE,
    LineKind.CRITICAL_HIT,
    LineKind.REPAIR,
    LineKind.SCOUTING,
    LineKind.SCOUTED_DAMAGE,
    LineKind.SCOUTED_DESTRUCTION,
)

# Most specific first: the classifier tries sentence shapes in this order.
TARGETED_KINDS: tuple[LineKind, ...] = (
    LineKind.ASSIST,
    LineKind.CRITICAL_HIT,
    LineKind.SCOUTED_DESTRUCTION,
    LineKind.SCOUTED_DAMAGE,
    LineKind.SCOUTING,
    LineKind.KILL,
)


class TableSection(str, Enum):
    """Non-event tables of the end-of-battle screen."""

    AWARDS = "awards"
    ACTIVITY_TIME = "activity_time"
    TIME_PLAYED = "time_played"


class BattleResult(str, Enum):
    WIN = "win"
    LOSS = "loss"
    UNKNOWN = "unknown"


class UnrecognizedPolicy(str, Enum):
    STRICT = "strict"
    LENIENT = "lenient"


class ParseErrorReason(str, Enum):
    UNRECOGNIZED_LINE = "unrecognized_line"
    MALFORMED_NUMERAL = "malformed_numeral"
    MALFORMED_IDENTIFIER = "malformed_identifier"
    EMPTY_REPORT = "empty_report"
