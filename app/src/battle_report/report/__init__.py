"""Battle report parsing toolkit exports."""
from .builder import ReportBuilder
from .classifier import ClassifiedLine, LineClassifier, classify_line
from .enums import BattleResult, LineKind, ParseErrorReason, TableSection, UnrecognizedPolicy
from .errors import (
    EmptyReportError,
    MalformedIdentifierError,
    MalformedNumeralError,
    ReportParseError,
    UnrecognizedLineError,
    VocabularyError,
)
from .models import (
    Assist,
    Award,
    BattleReport,
    Capture,
    CriticalHit,
    Event,
    Kill,
    PlayerIdentifier,
    Repair,
    ReportTotals,
    Reward,
    Scouting,
    ScoutedDamage,
    ScoutedDestruction,
    Summary,
    Unrecognized,
    VehicleStats,
)
from .parser import ReportParser, parse_report, parse_report_bytes, parse_report_file
from .render import render_report
from .vocabulary import Vocabulary, default_vocabulary, load_vocabulary

__all__ = [
    "Assist",
    "Award",
    "BattleReport",
    "BattleResult",
    "Capture",
    "ClassifiedLine",
    "CriticalHit",
    "EmptyReportError",
    "Event",
    "Kill",
    "LineClassifier",
    "LineKind",
    "MalformedIdentifierError",
    "MalformedNumeralError",
    "ParseErrorReason",
    "PlayerIdentifier",
    "Repair",
    "ReportBuilder",
    "ReportParseError",
    "ReportParser",
    "ReportTotals",
    "Reward",
    "Scouting",
    "ScoutedDamage",
    "ScoutedDestruction",
    "Summary",
    "TableSection",
    "Unrecognized",
    "UnrecognizedLineError",
    "UnrecognizedPolicy",
    "VehicleStats",
    "Vocabulary",
    "VocabularyError",
    "classify_line",
    "default_vocabulary",
    "load_vocabulary",
    "parse_report",
    "parse_report_bytes",
    "parse_report_file",
    "render_report",
]
