"""Exceptions raised while turning report text into a BattleReport."""
from __future__ import annotations

from .enums import ParseErrorReason


class ReportParseError(ValueError):
    """Raised when a report cannot be parsed.

    Carries the 1-based line number and raw text of the offending line so
    callers can point the user at it.
    """

    reason: ParseErrorReason

    def __init__(self, line_number: int, text: str, detail: str | None = None) -> None:
        self.line_number = line_number
        self.text = text
        self.detail = detail
        message = f"line {line_number}: {self.reason.value}"
        if detail:
            message += f" ({detail})"
        if text:
            message += f": {text!r}"
        super().__init__(message)

    def as_dict(self) -> dict[str, object]:
        return {
            "reason": self.reason.value,
            "line_number": self.line_number,
            "text": self.text,
            "detail": self.detail,
        }


class UnrecognizedLineError(ReportParseError):
    reason = ParseErrorReason.UNRECOGNIZED_LINE


class MalformedNumeralError(ReportParseError):
    reason = ParseErrorReason.MALFORMED_NUMERAL


class MalformedIdentifierError(ReportParseError):
    reason = ParseErrorReason.MALFORMED_IDENTIFIER


class EmptyReportError(ReportParseError):
    reason = ParseErrorReason.EMPTY_REPORT

    def __init__(self) -> None:
        super().__init__(0, "", "no classifiable lines")


class VocabularyError(ValueError):
    """Raised when a vocabulary document is invalid."""
