"""Parse copied battle reports into structured records."""
from .report import BattleReport, parse_report, render_report

__all__ = ["BattleReport", "parse_report", "render_report"]
