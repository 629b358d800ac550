"""Render a BattleReport back into the canonical report line grammar."""
from __future__ import annotations

from typing import Iterable

from .enums import BattleResult, TableSection
from .models import Award, BattleReport, Capture, Event, Reward, TargetedEvent, VehicleStats
from .vocabulary import Vocabulary, default_vocabulary

COLUMN_SEPARATOR = "    "


def format_clock(seconds: int) -> str:
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def format_reward(reward: Reward, vocabulary: Vocabulary) -> str:
    parts = []
    if reward.silverlions is not None:
        parts.append(f"{reward.silverlions} {vocabulary.silverlion_units[0]}")
    if reward.research is not None:
        parts.append(f"{reward.research} {vocabulary.research_units[0]}")
    return COLUMN_SEPARATOR.join(parts)


def _columns(*cells: str | None) -> str:
    return COLUMN_SEPARATOR.join(cell for cell in cells if cell)


def _total(rewards: Iterable[Reward]) -> Reward:
    rewards = list(rewards)

    def add(values: Iterable[int | None]) -> int | None:
        known = [value for value in values if value is not None]
        return sum(known) if known else None

    return Reward(
        silverlions=add(reward.silverlions for reward in rewards),
        research=add(reward.research for reward in rewards),
    )


def _table(name: str, rows: list[str], total: Reward, vocabulary: Vocabulary) -> list[str]:
    header = _columns(name, str(len(rows)), format_reward(total, vocabulary))
    return [header, *(COLUMN_SEPARATOR + row for row in rows), ""]


def render_event(event: Event, vocabulary: Vocabulary) -> str:
    """Write a sentence line for an event that names its actor."""
    parts: list[str] = []
    if event.time is not None:
        parts.append(format_clock(event.time))
    parts.append(str(event.actor))
    parts.append(vocabulary.phrases(event.kind)[0])
    if isinstance(event, TargetedEvent):
        parts.append(str(event.target))
        if event.target_vehicle is not None:
            parts.extend((vocabulary.target_vehicle_connectives[0], event.target_vehicle))
    elif isinstance(event, Capture) and event.zone is not None:
        parts.append(event.zone)
    if event.vehicle is not None:
        parts.extend((vocabulary.vehicle_connectives[0], event.vehicle))
    if event.points is not None:
        parts.extend((vocabulary.points_connectives[0], str(event.points), vocabulary.points_units[0]))
    return " ".join(parts)


def render_table_row(event: Event, vocabulary: Vocabulary) -> str:
    """Write the table row for an event taken from an event table."""
    detail = None
    if isinstance(event, TargetedEvent):
        detail = event.target_vehicle
    elif isinstance(event, Capture):
        detail = event.zone
    return _columns(
        format_clock(event.time or 0),
        event.vehicle,
        detail,
        format_reward(event.reward or Reward(), vocabulary),
    )


def _render_events(events: Iterable[Event], vocabulary: Vocabulary) -> list[str]:
    lines: list[str] = []
    group: list[Event] = []

    def flush() -> None:
        if group:
            name = vocabulary.tables(group[0].kind.value)[0]
            rows = [render_table_row(event, vocabulary) for event in group]
            lines.extend(_table(name, rows, _total(event.reward or Reward() for event in group), vocabulary))
            group.clear()

    for event in events:
        if not event.from_table:
            flush()
            lines.append(render_event(event, vocabulary))
            continue
        if group and group[0].kind != event.kind:
            flush()
        group.append(event)
    flush()
    return lines


def _render_awards(awards: tuple[Award, ...], vocabulary: Vocabulary) -> list[str]:
    if not awards:
        return []
    rows = [_columns(format_clock(award.time), award.name, format_reward(award.reward, vocabulary)) for award in awards]
    name = vocabulary.tables(TableSection.AWARDS.value)[0]
    return _table(name, rows, _total(award.reward for award in awards), vocabulary)


def _render_vehicles(vehicles: tuple[VehicleStats, ...], vocabulary: Vocabulary) -> list[str]:
    lines: list[str] = []
    active = [v for v in vehicles if v.time is not None and v.reward is not None]
    if active:
        rows = [
            _columns(format_clock(v.time or 0), v.name, format_reward(v.reward or Reward(), vocabulary))
            for v in active
        ]
        name = vocabulary.tables(TableSection.ACTIVITY_TIME.value)[0]
        lines.extend(_table(name, rows, _total(v.reward or Reward() for v in active), vocabulary))

    played = [
        v for v in vehicles if None not in (v.activity, v.time_played, v.played_research)
    ]
    if played:
        rows = [
            _columns(
                v.name,
                f"{v.activity}%",
                format_clock(v.time_played or 0),
                format_reward(Reward(research=v.played_research), vocabulary),
            )
            for v in played
        ]
        name = vocabulary.tables(TableSection.TIME_PLAYED.value)[0]
        total = _total(Reward(research=v.played_research) for v in played)
        lines.extend(_table(name, rows, total, vocabulary))
    return lines


def render_report(report: BattleReport, vocabulary: Vocabulary | None = None) -> str:
    """Emit text that parses back into an equal report.

    Unrecognized lines are written first, verbatim, so the result only
    re-parses under the lenient policy when there are any.
    """

    vocab = vocabulary or default_vocabulary()

    def label(key: str) -> str:
        return vocab.labels(key)[0]

    lines: list[str] = [entry.text for entry in report.unrecognized]
    outcome = None
    if report.result == BattleResult.WIN:
        outcome = vocab.victory_words[0]
    elif report.result == BattleResult.LOSS:
        outcome = vocab.defeat_words[0]

    if outcome is not None and report.mission is not None:
        lines.append(f"{outcome} {vocab.mission_prefixes[0]} {report.mission} {vocab.mission_suffixes[0]}!")
    else:
        if report.mission is not None:
            lines.append(f"{label('mission')}: {report.mission}")
        if outcome is not None:
            lines.append(f"{label('result')}: {outcome}")
    if report.session_id is not None:
        lines.append(f"{label('session')}: {report.session_id}")

    lines.extend(_render_events(report.events, vocab))
    lines.extend(_render_awards(report.awards, vocab))
    lines.extend(_render_vehicles(report.vehicles, vocab))
    if report.other_awards is not None:
        lines.append(_columns(label("other_awards"), format_reward(report.other_awards, vocab)))

    totals = report.totals
    if totals.score is not None:
        lines.append(f"{label('score')}: {totals.score}")
    if totals.silverlions is not None:
        rewards = f"{label('rewards')}: {totals.silverlions} {vocab.silverlion_units[0]}"
        if totals.research is not None:
            rewards += f" {totals.research} {vocab.research_units[0]}"
        lines.append(rewards)
    if totals.activity is not None:
        lines.append(f"{label('activity')}: {totals.activity}%")

    return "\n".join(lines) + "\n"
