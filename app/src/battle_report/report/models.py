"""Typed, immutable representation of a parsed battle report."""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, ClassVar

from .enums import BattleResult, LineKind

VehicleName = str


def _plain(value: Any) -> Any:
    return value.as_dict() if hasattr(value, "as_dict") else value


@dataclass(frozen=True)
class PlayerIdentifier:
    """Display name plus optional squad tag.

    ``squad=None`` means no tag was written; ``squad=""`` means an empty tag
    such as ``Name ()``. The two compare unequal.
    """

    name: str
    squad: str | None = None

    def __str__(self) -> str:
        if self.squad is None:
            return self.name
        return f"{self.name} ({self.squad})"

    def as_dict(self) -> dict[str, Any]:
        return {"name": self.name, "squad": self.squad}


@dataclass(frozen=True)
class Reward:
    """Silver lions and research points paid for one table row."""

    silverlions: int | None = None
    research: int | None = None

    def as_dict(self) -> dict[str, Any]:
        return {"silverlions": self.silverlions, "research": self.research}


@dataclass(frozen=True, kw_only=True)
class Event:
    """One scored occurrence taken from a single report line.

    Sentence lines name the ``actor``; table rows belong to the report's owner
    and leave it ``None`` but carry a ``reward``.
    """

    kind: ClassVar[LineKind]

    actor: PlayerIdentifier | None = None
    vehicle: VehicleName | None = None
    points: int | None = None
    reward: Reward | None = None
    time: int | None = None  # game clock, seconds
    line_number: int = field(default=0, compare=False)

    @property
    def from_table(self) -> bool:
        return self.actor is None

    def as_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"kind": self.kind.value}
        for item in fields(self):
            data[item.name] = _plain(getattr(self, item.name))
        return data


@dataclass(frozen=True, kw_only=True)
class TargetedEvent(Event):
    target: PlayerIdentifier | None = None
    target_vehicle: VehicleName | None = None


@dataclass(frozen=True, kw_only=True)
class Kill(TargetedEvent):
    kind: ClassVar[LineKind] = LineKind.KILL


@dataclass(frozen=True, kw_only=True)
class Assist(TargetedEvent):
    kind: ClassVar[LineKind] = LineKind.ASSIST


@dataclass(frozen=True, kw_only=True)
class CriticalHit(TargetedEvent):
    kind: ClassVar[LineKind] = LineKind.CRITICAL_HIT


@dataclass(frozen=True, kw_only=True)
class Scouting(TargetedEvent):
    kind: ClassVar[LineKind] = LineKind.SCOUTING


@dataclass(frozen=True, kw_only=True)
class ScoutedDamage(TargetedEvent):
    kind: ClassVar[LineKind] = LineKind.SCOUTED_DAMAGE


@dataclass(frozen=True, kw_only=True)
class ScoutedDestruction(TargetedEvent):
    kind: ClassVar[LineKind] = LineKind.SCOUTED_DESTRUCTION


@dataclass(frozen=True, kw_only=True)
class Capture(Event):
    kind: ClassVar[LineKind] = LineKind.CAPTURE

    zone: str | None = None


@dataclass(frozen=True, kw_only=True)
class Repair(Event):
    kind: ClassVar[LineKind] = LineKind.REPAIR


EVENT_TYPES: dict[LineKind, type[Event]] = {
    cls.kind: cls
    for cls in (Kill, Assist, CriticalHit, Capture, Repair, Scouting, ScoutedDamage, ScoutedDestruction)
}


@dataclass(frozen=True)
class Award:
    """A row of the awards table."""

    time: int
    name: str
    reward: Reward
    line_number: int = field(default=0, compare=False)

    def as_dict(self) -> dict[str, Any]:
        return {"time": self.time, "name": self.name, "reward": self.reward.as_dict()}


@dataclass(frozen=True)
class VehicleStats:
    """Per-vehicle figures joined from the activity time and time played tables."""

    name: VehicleName
    time: int | None = None
    reward: Reward | None = None
    activity: int | None = None  # percent
    time_played: int | None = None  # seconds
    played_research: int | None = None

    @property
    def total_research(self) -> int | None:
        parts = [self.played_research, self.reward.research if self.reward else None]
        known = [value for value in parts if value is not None]
        return sum(known) if known else None

    def as_dict(self) -> dict[str, Any]:
        data = {item.name: _plain(getattr(self, item.name)) for item in fields(self)}
        data["total_research"] = self.total_research
        return data


@dataclass(frozen=True)
class Summary:
    """Roll-up fields present on one summary line; absent ones stay None."""

    kind: ClassVar[LineKind] = LineKind.SUMMARY

    mission: str | None = None
    result: BattleResult | None = None
    session_id: str | None = None
    score: int | None = None
    silverlions: int | None = None
    research: int | None = None
    activity: int | None = None
    other_awards: Reward | None = None


@dataclass(frozen=True)
class Unrecognized:
    """A line skipped under the lenient policy."""

    kind: ClassVar[LineKind] = LineKind.UNRECOGNIZED

    line_number: int = field(compare=False)
    text: str


@dataclass(frozen=True)
class ReportTotals:
    score: int | None = None
    silverlions: int | None = None
    research: int | None = None
    activity: int | None = None  # percent

    def as_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "silverlions": self.silverlions,
            "research": self.research,
            "activity": self.activity,
        }


@dataclass(frozen=True)
class BattleReport:
    mission: str | None = None
    result: BattleResult = BattleResult.UNKNOWN
    session_id: str | None = None
    events: tuple[Event, ...] = ()
    totals: ReportTotals = field(default_factory=ReportTotals)
    awards: tuple[Award, ...] = ()
    vehicles: tuple[VehicleStats, ...] = ()
    other_awards: Reward | None = None
    unrecognized: tuple[Unrecognized, ...] = ()

    @property
    def unrecognized_count(self) -> int:
        return len(self.unrecognized)

    def events_of(self, kind: LineKind) -> list[Event]:
        return [event for event in self.events if event.kind == kind]

    def as_dict(self) -> dict[str, Any]:
        return {
            "mission": self.mission,
            "result": self.result.value,
            "session_id": self.session_id,
            "events": [event.as_dict() for event in self.events],
            "totals": self.totals.as_dict(),
            "awards": [award.as_dict() for award in self.awards],
            "vehicles": [vehicle.as_dict() for vehicle in self.vehicles],
            "other_awards": _plain(self.other_awards),
            "unrecognized_count": self.unrecognized_count,
            "unrecognized": [
                {"line_number": entry.line_number, "text": entry.text} for entry in self.unrecognized
            ],
        }
