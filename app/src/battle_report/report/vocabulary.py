"""Surface phrases the classifier recognizes, per locale."""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Iterable, Mapping

import yaml

from .enums import EVENT_KINDS, TARGETED_KINDS, LineKind, TableSection
from .errors import VocabularyError

logger = logging.getLogger(__name__)

SUMMARY_LABEL_KEYS: tuple[str, ...] = (
    "mission",
    "result",
    "session",
    "score",
    "rewards",
    "activity",
    "other_awards",
)
TABLE_KEYS: tuple[str, ...] = (
    *(kind.value for kind in (*TARGETED_KINDS, LineKind.CAPTURE)),
    *(section.value for section in TableSection),
)


@dataclass(frozen=True)
class Vocabulary:
    """Verb phrases and connectives for one report language.

    ``verbs`` maps each event kind to its surface phrases; the first phrase is
    the canonical one used when rendering.
    """

    verbs: Mapping[LineKind, tuple[str, ...]]
    vehicle_connectives: tuple[str, ...] = ("in",)
    target_vehicle_connectives: tuple[str, ...] = ("flying", "driving", "sailing")
    points_connectives: tuple[str, ...] = ("for",)
    points_units: tuple[str, ...] = ("points", "point", "pts")
    victory_words: tuple[str, ...] = ("Victory", "Win")
    defeat_words: tuple[str, ...] = ("Defeat", "Loss")
    mission_prefixes: tuple[str, ...] = ("in the",)
    mission_suffixes: tuple[str, ...] = ("mission",)
    silverlion_units: tuple[str, ...] = ("SL",)
    research_units: tuple[str, ...] = ("RP",)
    summary_labels: Mapping[str, tuple[str, ...]] | None = None
    table_names: Mapping[str, tuple[str, ...]] | None = None

    def phrases(self, kind: LineKind) -> tuple[str, ...]:
        return tuple(self.verbs.get(kind, ()))

    def labels(self, key: str) -> tuple[str, ...]:
        return tuple((self.summary_labels or {}).get(key, ()))

    def tables(self, key: str) -> tuple[str, ...]:
        return tuple((self.table_names or {}).get(key, ()))

    def with_synonyms(self, synonyms: Mapping[LineKind | str, Iterable[str]]) -> "Vocabulary":
        """Return a copy with extra verb phrases appended per kind."""
        verbs = {kind: tuple(phrases) for kind, phrases in self.verbs.items()}
        for raw_kind, phrases in synonyms.items():
            kind = _coerce_kind(raw_kind)
            verbs[kind] = _merge(verbs.get(kind, ()), phrases)
        return replace(self, verbs=verbs)


def default_vocabulary() -> Vocabulary:
    """English phrases as the game client writes them."""
    return Vocabulary(
        verbs={
            LineKind.KILL: ("destroyed", "shot down", "killed"),
            LineKind.ASSIST: ("assisted in the destruction of", "assisted in destroying"),
            LineKind.CRITICAL_HIT: ("critically damaged", "critically hit"),
            LineKind.CAPTURE: ("captured",),
            LineKind.REPAIR: ("completed repairs", "repaired"),
        },
        summary_labels={
            "mission": ("Mission",),
            "result": ("Result",),
            "session": ("Session",),
            "score": ("Total score", "Score"),
            "rewards": ("Earned", "Total"),
            "activity": ("Activity",),
            "other_awards": ("Other awards",),
        },
        table_names={
            "kill": ("Destruction of aircraft", "Destruction of ground vehicles and fleets"),
            "assist": ("Assistance in destroying the enemy",),
            "critical_hit": ("Critical damage to the enemy",),
            "capture": ("Capture of zones",),
            "scouting": ("Scouting of the enemy",),
            "scouted_damage": ("Damage taken by scouted enemies",),
            "scouted_destruction": ("Destruction by allies of scouted enemies",),
            "awards": ("Awards",),
            "activity_time": ("Activity Time",),
            "time_played": ("Time Played",),
        },
    )


def load_vocabulary(path: str | Path, *, base: Vocabulary | None = None) -> Vocabulary:
    """Load a YAML vocabulary and merge it onto ``base`` (English by default).

    Lists in the document extend the base lists; they do not replace them.
    """

    source = Path(path)
    if not source.is_file():
        raise FileNotFoundError(f"Vocabulary not found: {source}")

    data = yaml.safe_load(source.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise VocabularyError(f"Vocabulary {source} must be a mapping")

    vocabulary = base or default_vocabulary()
    vocabulary = vocabulary.with_synonyms(_as_mapping(data.get("verbs"), "verbs"))

    changes: dict[str, Any] = {}
    for name in (
        "vehicle_connectives",
        "target_vehicle_connectives",
        "points_connectives",
        "points_units",
        "victory_words",
        "defeat_words",
        "mission_prefixes",
        "mission_suffixes",
        "silverlion_units",
        "research_units",
    ):
        if name in data:
            changes[name] = _merge(getattr(vocabulary, name), _as_list(data[name], name))

    for name, keys in (("summary_labels", SUMMARY_LABEL_KEYS), ("table_names", TABLE_KEYS)):
        extra = _as_mapping(data.get(name), name)
        if extra:
            changes[name] = _merge_keyed(getattr(vocabulary, name) or {}, extra, name, keys)

    logger.debug("Loaded vocabulary from %s", source)
    return replace(vocabulary, **changes)


def _coerce_kind(value: LineKind | str) -> LineKind:
    try:
        kind = LineKind(value)
    except ValueError as exc:
        raise VocabularyError(f"Unknown event kind '{value}'") from exc
    if kind not in EVENT_KINDS:
        raise VocabularyError(f"Kind '{kind.value}' takes no verb phrases")
    return kind


def _merge(existing: Iterable[str], extra: Iterable[str]) -> tuple[str, ...]:
    cleaned = [phrase.strip() for phrase in (*existing, *extra) if phrase and phrase.strip()]
    return tuple(dict.fromkeys(cleaned))


def _merge_keyed(
    existing: Mapping[str, tuple[str, ...]],
    extra: Mapping[str, list[str]],
    name: str,
    keys: tuple[str, ...],
) -> dict[str, tuple[str, ...]]:
    merged = dict(existing)
    for key, values in extra.items():
        if key not in keys:
            raise VocabularyError(f"Unknown {name} key '{key}'; expected one of {keys}")
        merged[key] = _merge(merged.get(key, ()), values)
    return merged


def _as_mapping(value: Any, name: str) -> dict:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise VocabularyError(f"'{name}' must be a mapping")
    return {key: _as_list(phrases, f"{name}.{key}") for key, phrases in value.items()}


def _as_list(value: Any, name: str) -> list[str]:
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise VocabularyError(f"'{name}' must be a string or a list of strings")
    return value
