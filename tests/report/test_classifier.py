from __future__ import annotations

import time

import pytest

from battle_report.report.classifier import LineClassifier, classify_line
from battle_report.report.enums import LineKind


@pytest.fixture(scope="module")
def classifier() -> LineClassifier:
    return LineClassifier()


def test_kill_line_with_squad_and_vehicle(classifier: LineClassifier) -> None:
    result = classifier.classify("PilotOne (JG1) destroyed PilotTwo in P-51D")
    assert result.kind == LineKind.KILL
    assert result.slots == {"actor": "PilotOne (JG1)", "target": "PilotTwo", "vehicle": "P-51D"}


def test_assist_line_fills_every_slot(classifier: LineClassifier) -> None:
    line = (
        "7:13 =JG1= PilotOne assisted in the destruction of PilotTwo (KG2) "
        "flying Bf 109 G-6 in P-51D for 75 points"
    )
    result = classifier.classify(line, line_number=4)
    assert result.kind == LineKind.ASSIST
    assert result.line_number == 4
    assert result.slot("time") == "7:13"
    assert result.slot("actor") == "=JG1= PilotOne"
    assert result.slot("target") == "PilotTwo (KG2)"
    assert result.slot("target_vehicle") == "Bf 109 G-6"
    assert result.slot("vehicle") == "P-51D"
    assert result.slot("points") == "75"


def test_critical_hit_is_not_taken_for_a_kill(classifier: LineClassifier) -> None:
    result = classifier.classify("PilotOne critically damaged PilotTwo driving T-34 (1942)")
    assert result.kind == LineKind.CRITICAL_HIT
    assert result.slot("target") == "PilotTwo"
    assert result.slot("target_vehicle") == "T-34 (1942)"
    assert result.slot("vehicle") is None


def test_capture_with_zone_vehicle_and_points(classifier: LineClassifier) -> None:
    result = classifier.classify("PilotOne (JG1) captured zone A in Tiger H1 for 30 points")
    assert result.kind == LineKind.CAPTURE
    assert result.slot("zone") == "zone A"
    assert result.slot("vehicle") == "Tiger H1"
    assert result.slot("points") == "30"


def test_capture_without_zone_keeps_vehicle(classifier: LineClassifier) -> None:
    result = classifier.classify("PilotOne captured in Tiger H1")
    assert result.kind == LineKind.CAPTURE
    assert result.slot("zone") is None
    assert result.slot("vehicle") == "Tiger H1"


def test_repair_lines(classifier: LineClassifier) -> None:
    full = classifier.classify("PilotOne completed repairs in Tiger H1 for 20 points")
    assert full.kind == LineKind.REPAIR
    assert full.slot("vehicle") == "Tiger H1"
    assert full.slot("points") == "20"

    bare = classifier.classify("PilotOne repaired")
    assert bare.kind == LineKind.REPAIR
    assert bare.slots == {"actor": "PilotOne"}


def test_result_line(classifier: LineClassifier) -> None:
    result = classifier.classify("Victory in the [Domination] Poland (winter) mission!")
    assert result.kind == LineKind.SUMMARY
    assert result.slots == {"win": "Victory", "mission": "[Domination] Poland (winter)"}

    defeat = classifier.classify("defeat in the Kursk mission")
    assert defeat.slots == {"loss": "defeat", "mission": "Kursk"}


@pytest.mark.parametrize(
    "line, slots",
    [
        ("Mission: Stalingrad", {"mission": "Stalingrad"}),
        ("Result: Loss", {"loss": "Loss"}),
        ("Session: 4f2a9c", {"session": "4f2a9c"}),
        ("Total score: 1,250", {"score": "1,250"}),
        ("Earned: 5820 SL 413 RP", {"silverlions": "5820", "research": "413"}),
        ("Total: 1000 SL", {"silverlions": "1000"}),
        (
            "Total: 505 SL 10 + (PA)10 + (Booster)10 + (Talismans)10 = 40 RP",
            {"silverlions": "505", "research": "10 + (PA)10 + (Booster)10 + (Talismans)10 = 40"},
        ),
        ("Activity: 97%", {"activity": "97"}),
    ],
)
def test_summary_lines(classifier: LineClassifier, line: str, slots: dict[str, str]) -> None:
    result = classifier.classify(line)
    assert result.kind == LineKind.SUMMARY
    assert result.slots == slots


def test_unparsable_points_are_kept_raw(classifier: LineClassifier) -> None:
    result = classifier.classify("PilotOne destroyed PilotTwo for N/A points")
    assert result.kind == LineKind.KILL
    assert result.slot("points") == "N/A"


def test_unrecognized_keeps_text_verbatim(classifier: LineClassifier) -> None:
    result = classifier.classify("  Damaged Vehicles:    Concept 3  ", line_number=9)
    assert result.kind == LineKind.UNRECOGNIZED
    assert result.text == "Damaged Vehicles:    Concept 3"
    assert result.slots == {}
    assert result.line_number == 9


def test_kill_without_target_is_unrecognized(classifier: LineClassifier) -> None:
    assert classifier.classify("PilotOne destroyed").kind == LineKind.UNRECOGNIZED


def test_blank_line() -> None:
    result = classify_line("   \t ")
    assert result.kind == LineKind.BLANK
    assert result.text == ""


def test_table_header(classifier: LineClassifier) -> None:
    result = classifier.classify("Awards                                       14    3450 SL     100 RP    ")
    assert result.kind == LineKind.TABLE_HEADER
    assert result.section == "awards"
    assert result.slots == {"table": "Awards", "count": "14", "silverlions": "3450", "research": "100"}

    played = classifier.classify("Time Played                                   3               1057 RP    ")
    assert played.kind == LineKind.TABLE_HEADER
    assert played.section == "time_played"
    assert played.slots == {"table": "Time Played", "count": "3", "research": "1057"}


@pytest.mark.parametrize(
    "line, slots",
    [
        (
            "    7:13     Concept 3          M6A1            1010 SL    77 RP",
            {"time": "7:13", "subject": "Concept 3", "object": "M6A1", "silverlions": "1010", "research": "77"},
        ),
        (
            "    11:47    Sherman Firefly    T-34 (1942)     930 SL     58 RP",
            {"time": "11:47", "subject": "Sherman Firefly", "object": "T-34 (1942)", "silverlions": "930", "research": "58"},
        ),
        (
            "    3:45    Concept 3    M36 GMC()     ×    505 SL    10 + (PA)10 + (Booster)10 + (Talismans)10 = 40 RP",
            {
                "time": "3:45",
                "subject": "Concept 3",
                "object": "M36 GMC()",
                "silverlions": "505",
                "research": "10 + (PA)10 + (Booster)10 + (Talismans)10 = 40",
            },
        ),
        (
            "    8:18     Rank does not matter     500 SL           ",
            {"time": "8:18", "subject": "Rank does not matter", "silverlions": "500"},
        ),
        (
            "    13:54    Wyvern S4          1900 SL    18 + (Talismans)18 = 36 RP",
            {"time": "13:54", "subject": "Wyvern S4", "silverlions": "1900", "research": "18 + (Talismans)18 = 36"},
        ),
        (
            "    Concept 3          97%    8:21    680 RP                     ",
            {"subject": "Concept 3", "activity": "97", "played": "8:21", "research": "680"},
        ),
    ],
)
def test_table_rows(classifier: LineClassifier, line: str, slots: dict[str, str]) -> None:
    result = classifier.classify(line)
    assert result.kind == LineKind.TABLE_ROW
    assert result.slots == slots


def test_other_awards_line(classifier: LineClassifier) -> None:
    result = classifier.classify("Other awards                                       5295 SL     115 RP    ")
    assert result.kind == LineKind.SUMMARY
    assert result.slots == {"other_silverlions": "5295", "other_research": "115"}


def test_sentence_lines_tolerate_extra_spacing(classifier: LineClassifier) -> None:
    result = classifier.classify("PilotOne   destroyed\tPilotTwo  in  P-51D")
    assert result.kind == LineKind.KILL
    assert result.slots == {"actor": "PilotOne", "target": "PilotTwo", "vehicle": "P-51D"}
    assert result.text == "PilotOne   destroyed\tPilotTwo  in  P-51D"


def test_long_whitespace_runs_classify_quickly(classifier: LineClassifier) -> None:
    gap = " " * 200_000
    started = time.perf_counter()
    noise = classifier.classify("a" + gap + "b")
    kill = classifier.classify("PilotOne" + gap + "destroyed" + gap + "PilotTwo")
    elapsed = time.perf_counter() - started

    assert noise.kind == LineKind.UNRECOGNIZED
    assert kill.kind == LineKind.KILL
    assert kill.slots == {"actor": "PilotOne", "target": "PilotTwo"}
    assert elapsed < 2.0
