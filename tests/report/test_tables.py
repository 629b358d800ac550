from __future__ import annotations

import pytest

from battle_report.report import (
    BattleResult,
    Kill,
    LineKind,
    MalformedNumeralError,
    Reward,
    ScoutedDestruction,
    UnrecognizedLineError,
    parse_report,
    render_report,
)

RESULT_LINE = "Victory in the [Domination] Poland (winter) mission!"

KILLS = """Destruction of ground vehicles and fleets     6    5820 SL     413 RP    
    7:13     Concept 3          M6A1            1010 SL    77 RP
    8:17     Concept 3          ISU-122()       1010 SL    80 RP
    8:31     Concept 3          Chi-To Late     1010 SL    73 RP
    11:47    Sherman Firefly    T-34 (1942)     930 SL     58 RP
    13:14    Sherman Firefly    Chi-Nu II       930 SL     61 RP
    13:43    Sherman Firefly    KV-85           930 SL     64 RP
"""

SCOUTING = """Scouting of the enemy                         5     255 SL               
    2:05    Concept 3    M36 GMC()       51 SL
    3:04    Concept 3    M36 GMC()       51 SL
    5:56    Concept 3    Chi-To Late     51 SL
    6:25    Concept 3    M6A1            51 SL
    6:51    Concept 3    ISU-122()       51 SL

Damage taken by scouted enemies               1     101 SL               
    3:45    Concept 3    M36 GMC()     101 SL

Destruction by allies of scouted enemies      1     505 SL      40 RP    
    3:45    Concept 3    M36 GMC()     ×    505 SL    10 + (PA)10 + (Booster)10 + (Talismans)10 = 40 RP
"""

AWARDS = """Awards                                       14    3450 SL     100 RP    
    3:46     Intelligence             100 SL           
    7:14     Tank Rescuer             50 SL            
    8:18     Rank does not matter     500 SL           
    8:32     Multi strike!            100 SL           
    8:32     Without a miss           200 SL           
    10:35    Ground Force Rescuer     150 SL           
    11:47    Without a miss           200 SL           
    13:14    Without a miss           200 SL           
    13:43    Eye for Eye              300 SL           
    13:43    Shadow strike streak!    100 SL           
    13:43    Multi strike!            100 SL           
    13:43    Without a miss           200 SL           
    13:55    Final blow!              250 SL           
    13:55    The Best Squad           1000 SL    100 RP
"""

VEHICLES = """Activity Time                                 3    3152 SL     160 RP    
    13:54    Concept 3          730 SL     68 RP                     
    13:54    Sherman Firefly    522 SL     56 RP                     
    13:54    Wyvern S4          1900 SL    18 + (Talismans)18 = 36 RP

Time Played                                   3               1057 RP    
    Concept 3          97%    8:21    680 RP                     
    Sherman Firefly    84%    2:51    185 RP                     
    Wyvern S4          67%    1:33    96 + (Talismans)96 = 192 RP
"""

OTHER_AWARDS = "Other awards                                       5295 SL     115 RP    \n"

FULL_REPORT = "\n".join([RESULT_LINE, "", KILLS, SCOUTING, AWARDS, VEHICLES, OTHER_AWARDS])


@pytest.fixture(scope="module")
def report():
    return parse_report(FULL_REPORT)


def test_header_and_result(report) -> None:
    assert report.mission == "[Domination] Poland (winter)"
    assert report.result == BattleResult.WIN
    assert report.unrecognized_count == 0


def test_event_tables(report) -> None:
    assert [event.kind for event in report.events] == (
        [LineKind.KILL] * 6 + [LineKind.SCOUTING] * 5 + [LineKind.SCOUTED_DAMAGE, LineKind.SCOUTED_DESTRUCTION]
    )

    first = report.events[0]
    assert isinstance(first, Kill)
    assert first.actor is None
    assert first.from_table
    assert first.time == 7 * 60 + 13
    assert first.vehicle == "Concept 3"
    assert first.target_vehicle == "M6A1"
    assert first.reward == Reward(silverlions=1010, research=77)
    assert first.points is None
    assert first.line_number == 4

    assert report.events[3].target_vehicle == "T-34 (1942)"
    assert report.events[6].reward == Reward(silverlions=51)

    shared = report.events[-1]
    assert isinstance(shared, ScoutedDestruction)
    assert shared.target_vehicle == "M36 GMC()"
    assert shared.reward == Reward(silverlions=505, research=40)


def test_awards_table(report) -> None:
    assert len(report.awards) == 14
    assert report.awards[0].name == "Intelligence"
    assert report.awards[0].time == 3 * 60 + 46
    assert report.awards[-1].name == "The Best Squad"
    assert report.awards[-1].reward == Reward(silverlions=1000, research=100)


def test_vehicle_tables_are_joined_by_name(report) -> None:
    assert [vehicle.name for vehicle in report.vehicles] == ["Concept 3", "Sherman Firefly", "Wyvern S4"]

    concept = report.vehicles[0]
    assert concept.activity == 97
    assert concept.time_played == 8 * 60 + 21
    assert concept.reward == Reward(silverlions=730, research=68)
    assert concept.total_research == 68 + 680

    wyvern = report.vehicles[2]
    assert wyvern.reward == Reward(silverlions=1900, research=36)
    assert wyvern.played_research == 192


def test_other_awards(report) -> None:
    assert report.other_awards == Reward(silverlions=5295, research=115)


def test_tabular_report_round_trip(report) -> None:
    rendered = render_report(report)
    assert parse_report(rendered) == report
    assert render_report(parse_report(rendered)) == rendered


def test_tables_and_sentence_lines_mix() -> None:
    text = "\n".join(
        [
            "Mission: Kursk",
            "PilotOne (JG1) destroyed PilotTwo in Tiger H1",
            KILLS,
            "PilotOne completed repairs in Tiger H1",
        ]
    )
    report = parse_report(text)
    assert [event.from_table for event in report.events] == [False] + [True] * 6 + [False]
    assert parse_report(render_report(report)) == report


def test_row_without_table_is_unrecognized() -> None:
    text = RESULT_LINE + "\n    7:13     Concept 3          M6A1            1010 SL    77 RP\n"
    with pytest.raises(UnrecognizedLineError) as excinfo:
        parse_report(text)
    assert excinfo.value.line_number == 2

    report = parse_report(text, policy="lenient")
    assert report.events == ()
    assert report.unrecognized[0].text.startswith("7:13")


def test_row_shape_must_fit_its_table() -> None:
    text = "\n".join([KILLS.splitlines()[0], "    Concept 3          97%    8:21    680 RP"])
    with pytest.raises(UnrecognizedLineError) as excinfo:
        parse_report(text)
    assert excinfo.value.line_number == 2


def test_a_sentence_line_closes_the_open_table() -> None:
    text = "\n".join(
        [
            KILLS.splitlines()[0],
            KILLS.splitlines()[1],
            "Mission: Kursk",
            KILLS.splitlines()[2],
        ]
    )
    with pytest.raises(UnrecognizedLineError) as excinfo:
        parse_report(text)
    assert excinfo.value.line_number == 4


def test_activity_above_one_hundred_percent_is_rejected() -> None:
    text = "\n".join(
        [
            "Time Played    1    680 RP",
            "    Concept 3    101%    8:21    680 RP",
        ]
    )
    with pytest.raises(MalformedNumeralError) as excinfo:
        parse_report(text)
    assert excinfo.value.line_number == 2
