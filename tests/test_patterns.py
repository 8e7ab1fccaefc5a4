"""ゴール文パターンマッチャのテスト。"""

from __future__ import annotations

import pytest

from life4_ranks.grid import CellContext
from life4_ranks.models import (
    CaloriesGoal,
    MAPointsGoal,
    SetGoal,
    SongsAverageGoal,
    SongsCountGoal,
    SongsFolderGoal,
    SongsLampGoal,
    SongsSpecificGoal,
    TrialGoal,
)
from life4_ranks.patterns import RECOGNIZERS, match_cell


def _match(text: str, grid=None, row: int = 0, col: int = 0):
    if grid is None:
        grid = [[text]]
    return match_cell(text, CellContext(grid, row, col))


def _goal(text: str, grid=None, row: int = 0, col: int = 0):
    result = _match(text, grid, row, col)
    assert result is not None, text
    return result.goal


@pytest.mark.light
@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Burn 500", CaloriesGoal(count=500)),
        ("Burn 1,200 calories in one day", CaloriesGoal(count=1200)),
        ("Earn Gold or above on 2 Trials", TrialGoal(rank="gold", count=2)),
        ("Earn Platinum or above on a Trial", TrialGoal(rank="platinum", count=1)),
        ("Clear 3 12s", SongsCountGoal(d=12, song_count=3)),
        ("Clear a 14", SongsCountGoal(d=14, song_count=1)),
        ("Clear an 18+", SongsCountGoal(d=18, song_count=1, higher_diff=True)),
        ("PFC 10 13s", SongsCountGoal(d=13, song_count=10, clear_type="perfect")),
        ("Great Full Combo 5 12s", SongsCountGoal(d=12, song_count=5, clear_type="great")),
        ("FC 5 12s", SongsCountGoal(d=12, song_count=5, clear_type="good")),
        (
            "987k+ a 14+",
            SongsCountGoal(d=14, song_count=1, score=987000, higher_diff=True),
        ),
        (
            "987k+ a 14 (any chart)",
            SongsCountGoal(d=14, song_count=1, score=987000),
        ),
        ("AAA 5 15s", SongsCountGoal(d=15, song_count=5, score=990000)),
        ("987,654 2 16s", SongsCountGoal(d=16, song_count=2, score=987654)),
        (
            "990k+ 20 14s (3E over 980k)",
            SongsCountGoal(
                d=14, song_count=20, score=990000, exceptions=3, exception_score=980000
            ),
        ),
        ("Clear 4 14s in a row", SetGoal(diff_nums=(14, 14, 14, 14))),
        ("Clear 12, 13, 14 in a row+", SetGoal(diff_nums=(12, 13, 14), higher_diff=True)),
        ("All 12s over 980k (5E)", SongsFolderGoal(d=12, score=980000, exceptions=5)),
        (
            "All 14s over 990k (2E over 980k) (ex. DEAD END & MAX 300)",
            SongsFolderGoal(
                d=14,
                score=990000,
                exceptions=2,
                exception_score=980000,
                song_exceptions=('DEAD END("GROOVE RADAR" Special)', "MAX 300"),
            ),
        ),
        (
            "All 14s over 990k (2E) extra",
            SongsFolderGoal(d=14, score=990000, exceptions=2),
        ),
        ("12s: 985,000 Average", SongsAverageGoal(d=12, average_score=985000)),
        ("MA Points: 45", MAPointsGoal(points=45)),
        ("15 Clear Lamp", SongsLampGoal(d=15)),
        ("16s Red Lamp", SongsLampGoal(d=16, clear_type="life4")),
    ],
)
def test_recognizers_produce_expected_goal(text, expected):
    assert _goal(text) == expected


@pytest.mark.light
def test_set_is_tried_before_song_count():
    result = _match("Clear 3 12s in a row")
    assert result.recognizer == "set"
    assert result.goal == SetGoal(diff_nums=(12, 12, 12))


@pytest.mark.light
def test_lamp_suffix_does_not_shadow_folder_goal():
    result = _match("All 12s over 980k (ex. Red Lamp)")
    assert result.recognizer == "songs_folder"
    assert result.goal.song_exceptions == ("Red Lamp",)


@pytest.mark.light
def test_lamp_is_the_last_recognizer():
    assert RECOGNIZERS[-1].name == "lamp"


@pytest.mark.light
@pytest.mark.parametrize(
    "text", ["Hello there", "30", "12s", "Mandatory", "Complete 3", "12 Lamp", "Clear 3 12s today"]
)
def test_unrecognized_cells_return_none(text):
    assert _match(text) is None


@pytest.mark.light
def test_average_uses_difficulty_header_above():
    grid = [["Gold I"], ["12s"], ["Burn 500"], ["990k Average"]]
    assert _goal("990k Average", grid, row=3) == SongsAverageGoal(d=12, average_score=990000)


@pytest.mark.light
def test_difficulty_lookup_picks_nearest_header():
    grid = [["Gold I"], ["12s"], ["Average 985k"], ["13s"], ["Average 980k"]]
    assert _goal("Average 985k", grid, row=2) == SongsAverageGoal(d=12, average_score=985000)
    assert _goal("Average 980k", grid, row=4) == SongsAverageGoal(d=13, average_score=980000)


@pytest.mark.light
def test_difficulty_lookup_failure_yields_zero_and_logs(caplog):
    caplog.set_level("WARNING")
    assert _goal("990k Average") == SongsAverageGoal(d=0, average_score=990000)
    assert "Difficulty header not found" in caplog.text


@pytest.mark.light
def test_specific_songs_goal():
    grid = [["Gold I"], ["14s"], ["990k+ on PARANOiA & TRIP MACHINE (CSP)"]]
    goal = _goal(grid[2][0], grid, row=2)
    assert goal == SongsSpecificGoal(
        d=14,
        diff_class="challenge",
        score=990000,
        songs=("PARANOiA", "TRIP MACHINE"),
    )


@pytest.mark.light
def test_specific_songs_goal_keeps_and_inside_title():
    grid = [["14s"], ["990k+ on Love and Joy"]]
    goal = _goal(grid[1][0], grid, row=1)
    assert goal.songs == ("Love and Joy",)


@pytest.mark.light
def test_specific_songs_goal_defaults_to_expert():
    grid = [["15s"], ["AAA on MAX 300, DEAD END"]]
    goal = _goal(grid[1][0], grid, row=1)
    assert goal.diff_class == "expert"
    assert goal.songs == ("MAX 300", 'DEAD END("GROOVE RADAR" Special)')
    assert goal.score == 990000


@pytest.mark.light
def test_ma_points_reads_value_below():
    grid = [["MA Points"], ["1,250"]]
    assert _goal("MA Points", grid, row=0) == MAPointsGoal(points=1250)


@pytest.mark.light
def test_ma_points_without_value_below_logs(caplog):
    caplog.set_level("WARNING")
    assert _goal("MFC Points", [["MFC Points"]], row=0) == MAPointsGoal(points=0)
    assert "No numeric value below cell" in caplog.text


@pytest.mark.light
def test_lamp_uses_difficulty_header_above():
    grid = [["14s"], ["Clear 3 14s"], ["Gold Lamp"]]
    assert _goal("Gold Lamp", grid, row=2) == SongsLampGoal(d=14, clear_type="perfect")


@pytest.mark.light
def test_match_reports_cell_position():
    grid = [["", ""], ["", "Burn 500"]]
    result = _match("Burn 500", grid, row=1, col=1)
    assert (result.row, result.col, result.recognizer) == (1, 1, "calories")
