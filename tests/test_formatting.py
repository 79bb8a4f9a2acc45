"""Tests for display helpers and the stats chart."""

from datetime import datetime, timezone

from utils.formatting import (
    availability_badge,
    format_jersey,
    format_match_datetime,
    format_short_datetime,
    initials,
    parse_match_datetime,
    players_stats_frame,
    status_badge,
)
from utils.visualizations import create_player_stats_chart


def test_parse_handles_z_suffix():
    assert parse_match_datetime("2025-07-20T18:30:00Z") == datetime(2025, 7, 20, 18, 30, tzinfo=timezone.utc)
    assert parse_match_datetime(None) is None


def test_format_match_datetime():
    assert format_match_datetime("2025-07-20T18:30:00+00:00") == "20.07.2025 at 18:30"
    assert format_match_datetime("") == "N/A"


def test_format_short_datetime():
    assert format_short_datetime("2025-07-20T18:30:00+00:00") == "2025-07-20 18:30"


def test_format_jersey():
    assert format_jersey(9) == "#9"
    assert format_jersey(0) == "#0"
    assert format_jersey(None) == "#N/A"


def test_initials():
    assert initials("Chan Tai Man") == "CT"
    assert initials("alex") == "A"
    assert initials("") == "U"


def test_badges():
    assert status_badge("accepted", "Accepted") == "🟢 Accepted"
    assert status_badge(None) == "⚪ Pending"
    assert availability_badge(True).startswith("🟢")
    assert availability_badge(False).startswith("🔴")
    assert availability_badge(None) == "⚪ Not Set"


def test_players_stats_frame(profiles):
    stats = {"p1": {"matches_played": 2, "goals": 3, "assists": 1, "average_rating": 7.5}}
    frame = players_stats_frame(profiles, stats)
    assert list(frame["Player"]) == ["Alex Wong", "Ben Lee", "Chris Chan"]
    assert frame.loc[0, "Goals"] == 3
    assert frame.loc[1, "Matches"] == 0
    assert frame["Rating"].isna().sum() == 2


def test_stats_chart_has_goal_and_assist_bars(profiles):
    stats = {"p1": {"goals": 3, "assists": 1}, "p2": {"goals": 0, "assists": 2}}
    fig = create_player_stats_chart(players_stats_frame(profiles, stats))
    assert [trace.name for trace in fig.data] == ["Goals", "Assists"]
    assert list(fig.data[0].x)[0] == "Alex Wong"


def test_stats_chart_empty_frame(profiles):
    fig = create_player_stats_chart(players_stats_frame([], {}))
    assert len(fig.data) == 0
