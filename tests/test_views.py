"""Tests for standings, matchup and roster aggregation."""

from __future__ import annotations

from typing import Any

from sleeper_insights.types import Matchup, Roster, User
from sleeper_insights.views import (
    MatchupPairing,
    build_roster_view,
    build_standings,
    clamp_week,
    filter_rosters,
    group_matchups,
    roster_name_by_id,
    summarize_pairing,
    team_display_name,
)


def test_clamp_week() -> None:
    assert clamp_week(0) == 1
    assert clamp_week(7) == 7
    assert clamp_week(25) == 18


def test_team_display_name_prefers_display_name(league_data: dict[str, Any]) -> None:
    users = league_data["users"]
    rosters = league_data["rosters"]

    assert [team_display_name(r, users) for r in rosters] == [
        "Alice",
        "bob",
        "Carol",
        "Team 4",
    ]


def test_build_standings_orders_by_points(league_data: dict[str, Any]) -> None:
    rows = build_standings(league_data["rosters"], league_data["users"])

    assert [(row.rank, row.team_name, row.total_points) for row in rows] == [
        (1, "bob", 20.0),
        (2, "Alice", 15.5),
        (3, "Team 4", 1.0),
        (4, "Carol", 0.0),
    ]


def test_group_matchups_skips_byes(league_data: dict[str, Any]) -> None:
    pairings = group_matchups(league_data["matchups"])

    assert [p.matchup_id for p in pairings] == [1, 2]
    assert [len(p.entries) for p in pairings] == [2, 2]


def test_summarize_pairing_uses_starter_points_then_points(
    league_data: dict[str, Any],
) -> None:
    names = roster_name_by_id(league_data["rosters"], league_data["users"])
    first, second = (
        summarize_pairing(p, names) for p in group_matchups(league_data["matchups"])
    )

    assert first is not None and second is not None
    assert (first.team1, first.team1_points) == ("Alice", 15.0)
    assert (first.team2, first.team2_points) == ("bob", 14.0)
    assert first.leader == "Alice"
    assert second.leader == "Team 4"


def test_summarize_pairing_needs_two_entries() -> None:
    pairing = MatchupPairing(9, [Matchup(matchup_id=9, roster_id=1)])

    assert summarize_pairing(pairing, {}) is None


def test_summarize_pairing_tie_goes_to_second_team() -> None:
    pairing = MatchupPairing(
        3,
        [
            Matchup(matchup_id=3, roster_id=7, points=10.0),
            Matchup(matchup_id=3, roster_id=8, points=10.0),
        ],
    )

    summary = summarize_pairing(pairing, {})

    assert summary is not None
    assert summary.team1 == "Team 7"
    assert summary.leader == "Team 8"


def test_build_roster_view(league_data: dict[str, Any]) -> None:
    roster = league_data["rosters"][0]

    view = build_roster_view(roster, league_data["users"], league_data["players"])

    assert view.team_name == "Alice"
    assert view.total_points == 15.5
    assert [(line.name, line.position, line.points) for line in view.starters] == [
        ("Patrick Mahomes", "QB", 10.5),
        ("Bijan Robinson", "RB", 5.0),
    ]
    assert [line.injury_status for line in view.bench] == ["Questionable"]


def test_build_roster_view_skips_unknown_players() -> None:
    roster = Roster(roster_id=5, starters=["ghost"], reserve=[])

    view = build_roster_view(roster, [], {})

    assert view.starters == []
    assert view.team_name == "Team 5"


def test_filter_rosters_is_case_insensitive(league_data: dict[str, Any]) -> None:
    users = league_data["users"]
    rosters = league_data["rosters"]

    assert [r.roster_id for r in filter_rosters(rosters, users, "  CAROL ")] == [3]
    assert [r.roster_id for r in filter_rosters(rosters, users, "team")] == [4]
    assert filter_rosters(rosters, [User(user_id="x")], "alice") == []


def test_filter_rosters_orders_matches_by_points(league_data: dict[str, Any]) -> None:
    users = league_data["users"]
    rosters = list(reversed(league_data["rosters"]))

    matches = filter_rosters(rosters, users, "c")

    assert [r.roster_id for r in matches] == [1, 3]
