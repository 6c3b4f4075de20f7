"""Aggregations behind the standings, matchup and roster views."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field

from .sleeper import MAX_WEEK, MIN_WEEK
from .types import Matchup, Player, Roster, User


@dataclass(slots=True)
class StandingRow:
    rank: int
    roster_id: int
    team_name: str
    total_points: float


@dataclass(slots=True)
class MatchupPairing:
    """Entries sharing one ``matchup_id`` (normally exactly two)."""

    matchup_id: int
    entries: list[Matchup] = field(default_factory=list)


@dataclass(slots=True)
class MatchupSummary:
    matchup_id: int
    team1: str
    team2: str
    team1_points: float
    team2_points: float
    leader: str


@dataclass(slots=True)
class RosterLine:
    player_id: str
    name: str
    position: str
    team: str
    points: float
    injury_status: str | None = None


@dataclass(slots=True)
class RosterView:
    roster_id: int
    team_name: str
    total_points: float
    starters: list[RosterLine]
    bench: list[RosterLine]


def clamp_week(week: int) -> int:
    """Pin ``week`` into the regular-season range."""
    return min(MAX_WEEK, max(MIN_WEEK, week))


def find_owner(roster: Roster, users: Iterable[User]) -> User | None:
    """User whose id matches the roster owner, if any."""
    return next((user for user in users if user.user_id == roster.owner_id), None)


def team_display_name(roster: Roster, users: Iterable[User]) -> str:
    """Owner display name, else username, else ``Team {roster_id}``."""
    owner = find_owner(roster, users)
    if owner is not None and owner.team_name:
        return owner.team_name
    return f"Team {roster.roster_id}"


def starter_points_total(points: Iterable[float | None]) -> float:
    """Sum of starter points; missing values count as zero."""
    return float(sum(value or 0.0 for value in points))


def matchup_entry_points(entry: Matchup) -> float:
    """Week points for one side: starter points when present, else ``points``."""
    if entry.starters_points:
        return starter_points_total(entry.starters_points)
    return entry.points


def build_standings(
    rosters: Sequence[Roster], users: Sequence[User]
) -> list[StandingRow]:
    """Rank rosters by total starter points, highest first."""

    totals = [
        (
            roster,
            team_display_name(roster, users),
            starter_points_total(roster.starters_points),
        )
        for roster in rosters
    ]
    totals.sort(key=lambda item: item[2], reverse=True)
    return [
        StandingRow(
            rank=index,
            roster_id=roster.roster_id,
            team_name=name,
            total_points=total,
        )
        for index, (roster, name, total) in enumerate(totals, 1)
    ]


def group_matchups(matchups: Iterable[Matchup]) -> list[MatchupPairing]:
    """Group entries by ``matchup_id`` in first-seen order, skipping byes."""

    pairings: dict[int, MatchupPairing] = {}
    for entry in matchups:
        if entry.matchup_id is None:
            continue
        pairing = pairings.setdefault(
            entry.matchup_id, MatchupPairing(entry.matchup_id)
        )
        pairing.entries.append(entry)
    return list(pairings.values())


def roster_name_by_id(
    rosters: Sequence[Roster], users: Sequence[User]
) -> dict[int, str]:
    """Map each roster id to its display name."""
    return {roster.roster_id: team_display_name(roster, users) for roster in rosters}


def summarize_pairing(
    pairing: MatchupPairing, names: Mapping[int, str]
) -> MatchupSummary | None:
    """Head-to-head line for a pairing; ``None`` unless it has two entries."""

    if len(pairing.entries) < 2:
        return None
    first, second = pairing.entries[0], pairing.entries[1]
    first_name = names.get(first.roster_id, f"Team {first.roster_id}")
    second_name = names.get(second.roster_id, f"Team {second.roster_id}")
    first_points = matchup_entry_points(first)
    second_points = matchup_entry_points(second)
    return MatchupSummary(
        matchup_id=pairing.matchup_id,
        team1=first_name,
        team2=second_name,
        team1_points=first_points,
        team2_points=second_points,
        leader=first_name if first_points > second_points else second_name,
    )


def _roster_line(
    player_id: str, players: Mapping[str, Player], points: Mapping[str, float]
) -> RosterLine | None:
    player = players.get(player_id)
    if player is None:
        return None
    return RosterLine(
        player_id=player_id,
        name=player.full_name,
        position=player.position or "-",
        team=player.team or "FA",
        points=float(points.get(player_id) or 0.0),
        injury_status=player.injury_status,
    )


def build_roster_view(
    roster: Roster, users: Sequence[User], players: Mapping[str, Player]
) -> RosterView:
    """Starters and reserve lines with catalog details; unknown ids are skipped."""

    def lines(player_ids: Iterable[str]) -> list[RosterLine]:
        resolved = (
            _roster_line(pid, players, roster.players_points) for pid in player_ids
        )
        return [line for line in resolved if line is not None]

    return RosterView(
        roster_id=roster.roster_id,
        team_name=team_display_name(roster, users),
        total_points=starter_points_total(roster.starters_points),
        starters=lines(roster.starters),
        bench=lines(roster.reserve),
    )


def filter_rosters(
    rosters: Sequence[Roster], users: Sequence[User], search: str
) -> list[Roster]:
    """Rosters whose team name contains ``search`` (case-insensitive).

    Matches are ordered by total starter points, highest first.
    """
    needle = search.strip().lower()
    matches = [
        roster
        for roster in rosters
        if needle in team_display_name(roster, users).lower()
    ]
    matches.sort(
        key=lambda roster: starter_points_total(roster.starters_points), reverse=True
    )
    return matches


__all__ = [
    "MatchupPairing",
    "MatchupSummary",
    "RosterLine",
    "RosterView",
    "StandingRow",
    "build_roster_view",
    "build_standings",
    "clamp_week",
    "filter_rosters",
    "find_owner",
    "group_matchups",
    "matchup_entry_points",
    "roster_name_by_id",
    "starter_points_total",
    "summarize_pairing",
    "team_display_name",
]
