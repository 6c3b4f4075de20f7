"""Dashboard service: fetch league data, aggregate it and attach AI analysis.

Sports-data failures surface as :class:`DashboardError` because there is no
substitute for missing league data. AI failures never surface; the
orchestrator already replaces them with fallback content.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine
from dataclasses import dataclass
from typing import Any

from .analyzer.models import AnalysisResult
from .analyzer.orchestrator import AnalysisOrchestrator
from .analyzer.prompts import to_plain
from .errors import DashboardError, RemoteError
from .sleeper import SleeperClient
from .types import League, Matchup, Player, Roster, User
from .views import (
    MatchupSummary,
    RosterView,
    StandingRow,
    build_roster_view,
    build_standings,
    clamp_week,
    filter_rosters,
    find_owner,
    group_matchups,
    matchup_entry_points,
    roster_name_by_id,
    summarize_pairing,
    team_display_name,
)

logger = logging.getLogger(__name__)

LEAGUE_OVERVIEW_LABEL = "League Overview and Standings Analysis"


@dataclass(slots=True)
class LeagueOverview:
    league: League
    standings: list[StandingRow]
    analysis: AnalysisResult


@dataclass(slots=True)
class WeekMatchups:
    week: int
    matchups: list[MatchupSummary]
    analysis: AnalysisResult


@dataclass(slots=True)
class MatchupDetail:
    week: int
    summary: MatchupSummary
    label: str
    analysis: AnalysisResult


@dataclass(slots=True)
class TeamDetail:
    roster: RosterView
    label: str
    analysis: AnalysisResult


def week_matchups_label(week: int) -> str:
    return f"Week {week} Matchup Analysis"


def matchup_detail_label(team1: str, team2: str) -> str:
    return f"Detailed Matchup Analysis: {team1} vs {team2}"


def team_analysis_label(team_name: str) -> str:
    return f"Team Analysis for {team_name}"


class Dashboard:
    """Builds the standings, matchup and team views for one league."""

    def __init__(
        self, sleeper: SleeperClient, orchestrator: AnalysisOrchestrator
    ) -> None:
        self.sleeper = sleeper
        self.orchestrator = orchestrator

    async def _load(self, *calls: Coroutine[Any, Any, Any]) -> list[Any]:
        """Run ``calls`` concurrently; one failure cancels the rest.

        Raises:
            DashboardError: if any fetch raised :class:`RemoteError`. Other
                errors (e.g. :class:`ConfigurationError`) propagate unchanged.
        """

        try:
            async with asyncio.TaskGroup() as group:
                tasks = [group.create_task(call) for call in calls]
        except ExceptionGroup as exc_group:
            first = exc_group.exceptions[0]
            if isinstance(first, RemoteError):
                logger.error("Failed to load league data: %s", first)
                raise DashboardError(
                    f"Failed to load league data: {first}"
                ) from first
            raise first from exc_group
        return [task.result() for task in tasks]

    async def league_overview(self, *, force_refresh: bool = False) -> LeagueOverview:
        league, users, rosters = await self._load(
            self.sleeper.get_league(),
            self.sleeper.get_users(),
            self.sleeper.get_rosters(),
        )
        payload = {"league": league, "users": users, "rosters": rosters}
        analysis = await self.orchestrator.get_analysis(
            LEAGUE_OVERVIEW_LABEL, to_plain(payload), force_refresh
        )
        return LeagueOverview(
            league=league,
            standings=build_standings(rosters, users),
            analysis=analysis,
        )

    async def week_matchups(
        self, week: int, *, force_refresh: bool = False
    ) -> WeekMatchups:
        week = clamp_week(week)
        matchups, users, rosters = await self._load(
            self.sleeper.get_matchups(week),
            self.sleeper.get_users(),
            self.sleeper.get_rosters(),
        )
        names = roster_name_by_id(rosters, users)
        summaries = [
            summary
            for summary in (
                summarize_pairing(pairing, names)
                for pairing in group_matchups(matchups)
            )
            if summary is not None
        ]
        payload = {
            "matchups": matchups,
            "users": users,
            "rosters": rosters,
            "week": week,
        }
        analysis = await self.orchestrator.get_analysis(
            week_matchups_label(week), to_plain(payload), force_refresh
        )
        return WeekMatchups(week=week, matchups=summaries, analysis=analysis)

    async def matchup_detail(
        self, week: int, matchup_id: int, *, force_refresh: bool = True
    ) -> MatchupDetail:
        """Head-to-head analysis for one pairing; refreshed by default."""

        week = clamp_week(week)
        matchups, users, rosters, players = await self._load(
            self.sleeper.get_matchups(week),
            self.sleeper.get_users(),
            self.sleeper.get_rosters(),
            self.sleeper.get_players(),
        )
        pairing = next(
            (p for p in group_matchups(matchups) if p.matchup_id == matchup_id), None
        )
        names = roster_name_by_id(rosters, users)
        summary = summarize_pairing(pairing, names) if pairing else None
        if pairing is None or summary is None:
            raise DashboardError(f"No matchup {matchup_id} found in week {week}")

        rosters_by_id = {roster.roster_id: roster for roster in rosters}
        sides = [
            _matchup_side(entry, rosters_by_id.get(entry.roster_id), players, name)
            for entry, name in zip(
                pairing.entries[:2], (summary.team1, summary.team2), strict=True
            )
        ]
        payload = {"team1": sides[0], "team2": sides[1], "week": week}
        label = matchup_detail_label(summary.team1, summary.team2)
        analysis = await self.orchestrator.get_analysis(
            label, to_plain(payload), force_refresh
        )
        return MatchupDetail(
            week=week, summary=summary, label=label, analysis=analysis
        )

    async def team_detail(
        self, search: str, *, force_refresh: bool = False
    ) -> TeamDetail:
        """Roster view and analysis for the top-scoring team matching ``search``."""

        users, rosters, players = await self._load(
            self.sleeper.get_users(),
            self.sleeper.get_rosters(),
            self.sleeper.get_players(),
        )
        matches = filter_rosters(rosters, users, search)
        if not matches:
            raise DashboardError(f"No team matching {search!r}")

        roster = matches[0]
        user = find_owner(roster, users)
        team_name = team_display_name(roster, users)
        payload = {
            "roster": roster,
            "user": user,
            "players": [players[pid] for pid in roster.players if pid in players],
        }
        label = team_analysis_label(team_name)
        analysis = await self.orchestrator.get_analysis(
            label, to_plain(payload), force_refresh
        )
        return TeamDetail(
            roster=build_roster_view(roster, users, players),
            label=label,
            analysis=analysis,
        )


def _matchup_side(
    entry: Matchup,
    roster: Roster | None,
    players: dict[str, Player],
    name: str,
) -> dict[str, Any]:
    starters = entry.starters or (roster.starters if roster else [])
    return {
        "roster": roster,
        "players": [players[pid] for pid in starters if pid in players],
        "points": matchup_entry_points(entry),
        "name": name,
    }


__all__ = [
    "LEAGUE_OVERVIEW_LABEL",
    "Dashboard",
    "LeagueOverview",
    "MatchupDetail",
    "TeamDetail",
    "WeekMatchups",
    "matchup_detail_label",
    "team_analysis_label",
    "week_matchups_label",
]
