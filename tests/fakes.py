"""Fakes and sample league data shared by the test modules."""

from __future__ import annotations

import json
from types import TracebackType
from typing import Any

from sleeper_insights.types import League, Matchup, Player, Roster, User


class FakeResponse:
    def __init__(self, status: int, body: Any) -> None:
        self.status = status
        self._body = body if isinstance(body, str) else json.dumps(body)

    async def text(self) -> str:
        return self._body

    async def __aenter__(self) -> FakeResponse:
        return self

    async def __aexit__(self, *_exc: object) -> None:
        return None


class FakeSession:
    """Stand-in for :class:`aiohttp.ClientSession` replaying one response."""

    def __init__(self, response: FakeResponse | Exception) -> None:
        self.response = response
        self.requests: list[tuple[str, str, dict[str, Any]]] = []
        self.closed = False

    def request(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        self.requests.append((method, url, kwargs))
        if isinstance(self.response, Exception):
            raise self.response
        return self.response

    async def close(self) -> None:
        self.closed = True


class FakeGenerator:
    """Text generator returning canned replies (or raising canned errors)."""

    def __init__(self, *replies: str | Exception) -> None:
        self._replies = list(replies) or ["{}"]
        self.calls: list[str] = []
        self.closed = False

    async def generate(self, prompt: str) -> str:
        self.calls.append(prompt)
        reply = self._replies[min(len(self.calls), len(self._replies)) - 1]
        if isinstance(reply, Exception):
            raise reply
        return reply

    async def close(self) -> None:
        self.closed = True

    async def __aenter__(self) -> FakeGenerator:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        await self.close()


class FakeSleeper:
    """In-memory stand-in for :class:`SleeperClient`."""

    def __init__(
        self,
        data: dict[str, Any],
        *,
        error: Exception | None = None,
    ) -> None:
        self.data = data
        self.error = error
        self.requested_weeks: list[int] = []

    def _check(self) -> None:
        if self.error is not None:
            raise self.error

    async def get_league(self) -> League:
        self._check()
        return self.data["league"]

    async def get_users(self) -> list[User]:
        self._check()
        return self.data["users"]

    async def get_rosters(self) -> list[Roster]:
        self._check()
        return self.data["rosters"]

    async def get_matchups(self, week: int) -> list[Matchup]:
        self._check()
        self.requested_weeks.append(week)
        return self.data["matchups"]

    async def get_players(self) -> dict[str, Player]:
        self._check()
        return self.data["players"]

    async def __aenter__(self) -> FakeSleeper:
        return self

    async def __aexit__(self, *_exc: object) -> None:
        return None


def make_league_data() -> dict[str, Any]:
    users = [
        User(user_id="u1", username="alice99", display_name="Alice"),
        User(user_id="u2", username="bob", display_name=None),
        User(user_id="u3", username="carol_c", display_name="Carol"),
    ]
    rosters = [
        Roster(
            roster_id=1,
            owner_id="u1",
            players=["p1", "p2", "p3"],
            starters=["p1", "p2"],
            reserve=["p3"],
            starters_points=[10.5, 5.0],
            players_points={"p1": 10.5, "p2": 5.0, "p3": 2.0},
        ),
        Roster(
            roster_id=2,
            owner_id="u2",
            players=["p4"],
            starters=["p4"],
            starters_points=[20.0],
            players_points={"p4": 20.0},
        ),
        Roster(roster_id=3, owner_id="u3", starters_points=[None]),
        Roster(roster_id=4, owner_id=None, starters_points=[1.0]),
    ]
    matchups = [
        Matchup(matchup_id=1, roster_id=1, starters=["p1", "p2"], starters_points=[12.0, 3.0]),
        Matchup(matchup_id=1, roster_id=2, starters=["p4"], points=14.0),
        Matchup(matchup_id=2, roster_id=3, starters_points=[7.0]),
        Matchup(matchup_id=2, roster_id=4, starters_points=[9.0]),
        Matchup(matchup_id=None, roster_id=5),
    ]
    players = {
        "p1": Player(player_id="p1", first_name="Patrick", last_name="Mahomes", position="QB", team="KC"),
        "p2": Player(player_id="p2", first_name="Bijan", last_name="Robinson", position="RB", team="ATL"),
        "p3": Player(
            player_id="p3",
            first_name="Tee",
            last_name="Higgins",
            position="WR",
            team="CIN",
            injury_status="Questionable",
        ),
        "p4": Player(player_id="p4", first_name="Josh", last_name="Allen", position="QB", team="BUF"),
    }
    league = League(
        league_id="123",
        name="Sunday Funday",
        season="2025",
        total_rosters=4,
        status="in_season",
    )
    return {
        "league": league,
        "users": users,
        "rosters": rosters,
        "matchups": matchups,
        "players": players,
    }


VALID_REPLY = (
    '```json\n{"summary": "Model summary", "keyInsights": ["a", "b"], '
    '"recommendations": ["c"], "confidence": 7}\n```'
)
