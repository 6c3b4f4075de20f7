"""Record types returned by the Sleeper API.

The upstream API owns these shapes; the models only ignore unknown fields and
smooth over ``null`` values so downstream aggregation can stay simple.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class _Record(BaseModel):
    model_config = ConfigDict(extra="ignore")


class League(_Record):
    """League metadata (``/league/{league_id}``)."""

    league_id: str
    name: str = ""
    season: str = ""
    total_rosters: int = 0
    status: str = ""
    sport: str = "nfl"
    season_type: str = ""
    settings: dict[str, Any] = {}

    @field_validator("settings", mode="before")
    @classmethod
    def _settings_default(cls, value: object) -> object:
        return {} if value is None else value


class User(_Record):
    """A league member (``/league/{league_id}/users``)."""

    user_id: str
    username: str | None = None
    display_name: str | None = None
    avatar: str | None = None

    @property
    def team_name(self) -> str | None:
        return self.display_name or self.username or None


class RosterMetadata(_Record):
    team_name: str | None = None
    division: int | None = None
    rank: int | None = None


class Roster(_Record):
    """One team's players (``/league/{league_id}/rosters``)."""

    roster_id: int
    owner_id: str | None = None
    players: list[str] = []
    taxi: list[str] = []
    starters: list[str] = []
    reserve: list[str] = []
    metadata: RosterMetadata | None = None
    starters_points: list[float | None] = []
    players_points: dict[str, float] = {}

    @field_validator(
        "players", "taxi", "starters", "reserve", "starters_points", mode="before"
    )
    @classmethod
    def _lists_default(cls, value: object) -> object:
        return [] if value is None else value

    @field_validator("players_points", mode="before")
    @classmethod
    def _points_default(cls, value: object) -> object:
        return {} if value is None else value


class Matchup(_Record):
    """One roster's side of a weekly pairing (``/league/{id}/matchups/{week}``).

    Two entries share a ``matchup_id``; a ``None`` id marks a bye.
    """

    matchup_id: int | None = None
    roster_id: int
    starters: list[str] = []
    starters_points: list[float | None] = []
    players: list[str] = []
    players_points: dict[str, float] = {}
    points: float = 0.0

    @field_validator("starters", "starters_points", "players", mode="before")
    @classmethod
    def _lists_default(cls, value: object) -> object:
        return [] if value is None else value

    @field_validator("players_points", mode="before")
    @classmethod
    def _points_default(cls, value: object) -> object:
        return {} if value is None else value

    @field_validator("points", mode="before")
    @classmethod
    def _zero_if_none(cls, value: object) -> object:
        return 0.0 if value is None else value


class Player(_Record):
    """Catalog entry from ``/players/nfl``."""

    player_id: str = ""
    first_name: str | None = None
    last_name: str | None = None
    position: str | None = None
    team: str | None = None
    search_rank: int | None = None
    fantasy_positions: list[str] = []
    injury_status: str | None = None
    injury_notes: str | None = None

    @field_validator("fantasy_positions", mode="before")
    @classmethod
    def _positions_default(cls, value: object) -> object:
        return [] if value is None else value

    @property
    def full_name(self) -> str:
        parts = [part for part in (self.first_name, self.last_name) if part]
        return " ".join(parts) or self.player_id


__all__ = [
    "League",
    "Matchup",
    "Player",
    "Roster",
    "RosterMetadata",
    "User",
]
