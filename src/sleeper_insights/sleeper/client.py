"""Sleeper API reads for league, user, roster, matchup and player records."""

from __future__ import annotations

import logging
from typing import Any, TypeVar

import aiohttp
from pydantic import BaseModel, ValidationError

from ..errors import ConfigurationError, RemoteError
from ..transport import AsyncJSONClient
from ..types import League, Matchup, Player, Roster, User

logger = logging.getLogger(__name__)

SLEEPER_BASE_URL = "https://api.sleeper.app/v1"
MIN_WEEK = 1
MAX_WEEK = 18

_RecordT = TypeVar("_RecordT", bound=BaseModel)


class SleeperClient(AsyncJSONClient):
    """Fetch read-only league data. One request per call, no retries."""

    def __init__(
        self,
        league_id: str | None,
        *,
        draft_id: str | None = None,
        base_url: str = SLEEPER_BASE_URL,
        session: aiohttp.ClientSession | None = None,
        timeout: float = 30.0,
    ) -> None:
        super().__init__(session=session, timeout=timeout)
        self.league_id = league_id
        self.draft_id = draft_id
        self._base_url = base_url.rstrip("/")

    async def fetch_resource(self, path: str) -> Any:
        """GET ``path`` relative to the API root and return the decoded JSON.

        Sleeper answers unknown ids with ``200 null``; that is reported as a
        :class:`RemoteError` as well.
        """

        url = f"{self._base_url}/{path.lstrip('/')}"
        data = await self._request_json("GET", url)
        if data is None:
            raise RemoteError(None, f"No data returned for {path}")
        return data

    def _league_path(self, suffix: str = "") -> str:
        if not self.league_id:
            raise ConfigurationError(
                "A Sleeper league id is required (set SLEEPER_LEAGUE_ID)"
            )
        return f"league/{self.league_id}{suffix}"

    def _draft_path(self, suffix: str = "") -> str:
        if not self.draft_id:
            raise ConfigurationError(
                "A Sleeper draft id is required (set SLEEPER_DRAFT_ID)"
            )
        return f"draft/{self.draft_id}{suffix}"

    @staticmethod
    def _parse(model: type[_RecordT], data: Any, path: str) -> _RecordT:
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            raise RemoteError(
                None, f"Unexpected {model.__name__} record from {path}: {exc}"
            ) from exc

    def _parse_list(
        self, model: type[_RecordT], data: Any, path: str
    ) -> list[_RecordT]:
        if not isinstance(data, list):
            raise RemoteError(None, f"Expected a list from {path}")
        return [self._parse(model, item, path) for item in data]

    async def get_league(self) -> League:
        path = self._league_path()
        return self._parse(League, await self.fetch_resource(path), path)

    async def get_users(self) -> list[User]:
        path = self._league_path("/users")
        return self._parse_list(User, await self.fetch_resource(path), path)

    async def get_rosters(self) -> list[Roster]:
        path = self._league_path("/rosters")
        return self._parse_list(Roster, await self.fetch_resource(path), path)

    async def get_matchups(self, week: int) -> list[Matchup]:
        if not MIN_WEEK <= week <= MAX_WEEK:
            raise ValueError(f"week must be between {MIN_WEEK} and {MAX_WEEK}")
        path = self._league_path(f"/matchups/{week}")
        return self._parse_list(Matchup, await self.fetch_resource(path), path)

    async def get_players(self) -> dict[str, Player]:
        """Return the full NFL player catalog keyed by player id."""

        path = "players/nfl"
        data = await self.fetch_resource(path)
        if not isinstance(data, dict):
            raise RemoteError(None, f"Expected an object from {path}")

        players: dict[str, Player] = {}
        for player_id, record in data.items():
            if not isinstance(record, dict):
                continue
            record = {**record, "player_id": record.get("player_id") or player_id}
            player = self._parse(Player, record, path)
            players[player_id] = player
        logger.debug("Loaded %s players from catalog", len(players))
        return players

    async def get_draft(self) -> dict[str, Any]:
        path = self._draft_path()
        data = await self.fetch_resource(path)
        if not isinstance(data, dict):
            raise RemoteError(None, f"Expected an object from {path}")
        return data

    async def get_draft_picks(self) -> list[dict[str, Any]]:
        path = self._draft_path("/picks")
        data = await self.fetch_resource(path)
        if not isinstance(data, list):
            raise RemoteError(None, f"Expected a list from {path}")
        return [item for item in data if isinstance(item, dict)]


__all__ = [
    "MAX_WEEK",
    "MIN_WEEK",
    "SLEEPER_BASE_URL",
    "SleeperClient",
]
