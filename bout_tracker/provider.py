"""Client for the remote match provider (spire.gg)."""

from __future__ import annotations

import asyncio
import json
import logging
from datetime import UTC, datetime
from typing import Any, Final, Protocol

import aiohttp

from .errors import FetchError, NoActiveBoutError
from .models import Bout

log: Final = logging.getLogger(__name__)

DEFAULT_BASE_URL: Final[str] = "https://api.spire.gg"
DEFAULT_TIMEOUT_SECONDS: Final[float] = 10.0
API_ERROR_TITLE: Final[str] = "API error"


class MatchProvider(Protocol):
    async def fetch(self, tournament_id: int, team_id: int) -> Bout:
        """Return the team's current bout or raise ``FetchError``."""
        ...


def api_error(address: str, why: object) -> FetchError:
    return FetchError(
        API_ERROR_TITLE, f'Error parsing response of "{address}"!\n\t{why}'
    )


def _lineup(match: dict[str, Any], side: str) -> dict[str, Any]:
    return match["lineups"][side]


def involves_team(match: dict[str, Any], team_id: int) -> bool:
    return any(int(_lineup(match, side)["id"]) == team_id for side in ("A", "B"))


def parse_scheduled_at(raw: str) -> datetime:
    value = datetime.fromisoformat(raw.removesuffix("Z"))
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value


def parse_bout(match: dict[str, Any]) -> Bout:
    return Bout.create(
        bout_id=int(match["id"]),
        tournament_name=str(match["tournament"]["name"]),
        home=str(_lineup(match, "A")["name"]),
        away=str(_lineup(match, "B")["name"]),
        scheduled_at=parse_scheduled_at(str(match["datetime"])),
        map_names=[str(entry["name"]) for entry in match["maps"]],
    )


class SpireMatchProvider:
    """Find a team's next bout in a tournament through the spire.gg REST API.

    The tournament listing is scanned for the first match with the team in
    either lineup, then that match is fetched for its full details.
    """

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session
        self._owns_session = session is None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._timeout),
                headers={"User-Agent": "bout-tracker"},
            )
            self._owns_session = True
            log.info("Created new HTTP session")
        return self._session

    async def close(self) -> None:
        if self._owns_session and self._session is not None:
            await self._session.close()
        self._session = None

    async def _get_json(self, address: str) -> dict[str, Any]:
        session = self._get_session()
        try:
            async with session.get(address) as resp:
                raw = await resp.read()
                charset = resp.charset or "utf-8"
                if resp.status >= 400:
                    raise api_error(address, f"HTTP status {resp.status}")
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            log.warning("Request to %s failed: %s", address, exc)
            raise api_error(address, str(exc) or type(exc).__name__) from exc
        try:
            data = json.loads(raw.decode(charset))
        except (ValueError, LookupError) as exc:
            raise api_error(address, exc) from exc
        if not isinstance(data, dict) or "result" not in data:
            raise api_error(address, "missing field `result`")
        return data

    async def find_bout_id(self, tournament_id: int, team_id: int) -> int:
        address = f"{self._base_url}/matches?tournamentId={tournament_id}"
        data = await self._get_json(address)
        try:
            team_matches = [
                match
                for match in data["result"]["content"]
                if involves_team(match, team_id)
            ]
            if not team_matches:
                raise NoActiveBoutError(tournament_id)
            return int(team_matches[0]["id"])
        except (KeyError, TypeError, ValueError) as exc:
            raise api_error(address, f"malformed match listing: {exc!r}") from exc

    async def get_bout(self, bout_id: int) -> Bout:
        address = f"{self._base_url}/matches/{bout_id}"
        data = await self._get_json(address)
        try:
            return parse_bout(data["result"])
        except (KeyError, TypeError, ValueError) as exc:
            raise api_error(address, f"malformed match: {exc!r}") from exc

    async def fetch(self, tournament_id: int, team_id: int) -> Bout:
        bout_id = await self.find_bout_id(tournament_id, team_id)
        bout = await self.get_bout(bout_id)
        log.debug(
            "Fetched bout %s for tournament %s team %s", bout.id, tournament_id, team_id
        )
        return bout


__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_TIMEOUT_SECONDS",
    "MatchProvider",
    "SpireMatchProvider",
    "api_error",
    "involves_team",
    "parse_bout",
    "parse_scheduled_at",
]
