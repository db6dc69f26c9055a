from __future__ import annotations

from datetime import UTC, datetime

import pytest

from bout_tracker import Bout, FetchError

KICKOFF = datetime(2024, 3, 1, 18, 0, tzinfo=UTC)
DEFAULT_MAPS = ("Bank", "Border", "Clubhouse", "Consulate", "Villa")


def build_bout(
    bout_id: int = 1,
    *,
    home: str = "Alpha",
    away: str = "Bravo",
    maps=DEFAULT_MAPS,
    scheduled_at: datetime = KICKOFF,
) -> Bout:
    return Bout.create(
        bout_id=bout_id,
        tournament_name="Spring Cup",
        home=home,
        away=away,
        scheduled_at=scheduled_at,
        map_names=maps,
    )


class FakeProvider:
    """Match provider returning queued bouts or errors, one per fetch."""

    def __init__(self, *results) -> None:
        self.results = list(results)
        self.calls: list[tuple[int, int]] = []

    def queue(self, *results) -> None:
        self.results.extend(results)

    async def fetch(self, tournament_id: int, team_id: int) -> Bout:
        self.calls.append((tournament_id, team_id))
        result = self.results.pop(0) if len(self.results) > 1 else self.results[0]
        if isinstance(result, Exception):
            raise result
        # A fresh object per fetch, like a real decode would produce.
        return build_bout(result.id, maps=[slot.map_name for slot in result.maps])


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider(build_bout(1))


@pytest.fixture
def fetch_error() -> FetchError:
    return FetchError("API error", "connection refused")
