from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from enum import Enum
from typing import ClassVar

from .errors import InvalidIndexError

DATE_FORMAT = "%A %d %B %Y"
TIME_FORMAT = "%H:%M UTC"

TrackingKey = tuple[int, int]


def utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass(slots=True)
class MapSlot:
    map_name: str
    player: str | None = None


@dataclass(slots=True, eq=False)
class Bout:
    """One match between two teams as reported by the match provider.

    Two bouts are the same match when their ids are equal; every other field
    may change between fetches of an unchanged match.
    """

    id: int
    tournament_name: str
    home: str
    away: str
    scheduled_at: datetime
    maps: list[MapSlot] = field(default_factory=list)

    TIEBREAKER_MARKER: ClassVar[str] = "TB"

    @classmethod
    def create(
        cls,
        bout_id: int,
        tournament_name: str,
        home: str,
        away: str,
        scheduled_at: datetime,
        map_names: Iterable[str],
    ) -> Bout:
        if scheduled_at.tzinfo is None:
            scheduled_at = scheduled_at.replace(tzinfo=UTC)
        return cls(
            id=bout_id,
            tournament_name=tournament_name,
            home=home,
            away=away,
            scheduled_at=scheduled_at,
            maps=[MapSlot(name) for name in map_names],
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Bout):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    @property
    def valid_range(self) -> range:
        return range(1, len(self.maps) + 1)

    def _slot(self, index: int) -> MapSlot:
        if index not in self.valid_range:
            raise InvalidIndexError(index, self.valid_range)
        return self.maps[index - 1]

    def insert_player(self, index: int, player: str) -> None:
        self._slot(index).player = player

    def remove_player(self, index: int) -> None:
        self._slot(index).player = None

    def render_title(self) -> str:
        return f"{self.home} vs {self.away}"

    def render_schedule(self, now: datetime | None = None) -> str:
        """Return date, time and a countdown to kickoff, relative to ``now``."""
        now = now or utc_now()
        if now.tzinfo is None:
            now = now.replace(tzinfo=UTC)
        scheduled = self.scheduled_at.astimezone(UTC)
        return "\n".join(
            (
                scheduled.strftime(DATE_FORMAT),
                scheduled.strftime(TIME_FORMAT),
                format_countdown(scheduled - now.astimezone(UTC)),
            )
        )

    def slot_marker(self, position: int) -> str:
        if position == len(self.maps):
            return self.TIEBREAKER_MARKER
        return str(position)

    def render_maps(self) -> str:
        lines = []
        for position, slot in enumerate(self.maps, start=1):
            label = slot.player
            if label is None:
                label = self.slot_marker(position)
            lines.append(f"{label}: {slot.map_name}")
        return "\n".join(lines)


def format_countdown(remaining: timedelta) -> str:
    total_seconds = int(remaining.total_seconds())
    if total_seconds <= 0:
        return "Started"
    days, rest = divmod(total_seconds, 86400)
    hours, rest = divmod(rest, 3600)
    minutes = rest // 60
    return f"Starts in {days}d {hours}h {minutes}m"


class ActionKind(Enum):
    INSERT = "insert"
    REMOVE = "remove"


@dataclass(frozen=True, slots=True)
class ActionDescriptor:
    kind: ActionKind
    tournament_id: int
    team_id: int

    @classmethod
    def insert(cls, tournament_id: int, team_id: int) -> ActionDescriptor:
        return cls(ActionKind.INSERT, tournament_id, team_id)

    @classmethod
    def remove(cls, tournament_id: int, team_id: int) -> ActionDescriptor:
        return cls(ActionKind.REMOVE, tournament_id, team_id)

    @property
    def key(self) -> TrackingKey:
        return (self.tournament_id, self.team_id)

    def describe(self) -> str:
        return (
            f"{self.kind.value} (tournament {self.tournament_id}, team {self.team_id})"
        )


@dataclass(frozen=True, slots=True)
class InsertArgument:
    player: str
    index: int


@dataclass(frozen=True, slots=True)
class RemoveArgument:
    index: int


EditArgument = InsertArgument | RemoveArgument


__all__ = [
    "ActionDescriptor",
    "ActionKind",
    "Bout",
    "EditArgument",
    "InsertArgument",
    "MapSlot",
    "RemoveArgument",
    "TrackingKey",
    "format_countdown",
    "utc_now",
]
