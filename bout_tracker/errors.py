from __future__ import annotations

from .responses import Response


class BoutTrackerError(Exception):
    """Base exception for failures reported back to the invoker."""

    title = "Error"

    def to_response(self) -> Response:
        return Response.error(self.title, str(self))


class FetchError(BoutTrackerError):
    """Raised when the match provider is unreachable or returns unusable data."""

    def __init__(self, title: str, cause: str) -> None:
        super().__init__(cause)
        self.title = title
        self.cause = cause


class NoActiveBoutError(FetchError):
    """Raised when a tournament lists no match for the requested team."""

    def __init__(self, tournament_id: int) -> None:
        super().__init__(
            "No active matches found",
            "For further information see "
            f"https://spire.gg/tournament/{tournament_id}#brackets.",
        )
        self.tournament_id = tournament_id


class NotFoundError(BoutTrackerError):
    """Raised when a removal targets a bout that was never tracked."""

    title = "No tracked match"

    def __init__(self, tournament_id: int, team_id: int) -> None:
        super().__init__(
            f"No match is tracked for tournament {tournament_id} and team {team_id}."
        )
        self.key = (tournament_id, team_id)


class MissingArgumentError(BoutTrackerError):
    title = "Missing argument"


class ArgumentMismatchError(MissingArgumentError):
    title = "Wrong argument"


class InvalidIndexError(BoutTrackerError, ValueError):
    title = "Invalid map index"

    def __init__(self, index: int, valid_range: range) -> None:
        if len(valid_range):
            detail = f"expected {valid_range.start} to {valid_range.stop - 1}"
        else:
            detail = "this match has no maps"
        super().__init__(f"Map index {index} is out of range, {detail}.")
        self.index = index
        self.valid_range = valid_range


class ArgumentParseError(BoutTrackerError, ValueError):
    title = "Invalid arguments"


class UnknownAliasError(BoutTrackerError):
    title = "Unknown command"


class CommandNotFoundError(BoutTrackerError):
    title = "Command not found"

    def __init__(self, alias: str) -> None:
        super().__init__(f"No command named `{alias}` is registered.")
        self.alias = alias

    def to_response(self) -> Response:
        return Response.warning(self.title, str(self))


__all__ = [
    "ArgumentMismatchError",
    "ArgumentParseError",
    "BoutTrackerError",
    "CommandNotFoundError",
    "FetchError",
    "InvalidIndexError",
    "MissingArgumentError",
    "NoActiveBoutError",
    "NotFoundError",
    "UnknownAliasError",
]
