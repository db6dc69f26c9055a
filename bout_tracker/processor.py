from __future__ import annotations

import logging
from typing import Final

from .errors import ArgumentMismatchError, MissingArgumentError, NotFoundError
from .models import (
    ActionDescriptor,
    ActionKind,
    Bout,
    EditArgument,
    InsertArgument,
    RemoveArgument,
    TrackingKey,
)
from .provider import MatchProvider

log: Final = logging.getLogger(__name__)


class Processor:
    """Tracks one bout per (tournament, team) and applies per-map edits.

    The table doubles as a cache of the provider's current match and as a
    journal of local player assignments. A fetched bout only replaces the
    stored one when its id differs, so edits survive re-fetches of the same
    match and are discarded once the team moves on to a new one.
    """

    def __init__(self, provider: MatchProvider) -> None:
        self._provider = provider
        self._bouts: dict[TrackingKey, Bout] = {}

    def tracked(self, key: TrackingKey) -> Bout | None:
        return self._bouts.get(key)

    def __len__(self) -> int:
        return len(self._bouts)

    def __contains__(self, key: object) -> bool:
        return key in self._bouts

    async def process(
        self, descriptor: ActionDescriptor, argument: EditArgument | None = None
    ) -> Bout:
        if descriptor.kind is ActionKind.INSERT:
            return await self.insert(descriptor.key, argument)
        if descriptor.kind is ActionKind.REMOVE:
            return self.remove(descriptor.key, argument)
        raise ValueError(f"Unsupported action: {descriptor.kind}")

    async def reconcile(self, key: TrackingKey) -> Bout:
        """Fetch the current bout for ``key`` and merge it into the table."""
        fetched = await self._provider.fetch(*key)
        stored = self._bouts.get(key)
        if stored is None:
            log.info("Tracking bout %s for %s", fetched.id, key)
            self._bouts[key] = fetched
            return fetched
        if stored != fetched:
            log.info("Bout for %s changed from %s to %s", key, stored.id, fetched.id)
            self._bouts[key] = fetched
            return fetched
        log.debug("Bout %s for %s unchanged", stored.id, key)
        return stored

    async def insert(self, key: TrackingKey, argument: EditArgument | None) -> Bout:
        if argument is not None and not isinstance(argument, InsertArgument):
            raise ArgumentMismatchError(
                f"Received {argument}, expected a player name and map index."
            )
        bout = await self.reconcile(key)
        if argument is not None:
            bout.insert_player(argument.index, argument.player)
            log.info(
                "Assigned %s to map %s of bout %s",
                argument.player,
                argument.index,
                bout.id,
            )
        return bout

    def remove(self, key: TrackingKey, argument: EditArgument | None) -> Bout:
        bout = self._bouts.get(key)
        if bout is None:
            raise NotFoundError(*key)
        if argument is None:
            raise MissingArgumentError("Received no arguments, expected a map index.")
        if not isinstance(argument, RemoveArgument):
            raise ArgumentMismatchError(f"Received {argument}, expected a map index.")
        bout.remove_player(argument.index)
        log.info("Cleared map %s of bout %s", argument.index, bout.id)
        return bout

    def drop_entry(self, key: TrackingKey) -> None:
        if self._bouts.pop(key, None) is not None:
            log.info("Stopped tracking %s", key)


__all__ = ["Processor"]
