from __future__ import annotations

import logging

from .models import ActionDescriptor

log = logging.getLogger(__name__)


class CommandRegistry:
    """Process-wide mapping from user-chosen alias to the action it triggers."""

    def __init__(self) -> None:
        self._commands: dict[str, ActionDescriptor] = {}

    def add(self, alias: str, descriptor: ActionDescriptor) -> None:
        previous = self._commands.get(alias)
        self._commands[alias] = descriptor
        if previous is not None and previous != descriptor:
            log.info("Alias %s rebound from %s to %s", alias, previous, descriptor)

    def remove(self, alias: str) -> ActionDescriptor | None:
        return self._commands.pop(alias, None)

    def lookup(self, alias: str) -> ActionDescriptor | None:
        return self._commands.get(alias)

    def items(self) -> list[tuple[str, ActionDescriptor]]:
        return sorted(self._commands.items())

    def __contains__(self, alias: object) -> bool:
        return alias in self._commands

    def __len__(self) -> int:
        return len(self._commands)


__all__ = ["CommandRegistry"]
