"""Resolve alias invocations and serialize access to the tracked state."""

from __future__ import annotations

import asyncio
import logging
import shlex
from datetime import datetime
from typing import Final

from .errors import (
    ArgumentParseError,
    BoutTrackerError,
    CommandNotFoundError,
    UnknownAliasError,
)
from .models import (
    ActionDescriptor,
    ActionKind,
    Bout,
    EditArgument,
    InsertArgument,
    RemoveArgument,
)
from .processor import Processor
from .provider import MatchProvider
from .registry import CommandRegistry
from .responses import Response

log: Final = logging.getLogger(__name__)

DEFAULT_PREFIX: Final[str] = "!"


def parse_index(raw: str) -> int:
    if not raw.isdecimal():
        raise ArgumentParseError(f"Map index must be a positive number, got `{raw}`.")
    return int(raw)


def split_invocation(
    text: str, prefix: str = DEFAULT_PREFIX
) -> tuple[str, str] | None:
    """Split ``{prefix}{alias} args...`` into the alias and the raw argument text.

    Returns None when the text is not an invocation at all. Arguments are left
    unparsed so that chat which merely starts with the prefix stays silent.
    """
    stripped = text.strip()
    if not stripped.startswith(prefix):
        return None
    parts = stripped[len(prefix) :].split(maxsplit=1)
    if not parts:
        return None
    return parts[0], parts[1] if len(parts) > 1 else ""


def split_arguments(raw: str) -> list[str]:
    try:
        return shlex.split(raw)
    except ValueError as exc:
        raise ArgumentParseError(f"Could not parse arguments: {exc}.") from exc


def parse_argument(kind: ActionKind, args: list[str]) -> EditArgument | None:
    if not args:
        return None
    if kind is ActionKind.INSERT:
        if len(args) != 2:
            raise ArgumentParseError("Expected a player name and a map index.")
        player, raw_index = args
        return InsertArgument(player=player, index=parse_index(raw_index))
    if len(args) != 1:
        raise ArgumentParseError("Expected a single map index.")
    return RemoveArgument(index=parse_index(args[0]))


def normalize_alias(alias: str, prefix: str = DEFAULT_PREFIX) -> str:
    alias = alias.strip()
    if prefix and alias.startswith(prefix):
        alias = alias[len(prefix) :]
    if not alias or any(ch.isspace() for ch in alias):
        raise ArgumentParseError("Command names must be a single word.")
    return alias


def render_bout(bout: Bout, now: datetime | None = None) -> Response:
    body = "\n".join(
        (bout.tournament_name, bout.render_schedule(now), "", bout.render_maps())
    )
    return Response.success(bout.render_title(), body)


class BoutTracker:
    """Owns the command registry and the processor behind a single lock.

    Every invocation holds the lock from alias lookup through rendering, so
    invocations are handled one at a time even for unrelated teams.
    """

    def __init__(
        self,
        provider: MatchProvider,
        *,
        prefix: str = DEFAULT_PREFIX,
        registry: CommandRegistry | None = None,
        processor: Processor | None = None,
    ) -> None:
        self.prefix = prefix
        self.registry = registry if registry is not None else CommandRegistry()
        self.processor = processor if processor is not None else Processor(provider)
        self._lock = asyncio.Lock()

    async def handle_message(self, text: str) -> Response | None:
        """Handle a chat message; None means it was not a known alias."""
        invocation = split_invocation(text, self.prefix)
        if invocation is None:
            return None
        alias, args = invocation
        try:
            return await self.invoke(alias, args)
        except UnknownAliasError:
            return None

    async def invoke(self, alias: str, raw_args: str = "") -> Response:
        async with self._lock:
            descriptor = self.registry.lookup(alias)
            if descriptor is None:
                raise UnknownAliasError(f"No command named `{alias}`.")
            try:
                argument = parse_argument(descriptor.kind, split_arguments(raw_args))
                bout = await self.processor.process(descriptor, argument)
            except BoutTrackerError as exc:
                log.warning("Command %s failed: %s", alias, exc)
                return exc.to_response()
            return render_bout(bout)

    async def register_alias(
        self, alias: str, descriptor: ActionDescriptor
    ) -> Response:
        try:
            alias = normalize_alias(alias, self.prefix)
        except ArgumentParseError as exc:
            return exc.to_response()
        async with self._lock:
            self.registry.add(alias, descriptor)
        log.info("Registered alias %s -> %s", alias, descriptor)
        return Response.success(
            "Command added", f"`{self.prefix}{alias}` will {descriptor.describe()}."
        )

    async def unregister_alias(self, alias: str) -> Response:
        alias = alias.strip().removeprefix(self.prefix)
        async with self._lock:
            descriptor = self.registry.remove(alias)
            if descriptor is None:
                return CommandNotFoundError(alias).to_response()
            if descriptor.kind is ActionKind.INSERT:
                self.processor.drop_entry(descriptor.key)
        log.info("Unregistered alias %s (%s)", alias, descriptor)
        return Response.success(
            "Command removed", f"`{self.prefix}{alias}` was removed."
        )

    async def list_aliases(self) -> Response:
        async with self._lock:
            entries = self.registry.items()
        if not entries:
            return Response.success("Commands", "No commands registered yet.")
        lines = [
            f"`{self.prefix}{alias}`: {descriptor.describe()}"
            for alias, descriptor in entries
        ]
        return Response.success("Commands", "\n".join(lines))


__all__ = [
    "BoutTracker",
    "DEFAULT_PREFIX",
    "normalize_alias",
    "parse_argument",
    "parse_index",
    "render_bout",
    "split_arguments",
    "split_invocation",
]
