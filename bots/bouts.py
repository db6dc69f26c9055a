"""Discord surface of the bout tracker.

Listens for alias invocations in chat messages and exposes the ``/alias``
command group used to bind aliases to a tournament and team.
"""

from __future__ import annotations

import logging
from typing import Final

import discord
from discord import app_commands

from bout_tracker import ActionDescriptor, BoutTracker, Response, ResponseKind

log: Final = logging.getLogger("bout-tracker")

RESPONSE_COLORS: Final[dict[ResponseKind, discord.Color]] = {
    ResponseKind.ERROR: discord.Color.red(),
    ResponseKind.SUCCESS: discord.Color.green(),
    ResponseKind.WARNING: discord.Color.orange(),
}

ACTION_CHOICES: Final = [
    app_commands.Choice(name="Assign players", value="insert"),
    app_commands.Choice(name="Clear players", value="remove"),
]


def response_embed(response: Response) -> discord.Embed:
    return discord.Embed(
        title=response.title,
        description=response.body,
        color=RESPONSE_COLORS[response.kind],
    )


def build_descriptor(action: str, tournament_id: int, team_id: int) -> ActionDescriptor:
    if action == "remove":
        return ActionDescriptor.remove(tournament_id, team_id)
    return ActionDescriptor.insert(tournament_id, team_id)


class BoutCommands:
    def __init__(
        self,
        client: discord.Client,
        tracker: BoutTracker,
        *,
        guild: discord.abc.Snowflake | None = None,
    ) -> None:
        self._client = client
        self._tracker = tracker
        self._guild = guild
        self.group = self._build_group()

    @property
    def tracker(self) -> BoutTracker:
        return self._tracker

    def _build_group(self) -> app_commands.Group:
        group = app_commands.Group(name="alias", description="Manage bout commands")

        @group.command(name="add", description="Bind a command to a team's bout")
        @app_commands.describe(
            name="Command name, used as !name",
            action="Whether the command assigns or clears players",
            tournament_id="spire.gg tournament id",
            team_id="spire.gg team id",
        )
        @app_commands.choices(action=ACTION_CHOICES)
        async def add_alias(
            interaction: discord.Interaction,
            name: str,
            action: app_commands.Choice[str],
            tournament_id: app_commands.Range[int, 0],
            team_id: app_commands.Range[int, 0],
        ) -> None:
            descriptor = build_descriptor(action.value, tournament_id, team_id)
            response = await self._tracker.register_alias(name, descriptor)
            await self.reply(interaction, response)

        @group.command(name="remove", description="Remove a bout command")
        @app_commands.describe(name="Command name to remove")
        async def remove_alias(interaction: discord.Interaction, name: str) -> None:
            response = await self._tracker.unregister_alias(name)
            await self.reply(interaction, response)

        @group.command(name="list", description="Show all bout commands")
        async def list_aliases(interaction: discord.Interaction) -> None:
            response = await self._tracker.list_aliases()
            await self.reply(interaction, response)

        return group

    def install(self, tree: app_commands.CommandTree) -> None:
        tree.add_command(self.group, guild=self._guild, override=True)
        self._client.event(self.on_message)

    async def reply(self, interaction: discord.Interaction, response: Response) -> None:
        try:
            await interaction.response.send_message(embed=response_embed(response))
        except discord.HTTPException as exc:
            log.exception("Failed to answer /alias interaction: %s", exc)

    async def on_message(self, message: discord.Message) -> None:
        if message.author.bot:
            return
        response = await self._tracker.handle_message(message.content)
        if response is None:
            return
        try:
            await message.channel.send(embed=response_embed(response))
        except discord.Forbidden:
            log.warning("No send permission in channel %s", message.channel.id)
        except discord.HTTPException as exc:
            log.exception("Failed to send bout response: %s", exc)


__all__ = ["BoutCommands", "build_descriptor", "response_embed"]
