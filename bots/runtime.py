"""Discord runtime that wires the bout tracker to a bot client."""

from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass

import discord
from discord import app_commands

from bots.bouts import BoutCommands
from bots.config import TrackerConfig, env_log_level, read_tracker_config
from bout_tracker import BoutTracker, SpireMatchProvider

log = logging.getLogger("bout-tracker")

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


@dataclass(slots=True)
class EnvironmentConfig:
    discord_token: str
    tracker: TrackerConfig
    log_level: str

    @classmethod
    def load(cls) -> "EnvironmentConfig":
        missing: list[str] = []

        def need(name: str) -> str:
            value = os.getenv(name)
            if not value:
                missing.append(name)
                return ""
            return value

        discord_token = need("DISCORD_TOKEN")

        if missing:
            raise RuntimeError("Missing env vars: " + ", ".join(sorted(set(missing))))

        return cls(
            discord_token=discord_token,
            tracker=read_tracker_config(),
            log_level=env_log_level("LOG_LEVEL"),
        )


class BoutRuntime:
    def __init__(self, config: EnvironmentConfig) -> None:
        intents = discord.Intents.default()
        intents.guilds = True
        intents.message_content = True

        self.config = config
        self.bot = discord.Client(intents=intents)
        self.tree = app_commands.CommandTree(self.bot)
        self.provider = SpireMatchProvider(
            base_url=config.tracker.api_base_url,
            timeout=config.tracker.fetch_timeout,
        )
        self.tracker = BoutTracker(self.provider, prefix=config.tracker.command_prefix)
        self.guild = (
            discord.Object(id=config.tracker.guild_id)
            if config.tracker.guild_id is not None
            else None
        )
        self.commands = BoutCommands(self.bot, self.tracker, guild=self.guild)

    def configure_features(self) -> None:
        self.commands.install(self.tree)
        self.bot.event(self.on_ready)

    async def on_ready(self) -> None:
        if self.config.tracker.sync_commands:
            await self.tree.sync(guild=self.guild)
        log.info("Bot ready as %s (%s)", self.bot.user, self.bot.user.id)

    async def run(self) -> None:
        self.configure_features()
        try:
            async with self.bot:
                await self.bot.start(self.config.discord_token)
        finally:
            await self.provider.close()

    @classmethod
    def create(cls) -> "BoutRuntime":
        config = EnvironmentConfig.load()
        return cls(config)


async def main() -> None:
    runtime = BoutRuntime.create()
    logging.basicConfig(level=runtime.config.log_level, format=LOG_FORMAT)
    await runtime.run()


def run() -> None:
    asyncio.run(main())


__all__ = ["BoutRuntime", "EnvironmentConfig", "main", "run"]
