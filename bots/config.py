"""Configuration helpers for the bout tracker runtime."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from bout_tracker.dispatcher import DEFAULT_PREFIX
from bout_tracker.provider import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_SECONDS

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def env_bool(name: str, *, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    lowered = raw.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    return default


def env_int(name: str, *, default: int | None = None) -> int | None:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def env_log_level(name: str, *, default: str = "INFO") -> str:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    level = raw.strip().upper()
    if isinstance(logging.getLevelName(level), int):
        return level
    return default


def env_float(name: str, *, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


@dataclass(frozen=True)
class TrackerConfig:
    command_prefix: str
    api_base_url: str
    fetch_timeout: float
    guild_id: int | None
    sync_commands: bool


def read_tracker_config() -> TrackerConfig:
    prefix = os.getenv("BOUT_COMMAND_PREFIX", "").strip() or DEFAULT_PREFIX
    return TrackerConfig(
        command_prefix=prefix,
        api_base_url=os.getenv("SPIRE_API_BASE_URL", "").strip() or DEFAULT_BASE_URL,
        fetch_timeout=env_float("SPIRE_FETCH_TIMEOUT", default=DEFAULT_TIMEOUT_SECONDS),
        guild_id=env_int("DISCORD_GUILD_ID"),
        sync_commands=env_bool("SYNC_COMMANDS", default=True),
    )
