"""Alias-driven tracking of live esports bouts."""

from .dispatcher import BoutTracker, parse_argument, render_bout, split_invocation
from .errors import (
    ArgumentMismatchError,
    ArgumentParseError,
    BoutTrackerError,
    CommandNotFoundError,
    FetchError,
    InvalidIndexError,
    MissingArgumentError,
    NoActiveBoutError,
    NotFoundError,
    UnknownAliasError,
)
from .models import (
    ActionDescriptor,
    ActionKind,
    Bout,
    InsertArgument,
    MapSlot,
    RemoveArgument,
)
from .processor import Processor
from .provider import MatchProvider, SpireMatchProvider
from .registry import CommandRegistry
from .responses import Response, ResponseKind

__all__ = [
    "ActionDescriptor",
    "ActionKind",
    "ArgumentMismatchError",
    "ArgumentParseError",
    "Bout",
    "BoutTracker",
    "BoutTrackerError",
    "CommandNotFoundError",
    "CommandRegistry",
    "FetchError",
    "InsertArgument",
    "InvalidIndexError",
    "MapSlot",
    "MatchProvider",
    "MissingArgumentError",
    "NoActiveBoutError",
    "NotFoundError",
    "Processor",
    "RemoveArgument",
    "Response",
    "ResponseKind",
    "SpireMatchProvider",
    "UnknownAliasError",
    "parse_argument",
    "render_bout",
    "split_invocation",
]
