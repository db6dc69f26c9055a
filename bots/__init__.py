"""Discord runtime for the bout tracker.

The tracking logic lives in :mod:`bout_tracker`; this package only adapts it
to discord.py and the process environment.
"""

__all__ = ["bouts", "config", "runtime"]
