"""Entry point for the bout tracker Discord bot."""

from __future__ import annotations

from bots.runtime import run

if __name__ == "__main__":
    run()
