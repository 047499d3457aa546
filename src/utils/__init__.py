"""Utility helper package for shared script and analysis helpers.

Submodules
----------
cli
    Shared argparse and logging configuration helpers for CLI scripts.
"""

from __future__ import annotations

__all__ = [
    "cli",
]
