"""Bounded undo history of reversible actions."""

from .action_log import ActionLog

__all__ = [
    "ActionLog",
]
