"""Reversible actions: closure-backed pairs, composites and device adapters."""

from .devices import Door, Light, Television, Thermostat, setting_action
from .reversible import CompositeAction, ReversibleAction

__all__ = [
    "CompositeAction",
    "Door",
    "Light",
    "ReversibleAction",
    "Television",
    "Thermostat",
    "setting_action",
]
