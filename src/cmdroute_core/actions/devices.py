"""Remote-controlled devices and the reversible actions that drive them.

Each device owns its state; its factory methods return
:class:`~cmdroute_core.actions.reversible.ReversibleAction` instances whose
closures mutate that state. Nothing here knows about the history that
records the actions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeVar

from .reversible import ReversibleAction

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger("cmdroute.devices")

T = TypeVar("T")


def setting_action(
    read: Callable[[], T],
    write: Callable[[T], None],
    target: T,
    *,
    label: str,
) -> ReversibleAction:
    """Build an action that writes *target* and restores the prior value.

    The prior value is captured each time the action is applied, so an
    action built ahead of time still reverts to whatever was current when
    it actually ran.
    """
    saved: list[T] = []

    def _apply() -> None:
        saved.append(read())
        write(target)

    def _revert() -> None:
        write(saved.pop())

    return ReversibleAction(_apply, _revert, label=label)


@dataclass
class Light:
    name: str = "light"
    is_on: bool = False

    def _set(self, value: bool) -> None:
        self.is_on = value
        logger.debug("%s is %s", self.name, "ON" if value else "OFF")

    def turn_on(self) -> ReversibleAction:
        return setting_action(
            lambda: self.is_on, self._set, True, label=f"{self.name} on"
        )

    def turn_off(self) -> ReversibleAction:
        return setting_action(
            lambda: self.is_on, self._set, False, label=f"{self.name} off"
        )


@dataclass
class Door:
    name: str = "door"
    is_open: bool = False

    def _set(self, value: bool) -> None:
        self.is_open = value
        logger.debug("%s is %s", self.name, "OPEN" if value else "CLOSED")

    def open(self) -> ReversibleAction:
        return setting_action(
            lambda: self.is_open, self._set, True, label=f"{self.name} open"
        )

    def close(self) -> ReversibleAction:
        return setting_action(
            lambda: self.is_open, self._set, False, label=f"{self.name} close"
        )


@dataclass
class Thermostat:
    name: str = "thermostat"
    temperature: float = 20.0

    def _set(self, value: float) -> None:
        self.temperature = value
        logger.debug("%s set to %.1f", self.name, value)

    def set_temperature(self, target: float) -> ReversibleAction:
        return setting_action(
            lambda: self.temperature,
            self._set,
            target,
            label=f"{self.name} -> {target:g}",
        )


@dataclass
class Television:
    name: str = "tv"
    is_on: bool = False
    channel: int = 1

    def _power(self, value: bool) -> None:
        self.is_on = value
        logger.debug("%s power %s", self.name, "ON" if value else "OFF")

    def _tune(self, channel: int) -> None:
        self.channel = channel
        logger.debug("%s tuned to channel %d", self.name, channel)

    def power_on(self) -> ReversibleAction:
        return setting_action(
            lambda: self.is_on, self._power, True, label=f"{self.name} power on"
        )

    def power_off(self) -> ReversibleAction:
        return setting_action(
            lambda: self.is_on, self._power, False, label=f"{self.name} power off"
        )

    def set_channel(self, channel: int) -> ReversibleAction:
        if channel < 1:
            raise ValueError(f"Channel must be >= 1, got {channel}")
        return setting_action(
            lambda: self.channel,
            self._tune,
            channel,
            label=f"{self.name} channel {channel}",
        )
