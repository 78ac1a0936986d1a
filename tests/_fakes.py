"""Test doubles shared across the suite."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field


@dataclass
class Counter:
    """Minimal device: an integer that actions add to."""

    value: int = 0
    calls: list[tuple[str, str]] = field(default_factory=list)


class Add:
    """Reversible action adding *amount* to a :class:`Counter`."""

    def __init__(self, counter: Counter, amount: int, name: str = "") -> None:
        self.counter = counter
        self.amount = amount
        self.name = name or f"add{amount}"

    def apply(self) -> None:
        self.counter.value += self.amount
        self.counter.calls.append(("apply", self.name))

    def revert(self) -> None:
        self.counter.value -= self.amount
        self.counter.calls.append(("revert", self.name))

    def __repr__(self) -> str:
        return f"Add({self.name})"


class Broken:
    """Action whose apply and/or revert raise."""

    def __init__(self, *, fail_apply: bool = True, fail_revert: bool = False) -> None:
        self.fail_apply = fail_apply
        self.fail_revert = fail_revert
        self.applied = 0

    def apply(self) -> None:
        if self.fail_apply:
            raise RuntimeError("device offline")
        self.applied += 1

    def revert(self) -> None:
        if self.fail_revert:
            raise RuntimeError("device stuck")
        self.applied -= 1


class BlockingEndpoint:
    """IEndpoint whose receive blocks until released."""

    def __init__(self, name: str) -> None:
        self._name = name
        self._router = None
        self.entered = threading.Event()
        self.release = threading.Event()
        self.received: list[object] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def router(self):  # type: ignore[no-untyped-def]
        return self._router

    def attach(self, router) -> None:  # type: ignore[no-untyped-def]
        self._router = router

    def detach(self) -> None:
        self._router = None

    def receive(self, message) -> None:  # type: ignore[no-untyped-def]
        self.entered.set()
        self.release.wait(timeout=5)
        self.received.append(message)
