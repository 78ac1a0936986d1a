"""Router — registry of named endpoints with broadcast and directed delivery."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeVar, cast

from ..instrumentation import get_hook_registry
from ..primitives.exceptions import (
    DuplicateNameError,
    EndpointBoundError,
    SenderNotRegisteredError,
)
from .message import DeliveryReport, Message, MessageKind, Notice

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from ..config import RouterSettings
    from ..instrumentation import HookRegistry
    from ..ports.endpoint import IEndpoint

logger = logging.getLogger("cmdroute.routing")

TResult = TypeVar("TResult")

DEFAULT_SYSTEM_SENDER = "router"


@dataclass(frozen=True)
class _Registration:
    """Registry record: the endpoint identity plus its delivery handle."""

    endpoint: IEndpoint

    @property
    def name(self) -> str:
        return self.endpoint.name

    def deliver(self, message: Message) -> None:
        self.endpoint.receive(message)


class Router:
    """Routes text messages between registered endpoints.

    **Membership:** ``register`` / ``unregister`` keep the registry and each
    endpoint's ``router`` back-reference consistent, and announce the change
    to every other member with a :attr:`MessageKind.SYSTEM` notice.

    **Delivery:** ``send`` broadcasts to every member except the sender, or
    delivers to exactly one named member. An unknown recipient is reported
    back to the sender as a notice; it is not raised.

    **Concurrency:** the registry is read and mutated under one lock.
    Receivers are chosen from a snapshot taken under the lock and are called
    after it is released, so a slow receiver never blocks registration.
    Every call is synchronous: delivery is complete when it returns.

    Parameters
    ----------
    system_sender:
        Sender name stamped on system notices.
    isolate_receiver_errors:
        When *True* (default) an exception from one receiver is logged and
        delivery continues to the rest. When *False* it propagates to the
        caller of ``send`` / ``register`` / ``unregister``.
    hooks:
        Optional :class:`~cmdroute_core.instrumentation.HookRegistry`;
        defaults to the context-local registry.
    """

    def __init__(
        self,
        *,
        system_sender: str = DEFAULT_SYSTEM_SENDER,
        isolate_receiver_errors: bool = True,
        hooks: HookRegistry | None = None,
    ) -> None:
        self._registry: dict[str, _Registration] = {}
        self._lock = threading.RLock()
        self._system_sender = system_sender
        self._isolate_receiver_errors = isolate_receiver_errors
        self._hooks = hooks

    @classmethod
    def from_settings(
        cls,
        settings: RouterSettings | None = None,
        *,
        hooks: HookRegistry | None = None,
    ) -> Router:
        """Build a router from :class:`RouterSettings` (environment by default)."""
        if settings is None:
            from ..config import RouterSettings

            settings = RouterSettings()
        return cls(
            system_sender=settings.system_sender,
            isolate_receiver_errors=settings.isolate_receiver_errors,
            hooks=hooks,
        )

    # ── Membership ───────────────────────────────────────────────

    def register(self, endpoint: IEndpoint) -> None:
        """Add *endpoint* and announce it to the existing members.

        Raises:
            DuplicateNameError: If the name is taken. The existing
                registration is left untouched.
            EndpointBoundError: If the endpoint is registered elsewhere.
        """

        def _register() -> None:
            name = endpoint.name
            with self._lock:
                bound = endpoint.router
                if bound is not None and bound is not self:
                    raise EndpointBoundError(name)
                if name in self._registry:
                    raise DuplicateNameError(name)
                self._registry[name] = _Registration(endpoint)
                endpoint.attach(self)
                others = self._snapshot(exclude=name)
            logger.info("Endpoint %r joined (%d members)", name, len(others) + 1)
            self._deliver(
                Message.system(
                    Notice.JOINED, subject=name, sender=self._system_sender
                ),
                others,
            )

        self._instrumented(
            "routing.register", {"endpoint": endpoint.name}, _register
        )

    def unregister(self, endpoint: IEndpoint) -> None:
        """Remove *endpoint* and announce its departure.

        A no-op when the endpoint is not registered here (including when a
        *different* endpoint currently holds its name).
        """

        def _unregister() -> None:
            name = endpoint.name
            with self._lock:
                record = self._registry.get(name)
                if record is None or record.endpoint is not endpoint:
                    logger.debug("Unregister of unknown endpoint %r ignored", name)
                    return
                del self._registry[name]
                endpoint.detach()
                remaining = self._snapshot()
            logger.info("Endpoint %r left (%d members)", name, len(remaining))
            self._deliver(
                Message.system(
                    Notice.LEFT, subject=name, sender=self._system_sender
                ),
                remaining,
            )

        self._instrumented(
            "routing.unregister", {"endpoint": endpoint.name}, _unregister
        )

    # ── Delivery ─────────────────────────────────────────────────

    def send(
        self,
        payload: str,
        sender: IEndpoint,
        to: str | None = None,
    ) -> DeliveryReport:
        """Route *payload* from *sender* to one member or to all others.

        Returns:
            A :class:`DeliveryReport` naming the endpoints that received the
            message. For an unknown recipient the report is empty and the
            sender has been sent a ``RECIPIENT_NOT_FOUND`` notice.

        Raises:
            SenderNotRegisteredError: If *sender* is not the endpoint
                currently registered under its name.
        """

        def _send() -> DeliveryReport:
            with self._lock:
                record = self._registry.get(sender.name)
                if record is None or record.endpoint is not sender:
                    raise SenderNotRegisteredError(sender.name)
                if not to:
                    message = Message(
                        kind=MessageKind.BROADCAST,
                        payload=payload,
                        sender=sender.name,
                    )
                    targets = self._snapshot(exclude=sender.name)
                else:
                    target = self._registry.get(to)
                    message = Message(
                        kind=MessageKind.DIRECTED,
                        payload=payload,
                        sender=sender.name,
                        recipient=to,
                    )
                    targets = [target] if target is not None else []

            if to and not targets:
                logger.warning(
                    "Directed message from %r to unknown recipient %r",
                    sender.name,
                    to,
                )
                self._deliver(
                    Message.system(
                        Notice.RECIPIENT_NOT_FOUND,
                        subject=str(to),
                        sender=self._system_sender,
                    ),
                    [record],
                )
                return DeliveryReport(message=message)

            delivered = self._deliver(message, targets)
            logger.debug(
                "%s message from %r delivered to %d endpoint(s)",
                message.kind.value,
                sender.name,
                len(delivered),
            )
            return DeliveryReport(message=message, delivered_to=delivered)

        return self._instrumented(
            "routing.send",
            {
                "sender": sender.name,
                "recipient": to,
                "kind": "directed" if to else "broadcast",
            },
            _send,
        )

    # ── Introspection ────────────────────────────────────────────

    def names(self) -> list[str]:
        """Names of the current members, in registration order."""
        with self._lock:
            return list(self._registry)

    def get(self, name: str) -> IEndpoint | None:
        with self._lock:
            record = self._registry.get(name)
        return record.endpoint if record is not None else None

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._registry

    def __len__(self) -> int:
        with self._lock:
            return len(self._registry)

    def __repr__(self) -> str:
        return f"Router(members={self.names()!r})"

    # ── Internals ────────────────────────────────────────────────

    def _snapshot(self, exclude: str | None = None) -> list[_Registration]:
        return [r for n, r in self._registry.items() if n != exclude]

    def _deliver(
        self, message: Message, records: Iterable[_Registration]
    ) -> tuple[str, ...]:
        delivered: list[str] = []
        for record in records:
            try:
                record.deliver(message)
            except Exception:
                if not self._isolate_receiver_errors:
                    raise
                logger.exception(
                    "Endpoint %r failed to receive %s message from %r",
                    record.name,
                    message.kind.value,
                    message.sender,
                )
                continue
            delivered.append(record.name)
        return tuple(delivered)

    def _instrumented(
        self,
        operation: str,
        attributes: dict[str, Any],
        run: Callable[[], TResult],
    ) -> TResult:
        hooks = self._hooks if self._hooks is not None else get_hook_registry()
        result = hooks.execute_all(
            operation, {"router.members": len(self), **attributes}, run
        )
        return cast("TResult", result)
