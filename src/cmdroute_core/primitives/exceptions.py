"""Exceptions for cmdroute-core."""

from __future__ import annotations


class CmdRouteError(Exception):
    """Root exception for the entire cmdroute toolkit."""


class ConfigurationError(CmdRouteError):
    """Raised when a component is constructed with invalid parameters."""


# ── Action history ───────────────────────────────────────────────────


class ActionLogError(CmdRouteError):
    """Base class for all action-history errors."""


class NilActionError(ActionLogError):
    """Raised when ``None`` is submitted to :meth:`ActionLog.execute`."""

    def __init__(self) -> None:
        super().__init__("Cannot execute a missing action (got None)")


class EmptyHistoryError(ActionLogError):
    """Raised when undo is requested but the history holds no entries."""

    def __init__(self) -> None:
        super().__init__("Nothing to undo: action history is empty")


# ── Routing ──────────────────────────────────────────────────────────


class RoutingError(CmdRouteError):
    """Base class for all registration and delivery errors."""


class DuplicateNameError(RoutingError):
    """Raised when an endpoint name is already registered with the router."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Endpoint name {name!r} is already registered")


class EndpointBoundError(RoutingError):
    """Raised when an endpoint already served by one router joins another.

    An endpoint participates in at most one router at a time; it must be
    unregistered from the first before joining the second.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"Endpoint {name!r} is already registered with another router"
        )


class NotConnectedError(RoutingError):
    """Raised locally when an endpoint with no router attempts to send."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Endpoint {name!r} is not connected to a router")


class SenderNotRegisteredError(RoutingError):
    """Raised when the sender is not currently registered with the router.

    Catches stale callers whose ``router`` reference outlived their
    registration.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Sender {name!r} is not registered with this router")


class RecipientNotFoundError(RoutingError):
    """A directed message named an endpoint that is not registered.

    Never raised by :meth:`Router.send`; it is delivered to the sender as a
    system notice instead.
    """

    def __init__(self, recipient: str) -> None:
        self.recipient = recipient
        super().__init__(f"Recipient {recipient!r} not found")
