"""Primitives: exceptions."""

from __future__ import annotations

from .exceptions import (
    ActionLogError,
    CmdRouteError,
    ConfigurationError,
    DuplicateNameError,
    EmptyHistoryError,
    EndpointBoundError,
    NilActionError,
    NotConnectedError,
    RecipientNotFoundError,
    RoutingError,
    SenderNotRegisteredError,
)

__all__ = [
    "ActionLogError",
    "CmdRouteError",
    "ConfigurationError",
    "DuplicateNameError",
    "EmptyHistoryError",
    "EndpointBoundError",
    "NilActionError",
    "NotConnectedError",
    "RecipientNotFoundError",
    "RoutingError",
    "SenderNotRegisteredError",
]
