"""cmdroute-core — bounded undo history and named-endpoint message routing.

Two independent components: :class:`ActionLog` sequences reversible actions
and keeps the most recent ones for undo; :class:`Router` routes broadcast and
directed messages between registered :class:`Endpoint` participants.
"""

from __future__ import annotations

# ── Actions ──────────────────────────────────────────────────────
from .actions import (
    CompositeAction,
    Door,
    Light,
    ReversibleAction,
    Television,
    Thermostat,
    setting_action,
)

# ── Configuration ────────────────────────────────────────────────
from .config import ActionLogSettings, RouterSettings

# ── History ──────────────────────────────────────────────────────
from .history import ActionLog

# ── Instrumentation ──────────────────────────────────────────────
from .instrumentation import (
    HookRegistration,
    HookRegistry,
    InstrumentationHook,
    get_hook_registry,
    set_hook_registry,
)

# ── Ports ────────────────────────────────────────────────────────
from .ports import IEndpoint, IReversibleAction

# ── Primitives ───────────────────────────────────────────────────
from .primitives import (
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

# ── Routing ──────────────────────────────────────────────────────
from .routing import (
    DeliveryReport,
    Endpoint,
    Message,
    MessageKind,
    Notice,
    Router,
)

__all__ = [
    # Actions
    "CompositeAction",
    "Door",
    "Light",
    "ReversibleAction",
    "Television",
    "Thermostat",
    "setting_action",
    # Configuration
    "ActionLogSettings",
    "RouterSettings",
    # History
    "ActionLog",
    # Instrumentation
    "HookRegistration",
    "HookRegistry",
    "InstrumentationHook",
    "get_hook_registry",
    "set_hook_registry",
    # Ports
    "IEndpoint",
    "IReversibleAction",
    # Primitives
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
    # Routing
    "DeliveryReport",
    "Endpoint",
    "Message",
    "MessageKind",
    "Notice",
    "Router",
]
