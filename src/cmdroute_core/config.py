"""Settings for the action history and the router.

Both settings classes read from the environment:

- ``CMDROUTE_HISTORY_CAPACITY`` — maximum undo depth (positive int).
- ``CMDROUTE_ROUTER_SYSTEM_SENDER`` — sender name stamped on system notices.
- ``CMDROUTE_ROUTER_ISOLATE_RECEIVER_ERRORS`` — log and continue when a
  receiver raises, instead of propagating to the sender.
"""

from __future__ import annotations

from pydantic import Field, PositiveInt
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_HISTORY_CAPACITY = 16


class ActionLogSettings(BaseSettings):
    """Configuration for :class:`~cmdroute_core.history.ActionLog`."""

    model_config = SettingsConfigDict(env_prefix="CMDROUTE_HISTORY_", frozen=True)

    capacity: PositiveInt = Field(
        default=DEFAULT_HISTORY_CAPACITY,
        description="Number of most recent actions kept for undo. "
        "Older entries are dropped without being reverted.",
    )


class RouterSettings(BaseSettings):
    """Configuration for :class:`~cmdroute_core.routing.Router`."""

    model_config = SettingsConfigDict(env_prefix="CMDROUTE_ROUTER_", frozen=True)

    system_sender: str = Field(
        default="router",
        min_length=1,
        description="Sender name carried by join/leave/recipient-not-found notices.",
    )
    isolate_receiver_errors: bool = Field(
        default=True,
        description="When true, an exception raised by one receiver is logged "
        "and delivery continues to the others.",
    )
