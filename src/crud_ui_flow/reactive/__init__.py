"""Observer-list primitives used to deliver flow outcomes and busy state."""

from crud_ui_flow.reactive.channel import (
    Broadcast,
    ChannelState,
    Observer,
    ResultChannel,
    Subscription,
)
from crud_ui_flow.reactive.toggle import IdempotentToggle, ToggleAction

__all__ = [
    "Broadcast",
    "ChannelState",
    "IdempotentToggle",
    "Observer",
    "ResultChannel",
    "Subscription",
    "ToggleAction",
]
