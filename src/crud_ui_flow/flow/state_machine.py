from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from crud_ui_flow.errors import IllegalTransitionError

from .types import CrudKind


class FlowState(str, Enum):
    PENDING = "pending"
    ACQUIRING = "acquiring"
    PRE_CALLBACK = "pre_callback"
    PROGRESS = "progress"
    EMITTING = "emitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELLED = "cancelled"


TERMINAL_STATES: frozenset[FlowState] = frozenset(
    {FlowState.SUCCEEDED, FlowState.FAILED, FlowState.CANCELLED}
)

ALLOWED_TRANSITIONS: dict[FlowState, set[FlowState]] = {
    FlowState.PENDING: {FlowState.ACQUIRING},
    FlowState.ACQUIRING: {FlowState.PRE_CALLBACK, FlowState.CANCELLED, FlowState.FAILED},
    FlowState.PRE_CALLBACK: {FlowState.PROGRESS, FlowState.FAILED},
    FlowState.PROGRESS: {FlowState.EMITTING, FlowState.FAILED},
    FlowState.EMITTING: {FlowState.SUCCEEDED, FlowState.FAILED},
    FlowState.SUCCEEDED: set(),
    FlowState.FAILED: set(),
    FlowState.CANCELLED: set(),
}


@dataclass(frozen=True, slots=True)
class FlowSnapshot:
    """Where a single invocation currently is.

    Snapshots are never persisted; one is created per invocation and
    discarded when the flow ends.
    """

    crud_kind: CrudKind
    state: FlowState = FlowState.PENDING

    @property
    def terminal(self) -> bool:
        return self.state in TERMINAL_STATES

    def to_json(self) -> dict[str, object]:
        return {"crud_kind": self.crud_kind.value, "state": self.state.value}


def transition(*, current: FlowSnapshot, to: FlowState) -> FlowSnapshot:
    allowed = ALLOWED_TRANSITIONS.get(current.state, set())
    if to not in allowed:
        raise IllegalTransitionError(f"Illegal transition: {current.state.value} -> {to.value}")
    return replace(current, state=to)
