"""CRUD UI flow orchestration.

This package provides:
- per-invocation flow requests (input, before and after stages)
- an explicit per-invocation state machine
- the runner that sequences UI feedback, the domain event and the result channel
"""

from crud_ui_flow.flow.runner import CrudFlowRunner
from crud_ui_flow.flow.state_machine import FlowSnapshot, FlowState
from crud_ui_flow.flow.types import (
    CreateOrUpdateFlowOptions,
    CrudEventEmitter,
    CrudKind,
    DeleteFlowBefore,
    DeleteFlowOptions,
    FlowAfter,
    FlowBefore,
    FlowInput,
    InputResult,
)

__all__ = [
    "CreateOrUpdateFlowOptions",
    "CrudEventEmitter",
    "CrudFlowRunner",
    "CrudKind",
    "DeleteFlowBefore",
    "DeleteFlowOptions",
    "FlowAfter",
    "FlowBefore",
    "FlowInput",
    "FlowSnapshot",
    "FlowState",
    "InputResult",
]
