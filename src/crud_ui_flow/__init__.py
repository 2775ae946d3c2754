"""CRUD UI Flow.

Sequences create, update and delete interactions between a UI and a cached
record store:
- input acquisition or delete confirmation
- progress and success/failure messages through a pluggable presenter
- outcome delivery on single-use result channels
- reference-counted busy state shared by overlapping flows
"""

__version__ = "0.1.0"

from crud_ui_flow.broker import RecordCache, UIListDataBroker
from crud_ui_flow.core.config import FlowConfig
from crud_ui_flow.flow import (
    CreateOrUpdateFlowOptions,
    CrudFlowRunner,
    CrudKind,
    DeleteFlowOptions,
    FlowState,
    InputResult,
)
from crud_ui_flow.reactive import IdempotentToggle, ResultChannel

__all__ = [
    "__version__",
    "CreateOrUpdateFlowOptions",
    "CrudFlowRunner",
    "CrudKind",
    "DeleteFlowOptions",
    "FlowConfig",
    "FlowState",
    "IdempotentToggle",
    "InputResult",
    "RecordCache",
    "ResultChannel",
    "UIListDataBroker",
]
