"""Record cache and the list data broker that keeps it consistent."""

from crud_ui_flow.broker.cache import CrudChange, RecordCache
from crud_ui_flow.broker.ui_list_broker import UIListDataBroker

__all__ = [
    "CrudChange",
    "RecordCache",
    "UIListDataBroker",
]
