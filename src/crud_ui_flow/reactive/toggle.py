from __future__ import annotations

import logging
from enum import Enum

from crud_ui_flow.errors import UnbalancedUndoError

from .channel import Broadcast

logger = logging.getLogger(__name__)


class ToggleAction(str, Enum):
    DO = "do"
    UNDO = "undo"


class IdempotentToggle:
    """Reference-counted do/undo helper.

    Overlapping triggers of a stateful UI action (a busy overlay, a shared
    progress indicator) collapse into a single `DO` when the first caller
    enters and a single `UNDO` when the last caller leaves.
    """

    def __init__(self, name: str = "toggle") -> None:
        self.name = name
        self._count = 0
        self.actions: Broadcast[ToggleAction] = Broadcast(name=f"{name}.actions")

    @property
    def count(self) -> int:
        return self._count

    @property
    def active(self) -> bool:
        return self._count > 0

    def get_count(self) -> int:
        return self._count

    def do(self) -> None:
        self._count += 1
        if self._count == 1:
            logger.debug(f"{self.name}: entering active state")
            self.actions.emit(ToggleAction.DO)

    def undo(self) -> None:
        if self._count < 1:
            raise UnbalancedUndoError()
        self._count -= 1
        if self._count == 0:
            logger.debug(f"{self.name}: leaving active state")
            self.actions.emit(ToggleAction.UNDO)
