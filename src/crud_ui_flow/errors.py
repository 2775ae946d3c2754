"""Exception types raised by the CRUD flow engine."""

from __future__ import annotations


class CrudFlowError(Exception):
    """Base class for errors raised by this package."""


class InputAcquisitionError(CrudFlowError):
    """The input provider reported a failure without attaching an error."""


class IllegalTransitionError(CrudFlowError, ValueError):
    pass


class ChannelClosedError(CrudFlowError, RuntimeError):
    """A result channel was used after it received its terminal signal."""


class UnbalancedUndoError(CrudFlowError, RuntimeError):
    """`undo()` was called without a matching `do()`."""

    def __init__(self) -> None:
        super().__init__("this undo call does not have a corresponding previous do call")
