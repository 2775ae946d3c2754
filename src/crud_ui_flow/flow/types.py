"""Per-invocation flow requests.

Every option object is frozen and validated on construction. Defaults are
stated per field; nothing is merged from partial option bags.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, Literal, TypeVar

from crud_ui_flow.reactive.channel import ResultChannel
from crud_ui_flow.ui.models import ConfirmDialogOptions, ProgressDialogOptions, UIMessages

U = TypeVar("U")
D = TypeVar("D")


class CrudKind(str, Enum):
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"


MUTATING_KINDS: frozenset[CrudKind] = frozenset(
    {CrudKind.CREATE, CrudKind.UPDATE, CrudKind.DELETE}
)

InputReason = Literal["close", "success", "failure"]


@dataclass(frozen=True, slots=True)
class InputResult(Generic[U]):
    """Outcome of an input provider.

    `close` means the user dismissed the input UI; it is not an error.
    """

    reason: InputReason
    data: U | None = None
    error: BaseException | None = None

    def __post_init__(self) -> None:
        if self.reason not in ("close", "success", "failure"):
            raise ValueError(f"Unknown input reason: {self.reason!r}")

    @staticmethod
    def close() -> InputResult[Any]:
        return InputResult(reason="close")

    @staticmethod
    def success(data: U) -> InputResult[U]:
        return InputResult(reason="success", data=data)

    @staticmethod
    def failure(error: BaseException | None = None) -> InputResult[Any]:
        return InputResult(reason="failure", error=error)


InputProvider = Callable[[], Awaitable[InputResult[U] | None]]
BeforeCallback = Callable[[], Awaitable[None]]
CrudEventEmitter = Callable[[CrudKind, Any], Awaitable[D]]


def _require_callable(value: object, name: str) -> None:
    if value is not None and not callable(value):
        raise TypeError(f"{name} must be callable, got {type(value).__name__}")


@dataclass(frozen=True, slots=True)
class FlowInput(Generic[U]):
    """Where Create/Update flows get their data from.

    `failure_message` (default: none) is toasted when `get` fails.
    """

    get: InputProvider[U]
    failure_message: str | None = None

    def __post_init__(self) -> None:
        if self.get is None:
            raise TypeError("FlowInput.get is required")
        _require_callable(self.get, "FlowInput.get")
        if self.failure_message is not None and not self.failure_message.strip():
            object.__setattr__(self, "failure_message", None)


@dataclass(frozen=True, slots=True)
class FlowBefore:
    """Steps run before the domain event.

    `progress` (default: none) is shown while the event runs; `callback`
    (default: none) is awaited first.
    """

    progress: ProgressDialogOptions | None = None
    callback: BeforeCallback | None = None

    def __post_init__(self) -> None:
        _require_callable(self.callback, "FlowBefore.callback")


@dataclass(frozen=True, slots=True)
class DeleteFlowBefore(FlowBefore):
    """Adds an optional confirmation (default: none, delete right away)."""

    confirm: ConfirmDialogOptions | None = None


@dataclass(frozen=True, slots=True)
class FlowAfter(Generic[D]):
    """Where the outcome goes.

    `channel` (default: none) receives the normalized record, then completes,
    or errors. `messages` defaults to no success or failure message.
    """

    channel: ResultChannel[D] | None = None
    messages: UIMessages = field(default_factory=UIMessages)


@dataclass(frozen=True, slots=True)
class CreateOrUpdateFlowOptions(Generic[U, D]):
    input: FlowInput[U]
    before: FlowBefore = field(default_factory=FlowBefore)
    after: FlowAfter[D] = field(default_factory=FlowAfter)


@dataclass(frozen=True, slots=True)
class DeleteFlowOptions(Generic[D]):
    data: D
    before: DeleteFlowBefore = field(default_factory=DeleteFlowBefore)
    after: FlowAfter[D] = field(default_factory=FlowAfter)

