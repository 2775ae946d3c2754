"""Option records, results and handles exchanged with a UI presenter."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from crud_ui_flow.reactive.channel import Broadcast

R = TypeVar("R")

ToastPosition = Literal["top", "bottom", "middle"]
ActionSheetButtonRole = Literal[
    "default", "create", "update", "read", "delete", "cancel", "proceed"
]
RecordId = int | str


class _Options(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class ToastOptions(_Options):
    message: str = Field(min_length=1)
    duration_ms: int | None = Field(
        default=None,
        ge=0,
        description="How long the toast stays visible; presenter default when None",
    )
    position: ToastPosition | None = None
    button_text: str | None = None


class DialogOptions(_Options):
    title: str
    message: str


class AlertDialogOptions(DialogOptions):
    ok_label: str | None = None


class ConfirmDialogOptions(DialogOptions):
    yes_label: str | None = None
    no_label: str | None = None


class PromptInput(_Options):
    name: str = Field(min_length=1)
    placeholder: str = ""


class PromptDialogOptions(DialogOptions):
    # TODO: accept several inputs of different input types
    input: PromptInput
    ok_label: str | None = None


class ProgressDialogOptions(DialogOptions):
    pass


class ActionSheetButton(_Options):
    id: RecordId
    label: str
    role: ActionSheetButtonRole = "default"


class ActionSheetOptions(_Options):
    title: str
    buttons: list[ActionSheetButton] = Field(min_length=1)


class ConfirmResult(_Options):
    yes: bool


class PromptResult(_Options):
    data: dict[str, str] = Field(default_factory=dict)


class ActionSheetResult(_Options):
    id: RecordId


class UIMessages(_Options):
    """Messages shown once a flow step succeeds or fails.

    Empty strings are treated as "no message".
    """

    success: str | None = None
    failure: str | None = None

    @field_validator("success", "failure")
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            return None
        return value


@dataclass(frozen=True, slots=True)
class DialogHandle(Generic[R]):
    """A shown UI element.

    `on_end` resolves with the element's end result (the user's answer for
    dialogs). It must be awaitable more than once; presenters typically hand
    out an `asyncio.Future`.
    """

    hide: Callable[[], Awaitable[None]]
    on_end: Awaitable[R]


@dataclass(frozen=True, slots=True)
class ProgressHandle(DialogHandle[None]):
    """Progress dialog handle.

    When `progress` is set the dialog runs in deterministic mode and shows
    every percentage emitted on it.
    """

    progress: Broadcast[float] | None = None
