"""UI capability interface consumed by CRUD flows."""

from crud_ui_flow.ui.models import (
    ActionSheetButton,
    ActionSheetOptions,
    ActionSheetResult,
    AlertDialogOptions,
    ConfirmDialogOptions,
    ConfirmResult,
    DialogHandle,
    DialogOptions,
    ProgressDialogOptions,
    ProgressHandle,
    PromptDialogOptions,
    PromptInput,
    PromptResult,
    ToastOptions,
    UIMessages,
)
from crud_ui_flow.ui.presenter import UIPresenter

__all__ = [
    "ActionSheetButton",
    "ActionSheetOptions",
    "ActionSheetResult",
    "AlertDialogOptions",
    "ConfirmDialogOptions",
    "ConfirmResult",
    "DialogHandle",
    "DialogOptions",
    "ProgressDialogOptions",
    "ProgressHandle",
    "PromptDialogOptions",
    "PromptInput",
    "PromptResult",
    "ToastOptions",
    "UIMessages",
    "UIPresenter",
]
