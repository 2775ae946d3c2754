"""Abstract base class for UI presenters."""

from abc import ABC, abstractmethod

from crud_ui_flow.ui.models import (
    ActionSheetOptions,
    ActionSheetResult,
    AlertDialogOptions,
    ConfirmDialogOptions,
    ConfirmResult,
    DialogHandle,
    ProgressDialogOptions,
    ProgressHandle,
    PromptDialogOptions,
    PromptResult,
    ToastOptions,
)


class UIPresenter(ABC):
    """Abstract base class for UI presenters.

    This interface allows pluggable UI backends (desktop toolkits, web
    front-ends, terminals). Every method shows the element and returns its
    handle once it is visible.
    """

    @abstractmethod
    async def show_toast(self, options: ToastOptions) -> DialogHandle[None]:
        """Show a toast message.

        Args:
            options: The toast options.

        Returns:
            Handle whose `hide()` dismisses the toast early.
        """
        pass

    @abstractmethod
    async def show_progress_dialog(self, options: ProgressDialogOptions) -> ProgressHandle:
        """Show a progress dialog.

        Args:
            options: Title and message of the dialog.

        Returns:
            Handle whose `hide()` dismisses the dialog. If the handle carries a
            `progress` stream, the dialog is deterministic.
        """
        pass

    @abstractmethod
    async def show_alert_dialog(self, options: AlertDialogOptions) -> DialogHandle[None]:
        pass

    @abstractmethod
    async def show_prompt_dialog(
        self, options: PromptDialogOptions
    ) -> DialogHandle[PromptResult]:
        pass

    @abstractmethod
    async def show_confirm_dialog(
        self, options: ConfirmDialogOptions
    ) -> DialogHandle[ConfirmResult]:
        """Ask the user a yes/no question.

        Args:
            options: Title, message and optional button labels.

        Returns:
            Handle whose `on_end` resolves to the user's answer.
        """
        pass

    @abstractmethod
    async def show_action_sheet(
        self, options: ActionSheetOptions
    ) -> DialogHandle[ActionSheetResult]:
        pass
