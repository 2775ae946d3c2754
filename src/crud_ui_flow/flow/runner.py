"""CRUD UI execution flow.

A flow sequences one create, update or delete interaction:

    acquire input (or confirm a delete) -> pre-callback -> progress ->
    domain event -> dismiss progress -> message -> result channel

The caller supplies the input provider, UI descriptors, messages and the
domain event function; the runner owns ordering and error reporting.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from crud_ui_flow.core.config import UIConfig
from crud_ui_flow.errors import ChannelClosedError, InputAcquisitionError, UnbalancedUndoError
from crud_ui_flow.reactive.toggle import IdempotentToggle
from crud_ui_flow.ui.models import (
    ConfirmDialogOptions,
    ProgressHandle,
    ToastOptions,
)
from crud_ui_flow.ui.presenter import UIPresenter

from .state_machine import FlowSnapshot, FlowState, transition
from .types import (
    MUTATING_KINDS,
    CreateOrUpdateFlowOptions,
    CrudEventEmitter,
    CrudKind,
    DeleteFlowOptions,
    FlowInput,
)

logger = logging.getLogger(__name__)

U = TypeVar("U")
D = TypeVar("D")


class CrudFlowRunner:
    """Runs CRUD UI flows against an injected presenter.

    The runner is not tied to any record type or broker: the general entry
    point takes the domain event function explicitly, so one runner can drive
    flows for any number of data types.
    """

    def __init__(
        self,
        presenter: UIPresenter,
        *,
        ui_config: UIConfig | None = None,
        busy: IdempotentToggle | None = None,
    ) -> None:
        """Initialize the runner.

        Args:
            presenter: UI backend used for toasts, confirmations and progress.
            ui_config: Toast defaults. If None, loads from environment.
            busy: Optional shared toggle, entered while a flow shows progress.
        """
        self.presenter = presenter
        self.ui_config = ui_config or UIConfig()
        self.busy = busy

    async def run_crud_ui_flow(
        self,
        crud_kind: CrudKind,
        options: CreateOrUpdateFlowOptions[U, D] | DeleteFlowOptions[D],
        emitter: CrudEventEmitter[D],
    ) -> FlowState:
        """Run one CRUD UI flow.

        Args:
            crud_kind: CREATE, UPDATE or DELETE.
            options: Delete options for DELETE, create/update options otherwise.
            emitter: Performs the domain side effect and returns the
                normalized record.

        Returns:
            `FlowState.CANCELLED` when the user closed the input or declined
            the confirmation, `FlowState.SUCCEEDED` otherwise.

        Raises:
            Exception: Whatever failed (input provider, pre-callback or
                emitter), after the failure has been reported to the UI and,
                where one was supplied, to the result channel.
        """
        self._check_request(crud_kind, options)

        snapshot = self._advance(FlowSnapshot(crud_kind=crud_kind), FlowState.ACQUIRING)
        logger.info(f"Starting {crud_kind.value} UI flow")

        try:
            if isinstance(options, DeleteFlowOptions):
                proceed = await self._confirm(options.before.confirm)
                data: Any = options.data
            else:
                proceed, data = await self._acquire(options.input)
        except Exception as exc:
            self._advance(snapshot, FlowState.FAILED)
            logger.warning(f"{crud_kind.value} UI flow aborted while acquiring input: {exc!r}")
            raise

        if not proceed:
            self._advance(snapshot, FlowState.CANCELLED)
            logger.info(f"{crud_kind.value} UI flow closed by the user")
            return FlowState.CANCELLED

        before = options.before
        after = options.after
        progress: ProgressHandle | None = None
        entered = False

        try:
            snapshot = self._advance(snapshot, FlowState.PRE_CALLBACK)
            if before.callback is not None:
                await before.callback()

            snapshot = self._advance(snapshot, FlowState.PROGRESS)
            if before.progress is not None:
                progress = await self.presenter.show_progress_dialog(before.progress)
                if self.busy is not None:
                    self.busy.do()
                    entered = True

            snapshot = self._advance(snapshot, FlowState.EMITTING)
            record = await emitter(crud_kind, data)

            shown, progress = progress, None
            release, entered = entered, False
            await self._dismiss(shown, release=release)
            await self._toast(after.messages.success)
        except BaseException as exc:
            # Also reached on cancellation, e.g. a caller-side timeout.
            await self._dismiss(progress, release=entered, suppress=True)
            if isinstance(exc, Exception):
                await self._toast(after.messages.failure, suppress=True)
                logger.warning(f"{crud_kind.value} UI flow failed: {exc!r}")
            else:
                logger.warning(f"{crud_kind.value} UI flow interrupted: {exc!r}")
            self._advance(snapshot, FlowState.FAILED)
            if after.channel is not None and not after.channel.closed:
                after.channel.error(exc)
            raise

        self._advance(snapshot, FlowState.SUCCEEDED)
        channel = after.channel
        if channel is not None and channel.closed:
            logger.warning(
                f"{channel.name} was {channel.state.value} before the "
                f"{crud_kind.value} outcome arrived; dropping it"
            )
        elif channel is not None:
            # Emission and completion run back to back with no suspension point.
            channel.emit(record)
            channel.complete()
        logger.info(f"{crud_kind.value} UI flow succeeded")
        return FlowState.SUCCEEDED

    def _check_request(
        self,
        crud_kind: CrudKind,
        options: CreateOrUpdateFlowOptions[Any, Any] | DeleteFlowOptions[Any],
    ) -> None:
        if crud_kind not in MUTATING_KINDS:
            raise ValueError(f"Unsupported CRUD kind for a UI flow: {crud_kind.value}")
        expected = DeleteFlowOptions if crud_kind is CrudKind.DELETE else CreateOrUpdateFlowOptions
        if not isinstance(options, expected):
            raise TypeError(
                f"{crud_kind.value} flows take {expected.__name__}, got {type(options).__name__}"
            )
        channel = options.after.channel
        if channel is not None and channel.closed:
            raise ChannelClosedError(f"{channel.name} is already {channel.state.value}")

    def _advance(self, snapshot: FlowSnapshot, to: FlowState) -> FlowSnapshot:
        next_snapshot = transition(current=snapshot, to=to)
        logger.debug(
            "CRUD flow transition",
            extra={
                "crud_kind": snapshot.crud_kind.value,
                "from": snapshot.state.value,
                "to": to.value,
            },
        )
        return next_snapshot

    async def _acquire(self, flow_input: FlowInput[Any]) -> tuple[bool, Any]:
        try:
            result = await flow_input.get()
            if result is None or result.reason == "close":
                return False, None
            if result.reason == "failure":
                raise result.error or InputAcquisitionError("Input provider reported a failure")
        except Exception:
            await self._toast(flow_input.failure_message, suppress=True)
            raise
        return True, result.data

    async def _confirm(self, options: ConfirmDialogOptions | None) -> bool:
        if options is None:
            return True
        handle = await self.presenter.show_confirm_dialog(options)
        answer = await handle.on_end
        return bool(answer is not None and answer.yes)

    async def _dismiss(
        self,
        progress: ProgressHandle | None,
        *,
        release: bool,
        suppress: bool = False,
    ) -> None:
        try:
            if progress is not None:
                await progress.hide()
        except Exception:
            if not suppress:
                raise
            logger.exception("Failed to hide progress dialog")
        finally:
            if release and self.busy is not None:
                try:
                    self.busy.undo()
                except UnbalancedUndoError:
                    if not suppress:
                        raise
                    logger.exception(f"Busy toggle {self.busy.name} was released elsewhere")

    async def _toast(self, message: str | None, *, suppress: bool = False) -> None:
        if not message:
            return
        options = ToastOptions(
            message=message,
            duration_ms=self.ui_config.toast_duration_ms,
            position=self.ui_config.toast_position,
        )
        try:
            await self.presenter.show_toast(options)
        except Exception:
            if not suppress:
                raise
            logger.exception("Failed to show toast")
