"""Test configuration and fixtures."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

import pytest

from crud_ui_flow.broker.ui_list_broker import UIListDataBroker
from crud_ui_flow.core.config import CacheConfig, FlowConfig, UIConfig
from crud_ui_flow.flow.types import CrudKind
from crud_ui_flow.reactive.channel import Broadcast, ResultChannel
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
from crud_ui_flow.ui.presenter import UIPresenter


def _resolved(value: Any) -> asyncio.Future[Any]:
    future = asyncio.get_running_loop().create_future()
    future.set_result(value)
    return future


class RecordingUI:
    """Presenter that records every UI call, in order, in `events`."""

    def __init__(self) -> None:
        self.events: list[tuple[str, object]] = []
        self.toasts: list[ToastOptions] = []
        self.confirm_answer = True

    def _handle(self, kind: str, end_result: Any = None) -> DialogHandle[Any]:
        async def hide() -> None:
            self.events.append((f"{kind}.hide", None))

        return DialogHandle(hide=hide, on_end=_resolved(end_result))

    async def show_toast(self, options: ToastOptions) -> DialogHandle[None]:
        self.events.append(("toast", options.message))
        self.toasts.append(options)
        return self._handle("toast")

    async def show_progress_dialog(self, options: ProgressDialogOptions) -> ProgressHandle:
        self.events.append(("progress.show", options.title))
        percentages: Broadcast[float] = Broadcast(name=f"{options.title}.progress")
        percentages.subscribe(lambda value: self.events.append(("progress.percent", value)))

        async def hide() -> None:
            self.events.append(("progress.hide", options.title))

        return ProgressHandle(hide=hide, on_end=_resolved(None), progress=percentages)

    async def show_alert_dialog(self, options: AlertDialogOptions) -> DialogHandle[None]:
        self.events.append(("alert", options.title))
        return self._handle("alert")

    async def show_prompt_dialog(
        self, options: PromptDialogOptions
    ) -> DialogHandle[PromptResult]:
        self.events.append(("prompt", options.title))
        return self._handle("prompt", PromptResult(data={options.input.name: ""}))

    async def show_confirm_dialog(
        self, options: ConfirmDialogOptions
    ) -> DialogHandle[ConfirmResult]:
        self.events.append(("confirm", options.title))
        return self._handle("confirm", ConfirmResult(yes=self.confirm_answer))

    async def show_action_sheet(
        self, options: ActionSheetOptions
    ) -> DialogHandle[ActionSheetResult]:
        self.events.append(("action_sheet", options.title))
        return self._handle("action_sheet", ActionSheetResult(id=options.buttons[0].id))


class RecordingPresenter(RecordingUI, UIPresenter):
    pass


class MemoryBroker(RecordingUI, UIListDataBroker[dict[str, Any], dict[str, Any]]):
    """Broker whose domain events run against an in-memory id counter."""

    def __init__(self, config: FlowConfig | None = None, **kwargs: Any) -> None:
        RecordingUI.__init__(self)
        UIListDataBroker.__init__(self, config, **kwargs)
        self.failure: BaseException | None = None
        self._next_id = 1

    async def emit_crud_event(self, crud_kind: CrudKind, data: dict[str, Any]) -> dict[str, Any]:
        self.events.append(("emit", crud_kind.value))
        if self.failure is not None:
            raise self.failure
        record = dict(data)
        if crud_kind is CrudKind.CREATE:
            record.setdefault("id", self._next_id)
            self._next_id += 1
        return record


def record_channel(channel: ResultChannel[Any], events: list[tuple[str, object]]) -> None:
    channel.subscribe(
        lambda value: events.append(("channel.next", value)),
        lambda exc: events.append(("channel.error", exc)),
        lambda: events.append(("channel.complete", None)),
    )


@pytest.fixture
def ui_config() -> UIConfig:
    """Provide a test UI configuration."""
    return UIConfig(toast_duration_ms=1500, toast_position="top")


@pytest.fixture
def cache_config() -> CacheConfig:
    """Provide a test cache configuration."""
    return CacheConfig(id_field="id", per_page=10)


@pytest.fixture
def flow_config(ui_config: UIConfig, cache_config: CacheConfig) -> FlowConfig:
    """Provide a test flow configuration."""
    return FlowConfig(log_level="DEBUG", debug=True, ui=ui_config, cache=cache_config)


@pytest.fixture
def presenter() -> RecordingPresenter:
    return RecordingPresenter()


@pytest.fixture
def broker(flow_config: FlowConfig) -> MemoryBroker:
    return MemoryBroker(flow_config)


@pytest.fixture
def recorded_channel() -> Callable[[list[tuple[str, object]]], ResultChannel[Any]]:
    """Factory for result channels that log their signals into an event list."""

    def make(events: list[tuple[str, object]]) -> ResultChannel[Any]:
        channel: ResultChannel[Any] = ResultChannel(name="test-channel")
        record_channel(channel, events)
        return channel

    return make


@pytest.fixture
def provider() -> Callable[[Any], Callable[[], Awaitable[Any]]]:
    """Factory for input providers returning a fixed result."""

    def make(result: Any) -> Callable[[], Awaitable[Any]]:
        async def get() -> Any:
            return result

        return get

    return make
