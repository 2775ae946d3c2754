"""Unit tests for the list data broker's fixed-kind CRUD UI flows."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from crud_ui_flow.broker.cache import CrudChange
from crud_ui_flow.core.config import FlowConfig
from crud_ui_flow.errors import ChannelClosedError
from crud_ui_flow.flow.state_machine import FlowState
from crud_ui_flow.flow.types import (
    CreateOrUpdateFlowOptions,
    CrudKind,
    DeleteFlowBefore,
    DeleteFlowOptions,
    FlowAfter,
    FlowBefore,
    FlowInput,
    InputResult,
)
from crud_ui_flow.reactive.channel import ChannelState, ResultChannel
from crud_ui_flow.ui.models import ConfirmDialogOptions, ProgressDialogOptions, UIMessages


class NetworkError(Exception):
    pass


def test_create_is_not_reflected_into_the_cache(broker, recorded_channel, provider) -> None:
    broker.cache.replace_all([{"id": 9, "name": "z"}])
    changes: list[CrudChange[Any]] = []
    broker.cache.changes.subscribe(changes.append)
    channel = recorded_channel(broker.events)
    options = CreateOrUpdateFlowOptions(
        input=FlowInput(get=provider(InputResult.success({"name": "a"}))),
        before=FlowBefore(progress=ProgressDialogOptions(title="Creating", message="...")),
        after=FlowAfter(channel=channel, messages=UIMessages(success="Created")),
    )

    state = asyncio.run(broker.run_create_ui_flow(options))

    assert state is FlowState.SUCCEEDED
    assert broker.events == [
        ("progress.show", "Creating"),
        ("emit", "create"),
        ("progress.hide", "Creating"),
        ("toast", "Created"),
        ("channel.next", {"id": 1, "name": "a"}),
        ("channel.complete", None),
    ]
    assert changes == []
    assert broker.cache.records == [{"id": 9, "name": "z"}]


def test_update_is_reflected_before_the_caller_hears_back(
    broker, recorded_channel, provider
) -> None:
    broker.cache.replace_all([{"id": 1, "name": "old"}, {"id": 2, "name": "other"}])
    channel = recorded_channel(broker.events)
    seen_by_caller: list[Any] = []
    channel.subscribe(lambda _record: seen_by_caller.append(broker.cache.get(1)))
    options = CreateOrUpdateFlowOptions(
        input=FlowInput(get=provider(InputResult.success({"id": 1, "name": "new"}))),
        after=FlowAfter(channel=channel),
    )

    asyncio.run(broker.run_update_ui_flow(options))

    assert broker.cache.records == [{"id": 1, "name": "new"}, {"id": 2, "name": "other"}]
    assert seen_by_caller == [{"id": 1, "name": "new"}]
    assert channel.state is ChannelState.COMPLETED


def test_delete_is_reflected_and_republished(broker) -> None:
    broker.cache.replace_all([{"id": 1}, {"id": 2}])
    changes: list[CrudChange[Any]] = []
    broker.cache.changes.subscribe(changes.append)
    options = DeleteFlowOptions(
        data={"id": 2},
        before=DeleteFlowBefore(confirm=ConfirmDialogOptions(title="Delete?", message="Sure?")),
    )

    state = asyncio.run(broker.run_delete_ui_flow(options))

    assert state is FlowState.SUCCEEDED
    assert broker.cache.records == [{"id": 1}]
    assert changes == [CrudChange(crud_kind=CrudKind.DELETE, record={"id": 2}, applied=True)]


def test_declined_delete_leaves_cache_and_channel_alone(broker, recorded_channel) -> None:
    broker.confirm_answer = False
    broker.cache.replace_all([{"id": 1}])
    channel = recorded_channel(broker.events)
    options = DeleteFlowOptions(
        data={"id": 1},
        before=DeleteFlowBefore(confirm=ConfirmDialogOptions(title="Delete?", message="Sure?")),
        after=FlowAfter(channel=channel),
    )

    state = asyncio.run(broker.run_delete_ui_flow(options))

    assert state is FlowState.CANCELLED
    assert broker.events == [("confirm", "Delete?")]
    assert broker.cache.records == [{"id": 1}]
    assert channel.state is ChannelState.OPEN


def test_update_failure_reaches_caller_and_channel_but_not_cache(
    broker, recorded_channel, provider
) -> None:
    broker.cache.replace_all([{"id": 1, "name": "old"}])
    error = NetworkError("offline")
    broker.failure = error
    channel = recorded_channel(broker.events)
    options = CreateOrUpdateFlowOptions(
        input=FlowInput(get=provider(InputResult.success({"id": 1, "name": "new"}))),
        before=FlowBefore(progress=ProgressDialogOptions(title="Saving", message="...")),
        after=FlowAfter(channel=channel, messages=UIMessages(failure="Update failed")),
    )

    with pytest.raises(NetworkError) as excinfo:
        asyncio.run(broker.run_update_ui_flow(options))

    assert excinfo.value is error
    assert channel.failure is error
    assert broker.events == [
        ("progress.show", "Saving"),
        ("emit", "update"),
        ("progress.hide", "Saving"),
        ("toast", "Update failed"),
        ("channel.error", error),
    ]
    assert broker.cache.records == [{"id": 1, "name": "old"}]


def test_fixed_flows_work_without_a_caller_channel(broker, provider) -> None:
    broker.cache.replace_all([{"id": 1, "name": "old"}])
    options = CreateOrUpdateFlowOptions(
        input=FlowInput(get=provider(InputResult.success({"id": 1, "name": "new"}))),
    )

    asyncio.run(broker.run_update_ui_flow(options))

    assert broker.cache.get(1) == {"id": 1, "name": "new"}


def test_fixed_flows_reject_a_terminated_caller_channel(broker, provider) -> None:
    channel: ResultChannel[Any] = ResultChannel()
    channel.error(RuntimeError("earlier failure"))
    options = CreateOrUpdateFlowOptions(
        input=FlowInput(get=provider(InputResult.success({"id": 1}))),
        after=FlowAfter(channel=channel),
    )

    with pytest.raises(ChannelClosedError):
        asyncio.run(broker.run_update_ui_flow(options))

    assert broker.events == []


def test_general_flow_uses_explicit_emitter_and_skips_cache(broker, provider) -> None:
    broker.cache.replace_all([{"id": 1, "name": "old"}])
    channel: ResultChannel[str] = ResultChannel()
    received: list[str] = []
    channel.subscribe(received.append)

    async def rename(crud_kind: CrudKind, data: Any) -> str:
        return f"{crud_kind.value}:{data['name']}"

    options = CreateOrUpdateFlowOptions(
        input=FlowInput(get=provider(InputResult.success({"id": 1, "name": "tag"}))),
        after=FlowAfter(channel=channel),
    )

    state = asyncio.run(broker.run_crud_ui_flow(CrudKind.UPDATE, options, rename))

    assert state is FlowState.SUCCEEDED
    assert received == ["update:tag"]
    assert ("emit", "update") not in broker.events
    assert broker.cache.get(1) == {"id": 1, "name": "old"}


def test_get_config_returns_broker_config(broker, flow_config: FlowConfig) -> None:
    assert broker.get_config() is flow_config
    assert broker.cache.id_field == "id"
    assert broker.runner.ui_config.toast_position == "top"
