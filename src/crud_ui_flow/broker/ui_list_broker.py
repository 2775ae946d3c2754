"""List data broker with CRUD UI flows.

Subclasses implement the UI primitives (they are the platform's presenter)
and the domain event emitter; the broker wires every flow's outcome into its
record cache.
"""

from __future__ import annotations

import logging
from abc import abstractmethod
from dataclasses import replace
from typing import Generic, TypeVar

from crud_ui_flow.core.config import FlowConfig
from crud_ui_flow.errors import ChannelClosedError
from crud_ui_flow.flow.runner import CrudFlowRunner
from crud_ui_flow.flow.state_machine import FlowState
from crud_ui_flow.flow.types import (
    CreateOrUpdateFlowOptions,
    CrudEventEmitter,
    CrudKind,
    DeleteFlowOptions,
)
from crud_ui_flow.reactive.channel import ResultChannel
from crud_ui_flow.reactive.toggle import IdempotentToggle
from crud_ui_flow.ui.presenter import UIPresenter

from .cache import REFLECTED_KINDS, RecordCache

logger = logging.getLogger(__name__)

U = TypeVar("U")
D = TypeVar("D")
U0 = TypeVar("U0")
D0 = TypeVar("D0")


class UIListDataBroker(UIPresenter, Generic[U, D]):
    """Broker for a list of records of type `D`, created from input of type `U`.

    The fixed-kind entry points (`run_create_ui_flow`, `run_update_ui_flow`,
    `run_delete_ui_flow`) use `emit_crud_event` and reflect update/delete
    outcomes into `cache`. `run_crud_ui_flow` is the general form: it takes an
    explicit emitter, may be used for any record type and does not touch the
    cache.
    """

    def __init__(
        self,
        config: FlowConfig | None = None,
        *,
        busy: IdempotentToggle | None = None,
    ) -> None:
        """Initialize the broker.

        Args:
            config: Configuration object. If None, loads from environment.
            busy: Optional toggle shared with other brokers, entered while any
                of their flows shows progress.
        """
        self.config = config or FlowConfig()
        self.cache: RecordCache[D] = RecordCache(
            id_field=self.config.cache.id_field, name=type(self).__name__
        )
        self.runner = CrudFlowRunner(self, ui_config=self.config.ui, busy=busy)

    def get_config(self) -> FlowConfig:
        return self.config

    @abstractmethod
    async def emit_crud_event(self, crud_kind: CrudKind, data: U | D) -> D:
        """Perform the create/update/delete side effect.

        Args:
            crud_kind: The kind of operation.
            data: Input from the UI, possibly not normalized.

        Returns:
            The normalized record.
        """
        pass

    async def run_crud_ui_flow(
        self,
        crud_kind: CrudKind,
        options: CreateOrUpdateFlowOptions[U0, D0] | DeleteFlowOptions[D0],
        emitter: CrudEventEmitter[D0],
    ) -> FlowState:
        """Run a CRUD UI flow for any record type with an explicit emitter."""
        return await self.runner.run_crud_ui_flow(crud_kind, options, emitter)

    async def run_create_ui_flow(self, options: CreateOrUpdateFlowOptions[U, D]) -> FlowState:
        return await self._run_reflected(CrudKind.CREATE, options)

    async def run_update_ui_flow(self, options: CreateOrUpdateFlowOptions[U, D]) -> FlowState:
        return await self._run_reflected(CrudKind.UPDATE, options)

    async def run_delete_ui_flow(self, options: DeleteFlowOptions[D]) -> FlowState:
        return await self._run_reflected(CrudKind.DELETE, options)

    async def _run_reflected(
        self,
        crud_kind: CrudKind,
        options: CreateOrUpdateFlowOptions[U, D] | DeleteFlowOptions[D],
    ) -> FlowState:
        external = options.after.channel
        if external is not None and external.closed:
            raise ChannelClosedError(f"{external.name} is already {external.state.value}")

        internal: ResultChannel[D] = ResultChannel(name=f"{self.cache.name}.{crud_kind.value}")
        # The cache is subscribed first so it is current before the caller hears back.
        internal.subscribe(lambda record: self._reflect(crud_kind, record))
        if external is not None:
            internal.pipe(external)

        wired = replace(options, after=replace(options.after, channel=internal))
        return await self.runner.run_crud_ui_flow(crud_kind, wired, self.emit_crud_event)

    def _reflect(self, crud_kind: CrudKind, record: D) -> None:
        if crud_kind in REFLECTED_KINDS:
            logger.debug(f"Reflecting {crud_kind.value} outcome into {self.cache.name}")
            self.cache.apply(crud_kind, record)
