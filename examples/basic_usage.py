#!/usr/bin/env python3
"""Terminal CRUD UI flows against an in-memory note list.

This demonstrates using the broker directly:

* a presenter that renders toasts, confirmations and progress on stdout
* update and delete flows reflected into the broker's record cache
* a shared busy toggle entered while progress is shown

Pass --fail to make the domain event fail and see the failure path.
"""

from __future__ import annotations

import argparse
import asyncio
from typing import Any, Sequence

from crud_ui_flow.broker.ui_list_broker import UIListDataBroker
from crud_ui_flow.core.config import FlowConfig
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
from crud_ui_flow.reactive.channel import Broadcast, ResultChannel
from crud_ui_flow.reactive.toggle import IdempotentToggle
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
    UIMessages,
)

Note = dict[str, Any]


def _done(value: Any) -> asyncio.Future[Any]:
    future = asyncio.get_running_loop().create_future()
    future.set_result(value)
    return future


async def _noop() -> None:
    return None


class TerminalNoteBroker(UIListDataBroker[Note, Note]):
    def __init__(self, config: FlowConfig, *, fail: bool, busy: IdempotentToggle) -> None:
        super().__init__(config, busy=busy)
        self.fail = fail

    async def emit_crud_event(self, crud_kind: CrudKind, data: Note) -> Note:
        await asyncio.sleep(0.2)
        if self.fail:
            raise ConnectionError("note service unreachable")
        return dict(data)

    async def show_toast(self, options: ToastOptions) -> DialogHandle[None]:
        print(f"[toast/{options.position}] {options.message}")
        return DialogHandle(hide=_noop, on_end=_done(None))

    async def show_progress_dialog(self, options: ProgressDialogOptions) -> ProgressHandle:
        print(f"[progress] {options.title}: {options.message}")
        percentages: Broadcast[float] = Broadcast(name=f"{options.title}.progress")
        percentages.subscribe(lambda value: print(f"[progress] {value:.0f}%"))

        async def hide() -> None:
            print("[progress] done")

        return ProgressHandle(hide=hide, on_end=_done(None), progress=percentages)

    async def show_alert_dialog(self, options: AlertDialogOptions) -> DialogHandle[None]:
        print(f"[alert] {options.title}: {options.message}")
        return DialogHandle(hide=_noop, on_end=_done(None))

    async def show_prompt_dialog(
        self, options: PromptDialogOptions
    ) -> DialogHandle[PromptResult]:
        answer = input(f"{options.title} ({options.input.placeholder}): ")
        return DialogHandle(
            hide=_noop, on_end=_done(PromptResult(data={options.input.name: answer}))
        )

    async def show_confirm_dialog(
        self, options: ConfirmDialogOptions
    ) -> DialogHandle[ConfirmResult]:
        answer = input(f"{options.title} {options.message} [y/N] ")
        return DialogHandle(
            hide=_noop, on_end=_done(ConfirmResult(yes=answer.strip().lower() == "y"))
        )

    async def show_action_sheet(
        self, options: ActionSheetOptions
    ) -> DialogHandle[ActionSheetResult]:
        labels = ", ".join(f"{b.id}={b.label}" for b in options.buttons)
        print(f"[sheet] {options.title}: {labels}")
        return DialogHandle(hide=_noop, on_end=_done(ActionSheetResult(id=options.buttons[0].id)))


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run CRUD UI flows in the terminal.")
    parser.add_argument("--title", default="Renamed note", help="New title for note #1")
    parser.add_argument("--fail", action="store_true", help="Make every domain event fail")
    return parser.parse_args(argv)


async def _run(args: argparse.Namespace) -> int:
    config = FlowConfig()
    config.setup_logging()

    busy = IdempotentToggle(name="busy")
    busy.actions.subscribe(lambda action: print(f"[busy] {action.value}"))

    broker = TerminalNoteBroker(config, fail=args.fail, busy=busy)
    broker.cache.replace_all([{"id": 1, "title": "First"}, {"id": 2, "title": "Second"}])
    broker.cache.changes.subscribe(lambda change: print(f"[cache] {change.crud_kind.value}"))

    async def read_title() -> InputResult[Note]:
        return InputResult.success({"id": 1, "title": args.title})

    saved: ResultChannel[Note] = ResultChannel(name="saved-note")
    saved.subscribe(lambda note: print(f"Saved: {note}"))

    try:
        await broker.run_update_ui_flow(
            CreateOrUpdateFlowOptions(
                input=FlowInput(get=read_title),
                before=FlowBefore(progress=ProgressDialogOptions(title="Saving", message="...")),
                after=FlowAfter(
                    channel=saved,
                    messages=UIMessages(success="Note saved", failure="Could not save note"),
                ),
            )
        )
        await broker.run_delete_ui_flow(
            DeleteFlowOptions(
                data={"id": 2, "title": "Second"},
                before=DeleteFlowBefore(
                    confirm=ConfirmDialogOptions(title="Delete note?", message="'Second'"),
                    progress=ProgressDialogOptions(title="Deleting", message="..."),
                ),
                after=FlowAfter(messages=UIMessages(success="Note deleted")),
            )
        )
    except ConnectionError as exc:
        print(str(exc))
        return 1

    print(f"Notes: {broker.cache.records}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    return asyncio.run(_run(_parse_args(argv)))


if __name__ == "__main__":
    raise SystemExit(main())
