"""Explicit observer-list streams.

`Broadcast` is an open-ended multicast stream. `ResultChannel` is the
single-use variant that carries at most one value followed by exactly one
terminal signal (complete or error).

Neither type is thread-safe; both are meant to be driven from a single
asyncio event loop.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from crud_ui_flow.errors import ChannelClosedError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Observer(Generic[T]):
    on_next: Callable[[T], None] | None = None
    on_error: Callable[[BaseException], None] | None = None
    on_complete: Callable[[], None] | None = None


class Subscription:
    """Handle returned by `subscribe`; `unsubscribe()` is idempotent."""

    __slots__ = ("_detach", "_closed")

    def __init__(self, detach: Callable[[], None] | None = None) -> None:
        self._detach = detach
        self._closed = detach is None

    @property
    def closed(self) -> bool:
        return self._closed

    def unsubscribe(self) -> None:
        if self._closed:
            return
        self._closed = True
        detach, self._detach = self._detach, None
        if detach is not None:
            detach()


def _callback_name(callback: Callable[..., object]) -> str:
    return getattr(callback, "__qualname__", None) or repr(callback)


class Broadcast(Generic[T]):
    """A multicast stream with an explicitly owned observer list.

    Observers are invoked synchronously in subscription order. An observer
    that raises is logged and the remaining observers are still invoked.
    """

    __slots__ = ("_observers", "name")

    def __init__(self, name: str | None = None) -> None:
        self._observers: list[Observer[T]] = []
        self.name = name or type(self).__name__

    @property
    def observer_count(self) -> int:
        return len(self._observers)

    def subscribe(
        self,
        on_next: Callable[[T], None] | None = None,
        on_error: Callable[[BaseException], None] | None = None,
        on_complete: Callable[[], None] | None = None,
    ) -> Subscription:
        observer = Observer(on_next=on_next, on_error=on_error, on_complete=on_complete)
        self._observers.append(observer)

        def detach() -> None:
            # Identity match: equal-looking observers may be subscribed twice.
            for i, existing in enumerate(self._observers):
                if existing is observer:
                    del self._observers[i]
                    return

        return Subscription(detach)

    def emit(self, value: T) -> None:
        self._dispatch("on_next", value)

    def _dispatch(self, kind: str, *args: object) -> None:
        # Snapshot so observers may (un)subscribe while being notified.
        for observer in list(self._observers):
            callback = getattr(observer, kind)
            if callback is None:
                continue
            try:
                callback(*args)
            except Exception:
                logger.exception(
                    "Observer %s of %s failed during %s",
                    _callback_name(callback),
                    self.name,
                    kind,
                )


class ChannelState(str, Enum):
    OPEN = "open"
    COMPLETED = "completed"
    ERRORED = "errored"


class ResultChannel(Broadcast[T]):
    """Single-use, multicast delivery of one outcome.

    Invariants:
      - at most one value is emitted;
      - exactly one terminal signal, and nothing after it;
      - the observer list is released once the channel terminates.

    An observer that subscribes after termination receives the terminal
    signal immediately. The emitted value is not replayed.
    """

    __slots__ = ("_state", "_failure", "_emitted")

    def __init__(self, name: str | None = None) -> None:
        super().__init__(name)
        self._state = ChannelState.OPEN
        self._failure: BaseException | None = None
        self._emitted = False

    @property
    def state(self) -> ChannelState:
        return self._state

    @property
    def closed(self) -> bool:
        return self._state is not ChannelState.OPEN

    @property
    def failure(self) -> BaseException | None:
        """The error the channel terminated with, if any."""

        return self._failure

    def subscribe(
        self,
        on_next: Callable[[T], None] | None = None,
        on_error: Callable[[BaseException], None] | None = None,
        on_complete: Callable[[], None] | None = None,
    ) -> Subscription:
        if self._state is ChannelState.COMPLETED:
            if on_complete is not None:
                on_complete()
            return Subscription()
        if self._state is ChannelState.ERRORED:
            failure = self._failure
            if on_error is not None and failure is not None:
                on_error(failure)
            return Subscription()
        return super().subscribe(on_next, on_error, on_complete)

    def emit(self, value: T) -> None:
        self._ensure_open("emit")
        if self._emitted:
            raise ChannelClosedError(f"{self.name} already carries a value")
        self._emitted = True
        self._dispatch("on_next", value)

    def complete(self) -> None:
        self._ensure_open("complete")
        self._state = ChannelState.COMPLETED
        self._dispatch("on_complete")
        self._observers.clear()

    def error(self, exc: BaseException) -> None:
        self._ensure_open("error")
        self._state = ChannelState.ERRORED
        self._failure = exc
        self._dispatch("on_error", exc)
        self._observers.clear()

    def pipe(self, target: ResultChannel[T]) -> Subscription:
        """Forward this channel's value and terminal signal into `target`."""

        return self.subscribe(target.emit, target.error, target.complete)

    def _ensure_open(self, operation: str) -> None:
        if self._state is not ChannelState.OPEN:
            raise ChannelClosedError(
                f"Cannot {operation} on {self.name}: channel is {self._state.value}"
            )
