"""Minimal push-stream primitives.

A :class:`Stream` is anything that can be subscribed to; subscribing attaches
an :class:`Observer` and returns a :class:`Subscription`. A :class:`Broadcast`
is a stream the owner pushes into: every value is handed synchronously to all
current observers in subscription order, and a terminal event (completion or
error) is delivered exactly once. :class:`Signal` is a broadcast that also
remembers its current value.

Derived views (``filter`` / ``map``) keep no state of their own: each
subscription to a view is a fresh subscription to its source.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Callable
from typing import Any, Generic, Protocol, TypeVar

from ..logs.logger import logger

T = TypeVar("T")
U = TypeVar("U")
T_contra = TypeVar("T_contra", contravariant=True)


class Observer(Protocol[T_contra]):
    """Sink for the three stream events."""

    def on_next(self, value: T_contra) -> None:
        ...

    def on_complete(self) -> None:
        ...

    def on_error(self, error: BaseException) -> None:
        ...


def _noop(*_args: Any) -> None:
    return None


class CallbackObserver(Generic[T]):
    """Adapts plain callables to the :class:`Observer` protocol."""

    def __init__(
        self,
        on_next: Callable[[T], Any] | None = None,
        on_complete: Callable[[], Any] | None = None,
        on_error: Callable[[BaseException], Any] | None = None,
    ) -> None:
        self._on_next = on_next or _noop
        self._on_complete = on_complete or _noop
        self._on_error = on_error or _noop

    def on_next(self, value: T) -> None:
        self._on_next(value)

    def on_complete(self) -> None:
        self._on_complete()

    def on_error(self, error: BaseException) -> None:
        self._on_error(error)


class Subscription:
    """Handle returned by ``subscribe``; ``unsubscribe`` is idempotent."""

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


class Stream(Generic[T]):
    """Read-only subscribable sequence of values."""

    def __init__(self, subscribe: Callable[[Observer[T]], Subscription]) -> None:
        self._subscribe_fn = subscribe

    def subscribe_observer(self, observer: Observer[T]) -> Subscription:
        return self._subscribe_fn(observer)

    def subscribe(
        self,
        on_next: Callable[[T], Any] | None = None,
        on_complete: Callable[[], Any] | None = None,
        on_error: Callable[[BaseException], Any] | None = None,
    ) -> Subscription:
        return self.subscribe_observer(CallbackObserver(on_next, on_complete, on_error))

    def filter(self, predicate: Callable[[T], bool]) -> Stream[T]:
        source = self

        def subscribe(observer: Observer[T]) -> Subscription:
            def on_next(value: T) -> None:
                if predicate(value):
                    observer.on_next(value)

            return source.subscribe(on_next, observer.on_complete, observer.on_error)

        return Stream(subscribe)

    def map(self, transform: Callable[[T], U]) -> Stream[U]:
        source = self

        def subscribe(observer: Observer[U]) -> Subscription:
            return source.subscribe(
                lambda value: observer.on_next(transform(value)),
                observer.on_complete,
                observer.on_error,
            )

        return Stream(subscribe)

    def iterate(self) -> StreamIterator[T]:
        """Subscribe now and consume with ``async for`` / ``async with``."""
        return StreamIterator(self)

    async def __aiter__(self) -> AsyncIterator[T]:
        # Generator form: the subscription is dropped in ``finally`` when the
        # loop ends, including on break, return or garbage collection.
        values = self.iterate()
        try:
            async for value in values:
                yield value
        finally:
            values.close()

    async def first(self, predicate: Callable[[T], bool] | None = None) -> T:
        """Wait for the next value (matching ``predicate``) and unsubscribe.

        Raises ``EOFError`` if the stream completes first, or the stream's
        error if it fails first.
        """
        source = self.filter(predicate) if predicate else self
        async with source.iterate() as values:
            async for value in values:
                return value
        raise EOFError("stream completed before emitting a value")


class _Entry(Generic[T]):
    __slots__ = ("observer", "active")

    def __init__(self, observer: Observer[T]) -> None:
        self.observer = observer
        self.active = True


class Broadcast(Stream[T]):
    """Fan-out point: pushes each event to every attached observer in order."""

    def __init__(self, name: str = "broadcast") -> None:
        super().__init__(self._attach)
        self.name = name
        self._entries: list[_Entry[T]] = []
        self._completed = False
        self._error: BaseException | None = None

    @property
    def terminated(self) -> bool:
        return self._completed or self._error is not None

    @property
    def observer_count(self) -> int:
        return len(self._entries)

    def _attach(self, observer: Observer[T]) -> Subscription:
        if self.terminated:
            self._deliver_terminal(observer)
            return Subscription()
        entry = _Entry(observer)
        self._entries.append(entry)
        return Subscription(lambda: self._detach(entry))

    def _detach(self, entry: _Entry[T]) -> None:
        entry.active = False
        try:
            self._entries.remove(entry)
        except ValueError:
            pass

    def next(self, value: T) -> None:
        if self.terminated:
            logger.log_event(
                "stream",
                "next_after_terminal",
                level=logging.DEBUG,
                stream=self.name,
            )
            return
        for entry in list(self._entries):
            # An earlier observer may have unsubscribed this one.
            if entry.active:
                self._guard(entry.observer.on_next, value)

    def complete(self) -> None:
        if self.terminated:
            return
        self._completed = True
        self._finish()

    def error(self, error: BaseException) -> None:
        if self.terminated:
            return
        self._error = error
        self._finish()

    def _finish(self) -> None:
        entries, self._entries = self._entries, []
        for entry in entries:
            if entry.active:
                entry.active = False
                self._deliver_terminal(entry.observer)

    def _deliver_terminal(self, observer: Observer[T]) -> None:
        if self._error is not None:
            self._guard(observer.on_error, self._error)
        else:
            self._guard(observer.on_complete)

    def _guard(self, fn: Callable[..., Any], *args: Any) -> None:
        try:
            fn(*args)
        except Exception as e:  # noqa: BLE001
            logger.log_event(
                "stream",
                "subscriber_error",
                level=logging.ERROR,
                stream=self.name,
                error=str(e),
                error_type=type(e).__name__,
                exc_info=True,
            )


class Signal(Broadcast[T]):
    """Broadcast with a current value.

    New observers receive the current value immediately; ``next`` only emits
    when the value actually changes.
    """

    def __init__(self, initial: T, name: str = "signal") -> None:
        super().__init__(name)
        self._value = initial

    @property
    def value(self) -> T:
        return self._value

    def _attach(self, observer: Observer[T]) -> Subscription:
        if not self.terminated:
            self._guard(observer.on_next, self._value)
        return super()._attach(observer)

    def next(self, value: T) -> None:
        if self.terminated or value == self._value:
            return
        self._value = value
        super().next(value)

    set = next


class StreamIterator(Generic[T]):
    """Queue-backed async iterator over a stream.

    The subscription is made at construction and released on the terminal
    event, on ``close()`` / ``aclose()`` or when leaving an ``async with``
    block. Iterating a :class:`Stream` directly with ``async for`` wraps one of
    these and releases it when the loop is left.
    """

    def __init__(self, stream: Stream[T]) -> None:
        self._queue: asyncio.Queue[tuple[str, Any]] = asyncio.Queue()
        self._done = False
        self._subscription = stream.subscribe(
            lambda value: self._queue.put_nowait(("next", value)),
            lambda: self._queue.put_nowait(("complete", None)),
            lambda error: self._queue.put_nowait(("error", error)),
        )

    def __aiter__(self) -> StreamIterator[T]:
        return self

    async def __anext__(self) -> T:
        if self._done:
            raise StopAsyncIteration
        kind, value = await self._queue.get()
        if kind == "next":
            return value
        self._close()
        if kind == "error":
            raise value
        raise StopAsyncIteration

    def _close(self) -> None:
        self._done = True
        self._subscription.unsubscribe()

    def close(self) -> None:
        if not self._done:
            self._close()
            # Wake a consumer blocked in __anext__.
            self._queue.put_nowait(("complete", None))

    async def aclose(self) -> None:
        self.close()

    async def __aenter__(self) -> StreamIterator[T]:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()
