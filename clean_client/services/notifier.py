"""
Observable state holder used for session and navigation state.

Observers either register a callback or open a subscription and await the
next state. States reach every observer in emission order; re-emitting the
current value is ignored.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Generic, List, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_CLOSED = object()


class Subscription(Generic[T]):
    """Queue-backed view of a notifier; iterate or ``await next()``."""

    def __init__(self, unsubscribe: Callable[["Subscription[T]"], None]) -> None:
        self._queue: asyncio.Queue = asyncio.Queue()
        self._unsubscribe = unsubscribe
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def _push(self, value: object) -> None:
        self._queue.put_nowait(value)

    async def next(self) -> T:
        """Wait for the next state; raises ``StopAsyncIteration`` once closed."""
        if self._closed and self._queue.empty():
            raise StopAsyncIteration
        value = await self._queue.get()
        if value is _CLOSED:
            raise StopAsyncIteration
        return value  # type: ignore[return-value]

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._unsubscribe(self)
        self._push(_CLOSED)

    def __aiter__(self) -> "Subscription[T]":
        return self

    async def __anext__(self) -> T:
        return await self.next()


class StateNotifier(Generic[T]):
    """Holds the latest state and broadcasts changes to observers."""

    def __init__(self, initial: T) -> None:
        self._value = initial
        self._callbacks: List[Callable[[T], None]] = []
        self._subscriptions: List[Subscription[T]] = []

    @property
    def value(self) -> T:
        return self._value

    def emit(self, value: T) -> bool:
        """Publish ``value``; returns ``False`` when it equals the current state."""
        if value == self._value:
            return False
        self._value = value
        for subscription in list(self._subscriptions):
            subscription._push(value)
        for callback in list(self._callbacks):
            try:
                callback(value)
            except Exception:  # pragma: no cover - listener bug
                logger.exception("State listener %r failed", callback)
        return True

    def subscribe(self, callback: Callable[[T], None]) -> Callable[[], None]:
        """Register ``callback`` for future states and return its unsubscribe handle."""
        self._callbacks.append(callback)

        def unsubscribe() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return unsubscribe

    def listen(self) -> Subscription[T]:
        """Open a subscription that yields every state emitted from now on."""
        subscription: Subscription[T] = Subscription(self._remove_subscription)
        self._subscriptions.append(subscription)
        return subscription

    def _remove_subscription(self, subscription: Subscription[T]) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)


__all__ = ["StateNotifier", "Subscription"]
