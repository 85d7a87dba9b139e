# src/fxsync/shared/observable.py
"""
Observable - Hot Latest-Value State Streams

A minimal publish/subscribe primitive used for every piece of state the
sync core exposes (rates, timelines, loading flag, error message). An
Observable always holds its latest value, hands it to a new subscriber
right away and pushes each later update to all current subscribers. Missed
values are not buffered.

Files that USE this module:
- fxsync.adapters.persistence.local_store (rates/timeline streams)
- fxsync.application.sync_service (loading/error streams)

Files that this module USES:
- None (stdlib only)
"""
from __future__ import annotations

import asyncio
import logging
import threading
from typing import Callable, Generic, List, Optional, TypeVar

log = logging.getLogger(__name__)

T = TypeVar("T")

Callback = Callable[[T], None]


class Subscription:
    """Handle returned by ``Observable.subscribe``; dispose to stop delivery."""

    def __init__(self, observable: "Observable", callback: Callable) -> None:
        self._observable = observable
        self._callback = callback
        self.active = True

    def dispose(self) -> None:
        if self.active:
            self._observable._remove(self._callback)
            self.active = False


class Observable(Generic[T]):
    """
    Thread-safe hot observable holding a single current value.

    Args:
        initial: Value held before the first publish
        loop: Optional event loop that ``post_value`` marshals delivery onto
        name: Name used in log messages
    """

    def __init__(
        self,
        initial: Optional[T] = None,
        loop: Optional[asyncio.AbstractEventLoop] = None,
        name: str = "observable",
    ) -> None:
        self._value = initial
        self._loop = loop
        self._name = name
        self._lock = threading.RLock()
        self._subscribers: List[Callback] = []

    @property
    def value(self) -> Optional[T]:
        with self._lock:
            return self._value

    def bind_loop(self, loop: Optional[asyncio.AbstractEventLoop]) -> None:
        self._loop = loop

    def subscribe(self, callback: Callback) -> Subscription:
        """Register ``callback`` and deliver the current value to it immediately."""
        with self._lock:
            self._subscribers.append(callback)
            current = self._value
        self._deliver(callback, current)
        return Subscription(self, callback)

    def _remove(self, callback: Callback) -> None:
        with self._lock:
            try:
                self._subscribers.remove(callback)
            except ValueError:
                pass

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def set_value(self, value: T) -> None:
        """Publish synchronously on the calling thread."""
        with self._lock:
            self._value = value
            subscribers = list(self._subscribers)
        for callback in subscribers:
            self._deliver(callback, value)

    def post_value(self, value: T) -> None:
        """
        Publish from any thread.

        When bound to a running loop and called from another thread, the
        update is scheduled on that loop; otherwise it is delivered in place.
        """
        loop = self._loop
        if loop is not None and loop.is_running() and not _on_loop(loop):
            loop.call_soon_threadsafe(self.set_value, value)
        else:
            self.set_value(value)

    def _deliver(self, callback: Callback, value: Optional[T]) -> None:
        try:
            callback(value)
        except Exception:
            log.exception("Subscriber of %s failed while handling an update", self._name)

    def __repr__(self) -> str:
        return f"Observable({self._name}={self.value!r})"


def _on_loop(loop: asyncio.AbstractEventLoop) -> bool:
    try:
        return asyncio.get_running_loop() is loop
    except RuntimeError:
        return False
