"""
hospital/events.py

Tiny observer primitives used instead of implicit re-render triggers.

    sub = store.subscribe(lambda topic: print("changed", topic))
    ...
    sub.unsubscribe()
"""

from __future__ import annotations

import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)

Callback = Callable[..., Any]


class Subscription:
    """Handle returned by :meth:`Signal.subscribe`.  Unsubscribing twice is harmless."""

    def __init__(self, signal: "Signal", callback: Callback):
        self._signal = signal
        self._callback = callback
        self.active = True

    def unsubscribe(self) -> None:
        if self.active:
            self._signal._remove(self._callback)
            self.active = False

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc_info) -> None:
        self.unsubscribe()


class Signal:
    """A synchronous list of listeners, called in registration order."""

    def __init__(self, name: str = "signal"):
        self.name = name
        self._listeners: list[Callback] = []

    def subscribe(self, callback: Callback) -> Subscription:
        self._listeners.append(callback)
        return Subscription(self, callback)

    def _remove(self, callback: Callback) -> None:
        try:
            self._listeners.remove(callback)
        except ValueError:
            pass

    def emit(self, *args: Any) -> None:
        for callback in list(self._listeners):
            callback(*args)

    def __len__(self) -> int:
        return len(self._listeners)
