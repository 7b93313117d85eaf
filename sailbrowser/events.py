"""A small synchronous signal used to notify listeners of storage events."""

from __future__ import annotations

from typing import Any, Callable


class Signal:
    """Calls every connected callback, in connection order, when emitted."""

    def __init__(self) -> None:
        self._callbacks: list[Callable[..., Any]] = []

    def connect(self, callback: Callable[..., Any]) -> None:
        """Connect a callback. Connecting the same callback twice calls it twice."""
        if not callable(callback):
            raise TypeError("callback must be callable")
        self._callbacks.append(callback)

    def disconnect(self, callback: Callable[..., Any]) -> bool:
        """Remove every connection of ``callback``; return whether any existed."""
        before = len(self._callbacks)
        self._callbacks = [cb for cb in self._callbacks if cb != callback]
        return len(self._callbacks) != before

    def emit(self, *args: Any) -> None:
        """Call each connected callback with ``args``."""
        for callback in list(self._callbacks):
            callback(*args)

    def __len__(self) -> int:
        return len(self._callbacks)