from __future__ import annotations

from typing import Any, Callable, Dict, Hashable, List

Listener = Callable[..., Any]


class EventEmitter:
    """Synchronous listener registry keyed by event name.

    Listeners run on the caller's stack, in attachment order, every time
    :meth:`emit` is called. Registration and removal compare listeners by
    identity so that two equal-but-distinct callables never shadow each other.
    """

    def __init__(self) -> None:
        self._listeners: Dict[Hashable, List[Listener]] = {}

    def on(self, event: Hashable, listener: Listener) -> None:
        """Register ``listener`` for ``event``. Duplicates are allowed."""
        self._listeners.setdefault(event, []).append(listener)

    def off(self, event: Hashable, listener: Listener) -> None:
        """Remove the most recent registration of ``listener`` for ``event``.

        Does nothing when ``listener`` is not registered.
        """
        registered = self._listeners.get(event)
        if not registered:
            return
        for index in range(len(registered) - 1, -1, -1):
            if registered[index] is listener:
                del registered[index]
                break
        if not registered:
            del self._listeners[event]

    def listeners(self, event: Hashable) -> List[Listener]:
        """Return a copy of the listeners registered for ``event``."""
        return list(self._listeners.get(event, ()))

    def listener_count(self, event: Hashable) -> int:
        return len(self._listeners.get(event, ()))

    def remove_all_listeners(self, event: Hashable | None = None) -> None:
        if event is None:
            self._listeners.clear()
        else:
            self._listeners.pop(event, None)

    def emit(self, event: Hashable, *args: Any) -> bool:
        """Call every listener of ``event`` with ``args``.

        Listeners added or removed while emitting do not change the set of
        listeners called for this emission. Returns whether any listener ran.
        """
        registered = self._listeners.get(event)
        if not registered:
            return False
        for listener in list(registered):
            listener(*args)
        return True
