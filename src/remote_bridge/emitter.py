"""Event Emitter - In-process pub/sub keyed by event name.

Synchronous counterpart of an async event bus: listeners run on the
caller's stack, in subscription order, and their exceptions propagate
to whoever emitted the event.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

# Type for event listeners
Listener = Callable[..., Any]


class EventEmitter:
    """Simple per-instance event emitter.

    Usage:
        emitter = EventEmitter()
        unsubscribe = emitter.on("message", print)
        emitter.emit("message", "hello")
        unsubscribe()
    """

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = {}

    def on(self, event: str, listener: Listener) -> Callable[[], None]:
        """Subscribe a listener to an event.

        Args:
            event: Event name
            listener: Callable invoked with the emitted arguments

        Returns:
            Unsubscribe function
        """
        self._listeners.setdefault(event, []).append(listener)

        def unsubscribe() -> None:
            self.off(event, listener)

        return unsubscribe

    def off(self, event: str, listener: Listener) -> None:
        """Remove one registration of a listener. Unknown listeners are ignored."""
        listeners = self._listeners.get(event)
        if listeners and listener in listeners:
            listeners.remove(listener)
            if not listeners:
                del self._listeners[event]

    def emit(self, event: str, *args: Any) -> bool:
        """Call every listener of an event.

        Returns:
            True if at least one listener was called
        """
        # Copy so listeners may unsubscribe while we iterate
        listeners = list(self._listeners.get(event, []))
        if not listeners:
            logger.debug(f"No listeners for event: {event}")
            return False

        for listener in listeners:
            listener(*args)
        return True

    def listener_count(self, event: str) -> int:
        """Number of listeners currently subscribed to an event."""
        return len(self._listeners.get(event, []))

    def remove_all_listeners(self, event: str | None = None) -> None:
        """Drop listeners for one event, or for every event."""
        if event is None:
            self._listeners = {}
        else:
            self._listeners.pop(event, None)
