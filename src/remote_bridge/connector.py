"""Connector contract.

A connector is the transport side of the bridge: it accepts outbound
text and raises inbound text plus lifecycle events. The dispatcher only
consumes this contract; concrete transports live elsewhere.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class ConnectorEventName(str, Enum):
    """Events a connector raises."""

    MESSAGE = "message"  # payload: str
    OPEN = "open"  # no payload
    CLOSE = "close"  # no payload
    ERROR = "error"  # payload: error value


class Connector(ABC):
    """Bidirectional text transport consumed by the dispatcher."""

    @abstractmethod
    def send(self, text: str) -> None:
        """Hand a fully serialized payload to the transport."""

    @abstractmethod
    def close(self) -> None:
        """Request transport teardown."""

    @abstractmethod
    def add_event_listener(self, event: str, callback: Callable[..., Any]) -> None:
        """Subscribe a callback to a connector event."""

    @abstractmethod
    def remove_event_listener(self, event: str, callback: Callable[..., Any]) -> None:
        """Unsubscribe a callback previously passed to add_event_listener."""

    def subscribe(
        self, event: str | ConnectorEventName, callback: Callable[..., Any]
    ) -> Subscription:
        """Subscribe and return an owned handle that undoes the subscription."""
        name = event.value if isinstance(event, ConnectorEventName) else event
        self.add_event_listener(name, callback)
        return Subscription(connector=self, event=name, callback=callback)


@dataclass
class Subscription:
    """Handle for one connector subscription.

    Holds the exact callback object that was registered, so release()
    removes precisely that registration.
    """

    connector: Connector
    event: str
    callback: Callable[..., Any]
    released: bool = field(default=False, init=False)

    def release(self) -> None:
        """Remove the subscription. Safe to call more than once."""
        if self.released:
            return
        self.connector.remove_event_listener(self.event, self.callback)
        self.released = True
        logger.debug(f"Released connector subscription: {self.event}")
