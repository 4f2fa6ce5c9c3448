"""In-process connector for tests and demos.

TestRemoteConnector satisfies the Connector contract on top of an
EventEmitter and adds helpers that play the remote peer's part:

    connector = TestRemoteConnector()
    remote = Remote(connector)
    connector.open()
    connector.send_from_client('{"type": "visit-global", "replyId": "r1", "path": ["len"]}')
    connector.sent_objects  # [{"replyId": "r1", "data": "<built-in function len>"}]
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Any

from .connector import Connector, ConnectorEventName
from .emitter import EventEmitter

logger = logging.getLogger(__name__)

# Emitted with the parsed payload whenever the dispatcher sends something
OUTBOUND_EVENT = "outbound"


class TestRemoteConnector(EventEmitter, Connector):
    """Connector double driven entirely from the test."""

    # Not a test class, despite the name
    __test__ = False

    def __init__(self) -> None:
        super().__init__()
        self.sent: list[str] = []

    @property
    def sent_objects(self) -> list[Any]:
        """Outbound payloads, parsed."""
        return [json.loads(text) for text in self.sent]

    # Connector contract

    def add_event_listener(self, event: str, callback: Callable[..., Any]) -> None:
        self.on(event, callback)

    def remove_event_listener(self, event: str, callback: Callable[..., Any]) -> None:
        self.off(event, callback)

    def send(self, text: str) -> None:
        self.sent.append(text)
        self.emit(OUTBOUND_EVENT, json.loads(text))

    def close(self) -> None:
        self.emit(ConnectorEventName.CLOSE.value)

    # Peer-side helpers

    def open(self) -> None:
        """Simulate the transport opening."""
        self.emit(ConnectorEventName.OPEN.value)

    def fail(self, error: Any) -> None:
        """Simulate a transport error."""
        self.emit(ConnectorEventName.ERROR.value, error)

    def send_from_client(self, data: str) -> None:
        """Simulate an inbound frame from the peer."""
        logger.debug(f"Client frame: {data}")
        self.emit(ConnectorEventName.MESSAGE.value, data)
