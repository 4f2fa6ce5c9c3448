"""Remote Bridge - command dispatch between a connector and pluggable addons.

Key concepts:
- Connector: external transport that carries JSON text both ways
- Command: inbound object tagged by `type`, optionally batched in an array
- Addon: supplies one handler per command type and reacts to lifecycle events
- Remote: the dispatcher tying them together and sending replies/messages
"""

from .addons import CommandHandler, HandlerRegistry, RemoteAddon, VisitGlobalAddon, visit_object
from .config import DispatchPolicy, RemoteConfig
from .connector import Connector, ConnectorEventName, Subscription
from .errors import (
    DuplicateHandlerError,
    InvalidCommandError,
    RemoteError,
    UnknownCommandTypeError,
    VisitPathError,
)
from .protocol import Command, MethodCallStep, OutboundMessage, Reply, ReplyableCommand
from .remote import CommandOutcome, DispatchResult, Remote

__all__ = [
    # Dispatcher
    "Remote",
    "DispatchResult",
    "CommandOutcome",
    # Configuration
    "RemoteConfig",
    "DispatchPolicy",
    # Connector contract
    "Connector",
    "ConnectorEventName",
    "Subscription",
    # Addons
    "RemoteAddon",
    "CommandHandler",
    "HandlerRegistry",
    "VisitGlobalAddon",
    "visit_object",
    # Protocol
    "Command",
    "ReplyableCommand",
    "MethodCallStep",
    "Reply",
    "OutboundMessage",
    # Errors
    "RemoteError",
    "DuplicateHandlerError",
    "UnknownCommandTypeError",
    "InvalidCommandError",
    "VisitPathError",
]
