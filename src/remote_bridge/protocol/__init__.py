"""Wire protocol for the remote bridge.

Defines the JSON envelopes exchanged over a connector:
- Commands: inbound objects tagged by `type`, alone or batched in an array
- Replies: outbound answers correlated by a caller-chosen `replyId`
- Messages: outbound notifications tagged by `subject`
"""

from .commands import (
    Command,
    CommandType,
    MethodCallStep,
    ReplyableCommand,
    VisitGlobalCommand,
    VisitStep,
    parse_payload,
    to_command,
)
from .messages import MessageSubject, OutboundMessage, Reply

__all__ = [
    "Command",
    "CommandType",
    "MethodCallStep",
    "ReplyableCommand",
    "VisitGlobalCommand",
    "VisitStep",
    "parse_payload",
    "to_command",
    "MessageSubject",
    "OutboundMessage",
    "Reply",
]
