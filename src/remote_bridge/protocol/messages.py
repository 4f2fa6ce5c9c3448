"""Outbound message definitions for the protocol layer.

Two shapes leave the dispatcher:
- Reply: correlated answer to a replyable command, keyed by `replyId`
- OutboundMessage: dispatcher-initiated notification, keyed by `subject`

`data` is always a pre-serialized string and is never interpreted here.

Example (reply):
    {"replyId": "r1", "data": "value"}

Example (message):
    {"subject": "error", "data": "boom"}
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class MessageSubject(str, Enum):
    """Reserved message subjects."""

    ERROR = "error"  # Failure reported to the remote peer


class Reply(BaseModel):
    """A correlated response to a replyable command."""

    model_config = ConfigDict(populate_by_name=True)

    reply_id: str = Field(alias="replyId")
    data: str

    def to_json(self) -> str:
        """Serialize using wire field names."""
        return self.model_dump_json(by_alias=True)


class OutboundMessage(BaseModel):
    """A notification sent to the remote peer outside any reply."""

    subject: str
    data: str

    def is_error(self) -> bool:
        """Check if this is an error message."""
        return self.subject == MessageSubject.ERROR.value

    def to_json(self) -> str:
        """Serialize to JSON."""
        return self.model_dump_json()

    @classmethod
    def error(cls, reason: str) -> OutboundMessage:
        """Create an error message."""
        return cls(subject=MessageSubject.ERROR.value, data=reason)
