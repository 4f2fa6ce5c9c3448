"""Command definitions for the protocol layer.

Commands are inbound requests from the remote peer. Each command is a
JSON object tagged by `type`; every other field is handler-specific and
kept as-is. A single inbound frame may carry one command or an array
of commands.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..errors import InvalidCommandError


class CommandType(str, Enum):
    """Command types handled by built-in addons."""

    VISIT_GLOBAL = "visit-global"


class Command(BaseModel):
    """A command from the remote peer.

    Only `type` is interpreted by the dispatcher. Extra fields are
    preserved, so `model_dump()` gives back the inbound object.

    Example:
        {"type": "visit-global", "replyId": "r1", "path": ["a", "b"]}
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    type: str

    def get_field(self, key: str, default: Any = None) -> Any:
        """Get a payload field (declared or extra) with optional default."""
        if key in type(self).model_fields:
            return getattr(self, key)
        return (self.model_extra or {}).get(key, default)

    @classmethod
    def create(cls, command_type: str | CommandType, **payload: Any) -> Command:
        """Factory method for creating commands."""
        value = command_type.value if isinstance(command_type, CommandType) else command_type
        return cls(type=value, **payload)

    def to_json(self) -> str:
        """Serialize using wire field names."""
        return self.model_dump_json(by_alias=True)


class ReplyableCommand(Command):
    """A command that expects a Reply keyed by `replyId`.

    The dispatcher attaches no meaning to `replyId`; matching replies to
    requests is the caller's business.
    """

    reply_id: str = Field(alias="replyId")


class MethodCallStep(BaseModel):
    """Visit-path step that calls a member of the current value."""

    name: str
    args: list[Any] = Field(default_factory=list)


VisitStep = str | MethodCallStep


class VisitGlobalCommand(ReplyableCommand):
    """visit-global: resolve a visit path against the root object.

    The path is either an explicit `path` list, or numeric keys
    ("0", "1", ...) on the command itself, which is how array-shaped
    commands arrive on the wire.
    """

    type: str = CommandType.VISIT_GLOBAL.value
    path: list[VisitStep] | None = None

    @property
    def visit_path(self) -> list[VisitStep]:
        """Ordered visit steps."""
        if self.path is not None:
            return list(self.path)

        indexed = sorted(
            (int(key), value) for key, value in (self.model_extra or {}).items() if key.isdigit()
        )
        return [_to_step(value) for _, value in indexed]


def _to_step(value: Any) -> VisitStep:
    if isinstance(value, str):
        return value
    try:
        return MethodCallStep.model_validate(value)
    except ValidationError as e:
        raise InvalidCommandError(f"Invalid visit step: {value!r}") from e


def parse_payload(text: str | bytes) -> list[Any]:
    """Split an inbound frame into its ordered list of raw command objects.

    Raises:
        json.JSONDecodeError: If the frame is not valid JSON
    """
    decoded = json.loads(text)
    if isinstance(decoded, list):
        return decoded
    return [decoded]


def to_command(raw: Any) -> Command:
    """Validate one raw command object into a Command.

    Raises:
        InvalidCommandError: If it is not an object with a string `type`
    """
    if not isinstance(raw, dict):
        raise InvalidCommandError(f"Command must be a JSON object, got {type(raw).__name__}")
    try:
        return Command.model_validate(raw)
    except ValidationError as e:
        raise InvalidCommandError(f"Command needs a string 'type' field: {e}") from e
