"""Error taxonomy for the dispatcher.

Every error raised by the bridge derives from RemoteError so callers
can catch the whole family in one place. These are local failures:
what the remote peer sees is only what an addon sends via send_error().
"""

from __future__ import annotations


class RemoteError(Exception):
    """Base class for all remote bridge errors."""


class DuplicateHandlerError(RemoteError):
    """Raised when two handlers claim the same command type.

    This is a configuration error: the addon installation sequence
    must be corrected. The first registered handler stays in place.
    """

    def __init__(self, command_type: str) -> None:
        self.command_type = command_type
        super().__init__(f"Handler already registered for command type: {command_type}")


class UnknownCommandTypeError(RemoteError):
    """Raised when an inbound command has no registered handler."""

    def __init__(self, command_type: str) -> None:
        self.command_type = command_type
        super().__init__(f"No handler registered for command type: {command_type}")


class InvalidCommandError(RemoteError):
    """Raised when an inbound element is not a usable command object."""


class VisitPathError(RemoteError):
    """Raised when a method-call step targets a non-callable member."""

    def __init__(self, name: str, value_type: str) -> None:
        self.name = name
        self.value_type = value_type
        super().__init__(f"Member '{name}' of {value_type} is not callable")
