"""Base classes for remote addons.

Addons extend the dispatcher without modifying it:
- Supplying command handlers, one per command type
- Reacting to connector lifecycle events (open, error, close)
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ..errors import DuplicateHandlerError

if TYPE_CHECKING:
    from ..protocol import Command
    from ..remote import Remote

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandHandler:
    """Processor for a single command type.

    Attributes:
        for_type: The command `type` tag this handler claims
        handle: Called synchronously with the parsed command; the
            return value is ignored
    """

    for_type: str
    handle: Callable[[Command], Any]


class RemoteAddon(ABC):
    """Base class for all addons.

    Subclasses must implement use(). The lifecycle hooks default to
    doing nothing, so an addon overrides only the ones it cares about.
    Addons are notified in installation order and must not rely on any
    other ordering.
    """

    @property
    def name(self) -> str:
        """Display name used in logs."""
        return type(self).__name__

    @abstractmethod
    def use(self, remote: Remote) -> list[CommandHandler]:
        """Install the addon.

        Called once by Remote.add_addon(). The addon may keep the remote
        reference to reply or send messages later.

        Args:
            remote: The dispatcher the addon is installed into

        Returns:
            Handlers to register (may be empty)
        """

    def handle_open(self) -> None:
        """Called when the connector opens."""

    def handle_error(self, error: Any) -> None:
        """Called when the connector reports an error.

        Args:
            error: Whatever value the connector raised the event with
        """

    def handle_close(self) -> None:
        """Called when the connector closes."""


class HandlerRegistry:
    """Registry mapping command types to their single handler.

    Grows monotonically; the only way to shrink it is clear().
    """

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}

    def register(self, handler: CommandHandler) -> None:
        """Register a handler.

        Args:
            handler: Handler to register

        Raises:
            DuplicateHandlerError: If its command type is already claimed
        """
        if handler.for_type in self._handlers:
            raise DuplicateHandlerError(handler.for_type)

        self._handlers[handler.for_type] = handler
        logger.debug(f"Registered handler: {handler.for_type}")

    def get(self, command_type: str) -> CommandHandler | None:
        """Look up the handler for a command type."""
        return self._handlers.get(command_type)

    def clear(self) -> None:
        """Remove every handler."""
        self._handlers.clear()

    def command_types(self) -> tuple[str, ...]:
        """Registered command types, in registration order."""
        return tuple(self._handlers)

    def __contains__(self, command_type: object) -> bool:
        return command_type in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)

    def __iter__(self) -> Iterator[CommandHandler]:
        return iter(list(self._handlers.values()))
