"""Remote - the command dispatcher.

Owns a connector and a registry of addon-supplied handlers. Inbound
frames are parsed into commands and routed to exactly one handler;
connector lifecycle events are fanned out to every addon. Addons answer
through reply() and send_message().
"""

from __future__ import annotations

import builtins
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from .addons import CommandHandler, HandlerRegistry, RemoteAddon, VisitGlobalAddon
from .config import DispatchPolicy, RemoteConfig
from .connector import Connector, ConnectorEventName, Subscription
from .errors import UnknownCommandTypeError
from .protocol import OutboundMessage, Reply, parse_payload, to_command

logger = logging.getLogger(__name__)


@dataclass
class CommandOutcome:
    """Result of dispatching one command of a frame."""

    command_type: str | None  # None if the element had no usable type
    ok: bool
    error: Exception | None = None


@dataclass
class DispatchResult:
    """Per-command outcomes of one inbound frame, in frame order."""

    outcomes: list[CommandOutcome] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(outcome.ok for outcome in self.outcomes)

    @property
    def failures(self) -> list[CommandOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.ok]


class Remote:
    """Dispatches connector traffic to addons.

    Usage:
        remote = Remote(connector)
        remote.add_addon(MyAddon())
        ...
        remote.dispose()

    Inbound frames are JSON: one command object, or an array of them
    processed strictly in order. Each command is routed by its `type`
    to the single handler registered for it.

    Failures:
        With DispatchPolicy.ABORT_BATCH (the default) the first failing
        command or addon callback raises out of the call and the rest of
        the batch is dropped. With DispatchPolicy.ISOLATE each failure is
        logged, recorded in the DispatchResult and optionally reported to
        the peer via send_error(), and processing continues.

    Lifecycle:
        Active from construction until dispose(). The connector itself is
        never opened or closed by the dispatcher.
    """

    def __init__(
        self,
        connector: Connector,
        config: RemoteConfig | None = None,
        root: Any = builtins,
    ) -> None:
        """Subscribe to the connector and install the built-in addon.

        Args:
            connector: Transport to listen on and send through
            config: Dispatch options (default: read from environment)
            root: Root object for visit-global commands
        """
        self._connector = connector
        self._config = config if config is not None else RemoteConfig.from_env()
        self._registry = HandlerRegistry()
        self._addons: list[RemoteAddon] = []
        self._disposed = False

        self._subscriptions: list[Subscription] = [
            connector.subscribe(ConnectorEventName.MESSAGE, self._handle_message),
            connector.subscribe(ConnectorEventName.OPEN, self._handle_open),
            connector.subscribe(ConnectorEventName.CLOSE, self._handle_close),
            connector.subscribe(ConnectorEventName.ERROR, self._handle_error),
        ]

        self.add_addon(VisitGlobalAddon(root))

    @property
    def connector(self) -> Connector:
        return self._connector

    @property
    def config(self) -> RemoteConfig:
        return self._config

    @property
    def addons(self) -> tuple[RemoteAddon, ...]:
        """Installed addons, in installation order."""
        return tuple(self._addons)

    @property
    def handler_types(self) -> tuple[str, ...]:
        """Command types that currently have a handler."""
        return self._registry.command_types()

    @property
    def disposed(self) -> bool:
        return self._disposed

    # =========================================================================
    # Addons
    # =========================================================================

    def add_addon(self, *addons: RemoteAddon) -> None:
        """Install addons in argument order and register their handlers.

        Registration is fail-fast: handlers registered before a collision
        stay registered.

        Raises:
            DuplicateHandlerError: If a handler claims an already claimed type
        """
        for addon in addons:
            self._addons.append(addon)
            handlers: list[CommandHandler] = addon.use(self)
            for handler in handlers:
                self._registry.register(handler)
            logger.info(f"Installed addon {addon.name} ({len(handlers)} handler(s))")

    # =========================================================================
    # Outbound
    # =========================================================================

    def reply(self, reply: Reply | Mapping[str, Any]) -> None:
        """Send a Reply to the peer. Fire-and-forget."""
        if not isinstance(reply, Reply):
            reply = Reply.model_validate(reply)
        self._connector.send(reply.to_json())

    def send_message(self, message: OutboundMessage | Mapping[str, Any]) -> None:
        """Send an uncorrelated message to the peer."""
        if not isinstance(message, OutboundMessage):
            message = OutboundMessage.model_validate(message)
        self._connector.send(message.to_json())

    def send_error(self, reason: str) -> None:
        """Send an error message to the peer."""
        self.send_message(OutboundMessage.error(reason))

    # =========================================================================
    # Inbound
    # =========================================================================

    def dispatch(self, payload: str | bytes) -> DispatchResult:
        """Parse an inbound frame and route each command to its handler.

        Args:
            payload: JSON text holding a command object or an array of them

        Returns:
            Outcome of every command that was processed

        Raises:
            json.JSONDecodeError: Malformed frame (ABORT_BATCH only)
            InvalidCommandError: Element without a string `type` (ABORT_BATCH only)
            UnknownCommandTypeError: No handler for a type (ABORT_BATCH only)
            Exception: Whatever a handler raised (ABORT_BATCH only)
        """
        result = DispatchResult()

        try:
            items = parse_payload(payload)
        except ValueError as e:
            if self._aborts_on_failure:
                raise
            self._report_failure("frame", e)
            result.outcomes.append(CommandOutcome(command_type=None, ok=False, error=e))
            return result

        for raw in items:
            command_type = raw.get("type") if isinstance(raw, dict) else None
            if not isinstance(command_type, str):
                command_type = None

            try:
                self._dispatch_one(raw)
            except Exception as e:
                if self._aborts_on_failure:
                    raise
                self._report_failure(f"command {command_type!r}", e)
                result.outcomes.append(CommandOutcome(command_type=command_type, ok=False, error=e))
                continue

            result.outcomes.append(CommandOutcome(command_type=command_type, ok=True))

        return result

    def _dispatch_one(self, raw: Any) -> None:
        command = to_command(raw)
        handler = self._registry.get(command.type)
        if handler is None:
            raise UnknownCommandTypeError(command.type)

        logger.debug(f"Dispatching command: {command.type}")
        handler.handle(command)

    @property
    def _aborts_on_failure(self) -> bool:
        return self._config.dispatch_policy is DispatchPolicy.ABORT_BATCH

    def _report_failure(self, what: str, error: Exception) -> None:
        """Log an isolated failure and forward it to the peer if configured."""
        logger.exception(f"Failed to process {what}: {error}")
        if self._config.report_errors:
            self.send_error(f"Failed to process {what}: {error}")

    def _handle_message(self, data: str | bytes) -> None:
        self.dispatch(data)

    # =========================================================================
    # Lifecycle fan-out
    # =========================================================================

    def _fan_out(self, event: str, notify: Callable[[RemoteAddon], None]) -> None:
        for addon in list(self._addons):
            try:
                notify(addon)
            except Exception as e:
                if self._aborts_on_failure:
                    raise
                logger.exception(f"Addon {addon.name} failed on {event}: {e}")

    def _handle_open(self, *_: Any) -> None:
        logger.debug("Connector opened")
        self._fan_out("open", lambda addon: addon.handle_open())

    def _handle_error(self, error: Any = None) -> None:
        logger.debug(f"Connector error: {error!r}")
        self._fan_out("error", lambda addon: addon.handle_error(error))

    def _handle_close(self, *_: Any) -> None:
        logger.debug("Connector closed")
        self._fan_out("close", lambda addon: addon.handle_close())

    # =========================================================================
    # Disposal
    # =========================================================================

    def dispose(self) -> None:
        """Detach from the connector and drop all addons and handlers.

        Does not close the connector. Calling it again has no effect.
        """
        if self._disposed:
            return

        for subscription in self._subscriptions:
            subscription.release()
        self._subscriptions.clear()
        self._addons.clear()
        self._registry.clear()
        self._disposed = True
        logger.info("Remote disposed")
