"""Tests for the addon base classes and handler registry."""

from __future__ import annotations

import pytest

from remote_bridge import CommandHandler, DuplicateHandlerError, HandlerRegistry, RemoteAddon


def noop(command):
    pass


class MinimalAddon(RemoteAddon):
    """Addon implementing only use()."""

    def use(self, remote):
        return []


class TestRemoteAddon:
    """Test the addon base class."""

    def test_use_is_abstract(self):
        """RemoteAddon cannot be instantiated directly."""
        with pytest.raises(TypeError):
            RemoteAddon()

    def test_lifecycle_hooks_default_to_noop(self):
        """Unimplemented hooks do nothing."""
        addon = MinimalAddon()

        assert addon.handle_open() is None
        assert addon.handle_error(RuntimeError("x")) is None
        assert addon.handle_close() is None

    def test_name_defaults_to_class_name(self):
        """name is used in logs."""
        assert MinimalAddon().name == "MinimalAddon"


class TestHandlerRegistry:
    """Test handler registration."""

    def test_register_and_get(self):
        """Registered handlers are found by type."""
        registry = HandlerRegistry()
        handler = CommandHandler(for_type="a", handle=noop)

        registry.register(handler)

        assert registry.get("a") is handler
        assert "a" in registry
        assert len(registry) == 1

    def test_get_unknown(self):
        """Unknown types return None."""
        assert HandlerRegistry().get("nope") is None

    def test_duplicate_raises_and_keeps_first(self):
        """A second handler for a type is rejected."""
        registry = HandlerRegistry()
        first = CommandHandler(for_type="a", handle=noop)
        registry.register(first)

        with pytest.raises(DuplicateHandlerError) as exc_info:
            registry.register(CommandHandler(for_type="a", handle=lambda c: None))

        assert exc_info.value.command_type == "a"
        assert registry.get("a") is first

    def test_command_types_in_order(self):
        """command_types() follows registration order."""
        registry = HandlerRegistry()
        for command_type in ("z", "a", "m"):
            registry.register(CommandHandler(for_type=command_type, handle=noop))

        assert registry.command_types() == ("z", "a", "m")
        assert [h.for_type for h in registry] == ["z", "a", "m"]

    def test_clear(self):
        """clear() empties the registry and allows re-registration."""
        registry = HandlerRegistry()
        registry.register(CommandHandler(for_type="a", handle=noop))

        registry.clear()
        registry.register(CommandHandler(for_type="a", handle=noop))

        assert len(registry) == 1
