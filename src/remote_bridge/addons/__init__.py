"""Addon system for the remote dispatcher."""

from .base import CommandHandler, HandlerRegistry, RemoteAddon
from .visit import VisitGlobalAddon, serialize_result, visit_object

__all__ = [
    "CommandHandler",
    "HandlerRegistry",
    "RemoteAddon",
    "VisitGlobalAddon",
    "serialize_result",
    "visit_object",
]
