"""Built-in visit-global addon.

Resolves a visit path against a root object and replies with the
serialized result. A visit path is a flat list of steps:

    "name"                          -> read attribute / mapping key
    {"name": "m", "args": [1, 2]}   -> call member m of the current value

Example:
    root = {"a": {"b": "value"}}
    visit_object(root, ["a", "b"])  # "value"
"""

from __future__ import annotations

import builtins
import json
import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from ..errors import VisitPathError
from ..protocol import CommandType, MethodCallStep, Reply, VisitGlobalCommand, VisitStep
from .base import CommandHandler, RemoteAddon

if TYPE_CHECKING:
    from ..protocol import Command
    from ..remote import Remote

logger = logging.getLogger(__name__)


def _member(value: Any, name: str) -> Any:
    """Look up `name` on the current value; None if absent.

    Mappings try the key first and fall back to attributes, so mapping
    methods stay reachable. Lists and tuples accept index steps ("0", "1").
    """
    if isinstance(value, Mapping) and name in value:
        return value[name]
    if _is_index_step(value, name):
        index = int(name)
        return value[index] if index < len(value) else None
    return getattr(value, name, None)


def _is_index_step(value: Any, name: str) -> bool:
    return (
        isinstance(value, Sequence)
        and not isinstance(value, str | bytes)
        and name.isascii()
        and name.isdigit()
    )


def visit_object(root: Any, path: Sequence[VisitStep | Mapping[str, Any]]) -> Any:
    """Resolve a visit path against a root object.

    Resolution stops as soon as the current value is None; the result is
    then "". A method-call step invokes the member with the current
    value as receiver. Only bound methods carry a receiver: a plain
    callable stored in a mapping is called with `args` alone and never
    sees the mapping it came from.

    Args:
        root: Object to start from
        path: Ordered steps; mappings are accepted in place of MethodCallStep

    Returns:
        The resolved value, or "" if it resolved to None

    Raises:
        VisitPathError: If a method-call step names a non-callable member
    """
    value = root
    for step in path:
        if value is None:
            break

        if isinstance(step, str):
            value = _member(value, step)
            continue

        call = step if isinstance(step, MethodCallStep) else MethodCallStep.model_validate(step)
        member = _member(value, call.name)
        if member is None:
            value = None
        elif not callable(member):
            raise VisitPathError(call.name, type(value).__name__)
        else:
            value = member(*call.args)

    return "" if value is None else value


def serialize_result(value: Any) -> str:
    """Serialize a visit result into reply data.

    Strings pass through; JSON-shaped values (numbers, booleans, lists,
    tuples, sets, mappings) become JSON; pydantic models dump themselves;
    everything else uses str().
    """
    if isinstance(value, str):
        return value
    if isinstance(value, BaseModel):
        return value.model_dump_json()
    if isinstance(value, bool | int | float | list | tuple | set | frozenset | Mapping):
        return json.dumps(_jsonable(value), default=str)
    return str(value)


def _jsonable(value: Any) -> Any:
    """Make containers JSON-encodable: sets become lists, odd keys become strings."""
    if isinstance(value, Mapping):
        return {_json_key(key): _jsonable(item) for key, item in value.items()}
    if isinstance(value, list | tuple | set | frozenset):
        return [_jsonable(item) for item in value]
    return value


def _json_key(key: Any) -> Any:
    if key is None or isinstance(key, str | int | float | bool):
        return key
    return str(key)


class VisitGlobalAddon(RemoteAddon):
    """Handles visit-global commands against an injected root object.

    Args:
        root: Object visit paths start from. Defaults to the builtins
            module, the interpreter's global namespace.
    """

    def __init__(self, root: Any = builtins) -> None:
        self._root = root

    @property
    def root(self) -> Any:
        return self._root

    def use(self, remote: Remote) -> list[CommandHandler]:
        def handle(command: Command) -> None:
            visit = VisitGlobalCommand.model_validate(command.model_dump(by_alias=True))
            path = visit.visit_path
            logger.debug(f"visit-global {visit.reply_id}: {len(path)} step(s)")

            result = visit_object(self._root, path)
            remote.reply(Reply(reply_id=visit.reply_id, data=serialize_result(result)))

        return [CommandHandler(for_type=CommandType.VISIT_GLOBAL.value, handle=handle)]
