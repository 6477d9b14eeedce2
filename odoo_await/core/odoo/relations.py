"""Many2many / one2many field encoding.

Odoo writes relational fields through lists of positional command tuples
``(tag, id, payload)``:

    0 create   (0, 0, values)    create a record and link it
    1 update   (1, id, values)   update a linked record
    2 delete   (2, id, 0)        unlink and delete the record
    3 remove   (3, id, 0)        unlink, keep the record
    4 add      (4, id, 0)        link an existing record
    5 clear    (5, 0, 0)         unlink everything
    6 replace  (6, 0, ids)       replace the whole set

Callers describe the change either with a dict carrying an ``action`` key,

    {"category_id": {"action": "add", "id": [2, 5]}}

or with the typed commands defined here,

    {"category_id": Add([2, 5])}

and ``encode_fields`` turns both into the tuple encoding. A bare list or tuple of IDs
is shorthand for ``Replace``.
"""
from __future__ import annotations
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from .exceptions import RelationCommandError

CREATE = 0
UPDATE = 1
DELETE = 2
REMOVE = 3
ADD = 4
CLEAR = 5
REPLACE = 6

IdList = Union[int, List[int]]


class RelationCommand:
    """Base class of the closed set of relation commands."""
    action: str = ""


@dataclass(frozen=True)
class Create(RelationCommand):
    value: Union[Dict[str, Any], List[Dict[str, Any]], None] = None
    action = "create"


@dataclass(frozen=True)
class Update(RelationCommand):
    id: Optional[int] = None
    value: Optional[Dict[str, Any]] = None
    action = "update"


@dataclass(frozen=True)
class Add(RelationCommand):
    id: Optional[IdList] = None
    action = "add"


@dataclass(frozen=True)
class Remove(RelationCommand):
    id: Optional[IdList] = None
    action = "remove"


@dataclass(frozen=True)
class Delete(RelationCommand):
    id: Optional[IdList] = None
    action = "delete"


@dataclass(frozen=True)
class Clear(RelationCommand):
    action = "clear"


@dataclass(frozen=True)
class Replace(RelationCommand):
    id: Optional[IdList] = None
    action = "replace"


COMMANDS = {
    "create": Create,
    "update": Update,
    "add": Add,
    "remove": Remove,
    "delete": Delete,
    "clear": Clear,
    "replace": Replace,
}


def is_relation_command(value: Any) -> bool:
    """Return True for typed commands and dicts carrying an ``action`` key."""
    if isinstance(value, RelationCommand):
        return True
    return isinstance(value, Mapping) and "action" in value


def parse_command(key: str, raw: Mapping[str, Any]) -> RelationCommand:
    """Build a typed command from its dict form.

    Args:
        key: Field name, used in error messages
        raw: Dict with ``action`` and optionally ``id`` / ``value``

    Raises:
        RelationCommandError: If the action is unknown
    """
    action = raw.get("action")
    command_cls = COMMANDS.get(action) if isinstance(action, str) else None
    if command_cls is None:
        raise RelationCommandError(
            key, f"unknown action {action!r}; expected one of {', '.join(sorted(COMMANDS))}"
        )
    if command_cls is Create:
        return Create(value=raw.get("value"))
    if command_cls is Update:
        return Update(id=raw.get("id"), value=raw.get("value"))
    if command_cls is Clear:
        return Clear()
    return command_cls(id=raw.get("id"))


def _is_id(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _id_list(key: str, command: RelationCommand, message: str) -> List[int]:
    ids = command.id
    if ids is None:
        raise RelationCommandError(key, message)
    if _is_id(ids):
        return [ids]
    if isinstance(ids, (list, tuple)) and all(_is_id(item) for item in ids):
        return list(ids)
    raise RelationCommandError(key, f"'{command.action}' ids must be an integer or a list of integers, got {ids!r}")


def encode_command(key: str, command: RelationCommand) -> List[list]:
    """Translate one relation command into Odoo command tuples.

    Args:
        key: Field name, used in error messages
        command: Typed relation command

    Returns:
        List of ``[tag, id, payload]`` lists

    Raises:
        RelationCommandError: If required ``id`` / ``value`` is missing or malformed
    """
    if isinstance(command, Create):
        values = command.value
        if values is None:
            raise RelationCommandError(key, "'create' action requires a value object or a list of value objects")
        if isinstance(values, Mapping):
            values = [values]
        if not isinstance(values, (list, tuple)) or not all(isinstance(item, Mapping) for item in values):
            raise RelationCommandError(key, "'create' values must be objects")
        return [[CREATE, 0, dict(item)] for item in values]

    if isinstance(command, Update):
        if command.id is None or command.value is None:
            raise RelationCommandError(key, "'update' action requires both an ID number and a value object")
        if not _is_id(command.id):
            raise RelationCommandError(key, f"'update' id must be a single integer, got {command.id!r}")
        if not isinstance(command.value, Mapping):
            raise RelationCommandError(key, "'update' value must be an object")
        return [[UPDATE, command.id, dict(command.value)]]

    if isinstance(command, Add):
        ids = _id_list(key, command, "'add' action requires an ID or list of IDs to add to the set")
        return [[ADD, record_id, 0] for record_id in ids]

    if isinstance(command, Remove):
        ids = _id_list(key, command, "'remove' action requires an ID or list of IDs to remove from the set")
        return [[REMOVE, record_id, 0] for record_id in ids]

    if isinstance(command, Delete):
        ids = _id_list(key, command, "'delete' action requires an ID or list of IDs to delete")
        return [[DELETE, record_id, 0] for record_id in ids]

    if isinstance(command, Clear):
        return [[CLEAR, 0, 0]]

    if isinstance(command, Replace):
        ids = _id_list(key, command, "'replace' action requires an ID or list of IDs for the new set")
        return [[REPLACE, 0, ids]]

    raise RelationCommandError(key, f"unsupported relation command {type(command).__name__}")


def encode_fields(fields: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Return a copy of ``fields`` with relational values in tuple encoding.

    Scalars and nested objects pass through untouched. The caller's mapping
    is never modified.

    Raises:
        RelationCommandError: On the first malformed command; nothing is sent
    """
    encoded: Dict[str, Any] = {}
    for key, value in (fields or {}).items():
        if isinstance(value, RelationCommand):
            encoded[key] = encode_command(key, value)
        elif is_relation_command(value):
            encoded[key] = encode_command(key, parse_command(key, value))
        elif isinstance(value, (list, tuple)):
            encoded[key] = [[REPLACE, 0, list(value)]]
        else:
            encoded[key] = value
    return encoded
