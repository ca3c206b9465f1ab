"""Synthesize default values for schema types.

Every object value carries a ``__typename`` discriminator. Lists always start
empty; an item is only synthesized when the caller appends one. Cyclic type
graphs are cut by the visited-name set and the depth bound, both passed down
the call stack.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any

from cachescope.commands.schema.types import (
    NON_NULL,
    EnumType,
    FieldDef,
    InputObjectType,
    InterfaceType,
    ObjectType,
    ParsedSchema,
    ParsedType,
    ScalarType,
    TypeRef,
    UnionType,
    get_base_type_name,
    is_list,
    unwrap_list,
)
from cachescope.config import DepthLimits

FORM_MAX_DEPTH = DepthLimits.form_max_depth
ITEM_MAX_DEPTH = DepthLimits.item_max_depth

NIL_UUID = "00000000-0000-0000-0000-000000000000"


def _today() -> str:
    return date.today().isoformat()


def _now() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


# Values, or zero-arg callables for the time-dependent scalars
_SCALAR_DEFAULTS: dict[str, Any] = {
    "String": "",
    "Int": 0,
    "Float": 0.0,
    "Boolean": False,
    "ID": "",
    "Date": _today,
    "DateTime": _now,
    "Time": "12:00:00",
    "JSON": "{}",
    "JSONObject": "{}",
    "BigInt": 0,
    "Long": 0,
    "Decimal": "0.00",
    "URL": "https://example.com",
    "URI": "https://example.com",
    "Email": "user@example.com",
    "UUID": NIL_UUID,
}


def scalar_default(type_name: str) -> Any:
    """Default for a scalar by name; unknown scalars default to ``""``."""
    value = _SCALAR_DEFAULTS.get(type_name, "")
    if callable(value):
        return value()
    return value


def synthesize_default(
    type_ref: TypeRef,
    schema: ParsedSchema,
    visited: frozenset[str] = frozenset(),
    depth: int = 0,
    max_depth: int = FORM_MAX_DEPTH,
) -> Any:
    """Return a structurally valid default value for *type_ref*.

    NON_NULL is transparent and lists are always ``[]``. A base type missing
    from the schema is treated as a scalar of that name.
    """
    max_depth = max(max_depth, 0)

    if type_ref.kind == NON_NULL and type_ref.of_type is not None:
        return synthesize_default(type_ref.of_type, schema, visited, depth, max_depth)

    if is_list(type_ref):
        return []

    base_name = get_base_type_name(type_ref)
    parsed = schema.get(base_name)
    if parsed is None:
        return scalar_default(base_name)

    return synthesize_for_type(parsed, schema, visited, depth, max_depth)


def synthesize_for_type(
    parsed: ParsedType,
    schema: ParsedSchema,
    visited: frozenset[str] = frozenset(),
    depth: int = 0,
    max_depth: int = FORM_MAX_DEPTH,
) -> Any:
    """Default value for an already-resolved named type."""
    max_depth = max(max_depth, 0)

    if isinstance(parsed, ScalarType):
        return scalar_default(parsed.name)

    if isinstance(parsed, EnumType):
        return parsed.values[0].name if parsed.values else ""

    if isinstance(parsed, (ObjectType, InputObjectType)):
        if parsed.name in visited or depth >= max_depth:
            return None
        next_visited = visited | {parsed.name}
        obj: dict[str, Any] = {"__typename": parsed.name}
        for field_def in parsed.fields:
            if field_def.name == "__typename":
                continue
            obj[field_def.name] = synthesize_default(
                field_def.type, schema, next_visited, depth + 1, max_depth
            )
        return obj

    if isinstance(parsed, (InterfaceType, UnionType)):
        if not parsed.possible_types:
            return None
        first = schema.get(parsed.possible_types[0])
        if first is None:
            return None
        # Picking a member is not a traversal step
        return synthesize_for_type(first, schema, visited, depth, max_depth)

    return None


def build_empty_form_data(
    fields: list[FieldDef],
    schema: ParsedSchema,
    max_depth: int = FORM_MAX_DEPTH,
) -> dict[str, Any]:
    """One default per field, each from a fresh traversal."""
    data: dict[str, Any] = {}
    for field_def in fields:
        if field_def.name == "__typename":
            continue
        data[field_def.name] = synthesize_default(field_def.type, schema, max_depth=max_depth)
    return data


def synthesize_list_item(
    list_ref: TypeRef,
    schema: ParsedSchema,
    visited: frozenset[str] = frozenset(),
    depth: int = 0,
    max_depth: int = ITEM_MAX_DEPTH,
) -> Any:
    """Default for one new element of a list field.

    Starts from the list's own *visited* set and *depth*; the element type
    is synthesized like any other field type.
    """
    element = unwrap_list(list_ref) or list_ref
    return synthesize_default(element, schema, visited, depth, max_depth)


def append_list_item(
    items: list[Any] | None,
    list_ref: TypeRef,
    schema: ParsedSchema,
    visited: frozenset[str] = frozenset(),
    depth: int = 0,
    max_depth: int = ITEM_MAX_DEPTH,
) -> list[Any]:
    """Return a copy of *items* with one synthesized element appended."""
    new_item = synthesize_list_item(list_ref, schema, visited, depth, max_depth)
    return [*(items or []), new_item]


def switch_union_member(
    type_name: str,
    schema: ParsedSchema,
    max_depth: int = FORM_MAX_DEPTH,
) -> dict[str, Any] | None:
    """Value for choosing *type_name* as the concrete member of a union/interface field."""
    if not type_name:
        return None
    fields = schema.fields_of(type_name)
    if not fields:
        return {"__typename": type_name}
    return {"__typename": type_name, **build_empty_form_data(fields, schema, max_depth)}
