"""Convert an introspection result (or SDL) into a ParsedSchema.

The raw ``__schema`` payload is validated type by type with the pydantic
models in ``cachescope.formats.introspection``. A broken entry is dropped
rather than failing the whole load; only a missing ``__schema`` / ``types``
shape is fatal.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any, cast

from graphql import build_schema, introspection_from_schema
from graphql.error import GraphQLError
from pydantic import ValidationError

from cachescope.commands.schema.types import (
    ENUM,
    INPUT_OBJECT,
    INTERFACE,
    OBJECT,
    SCALAR,
    UNION,
    EnumType,
    EnumValue,
    FieldDef,
    InputObjectType,
    InterfaceType,
    ObjectType,
    ParsedSchema,
    ParsedType,
    ScalarType,
    TypeRef,
    UnionType,
)
from cachescope.formats.introspection import (
    IntrospectionField,
    IntrospectionSchema,
    IntrospectionType,
    IntrospectionTypeRef,
)

_SDL_SUFFIXES = frozenset({".graphql", ".graphqls", ".gql"})


class MalformedSchemaError(ValueError):
    """Raised when a payload does not have the introspection ``__schema`` shape."""


def parse_introspection(
    raw: Any,
    on_skip: Callable[[str], None] | None = None,
) -> ParsedSchema:
    """Build a ParsedSchema from a raw introspection result.

    Reflection types (``__Type`` etc.), unsupported kinds and entries that
    fail validation are left out. *on_skip* is called with a short message
    for each entry that could not be read.
    """
    if not isinstance(raw, dict) or "__schema" not in raw:
        raise MalformedSchemaError("Introspection result has no __schema object")
    raw_schema = cast(dict[str, Any], raw)["__schema"]
    if not isinstance(raw_schema, dict) or not isinstance(raw_schema.get("types"), list):
        raise MalformedSchemaError("Introspection __schema has no types array")

    try:
        schema_model = IntrospectionSchema.model_validate(raw_schema)
    except ValidationError as e:
        raise MalformedSchemaError(f"Invalid introspection __schema: {e}") from e

    types: dict[str, ParsedType] = {}
    for index, entry in enumerate(schema_model.types):
        try:
            type_model = IntrospectionType.model_validate(entry)
        except ValidationError as e:
            if on_skip:
                on_skip(f"types[{index}]: skipped malformed entry ({e.error_count()} errors)")
            continue

        if type_model.name.startswith("__"):
            continue
        if type_model.name in types:
            if on_skip:
                on_skip(f"types[{index}]: duplicate type {type_model.name} ignored")
            continue

        parsed = _build_type(type_model)
        if parsed is None:
            if on_skip:
                on_skip(f"types[{index}]: unsupported kind {type_model.kind} for {type_model.name}")
            continue
        types[parsed.name] = parsed

    return ParsedSchema(
        types=types,
        query_type=schema_model.query_type.name if schema_model.query_type else None,
        mutation_type=schema_model.mutation_type.name if schema_model.mutation_type else None,
        subscription_type=(
            schema_model.subscription_type.name if schema_model.subscription_type else None
        ),
    )


def load_introspection_json(
    data: Any,
    on_skip: Callable[[str], None] | None = None,
) -> ParsedSchema:
    """Parse introspection JSON, accepting the ``{"data": {...}}`` response envelope too."""
    if isinstance(data, dict) and "__schema" not in data and "data" in data:
        data = cast(dict[str, Any], data)["data"]
    return parse_introspection(data, on_skip=on_skip)


def load_sdl(sdl: str, on_skip: Callable[[str], None] | None = None) -> ParsedSchema:
    """Build a ParsedSchema from SDL text via graphql-core."""
    try:
        graphql_schema = build_schema(sdl)
    except (GraphQLError, TypeError) as e:
        raise MalformedSchemaError(f"Invalid SDL: {e}") from e
    return parse_introspection(introspection_from_schema(graphql_schema), on_skip=on_skip)


def load_schema_file(
    path: str | Path,
    on_skip: Callable[[str], None] | None = None,
) -> ParsedSchema:
    """Load a schema from disk: SDL for ``.graphql``/``.gql`` files, introspection JSON otherwise."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise MalformedSchemaError(f"{path.name} is not UTF-8 text: {e}") from e
    if path.suffix.lower() in _SDL_SUFFIXES:
        return load_sdl(text, on_skip=on_skip)
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedSchemaError(f"{path.name} is not valid JSON: {e}") from e
    return load_introspection_json(data, on_skip=on_skip)


def _build_type(model: IntrospectionType) -> ParsedType | None:
    """Map one validated introspection type to its ParsedType variant."""
    if model.kind == SCALAR:
        return ScalarType(name=model.name, description=model.description)

    if model.kind == ENUM:
        return EnumType(
            name=model.name,
            description=model.description,
            values=[
                EnumValue(
                    name=v.name,
                    description=v.description,
                    is_deprecated=bool(v.is_deprecated),
                )
                for v in model.enum_values or []
            ],
        )

    if model.kind == OBJECT:
        return ObjectType(
            name=model.name,
            description=model.description,
            fields=_map_fields(model.fields),
            interfaces=[i.name for i in model.interfaces or []],
        )

    if model.kind == INTERFACE:
        return InterfaceType(
            name=model.name,
            description=model.description,
            fields=_map_fields(model.fields),
            possible_types=[t.name for t in model.possible_types or []],
        )

    if model.kind == UNION:
        return UnionType(
            name=model.name,
            description=model.description,
            possible_types=[t.name for t in model.possible_types or []],
        )

    if model.kind == INPUT_OBJECT:
        return InputObjectType(
            name=model.name,
            description=model.description,
            fields=_map_fields(model.input_fields),
        )

    return None


def _map_fields(fields: list[IntrospectionField] | None) -> list[FieldDef]:
    return [
        FieldDef(
            name=f.name,
            type=_map_type_ref(f.type),
            description=f.description,
            is_deprecated=bool(f.is_deprecated),
        )
        for f in fields or []
    ]


def _map_type_ref(ref: IntrospectionTypeRef) -> TypeRef:
    return TypeRef(
        kind=ref.kind,
        name=ref.name,
        of_type=_map_type_ref(ref.of_type) if ref.of_type else None,
    )
