"""Build selection documents (fragments) from value trees.

The selected fields follow the keys present in the value tree, not the full
schema, so a write touches exactly what the operator filled in. Documents are
assembled as graphql-core AST nodes and printed with ``print_ast``, which
keeps the output text deterministic.
"""

from __future__ import annotations

from typing import Any, cast

from graphql import print_ast
from graphql.language.ast import (
    DocumentNode,
    FieldNode,
    FragmentDefinitionNode,
    InlineFragmentNode,
    NamedTypeNode,
    NameNode,
    SelectionNode,
    SelectionSetNode,
)

from cachescope.commands.schema.types import (
    EnumType,
    FieldDef,
    InputObjectType,
    InterfaceType,
    ObjectType,
    ParsedSchema,
    ScalarType,
    TypeRef,
    UnionType,
    get_base_type_name,
    is_list,
)
from cachescope.config import DepthLimits
from cachescope.helpers.naming import is_graphql_name, mock_fragment_name

DOCUMENT_MAX_DEPTH = DepthLimits.document_max_depth
SCHEMALESS_FRAGMENT_NAME = "CacheEdit"

REF_KEY = "__ref"


def build_selection_document(
    type_name: str,
    value_tree: dict[str, Any],
    schema: ParsedSchema,
    fragment_name: str | None = None,
    max_depth: int = DOCUMENT_MAX_DEPTH,
) -> str:
    """Return ``fragment <Name> on <type_name> { ... }`` selecting the keys of *value_tree*.

    If *type_name* is unknown or declares no fields, the fragment selects
    only ``__typename``.

    >>> build_selection_document("User", {"id": "1"}, schema)  # doctest: +SKIP
    'fragment UserMock on User {\\n  id\\n}'
    """
    name = fragment_name or mock_fragment_name(type_name)
    field_defs = schema.fields_of(type_name)

    selections: list[SelectionNode] = []
    if field_defs:
        selections = _build_selections(
            value_tree, field_defs, schema, frozenset(), 0, max(max_depth, 0)
        )

    return _print_fragment(name, type_name, selections)


def build_fragment_data(form_data: dict[str, Any], type_name: str) -> dict[str, Any]:
    """Write payload matching a built fragment: the form data tagged with its type."""
    return {"__typename": type_name, **form_data}


def build_schemaless_document(
    type_name: str,
    data: dict[str, Any],
    max_depth: int = DOCUMENT_MAX_DEPTH,
) -> str | None:
    """Build a fragment from the shape of a raw cache record alone.

    Used when a cache entry is edited by hand and no schema is loaded.
    Inline objects (and the first element of lists of objects) are nested
    by their own keys; references are selected bare. Returns None if no key
    is selectable.
    """
    selections = _shape_selections(data, 0, max_depth)
    if not selections:
        return None
    return _print_fragment(SCHEMALESS_FRAGMENT_NAME, type_name, selections)


# -- Schema-driven selection --------------------------------------------------


def _build_selections(
    data: dict[str, Any],
    field_defs: list[FieldDef],
    schema: ParsedSchema,
    visited: frozenset[str],
    depth: int,
    max_depth: int,
) -> list[SelectionNode]:
    """Selections for one level of the value tree, in the tree's key order."""
    by_name = {f.name: f for f in field_defs}
    selections: list[SelectionNode] = []

    for key, value in data.items():
        if key == "__typename" or not is_graphql_name(key):
            continue

        field_def = by_name.get(key)
        if field_def is None:
            selections.append(_field(key))
            continue

        base_name = get_base_type_name(field_def.type)
        base_type = schema.get(base_name)
        if base_type is None or isinstance(base_type, (ScalarType, EnumType)):
            selections.append(_field(key))
            continue

        if depth >= max_depth or base_name in visited:
            selections.append(_field(key))
            continue

        sample = _sample_object(value, field_def.type)

        if isinstance(base_type, (UnionType, InterfaceType)):
            concrete_name = sample.get("__typename") if sample else None
            concrete_fields = (
                schema.fields_of(concrete_name) if isinstance(concrete_name, str) else []
            )
            if sample is None or not concrete_fields:
                selections.append(_field(key))
                continue
            nested = _build_selections(
                sample,
                concrete_fields,
                schema,
                visited | {base_name, cast(str, concrete_name)},
                depth + 1,
                max_depth,
            )
            fragment = InlineFragmentNode(
                type_condition=NamedTypeNode(name=NameNode(value=concrete_name)),
                selection_set=_selection_set(nested),
            )
            selections.append(_field(key, [fragment]))
            continue

        if isinstance(base_type, (ObjectType, InputObjectType)):
            if sample is None:
                selections.append(_field(key))
                continue
            nested = _build_selections(
                sample,
                base_type.fields,
                schema,
                visited | {base_name},
                depth + 1,
                max_depth,
            )
            selections.append(_field(key, nested))
            continue

        selections.append(_field(key))

    return selections


def _sample_object(value: Any, type_ref: TypeRef) -> dict[str, Any] | None:
    """The inline object that stands for a field's shape, if there is one.

    For list fields only the first element is looked at: the sub-selection
    applies to every element at read time. References carry no shape.
    """
    if is_list(type_ref):
        if not isinstance(value, list) or not value:
            return None
        value = cast(list[Any], value)[0]
    if not isinstance(value, dict) or REF_KEY in value:
        return None
    return cast(dict[str, Any], value)


# -- Shape-only selection -----------------------------------------------------


def _shape_selections(data: dict[str, Any], depth: int, max_depth: int) -> list[SelectionNode]:
    selections: list[SelectionNode] = []
    for key, value in data.items():
        if key == "__typename" or not is_graphql_name(key):
            continue

        sample: Any = value
        if isinstance(value, list) and value:
            sample = cast(list[Any], value)[0]

        if isinstance(sample, dict) and REF_KEY not in sample and depth < max_depth:
            nested = _shape_selections(cast(dict[str, Any], sample), depth + 1, max_depth)
            if nested:
                selections.append(_field(key, nested))
                continue

        selections.append(_field(key))
    return selections


# -- AST helpers --------------------------------------------------------------


def _field(name: str, children: list[SelectionNode] | None = None) -> FieldNode:
    if children is None:
        return FieldNode(name=NameNode(value=name))
    return FieldNode(name=NameNode(value=name), selection_set=_selection_set(children))


def _selection_set(selections: list[SelectionNode]) -> SelectionSetNode:
    """Selection set node; an empty set falls back to ``__typename`` so the document parses."""
    if not selections:
        selections = [_field("__typename")]
    return SelectionSetNode(selections=tuple(selections))


def _print_fragment(name: str, type_name: str, selections: list[SelectionNode]) -> str:
    fragment = FragmentDefinitionNode(
        name=NameNode(value=name),
        type_condition=NamedTypeNode(name=NameNode(value=type_name)),
        selection_set=_selection_set(selections),
    )
    return print_ast(DocumentNode(definitions=(fragment,)))
