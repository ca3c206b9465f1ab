"""Find, label and dereference entities in a normalized cache snapshot.

A snapshot maps cache IDs (``"User:1"``) to records. Links between records
are references, ``{"__ref": "<cache id>"}``; resolving one is a plain lookup.
Nothing here mutates the snapshot.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, cast

from cachescope.commands.schema.types import ParsedSchema

ROOT_QUERY = "ROOT_QUERY"
ROOT_MUTATION = "ROOT_MUTATION"
META_KEY = "__META"
REF_KEY = "__ref"

ROOT_KEYS = (ROOT_QUERY, ROOT_MUTATION)
_SKIPPED_KEYS = frozenset({ROOT_QUERY, ROOT_MUTATION, META_KEY})

# Checked in this order; the first present scalar wins
LABEL_PRIORITY_FIELDS = (
    "name",
    "title",
    "label",
    "displayName",
    "username",
    "email",
    "slug",
    "code",
)
_LABEL_EXCLUDED_KEYS = frozenset({"__typename", "id", REF_KEY})


@dataclass
class EntityOption:
    """A cache entry offered as a link target."""

    id: str
    record: dict[str, Any]
    label: str


def is_reference(value: Any) -> bool:
    return isinstance(value, dict) and isinstance(value.get(REF_KEY), str)


def entry_typename(cache_id: str, record: dict[str, Any]) -> str:
    """``__typename`` of a record, else the ID prefix before the first ``:``.

    A present but empty ``__typename`` is returned as is, so the entry
    matches no type.
    """
    typename = record.get("__typename")
    if isinstance(typename, str):
        return typename
    return cache_id.split(":", 1)[0] or "Unknown"


def label_entity(cache_id: str, record: dict[str, Any]) -> str:
    """Human-readable label for a cache entry.

    Tries the priority fields first, then up to two other scalar values in
    key order, and falls back to the bare cache ID.
    """
    for field_name in LABEL_PRIORITY_FIELDS:
        value = record.get(field_name)
        if _is_label_scalar(value):
            return f"{_display(value)} ({cache_id})"

    scalars: list[str] = []
    for key, value in record.items():
        if key in _LABEL_EXCLUDED_KEYS:
            continue
        if _is_label_scalar(value):
            scalars.append(_display(value))
            if len(scalars) >= 2:
                break

    if scalars:
        return f"{', '.join(scalars)} ({cache_id})"
    return cache_id


def list_entities_of_type(
    cache: dict[str, Any] | None,
    type_name: str,
    schema: ParsedSchema,
) -> list[EntityOption]:
    """All entries whose type is *type_name* or one of its possible types, sorted by label.

    Returns a new list on every call.
    """
    if not cache:
        return []

    accepted = {type_name, *schema.possible_types(type_name)}
    options: list[EntityOption] = []
    for cache_id, record in cache.items():
        if cache_id in _SKIPPED_KEYS or not isinstance(record, dict):
            continue
        record = cast(dict[str, Any], record)
        if entry_typename(cache_id, record) not in accepted:
            continue
        options.append(
            EntityOption(id=cache_id, record=record, label=label_entity(cache_id, record))
        )

    options.sort(key=lambda o: (o.label.casefold(), o.label))
    return options


def resolve_reference(cache: dict[str, Any] | None, ref: dict[str, Any] | str) -> dict[str, Any] | None:
    """Look up the record a reference (or bare cache ID) points at.

    Does not follow further references; see ``resolve_chain``.
    """
    if not cache:
        return None
    target = ref if isinstance(ref, str) else ref.get(REF_KEY)
    if not isinstance(target, str):
        return None
    record = cache.get(target)
    return cast(dict[str, Any], record) if isinstance(record, dict) else None


def resolve_chain(
    cache: dict[str, Any] | None,
    ref: dict[str, Any] | str,
    max_hops: int = 32,
) -> dict[str, Any] | None:
    """Follow references until a non-reference record is reached.

    Returns None for a dangling link, a cycle, or more than *max_hops* hops.
    """
    seen: set[str] = set()
    current: dict[str, Any] | str = ref
    for _ in range(max(max_hops, 1)):
        target = current if isinstance(current, str) else current.get(REF_KEY)
        if not isinstance(target, str) or target in seen:
            return None
        seen.add(target)
        record = resolve_reference(cache, target)
        if record is None or not is_reference(record):
            return record
        current = record
    return None


def root_entries(cache: dict[str, Any] | None) -> list[tuple[str, dict[str, Any]]]:
    """The ROOT_QUERY / ROOT_MUTATION entries present in the snapshot."""
    if not cache:
        return []
    return [
        (key, cast(dict[str, Any], cache[key]))
        for key in ROOT_KEYS
        if isinstance(cache.get(key), dict)
    ]


def group_entries(
    cache: dict[str, Any] | None,
    search: str | None = None,
) -> dict[str, list[tuple[str, dict[str, Any]]]]:
    """Non-root entries grouped by typename, sorted by typename then ID.

    *search* keeps entries whose ID, typename or serialized record contains
    it (case-insensitive); empty groups are dropped.
    """
    if not cache:
        return {}

    query = search.strip().lower() if search else ""
    rows: list[tuple[str, str, dict[str, Any]]] = []
    for cache_id, record in cache.items():
        if cache_id in _SKIPPED_KEYS or not isinstance(record, dict):
            continue
        record = cast(dict[str, Any], record)
        typename = entry_typename(cache_id, record) or "Unknown"
        if query and not (
            query in cache_id.lower()
            or query in typename.lower()
            or query in _serialized(record)
        ):
            continue
        rows.append((typename, cache_id, record))

    rows.sort(key=lambda r: (r[0], r[1]))
    groups: dict[str, list[tuple[str, dict[str, Any]]]] = {}
    for typename, cache_id, record in rows:
        groups.setdefault(typename, []).append((cache_id, record))
    return groups


def filter_entities(options: list[EntityOption], search: str | None) -> list[EntityOption]:
    """Entity picker search: match on cache ID or serialized record."""
    if not search or not search.strip():
        return list(options)
    query = search.strip().lower()
    return [o for o in options if query in o.id.lower() or query in _serialized(o.record)]


def _is_label_scalar(value: Any) -> bool:
    return value is not None and not isinstance(value, (dict, list))


def _display(value: Any) -> str:
    """Render a scalar the way the cache's JSON origin would print it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _serialized(record: dict[str, Any]) -> str:
    return json.dumps(record, ensure_ascii=False, default=str).lower()
