"""In-memory model of a GraphQL type system.

Two layers of types:
1. Type references: the recursive LIST / NON_NULL wrappers around a named type
2. Parsed types: one variant per named kind, keyed by name in a ParsedSchema

A ParsedSchema is built once by ingestion and then shared read-only by the
synthesizer, the selection document builder and the cache resolver.
"""

from __future__ import annotations

from dataclasses import dataclass, field

SCALAR = "SCALAR"
ENUM = "ENUM"
OBJECT = "OBJECT"
INTERFACE = "INTERFACE"
UNION = "UNION"
INPUT_OBJECT = "INPUT_OBJECT"
LIST = "LIST"
NON_NULL = "NON_NULL"

NAMED_KINDS = (SCALAR, ENUM, OBJECT, INTERFACE, UNION, INPUT_OBJECT)

# -- Type references ----------------------------------------------------------


@dataclass(frozen=True)
class TypeRef:
    """A field or argument type: a named type, or a LIST / NON_NULL wrapper."""

    kind: str
    name: str | None = None
    of_type: TypeRef | None = None

    @classmethod
    def named(cls, kind: str, name: str) -> TypeRef:
        return cls(kind=kind, name=name)

    @classmethod
    def non_null(cls, inner: TypeRef) -> TypeRef:
        return cls(kind=NON_NULL, of_type=inner)

    @classmethod
    def list_of(cls, inner: TypeRef) -> TypeRef:
        return cls(kind=LIST, of_type=inner)


def get_base_type_name(type_ref: TypeRef) -> str:
    """Unwrap LIST / NON_NULL wrappers and return the named type."""
    ref: TypeRef | None = type_ref
    while ref is not None:
        if ref.name:
            return ref.name
        ref = ref.of_type
    return "Unknown"


def is_non_null(type_ref: TypeRef) -> bool:
    return type_ref.kind == NON_NULL


def is_list(type_ref: TypeRef) -> bool:
    """True for ``[T]`` and ``[T]!``."""
    if type_ref.kind == LIST:
        return True
    if type_ref.kind == NON_NULL and type_ref.of_type is not None:
        return is_list(type_ref.of_type)
    return False


def unwrap_list(type_ref: TypeRef) -> TypeRef | None:
    """Return the element type of a (possibly non-null) list type."""
    if type_ref.kind == LIST:
        return type_ref.of_type
    if type_ref.kind == NON_NULL and type_ref.of_type is not None:
        return unwrap_list(type_ref.of_type)
    return None


def type_display_name(type_ref: TypeRef) -> str:
    """Render a type reference the way SDL spells it, e.g. ``[User!]!``."""
    if type_ref.kind == NON_NULL:
        inner = type_display_name(type_ref.of_type) if type_ref.of_type else "Unknown"
        return f"{inner}!"
    if type_ref.kind == LIST:
        inner = type_display_name(type_ref.of_type) if type_ref.of_type else "Unknown"
        return f"[{inner}]"
    return type_ref.name or "Unknown"


# -- Parsed types -------------------------------------------------------------


@dataclass
class FieldDef:
    """A field of an object, interface or input object type."""

    name: str
    type: TypeRef
    description: str | None = None
    is_deprecated: bool = False


@dataclass
class EnumValue:
    name: str
    description: str | None = None
    is_deprecated: bool = False


@dataclass
class ScalarType:
    name: str
    description: str | None = None
    kind: str = field(default=SCALAR, init=False)


@dataclass
class EnumType:
    name: str
    description: str | None = None
    values: list[EnumValue] = field(default_factory=lambda: list[EnumValue]())
    kind: str = field(default=ENUM, init=False)


@dataclass
class ObjectType:
    """An output object type.

    ``is_connection``, ``is_edge`` and ``is_node`` flag the Relay shapes so
    callers can present them differently.
    """

    name: str
    description: str | None = None
    fields: list[FieldDef] = field(default_factory=lambda: list[FieldDef]())
    interfaces: list[str] = field(default_factory=lambda: list[str]())
    kind: str = field(default=OBJECT, init=False)

    @property
    def is_connection(self) -> bool:
        names = {f.name for f in self.fields}
        return "edges" in names and "pageInfo" in names

    @property
    def is_edge(self) -> bool:
        names = {f.name for f in self.fields}
        return "node" in names and "cursor" in names

    @property
    def is_node(self) -> bool:
        return "Node" in self.interfaces


@dataclass
class InterfaceType:
    name: str
    description: str | None = None
    fields: list[FieldDef] = field(default_factory=lambda: list[FieldDef]())
    possible_types: list[str] = field(default_factory=lambda: list[str]())
    kind: str = field(default=INTERFACE, init=False)


@dataclass
class UnionType:
    name: str
    description: str | None = None
    possible_types: list[str] = field(default_factory=lambda: list[str]())
    kind: str = field(default=UNION, init=False)


@dataclass
class InputObjectType:
    name: str
    description: str | None = None
    fields: list[FieldDef] = field(default_factory=lambda: list[FieldDef]())
    kind: str = field(default=INPUT_OBJECT, init=False)


ParsedType = ScalarType | EnumType | ObjectType | InterfaceType | UnionType | InputObjectType


# -- Schema -------------------------------------------------------------------


@dataclass
class ParsedSchema:
    """All named types of a schema, keyed by name, plus the root type names."""

    types: dict[str, ParsedType] = field(default_factory=lambda: dict[str, ParsedType]())
    query_type: str | None = None
    mutation_type: str | None = None
    subscription_type: str | None = None

    def get(self, name: str | None) -> ParsedType | None:
        if not name:
            return None
        return self.types.get(name)

    def fields_of(self, name: str | None) -> list[FieldDef]:
        """Declared fields of a type; empty for scalars, enums, unions and unknowns."""
        parsed = self.get(name)
        if isinstance(parsed, (ObjectType, InterfaceType, InputObjectType)):
            return parsed.fields
        return []

    def possible_types(self, name: str | None) -> list[str]:
        """Concrete member names of an interface or union; empty otherwise."""
        parsed = self.get(name)
        if isinstance(parsed, (InterfaceType, UnionType)):
            return parsed.possible_types
        return []

    @property
    def root_type_names(self) -> set[str]:
        return {
            n
            for n in (self.query_type, self.mutation_type, self.subscription_type)
            if n
        }

    def group_by_kind(self, search: str | None = None) -> dict[str, list[ParsedType]]:
        """Group non-root types by kind, each group sorted by name.

        With *search*, keep only types whose name contains it
        (case-insensitive). Kinds with no remaining types are omitted.
        """
        roots = self.root_type_names
        query = search.strip().lower() if search else ""
        groups: dict[str, list[ParsedType]] = {}
        for parsed in self.types.values():
            if parsed.name in roots:
                continue
            if query and query not in parsed.name.lower():
                continue
            groups.setdefault(parsed.kind, []).append(parsed)
        for members in groups.values():
            members.sort(key=lambda t: t.name)
        return {kind: groups[kind] for kind in NAMED_KINDS if kind in groups}
