"""Tests for the schema model and type-ref helpers."""

from __future__ import annotations

from cachescope.commands.schema.types import (
    OBJECT,
    SCALAR,
    EnumType,
    FieldDef,
    ObjectType,
    ParsedSchema,
    ScalarType,
    TypeRef,
    UnionType,
    get_base_type_name,
    is_list,
    is_non_null,
    type_display_name,
    unwrap_list,
)

USER = TypeRef.named(OBJECT, "User")
STRING = TypeRef.named(SCALAR, "String")


class TestTypeRefHelpers:
    def test_base_name_unwraps_all_wrappers(self) -> None:
        ref = TypeRef.non_null(TypeRef.list_of(TypeRef.non_null(USER)))
        assert get_base_type_name(ref) == "User"

    def test_base_name_of_broken_chain(self) -> None:
        assert get_base_type_name(TypeRef(kind="LIST")) == "Unknown"

    def test_is_list(self) -> None:
        assert is_list(TypeRef.list_of(USER))
        assert is_list(TypeRef.non_null(TypeRef.list_of(USER)))
        assert not is_list(TypeRef.non_null(USER))
        assert not is_list(USER)

    def test_is_non_null(self) -> None:
        assert is_non_null(TypeRef.non_null(USER))
        assert not is_non_null(TypeRef.list_of(TypeRef.non_null(USER)))

    def test_unwrap_list(self) -> None:
        inner = TypeRef.non_null(USER)
        assert unwrap_list(TypeRef.non_null(TypeRef.list_of(inner))) == inner
        assert unwrap_list(USER) is None

    def test_display_name(self) -> None:
        ref = TypeRef.non_null(TypeRef.list_of(TypeRef.non_null(USER)))
        assert type_display_name(ref) == "[User!]!"
        assert type_display_name(STRING) == "String"


class TestObjectFlags:
    def test_connection(self) -> None:
        obj = ObjectType(
            name="UserConnection",
            fields=[
                FieldDef(name="edges", type=TypeRef.list_of(USER)),
                FieldDef(name="pageInfo", type=USER),
            ],
        )
        assert obj.is_connection
        assert not obj.is_edge

    def test_edge(self) -> None:
        obj = ObjectType(
            name="UserEdge",
            fields=[FieldDef(name="node", type=USER), FieldDef(name="cursor", type=STRING)],
        )
        assert obj.is_edge
        assert not obj.is_connection

    def test_node_needs_exact_interface_name(self) -> None:
        assert ObjectType(name="User", interfaces=["Node"]).is_node
        assert not ObjectType(name="User", interfaces=["NodeLike"]).is_node


class TestParsedSchemaLookups:
    def _schema(self) -> ParsedSchema:
        return ParsedSchema(
            types={
                "Query": ObjectType(name="Query", fields=[FieldDef(name="me", type=USER)]),
                "User": ObjectType(name="User", fields=[FieldDef(name="id", type=STRING)]),
                "Admin": ObjectType(name="Admin"),
                "Actor": UnionType(name="Actor", possible_types=["User", "Admin"]),
                "Role": EnumType(name="Role"),
                "String": ScalarType(name="String"),
            },
            query_type="Query",
        )

    def test_fields_of(self) -> None:
        schema = self._schema()
        assert [f.name for f in schema.fields_of("User")] == ["id"]
        assert schema.fields_of("Actor") == []
        assert schema.fields_of("Missing") == []

    def test_possible_types(self) -> None:
        schema = self._schema()
        assert schema.possible_types("Actor") == ["User", "Admin"]
        assert schema.possible_types("User") == []

    def test_group_by_kind_skips_roots_and_sorts(self) -> None:
        groups = self._schema().group_by_kind()
        assert [t.name for t in groups["OBJECT"]] == ["Admin", "User"]
        assert list(groups) == ["SCALAR", "ENUM", "OBJECT", "UNION"]

    def test_group_by_kind_search(self) -> None:
        groups = self._schema().group_by_kind("us")
        assert list(groups) == ["OBJECT"]
        assert [t.name for t in groups["OBJECT"]] == ["User"]
