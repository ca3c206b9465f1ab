"""Tests for GraphQL naming helpers."""

from __future__ import annotations

from cachescope.helpers.naming import is_graphql_name, mock_fragment_name


class TestIsGraphqlName:
    def test_valid(self) -> None:
        assert is_graphql_name("user")
        assert is_graphql_name("_private2")
        assert is_graphql_name("__typename")

    def test_invalid(self) -> None:
        assert not is_graphql_name("")
        assert not is_graphql_name("2fast")
        assert not is_graphql_name("has space")
        assert not is_graphql_name("kebab-case")


def test_mock_fragment_name() -> None:
    assert mock_fragment_name("User") == "UserMock"
