"""GraphQL naming helpers shared by the document builders."""

from __future__ import annotations

import re

_GRAPHQL_NAME_RE = re.compile(r"^[_A-Za-z][_0-9A-Za-z]*$")


def is_graphql_name(name: str) -> bool:
    """True if *name* can appear as a field or fragment name in a document."""
    return bool(_GRAPHQL_NAME_RE.match(name))


def mock_fragment_name(type_name: str) -> str:
    """Default fragment name for a mock write of *type_name*."""
    return f"{type_name}Mock"
