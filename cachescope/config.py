"""Traversal depth limits, overridable from the environment (or a ``.env`` file)."""

from __future__ import annotations

import os
from dataclasses import dataclass

FORM_MAX_DEPTH_ENV = "CACHESCOPE_FORM_MAX_DEPTH"
ITEM_MAX_DEPTH_ENV = "CACHESCOPE_ITEM_MAX_DEPTH"
DOCUMENT_MAX_DEPTH_ENV = "CACHESCOPE_DOCUMENT_MAX_DEPTH"


@dataclass(frozen=True)
class DepthLimits:
    """Recursion bounds for the synthesizer and the selection document builder.

    - ``form_max_depth``: bulk defaults when a value is first initialized
    - ``item_max_depth``: defaults for a single list item appended later
    - ``document_max_depth``: nesting of generated selection documents
    """

    form_max_depth: int = 2
    item_max_depth: int = 3
    document_max_depth: int = 3

    @classmethod
    def from_env(cls) -> DepthLimits:
        defaults = cls()
        return cls(
            form_max_depth=_env_int(FORM_MAX_DEPTH_ENV, defaults.form_max_depth),
            item_max_depth=_env_int(ITEM_MAX_DEPTH_ENV, defaults.item_max_depth),
            document_max_depth=_env_int(DOCUMENT_MAX_DEPTH_ENV, defaults.document_max_depth),
        )


def _env_int(name: str, fallback: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return fallback
    try:
        return int(raw)
    except ValueError:
        return fallback
