"""Load normalized cache snapshots (``cache.extract()`` dumps) from disk."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, cast


class CacheSnapshotError(ValueError):
    """Raised when a file does not hold a cache snapshot object."""


def load_cache_snapshot(path: str | Path) -> dict[str, Any]:
    """Read a snapshot JSON file.

    Accepts the bare ``{cache_id: record}`` mapping as well as a
    ``{"data": {...}}`` envelope.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as e:
        raise CacheSnapshotError(f"{path.name} is not UTF-8 text: {e}") from e
    except json.JSONDecodeError as e:
        raise CacheSnapshotError(f"{path.name} is not valid JSON: {e}") from e
    return parse_cache_snapshot(data)


def parse_cache_snapshot(data: Any) -> dict[str, Any]:
    if isinstance(data, dict) and set(data) == {"data"} and isinstance(data["data"], dict):
        data = data["data"]
    if not isinstance(data, dict):
        raise CacheSnapshotError("Cache snapshot must be a JSON object keyed by cache ID")
    return cast(dict[str, Any], data)
