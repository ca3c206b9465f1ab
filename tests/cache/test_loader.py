"""Tests for cache snapshot loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from cachescope.commands.cache.loader import (
    CacheSnapshotError,
    load_cache_snapshot,
    parse_cache_snapshot,
)


class TestLoadCacheSnapshot:
    def test_bare_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "cache.json"
        path.write_text(json.dumps({"User:1": {"name": "Ann"}}))
        assert load_cache_snapshot(path) == {"User:1": {"name": "Ann"}}

    def test_data_envelope(self) -> None:
        snapshot = parse_cache_snapshot({"data": {"User:1": {"name": "Ann"}}})
        assert list(snapshot) == ["User:1"]

    def test_entry_named_data_is_not_unwrapped_with_siblings(self) -> None:
        raw = {"data": {"x": 1}, "User:1": {}}
        assert parse_cache_snapshot(raw) == raw

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "cache.json"
        path.write_text("{oops")
        with pytest.raises(CacheSnapshotError):
            load_cache_snapshot(path)

    def test_not_an_object(self) -> None:
        with pytest.raises(CacheSnapshotError):
            parse_cache_snapshot(["User:1"])

    def test_not_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "cache.json"
        path.write_bytes(b"\xff\xfe\x00bad")
        with pytest.raises(CacheSnapshotError, match="not UTF-8"):
            load_cache_snapshot(path)
