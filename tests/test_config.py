"""Tests for depth limit configuration."""

from __future__ import annotations

import pytest

from cachescope.config import (
    DOCUMENT_MAX_DEPTH_ENV,
    FORM_MAX_DEPTH_ENV,
    ITEM_MAX_DEPTH_ENV,
    DepthLimits,
)


class TestDepthLimits:
    def test_defaults(self) -> None:
        limits = DepthLimits()
        assert limits.form_max_depth == 2
        assert limits.item_max_depth == 3
        assert limits.document_max_depth == 3

    def test_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(FORM_MAX_DEPTH_ENV, "4")
        monkeypatch.setenv(ITEM_MAX_DEPTH_ENV, " 5 ")
        monkeypatch.setenv(DOCUMENT_MAX_DEPTH_ENV, "1")
        assert DepthLimits.from_env() == DepthLimits(4, 5, 1)

    def test_invalid_env_falls_back(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(FORM_MAX_DEPTH_ENV, "deep")
        monkeypatch.delenv(ITEM_MAX_DEPTH_ENV, raising=False)
        monkeypatch.setenv(DOCUMENT_MAX_DEPTH_ENV, "")
        assert DepthLimits.from_env() == DepthLimits()

    def test_module_defaults_come_from_depth_limits(self) -> None:
        from cachescope.commands.mock.defaults import FORM_MAX_DEPTH, ITEM_MAX_DEPTH
        from cachescope.commands.mock.fragment import DOCUMENT_MAX_DEPTH

        limits = DepthLimits()
        assert FORM_MAX_DEPTH == limits.form_max_depth
        assert ITEM_MAX_DEPTH == limits.item_max_depth
        assert DOCUMENT_MAX_DEPTH == limits.document_max_depth
