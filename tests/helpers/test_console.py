"""Tests for console helpers."""

from __future__ import annotations

from cachescope.helpers.console import truncate


class TestTruncate:
    def test_short_text_unchanged(self) -> None:
        assert truncate("Ann (User:1)", 80) == "Ann (User:1)"

    def test_cut_with_ellipsis(self) -> None:
        assert truncate("abcdefghij", 8) == "abcde..."

    def test_multiline_description_flattened(self) -> None:
        assert truncate("A user.\n\n  Can log in.", 60) == "A user. Can log in."

    def test_tiny_width(self) -> None:
        assert truncate("abcdef", 2) == "ab"
