"""Tests for terminal text utilities."""

from __future__ import annotations

from pi.grid.utils import clip_to_width, strip_ansi, visible_width


class TestVisibleWidth:
    def test_empty(self) -> None:
        assert visible_width("") == 0

    def test_ascii(self) -> None:
        assert visible_width("hello") == 5

    def test_box_drawing_is_one_column(self) -> None:
        assert visible_width("─────") == 5
        assert visible_width("│a│") == 3

    def test_wide_characters(self) -> None:
        assert visible_width("日本") == 4

    def test_ansi_codes_are_ignored(self) -> None:
        assert visible_width("\x1b[31mred\x1b[0m") == 3


class TestStripAnsi:
    def test_strips_cursor_and_clear_sequences(self) -> None:
        assert strip_ansi("\x1b[3;1H\x1b[2Ktext") == "text"


class TestClipToWidth:
    def test_short_text_unchanged(self) -> None:
        assert clip_to_width("abc", 10) == "abc"

    def test_long_text_clipped(self) -> None:
        assert clip_to_width("abcdef", 4) == "abcd"

    def test_wide_character_not_split(self) -> None:
        assert clip_to_width("日本", 3) == "日"

    def test_zero_width(self) -> None:
        assert clip_to_width("abc", 0) == ""
