"""Tests for oratory.utils module."""

from __future__ import annotations

from oratory.utils import format_duration, get_score_style, truncate


class TestFormatDuration:
    def test_seconds_only(self) -> None:
        assert format_duration(45.0) == "0:45"

    def test_minutes_and_seconds(self) -> None:
        assert format_duration(125.0) == "2:05"

    def test_hours_minutes_seconds(self) -> None:
        assert format_duration(3725.0) == "1:02:05"

    def test_zero(self) -> None:
        assert format_duration(0.0) == "0:00"

    def test_float_seconds(self) -> None:
        assert format_duration(90.7) == "1:30"


class TestGetScoreStyle:
    def test_high(self) -> None:
        assert get_score_style(100.0) == "green"
        assert get_score_style(70.0) == "green"

    def test_medium(self) -> None:
        assert get_score_style(69.99) == "yellow"
        assert get_score_style(40.0) == "yellow"

    def test_low(self) -> None:
        assert get_score_style(39.9) == "red"
        assert get_score_style(0.0) == "red"


class TestTruncate:
    def test_short_text_unchanged(self) -> None:
        assert truncate("hello there", 20) == "hello there"

    def test_collapses_whitespace(self) -> None:
        assert truncate("hello\n  there", 20) == "hello there"

    def test_long_text_cut_with_ellipsis(self) -> None:
        result = truncate("one two three four five", 10)
        assert len(result) <= 10
        assert result.endswith("…")
