"""Tests for oratory.analyze.scoring module."""

from __future__ import annotations

import pytest

from oratory.analyze.scoring import (
    compute_key_metrics,
    compute_quality_score,
    pause_percentage,
    round_key_metrics,
    speaking_rate,
)
from oratory.models import FillerStatistics, KeyMetrics, PauseStatistics, TranscriptionRecord


class TestRates:
    def test_speaking_rate(self) -> None:
        assert speaking_rate(3, 1.0) == 180.0
        assert speaking_rate(150, 60.0) == 150.0

    def test_speaking_rate_zero_duration(self) -> None:
        assert speaking_rate(10, 0.0) == 0.0
        assert speaking_rate(0, 0.0) == 0.0

    def test_pause_percentage(self) -> None:
        assert pause_percentage(4.0, 20.0) == 20.0

    def test_pause_percentage_zero_duration(self) -> None:
        assert pause_percentage(1.5, 0.0) == 0.0


class TestComputeQualityScore:
    def test_perfect_delivery(self) -> None:
        assert compute_quality_score(2.0, 10.0, 150.0, 60.0) == 100.0

    def test_filler_penalty(self) -> None:
        # 15% fillers: (15 - 10) * 2 = 10
        assert compute_quality_score(15.0, 0.0, 150.0, 60.0) == 90.0

    def test_pause_penalty(self) -> None:
        assert compute_quality_score(0.0, 45.0, 150.0, 60.0) == 85.0

    def test_pacing_penalty_fast(self) -> None:
        # 200 WPM: |150 - 200| * 0.2 = 10
        assert compute_quality_score(0.0, 0.0, 200.0, 60.0) == 90.0

    def test_pacing_penalty_slow(self) -> None:
        assert compute_quality_score(0.0, 0.0, 100.0, 60.0) == 90.0

    def test_pacing_window_edges_not_penalized(self) -> None:
        assert compute_quality_score(0.0, 0.0, 120.0, 60.0) == 100.0
        assert compute_quality_score(0.0, 0.0, 180.0, 60.0) == 100.0

    def test_penalties_combine(self) -> None:
        assert compute_quality_score(15.0, 45.0, 200.0, 60.0) == 65.0

    def test_zero_duration_skips_pause_and_pacing(self) -> None:
        assert compute_quality_score(0.0, 0.0, 0.0, 0.0) == 100.0

    def test_zero_duration_still_applies_filler_penalty(self) -> None:
        assert compute_quality_score(20.0, 0.0, 0.0, 0.0) == 80.0

    @pytest.mark.parametrize(
        "filler_pct,pause_pct,wpm",
        [(500.0, 0.0, 150.0), (100.0, 100.0, 1000.0), (0.0, 0.0, 0.0), (0.0, 0.0, 1e9)],
    )
    def test_score_always_in_range(self, filler_pct: float, pause_pct: float, wpm: float) -> None:
        score = compute_quality_score(filler_pct, pause_pct, wpm, 30.0)
        assert 0.0 <= score <= 100.0

    def test_rounded_to_two_decimals(self) -> None:
        score = compute_quality_score(10.3333333, 0.0, 150.0, 60.0)
        assert score == 99.33


class TestComputeKeyMetrics:
    def test_scenario(self, scenario_record) -> None:
        pause_stats = PauseStatistics(
            count=1,
            total_duration=0.2,
            average_duration=0.2,
            longest_duration=0.2,
            shortest_duration=0.2,
        )
        filler_stats = FillerStatistics(
            total_count=1, unique_form_count=1, percentage_of_words=100 / 3
        )
        metrics = round_key_metrics(compute_key_metrics(scenario_record, pause_stats, filler_stats))
        assert metrics.words_per_minute == 180.0
        assert metrics.filler_percentage == 33.33
        assert metrics.pause_percentage == 20.0
        assert metrics.average_confidence == 0.93
        assert metrics.duration_seconds == 1.0
        assert metrics.total_words == 3

    def test_empty_record(self) -> None:
        record = TranscriptionRecord(transcript="", duration_seconds=0.0)
        metrics = compute_key_metrics(record, PauseStatistics(), FillerStatistics())
        assert metrics.words_per_minute == 0.0
        assert metrics.pause_percentage == 0.0
        assert metrics.filler_percentage == 0.0
        assert metrics.total_words == 0

    def test_metrics_are_unrounded(self, make_word) -> None:
        record = TranscriptionRecord(
            transcript="a b c",
            words=(make_word("a", 0.0, 0.1), make_word("b", 0.2, 0.3), make_word("c", 0.4, 0.5)),
            confidence=0.84996,
            duration_seconds=7.0,
        )
        filler_stats = FillerStatistics(total_count=1, percentage_of_words=100 / 3)
        metrics = compute_key_metrics(record, PauseStatistics(total_duration=0.2), filler_stats)
        assert metrics.words_per_minute == pytest.approx(3 / 7 * 60)
        assert metrics.filler_percentage == pytest.approx(100 / 3)
        assert metrics.pause_percentage == pytest.approx(0.2 / 7 * 100)
        assert metrics.average_confidence == 0.84996


class TestRoundKeyMetrics:
    def test_rounds_reported_figures(self) -> None:
        metrics = KeyMetrics(
            words_per_minute=160.004,
            filler_percentage=3.003003,
            pause_percentage=20.0049,
            average_confidence=0.849961,
            duration_seconds=12.5,
            total_words=33,
        )
        rounded = round_key_metrics(metrics)
        assert rounded.words_per_minute == 160.0
        assert rounded.filler_percentage == 3.0
        assert rounded.pause_percentage == 20.0
        assert rounded.average_confidence == 0.85
        assert rounded.duration_seconds == 12.5
        assert rounded.total_words == 33
        assert metrics.words_per_minute == 160.004
