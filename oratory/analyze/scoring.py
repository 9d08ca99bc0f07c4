"""
oratory.analyze.scoring - Key metrics and composite quality score.

Combines duration, word count, pause statistics and filler statistics into
the key delivery metrics and a 0-100 quality score.
"""

from __future__ import annotations

from oratory.models import FillerStatistics, KeyMetrics, PauseStatistics, TranscriptionRecord

FILLER_PENALTY_THRESHOLD = 10.0
FILLER_PENALTY_FACTOR = 2.0
PAUSE_PENALTY_THRESHOLD = 30.0
IDEAL_WPM = 150.0
PACING_PENALTY_MIN_WPM = 120.0
PACING_PENALTY_MAX_WPM = 180.0
PACING_PENALTY_FACTOR = 0.2


def speaking_rate(total_words: int, duration_seconds: float) -> float:
    """Words per minute, or 0 when the duration is zero."""
    if duration_seconds <= 0:
        return 0.0
    return total_words / duration_seconds * 60


def pause_percentage(total_pause_duration: float, duration_seconds: float) -> float:
    """Share of the recording spent in pauses, or 0 when the duration is zero."""
    if duration_seconds <= 0:
        return 0.0
    return total_pause_duration / duration_seconds * 100


def compute_quality_score(
    filler_percentage: float,
    pause_percentage: float,
    words_per_minute: float,
    duration_seconds: float,
) -> float:
    """Compute the composite 0-100 delivery quality score.

    Starts at 100 and subtracts every applicable penalty:

    - filler share above 10%: twice the excess
    - pause share above 30%: the excess
    - pace outside 120-180 WPM: a fifth of the distance from 150 WPM

    Pause and pacing penalties need a measurable duration and are skipped
    when it is zero.

    Returns:
        Score clamped to [0, 100] and rounded to 2 decimals
    """
    score = 100.0

    if filler_percentage > FILLER_PENALTY_THRESHOLD:
        score -= (filler_percentage - FILLER_PENALTY_THRESHOLD) * FILLER_PENALTY_FACTOR

    if duration_seconds > 0:
        if pause_percentage > PAUSE_PENALTY_THRESHOLD:
            score -= pause_percentage - PAUSE_PENALTY_THRESHOLD
        if words_per_minute < PACING_PENALTY_MIN_WPM or words_per_minute > PACING_PENALTY_MAX_WPM:
            score -= abs(IDEAL_WPM - words_per_minute) * PACING_PENALTY_FACTOR

    return round(max(0.0, min(100.0, score)), 2)


def compute_key_metrics(
    record: TranscriptionRecord,
    pause_stats: PauseStatistics,
    filler_stats: FillerStatistics,
) -> KeyMetrics:
    """Build the unrounded key metrics for a transcription.

    Feedback thresholds and the quality score are evaluated against these
    values; use round_key_metrics for the reported figures.
    """
    duration = record.duration_seconds
    total_words = len(record.words)

    return KeyMetrics(
        words_per_minute=speaking_rate(total_words, duration),
        filler_percentage=filler_stats.percentage_of_words,
        pause_percentage=pause_percentage(pause_stats.total_duration, duration),
        average_confidence=record.confidence,
        duration_seconds=duration,
        total_words=total_words,
    )


def round_key_metrics(metrics: KeyMetrics) -> KeyMetrics:
    """Round rates and percentages to 2 decimals and confidence to 4."""
    return metrics.model_copy(
        update={
            "words_per_minute": round(metrics.words_per_minute, 2),
            "filler_percentage": round(metrics.filler_percentage, 2),
            "pause_percentage": round(metrics.pause_percentage, 2),
            "average_confidence": round(metrics.average_confidence, 4),
        }
    )

