"""
oratory.analyze.feedback - Human-readable delivery feedback.

Four independent evaluators (pacing, fillers, pauses, clarity) each turn
the key metrics into exactly one positive or negative feedback item.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import NamedTuple

from oratory.analyze.pauses import find_long_pauses
from oratory.config import FeedbackThresholds
from oratory.models import (
    Dimension,
    Feedback,
    FeedbackItem,
    FillerStatistics,
    KeyMetrics,
    Pause,
)


def evaluate_pacing(metrics: KeyMetrics, thresholds: FeedbackThresholds) -> FeedbackItem:
    wpm = metrics.words_per_minute

    if wpm > thresholds.pacing_max_wpm:
        return FeedbackItem(
            dimension=Dimension.PACING,
            message=f"You spoke too fast, at {wpm:.0f} words per minute.",
            suggestion="Slow down and pause briefly after each main idea so it can land.",
            is_positive=False,
        )
    if wpm < thresholds.pacing_min_wpm:
        return FeedbackItem(
            dimension=Dimension.PACING,
            message=f"You spoke too slowly, at {wpm:.0f} words per minute.",
            suggestion="Rehearse the material until it flows and deliver it with more energy.",
            is_positive=False,
        )
    return FeedbackItem(
        dimension=Dimension.PACING,
        message=f"Your pace of {wpm:.0f} words per minute is easy to follow.",
        suggestion="Keep this rhythm and vary it deliberately for emphasis.",
        is_positive=True,
    )


def evaluate_fillers(
    metrics: KeyMetrics,
    filler_stats: FillerStatistics,
    thresholds: FeedbackThresholds,
) -> FeedbackItem:
    percentage = metrics.filler_percentage

    if percentage > thresholds.filler_percentage:
        message = f"Filler words made up {percentage:.1f}% of your speech."
        if filler_stats.top_fillers:
            message += f' The most frequent was "{filler_stats.top_fillers[0].form}".'
        return FeedbackItem(
            dimension=Dimension.FILLERS,
            message=message,
            suggestion="When you need a moment to think, stay silent instead of using a filler.",
            is_positive=False,
        )
    return FeedbackItem(
        dimension=Dimension.FILLERS,
        message=f"You kept filler words low, at {percentage:.1f}% of your speech.",
        suggestion="Keep using short silences instead of fillers.",
        is_positive=True,
    )


class PauseContext(NamedTuple):
    metrics: KeyMetrics
    pauses: Sequence[Pause]
    thresholds: FeedbackThresholds


class PauseRule(NamedTuple):
    """A negative pause trigger: predicate, message builder and suggestion."""

    name: str
    applies: Callable[[PauseContext], bool]
    message: Callable[[PauseContext], str]
    suggestion: str


def _long_pause_count(ctx: PauseContext) -> int:
    return len(find_long_pauses(ctx.pauses, ctx.thresholds.long_pause_seconds))


PAUSE_RULES: tuple[PauseRule, ...] = (
    PauseRule(
        name="long_pauses",
        applies=lambda ctx: _long_pause_count(ctx) > 0,
        message=lambda ctx: (
            f"You had {_long_pause_count(ctx)} pause(s) longer than "
            f"{ctx.thresholds.long_pause_seconds:g} seconds."
        ),
        suggestion="Prepare transitions between sections so you don't lose your thread.",
    ),
    PauseRule(
        name="pause_percentage",
        applies=lambda ctx: ctx.metrics.pause_percentage > ctx.thresholds.pause_percentage,
        message=lambda ctx: (
            f"Pauses took up {ctx.metrics.pause_percentage:.1f}% of your speaking time."
        ),
        suggestion="Keep pauses short and intentional; connect related ideas in one breath.",
    ),
)


def evaluate_pauses(
    metrics: KeyMetrics,
    pauses: Sequence[Pause],
    thresholds: FeedbackThresholds,
    rules: Sequence[PauseRule] = PAUSE_RULES,
) -> FeedbackItem:
    """Evaluate pause rules in order; the first rule that applies wins."""
    ctx = PauseContext(metrics, pauses, thresholds)

    for rule in rules:
        if rule.applies(ctx):
            return FeedbackItem(
                dimension=Dimension.PAUSES,
                message=rule.message(ctx),
                suggestion=rule.suggestion,
                is_positive=False,
            )

    return FeedbackItem(
        dimension=Dimension.PAUSES,
        message="Your pauses were well placed and brief.",
        suggestion="Keep using pauses to separate ideas.",
        is_positive=True,
    )


def evaluate_clarity(metrics: KeyMetrics, thresholds: FeedbackThresholds) -> FeedbackItem:
    confidence = metrics.average_confidence * 100

    if metrics.average_confidence < thresholds.min_confidence:
        return FeedbackItem(
            dimension=Dimension.CLARITY,
            message=f"Your words were recognized with only {confidence:.0f}% confidence.",
            suggestion="Articulate each word fully and keep the microphone at a steady distance.",
            is_positive=False,
        )
    return FeedbackItem(
        dimension=Dimension.CLARITY,
        message=f"Your speech was clear, recognized with {confidence:.0f}% confidence.",
        suggestion="Keep articulating at this level.",
        is_positive=True,
    )


def generate_feedback(
    metrics: KeyMetrics,
    filler_stats: FillerStatistics,
    pauses: Sequence[Pause],
    thresholds: FeedbackThresholds | None = None,
) -> Feedback:
    """Run all four evaluators and split the results by positivity.

    Both buckets keep evaluation order: pacing, fillers, pauses, clarity.

    Args:
        metrics: Key metrics for the session
        filler_stats: Filler statistics (used to name the top filler)
        pauses: All detected pauses (used to count long pauses)
        thresholds: Rule thresholds; defaults apply when omitted

    Returns:
        Feedback with exactly four items across both buckets
    """
    thresholds = thresholds or FeedbackThresholds()

    items = [
        evaluate_pacing(metrics, thresholds),
        evaluate_fillers(metrics, filler_stats, thresholds),
        evaluate_pauses(metrics, pauses, thresholds),
        evaluate_clarity(metrics, thresholds),
    ]

    return Feedback(
        positive=tuple(item for item in items if item.is_positive),
        improvements=tuple(item for item in items if not item.is_positive),
    )
