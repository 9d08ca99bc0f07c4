"""
oratory.analyze.pauses - Inter-word silence detection.

Derives the ordered sequence of pauses between consecutive words and their
summary statistics. Overlapping or touching words produce no pause.
"""

from __future__ import annotations

from collections.abc import Sequence

from oratory.models import Pause, PauseStatistics, Word


def compute_pauses(words: Sequence[Word]) -> list[Pause]:
    """Find the silences between consecutive words.

    A pause is emitted only when the next word starts strictly after the
    current word ends; zero or negative gaps are skipped.

    Args:
        words: Time-ordered words

    Returns:
        Pauses in transcript order
    """
    pauses = []

    for current, following in zip(words, words[1:]):
        gap = following.start_time - current.end_time
        if gap > 0:
            pauses.append(
                Pause(
                    after_word=current.text,
                    before_word=following.text,
                    duration_seconds=gap,
                    start_time=current.end_time,
                    end_time=following.start_time,
                )
            )

    return pauses


def summarize_pauses(pauses: Sequence[Pause]) -> PauseStatistics:
    """Compute count, total, mean, longest and shortest pause in one pass."""
    if not pauses:
        return PauseStatistics()

    total = 0.0
    longest = shortest = pauses[0].duration_seconds
    for pause in pauses:
        duration = pause.duration_seconds
        total += duration
        longest = max(longest, duration)
        shortest = min(shortest, duration)

    return PauseStatistics(
        count=len(pauses),
        total_duration=total,
        average_duration=total / len(pauses),
        longest_duration=longest,
        shortest_duration=shortest,
    )


def find_long_pauses(pauses: Sequence[Pause], threshold_seconds: float) -> list[Pause]:
    """Return the pauses strictly longer than the threshold."""
    return [p for p in pauses if p.duration_seconds > threshold_seconds]
