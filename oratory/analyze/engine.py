"""
oratory.analyze.engine - Analysis pipeline.

Runs pause analysis and filler detection (independent of each other), then
scoring and feedback, producing the final OratoryAnalysis.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor

from oratory.analyze.feedback import generate_feedback
from oratory.analyze.fillers import detect_fillers, summarize_fillers
from oratory.analyze.pauses import compute_pauses, summarize_pauses
from oratory.analyze.scoring import compute_key_metrics, compute_quality_score, round_key_metrics
from oratory.config import FeedbackThresholds
from oratory.models import OratoryAnalysis, TranscriptionRecord

logger = logging.getLogger(__name__)


def analyze_transcription(
    record: TranscriptionRecord,
    thresholds: FeedbackThresholds | None = None,
    parallel: bool = False,
) -> OratoryAnalysis:
    """Analyze the delivery captured in a transcription.

    Args:
        record: Normalized transcription
        thresholds: Feedback rule thresholds; defaults apply when omitted
        parallel: Run pause analysis and filler detection on two worker
            threads, joined before scoring

    Returns:
        OratoryAnalysis with key metrics, score, feedback and details
    """
    words = record.words

    if parallel:
        with ThreadPoolExecutor(max_workers=2) as executor:
            pauses_future = executor.submit(compute_pauses, words)
            fillers_future = executor.submit(detect_fillers, words, record.language)
            pauses = pauses_future.result()
            fillers = fillers_future.result()
    else:
        pauses = compute_pauses(words)
        fillers = detect_fillers(words, record.language)

    pause_stats = summarize_pauses(pauses)
    filler_stats = summarize_fillers(fillers, len(words))

    # Score and feedback thresholds see unrounded metrics
    raw_metrics = compute_key_metrics(record, pause_stats, filler_stats)
    quality_score = compute_quality_score(
        raw_metrics.filler_percentage,
        raw_metrics.pause_percentage,
        raw_metrics.words_per_minute,
        raw_metrics.duration_seconds,
    )
    feedback = generate_feedback(raw_metrics, filler_stats, pauses, thresholds)

    logger.debug(
        "Analyzed %d words: %d pause(s), %d filler(s), score %.2f",
        len(words),
        pause_stats.count,
        filler_stats.total_count,
        quality_score,
    )

    return OratoryAnalysis(
        key_metrics=round_key_metrics(raw_metrics),
        quality_score=quality_score,
        feedback=feedback,
        filler_details=filler_stats,
        pause_details=pause_stats,
        pauses=tuple(pauses),
        filler_occurrences=tuple(fillers),
    )
