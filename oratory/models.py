"""
oratory.models - Immutable records shared by the analysis pipeline.

Every stage takes and returns frozen pydantic models, so a record handed to
the engine can never be changed by a later stage.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


Language = Literal["en", "es"]


class Record(BaseModel):
    """Base for all frozen records."""

    model_config = ConfigDict(frozen=True)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class Word(Record):
    """A single transcribed word with timing and confidence."""

    text: str
    start_time: float = Field(ge=0.0)
    end_time: float
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    punctuated_text: str | None = None


class TranscriptionRecord(Record):
    """Canonical transcription consumed by every analysis stage."""

    transcript: str
    words: tuple[Word, ...] = ()
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    duration_seconds: float = Field(default=0.0, ge=0.0)
    language: Language = "en"
    channels: int = Field(default=1, ge=1)


class Pause(Record):
    """Silence between the end of one word and the start of the next."""

    after_word: str
    before_word: str
    duration_seconds: float = Field(gt=0.0)
    start_time: float
    end_time: float


class PauseStatistics(Record):
    count: int = 0
    total_duration: float = 0.0
    average_duration: float = 0.0
    longest_duration: float | None = None
    shortest_duration: float | None = None


class FillerOccurrence(Record):
    """One lexicon match, either a single word or a two-word phrase."""

    normalized_form: str
    original_form: str
    position: int
    timestamp: float
    confidence: float


class FillerCount(Record):
    form: str
    count: int
    percentage: float


class FillerStatistics(Record):
    total_count: int = 0
    unique_form_count: int = 0
    percentage_of_words: float = 0.0
    top_fillers: tuple[FillerCount, ...] = ()
    all_fillers: tuple[FillerCount, ...] = ()


class KeyMetrics(Record):
    words_per_minute: float
    filler_percentage: float
    pause_percentage: float
    average_confidence: float
    duration_seconds: float
    total_words: int


class Dimension(str, Enum):
    PACING = "Pacing"
    FILLERS = "Fillers"
    PAUSES = "Pauses"
    CLARITY = "Clarity"


class FeedbackItem(Record):
    dimension: Dimension
    message: str
    suggestion: str
    is_positive: bool


class Feedback(Record):
    positive: tuple[FeedbackItem, ...] = ()
    improvements: tuple[FeedbackItem, ...] = ()

    @property
    def items(self) -> tuple[FeedbackItem, ...]:
        return self.positive + self.improvements


class OratoryAnalysis(Record):
    """Final output of the analysis engine."""

    key_metrics: KeyMetrics
    quality_score: float
    feedback: Feedback
    filler_details: FillerStatistics
    pause_details: PauseStatistics
    pauses: tuple[Pause, ...] = ()
    filler_occurrences: tuple[FillerOccurrence, ...] = ()
