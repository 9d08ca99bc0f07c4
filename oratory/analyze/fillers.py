"""
oratory.analyze.fillers - Lexical filler-word detection.

Scans a word sequence against a per-language lexicon of filler words and
two-word filler phrases, then aggregates the matches into ranked counts.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType

from oratory.models import FillerCount, FillerOccurrence, FillerStatistics, Word

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "en"
TOP_FILLER_COUNT = 5


@dataclass(frozen=True)
class Lexicon:
    """Filler words and two-word filler phrases for one language."""

    unigrams: frozenset[str]
    bigrams: frozenset[str]

    @classmethod
    def from_phrases(cls, phrases: Iterable[str]) -> Lexicon:
        """Split phrases into single words and two-word sequences.

        Raises:
            ValueError: If a phrase is empty or longer than two words
        """
        unigrams = set()
        bigrams = set()
        for phrase in phrases:
            tokens = phrase.lower().split()
            if len(tokens) == 1:
                unigrams.add(tokens[0])
            elif len(tokens) == 2:
                bigrams.add(" ".join(tokens))
            else:
                raise ValueError(f"Filler phrase must be one or two words: {phrase!r}")
        return cls(frozenset(unigrams), frozenset(bigrams))

    def extend(self, phrases: Iterable[str]) -> Lexicon:
        """Return a new lexicon with the extra phrases added."""
        extra = Lexicon.from_phrases(phrases)
        return Lexicon(self.unigrams | extra.unigrams, self.bigrams | extra.bigrams)

    def __len__(self) -> int:
        return len(self.unigrams) + len(self.bigrams)


FILLER_LEXICONS: Mapping[str, Lexicon] = MappingProxyType(
    {
        "en": Lexicon.from_phrases(
            [
                "um", "uh", "er", "ah", "like", "you know", "actually",
                "basically", "literally", "sort of", "kind of", "i mean",
                "right", "okay", "so", "well", "just", "really",
            ]
        ),
        "es": Lexicon.from_phrases(
            [
                "eh", "este", "pues", "bueno", "o sea", "entonces",
                "como", "verdad", "digamos", "tipo", "en plan", "vaya",
                "vale", "mira", "sabes", "claro", "nada", "tío", "tía",
            ]
        ),
    }
)


def get_lexicon(language: str) -> Lexicon:
    """Get the lexicon for a language, falling back to English."""
    return FILLER_LEXICONS.get(language, FILLER_LEXICONS[DEFAULT_LANGUAGE])


def _normalize(text: str) -> str:
    return text.lower().strip()


def detect_fillers(
    words: Sequence[Word],
    language: str = DEFAULT_LANGUAGE,
    lexicon: Lexicon | None = None,
) -> list[FillerOccurrence]:
    """Find filler words and filler phrases in a word sequence.

    Unigram and bigram checks run independently at every index, so a word
    can be reported both on its own and as the start of a phrase.

    Args:
        words: Time-ordered words
        language: Language code used to pick the lexicon
        lexicon: Explicit lexicon overriding the language lookup

    Returns:
        Occurrences in transcript order
    """
    if lexicon is None:
        lexicon = get_lexicon(language)
    occurrences = []

    for index, word in enumerate(words):
        normalized = _normalize(word.text)

        if normalized in lexicon.unigrams:
            occurrences.append(
                FillerOccurrence(
                    normalized_form=normalized,
                    original_form=word.text,
                    position=index,
                    timestamp=word.start_time,
                    confidence=word.confidence,
                )
            )

        if index < len(words) - 1:
            following = words[index + 1]
            phrase = f"{normalized} {_normalize(following.text)}"
            if phrase in lexicon.bigrams:
                occurrences.append(
                    FillerOccurrence(
                        normalized_form=phrase,
                        original_form=f"{word.text} {following.text}",
                        position=index,
                        timestamp=word.start_time,
                        confidence=(word.confidence + following.confidence) / 2,
                    )
                )

    logger.debug("Detected %d filler occurrence(s) in %d words", len(occurrences), len(words))
    return occurrences


def count_fillers(occurrences: Sequence[FillerOccurrence]) -> dict[str, list[FillerOccurrence]]:
    """Group occurrences by normalized form, keeping first-seen order."""
    grouped: dict[str, list[FillerOccurrence]] = {}
    for occurrence in occurrences:
        grouped.setdefault(occurrence.normalized_form, []).append(occurrence)
    return grouped


def summarize_fillers(
    occurrences: Sequence[FillerOccurrence],
    total_words: int,
) -> FillerStatistics:
    """Aggregate occurrences into ranked filler statistics.

    Forms are ranked by descending count; equal counts keep the order in
    which the forms were first seen.

    Args:
        occurrences: Detected filler occurrences
        total_words: Number of words in the transcript

    Returns:
        FillerStatistics with the top five and the full ranking
    """
    grouped = count_fillers(occurrences)

    def percentage(count: int) -> float:
        return count / total_words * 100 if total_words > 0 else 0.0

    ranked = sorted(grouped.items(), key=lambda item: len(item[1]), reverse=True)
    all_fillers = tuple(
        FillerCount(form=form, count=len(items), percentage=percentage(len(items)))
        for form, items in ranked
    )

    return FillerStatistics(
        total_count=len(occurrences),
        unique_form_count=len(grouped),
        percentage_of_words=percentage(len(occurrences)),
        top_fillers=all_fillers[:TOP_FILLER_COUNT],
        all_fillers=all_fillers,
    )
