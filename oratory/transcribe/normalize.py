"""
oratory.transcribe.normalize - Provider response normalization.

Converts a raw Deepgram prerecorded-transcription response into the
canonical TranscriptionRecord used by the analysis stages. Only the first
alternative of the first channel is read; every other provider field is
ignored.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import ValidationError

from oratory.exceptions import MalformedResponseError
from oratory.models import TranscriptionRecord, Word
from oratory.validation import validate_language

REQUIRED_WORD_FIELDS = ("word", "start", "end")


def _first(payload: Mapping[str, Any], key: str, path: str) -> Mapping[str, Any]:
    items = payload.get(key)
    if not isinstance(items, Sequence) or isinstance(items, str) or not items:
        raise MalformedResponseError(f"Invalid transcription response format: missing {path}")
    first = items[0]
    if not isinstance(first, Mapping):
        raise MalformedResponseError(f"Invalid transcription response format: bad {path}")
    return first


def extract_alternative(payload: Any) -> Mapping[str, Any]:
    """Return results.channels[0].alternatives[0] from a provider response.

    Raises:
        MalformedResponseError: If any part of the path is absent
    """
    if not isinstance(payload, Mapping):
        raise MalformedResponseError("Invalid transcription response format: not an object")

    results = payload.get("results")
    if not isinstance(results, Mapping):
        raise MalformedResponseError("Invalid transcription response format: missing results")

    channel = _first(results, "channels", "results.channels")
    alternative = _first(channel, "alternatives", "channels[0].alternatives")

    if "transcript" not in alternative:
        raise MalformedResponseError("Invalid transcription response format: missing transcript")
    if not isinstance(alternative.get("words"), Sequence) or isinstance(
        alternative.get("words"), str
    ):
        raise MalformedResponseError("Invalid transcription response format: missing words")

    return alternative


def normalize_word(raw: Any, index: int) -> Word:
    """Convert one provider word entry into a Word."""
    if not isinstance(raw, Mapping):
        raise MalformedResponseError(f"Word {index} is not an object")

    missing = [field for field in REQUIRED_WORD_FIELDS if raw.get(field) is None]
    if missing:
        raise MalformedResponseError(f"Word {index} is missing: {', '.join(missing)}")

    try:
        return Word(
            text=raw["word"],
            start_time=raw["start"],
            end_time=raw["end"],
            confidence=raw.get("confidence") or 0.0,
            punctuated_text=raw.get("punctuated_word"),
        )
    except ValidationError as e:
        raise MalformedResponseError(f"Word {index} is invalid: {e}") from e


def normalize_response(payload: Any, language: str = "en") -> TranscriptionRecord:
    """Build a TranscriptionRecord from a raw provider response.

    Missing optional fields default: duration to 0, channels to 1,
    confidence to 0. Word timing monotonicity is not checked.

    Args:
        payload: Parsed provider JSON
        language: Language code the audio was transcribed with

    Returns:
        Immutable TranscriptionRecord

    Raises:
        InvalidInputError: If the language is not supported
        MalformedResponseError: If required structure is absent or invalid
    """
    validate_language(language)

    alternative = extract_alternative(payload)
    words = tuple(normalize_word(w, i) for i, w in enumerate(alternative["words"]))

    metadata = payload.get("metadata") or {}
    if not isinstance(metadata, Mapping):
        raise MalformedResponseError("Invalid transcription response format: bad metadata")

    try:
        return TranscriptionRecord(
            transcript=alternative["transcript"] or "",
            words=words,
            confidence=alternative.get("confidence") or 0.0,
            duration_seconds=metadata.get("duration") or 0.0,
            channels=metadata.get("channels") or 1,
            language=language,
        )
    except ValidationError as e:
        raise MalformedResponseError(f"Invalid transcription response: {e}") from e
