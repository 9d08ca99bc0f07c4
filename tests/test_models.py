"""Tests for oratory.models module."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from oratory.models import TranscriptionRecord, Word


class TestTranscriptionRecord:
    @pytest.mark.parametrize("language", ["en", "es"])
    def test_supported_languages(self, language: str) -> None:
        record = TranscriptionRecord(transcript="", language=language)
        assert record.language == language

    @pytest.mark.parametrize("language", ["fr", "EN", ""])
    def test_rejects_other_languages(self, language: str) -> None:
        with pytest.raises(ValidationError):
            TranscriptionRecord(transcript="", language=language)

    def test_defaults(self) -> None:
        record = TranscriptionRecord(transcript="hi")
        assert record.language == "en"
        assert record.words == ()
        assert record.duration_seconds == 0.0
        assert record.channels == 1


class TestWord:
    def test_confidence_range(self) -> None:
        with pytest.raises(ValidationError):
            Word(text="hi", start_time=0.0, end_time=0.1, confidence=1.2)

    def test_negative_start(self) -> None:
        with pytest.raises(ValidationError):
            Word(text="hi", start_time=-0.1, end_time=0.1)
