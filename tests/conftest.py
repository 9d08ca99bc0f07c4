"""
Test configuration and shared fixtures.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import pytest
import yaml

# Give Rich a wide, fixed terminal so CLI output is not line-wrapped in tests.
os.environ["COLUMNS"] = "200"

from oratory.models import TranscriptionRecord, Word


def _word(text: str, start: float, end: float, confidence: float = 0.95) -> Word:
    return Word(text=text, start_time=start, end_time=end, confidence=confidence)


def _response(
    words: list[dict[str, Any]],
    transcript: str | None = None,
    duration: float | None = 1.0,
    confidence: float = 0.93,
) -> dict[str, Any]:
    """Build a Deepgram-shaped prerecorded response."""
    metadata: dict[str, Any] = {"request_id": "test-request", "channels": 1}
    if duration is not None:
        metadata["duration"] = duration
    return {
        "metadata": metadata,
        "results": {
            "channels": [
                {
                    "alternatives": [
                        {
                            "transcript": transcript
                            if transcript is not None
                            else " ".join(w["word"] for w in words),
                            "confidence": confidence,
                            "words": words,
                        }
                    ]
                }
            ]
        },
    }


@pytest.fixture
def scenario_words() -> list[Word]:
    """Three words with one 0.2s pause and one filler."""
    return [
        _word("the", 0.0, 0.3, 0.95),
        _word("um", 0.5, 0.7, 0.9),
        _word("thing", 0.7, 1.0, 0.95),
    ]


@pytest.fixture
def scenario_record(scenario_words: list[Word]) -> TranscriptionRecord:
    return TranscriptionRecord(
        transcript="the um thing",
        words=tuple(scenario_words),
        confidence=0.93,
        duration_seconds=1.0,
        language="en",
    )


@pytest.fixture
def deepgram_response() -> dict[str, Any]:
    """Return a realistic Deepgram response for a short English sentence."""
    words = [
        {"word": "so", "start": 0.08, "end": 0.32, "confidence": 0.97, "punctuated_word": "So,"},
        {"word": "um", "start": 0.4, "end": 0.62, "confidence": 0.88, "punctuated_word": "um,"},
        {"word": "today", "start": 0.7, "end": 1.1, "confidence": 0.99, "punctuated_word": "today"},
        {"word": "we", "start": 1.1, "end": 1.24, "confidence": 0.99, "punctuated_word": "we"},
        {"word": "kind", "start": 1.24, "end": 1.4, "confidence": 0.95, "punctuated_word": "kind"},
        {"word": "of", "start": 1.4, "end": 1.5, "confidence": 0.93, "punctuated_word": "of"},
        {
            "word": "start",
            "start": 3.8,
            "end": 4.2,
            "confidence": 0.98,
            "punctuated_word": "start.",
        },
    ]
    return _response(words, transcript="So, um, today we kind of start.", duration=4.5)


@pytest.fixture
def tmp_workspace(tmp_path: Path) -> Path:
    """Create a temporary workspace directory with config and session store."""
    workspace_dir = tmp_path / "test_workspace"
    workspace_dir.mkdir()
    (workspace_dir / "sessions").mkdir()

    config = {"workspace_name": "test_workspace", "default_language": "en"}
    with open(workspace_dir / "oratory.yaml", "w") as f:
        yaml.dump(config, f)

    return workspace_dir


@pytest.fixture
def sample_config_dict() -> dict:
    """Return a sample configuration dictionary."""
    return {
        "workspace_name": "test-workspace",
        "default_language": "es",
        "deepgram_model": "nova-2",
        "max_upload_mb": 10,
        "session_list_limit": 5,
        "feedback": {
            "pacing_min_wpm": 110,
            "pacing_max_wpm": 170,
        },
    }


@pytest.fixture
def make_word():
    """Factory for Word records (confidence defaults to 0.95)."""
    return _word


@pytest.fixture
def make_response():
    """Factory for Deepgram-shaped responses."""
    return _response
