"""Tests for oratory.config module."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from oratory.config import (
    DEFAULT_ALLOWED_MIME_TYPES,
    FeedbackThresholds,
    OratoryConfig,
    create_default_config,
    load_config,
    merge_config,
    write_config,
)


class TestFeedbackThresholds:
    def test_defaults(self) -> None:
        thresholds = FeedbackThresholds()
        assert thresholds.pacing_min_wpm == 120.0
        assert thresholds.pacing_max_wpm == 160.0
        assert thresholds.filler_percentage == 3.0
        assert thresholds.long_pause_seconds == 2.0
        assert thresholds.pause_percentage == 20.0
        assert thresholds.min_confidence == 0.85

    def test_inverted_pacing_window_raises(self) -> None:
        with pytest.raises(ValueError, match="pacing_min_wpm"):
            FeedbackThresholds(pacing_min_wpm=170, pacing_max_wpm=160)

    def test_confidence_out_of_range_raises(self) -> None:
        with pytest.raises(ValueError):
            FeedbackThresholds(min_confidence=1.5)


class TestOratoryConfig:
    def test_default_config(self) -> None:
        config = OratoryConfig()
        assert config.workspace_name == "untitled"
        assert config.default_language == "en"
        assert config.deepgram_api_key_env == "DEEPGRAM_API_KEY"
        assert config.max_upload_mb == 15.0
        assert config.max_upload_bytes == 15 * 1024 * 1024
        assert config.session_list_limit == 10
        assert config.allowed_mime_types == DEFAULT_ALLOWED_MIME_TYPES

    def test_invalid_language_raises(self) -> None:
        with pytest.raises(ValueError):
            OratoryConfig(default_language="fr")

    def test_empty_mime_types_raises(self) -> None:
        with pytest.raises(ValueError):
            OratoryConfig(allowed_mime_types=[])

    def test_mime_types_lowercased(self) -> None:
        config = OratoryConfig(allowed_mime_types=["Audio/WAV"])
        assert config.allowed_mime_types == ["audio/wav"]

    def test_non_positive_limit_raises(self) -> None:
        with pytest.raises(ValueError):
            OratoryConfig(session_list_limit=0)


class TestMergeConfig:
    def test_workspace_overrides_defaults(self) -> None:
        merged = merge_config({"deepgram_model": "nova-2"}, {"deepgram_model": "base", "x": 1})
        assert merged == {"deepgram_model": "nova-2", "x": 1}

    def test_feedback_merged_per_key(self) -> None:
        defaults = {"feedback": {"pacing_min_wpm": 120.0, "pacing_max_wpm": 160.0}}
        merged = merge_config({"feedback": {"pacing_max_wpm": 170}}, defaults)
        assert merged["feedback"] == {"pacing_min_wpm": 120.0, "pacing_max_wpm": 170}

    def test_none_values_ignored(self) -> None:
        merged = merge_config({"deepgram_model": None}, {"deepgram_model": "base"})
        assert merged["deepgram_model"] == "base"


class TestLoadConfig:
    def test_load(self, tmp_path: Path, sample_config_dict: dict) -> None:
        with open(tmp_path / "oratory.yaml", "w") as f:
            yaml.dump(sample_config_dict, f)

        config = load_config(tmp_path)
        assert config.workspace_name == "test-workspace"
        assert config.default_language == "es"
        assert config.deepgram_model == "nova-2"
        assert config.max_upload_mb == 10
        assert config.feedback.pacing_min_wpm == 110
        assert config.feedback.pacing_max_wpm == 170
        assert config.feedback.min_confidence == 0.85
        assert config.config_path == tmp_path / "oratory.yaml"

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path)

    def test_empty_file_uses_defaults(self, tmp_path: Path) -> None:
        (tmp_path / "oratory.yaml").write_text("")
        config = load_config(tmp_path)
        assert config.default_language == "en"

    def test_invalid_value_raises(self, tmp_path: Path) -> None:
        (tmp_path / "oratory.yaml").write_text("default_language: de\n")
        with pytest.raises(ValueError):
            load_config(tmp_path)


class TestDefaultConfig:
    def test_round_trip(self, tmp_path: Path) -> None:
        write_config(create_default_config("talks", "es"), tmp_path / "oratory.yaml")
        config = load_config(tmp_path)
        assert config.workspace_name == "talks"
        assert config.default_language == "es"
        assert config.feedback == FeedbackThresholds()
