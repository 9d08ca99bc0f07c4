"""
oratory.config - YAML config loading, default merging, validation.

Handles loading oratory.yaml from a workspace directory, merging it over
the built-in defaults, and validating all parameters.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

SUPPORTED_LANGUAGES = ("en", "es")

CONFIG_FILENAME = "oratory.yaml"

DEFAULT_ALLOWED_MIME_TYPES = [
    "audio/wav",
    "audio/mpeg",
    "audio/mp3",
    "audio/webm",
    "audio/ogg",
    "audio/flac",
    "audio/mp4",
    "audio/m4a",
    "audio/aac",
    "audio/x-m4a",
]


class FeedbackThresholds(BaseModel):
    """Thresholds used by the feedback rules."""

    pacing_min_wpm: float = Field(default=120.0, gt=0.0)
    pacing_max_wpm: float = Field(default=160.0, gt=0.0)
    filler_percentage: float = Field(default=3.0, ge=0.0, le=100.0)
    long_pause_seconds: float = Field(default=2.0, gt=0.0)
    pause_percentage: float = Field(default=20.0, ge=0.0, le=100.0)
    min_confidence: float = Field(default=0.85, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def validate_pacing_window(self) -> FeedbackThresholds:
        if self.pacing_min_wpm >= self.pacing_max_wpm:
            raise ValueError("pacing_min_wpm must be lower than pacing_max_wpm")
        return self


class OratoryConfig(BaseModel):
    """Resolved configuration for an Oratory workspace."""

    workspace_name: str = "untitled"
    default_language: str = "en"

    deepgram_model: str = "base"
    deepgram_api_key_env: str = "DEEPGRAM_API_KEY"
    deepgram_base_url: str = "https://api.deepgram.com"
    request_timeout_seconds: float = Field(default=120.0, gt=0.0)

    max_upload_mb: float = Field(default=15.0, gt=0.0)
    allowed_mime_types: list[str] = Field(
        default_factory=lambda: list(DEFAULT_ALLOWED_MIME_TYPES)
    )

    session_list_limit: int = Field(default=10, gt=0)

    feedback: FeedbackThresholds = Field(default_factory=FeedbackThresholds)

    config_path: Path | None = None

    @field_validator("default_language")
    @classmethod
    def validate_language(cls, v: str) -> str:
        if v not in SUPPORTED_LANGUAGES:
            raise ValueError(f"default_language must be one of: {set(SUPPORTED_LANGUAGES)}")
        return v

    @field_validator("allowed_mime_types")
    @classmethod
    def validate_mime_types(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("allowed_mime_types must not be empty")
        return [m.lower() for m in v]

    @property
    def max_upload_bytes(self) -> int:
        return int(self.max_upload_mb * 1024 * 1024)


def merge_config(project_config: dict[str, Any], defaults: dict[str, Any]) -> dict[str, Any]:
    """Merge workspace config over defaults. Workspace config takes precedence."""
    merged = defaults.copy()
    for key, value in project_config.items():
        if key == "feedback" and isinstance(value, dict):
            merged["feedback"] = {**merged.get("feedback", {}), **value}
        elif value is not None:
            merged[key] = value
    return merged


def load_config(workspace_dir: Path) -> OratoryConfig:
    """Load and validate configuration from a workspace directory."""
    config_file = workspace_dir / CONFIG_FILENAME
    if not config_file.exists():
        raise FileNotFoundError(f"No {CONFIG_FILENAME} found in {workspace_dir}")

    with open(config_file) as f:
        raw_config = yaml.safe_load(f) or {}

    merged = merge_config(raw_config, OratoryConfig().model_dump(exclude={"config_path"}))
    merged["config_path"] = config_file

    return OratoryConfig(**merged)


def create_default_config(workspace_name: str, language: str = "en") -> dict[str, Any]:
    """Create a default config for a new workspace."""
    return {
        "workspace_name": workspace_name,
        "default_language": language,
        "deepgram_model": "base",
        "deepgram_api_key_env": "DEEPGRAM_API_KEY",
        "max_upload_mb": 15,
        "session_list_limit": 10,
        "feedback": FeedbackThresholds().model_dump(),
    }


def write_config(config: dict[str, Any], path: Path) -> None:
    """Write configuration to a YAML file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)
