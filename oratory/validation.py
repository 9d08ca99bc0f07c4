"""
oratory.validation - Input checks and environment checks.

Validates uploads and language codes before any transcription is attempted,
and provides the preflight checks behind `oratory doctor`.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Any

from oratory.config import SUPPORTED_LANGUAGES
from oratory.exceptions import DependencyError, InvalidInputError

AUDIO_EXTENSIONS = {
    ".wav": "audio/wav",
    ".mp3": "audio/mpeg",
    ".webm": "audio/webm",
    ".ogg": "audio/ogg",
    ".oga": "audio/ogg",
    ".flac": "audio/flac",
    ".mp4": "audio/mp4",
    ".m4a": "audio/m4a",
    ".aac": "audio/aac",
}


def validate_language(language: str) -> str:
    """Check that a language code is supported.

    Raises:
        InvalidInputError: If the language is not "en" or "es"
    """
    if language not in SUPPORTED_LANGUAGES:
        quoted = " or ".join(f'"{code}"' for code in SUPPORTED_LANGUAGES)
        raise InvalidInputError(f"Language must be {quoted}")
    return language


def guess_mime_type(path: Path) -> str:
    """Guess an audio MIME type from a file extension.

    Raises:
        InvalidInputError: If the extension is not a known audio format
    """
    mime_type = AUDIO_EXTENSIONS.get(path.suffix.lower())
    if mime_type is None:
        raise InvalidInputError(
            f"Unsupported audio file extension '{path.suffix}'. "
            "Supported: WAV, MP3, FLAC, OGG, WEBM, M4A, AAC"
        )
    return mime_type


def validate_audio_upload(
    audio: bytes,
    mime_type: str,
    max_bytes: int,
    allowed_mime_types: list[str],
) -> dict[str, Any]:
    """Validate an audio upload before it is sent for transcription.

    Args:
        audio: Raw audio bytes
        mime_type: Declared MIME type
        max_bytes: Maximum accepted size
        allowed_mime_types: MIME allow-list

    Returns:
        Dict with 'size_bytes' and 'mime_type'

    Raises:
        InvalidInputError: If the upload is empty, too large or of a
            disallowed type
    """
    if not audio:
        raise InvalidInputError("No audio file provided")

    if len(audio) > max_bytes:
        max_mb = max_bytes / (1024 * 1024)
        raise InvalidInputError(f"File too large. Maximum size is {max_mb:g}MB")

    normalized = mime_type.lower().strip()
    if normalized not in allowed_mime_types:
        raise InvalidInputError(
            f"Invalid file type '{mime_type}'. Supported: WAV, MP3, FLAC, OGG, WEBM, M4A, AAC"
        )

    return {"size_bytes": len(audio), "mime_type": normalized}


def check_api_key(env_var: str) -> dict[str, Any]:
    """Check that the speech-to-text API key is present in the environment.

    Raises:
        DependencyError: If the variable is unset or empty
    """
    value = os.environ.get(env_var, "")
    if not value:
        raise DependencyError(
            "deepgram",
            f"{env_var} not found in environment variables",
            f"Export {env_var}=<your key>",
        )
    return {"env_var": env_var, "masked": f"{value[:4]}…" if len(value) > 4 else "set"}


def check_store_writable(path: Path) -> dict[str, Any]:
    """Check that the session store directory can be written.

    Raises:
        DependencyError: If the directory cannot be created or written
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(dir=path, prefix=".probe-"):
            pass
    except OSError as e:
        raise DependencyError("session store", f"Cannot write to {path}: {e}") from e

    sessions = [p for p in path.iterdir() if p.is_dir() and not p.name.startswith(".")]
    return {"path": str(path), "sessions": len(sessions)}
