"""
oratory.transcribe.engine - Deepgram transcription client.

Posts raw audio bytes to the Deepgram prerecorded endpoint with a fixed
set of options (punctuation and filler-word tagging on, formatting and
diarization off) and normalizes the response.
"""

from __future__ import annotations

import logging
import os
from typing import Any

import httpx

from oratory.exceptions import DependencyError
from oratory.models import TranscriptionRecord
from oratory.transcribe.normalize import normalize_response

logger = logging.getLogger(__name__)

DEEPGRAM_LISTEN_PATH = "/v1/listen"


def build_request_params(language: str, model: str = "base") -> dict[str, str]:
    """Build the Deepgram query options for a language."""
    return {
        "model": model,
        "language": language,
        "punctuate": "true",
        "filler_words": "true",
        "smart_format": "false",
        "numerals": "false",
        "diarize": "false",
    }


class DeepgramTranscriber:
    """Deepgram prerecorded transcription client."""

    def __init__(
        self,
        api_key: str,
        model: str = "base",
        base_url: str = "https://api.deepgram.com",
        timeout: float = 120.0,
        client: httpx.Client | None = None,
    ) -> None:
        if not api_key:
            raise DependencyError(
                "deepgram",
                "API key is empty",
                "Set DEEPGRAM_API_KEY in the environment",
            )
        self.api_key = api_key
        self.model = model
        self._client = client or httpx.Client(base_url=base_url, timeout=timeout)

    def request(self, audio: bytes, language: str, mime_type: str) -> dict[str, Any]:
        """Send audio to Deepgram and return the raw JSON response.

        Raises:
            DependencyError: On transport failure, non-2xx status or a
                non-JSON body
        """
        logger.debug(
            "Sending %d bytes of %s audio to Deepgram (%s)", len(audio), mime_type, language
        )

        try:
            response = self._client.post(
                DEEPGRAM_LISTEN_PATH,
                params=build_request_params(language, self.model),
                headers={
                    "Authorization": f"Token {self.api_key}",
                    "Content-Type": mime_type,
                },
                content=audio,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise DependencyError(
                "deepgram",
                f"Transcription failed with status {e.response.status_code}: {e.response.text}",
            ) from e
        except httpx.HTTPError as e:
            raise DependencyError("deepgram", f"Transcription failed: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise DependencyError("deepgram", f"Response is not valid JSON: {e}") from e

    def transcribe(self, audio: bytes, language: str, mime_type: str) -> TranscriptionRecord:
        """Transcribe audio and normalize the result.

        Raises:
            DependencyError: If the Deepgram call fails
            MalformedResponseError: If the response lacks required structure
        """
        payload = self.request(audio, language, mime_type)
        record = normalize_response(payload, language)
        logger.debug(
            "Transcribed %d words over %.1fs", len(record.words), record.duration_seconds
        )
        return record

    def close(self) -> None:
        self._client.close()


def create_transcriber_from_config(config: Any) -> DeepgramTranscriber:
    """Create a Deepgram client from OratoryConfig.

    The API key is read from the environment variable named by
    ``config.deepgram_api_key_env``.

    Raises:
        DependencyError: If the API key is not set
    """
    api_key = os.environ.get(config.deepgram_api_key_env, "")
    if not api_key:
        raise DependencyError(
            "deepgram",
            f"{config.deepgram_api_key_env} not found in environment variables",
            f"Export {config.deepgram_api_key_env}=<your key> before transcribing",
        )

    return DeepgramTranscriber(
        api_key=api_key,
        model=config.deepgram_model,
        base_url=config.deepgram_base_url,
        timeout=config.request_timeout_seconds,
    )

