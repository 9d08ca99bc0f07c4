"""
oratory.sessions - Session service.

Validates an upload, transcribes it, analyzes the transcription and
persists everything under a fresh session id. Also exposes listing,
retrieval and deletion of a user's past sessions.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Protocol

from oratory.analyze.engine import analyze_transcription
from oratory.config import OratoryConfig
from oratory.exceptions import DependencyError, InvalidInputError
from oratory.models import TranscriptionRecord
from oratory.store import SessionStore
from oratory.validation import validate_audio_upload, validate_language

logger = logging.getLogger(__name__)


class Transcriber(Protocol):
    def transcribe(self, audio: bytes, language: str, mime_type: str) -> TranscriptionRecord: ...


class SessionService:
    """Creates and manages analysis sessions for authenticated users."""

    def __init__(
        self,
        transcriber: Transcriber | None,
        store: SessionStore,
        config: OratoryConfig | None = None,
    ) -> None:
        self.transcriber = transcriber
        self.store = store
        self.config = config or OratoryConfig()

    def create_session(
        self,
        audio: bytes,
        mime_type: str,
        user_id: str,
        language: str | None = None,
        parallel: bool = False,
    ) -> dict[str, Any]:
        """Transcribe, analyze and store one recording.

        Args:
            audio: Raw audio bytes
            mime_type: Declared audio MIME type
            user_id: Owner of the new session
            language: "en" or "es" (config default when omitted)
            parallel: Run independent analysis stages concurrently

        Returns:
            Dict with 'session_id', 'transcript', 'quality', 'quality_score'
            and 'feedback'

        Raises:
            InvalidInputError: If the upload or language is rejected, or the
                transcription has no duration
            DependencyError: If transcription or storage fails
            MalformedResponseError: If the transcription response is invalid
        """
        language = validate_language(language or self.config.default_language)
        validate_audio_upload(
            audio,
            mime_type,
            max_bytes=self.config.max_upload_bytes,
            allowed_mime_types=self.config.allowed_mime_types,
        )
        if self.transcriber is None:
            raise DependencyError("transcription", "No transcriber configured")

        record = self.transcriber.transcribe(audio, language, mime_type)
        if record.duration_seconds <= 0:
            raise InvalidInputError("Audio has zero duration")

        analysis = analyze_transcription(record, self.config.feedback, parallel=parallel)

        session_id = str(uuid.uuid4())
        self.store.save_complete_analysis(session_id, user_id, language, record, analysis)
        logger.info("Created session %s (%s, %d words)", session_id, language, len(record.words))

        return {
            "session_id": session_id,
            "transcript": record.transcript,
            "quality": analysis.key_metrics.to_dict(),
            "quality_score": analysis.quality_score,
            "feedback": analysis.feedback.to_dict(),
        }

    def list_sessions(self, user_id: str, limit: int | None = None) -> list[dict[str, Any]]:
        return self.store.list_sessions(user_id, limit or self.config.session_list_limit)

    def get_session(self, session_id: str, user_id: str) -> dict[str, Any]:
        return self.store.get_complete_session(session_id, user_id)

    def delete_session(self, session_id: str, user_id: str) -> bool:
        deleted = self.store.delete_session(session_id, user_id)
        logger.info("Deleted session %s", session_id)
        return deleted
