"""
oratory.store - File-backed session persistence.

Each session lives in its own directory under the store root:

    <session_id>/session.json           transcription + quality summary
    <session_id>/analysis/pauses.json   pauses and pause statistics
    <session_id>/analysis/fillers.json  filler occurrences and statistics
    <session_id>/analysis/quality.json  key metrics, score and feedback

Sessions are written into a hidden staging directory and renamed into place,
and deleted by renaming them aside before removal, so a session and all its
analysis documents appear and disappear together.
"""

from __future__ import annotations

import logging
import re
import shutil
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from oratory.analyze.fillers import count_fillers
from oratory.exceptions import AccessDeniedError, DependencyError, NotFoundError
from oratory.io import read_json, read_json_if_exists, write_json
from oratory.models import OratoryAnalysis, TranscriptionRecord

logger = logging.getLogger(__name__)

SESSION_ID_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]*$")
SESSION_FILE = "session.json"
ANALYSIS_DIR = "analysis"
ANALYSIS_DOCUMENTS = ("pauses", "fillers", "quality")


def build_session_documents(
    session_id: str,
    user_id: str,
    language: str,
    record: TranscriptionRecord,
    analysis: OratoryAnalysis,
    created_at: str,
) -> dict[str, dict[str, Any]]:
    """Split a session into the documents written to disk."""
    metrics = analysis.key_metrics

    session = {
        "session_id": session_id,
        "user_id": user_id,
        "language": language,
        "transcript": record.transcript,
        "confidence": record.confidence,
        "metadata": {
            "duration": record.duration_seconds,
            "channels": record.channels,
        },
        "words": [w.to_dict() for w in record.words],
        "created_at": created_at,
        "quality_summary": {
            "duration": metrics.duration_seconds,
            "wpm": metrics.words_per_minute,
            "filler_percentage": metrics.filler_percentage,
            "pause_percentage": metrics.pause_percentage,
            "quality_score": analysis.quality_score,
        },
    }

    pauses = {
        "pauses": [p.to_dict() for p in analysis.pauses],
        "statistics": analysis.pause_details.to_dict(),
    }

    fillers = {
        "filler_words": {
            form: {
                "count": len(items),
                "occurrences": [
                    {
                        "timestamp": o.timestamp,
                        "position": o.position,
                        "original_form": o.original_form,
                        "confidence": o.confidence,
                    }
                    for o in items
                ],
            }
            for form, items in count_fillers(analysis.filler_occurrences).items()
        },
        "statistics": analysis.filler_details.to_dict(),
    }

    quality = {
        "key_metrics": metrics.to_dict(),
        "quality_score": analysis.quality_score,
        "feedback": analysis.feedback.to_dict(),
    }

    return {"session": session, "pauses": pauses, "fillers": fillers, "quality": quality}


class SessionStore:
    """Stores transcriptions and their analyses, partitioned by session."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def _session_dir(self, session_id: str) -> Path:
        if not SESSION_ID_PATTERN.match(session_id or ""):
            raise NotFoundError("Session not found")
        return self.root / session_id

    def save_complete_analysis(
        self,
        session_id: str,
        user_id: str,
        language: str,
        record: TranscriptionRecord,
        analysis: OratoryAnalysis,
    ) -> str:
        """Persist a transcription and its analysis in one step.

        Returns:
            The session id

        Raises:
            DependencyError: If the session already exists or the write fails
        """
        final_dir = self._session_dir(session_id)
        created_at = datetime.now(timezone.utc).isoformat()
        documents = build_session_documents(
            session_id, user_id, language, record, analysis, created_at
        )

        try:
            self.root.mkdir(parents=True, exist_ok=True)
            if final_dir.exists():
                raise DependencyError("session store", f"Session {session_id} already exists")

            staging = Path(tempfile.mkdtemp(dir=self.root, prefix=f".{session_id}.staging-"))
            try:
                write_json(staging / SESSION_FILE, documents["session"])
                for name in ANALYSIS_DOCUMENTS:
                    write_json(staging / ANALYSIS_DIR / f"{name}.json", documents[name])
                staging.rename(final_dir)
            except Exception:
                shutil.rmtree(staging, ignore_errors=True)
                raise
        except OSError as e:
            raise DependencyError("session store", f"Failed to save session: {e}") from e

        logger.debug("Saved session %s for user %s", session_id, user_id)
        return session_id

    def get_transcription(self, session_id: str, user_id: str) -> dict[str, Any]:
        """Load the transcription document of a session owned by user_id.

        Raises:
            NotFoundError: If the session does not exist
            AccessDeniedError: If the session belongs to another user
        """
        path = self._session_dir(session_id) / SESSION_FILE
        try:
            data = read_json(path)
        except FileNotFoundError as e:
            raise NotFoundError("Session not found") from e
        except (OSError, ValueError) as e:
            raise DependencyError("session store", f"Failed to read session: {e}") from e
        if not isinstance(data, dict):
            raise DependencyError(
                "session store", f"Session {session_id} document is not an object"
            )

        if data.get("user_id") != user_id:
            raise AccessDeniedError("Access denied")

        return data

    def get_analysis(self, session_id: str) -> dict[str, Any]:
        """Load the analysis documents of a session; missing ones are None."""
        analysis_dir = self._session_dir(session_id) / ANALYSIS_DIR
        try:
            return {
                name: read_json_if_exists(analysis_dir / f"{name}.json")
                for name in ANALYSIS_DOCUMENTS
            }
        except (OSError, ValueError) as e:
            raise DependencyError("session store", f"Failed to read analysis: {e}") from e

    def get_complete_session(self, session_id: str, user_id: str) -> dict[str, Any]:
        transcription = self.get_transcription(session_id, user_id)
        return {"transcription": transcription, "analysis": self.get_analysis(session_id)}

    def list_sessions(self, user_id: str, limit: int = 10) -> list[dict[str, Any]]:
        """List a user's sessions, newest first."""
        if not self.root.exists():
            return []

        sessions = []
        try:
            for session_dir in self.root.iterdir():
                if session_dir.name.startswith(".") or not session_dir.is_dir():
                    continue
                data = read_json_if_exists(session_dir / SESSION_FILE)
                if data is None:
                    continue
                if not isinstance(data, dict):
                    raise DependencyError(
                        "session store", f"Session {session_dir.name} document is not an object"
                    )
                if data.get("user_id") != user_id:
                    continue
                sessions.append(
                    {
                        "session_id": data.get("session_id", session_dir.name),
                        "language": data.get("language"),
                        "transcript": data.get("transcript", ""),
                        "created_at": data.get("created_at", ""),
                        "quality_summary": data.get("quality_summary", {}),
                    }
                )
        except (OSError, ValueError) as e:
            raise DependencyError("session store", f"Failed to list sessions: {e}") from e

        sessions.sort(key=lambda s: s["created_at"], reverse=True)
        return sessions[:limit]

    def delete_session(self, session_id: str, user_id: str) -> bool:
        """Delete a session and all its analysis documents.

        Raises:
            NotFoundError: If the session does not exist
            AccessDeniedError: If the session belongs to another user
        """
        self.get_transcription(session_id, user_id)
        session_dir = self._session_dir(session_id)

        tombstone = None
        try:
            tombstone = Path(tempfile.mkdtemp(dir=self.root, prefix=f".{session_id}.deleted-"))
            session_dir.replace(tombstone / session_id)
        except OSError as e:
            if tombstone is not None:
                shutil.rmtree(tombstone, ignore_errors=True)
            raise DependencyError("session store", f"Failed to delete session: {e}") from e

        shutil.rmtree(tombstone, ignore_errors=True)
        logger.debug("Deleted session %s", session_id)
        return True
