"""
oratory.exceptions - Custom exception classes.

All Oratory-specific exceptions inherit from OratoryError.
"""


class OratoryError(Exception):
    """Base exception for all Oratory errors."""

    pass


class ConfigError(OratoryError):
    """Configuration loading or validation error."""

    pass


class MalformedResponseError(OratoryError):
    """Transcription payload is missing required structure."""

    pass


class InvalidInputError(OratoryError):
    """Input rejected before analysis (language, upload size, MIME type, empty audio)."""

    pass


class NotFoundError(OratoryError):
    """Requested session does not exist."""

    pass


class AccessDeniedError(NotFoundError):
    """Session exists but belongs to a different user."""

    pass


class DependencyError(OratoryError):
    """Upstream transcription or storage call failed or is misconfigured."""

    def __init__(self, dependency: str, message: str, hint: str | None = None):
        self.dependency = dependency
        self.message = message
        self.hint = hint
        super().__init__(f"{dependency}: {message}")
