"""
oratory.transcribe - Speech-to-text client and response normalization.

Sends audio to Deepgram and converts the provider response into the
canonical TranscriptionRecord consumed by the analysis engine.
"""

from __future__ import annotations
