"""
Oratory - Speech delivery analysis toolkit.

Takes a speech recording (or a saved speech-to-text response) and produces a
structured assessment of the speaker's delivery: pacing, filler words,
pauses and transcription clarity, each with human-readable feedback.
"""

__version__ = "0.1.0"
