"""
oratory.utils - Shared utility functions.

Contains common formatting functions used by the CLI and the session store.
"""

from __future__ import annotations


def format_duration(seconds: float) -> str:
    """Format seconds as HH:MM:SS or MM:SS.

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted string (HH:MM:SS if >= 1 hour, otherwise MM:SS)
    """
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    secs = int(seconds % 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def get_score_style(score: float) -> str:
    """Get rich style name for a 0-100 quality score.

    Args:
        score: Quality score (0 to 100)

    Returns:
        Style name: "green" (high), "yellow" (medium), or "red" (low)
    """
    if score >= 70:
        return "green"
    elif score >= 40:
        return "yellow"
    return "red"


def truncate(text: str, length: int = 60) -> str:
    """Shorten text for table display, appending an ellipsis when cut."""
    text = " ".join(text.split())
    if len(text) <= length:
        return text
    return text[: length - 1].rstrip() + "…"
