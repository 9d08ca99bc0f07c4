"""
oratory.analyze - Delivery analysis engine.

Derives pause statistics, filler statistics, key metrics, a composite
quality score and categorized feedback from a normalized transcription.
Every stage is a pure function of its input records.
"""

from __future__ import annotations
