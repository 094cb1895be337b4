"""
Pydantic models for the engine.

This module provides:
- Score: Notes plus settings and metadata, with the JSON file codec
- ScoreMetadata: Title, composer, timestamps
- ScoreSettings: Tempo, time signature, key
"""

from mozart_core.models.score import Score, ScoreMetadata, ScoreSettings, timestamp

__all__ = [
    "Score",
    "ScoreMetadata",
    "ScoreSettings",
    "timestamp",
]
