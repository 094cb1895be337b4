"""
Core music primitives.

These are the values everything else composes on:
- PitchClass: The 12 chromatic pitch classes (0-11)
- Pitch: Absolute pitch as a MIDI note number
- ScaleType: Interval table defining a scale
- Scale: Root + scale type, resolves degrees to pitch classes
- NoteValue / NoteDuration: Note lengths in ticks
- Note: A timed note event, plus the melody text notation
- AccentLevel / AccentPattern / TimeSignature: Meter and accents
"""

from mozart_core.core.meter import GROUPINGS, AccentLevel, AccentPattern, TimeSignature
from mozart_core.core.note import Note, format_melody, parse_melody
from mozart_core.core.pitch import Pitch, PitchClass
from mozart_core.core.rhythm import NoteDuration, NoteValue
from mozart_core.core.scale import Scale, ScaleType

__all__ = [
    # Pitch
    "PitchClass",
    "Pitch",
    # Scale
    "ScaleType",
    "Scale",
    # Rhythm
    "NoteValue",
    "NoteDuration",
    # Note
    "Note",
    "parse_melody",
    "format_melody",
    # Meter
    "AccentLevel",
    "AccentPattern",
    "TimeSignature",
    "GROUPINGS",
]
