"""
Mozart core - a monophonic score engine.

Pitch and scale algebra, tick-based notes and meter, chromatic and diatonic
transposition, and Standard MIDI File export.
"""

from mozart_core.compiler.midi import MidiExporter, export_to_midi, export_to_midi_file
from mozart_core.constants import TICKS_PER_QUARTER
from mozart_core.core import (
    AccentLevel,
    AccentPattern,
    Note,
    NoteDuration,
    NoteValue,
    Pitch,
    PitchClass,
    Scale,
    ScaleType,
    TimeSignature,
    format_melody,
    parse_melody,
)
from mozart_core.errors import (
    FileError,
    InvalidDuration,
    InvalidPitch,
    InvalidScale,
    InvalidTimeSignature,
    MidiError,
    MozartError,
    ParseError,
    SerializationError,
    TranspositionError,
)
from mozart_core.models.score import Score
from mozart_core.transpose import (
    ChromaticMode,
    DiatonicMode,
    TransposeMode,
    detect_scale,
    transpose_note,
    transpose_notes,
)

__version__ = "0.1.0"

__all__ = [
    "TICKS_PER_QUARTER",
    # Core
    "AccentLevel",
    "AccentPattern",
    "Note",
    "NoteDuration",
    "NoteValue",
    "Pitch",
    "PitchClass",
    "Scale",
    "ScaleType",
    "TimeSignature",
    "format_melody",
    "parse_melody",
    # Score
    "Score",
    # Transposition
    "ChromaticMode",
    "DiatonicMode",
    "TransposeMode",
    "detect_scale",
    "transpose_note",
    "transpose_notes",
    # MIDI
    "MidiExporter",
    "export_to_midi",
    "export_to_midi_file",
    # Errors
    "FileError",
    "InvalidDuration",
    "InvalidPitch",
    "InvalidScale",
    "InvalidTimeSignature",
    "MidiError",
    "MozartError",
    "ParseError",
    "SerializationError",
    "TranspositionError",
]
