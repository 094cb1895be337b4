"""
Pitch primitives - PitchClass and Pitch.

PitchClass represents the 12 chromatic pitches (octave-independent).
Pitch is an absolute pitch, stored as a MIDI note number.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar

from mozart_core.constants import MAX_MIDI, MIN_MIDI
from mozart_core.errors import InvalidPitch, ParseError, TranspositionError

logger = logging.getLogger(__name__)

# Display name mappings (module level to avoid IntEnum member issues)
_SHARP_NAMES: list[str] = [
    "C",
    "C#",
    "D",
    "D#",
    "E",
    "F",
    "F#",
    "G",
    "G#",
    "A",
    "A#",
    "B",
]
_FLAT_NAMES: list[str] = [
    "C",
    "Db",
    "D",
    "Eb",
    "E",
    "F",
    "Gb",
    "G",
    "Ab",
    "A",
    "Bb",
    "B",
]

_PARSE_NAMES: dict[str, int] = {
    "C": 0,
    "C#": 1,
    "C♯": 1,
    "CS": 1,
    "DB": 1,
    "D♭": 1,
    "D": 2,
    "D#": 3,
    "D♯": 3,
    "DS": 3,
    "EB": 3,
    "E♭": 3,
    "E": 4,
    "F": 5,
    "F#": 6,
    "F♯": 6,
    "FS": 6,
    "GB": 6,
    "G♭": 6,
    "G": 7,
    "G#": 8,
    "G♯": 8,
    "GS": 8,
    "AB": 8,
    "A♭": 8,
    "A": 9,
    "A#": 10,
    "A♯": 10,
    "AS": 10,
    "BB": 10,
    "B♭": 10,
    "B": 11,
}


class PitchClass(IntEnum):
    """
    The 12 chromatic pitch classes (0-11).

    Octave-independent - C4 and C5 are both PitchClass.C.
    Enharmonic equivalents share the same value (C# == Db == 1).

    Spelling is a display concern; sharps are preferred.
    """

    C = 0
    Cs = 1  # C# / Db
    D = 2
    Ds = 3  # D# / Eb
    E = 4
    F = 5
    Fs = 6  # F# / Gb
    G = 7
    Gs = 8  # G# / Ab
    A = 9
    As = 10  # A# / Bb
    B = 11

    @property
    def semitones(self) -> int:
        """Semitones above C (0-11)."""
        return int(self.value)

    def transpose(self, semitones: int) -> PitchClass:
        """Transpose by a number of semitones (positive or negative)."""
        return PitchClass((self.value + semitones) % 12)

    def interval_to(self, other: PitchClass) -> int:
        """Ascending interval in semitones from this pitch class to another (0-11)."""
        return (other.value - self.value) % 12

    def to_midi(self, octave: int = 4) -> int:
        """Convert to MIDI note number. C4 = 60."""
        return self.value + (octave + 1) * 12

    def spell(self, prefer_flats: bool = False) -> str:
        """Get human-readable name."""
        names = _FLAT_NAMES if prefer_flats else _SHARP_NAMES
        return names[self.value]

    def __str__(self) -> str:
        return self.spell()

    @classmethod
    def from_midi(cls, midi_note: int) -> PitchClass:
        """Extract pitch class from MIDI note number."""
        return cls(midi_note % 12)

    @classmethod
    def all(cls) -> list[PitchClass]:
        """All pitch classes in chromatic order."""
        return list(cls)

    @classmethod
    def parse(cls, name: str) -> PitchClass:
        """
        Parse a pitch class from a string like 'C', 'c#', 'Db', 'F♯' or 'Gs'.

        Only the twelve sharp/flat spellings are accepted; Cb, B#, E# and
        Fb are rejected.

        Raises:
            InvalidPitch: if the spelling is not recognised
        """
        text = name.strip()
        value = _PARSE_NAMES.get(text.upper())
        if value is None:
            raise InvalidPitch(f"Unknown pitch class: {text}")

        result = cls(value)
        logger.debug("Parsed pitch class %s -> %s", text, result.spell())
        return result


@dataclass(frozen=True, order=True)
class Pitch:
    """
    An absolute pitch as a MIDI note number (0-127, 60 = middle C).

    Octaves follow scientific pitch notation: midi = (octave + 1) * 12 + class.

    Immutable and hashable.
    """

    midi: int

    MIDDLE_C: ClassVar[Pitch]

    def __post_init__(self) -> None:
        if not MIN_MIDI <= self.midi <= MAX_MIDI:
            raise InvalidPitch(f"MIDI note {self.midi} out of range (0-127)")

    @classmethod
    def from_midi(cls, midi: int) -> Pitch:
        """Create a pitch from a MIDI note number."""
        return cls(midi)

    @classmethod
    def from_pitch_class(cls, pitch_class: PitchClass, octave: int) -> Pitch:
        """
        Create a pitch from a pitch class and octave.

        Raises:
            InvalidPitch: if the result falls outside the MIDI range
        """
        midi = (octave + 1) * 12 + pitch_class.value
        if not MIN_MIDI <= midi <= MAX_MIDI:
            raise InvalidPitch(f"Pitch {pitch_class.spell()}{octave} out of MIDI range")
        return cls(midi)

    @classmethod
    def parse(cls, text: str) -> Pitch:
        """
        Parse a pitch from a string like 'C4', 'F#5', 'Bb3' or 'A-1'.

        The pitch class runs up to the first digit or minus sign; the rest
        is a signed octave number.
        """
        text = text.strip()

        octave_start = next(
            (i for i, c in enumerate(text) if c.isdigit() or c == "-"),
            None,
        )
        if octave_start is None:
            raise ParseError(f"No octave in pitch: {text}")

        pitch_class = PitchClass.parse(text[:octave_start])
        octave_str = text[octave_start:]
        try:
            octave = int(octave_str)
        except ValueError as e:
            raise ParseError(f"Invalid octave: {octave_str}") from e

        return cls.from_pitch_class(pitch_class, octave)

    @property
    def pitch_class(self) -> PitchClass:
        """The octave-independent pitch class."""
        return PitchClass.from_midi(self.midi)

    @property
    def octave(self) -> int:
        """Octave in scientific pitch notation (middle C = 4)."""
        return self.midi // 12 - 1

    def transpose(self, semitones: int) -> Pitch:
        """
        Transpose by semitones.

        Raises:
            TranspositionError: if the result leaves the MIDI range (no clamping)
        """
        new_midi = self.midi + semitones
        if not MIN_MIDI <= new_midi <= MAX_MIDI:
            raise TranspositionError(
                "Transposition would put note out of MIDI range: "
                f"{self.midi} + {semitones} = {new_midi}"
            )
        return Pitch(new_midi)

    def frequency(self) -> float:
        """Frequency in Hz (A4 = 440 Hz)."""
        return 440.0 * 2.0 ** ((self.midi - 69) / 12)

    def __str__(self) -> str:
        return f"{self.pitch_class.spell()}{self.octave}"

    def __repr__(self) -> str:
        return f"Pitch({self.midi})"


Pitch.MIDDLE_C = Pitch(60)
