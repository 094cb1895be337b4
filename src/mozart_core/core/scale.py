"""
Scale primitives - ScaleType and Scale.

Scales are fixed interval tables applied to a root pitch class.
Scale degrees are 1-based positions (1-7) within a scale.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from mozart_core.core.pitch import PitchClass
from mozart_core.errors import InvalidScale

logger = logging.getLogger(__name__)


class ScaleType(str, Enum):
    """
    The scale types supported by the transposition engine.

    The value is the name used in persisted scores.
    """

    MAJOR = "Major"  # Ionian
    NATURAL_MINOR = "NaturalMinor"  # Aeolian
    HARMONIC_MINOR = "HarmonicMinor"
    MELODIC_MINOR = "MelodicMinor"  # Ascending form
    DORIAN = "Dorian"
    PHRYGIAN = "Phrygian"
    LYDIAN = "Lydian"
    MIXOLYDIAN = "Mixolydian"
    LOCRIAN = "Locrian"

    @property
    def intervals(self) -> tuple[int, ...]:
        """Semitone offsets from the root, ascending, starting at 0."""
        return _INTERVALS[self]

    @property
    def display_name(self) -> str:
        """Human-readable name, e.g. 'Natural Minor'."""
        return _DISPLAY_NAMES[self]

    @classmethod
    def all(cls) -> list[ScaleType]:
        """All scale types."""
        return list(cls)

    @classmethod
    def parse(cls, name: str) -> ScaleType:
        """
        Parse a scale type from names like 'major', 'minor', 'harmonic_minor', 'mixo'.

        Persisted variant names ('NaturalMinor') are accepted too.

        Raises:
            InvalidScale: for unknown names
        """
        key = name.strip().lower()
        for member in cls:
            if member.value.lower() == key:
                return member
        if key not in _ALIASES:
            raise InvalidScale(f"Unknown scale: {key}")
        return _ALIASES[key]

    def __str__(self) -> str:
        return self.display_name


_INTERVALS: dict[ScaleType, tuple[int, ...]] = {
    ScaleType.MAJOR: (0, 2, 4, 5, 7, 9, 11),  # W W H W W W H
    ScaleType.NATURAL_MINOR: (0, 2, 3, 5, 7, 8, 10),  # W H W W H W W
    ScaleType.HARMONIC_MINOR: (0, 2, 3, 5, 7, 8, 11),  # W H W W H W+H H
    ScaleType.MELODIC_MINOR: (0, 2, 3, 5, 7, 9, 11),  # W H W W W W H
    ScaleType.DORIAN: (0, 2, 3, 5, 7, 9, 10),  # W H W W W H W
    ScaleType.PHRYGIAN: (0, 1, 3, 5, 7, 8, 10),  # H W W W H W W
    ScaleType.LYDIAN: (0, 2, 4, 6, 7, 9, 11),  # W W W H W W H
    ScaleType.MIXOLYDIAN: (0, 2, 4, 5, 7, 9, 10),  # W W H W W H W
    ScaleType.LOCRIAN: (0, 1, 3, 5, 6, 8, 10),  # H W W H W W W
}

_DISPLAY_NAMES: dict[ScaleType, str] = {
    ScaleType.MAJOR: "Major",
    ScaleType.NATURAL_MINOR: "Natural Minor",
    ScaleType.HARMONIC_MINOR: "Harmonic Minor",
    ScaleType.MELODIC_MINOR: "Melodic Minor",
    ScaleType.DORIAN: "Dorian",
    ScaleType.PHRYGIAN: "Phrygian",
    ScaleType.LYDIAN: "Lydian",
    ScaleType.MIXOLYDIAN: "Mixolydian",
    ScaleType.LOCRIAN: "Locrian",
}

_ALIASES: dict[str, ScaleType] = {
    "major": ScaleType.MAJOR,
    "maj": ScaleType.MAJOR,
    "ionian": ScaleType.MAJOR,
    "minor": ScaleType.NATURAL_MINOR,
    "min": ScaleType.NATURAL_MINOR,
    "natural minor": ScaleType.NATURAL_MINOR,
    "natural_minor": ScaleType.NATURAL_MINOR,
    "aeolian": ScaleType.NATURAL_MINOR,
    "harmonic minor": ScaleType.HARMONIC_MINOR,
    "harmonic_minor": ScaleType.HARMONIC_MINOR,
    "harm": ScaleType.HARMONIC_MINOR,
    "melodic minor": ScaleType.MELODIC_MINOR,
    "melodic_minor": ScaleType.MELODIC_MINOR,
    "mel": ScaleType.MELODIC_MINOR,
    "dorian": ScaleType.DORIAN,
    "dor": ScaleType.DORIAN,
    "phrygian": ScaleType.PHRYGIAN,
    "phryg": ScaleType.PHRYGIAN,
    "lydian": ScaleType.LYDIAN,
    "lyd": ScaleType.LYDIAN,
    "mixolydian": ScaleType.MIXOLYDIAN,
    "mixo": ScaleType.MIXOLYDIAN,
    "locrian": ScaleType.LOCRIAN,
    "loc": ScaleType.LOCRIAN,
}


@dataclass(frozen=True)
class Scale:
    """
    A scale is a root pitch class plus a scale type.

    This is the context for resolving scale degrees to pitch classes.

    Examples:
        Scale(PitchClass.C, ScaleType.MAJOR) = C major
        Scale(PitchClass.A, ScaleType.NATURAL_MINOR) = A minor
    """

    root: PitchClass
    scale_type: ScaleType

    @classmethod
    def c_major(cls) -> Scale:
        return cls(PitchClass.C, ScaleType.MAJOR)

    @classmethod
    def a_minor(cls) -> Scale:
        return cls(PitchClass.A, ScaleType.NATURAL_MINOR)

    def pitch_classes(self) -> list[PitchClass]:
        """The seven pitch classes of this scale, in degree order."""
        return [self.root.transpose(i) for i in self.scale_type.intervals]

    def contains(self, pitch_class: PitchClass) -> bool:
        """Check whether a pitch class belongs to the scale."""
        return self.root.interval_to(pitch_class) in self.scale_type.intervals

    def degree_of(self, pitch_class: PitchClass) -> int | None:
        """
        Get the scale degree (1-7) of a pitch class.

        Returns None if the pitch class is not in the scale.
        """
        interval = self.root.interval_to(pitch_class)
        intervals = self.scale_type.intervals
        if interval not in intervals:
            return None
        return intervals.index(interval) + 1

    def degree(self, degree: int) -> PitchClass | None:
        """Get the pitch class at a scale degree (1-7), or None if out of range."""
        if not 1 <= degree <= 7:
            return None
        return self.root.transpose(self.scale_type.intervals[degree - 1])

    def nearest_scale_tone(self, pitch_class: PitchClass) -> tuple[PitchClass, int]:
        """
        Snap a pitch class to the scale.

        Returns the scale tone and the signed adjustment in semitones.
        In-scale pitch classes come back unchanged with adjustment 0.

        Scale tones are scanned in table order and each is tried as
        diff, diff - 12 and diff + 12; only a strictly smaller distance
        replaces the current best, so ties keep the first one found.
        """
        interval = self.root.interval_to(pitch_class)
        intervals = self.scale_type.intervals

        if interval in intervals:
            return pitch_class, 0

        best_adjustment = 127
        for scale_interval in intervals:
            diff = scale_interval - interval
            for adjustment in (diff, diff - 12, diff + 12):
                if abs(adjustment) < abs(best_adjustment):
                    best_adjustment = adjustment

        nearest = pitch_class.transpose(best_adjustment)
        logger.debug(
            "Nearest scale tone for %s in %s: %s (adjustment: %d)",
            pitch_class.spell(),
            self,
            nearest.spell(),
            best_adjustment,
        )
        return nearest, best_adjustment

    @classmethod
    def parse(cls, text: str) -> Scale:
        """
        Parse a scale from a string like 'C major', 'F# minor', 'Bb dorian'.

        A bare root defaults to major.
        """
        parts = text.strip().split(" ", 1)
        if not parts[0]:
            raise InvalidScale("Empty scale string")

        root = PitchClass.parse(parts[0])
        scale_type = ScaleType.parse(parts[1]) if len(parts) > 1 else ScaleType.MAJOR
        return cls(root, scale_type)

    def __str__(self) -> str:
        return f"{self.root.spell()} {self.scale_type.display_name}"

    def __repr__(self) -> str:
        return f"Scale({self.root!r}, {self.scale_type!r})"
