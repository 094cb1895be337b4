"""
Rhythm primitives - NoteValue and NoteDuration.

Durations are quantized to MIDI ticks at TICKS_PER_QUARTER resolution.
A dot adds half the base value.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from mozart_core.constants import TICKS_PER_QUARTER
from mozart_core.errors import InvalidDuration


class NoteValue(Enum):
    """Standard note values, from whole to sixteenth."""

    WHOLE = "w"
    HALF = "h"
    QUARTER = "q"
    EIGHTH = "e"
    SIXTEENTH = "s"

    @property
    def ticks(self) -> int:
        """Duration in ticks."""
        return _VALUE_TICKS[self]

    @property
    def short_name(self) -> str:
        """One-letter code used in text notation."""
        return str(self.value)

    @classmethod
    def parse(cls, code: str) -> NoteValue:
        """
        Parse a note value from a code: w/h/q/e/s, the full name, or 1/2/4/8/16.

        Raises:
            InvalidDuration: for unknown codes
        """
        key = code.lower()
        if key not in _VALUE_CODES:
            raise InvalidDuration(f"Unknown note value: {code}")
        return _VALUE_CODES[key]

    def __str__(self) -> str:
        return self.name.lower()


_VALUE_TICKS: dict[NoteValue, int] = {
    NoteValue.WHOLE: TICKS_PER_QUARTER * 4,
    NoteValue.HALF: TICKS_PER_QUARTER * 2,
    NoteValue.QUARTER: TICKS_PER_QUARTER,
    NoteValue.EIGHTH: TICKS_PER_QUARTER // 2,
    NoteValue.SIXTEENTH: TICKS_PER_QUARTER // 4,
}

_VALUE_CODES: dict[str, NoteValue] = {
    "w": NoteValue.WHOLE,
    "whole": NoteValue.WHOLE,
    "1": NoteValue.WHOLE,
    "h": NoteValue.HALF,
    "half": NoteValue.HALF,
    "2": NoteValue.HALF,
    "q": NoteValue.QUARTER,
    "quarter": NoteValue.QUARTER,
    "4": NoteValue.QUARTER,
    "e": NoteValue.EIGHTH,
    "eighth": NoteValue.EIGHTH,
    "8": NoteValue.EIGHTH,
    "s": NoteValue.SIXTEENTH,
    "sixteenth": NoteValue.SIXTEENTH,
    "16": NoteValue.SIXTEENTH,
}


@dataclass(frozen=True)
class NoteDuration:
    """
    A note value with an optional dot.

    Immutable and hashable.
    """

    value: NoteValue
    dotted: bool = False

    # Common durations (defined after class)
    WHOLE: ClassVar[NoteDuration]
    HALF: ClassVar[NoteDuration]
    QUARTER: ClassVar[NoteDuration]
    EIGHTH: ClassVar[NoteDuration]
    SIXTEENTH: ClassVar[NoteDuration]
    DOTTED_HALF: ClassVar[NoteDuration]
    DOTTED_QUARTER: ClassVar[NoteDuration]
    DOTTED_EIGHTH: ClassVar[NoteDuration]

    def ticks(self) -> int:
        """Duration in ticks (base + base / 2 when dotted)."""
        base = self.value.ticks
        return base + base // 2 if self.dotted else base

    @classmethod
    def from_ticks(cls, ticks: int) -> NoteDuration:
        """
        Find the closest standard duration to a raw tick count.

        Candidates are checked whole to sixteenth, plain before dotted;
        the first candidate with the smallest difference wins.
        """
        best = cls.QUARTER
        best_diff: int | None = None

        for value in NoteValue:
            for dotted in (False, True):
                candidate = cls(value, dotted)
                diff = abs(candidate.ticks() - ticks)
                if best_diff is None or diff < best_diff:
                    best_diff = diff
                    best = candidate

        return best

    @classmethod
    def parse(cls, code: str) -> NoteDuration:
        """
        Parse a duration code such as 'q', 'h.' or '8'.

        An empty code is an undotted quarter.
        """
        if not code:
            return cls.QUARTER
        dotted = code.endswith(".")
        value_code = code[:-1] if dotted else code
        return cls(NoteValue.parse(value_code), dotted)

    def __str__(self) -> str:
        return f"{self.value.short_name}." if self.dotted else self.value.short_name

    def __repr__(self) -> str:
        if self.dotted:
            return f"NoteDuration({self.value!r}, dotted=True)"
        return f"NoteDuration({self.value!r})"


# Define common durations
NoteDuration.WHOLE = NoteDuration(NoteValue.WHOLE)
NoteDuration.HALF = NoteDuration(NoteValue.HALF)
NoteDuration.QUARTER = NoteDuration(NoteValue.QUARTER)
NoteDuration.EIGHTH = NoteDuration(NoteValue.EIGHTH)
NoteDuration.SIXTEENTH = NoteDuration(NoteValue.SIXTEENTH)

# Dotted versions
NoteDuration.DOTTED_HALF = NoteDuration(NoteValue.HALF, dotted=True)
NoteDuration.DOTTED_QUARTER = NoteDuration(NoteValue.QUARTER, dotted=True)
NoteDuration.DOTTED_EIGHTH = NoteDuration(NoteValue.EIGHTH, dotted=True)
