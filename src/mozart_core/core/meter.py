"""
Meter primitives - AccentLevel, AccentPattern, TimeSignature.

Time signatures run from 2 to 15 beats over a 2, 4, 8 or 16 beat unit.
Each carries an accent pattern with one level per beat; the defaults encode
conventional groupings (7 = 3+2+2, 11 = 3+3+3+2, ...).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import IntEnum

from mozart_core.constants import (
    MAX_BEATS,
    MIN_BEATS,
    TICKS_PER_QUARTER,
    VALID_DENOMINATORS,
)
from mozart_core.errors import InvalidTimeSignature, ParseError

logger = logging.getLogger(__name__)


class AccentLevel(IntEnum):
    """Accent level for a beat."""

    WEAK = 1  # Normal volume
    MEDIUM = 2  # Secondary emphasis
    STRONG = 3  # Downbeat

    @property
    def velocity_multiplier(self) -> float:
        return _VELOCITY_MULTIPLIERS[self]

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]

    @classmethod
    def from_value(cls, value: int) -> AccentLevel:
        """3 = strong, 2 = medium, anything else = weak."""
        if value == 3:
            return cls.STRONG
        if value == 2:
            return cls.MEDIUM
        return cls.WEAK

    def next(self) -> AccentLevel:
        """Weak -> Medium -> Strong -> Weak."""
        return _CYCLE[self]


_VELOCITY_MULTIPLIERS: dict[AccentLevel, float] = {
    AccentLevel.WEAK: 0.7,
    AccentLevel.MEDIUM: 0.85,
    AccentLevel.STRONG: 1.0,
}

_SYMBOLS: dict[AccentLevel, str] = {
    AccentLevel.STRONG: ">",
    AccentLevel.MEDIUM: "-",
    AccentLevel.WEAK: ".",
}

_CYCLE: dict[AccentLevel, AccentLevel] = {
    AccentLevel.WEAK: AccentLevel.MEDIUM,
    AccentLevel.MEDIUM: AccentLevel.STRONG,
    AccentLevel.STRONG: AccentLevel.WEAK,
}

# Default patterns as accent values (3 = strong, 2 = medium, 1 = weak)
_DEFAULT_PATTERNS: dict[int, tuple[int, ...]] = {
    2: (3, 1),
    3: (3, 1, 1),
    4: (3, 1, 2, 1),
    5: (3, 1, 1, 2, 1),  # 3+2
    6: (3, 1, 1, 2, 1, 1),  # 3+3
    7: (3, 1, 1, 2, 1, 2, 1),  # 3+2+2
    8: (3, 1, 2, 1, 2, 1, 2, 1),  # 2+2+2+2
    9: (3, 1, 1, 2, 1, 1, 2, 1, 1),  # 3+3+3
    10: (3, 1, 1, 2, 1, 2, 1, 2, 1, 1),  # 3+2+2+3
    11: (3, 1, 1, 2, 1, 1, 2, 1, 1, 2, 1),  # 3+3+3+2
    12: (3, 1, 1, 2, 1, 1, 2, 1, 1, 2, 1, 1),  # 3+3+3+3
    13: (3, 1, 1, 2, 1, 1, 2, 1, 1, 2, 1, 2, 1),  # 3+3+3+2+2
    14: (3, 1, 2, 1, 2, 1, 2, 1, 2, 1, 2, 1, 2, 1),  # 2+2+2+2+2+2+2
    15: (3, 1, 1, 2, 1, 1, 2, 1, 1, 2, 1, 1, 2, 1, 1),  # 3+3+3+3+3
}


class AccentPattern:
    """
    One accent level per beat of a measure.

    Out-of-range beat indexes read as weak and are ignored on write.
    """

    __slots__ = ("accents",)

    def __init__(self, accents: Iterable[AccentLevel]) -> None:
        self.accents: list[AccentLevel] = list(accents)

    @classmethod
    def from_values(cls, values: Iterable[int]) -> AccentPattern:
        """Create a pattern from numeric values (1 = weak, 2 = medium, 3 = strong)."""
        return cls(AccentLevel.from_value(v) for v in values)

    @classmethod
    def default_for_beats(cls, beats: int) -> AccentPattern:
        """
        The conventional accent pattern for a number of beats.

        Counts outside 2-15 get strong on beat 1 and weak elsewhere.
        """
        logger.debug("Creating default accent pattern for %d beats", beats)
        values = _DEFAULT_PATTERNS.get(beats)
        if values is None:
            # Strong on 1, weak everywhere else
            return cls(AccentLevel.STRONG if i == 0 else AccentLevel.WEAK for i in range(beats))
        return cls.from_values(values)

    @classmethod
    def from_grouping(cls, grouping: str) -> AccentPattern:
        """
        Build a pattern from a beat grouping like '3+2+2' or '2+3'.

        The first group opens strong, later groups open medium, and every
        other beat is weak.

        Raises:
            ParseError: if a group is not a positive integer
        """
        accents: list[AccentLevel] = []
        for i, part in enumerate(grouping.split("+")):
            try:
                size = int(part.strip())
            except ValueError as e:
                raise ParseError(f"Invalid beat grouping: {grouping}") from e
            if size < 1:
                raise ParseError(f"Invalid beat grouping: {grouping}")
            accents.append(AccentLevel.STRONG if i == 0 else AccentLevel.MEDIUM)
            accents.extend([AccentLevel.WEAK] * (size - 1))
        return cls(accents)

    def to_values(self) -> list[int]:
        """Numeric values, as persisted."""
        return [int(a) for a in self.accents]

    def __len__(self) -> int:
        return len(self.accents)

    def get(self, beat: int) -> AccentLevel:
        """Accent at a 0-indexed beat (weak when out of range)."""
        if 0 <= beat < len(self.accents):
            return self.accents[beat]
        return AccentLevel.WEAK

    def set(self, beat: int, level: AccentLevel) -> None:
        """Set the accent at a 0-indexed beat."""
        if 0 <= beat < len(self.accents):
            self.accents[beat] = level

    def cycle(self, beat: int) -> None:
        """Cycle the accent at a beat: weak -> medium -> strong -> weak."""
        if 0 <= beat < len(self.accents):
            self.accents[beat] = self.accents[beat].next()

    def copy(self) -> AccentPattern:
        return AccentPattern(self.accents)

    def to_visual(self) -> str:
        """Visual form, e.g. '>.-.' for 4/4."""
        return "".join(a.symbol for a in self.accents)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AccentPattern):
            return NotImplemented
        return self.accents == other.accents

    def __str__(self) -> str:
        return self.to_visual()

    def __repr__(self) -> str:
        return f"AccentPattern.from_values({self.to_values()!r})"


class TimeSignature:
    """
    A time signature with a customizable accent pattern.

    Examples:
        TimeSignature(4, 4) = common time, accents > . - .
        TimeSignature(7, 8) = 3+2+2, accents > . . - . - .
    """

    __slots__ = ("numerator", "denominator", "accents")

    def __init__(
        self,
        numerator: int,
        denominator: int,
        accents: AccentPattern | None = None,
    ) -> None:
        """
        Create a time signature.

        A custom accent pattern whose length differs from the numerator is
        replaced by the default pattern; check len(ts.accents) if it matters.

        Raises:
            InvalidTimeSignature: if numerator is not 2-15 or denominator
                is not 2, 4, 8 or 16
        """
        self.validate(numerator, denominator)
        self.numerator = numerator
        self.denominator = denominator

        if accents is None:
            self.accents = AccentPattern.default_for_beats(numerator)
            logger.debug(
                "Created time signature %d/%d with accents: %s",
                numerator,
                denominator,
                self.accents,
            )
        elif len(accents) != numerator:
            logger.warning(
                "Accent pattern length %d doesn't match numerator %d, using default",
                len(accents),
                numerator,
            )
            self.accents = AccentPattern.default_for_beats(numerator)
        else:
            self.accents = accents.copy()

    @staticmethod
    def validate(numerator: int, denominator: int) -> None:
        if not MIN_BEATS <= numerator <= MAX_BEATS or denominator not in VALID_DENOMINATORS:
            raise InvalidTimeSignature(numerator, denominator)

    @classmethod
    def common(cls) -> TimeSignature:
        """4/4"""
        return cls(4, 4)

    @classmethod
    def waltz(cls) -> TimeSignature:
        """3/4"""
        return cls(3, 4)

    @classmethod
    def cut(cls) -> TimeSignature:
        """2/2"""
        return cls(2, 2)

    @classmethod
    def compound_duple(cls) -> TimeSignature:
        """6/8"""
        return cls(6, 8)

    def ticks_per_beat(self) -> int:
        """Ticks per beat unit (480 * 4 / denominator)."""
        return TICKS_PER_QUARTER * 4 // self.denominator

    def ticks_per_measure(self) -> int:
        return self.ticks_per_beat() * self.numerator

    def beat_at_tick(self, tick: int) -> int:
        """Which beat (0-indexed) of its measure a tick falls on."""
        return (tick % self.ticks_per_measure()) // self.ticks_per_beat()

    def measure_at_tick(self, tick: int) -> int:
        """Which measure (0-indexed) a tick falls in."""
        return tick // self.ticks_per_measure()

    def accent_at_tick(self, tick: int) -> AccentLevel:
        return self.accents.get(self.beat_at_tick(tick))

    def is_on_beat(self, tick: int) -> bool:
        return tick % self.ticks_per_beat() == 0

    def is_downbeat(self, tick: int) -> bool:
        return tick % self.ticks_per_measure() == 0

    def set_accents(self, accents: AccentPattern) -> bool:
        """
        Install a custom accent pattern.

        A pattern of the wrong length is ignored and a warning is logged.

        Returns:
            True if the pattern was installed
        """
        if len(accents) != self.numerator:
            logger.warning(
                "Cannot set accent pattern with %d beats for %s time",
                len(accents),
                self,
            )
            return False
        self.accents = accents.copy()
        return True

    def copy(self) -> TimeSignature:
        return TimeSignature(self.numerator, self.denominator, self.accents)

    @classmethod
    def parse(cls, notation: str) -> TimeSignature:
        """
        Parse a time signature from notation like '4/4', '7/8'.

        Raises:
            ParseError: for malformed text
            InvalidTimeSignature: for unsupported values
        """
        parts = notation.split("/")
        if len(parts) != 2:
            raise ParseError(f"Invalid time signature format: {notation}")

        try:
            numerator = int(parts[0].strip())
        except ValueError as e:
            raise ParseError(f"Invalid numerator: {parts[0]}") from e
        try:
            denominator = int(parts[1].strip())
        except ValueError as e:
            raise ParseError(f"Invalid denominator: {parts[1]}") from e

        return cls(numerator, denominator)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TimeSignature):
            return NotImplemented
        return (
            self.numerator == other.numerator
            and self.denominator == other.denominator
            and self.accents == other.accents
        )

    def __str__(self) -> str:
        return f"{self.numerator}/{self.denominator}"

    def __repr__(self) -> str:
        return f"TimeSignature({self.numerator}, {self.denominator}, {self.accents!r})"


# Alternative groupings for odd meters, by beat count
GROUPINGS: dict[int, tuple[str, ...]] = {
    5: ("3+2", "2+3"),
    7: ("3+2+2", "2+2+3", "2+3+2"),
    11: ("3+3+3+2", "3+3+2+3", "3+2+3+3", "2+3+3+3"),
}
