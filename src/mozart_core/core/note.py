"""
Note representation and the melody text notation.

A Note combines pitch, timing, duration, velocity and voice. Melodies are
written as space-separated tokens such as "C4q D4e. F#5h R E4", where a
token starting with R is a rest.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, replace
from typing import Any

from mozart_core.constants import DEFAULT_VELOCITY, MAX_MIDI, MAX_VELOCITY
from mozart_core.core.pitch import Pitch
from mozart_core.core.rhythm import NoteDuration
from mozart_core.errors import ParseError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Note:
    """
    A single note event.

    All times are in ticks, absolute from the start of the score.
    Notes are values: they hold no references to anything else.
    """

    pitch: int  # MIDI note number (0-127)
    start_tick: int  # Absolute start time in ticks
    duration_ticks: int  # Duration in ticks
    velocity: int = DEFAULT_VELOCITY  # 0-127
    voice: int = 0  # 0 = main melody, 1+ = harmony voices

    def __post_init__(self) -> None:
        """Validate MIDI ranges."""
        if not 0 <= self.pitch <= MAX_MIDI:
            raise ValueError(f"Pitch must be 0-127, got {self.pitch}")
        if not 0 <= self.velocity <= MAX_VELOCITY:
            raise ValueError(f"Velocity must be 0-127, got {self.velocity}")
        if self.start_tick < 0:
            raise ValueError(f"Start tick must be >= 0, got {self.start_tick}")
        if self.duration_ticks < 0:
            raise ValueError(f"Duration ticks must be >= 0, got {self.duration_ticks}")
        if not 0 <= self.voice <= 255:
            raise ValueError(f"Voice must be 0-255, got {self.voice}")

    @classmethod
    def with_velocity(
        cls,
        pitch: int,
        start_tick: int,
        duration_ticks: int,
        velocity: int,
        voice: int = 0,
    ) -> Note:
        """Create a note, clamping velocity to 127."""
        return cls(pitch, start_tick, duration_ticks, min(velocity, MAX_VELOCITY), voice)

    @classmethod
    def from_pitch(cls, pitch: Pitch, start_tick: int, duration: NoteDuration) -> Note:
        """Create a note from a Pitch and a NoteDuration."""
        return cls(pitch.midi, start_tick, duration.ticks())

    @property
    def end_tick(self) -> int:
        return self.start_tick + self.duration_ticks

    def to_pitch(self) -> Pitch:
        return Pitch(self.pitch)

    def duration(self) -> NoteDuration:
        """The closest standard duration."""
        return NoteDuration.from_ticks(self.duration_ticks)

    def with_pitch(self, pitch: int) -> Note:
        """Copy of this note with a different pitch."""
        return replace(self, pitch=pitch)

    @classmethod
    def parse(cls, token: str, start_tick: int = 0) -> Note:
        """
        Parse a note token like 'C4q', 'F#5h.' or 'Bb3' placed at start_tick.

        The duration code starts at the first letter that follows the
        octave number; without one the note is an undotted quarter.

        Raises:
            ParseError: for empty or malformed tokens
            InvalidPitch: for unknown pitch classes or out-of-range pitches
            InvalidDuration: for unknown duration codes
        """
        text = token.strip()
        logger.debug("Parsing note: %s at tick %d", text, start_tick)

        if not text:
            raise ParseError("Empty note string")

        pitch_end = len(text)
        found_octave = False
        for i, c in enumerate(text):
            if c.isdigit() or c == "-":
                found_octave = True
            elif found_octave and c.isalpha():
                pitch_end = i
                break

        pitch = Pitch.parse(text[:pitch_end])
        duration = NoteDuration.parse(text[pitch_end:])

        logger.debug(
            "Parsed note: pitch=%s, duration=%s, ticks=%d", pitch, duration, duration.ticks()
        )
        return cls.from_pitch(pitch, start_tick, duration)

    def to_text(self) -> str:
        """Format as text notation, e.g. 'C4q' or 'F#5h.'."""
        return f"{self.to_pitch()}{self.duration()}"

    def __str__(self) -> str:
        return self.to_text()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "pitch": self.pitch,
            "start_tick": self.start_tick,
            "duration_ticks": self.duration_ticks,
            "velocity": self.velocity,
            "voice": self.voice,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Note:
        """Create from dictionary. A missing voice defaults to 0."""
        return cls(
            pitch=d["pitch"],
            start_tick=d["start_tick"],
            duration_ticks=d["duration_ticks"],
            velocity=d.get("velocity", DEFAULT_VELOCITY),
            voice=d.get("voice", 0),
        )


def _is_rest(token: str) -> bool:
    return token[:1] in ("R", "r")


def parse_melody(text: str) -> list[Note]:
    """
    Parse a melody string into notes.

    Tokens are processed left to right with a running tick cursor that
    starts at 0. Rests advance the cursor; notes are placed at the cursor
    and advance it by their duration.

    Any malformed token aborts the whole melody.

    Example:
        parse_melody("C4q R E4h.")  # notes at ticks 0 and 960
    """
    logger.info("Parsing melody: %s", text)
    notes: list[Note] = []
    current_tick = 0

    for token in text.split():
        if _is_rest(token):
            duration = NoteDuration.parse(token[1:])
            current_tick += duration.ticks()
            logger.debug("Rest: duration=%s, new_tick=%d", duration, current_tick)
            continue

        note = Note.parse(token, current_tick)
        current_tick = note.end_tick
        notes.append(note)

    logger.info("Parsed %d notes, total duration: %d ticks", len(notes), current_tick)
    return notes


def format_melody(notes: Iterable[Note]) -> str:
    """
    Format notes as a melody string.

    Rests are not written back: gaps between notes are dropped, so text
    with rests does not round-trip to the same string.
    """
    return " ".join(note.to_text() for note in notes)
