"""
Transposition engine - chromatic and diatonic.

Chromatic transposition shifts every pitch by a fixed number of semitones.
Diatonic transposition moves notes by scale degrees and remaps them through
a target scale, which may differ from the source (a key change).

Two modulo policies live side by side here: pitch-class arithmetic wraps with
Python's floor modulo, while the diatonic octave math divides the signed
degree count toward zero. Swapping one for the other shifts octaves on
downward moves.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace

from mozart_core.core.note import Note
from mozart_core.core.pitch import Pitch, PitchClass
from mozart_core.core.scale import Scale, ScaleType
from mozart_core.errors import TranspositionError

logger = logging.getLogger(__name__)

_INTERVAL_NAMES: dict[int, str] = {
    1: "minor 2nd",
    2: "major 2nd",
    3: "minor 3rd",
    4: "major 3rd",
    5: "perfect 4th",
    6: "tritone",
    7: "perfect 5th",
    8: "minor 6th",
    9: "major 6th",
    10: "minor 7th",
    11: "major 7th",
    12: "octave",
}

_DEGREE_NAMES: dict[int, str] = {
    0: "unison",
    1: "2nd",
    2: "3rd",
    3: "4th",
    4: "5th",
    5: "6th",
    6: "7th",
    7: "octave",
}


@dataclass(frozen=True)
class ChromaticMode:
    """Shift by a fixed number of semitones."""

    semitones: int

    def describe(self) -> str:
        if self.semitones == 0:
            return "No transposition"
        direction = "up" if self.semitones >= 0 else "down"
        interval = abs(self.semitones)
        name = _INTERVAL_NAMES.get(interval)
        if name is None:
            return f"{direction} {interval} semitones"
        return f"{direction} a {name}"


@dataclass(frozen=True)
class DiatonicMode:
    """Shift by scale degrees, reading from source_scale and writing into target_scale."""

    source_scale: Scale
    target_scale: Scale
    degrees: int

    @property
    def changes_key(self) -> bool:
        return self.source_scale != self.target_scale

    def describe(self) -> str:
        direction = "up" if self.degrees >= 0 else "down"
        steps = abs(self.degrees)
        name = _DEGREE_NAMES.get(steps)
        if name is None:
            return f"{direction} {steps} degrees"
        if not self.changes_key:
            return f"Diatonic {direction} a {name} in {self.source_scale}"
        return f"Diatonic {direction} a {name} from {self.source_scale} to {self.target_scale}"


TransposeMode = ChromaticMode | DiatonicMode


def chromatic(semitones: int) -> ChromaticMode:
    """Chromatic transposition by semitones."""
    return ChromaticMode(semitones)


def diatonic(scale: Scale, degrees: int) -> DiatonicMode:
    """Diatonic transposition within one scale."""
    return DiatonicMode(scale, scale, degrees)


def diatonic_with_key_change(source: Scale, target: Scale, degrees: int) -> DiatonicMode:
    """Diatonic transposition that lands in a different scale."""
    return DiatonicMode(source, target, degrees)


def describe(mode: TransposeMode) -> str:
    """Human-readable description, e.g. 'up a major 3rd'."""
    return mode.describe()


def _trunc_divmod(value: int, divisor: int) -> tuple[int, int]:
    """Quotient and remainder with the quotient rounded toward zero."""
    quotient = abs(value) // divisor
    if value < 0:
        quotient = -quotient
    return quotient, value - divisor * quotient


def transpose_pitch_chromatic(pitch: Pitch, semitones: int) -> Pitch:
    """
    Transpose a pitch by semitones.

    Raises:
        TranspositionError: if the result leaves the MIDI range
    """
    logger.debug("Chromatic transpose: %s by %d semitones", pitch, semitones)
    return pitch.transpose(semitones)


def transpose_pitch_diatonic(
    pitch: Pitch,
    source_scale: Scale,
    target_scale: Scale,
    degrees: int,
) -> Pitch:
    """
    Transpose a pitch by scale degrees.

    The pitch is located in source_scale, moved by `degrees` and read back
    from target_scale. A pitch outside the source scale is first snapped to
    its nearest scale tone; the semitone offset of that snap is dropped.

    The octave moves by one for every full seven degrees, plus one more when
    the remaining steps wrap past C.

    Raises:
        TranspositionError: if a degree lookup fails
        InvalidPitch: if the result leaves the MIDI range
    """
    pc = pitch.pitch_class
    octave = pitch.octave
    logger.debug(
        "Diatonic transpose: %s by %d degrees from %s to %s",
        pitch,
        degrees,
        source_scale,
        target_scale,
    )

    source_degree = source_scale.degree_of(pc)
    if source_degree is None:
        # The snap offset is not carried into the result octave
        nearest, _adjustment = source_scale.nearest_scale_tone(pc)
        source_degree = source_scale.degree_of(nearest)
        if source_degree is None:
            raise TranspositionError(f"Could not find scale degree for {pc} in {source_scale}")
        logger.debug(
            "%s not in %s, using nearest %s (degree %d)", pc, source_scale, nearest, source_degree
        )

    raw_degree = source_degree + degrees
    new_degree = (raw_degree - 1) % 7 + 1

    new_pc = target_scale.degree(new_degree)
    if new_pc is None:
        raise TranspositionError(f"Invalid degree {new_degree} in target scale")

    full_octaves, remaining = _trunc_divmod(degrees, 7)
    boundary = 0
    if remaining > 0 and new_pc.semitones < pc.semitones:
        boundary = 1
    elif remaining < 0 and new_pc.semitones > pc.semitones:
        boundary = -1

    new_octave = octave + full_octaves + boundary
    logger.debug("Result: degree %d in %s = %s%d", new_degree, target_scale, new_pc, new_octave)
    return Pitch.from_pitch_class(new_pc, new_octave)


def transpose_pitch(pitch: Pitch, mode: TransposeMode) -> Pitch:
    """Transpose a single pitch by either mode."""
    if isinstance(mode, ChromaticMode):
        return transpose_pitch_chromatic(pitch, mode.semitones)
    return transpose_pitch_diatonic(pitch, mode.source_scale, mode.target_scale, mode.degrees)


def transpose_note(note: Note, mode: TransposeMode) -> Note:
    """Transpose a note. Timing, velocity and voice are kept."""
    new_pitch = transpose_pitch(note.to_pitch(), mode)
    return replace(note, pitch=new_pitch.midi)


def transpose_notes(notes: Iterable[Note], mode: TransposeMode) -> list[Note]:
    """
    Transpose a batch of notes.

    All or nothing: the first note that fails aborts the batch and the
    error propagates; no partial result is returned.
    """
    notes = list(notes)
    logger.info("Transposing %d notes: %s", len(notes), mode.describe())
    return [transpose_note(note, mode) for note in notes]


# Candidates per root, minor first
_DETECT_SCALE_TYPES = (ScaleType.NATURAL_MINOR, ScaleType.MAJOR)


def detect_scale(notes: Sequence[Note]) -> Scale | None:
    """
    Guess the scale of a melody.

    Every root is tried as natural minor and as major. Candidates are ranked
    by (contains every pitch class, last note is the root, is minor, number
    of shared pitch classes), compared as tuples; the first best wins.

    Returns None for an empty melody.
    """
    if not notes:
        return None

    used = {note.to_pitch().pitch_class for note in notes}
    last_pc = notes[-1].to_pitch().pitch_class
    logger.debug("Detecting scale from pitch classes %s, last note %s", sorted(used), last_pc)

    best: Scale | None = None
    best_score: tuple[bool, bool, bool, int] | None = None

    for root in PitchClass.all():
        for scale_type in _DETECT_SCALE_TYPES:
            scale = Scale(root, scale_type)
            matches = len(used.intersection(scale.pitch_classes()))
            score = (
                matches == len(used),
                last_pc == root,
                scale_type is ScaleType.NATURAL_MINOR,
                matches,
            )
            if best_score is None or score > best_score:
                best, best_score = scale, score

    logger.debug("Detected scale: %s (score %s)", best, best_score)
    return best


__all__ = [
    "ChromaticMode",
    "DiatonicMode",
    "TransposeMode",
    "chromatic",
    "describe",
    "detect_scale",
    "diatonic",
    "diatonic_with_key_change",
    "transpose_note",
    "transpose_notes",
    "transpose_pitch",
    "transpose_pitch_chromatic",
    "transpose_pitch_diatonic",
]
