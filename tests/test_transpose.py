"""
Tests for the transposition engine.

Tests cover:
- Chromatic transposition
- Diatonic transposition within a scale and across a key change
- Octave handling on upward and downward moves
- Batch transposition and scale detection
"""

import pytest

from mozart_core.core import Note, Pitch, PitchClass, Scale, ScaleType, parse_melody
from mozart_core.errors import InvalidPitch, TranspositionError
from mozart_core.transpose import (
    ChromaticMode,
    DiatonicMode,
    chromatic,
    describe,
    detect_scale,
    diatonic,
    diatonic_with_key_change,
    transpose_note,
    transpose_notes,
    transpose_pitch,
    transpose_pitch_chromatic,
    transpose_pitch_diatonic,
)


def _diatonic(midi: int, scale: Scale, degrees: int) -> int:
    return transpose_pitch_diatonic(Pitch(midi), scale, scale, degrees).midi


class TestChromatic:
    """Tests for chromatic transposition."""

    def test_up_and_down(self) -> None:
        """Semitone shifts in both directions."""
        assert transpose_pitch_chromatic(Pitch(60), 4).midi == 64
        assert transpose_pitch_chromatic(Pitch(60), -13).midi == 47

    def test_zero(self) -> None:
        """Zero semitones leaves the pitch alone."""
        assert transpose_pitch(Pitch(60), chromatic(0)) == Pitch(60)

    def test_out_of_range(self) -> None:
        """Leaving the MIDI range is an error, not a clamp."""
        with pytest.raises(TranspositionError):
            transpose_pitch_chromatic(Pitch(120), 12)


class TestDiatonic:
    """Tests for diatonic transposition."""

    def test_up_a_third_in_c_major(self) -> None:
        """C-E, D-F, E-G."""
        c_major = Scale.c_major()
        assert _diatonic(60, c_major, 2) == 64
        assert _diatonic(62, c_major, 2) == 65
        assert _diatonic(64, c_major, 2) == 67

    def test_wraps_into_next_octave(self) -> None:
        """Crossing C moves the octave up."""
        c_major = Scale.c_major()
        assert _diatonic(71, c_major, 1) == 72  # B4 -> C5
        assert _diatonic(69, Scale.a_minor(), 2) == 72  # A4 -> C5 in A minor

    def test_wraps_into_previous_octave(self) -> None:
        """Crossing C downward moves the octave down."""
        assert _diatonic(60, Scale.c_major(), -1) == 59  # C4 -> B3

    def test_full_octaves(self) -> None:
        """Seven degrees is an octave."""
        c_major = Scale.c_major()
        assert _diatonic(60, c_major, 7) == 72
        assert _diatonic(60, c_major, -7) == 48
        assert _diatonic(64, c_major, 14) == 88

    @pytest.mark.parametrize("scale_type", ScaleType.all())
    def test_seven_degrees_is_twelve_semitones_everywhere(self, scale_type: ScaleType) -> None:
        """For every root and scale tone, +/-7 degrees equals +/-12 semitones."""
        for root in PitchClass.all():
            scale = Scale(root, scale_type)
            for midi in range(128):
                pitch = Pitch(midi)
                if not scale.contains(pitch.pitch_class):
                    continue
                if midi + 12 <= 127:
                    up = transpose_pitch_diatonic(pitch, scale, scale, 7)
                    assert up == transpose_pitch_chromatic(pitch, 12), f"{pitch} in {scale}"
                if midi - 12 >= 0:
                    down = transpose_pitch_diatonic(pitch, scale, scale, -7)
                    assert down == transpose_pitch_chromatic(pitch, -12), f"{pitch} in {scale}"

    def test_more_than_an_octave_down(self) -> None:
        """Eight degrees down from C4 lands on B2."""
        assert _diatonic(60, Scale.c_major(), -8) == 47

    def test_zero_degrees(self) -> None:
        """Zero degrees in the same scale is the identity for scale tones."""
        assert _diatonic(67, Scale.c_major(), 0) == 67

    def test_non_scale_tone_snaps(self) -> None:
        """C#4 snaps to C, then moves one degree to D4."""
        assert _diatonic(61, Scale.c_major(), 1) == 62

    def test_other_scale_types(self) -> None:
        """Degrees follow the scale's own intervals."""
        d_dorian = Scale(PitchClass.D, ScaleType.DORIAN)
        assert _diatonic(62, d_dorian, 2) == 65  # D -> F
        harmonic = Scale(PitchClass.A, ScaleType.HARMONIC_MINOR)
        assert _diatonic(64, harmonic, 2) == 68  # E -> G#

    def test_key_change_maps_degrees(self) -> None:
        """E4 is degree 3 of C major; degree 3 of A minor is C."""
        result = transpose_pitch_diatonic(Pitch(64), Scale.c_major(), Scale.a_minor(), 0)
        assert result.midi == 60

    def test_key_change_with_degrees(self) -> None:
        """C4 up a 5th from C major into G major is D, with no octave wrap."""
        g_major = Scale(PitchClass.G, ScaleType.MAJOR)
        result = transpose_pitch_diatonic(Pitch(60), Scale.c_major(), g_major, 4)
        assert result.midi == 62

    def test_out_of_range(self) -> None:
        """A result above G9 is rejected."""
        with pytest.raises(InvalidPitch):
            _diatonic(127, Scale.c_major(), 1)


class TestModes:
    """Tests for transposition modes and descriptions."""

    def test_constructors(self) -> None:
        """Factory functions build the right modes."""
        assert chromatic(3) == ChromaticMode(3)
        mode = diatonic(Scale.c_major(), 2)
        assert isinstance(mode, DiatonicMode)
        assert mode.source_scale == mode.target_scale
        assert not mode.changes_key
        assert diatonic_with_key_change(Scale.c_major(), Scale.a_minor(), 0).changes_key

    def test_describe_chromatic(self) -> None:
        """Named intervals up to an octave."""
        assert describe(chromatic(0)) == "No transposition"
        assert describe(chromatic(4)) == "up a major 3rd"
        assert describe(chromatic(-7)) == "down a perfect 5th"
        assert describe(chromatic(13)) == "up 13 semitones"

    def test_describe_diatonic(self) -> None:
        """Degree names, with the scales involved."""
        assert describe(diatonic(Scale.c_major(), 2)) == "Diatonic up a 3rd in C Major"
        assert describe(diatonic(Scale.c_major(), -1)) == "Diatonic down a 2nd in C Major"
        assert (
            describe(diatonic_with_key_change(Scale.c_major(), Scale.a_minor(), 0))
            == "Diatonic up a unison from C Major to A Natural Minor"
        )
        assert describe(diatonic(Scale.c_major(), 9)) == "up 9 degrees"


class TestTransposeNotes:
    """Tests for note and batch transposition."""

    def test_note_keeps_timing_and_voice(self) -> None:
        """Only the pitch changes."""
        note = Note(60, 480, 240, 90, voice=2)
        result = transpose_note(note, chromatic(2))
        assert result == Note(62, 480, 240, 90, voice=2)

    def test_batch(self) -> None:
        """Every note is transposed in order."""
        notes = parse_melody("C4q D4q E4q")
        result = transpose_notes(notes, diatonic(Scale.c_major(), 2))
        assert [n.pitch for n in result] == [64, 65, 67]

    def test_batch_all_or_nothing(self) -> None:
        """One failing note fails the batch."""
        notes = [Note(60, 0, 480), Note(125, 480, 480)]
        with pytest.raises(TranspositionError):
            transpose_notes(notes, chromatic(5))


class TestDetectScale:
    """Tests for scale detection."""

    def test_empty(self) -> None:
        """No notes, no scale."""
        assert detect_scale([]) is None

    def test_c_major(self) -> None:
        """A C major scale ending on C is C major, not A minor."""
        notes = parse_melody("C4q D4q E4q F4q G4q A4q B4q C5q")
        assert detect_scale(notes) == Scale.c_major()

    def test_a_minor(self) -> None:
        """Ending on A tips the balance to A minor."""
        notes = parse_melody("C4q D4q E4q B3q A3h")
        assert detect_scale(notes) == Scale.a_minor()

    def test_single_note_prefers_minor(self) -> None:
        """A lone E reads as E minor."""
        assert detect_scale([Note(64, 0, 480)]) == Scale(PitchClass.E, ScaleType.NATURAL_MINOR)

    def test_chromatic_melody(self) -> None:
        """Without a containing key the best partial match still wins."""
        notes = parse_melody("C4q C#4q D4q D#4q E4q")
        result = detect_scale(notes)
        assert result is not None
        assert result.scale_type in (ScaleType.MAJOR, ScaleType.NATURAL_MINOR)
