"""
MIDI export - Standard MIDI File, Format 0.

The track is written byte by byte so the output is exact and deterministic:
same score, same bytes. mido is only used to read the result back for
inspection.

Layout:
    MThd (format 0, one track, division = ticks per quarter)
    MTrk: tempo, time signature, key signature, track name,
          note on/off events, end of track
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from mido import MidiFile

from mozart_core.constants import TICKS_PER_QUARTER
from mozart_core.core.pitch import PitchClass
from mozart_core.core.scale import Scale, ScaleType
from mozart_core.errors import MidiError

if TYPE_CHECKING:
    from mozart_core.models.score import Score

logger = logging.getLogger(__name__)

# Largest delta time a MIDI file can carry (four VLQ bytes)
MAX_VLQ = 0x0FFFFFFF

NOTE_ON = 0x90
NOTE_OFF = 0x80
META = 0xFF
META_TRACK_NAME = 0x03
META_END_OF_TRACK = 0x2F
META_TEMPO = 0x51
META_TIME_SIGNATURE = 0x58
META_KEY_SIGNATURE = 0x59

# Denominator -> power of two, as stored in the time signature event
_DENOMINATOR_POWERS: dict[int, int] = {2: 1, 4: 2, 8: 3, 16: 4}

# Position on the circle of fifths (negative = flats)
_KEY_SHARPS: dict[PitchClass, int] = {
    PitchClass.C: 0,
    PitchClass.G: 1,
    PitchClass.D: 2,
    PitchClass.A: 3,
    PitchClass.E: 4,
    PitchClass.B: 5,
    PitchClass.Fs: 6,
    PitchClass.Cs: 7,
    PitchClass.F: -1,
    PitchClass.As: -2,
    PitchClass.Ds: -3,
    PitchClass.Gs: -4,
}


def encode_vlq(value: int) -> bytes:
    """
    Encode a variable-length quantity.

    7-bit groups, most significant first; every byte but the last has the
    high bit set.

    Raises:
        MidiError: if value is negative or above 0x0FFFFFFF
    """
    if not 0 <= value <= MAX_VLQ:
        raise MidiError(f"Value {value} cannot be encoded as a variable-length quantity")

    groups = [value & 0x7F]
    value >>= 7
    while value:
        groups.append((value & 0x7F) | 0x80)
        value >>= 7
    return bytes(reversed(groups))


def key_signature_sharps(key: Scale) -> int:
    """Sharps (positive) or flats (negative) for a key's root; 0 when unknown."""
    return _KEY_SHARPS.get(key.root, 0)


class MidiExporter:
    """
    Serializes a Score to SMF Format 0 bytes.

    Notes go out on channel 0. At equal ticks note-offs are written before
    note-ons so back-to-back notes on the same pitch don't overlap.
    """

    def __init__(self, ticks_per_quarter: int = TICKS_PER_QUARTER) -> None:
        self.ticks_per_quarter = ticks_per_quarter

    def export(self, score: Score) -> bytes:
        """Export a score to MIDI bytes."""
        logger.info("Exporting score '%s' to MIDI", score.metadata.title)

        track = self._build_track(score)
        data = bytearray()
        self._write_header(data)
        data += b"MTrk"
        data += len(track).to_bytes(4, "big")
        data += track

        logger.info("MIDI export complete: %d bytes", len(data))
        return bytes(data)

    def export_to_file(self, score: Score, path: str | Path) -> Path:
        """
        Export a score to a .mid file.

        Raises:
            MidiError: if the file cannot be written
        """
        path = Path(path)
        data = self.export(score)
        try:
            path.write_bytes(data)
        except OSError as e:
            raise MidiError(f"Failed to write file: {e}") from e

        logger.info("MIDI file saved: %s", path)
        return path

    def to_midi_file(self, score: Score) -> MidiFile:
        """Export a score and read it back as a mido MidiFile."""
        return MidiFile(file=io.BytesIO(self.export(score)))

    def _write_header(self, data: bytearray) -> None:
        data += b"MThd"
        data += (6).to_bytes(4, "big")
        data += (0).to_bytes(2, "big")  # Format 0
        data += (1).to_bytes(2, "big")  # One track
        data += self.ticks_per_quarter.to_bytes(2, "big")

    def _build_track(self, score: Score) -> bytearray:
        settings = score.settings
        track = bytearray()

        # Tempo (microseconds per quarter, 24-bit)
        tempo_us = 60_000_000 // settings.tempo
        track += encode_vlq(0)
        track += bytes([META, META_TEMPO, 0x03])
        track += tempo_us.to_bytes(3, "big")

        # Time signature
        ts = settings.time_signature
        track += encode_vlq(0)
        track += bytes([META, META_TIME_SIGNATURE, 0x04])
        track += bytes([ts.numerator, _DENOMINATOR_POWERS.get(ts.denominator, 2), 24, 8])

        # Key signature (mode: 0 = major, 1 = everything else)
        key = settings.key
        track += encode_vlq(0)
        track += bytes([META, META_KEY_SIGNATURE, 0x02])
        track += bytes(
            [key_signature_sharps(key) & 0xFF, 0 if key.scale_type is ScaleType.MAJOR else 1]
        )

        # Track name
        title = score.metadata.title.encode("utf-8")
        track += encode_vlq(0)
        track += bytes([META, META_TRACK_NAME])
        track += encode_vlq(len(title))
        track += title

        # (tick, is_on, pitch, velocity); False sorts first so offs precede ons
        events: list[tuple[int, bool, int, int]] = []
        for note in score.notes:
            events.append((note.start_tick, True, note.pitch, note.velocity))
            events.append((note.end_tick, False, note.pitch, 0))
        events.sort(key=lambda e: (e[0], e[1]))

        last_tick = 0
        for tick, is_on, pitch, velocity in events:
            track += encode_vlq(max(0, tick - last_tick))
            if is_on:
                track += bytes([NOTE_ON, pitch, velocity])
            else:
                track += bytes([NOTE_OFF, pitch, 0])
            last_tick = tick

        track += encode_vlq(0)
        track += bytes([META, META_END_OF_TRACK, 0x00])

        logger.debug("Built track with %d bytes", len(track))
        return track


def export_to_midi(score: Score) -> bytes:
    """Export a score to MIDI bytes with the default exporter."""
    return MidiExporter().export(score)


def export_to_midi_file(score: Score, path: str | Path) -> Path:
    """Export a score to a MIDI file with the default exporter."""
    return MidiExporter().export_to_file(score, path)
