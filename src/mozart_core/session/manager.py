"""
Score session - the current score of one editor.

Holds a single Score plus the path it was last saved to or loaded from,
and turns editor requests (melody text, transposition kinds, file names)
into engine calls.

There is no undo history. Callers that want one snapshot the score with
`session.score.model_copy(deep=True)` before a mutating call.
"""

from __future__ import annotations

import logging
from pathlib import Path

from mozart_core.compiler.midi import MidiExporter
from mozart_core.constants import SCORE_FILE_SUFFIX, ErrorMessages
from mozart_core.core.note import Note, format_melody, parse_melody
from mozart_core.core.pitch import PitchClass
from mozart_core.core.scale import Scale, ScaleType
from mozart_core.errors import FileError, MozartError
from mozart_core.models.score import Score
from mozart_core.transpose import (
    TransposeMode,
    chromatic,
    diatonic,
    diatonic_with_key_change,
)

logger = logging.getLogger(__name__)

TRANSPOSE_KINDS = ("chromatic", "diatonic", "diatonic_key_change")


class ScoreSession:
    """
    Owns the current score and where it lives on disk.

    Args:
        scores_dir: Directory that bare score names resolve against
        output_dir: Directory that bare MIDI file names resolve against
    """

    def __init__(self, scores_dir: Path | None = None, output_dir: Path | None = None):
        self.scores_dir = scores_dir
        self.output_dir = output_dir
        self.score = Score()
        self.path: Path | None = None
        self._exporter = MidiExporter()

    def new_score(self, title: str | None = None) -> Score:
        """Start over with an empty score."""
        self.score = Score.with_title(title) if title else Score()
        self.path = None
        return self.score

    # Paths

    def resolve_score_path(self, name: str | Path) -> Path:
        """
        Resolve a score name to a file path.

        Bare names go into scores_dir and get the .mozart.json suffix.
        """
        path = Path(name)
        if not str(path).endswith(".json"):
            path = path.with_name(path.name + SCORE_FILE_SUFFIX)
        if not path.is_absolute() and len(path.parts) == 1 and self.scores_dir is not None:
            path = self.scores_dir / path
        return path

    def resolve_midi_path(self, name: str | Path) -> Path:
        """Resolve a MIDI file name; bare names go into output_dir."""
        path = Path(name)
        if path.suffix.lower() not in (".mid", ".midi"):
            path = path.with_name(path.name + ".mid")
        if not path.is_absolute() and len(path.parts) == 1 and self.output_dir is not None:
            path = self.output_dir / path
        return path

    # Persistence

    def save(self, path: str | Path | None = None) -> Path:
        """
        Save the score, by default to where it was last saved or loaded.

        Raises:
            FileError: if there is no path to save to or writing fails
        """
        if path is not None:
            target = self.resolve_score_path(path)
        elif self.path is not None:
            target = self.path
        else:
            raise FileError(ErrorMessages.NO_FILE_PATH)

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileError(f"Failed to create directory: {e}") from e

        self.score.save(target)
        self.path = target
        return target

    def load(self, path: str | Path) -> Score:
        """Load a score file and make it current."""
        target = self.resolve_score_path(path)
        self.score = Score.load(target)
        self.path = target
        return self.score

    def load_json(self, text: str) -> Score:
        """Replace the current score with one decoded from JSON text."""
        self.score = Score.from_json(text)
        self.path = None
        return self.score

    def to_json(self) -> str:
        return self.score.to_json()

    def export_midi(self, path: str | Path) -> Path:
        """Write the score as a Standard MIDI File."""
        target = self.resolve_midi_path(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileError(f"Failed to create directory: {e}") from e
        return self._exporter.export_to_file(self.score, target)

    def midi_bytes(self) -> bytes:
        return self._exporter.export(self.score)

    # Melody text

    def parse_text_melody(self, text: str) -> list[Note]:
        """
        Replace every note with a parsed melody.

        The score is untouched if any token fails to parse.
        """
        notes = parse_melody(text)
        self.score.replace_notes(notes)
        return notes

    def melody_text(self) -> str:
        return format_melody(self.score.notes)

    # Transposition

    def build_transpose_mode(
        self,
        kind: str,
        semitones: int = 0,
        degrees: int = 0,
        target_root: str | None = None,
        target_scale_type: str | None = None,
    ) -> TransposeMode:
        """
        Turn a transposition request into a TransposeMode.

        Diatonic kinds read from the score's current key.

        Raises:
            MozartError: for an unknown kind or a key change without a target
            InvalidPitch / InvalidScale: for unparseable target keys
        """
        if kind == "chromatic":
            return chromatic(semitones)

        current = self.score.settings.key
        if kind == "diatonic":
            return diatonic(current, degrees)

        if kind == "diatonic_key_change":
            if not target_root or not target_scale_type:
                raise MozartError(ErrorMessages.MISSING_TARGET_KEY)
            target = Scale(PitchClass.parse(target_root), ScaleType.parse(target_scale_type))
            return diatonic_with_key_change(current, target, degrees)

        raise MozartError(ErrorMessages.UNKNOWN_TRANSPOSE_KIND.format(kind=kind))

    def transpose(
        self,
        kind: str,
        semitones: int = 0,
        degrees: int = 0,
        target_root: str | None = None,
        target_scale_type: str | None = None,
    ) -> TransposeMode:
        """Transpose the whole score; returns the mode that was applied."""
        mode = self.build_transpose_mode(kind, semitones, degrees, target_root, target_scale_type)
        self.score.transpose(mode)
        logger.info("Transposed score '%s': %s", self.score.metadata.title, mode.describe())
        return mode

    def transposition_description(
        self,
        kind: str,
        semitones: int = 0,
        degrees: int = 0,
        target_root: str | None = None,
        target_scale_type: str | None = None,
    ) -> str:
        """Describe a transposition without applying it."""
        return self.build_transpose_mode(
            kind, semitones, degrees, target_root, target_scale_type
        ).describe()
