"""
Score model - the aggregate that owns a melody and its settings.

A Score contains:
- Metadata (title, composer, created/modified timestamps)
- Settings (tempo, time signature with accents, key)
- Notes (kept sorted by start tick)

Every mutating method refreshes `modified`. The JSON form is the
`*.mozart.json` file format.
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_serializer, field_validator

from mozart_core.constants import (
    DEFAULT_TEMPO,
    DEFAULT_TITLE,
    FORMAT_VERSION,
    MAX_TEMPO,
    MIN_TEMPO,
    TICKS_PER_QUARTER,
)
from mozart_core.core.meter import AccentPattern, TimeSignature
from mozart_core.core.note import Note
from mozart_core.core.scale import Scale
from mozart_core.errors import FileError, SerializationError
from mozart_core.transpose import DiatonicMode, TransposeMode, transpose_notes

logger = logging.getLogger(__name__)


def timestamp() -> str:
    """Current time as whole seconds since the epoch with a 'Z' suffix."""
    return f"{int(datetime.now(UTC).timestamp())}Z"


class ScoreMetadata(BaseModel):
    """
    Descriptive information about a score.

    Missing composer and timestamps load as empty strings; new scores are
    stamped through `fresh`.
    """

    title: str = Field(DEFAULT_TITLE, description="Score title")
    composer: str = Field("", description="Composer name")
    created: str = Field("", description="Creation timestamp")
    modified: str = Field("", description="Last modified")

    @classmethod
    def fresh(cls, title: str = DEFAULT_TITLE) -> ScoreMetadata:
        """Metadata for a new score, created and modified now."""
        now = timestamp()
        return cls(title=title, created=now, modified=now)


class ScoreSettings(BaseModel):
    """
    Musical settings for a score.

    The time signature travels as {numerator, denominator, accents} and the
    key as {root, scale_type}, where root is the pitch-class number.
    """

    tempo: int = Field(DEFAULT_TEMPO, ge=MIN_TEMPO, le=MAX_TEMPO, description="Tempo in BPM")
    time_signature: TimeSignature = Field(default_factory=TimeSignature.common)
    key: Scale = Field(default_factory=Scale.c_major)

    model_config = {"arbitrary_types_allowed": True}

    @field_validator("time_signature", mode="before")
    @classmethod
    def parse_time_signature(cls, v: Any) -> Any:
        """Build a TimeSignature from its persisted dict or '7/8' text."""
        if isinstance(v, str):
            return TimeSignature.parse(v)
        if isinstance(v, dict):
            try:
                numerator = int(v["numerator"])
                denominator = int(v["denominator"])
            except (KeyError, TypeError) as e:
                raise ValueError(f"Malformed time signature: {v}") from e
            accents = v.get("accents")
            pattern = None
            if accents is not None:
                try:
                    pattern = AccentPattern.from_values(accents)
                except (KeyError, TypeError) as e:
                    raise ValueError(f"Malformed accents: {accents}") from e
            return TimeSignature(numerator, denominator, pattern)
        return v

    @field_validator("key", mode="before")
    @classmethod
    def parse_key(cls, v: Any) -> Any:
        """Accept 'F# minor' style text as well as the persisted dict."""
        if isinstance(v, str):
            return Scale.parse(v)
        return v

    @field_serializer("time_signature")
    def serialize_time_signature(self, ts: TimeSignature) -> dict[str, Any]:
        return {
            "numerator": ts.numerator,
            "denominator": ts.denominator,
            "accents": ts.accents.to_values(),
        }

    @field_serializer("key")
    def serialize_key(self, key: Scale) -> dict[str, Any]:
        return {"root": int(key.root), "scale_type": key.scale_type.value}


class Score(BaseModel):
    """
    A complete monophonic score.

    The score is the sole owner of its notes and settings. Notes are
    immutable values; edits replace them.
    """

    version: str = Field(FORMAT_VERSION, description="File format version")
    metadata: ScoreMetadata = Field(default_factory=ScoreMetadata.fresh)
    settings: ScoreSettings = Field(default_factory=ScoreSettings)
    notes: list[Note] = Field(default_factory=list, description="Notes sorted by start tick")

    @field_validator("notes")
    @classmethod
    def sort_notes(cls, v: list[Note]) -> list[Note]:
        """Keep notes ordered by start tick."""
        return sorted(v, key=lambda n: n.start_tick)

    @classmethod
    def with_title(cls, title: str) -> Score:
        """Create an empty score with a title."""
        logger.info("Creating new score '%s'", title)
        return cls(metadata=ScoreMetadata.fresh(title))

    def _touch(self) -> None:
        self.metadata.modified = timestamp()

    def _sort(self) -> None:
        self.notes.sort(key=lambda n: n.start_tick)

    # Settings

    def set_title(self, title: str) -> None:
        logger.debug("Setting title to '%s'", title)
        self.metadata.title = title
        self._touch()

    def set_composer(self, composer: str) -> None:
        self.metadata.composer = composer
        self._touch()

    def set_tempo(self, tempo: int) -> int:
        """Set the tempo, clamped to 20-300 BPM. Returns the stored value."""
        clamped = max(MIN_TEMPO, min(MAX_TEMPO, tempo))
        logger.debug("Setting tempo to %d BPM (requested %d)", clamped, tempo)
        self.settings.tempo = clamped
        self._touch()
        return clamped

    def set_time_signature(self, time_signature: TimeSignature) -> None:
        logger.debug("Setting time signature to %s", time_signature)
        self.settings.time_signature = time_signature
        self._touch()

    def set_key(self, key: Scale) -> None:
        logger.debug("Setting key to %s", key)
        self.settings.key = key
        self._touch()

    # Notes

    def add_note(self, note: Note) -> None:
        logger.debug("Adding note: %s", note)
        self.notes.append(note)
        self._sort()
        self._touch()

    def add_notes(self, notes: Iterable[Note]) -> None:
        self.notes.extend(notes)
        self._sort()
        self._touch()

    def remove_note(self, index: int) -> Note | None:
        """
        Remove the note at an index.

        Returns the removed note, or None if the index is out of range.
        """
        if not 0 <= index < len(self.notes):
            return None
        note = self.notes.pop(index)
        logger.debug("Removed note at index %d: %s", index, note)
        self._touch()
        return note

    def clear_notes(self) -> None:
        logger.debug("Clearing all notes")
        self.notes.clear()
        self._touch()

    def replace_notes(self, notes: Iterable[Note]) -> None:
        """Replace every note at once."""
        self.notes = sorted(notes, key=lambda n: n.start_tick)
        self._touch()

    def transpose(self, mode: TransposeMode) -> list[Note]:
        """
        Transpose every note.

        All or nothing: if any note fails the score is left untouched and
        the error propagates. A diatonic transposition also installs the
        target scale as the key.

        Returns:
            The transposed notes
        """
        transposed = transpose_notes(self.notes, mode)
        self.notes = transposed
        if isinstance(mode, DiatonicMode):
            self.settings.key = mode.target_scale
        self._touch()
        return transposed

    # Derived values

    def duration_ticks(self) -> int:
        """The latest end tick of any note, or 0."""
        return max((n.end_tick for n in self.notes), default=0)

    def duration_seconds(self) -> float:
        beats = self.duration_ticks() / TICKS_PER_QUARTER
        return beats * 60.0 / self.settings.tempo

    def measure_count(self) -> int:
        """Number of measures, counting a partial last measure."""
        return math.ceil(self.duration_ticks() / self.settings.time_signature.ticks_per_measure())

    def info(self) -> dict[str, Any]:
        """Summary of the score."""
        return {
            "title": self.metadata.title,
            "composer": self.metadata.composer,
            "tempo": self.settings.tempo,
            "time_signature": str(self.settings.time_signature),
            "accents": self.settings.time_signature.accents.to_visual(),
            "key": str(self.settings.key),
            "note_count": len(self.notes),
            "duration_ticks": self.duration_ticks(),
            "duration_seconds": round(self.duration_seconds(), 3),
            "measures": self.measure_count(),
            "modified": self.metadata.modified,
        }

    # Serialization

    def to_json(self) -> str:
        """Serialize to the score file format (pretty-printed JSON)."""
        logger.debug("Serializing score to JSON")
        return self.model_dump_json(indent=2)

    @classmethod
    def from_json(cls, text: str) -> Score:
        """
        Deserialize from the score file format.

        Raises:
            SerializationError: for malformed JSON or invalid content
        """
        logger.debug("Deserializing score from JSON")
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise SerializationError(str(e)) from e
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise SerializationError(str(e)) from e

    def to_yaml(self) -> str:
        """The score document as YAML, for reading."""
        data = self.model_dump(mode="json")
        return yaml.safe_dump(data, default_flow_style=False, sort_keys=False)

    def save(self, path: str | Path) -> Path:
        """
        Save to a file.

        Raises:
            FileError: if the file cannot be written
        """
        path = Path(path)
        logger.info("Saving score to %s", path)
        try:
            path.write_text(self.to_json(), encoding="utf-8")
        except OSError as e:
            raise FileError(f"Failed to write file: {e}") from e
        return path

    @classmethod
    def load(cls, path: str | Path) -> Score:
        """
        Load from a file.

        Raises:
            FileError: if the file cannot be read
            SerializationError: if its content is not a valid score
        """
        path = Path(path)
        logger.info("Loading score from %s", path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise FileError(f"Failed to read file: {e}") from e
        except UnicodeDecodeError as e:
            raise SerializationError(f"Score file is not UTF-8: {e}") from e

        score = cls.from_json(text)
        logger.info("Loaded score: %s (%d notes)", score.metadata.title, len(score.notes))
        return score
