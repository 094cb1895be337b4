"""
Score tools - MCP tools for editing the current score.

Tools for score lifecycle, settings, accents, notes, melody text,
persistence and export.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from mozart_core.constants import DEFAULT_VELOCITY, ErrorMessages, SuccessMessages
from mozart_core.core.meter import AccentPattern, TimeSignature
from mozart_core.core.note import Note
from mozart_core.core.pitch import PitchClass
from mozart_core.core.scale import Scale, ScaleType
from mozart_core.session import ScoreSession

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def _accent_info(ts: TimeSignature) -> dict[str, Any]:
    return {
        "numerator": ts.numerator,
        "denominator": ts.denominator,
        "accents": ts.accents.to_values(),
        "visual": ts.accents.to_visual(),
    }


def _error(message: str) -> str:
    return json.dumps({"status": "error", "message": message})


def register_score_tools(
    mcp: ChukMCPServer,
    session: ScoreSession,
) -> dict[str, Any]:
    """
    Register score editing tools with the MCP server.

    Args:
        mcp: The MCP server instance
        session: The score session the tools act on

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    # Lifecycle and settings

    @mcp.tool  # type: ignore[arg-type]
    async def mozart_new_score(title: str | None = None) -> str:
        """
        Start a new, empty score.

        The new score is in 4/4, C major, 120 BPM. Any unsaved changes to the
        current score are discarded.

        Args:
            title: Optional title (default: 'Untitled')

        Returns:
            JSON string with the score summary

        Example:
            mozart_new_score(title="Ode to Joy")
        """
        try:
            score = session.new_score(title)
            return json.dumps(
                {
                    "status": "success",
                    "message": SuccessMessages.SCORE_CREATED.format(title=score.metadata.title),
                    "score": score.info(),
                }
            )
        except Exception as e:
            logger.exception("Failed to create score")
            return _error(str(e))

    tools["mozart_new_score"] = mozart_new_score

    @mcp.tool  # type: ignore[arg-type]
    async def mozart_get_score_info() -> str:
        """
        Get a summary of the current score.

        Returns:
            JSON string with title, tempo, time signature, key, note count,
            duration and measure count
        """
        try:
            info = session.score.info()
            info["path"] = str(session.path) if session.path else None
            return json.dumps({"status": "success", "score": info})
        except Exception as e:
            logger.exception("Failed to get score info")
            return _error(str(e))

    tools["mozart_get_score_info"] = mozart_get_score_info

    @mcp.tool  # type: ignore[arg-type]
    async def mozart_set_title(title: str) -> str:
        """
        Set the score title.

        Args:
            title: New title

        Returns:
            JSON string confirming the change
        """
        try:
            session.score.set_title(title)
            return json.dumps({"status": "success", "title": title})
        except Exception as e:
            logger.exception("Failed to set title")
            return _error(str(e))

    tools["mozart_set_title"] = mozart_set_title

    @mcp.tool  # type: ignore[arg-type]
    async def mozart_set_tempo(tempo: int) -> str:
        """
        Set the tempo.

        Values outside 20-300 BPM are clamped.

        Args:
            tempo: Tempo in BPM

        Returns:
            JSON string with the tempo actually stored
        """
        try:
            stored = session.score.set_tempo(tempo)
            return json.dumps({"status": "success", "tempo": stored})
        except Exception as e:
            logger.exception("Failed to set tempo")
            return _error(str(e))

    tools["mozart_set_tempo"] = mozart_set_tempo

    @mcp.tool  # type: ignore[arg-type]
    async def mozart_set_time_signature(numerator: int, denominator: int) -> str:
        """
        Set the time signature.

        The accent pattern resets to the default grouping for the new meter
        (e.g. 7/8 -> 3+2+2).

        Args:
            numerator: Beats per measure (2-15)
            denominator: Beat unit (2, 4, 8 or 16)

        Returns:
            JSON string with the time signature and its accents

        Example:
            mozart_set_time_signature(numerator=7, denominator=8)
        """
        try:
            ts = TimeSignature(numerator, denominator)
            session.score.set_time_signature(ts)
            return json.dumps(
                {"status": "success", "time_signature": str(ts), **_accent_info(ts)}
            )
        except Exception as e:
            logger.exception("Failed to set time signature")
            return _error(str(e))

    tools["mozart_set_time_signature"] = mozart_set_time_signature

    @mcp.tool  # type: ignore[arg-type]
    async def mozart_set_key(root: str, scale_type: str = "major") -> str:
        """
        Set the key.

        Args:
            root: Root pitch class (e.g. 'C', 'F#', 'Bb')
            scale_type: Scale name (major, minor, harmonic_minor, melodic_minor,
                dorian, phrygian, lydian, mixolydian, locrian)

        Returns:
            JSON string with the new key

        Example:
            mozart_set_key(root="D", scale_type="dorian")
        """
        try:
            key = Scale(PitchClass.parse(root), ScaleType.parse(scale_type))
            session.score.set_key(key)
            scale_notes = [str(pc) for pc in key.pitch_classes()]
            return json.dumps({"status": "success", "key": str(key), "scale": scale_notes})
        except Exception as e:
            logger.exception("Failed to set key")
            return _error(str(e))

    tools["mozart_set_key"] = mozart_set_key

    # Accents

    @mcp.tool  # type: ignore[arg-type]
    async def mozart_get_accents() -> str:
        """
        Get the accent pattern of the current time signature.

        Accent values are 1 (weak), 2 (medium) and 3 (strong); the visual
        form uses '>' strong, '-' medium and '.' weak.

        Returns:
            JSON string with numerator, denominator, accents and visual form
        """
        try:
            ts = session.score.settings.time_signature
            return json.dumps({"status": "success", **_accent_info(ts)})
        except Exception as e:
            logger.exception("Failed to get accents")
            return _error(str(e))

    tools["mozart_get_accents"] = mozart_get_accents

    @mcp.tool  # type: ignore[arg-type]
    async def mozart_set_accents(accents: list[int]) -> str:
        """
        Set a custom accent pattern.

        The pattern needs exactly one value per beat.

        Args:
            accents: Accent values, one per beat (1 = weak, 2 = medium, 3 = strong)

        Returns:
            JSON string with the installed pattern

        Example:
            mozart_set_accents(accents=[3, 1, 2, 1, 1, 2, 1])
        """
        try:
            ts = session.score.settings.time_signature
            if len(accents) != ts.numerator:
                return _error(
                    ErrorMessages.ACCENT_LENGTH_MISMATCH.format(
                        length=len(accents), numerator=ts.numerator
                    )
                )
            ts.set_accents(AccentPattern.from_values(accents))
            session.score.set_time_signature(ts)
            return json.dumps({"status": "success", **_accent_info(ts)})
        except Exception as e:
            logger.exception("Failed to set accents")
            return _error(str(e))

    tools["mozart_set_accents"] = mozart_set_accents

    @mcp.tool  # type: ignore[arg-type]
    async def mozart_cycle_accent(beat: int) -> str:
        """
        Cycle the accent on one beat: weak -> medium -> strong -> weak.

        Beats outside the measure are left alone.

        Args:
            beat: Beat index, starting at 0

        Returns:
            JSON string with the updated pattern
        """
        try:
            ts = session.score.settings.time_signature
            ts.accents.cycle(beat)
            session.score.set_time_signature(ts)
            return json.dumps({"status": "success", **_accent_info(ts)})
        except Exception as e:
            logger.exception("Failed to cycle accent")
            return _error(str(e))

    tools["mozart_cycle_accent"] = mozart_cycle_accent

    # Notes

    @mcp.tool  # type: ignore[arg-type]
    async def mozart_get_notes() -> str:
        """
        List the notes of the current score in time order.

        Returns:
            JSON string with the notes (pitch, start_tick, duration_ticks,
            velocity, voice) and their text form
        """
        try:
            notes = [{**n.to_dict(), "text": n.to_text()} for n in session.score.notes]
            return json.dumps({"status": "success", "count": len(notes), "notes": notes})
        except Exception as e:
            logger.exception("Failed to get notes")
            return _error(str(e))

    tools["mozart_get_notes"] = mozart_get_notes

    @mcp.tool  # type: ignore[arg-type]
    async def mozart_add_note(
        pitch: int,
        start_tick: int,
        duration_ticks: int,
        velocity: int = DEFAULT_VELOCITY,
        voice: int = 0,
    ) -> str:
        """
        Add a note to the score.

        Args:
            pitch: MIDI note number (0-127, 60 = middle C)
            start_tick: Start time in ticks (480 per quarter note)
            duration_ticks: Length in ticks
            velocity: Loudness (0-127, default 100)
            voice: Voice number (0 = melody)

        Returns:
            JSON string with the added note and the new note count

        Example:
            mozart_add_note(pitch=64, start_tick=960, duration_ticks=480)
        """
        try:
            note = Note(pitch, start_tick, duration_ticks, velocity, voice)
            session.score.add_note(note)
            return json.dumps(
                {
                    "status": "success",
                    "note": {**note.to_dict(), "text": note.to_text()},
                    "count": len(session.score.notes),
                }
            )
        except Exception as e:
            logger.exception("Failed to add note")
            return _error(str(e))

    tools["mozart_add_note"] = mozart_add_note

    @mcp.tool  # type: ignore[arg-type]
    async def mozart_remove_note(index: int) -> str:
        """
        Remove the note at an index (as listed by mozart_get_notes).

        Args:
            index: Note index, starting at 0

        Returns:
            JSON string with the removed note
        """
        try:
            note = session.score.remove_note(index)
            if note is None:
                return _error(ErrorMessages.NOTE_INDEX_OUT_OF_RANGE.format(index=index))
            return json.dumps(
                {"status": "success", "removed": note.to_dict(), "count": len(session.score.notes)}
            )
        except Exception as e:
            logger.exception("Failed to remove note")
            return _error(str(e))

    tools["mozart_remove_note"] = mozart_remove_note

    @mcp.tool  # type: ignore[arg-type]
    async def mozart_clear_notes() -> str:
        """
        Remove every note from the score.

        Returns:
            JSON string confirming the change
        """
        try:
            session.score.clear_notes()
            return json.dumps({"status": "success", "count": 0})
        except Exception as e:
            logger.exception("Failed to clear notes")
            return _error(str(e))

    tools["mozart_clear_notes"] = mozart_clear_notes

    # Melody text

    @mcp.tool  # type: ignore[arg-type]
    async def mozart_parse_melody(text: str) -> str:
        """
        Replace the score's notes with a melody written as text.

        Tokens are separated by spaces. A note is a pitch with octave and an
        optional duration (w, h, q, e, s; a trailing '.' dots it). A token
        starting with R is a rest. Notes without a duration are quarters.

        Nothing changes if any token is malformed.

        Args:
            text: Melody text, e.g. "C4q D4q E4h R F#4e. G4s"

        Returns:
            JSON string with the parsed note count and total length

        Example:
            mozart_parse_melody(text="E4q E4q F4q G4q G4q F4q E4q D4q")
        """
        try:
            notes = session.parse_text_melody(text)
            return json.dumps(
                {
                    "status": "success",
                    "message": SuccessMessages.MELODY_PARSED.format(count=len(notes)),
                    "count": len(notes),
                    "duration_ticks": session.score.duration_ticks(),
                }
            )
        except Exception as e:
            logger.exception("Failed to parse melody")
            return _error(str(e))

    tools["mozart_parse_melody"] = mozart_parse_melody

    @mcp.tool  # type: ignore[arg-type]
    async def mozart_get_melody_text() -> str:
        """
        Get the score's notes as melody text.

        Rests are not written back.

        Returns:
            JSON string with the melody text
        """
        try:
            return json.dumps({"status": "success", "text": session.melody_text()})
        except Exception as e:
            logger.exception("Failed to format melody")
            return _error(str(e))

    tools["mozart_get_melody_text"] = mozart_get_melody_text

    # Persistence

    @mcp.tool  # type: ignore[arg-type]
    async def mozart_save_score(path: str | None = None) -> str:
        """
        Save the score as a .mozart.json file.

        Args:
            path: File path or bare name (saved under the scores directory).
                Defaults to where the score was last saved or loaded.

        Returns:
            JSON string with the saved path
        """
        try:
            saved = session.save(path)
            return json.dumps(
                {
                    "status": "success",
                    "message": SuccessMessages.SCORE_SAVED.format(path=saved),
                    "path": str(saved),
                }
            )
        except Exception as e:
            logger.exception("Failed to save score")
            return _error(str(e))

    tools["mozart_save_score"] = mozart_save_score

    @mcp.tool  # type: ignore[arg-type]
    async def mozart_load_score(path: str) -> str:
        """
        Load a .mozart.json file as the current score.

        Args:
            path: File path or bare name (looked up in the scores directory)

        Returns:
            JSON string with the loaded score summary
        """
        try:
            score = session.load(path)
            return json.dumps(
                {
                    "status": "success",
                    "message": SuccessMessages.SCORE_LOADED.format(
                        title=score.metadata.title, count=len(score.notes)
                    ),
                    "score": score.info(),
                }
            )
        except Exception as e:
            logger.exception("Failed to load score")
            return _error(str(e))

    tools["mozart_load_score"] = mozart_load_score

    @mcp.tool  # type: ignore[arg-type]
    async def mozart_get_score_json() -> str:
        """
        Get the whole score in the .mozart.json format.

        Returns:
            JSON string with the score document under "score"
        """
        try:
            return json.dumps(
                {"status": "success", "score": session.score.model_dump(mode="json")}
            )
        except Exception as e:
            logger.exception("Failed to serialize score")
            return _error(str(e))

    tools["mozart_get_score_json"] = mozart_get_score_json

    @mcp.tool  # type: ignore[arg-type]
    async def mozart_load_score_json(score_json: str) -> str:
        """
        Replace the current score with a .mozart.json document.

        Args:
            score_json: The score document as a JSON string

        Returns:
            JSON string with the loaded score summary
        """
        try:
            score = session.load_json(score_json)
            return json.dumps({"status": "success", "score": score.info()})
        except Exception as e:
            logger.exception("Failed to load score JSON")
            return _error(str(e))

    tools["mozart_load_score_json"] = mozart_load_score_json

    # Export

    @mcp.tool  # type: ignore[arg-type]
    async def mozart_export_midi(path: str) -> str:
        """
        Export the score as a Standard MIDI File (format 0).

        Args:
            path: File path or bare name (written to the output directory)

        Returns:
            JSON string with the output path and file size

        Example:
            mozart_export_midi(path="ode-to-joy")
        """
        try:
            written = session.export_midi(path)
            size = written.stat().st_size
            return json.dumps(
                {
                    "status": "success",
                    "message": SuccessMessages.MIDI_EXPORTED.format(size=size, path=written),
                    "path": str(written),
                    "bytes": size,
                }
            )
        except Exception as e:
            logger.exception("Failed to export MIDI")
            return _error(str(e))

    tools["mozart_export_midi"] = mozart_export_midi

    @mcp.tool  # type: ignore[arg-type]
    async def mozart_export_yaml() -> str:
        """
        Get the score as YAML, for reading.

        Returns:
            JSON string with the YAML text
        """
        try:
            return json.dumps({"status": "success", "yaml": session.score.to_yaml()})
        except Exception as e:
            logger.exception("Failed to export YAML")
            return _error(str(e))

    tools["mozart_export_yaml"] = mozart_export_yaml

    return tools
