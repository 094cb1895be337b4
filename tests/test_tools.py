"""
Tests for MCP tools.

Tests the MCP tool implementations for score editing, accents, notes,
persistence, export and transposition.
"""

import json
from pathlib import Path

import mido
import pytest

from mozart_core.session import ScoreSession
from mozart_core.tools import register_score_tools, register_transpose_tools


# Mock MCP server for testing tools
class MockMCPServer:
    """Mock MCP server that just stores registered tools."""

    def __init__(self, name: str):
        self.name = name
        self.tools: dict = {}

    def tool(self, func):
        """Decorator to register a tool."""
        self.tools[func.__name__] = func
        return func


@pytest.fixture
def session(temp_dir: Path) -> ScoreSession:
    return ScoreSession(scores_dir=temp_dir / "scores", output_dir=temp_dir / "output")


@pytest.fixture
def score_tools(session: ScoreSession) -> dict:
    return register_score_tools(MockMCPServer("test"), session)


@pytest.fixture
def transpose_tools(session: ScoreSession) -> dict:
    return register_transpose_tools(MockMCPServer("test"), session)


async def _call(tools: dict, name: str, **kwargs) -> dict:
    return json.loads(await tools[name](**kwargs))


class TestRegistration:
    """Tests for tool registration."""

    def test_registers_with_server(self, session: ScoreSession) -> None:
        """Every returned tool is registered on the server."""
        mcp = MockMCPServer("test")
        tools = {**register_score_tools(mcp, session), **register_transpose_tools(mcp, session)}
        assert set(tools) == set(mcp.tools)
        assert all(name.startswith("mozart_") for name in tools)
        assert "mozart_transpose" in tools
        assert "mozart_export_midi" in tools


class TestScoreSettingsTools:
    """Tests for score lifecycle and settings tools."""

    @pytest.mark.asyncio
    async def test_new_score(self, score_tools: dict) -> None:
        """Create a score with a title."""
        data = await _call(score_tools, "mozart_new_score", title="Ode")
        assert data["status"] == "success"
        assert data["score"]["title"] == "Ode"
        assert data["score"]["key"] == "C Major"

    @pytest.mark.asyncio
    async def test_get_score_info(self, score_tools: dict) -> None:
        """Summary includes the (missing) path."""
        data = await _call(score_tools, "mozart_get_score_info")
        assert data["status"] == "success"
        assert data["score"]["tempo"] == 120
        assert data["score"]["path"] is None

    @pytest.mark.asyncio
    async def test_set_title(self, score_tools: dict, session: ScoreSession) -> None:
        """Set the title."""
        data = await _call(score_tools, "mozart_set_title", title="Renamed")
        assert data["status"] == "success"
        assert session.score.metadata.title == "Renamed"

    @pytest.mark.asyncio
    async def test_set_tempo_clamps(self, score_tools: dict) -> None:
        """The stored tempo is reported."""
        data = await _call(score_tools, "mozart_set_tempo", tempo=999)
        assert data["tempo"] == 300

    @pytest.mark.asyncio
    async def test_set_time_signature(self, score_tools: dict) -> None:
        """7/8 gets the 3+2+2 pattern."""
        data = await _call(score_tools, "mozart_set_time_signature", numerator=7, denominator=8)
        assert data["status"] == "success"
        assert data["time_signature"] == "7/8"
        assert data["accents"] == [3, 1, 1, 2, 1, 2, 1]

    @pytest.mark.asyncio
    async def test_set_time_signature_invalid(self, score_tools: dict) -> None:
        """Unsupported meters are errors."""
        data = await _call(score_tools, "mozart_set_time_signature", numerator=4, denominator=3)
        assert data["status"] == "error"
        assert "4/3" in data["message"]

    @pytest.mark.asyncio
    async def test_set_key(self, score_tools: dict) -> None:
        """Set the key and list its notes."""
        data = await _call(score_tools, "mozart_set_key", root="D", scale_type="dorian")
        assert data["key"] == "D Dorian"
        assert data["scale"] == ["D", "E", "F", "G", "A", "B", "C"]

    @pytest.mark.asyncio
    async def test_set_key_invalid(self, score_tools: dict) -> None:
        """Unknown roots and scales are errors."""
        assert (await _call(score_tools, "mozart_set_key", root="H"))["status"] == "error"
        data = await _call(score_tools, "mozart_set_key", root="C", scale_type="blues")
        assert data["status"] == "error"


class TestAccentTools:
    """Tests for accent tools."""

    @pytest.mark.asyncio
    async def test_get_accents(self, score_tools: dict) -> None:
        """Default 4/4 accents."""
        data = await _call(score_tools, "mozart_get_accents")
        assert data["accents"] == [3, 1, 2, 1]
        assert data["visual"] == ">.-."

    @pytest.mark.asyncio
    async def test_set_accents(self, score_tools: dict) -> None:
        """Install a custom pattern."""
        data = await _call(score_tools, "mozart_set_accents", accents=[3, 2, 2, 1])
        assert data["status"] == "success"
        assert data["visual"] == ">--."

    @pytest.mark.asyncio
    async def test_set_accents_wrong_length(self, score_tools: dict) -> None:
        """Patterns must match the numerator."""
        data = await _call(score_tools, "mozart_set_accents", accents=[3, 1])
        assert data["status"] == "error"
        assert "doesn't match" in data["message"]
        assert (await _call(score_tools, "mozart_get_accents"))["accents"] == [3, 1, 2, 1]

    @pytest.mark.asyncio
    async def test_cycle_accent(self, score_tools: dict) -> None:
        """Weak goes to medium."""
        data = await _call(score_tools, "mozart_cycle_accent", beat=1)
        assert data["accents"] == [3, 2, 2, 1]


class TestNoteTools:
    """Tests for note and melody tools."""

    @pytest.mark.asyncio
    async def test_add_and_get_notes(self, score_tools: dict) -> None:
        """Notes come back sorted with their text form."""
        await _call(score_tools, "mozart_add_note", pitch=64, start_tick=480, duration_ticks=480)
        data = await _call(
            score_tools, "mozart_add_note", pitch=60, start_tick=0, duration_ticks=480
        )
        assert data["count"] == 2
        notes = (await _call(score_tools, "mozart_get_notes"))["notes"]
        assert [n["text"] for n in notes] == ["C4q", "E4q"]

    @pytest.mark.asyncio
    async def test_add_note_invalid(self, score_tools: dict) -> None:
        """Out-of-range pitches are errors."""
        data = await _call(
            score_tools, "mozart_add_note", pitch=200, start_tick=0, duration_ticks=480
        )
        assert data["status"] == "error"
        assert "Pitch must be 0-127" in data["message"]

    @pytest.mark.asyncio
    async def test_remove_note(self, score_tools: dict) -> None:
        """Remove by index."""
        await _call(score_tools, "mozart_parse_melody", text="C4q D4q")
        data = await _call(score_tools, "mozart_remove_note", index=0)
        assert data["removed"]["pitch"] == 60
        assert data["count"] == 1

    @pytest.mark.asyncio
    async def test_remove_note_out_of_range(self, score_tools: dict) -> None:
        """Missing indexes are errors."""
        data = await _call(score_tools, "mozart_remove_note", index=3)
        assert data["status"] == "error"
        assert "index 3" in data["message"]

    @pytest.mark.asyncio
    async def test_clear_notes(self, score_tools: dict, session: ScoreSession) -> None:
        """Clear everything."""
        await _call(score_tools, "mozart_parse_melody", text="C4q D4q")
        await _call(score_tools, "mozart_clear_notes")
        assert session.score.notes == []

    @pytest.mark.asyncio
    async def test_parse_melody(self, score_tools: dict) -> None:
        """Parse text, including rests."""
        data = await _call(score_tools, "mozart_parse_melody", text="C4q R E4h")
        assert data["count"] == 2
        assert data["duration_ticks"] == 1920
        text = await _call(score_tools, "mozart_get_melody_text")
        assert text["text"] == "C4q E4h"

    @pytest.mark.asyncio
    async def test_parse_melody_invalid(self, score_tools: dict) -> None:
        """A bad token leaves the melody unchanged."""
        await _call(score_tools, "mozart_parse_melody", text="C4q")
        data = await _call(score_tools, "mozart_parse_melody", text="C4q Q9")
        assert data["status"] == "error"
        assert (await _call(score_tools, "mozart_get_melody_text"))["text"] == "C4q"


class TestFileTools:
    """Tests for persistence and export tools."""

    @pytest.mark.asyncio
    async def test_save_without_path(self, score_tools: dict) -> None:
        """A new score needs a path."""
        data = await _call(score_tools, "mozart_save_score")
        assert data["status"] == "error"

    @pytest.mark.asyncio
    async def test_save_and_load(self, score_tools: dict, temp_dir: Path) -> None:
        """Save under a bare name, then load it back."""
        await _call(score_tools, "mozart_new_score", title="Ode")
        await _call(score_tools, "mozart_parse_melody", text="E4q E4q F4q G4q")
        saved = await _call(score_tools, "mozart_save_score", path="ode")
        assert saved["path"] == str(temp_dir / "scores" / "ode.mozart.json")

        await _call(score_tools, "mozart_new_score")
        loaded = await _call(score_tools, "mozart_load_score", path="ode")
        assert loaded["score"]["title"] == "Ode"
        assert loaded["score"]["note_count"] == 4

        info = await _call(score_tools, "mozart_get_score_info")
        assert info["score"]["path"] == saved["path"]

    @pytest.mark.asyncio
    async def test_load_missing(self, score_tools: dict) -> None:
        """Missing files are errors."""
        data = await _call(score_tools, "mozart_load_score", path="nope")
        assert data["status"] == "error"

    @pytest.mark.asyncio
    async def test_score_json_round_trip(self, score_tools: dict) -> None:
        """The JSON document loads back."""
        await _call(score_tools, "mozart_parse_melody", text="C4q D4q")
        document = (await _call(score_tools, "mozart_get_score_json"))["score"]
        assert document["settings"]["key"] == {"root": 0, "scale_type": "Major"}

        await _call(score_tools, "mozart_clear_notes")
        data = await _call(score_tools, "mozart_load_score_json", score_json=json.dumps(document))
        assert data["score"]["note_count"] == 2

    @pytest.mark.asyncio
    async def test_load_score_json_invalid(self, score_tools: dict) -> None:
        """Invalid documents are errors."""
        data = await _call(score_tools, "mozart_load_score_json", score_json="{bad")
        assert data["status"] == "error"
        assert "Serialization error" in data["message"]

    @pytest.mark.asyncio
    async def test_export_midi(self, score_tools: dict, temp_dir: Path) -> None:
        """Export writes a readable MIDI file."""
        await _call(score_tools, "mozart_parse_melody", text="C4q D4q")
        data = await _call(score_tools, "mozart_export_midi", path="ode")
        assert data["status"] == "success"
        path = Path(data["path"])
        assert path == temp_dir / "output" / "ode.mid"
        assert data["bytes"] == path.stat().st_size
        assert mido.MidiFile(str(path)).type == 0

    @pytest.mark.asyncio
    async def test_export_yaml(self, score_tools: dict) -> None:
        """YAML text of the score."""
        data = await _call(score_tools, "mozart_export_yaml")
        assert "metadata:" in data["yaml"]
        assert "scale_type: Major" in data["yaml"]


class TestTransposeTools:
    """Tests for transposition and theory tools."""

    @pytest.mark.asyncio
    async def test_chromatic(self, score_tools: dict, transpose_tools: dict) -> None:
        """Up a major third."""
        await _call(score_tools, "mozart_parse_melody", text="C4q D4q")
        data = await _call(transpose_tools, "mozart_transpose", kind="chromatic", semitones=4)
        assert data["status"] == "success"
        assert data["description"] == "up a major 3rd"
        assert data["melody"] == "E4q F#4q"

    @pytest.mark.asyncio
    async def test_diatonic(self, score_tools: dict, transpose_tools: dict) -> None:
        """Up a third in C major."""
        await _call(score_tools, "mozart_parse_melody", text="C4q D4q E4q")
        data = await _call(transpose_tools, "mozart_transpose", kind="diatonic", degrees=2)
        assert data["melody"] == "E4q F4q G4q"
        assert data["key"] == "C Major"

    @pytest.mark.asyncio
    async def test_key_change(self, score_tools: dict, transpose_tools: dict) -> None:
        """Landing in a new key sets it."""
        await _call(score_tools, "mozart_parse_melody", text="E4q")
        data = await _call(
            transpose_tools,
            "mozart_transpose",
            kind="diatonic_key_change",
            target_root="A",
            target_scale_type="minor",
        )
        assert data["melody"] == "C4q"
        assert data["key"] == "A Natural Minor"

    @pytest.mark.asyncio
    async def test_out_of_range_is_atomic(self, score_tools: dict, transpose_tools: dict) -> None:
        """Nothing moves when one note would leave the range."""
        await _call(score_tools, "mozart_parse_melody", text="C4q G9q")
        data = await _call(transpose_tools, "mozart_transpose", kind="chromatic", semitones=1)
        assert data["status"] == "error"
        assert (await _call(score_tools, "mozart_get_melody_text"))["text"] == "C4q G9q"

    @pytest.mark.asyncio
    async def test_unknown_kind(self, transpose_tools: dict) -> None:
        """Unknown kinds are errors."""
        data = await _call(transpose_tools, "mozart_transpose", kind="sideways")
        assert data["status"] == "error"
        assert "sideways" in data["message"]

    @pytest.mark.asyncio
    async def test_describe(self, transpose_tools: dict) -> None:
        """Describe without applying."""
        data = await _call(
            transpose_tools, "mozart_describe_transposition", kind="chromatic", semitones=-7
        )
        assert data["description"] == "down a perfect 5th"

    @pytest.mark.asyncio
    async def test_detect_scale(self, score_tools: dict, transpose_tools: dict) -> None:
        """Detect A minor from a melody ending on A."""
        empty = await _call(transpose_tools, "mozart_detect_scale")
        assert empty["scale"] is None

        await _call(score_tools, "mozart_parse_melody", text="C4q D4q E4q B3q A3h")
        data = await _call(transpose_tools, "mozart_detect_scale")
        assert data["scale"] == "A Natural Minor"
        assert data["scale_type"] == "NaturalMinor"
        assert data["current_key"] == "C Major"

    @pytest.mark.asyncio
    async def test_list_scale_types(self, transpose_tools: dict) -> None:
        """Nine scale types and twelve pitch classes."""
        data = await _call(transpose_tools, "mozart_list_scale_types")
        assert len(data["scale_types"]) == 9
        assert data["pitch_classes"][1] == "C#"

    @pytest.mark.asyncio
    async def test_get_scale_notes(self, transpose_tools: dict) -> None:
        """A harmonic minor has a raised seventh."""
        data = await _call(
            transpose_tools, "mozart_get_scale_notes", root="A", scale_type="harmonic_minor"
        )
        assert data["notes"] == ["A", "B", "C", "D", "E", "F", "G#"]

    @pytest.mark.asyncio
    async def test_get_scale_notes_invalid(self, transpose_tools: dict) -> None:
        """Unknown scales are errors."""
        data = await _call(transpose_tools, "mozart_get_scale_notes", root="A", scale_type="x")
        assert data["status"] == "error"
