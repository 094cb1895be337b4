"""
Pytest configuration and shared fixtures.
"""

import tempfile
from pathlib import Path

import pytest

from mozart_core.core import parse_melody
from mozart_core.models import Score


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_midi_path(temp_dir: Path) -> Path:
    """Path for a temporary MIDI file."""
    return temp_dir / "test.mid"


@pytest.fixture
def temp_score_path(temp_dir: Path) -> Path:
    """Path for a temporary score file."""
    return temp_dir / "test.mozart.json"


@pytest.fixture
def scale_score() -> Score:
    """C major scale, one octave up, in quarter notes."""
    score = Score.with_title("Scale")
    score.add_notes(parse_melody("C4q D4q E4q F4q G4q A4q B4q C5q"))
    return score
