"""
Constants for the Mozart engine.

No magic numbers - timing resolution, tempo bounds and meter limits live here.
"""

# Ticks per quarter note (standard MIDI resolution)
TICKS_PER_QUARTER = 480

# Tempo bounds in BPM
MIN_TEMPO = 20
MAX_TEMPO = 300
DEFAULT_TEMPO = 120

# Time signature limits
MIN_BEATS = 2
MAX_BEATS = 15
VALID_DENOMINATORS: tuple[int, ...] = (2, 4, 8, 16)

DEFAULT_VELOCITY = 100
MAX_VELOCITY = 127

# MIDI note range
MIN_MIDI = 0
MAX_MIDI = 127

# Score file format
FORMAT_VERSION = "1.0"
SCORE_FILE_SUFFIX = ".mozart.json"
DEFAULT_TITLE = "Untitled"


class ErrorMessages:
    """Standardized error messages."""

    ACCENT_LENGTH_MISMATCH = (
        "Accent pattern length {length} doesn't match time signature {numerator}"
    )
    NO_FILE_PATH = "No file path given and the score has not been saved before."
    NOTE_INDEX_OUT_OF_RANGE = "No note at index {index}."
    UNKNOWN_TRANSPOSE_KIND = (
        "Unknown transposition type: '{kind}'. "
        "Expected 'chromatic', 'diatonic' or 'diatonic_key_change'."
    )
    MISSING_TARGET_KEY = "Key-changing transposition needs target_root and target_scale_type."


class SuccessMessages:
    """Standardized success messages."""

    SCORE_CREATED = "Created score '{title}'."
    SCORE_SAVED = "Saved score to {path}."
    SCORE_LOADED = "Loaded score '{title}' ({count} notes)."
    MIDI_EXPORTED = "Exported {size} bytes of MIDI to {path}."
    MELODY_PARSED = "Parsed {count} notes."
    TRANSPOSED = "Transposed {count} notes: {description}."
