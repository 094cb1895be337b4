#!/usr/bin/env python3
"""
Example: Transpose a melody chromatically and diatonically.

Shows the difference between moving by semitones and moving by scale
degrees, a key change from major to relative minor, and scale detection.

Usage:
    python examples/transpose_melody.py
"""

from mozart_core import Scale, Score, detect_scale, format_melody, parse_melody
from mozart_core.transpose import chromatic, diatonic, diatonic_with_key_change

MELODY = "C4q D4q E4q F4q G4h E4h C4w"


def show(label: str, score: Score) -> None:
    print(f"  {label:<28} {format_melody(score.notes)}  [{score.settings.key}]")


def main() -> None:
    """Transpose one melody several ways."""
    print(f"Melody: {MELODY}")
    detected = detect_scale(parse_melody(MELODY))
    print(f"Detected key: {detected}\n")

    modes = [
        chromatic(4),
        chromatic(-12),
        diatonic(Scale.c_major(), 2),
        diatonic(Scale.c_major(), -1),
        diatonic_with_key_change(Scale.c_major(), Scale.a_minor(), 0),
    ]

    for mode in modes:
        score = Score.with_title("Example")
        score.add_notes(parse_melody(MELODY))
        score.transpose(mode)
        show(mode.describe(), score)


if __name__ == "__main__":
    main()
