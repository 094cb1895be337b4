#!/usr/bin/env python3
"""
Example: Write a melody as text and export it as MIDI.

This demonstrates the whole pipeline - text notation, a Score with its
settings, the .mozart.json format and Standard MIDI File export.

Usage:
    python examples/melody_to_midi.py
    # Creates: examples/output/ode_to_joy.mozart.json
    #          examples/output/ode_to_joy.mid
"""

from pathlib import Path

from mozart_core import (
    AccentPattern,
    Score,
    TimeSignature,
    export_to_midi_file,
    parse_melody,
)

ODE_TO_JOY = "E4q E4q F4q G4q G4q F4q E4q D4q C4q C4q D4q E4q E4q. D4e D4h"


def main() -> None:
    """Build a score from text, save it and export it."""
    output_dir = Path(__file__).parent / "output"
    output_dir.mkdir(exist_ok=True)

    score = Score.with_title("Ode to Joy")
    score.set_composer("Beethoven")
    score.set_tempo(108)
    score.add_notes(parse_melody(ODE_TO_JOY))

    info = score.info()
    print(f"{info['title']}: {info['note_count']} notes, {info['measures']} measures")
    print(f"  {info['time_signature']} {info['accents']}  {info['key']}  {info['tempo']} BPM")
    print(f"  {info['duration_seconds']:.1f} seconds")

    score_path = score.save(output_dir / "ode_to_joy.mozart.json")
    print(f"\nSaved score: {score_path}")

    midi_path = export_to_midi_file(score, output_dir / "ode_to_joy.mid")
    print(f"Exported MIDI: {midi_path}")

    # Same melody in 7/8, accents grouped 2+2+3
    score.set_time_signature(TimeSignature(7, 8))
    score.settings.time_signature.set_accents(AccentPattern.from_grouping("2+2+3"))
    print(f"\nIn 7/8: {score.settings.time_signature.accents}  {score.measure_count()} measures")
    export_to_midi_file(score, output_dir / "ode_to_joy_7_8.mid")

    print("\nDone! Open the MIDI files in your DAW to hear them.")


if __name__ == "__main__":
    main()
