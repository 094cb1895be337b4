"""
Export pipeline - turns a Score into Standard MIDI File bytes.
"""

from mozart_core.compiler.midi import (
    MidiExporter,
    encode_vlq,
    export_to_midi,
    export_to_midi_file,
    key_signature_sharps,
)

__all__ = [
    "MidiExporter",
    "encode_vlq",
    "export_to_midi",
    "export_to_midi_file",
    "key_signature_sharps",
]
