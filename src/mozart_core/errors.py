"""
Error types for the Mozart engine.

Every failure the engine can report is a MozartError. Kinds that signal bad
input also derive from ValueError so callers validating arguments can catch
them the usual way.
"""

from __future__ import annotations


class MozartError(Exception):
    """Base class for all engine errors."""


class InvalidPitch(MozartError, ValueError):
    """Out-of-range MIDI number or unparseable pitch class."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Invalid pitch: {message}")


class InvalidDuration(MozartError, ValueError):
    """Unknown duration code."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Invalid note duration: {message}")


class InvalidTimeSignature(MozartError, ValueError):
    """Numerator or denominator fails validation."""

    def __init__(self, numerator: int, denominator: int) -> None:
        self.numerator = numerator
        self.denominator = denominator
        super().__init__(f"Invalid time signature: {numerator}/{denominator}")


class InvalidScale(MozartError, ValueError):
    """Unknown scale type name."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Invalid scale: {message}")


class TranspositionError(MozartError, ValueError):
    """Transposed pitch out of range, or a failed degree lookup."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Transposition error: {message}")


class ParseError(MozartError, ValueError):
    """Malformed note, melody or time signature text."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Parse error: {message}")


class FileError(MozartError):
    """I/O failure while reading or writing a score file."""

    def __init__(self, message: str) -> None:
        super().__init__(f"File error: {message}")


class MidiError(MozartError):
    """Failure while encoding or writing MIDI."""

    def __init__(self, message: str) -> None:
        super().__init__(f"MIDI export error: {message}")


class SerializationError(MozartError):
    """JSON encode/decode failure."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Serialization error: {message}")


__all__ = [
    "FileError",
    "InvalidDuration",
    "InvalidPitch",
    "InvalidScale",
    "InvalidTimeSignature",
    "MidiError",
    "MozartError",
    "ParseError",
    "SerializationError",
    "TranspositionError",
]
