"""
Core theory primitives.

These are the values everything else composes on:
- Interval: Distance between pitches by degree, quality and semitones
- Accidental, KeyLetter, Key: Spelled pitch classes
- Pitch: A spelled key in an octave, transposable by intervals
- ScaleType, Scale: Step patterns applied to a key
- Chord parts: Third, fifth, sixth, seventh, suspension, extensions
- ChordType, ChordTypeBuilder: Root-independent chord structure
- Chord, ChordProgression: Rooted chords, inversions and runs of chords
- parse_chord, parse_chord_type: The chord symbol grammar
"""

from chuk_mcp_theory.core.chord import Chord, ChordInversions, ChordProgression
from chuk_mcp_theory.core.chord_parts import (
    ChordExtensionType,
    ChordFifthType,
    ChordSeventhType,
    ChordSixthType,
    ChordSuspendedType,
    ChordThirdType,
    ExtensionType,
)
from chuk_mcp_theory.core.chord_type import ChordPart, ChordType, ChordTypeBuilder, Fill
from chuk_mcp_theory.core.errors import ChordParseError, ChordPartError, ParseStage, TheoryError
from chuk_mcp_theory.core.interval import Interval, IntervalQuality
from chuk_mcp_theory.core.notation import parse_chord, parse_chord_type
from chuk_mcp_theory.core.pitch import Accidental, Key, KeyLetter, Pitch
from chuk_mcp_theory.core.scale import Scale, ScaleType

__all__ = [
    # Interval
    "Interval",
    "IntervalQuality",
    # Pitch
    "Accidental",
    "KeyLetter",
    "Key",
    "Pitch",
    # Scale
    "ScaleType",
    "Scale",
    # Chord parts
    "ChordThirdType",
    "ChordFifthType",
    "ChordSixthType",
    "ChordSeventhType",
    "ChordSuspendedType",
    "ChordExtensionType",
    "ExtensionType",
    "ChordPart",
    # Chord types
    "ChordType",
    "ChordTypeBuilder",
    "Fill",
    # Chords
    "Chord",
    "ChordInversions",
    "ChordProgression",
    # Parsing
    "parse_chord",
    "parse_chord_type",
    # Errors
    "TheoryError",
    "ChordParseError",
    "ChordPartError",
    "ParseStage",
]
