"""
Constants for the music theory engine.

No magic strings - chord symbol vocabulary, defaults and error messages
live here so the parser, tools and tests agree on them.
"""

from typing import Literal

# Octave used when a caller does not ask for a specific register (C4 = middle C)
DEFAULT_OCTAVE = 4

# Reference octave for comparing the sounding content of two chords
REFERENCE_OCTAVE = 0

# Concert pitch reference
A4_FREQUENCY = 440.0
A4_MIDI = 69

# Upper bound on parenthesised modifier tokens in one chord symbol, e.g. "C7(b9)(#11)"
MAX_MODIFIER_TOKENS = 9

# Accidental glyphs accepted when parsing (value = halfstep offset)
ACCIDENTAL_GLYPHS: dict[str, int] = {
    "b": -1,
    "♭": -1,
    "𝄫": -2,
    "#": 1,
    "♯": 1,
    "x": 2,
    "𝄪": 2,
}

# Glyphs used when rendering single and double accidentals
FLAT_SYMBOL = "♭"
SHARP_SYMBOL = "♯"
DOUBLE_FLAT_SYMBOL = "𝄫"
DOUBLE_SHARP_SYMBOL = "𝄪"
NATURAL_SYMBOL = "♮"

TransposeDirection = Literal["up", "down"]

# Directory name and override for project chord catalogues
CATALOGUES_DIR_NAME = "catalogues"
CATALOGUES_ENV_VAR = "CHUK_THEORY_CATALOGUES"


class ErrorMessages:
    """Standardized error messages."""

    UNKNOWN_KEY = "Unknown key: '{key}'. Expected a letter A-G with optional accidentals."
    UNKNOWN_PITCH = "Unknown pitch: '{pitch}'. Expected format like 'C4' or 'F#3'."
    UNKNOWN_INTERVAL = "Unknown interval: '{interval}'. Expected format like 'M3' or 'P5'."
    CATALOGUE_NOT_FOUND = "Catalogue '{name}' not found."
    UNIDENTIFIED_CHORD = "Could not identify a chord from pitches: {pitches}."
    NEGATIVE_ACCIDENTAL = "Accidental amount must be non-negative, got {amount}."
    INVALID_INVERSION = "Inversion must be between 0 and {maximum}, got {inversion}."
