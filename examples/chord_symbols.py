#!/usr/bin/env python3
"""
Example: Reading and Spelling Chord Symbols.

This demonstrates parsing chord symbols, voicing them with correct
enharmonic spelling, walking inversions, and naming a set of pitches
against the chord quality catalogues.

Usage:
    python examples/chord_symbols.py
"""

from chuk_mcp_theory.catalogue import CatalogueLoader
from chuk_mcp_theory.core import (
    Chord,
    ChordParseError,
    ChordProgression,
    ChordType,
    Interval,
    Pitch,
)


def main() -> None:
    """Demonstrate the chord symbol system."""
    print("CHUK Theory Chord Symbol Demo")
    print("=" * 40)
    print()

    # Parse and voice a handful of symbols
    print("Chord symbols:")
    for symbol in ["C", "F#m7(b5)", "Gb7", "E♭9(sus4)(no5)(add6)", "C13", "C/E"]:
        chord = Chord.parse(symbol)
        pitches = " ".join(str(p) for p in chord.pitches(3))
        print(f"  {symbol:22} -> {chord.notation:12} {pitches}")
        print(f"  {'':22}    {chord.description}")
    print()

    # Walk inversions
    chord = Chord.parse("C7")
    print(f"Inversions of {chord.notation}:")
    for inversion in chord.inversions:
        pitches = " ".join(str(p) for p in inversion.pitches())
        print(f"  {inversion.notation:8} {pitches}")
    print()

    # Spelled intervals between pitches
    print("Intervals:")
    for low, high in [("C4", "Eb4"), ("C4", "D#4"), ("C#4", "Bb4"), ("C4", "E5")]:
        interval = Pitch.parse(high) - Pitch.parse(low)
        print(f"  {low:4} -> {high:4} {interval.abbreviation:4} {interval.description}")
    print()

    # Rejected symbols say where they failed
    print("Rejected symbols:")
    for symbol in ["Dxyz", "C7(9)", "C/F#"]:
        try:
            Chord.parse(symbol)
        except ChordParseError as e:
            print(f"  {symbol:8} {e.stage.value}: {e.reason} ({e.token!r})")
    print()

    # Identify pitches against the catalogues
    loader = CatalogueLoader()
    pitches = sorted(Pitch.parse(p) for p in ["D4", "F4", "A4", "C5"])
    chord_type = ChordType.from_intervals(p - pitches[0] for p in pitches)
    if chord_type is not None:
        names = [f"{c.name}/{e.name}" for c, e in loader.identify(chord_type)]
        print(f"D4 F4 A4 C5 is {Chord(pitches[0].key, chord_type).notation}: {', '.join(names)}")
    print()

    # Transpose a progression
    progression = ChordProgression.parse("Dm7 - G7 - Cmaj7")
    print(f"Progression: {progression}")
    print(f"Up a fourth: {progression.transposed(Interval.P4)}")


if __name__ == "__main__":
    main()
