"""
Chord primitives - Chord, its inversions, and ChordProgression.

A chord is a root key with a chord type and an inversion. Pitches are laid
out above the root and spelled by the interval engine, so C7 gives B♭ and
not A♯. Inverting raises the lowest tones by an octave.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import overload

from chuk_mcp_theory.constants import DEFAULT_OCTAVE, REFERENCE_OCTAVE, ErrorMessages, TransposeDirection
from chuk_mcp_theory.core.chord_type import ChordPart, ChordType
from chuk_mcp_theory.core.errors import ChordPartError
from chuk_mcp_theory.core.interval import Interval
from chuk_mcp_theory.core.pitch import Key, Pitch

_ORDINALS = {1: "1st", 2: "2nd", 3: "3rd"}


def _ordinal(n: int) -> str:
    return _ORDINALS.get(n, f"{n}th")


@dataclass(frozen=True, eq=False)
class Chord:
    """
    A chord: root key, chord type and inversion.

    Two chords are equal when they sound the same pitches, so spelling is
    ignored but inversion is not. G(sus4)(no5)(add6) equals C major in
    second inversion.

    Examples:
        Chord(Key.parse("C"), ChordType()) = C major triad
        Chord.parse("F#m7(b5)") = F♯ half diminished
        Chord.parse("C/E") = C major, first inversion
    """

    key: Key
    type: ChordType = ChordType()
    inversion: int = 0

    def __post_init__(self) -> None:
        maximum = self.tone_count - 1
        if not 0 <= self.inversion <= maximum:
            raise ValueError(
                ErrorMessages.INVALID_INVERSION.format(maximum=maximum, inversion=self.inversion)
            )

    @property
    def tone_count(self) -> int:
        """Number of distinct sounding tones; intervals sharing a semitone count once."""
        return len({interval.semitones for interval in self.type.intervals})

    @classmethod
    def parse(cls, symbol: str) -> Chord:
        """Parse a chord symbol like 'D9', 'Cmin(maj7)' or 'C/E'."""
        from chuk_mcp_theory.core.notation import parse_chord

        return parse_chord(symbol)

    def _voiced(self, octave: int) -> list[tuple[Interval, Pitch]]:
        """(interval, pitch) pairs in ascending order with the inversion applied."""
        root = Pitch(self.key, octave)
        tones = sorted(
            ((interval, root + interval) for interval in self.type.intervals),
            key=lambda tone: tone[1].raw_value,
        )
        lowest = sorted({pitch.raw_value for _, pitch in tones})[: self.inversion]
        voiced = [
            (interval, pitch + Interval.P8 if pitch.raw_value in lowest else pitch)
            for interval, pitch in tones
        ]
        return sorted(voiced, key=lambda tone: tone[1].raw_value)

    def pitches(self, octave: int = DEFAULT_OCTAVE) -> list[Pitch]:
        """
        Spelled pitches from the root's octave upwards.

        Args:
            octave: Octave of the root before inversion

        Returns:
            Pitches in ascending order
        """
        return [pitch for _, pitch in self._voiced(octave)]

    @property
    def keys(self) -> list[Key]:
        """Spelled keys in voiced order."""
        return [pitch.key for pitch in self.pitches(REFERENCE_OCTAVE)]

    @property
    def bass(self) -> Key:
        """Lowest sounding key."""
        return self.keys[0]

    @property
    def inversions(self) -> ChordInversions:
        """Every inversion of this chord, root position first."""
        return ChordInversions(self)

    def pitch_for_part(self, part: ChordPart, octave: int = DEFAULT_OCTAVE) -> Pitch:
        """
        Pitch of one chord part.

        Raises:
            ChordPartError: If the chord type does not contain the part
        """
        if not self.type.has_chord_parts([part]):
            raise ChordPartError(
                f"{self.notation} has no {part.interval.description} above the root"
            )
        return next(pitch for interval, pitch in self._voiced(octave) if interval == part.interval)

    def transposed(self, interval: Interval, direction: TransposeDirection = "up") -> Chord:
        """Same chord type and inversion on a transposed root."""
        key = self.key + interval if direction == "up" else self.key - interval
        return Chord(key, self.type, self.inversion)

    @property
    def notation(self) -> str:
        """Chord symbol, with a slash bass when inverted."""
        notation = f"{self.key}{self.type.notation}"
        if self.inversion:
            notation += f"/{self.bass}"
        return notation

    @property
    def description(self) -> str:
        """Readable name, e.g. 'C Major Dominant 7th 1st Inversion'."""
        description = f"{self.key} {self.type.description}".rstrip()
        if self.inversion:
            description += f" {_ordinal(self.inversion)} Inversion"
        return description

    def _sound(self) -> tuple[int, ...]:
        return tuple(pitch.raw_value for pitch in self.pitches(REFERENCE_OCTAVE))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Chord):
            return NotImplemented
        return self._sound() == other._sound()

    def __hash__(self) -> int:
        return hash(self._sound())

    def __str__(self) -> str:
        return self.notation

    def __repr__(self) -> str:
        return f"Chord({self.notation!r})"


class ChordInversions(Sequence[Chord]):
    """Lazy sequence of a chord's inversions, one per chord tone."""

    __slots__ = ("_chord",)

    def __init__(self, chord: Chord) -> None:
        self._chord = chord

    def __len__(self) -> int:
        return self._chord.tone_count

    @overload
    def __getitem__(self, index: int) -> Chord: ...

    @overload
    def __getitem__(self, index: slice) -> list[Chord]: ...

    def __getitem__(self, index: int | slice) -> Chord | list[Chord]:
        if isinstance(index, slice):
            return [self[i] for i in range(*index.indices(len(self)))]
        if index < 0:
            index += len(self)
        if not 0 <= index < len(self):
            raise IndexError(f"Inversion index out of range: {index}")
        return Chord(self._chord.key, self._chord.type, index)

    def __repr__(self) -> str:
        return f"ChordInversions({self._chord.notation!r}, {len(self)})"


@dataclass(frozen=True)
class ChordProgression:
    """
    An ordered run of chords.

    Examples:
        ChordProgression.parse("C - Am - F - G")
        ChordProgression.parse("Dm7 G7 Cmaj7")
    """

    chords: tuple[Chord, ...]

    @classmethod
    def parse(cls, text: str) -> ChordProgression:
        """Parse whitespace separated chord symbols; '-' separators are ignored."""
        return cls(tuple(Chord.parse(token) for token in text.split() if token != "-"))

    @property
    def notation(self) -> str:
        return " - ".join(chord.notation for chord in self.chords)

    def transposed(self, interval: Interval, direction: TransposeDirection = "up") -> ChordProgression:
        return ChordProgression(tuple(chord.transposed(interval, direction) for chord in self.chords))

    def __len__(self) -> int:
        return len(self.chords)

    def __iter__(self) -> Iterator[Chord]:
        return iter(self.chords)

    def __str__(self) -> str:
        return self.notation
