"""
Pitch primitives - Accidental, KeyLetter, Key and Pitch.

These are spelled pitches: D♭ and C♯ are different keys that sound the same.
The letter axis (C D E F G A B) and the chromatic axis (12 semitones) are
kept separate so that transposition can choose the right spelling.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum
from functools import total_ordering
from typing import ClassVar

from chuk_mcp_theory.constants import (
    A4_FREQUENCY,
    A4_MIDI,
    ACCIDENTAL_GLYPHS,
    DOUBLE_FLAT_SYMBOL,
    DOUBLE_SHARP_SYMBOL,
    FLAT_SYMBOL,
    NATURAL_SYMBOL,
    SHARP_SYMBOL,
    ErrorMessages,
    TransposeDirection,
)
from chuk_mcp_theory.core.interval import Interval, IntervalQuality, is_perfect_degree

_KEY_PATTERN = re.compile(r"([A-Ga-g])([#♯b♭x𝄪𝄫♮]*)")
_PITCH_PATTERN = re.compile(r"([A-Ga-g])([#♯b♭x𝄪𝄫♮]*)(-?\d+)")


@dataclass(frozen=True, order=True)
class Accidental:
    """
    A signed alteration in halfsteps: -1 is a flat, +2 a double sharp.

    Ordered by halfstep offset. Immutable and hashable.
    """

    halfsteps: int = 0

    NATURAL: ClassVar[Accidental]
    FLAT: ClassVar[Accidental]
    SHARP: ClassVar[Accidental]
    DOUBLE_FLAT: ClassVar[Accidental]
    DOUBLE_SHARP: ClassVar[Accidental]

    @classmethod
    def flats(cls, amount: int) -> Accidental:
        """N flats. Negative amounts are rejected."""
        if amount < 0:
            raise ValueError(ErrorMessages.NEGATIVE_ACCIDENTAL.format(amount=amount))
        return cls(-amount)

    @classmethod
    def sharps(cls, amount: int) -> Accidental:
        """N sharps. Negative amounts are rejected."""
        if amount < 0:
            raise ValueError(ErrorMessages.NEGATIVE_ACCIDENTAL.format(amount=amount))
        return cls(amount)

    @classmethod
    def parse(cls, text: str) -> Accidental:
        """
        Parse accidental glyphs like 'b', '##', '♭', '𝄪' or '♮'.

        Raises:
            ValueError: For unknown glyphs or mixed flats and sharps
        """
        if text in ("", NATURAL_SYMBOL):
            return cls.NATURAL
        try:
            values = [ACCIDENTAL_GLYPHS[glyph] for glyph in text]
        except KeyError:
            raise ValueError(f"Unknown accidental: {text!r}") from None
        if any(v < 0 for v in values) and any(v > 0 for v in values):
            raise ValueError(f"Accidental mixes flats and sharps: {text!r}")
        return cls(sum(values))

    @property
    def amount(self) -> int:
        """Number of flats or sharps."""
        return abs(self.halfsteps)

    @property
    def is_natural(self) -> bool:
        return self.halfsteps == 0

    @property
    def symbol(self) -> str:
        """Display glyphs; empty for natural."""
        if self.halfsteps == 0:
            return ""
        if self.halfsteps == -2:
            return DOUBLE_FLAT_SYMBOL
        if self.halfsteps == 2:
            return DOUBLE_SHARP_SYMBOL
        glyph = FLAT_SYMBOL if self.halfsteps < 0 else SHARP_SYMBOL
        return glyph * self.amount

    @property
    def ascii(self) -> str:
        """Plain-text spelling ('b', '#', 'bb', ...)."""
        return ("b" if self.halfsteps < 0 else "#") * self.amount

    @property
    def notation(self) -> str:
        """Like symbol, but shows ♮ for natural."""
        return self.symbol or NATURAL_SYMBOL

    def __str__(self) -> str:
        return self.symbol

    def __repr__(self) -> str:
        names = {0: "NATURAL", -1: "FLAT", 1: "SHARP", -2: "DOUBLE_FLAT", 2: "DOUBLE_SHARP"}
        if self.halfsteps in names:
            return f"Accidental.{names[self.halfsteps]}"
        return f"Accidental({self.halfsteps})"


Accidental.NATURAL = Accidental(0)
Accidental.FLAT = Accidental(-1)
Accidental.SHARP = Accidental(1)
Accidental.DOUBLE_FLAT = Accidental(-2)
Accidental.DOUBLE_SHARP = Accidental(2)


class KeyLetter(IntEnum):
    """
    The seven letter names, valued by semitones above C.

    This is the diatonic axis; next/previous wrap B -> C.
    """

    C = 0
    D = 2
    E = 4
    F = 5
    G = 7
    A = 9
    B = 11

    @property
    def index(self) -> int:
        """Position among the seven letters (C = 0, B = 6)."""
        return _LETTERS.index(self)

    def offset(self, steps: int) -> KeyLetter:
        """Letter a number of steps away, wrapping in either direction."""
        return _LETTERS[(self.index + steps) % len(_LETTERS)]

    @property
    def next(self) -> KeyLetter:
        return self.offset(1)

    @property
    def previous(self) -> KeyLetter:
        return self.offset(-1)

    @classmethod
    def parse(cls, name: str) -> KeyLetter:
        """Parse a letter name, case-insensitive."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(ErrorMessages.UNKNOWN_KEY.format(key=name)) from None


_LETTERS: tuple[KeyLetter, ...] = tuple(KeyLetter)


@dataclass(frozen=True)
class Key:
    """
    A spelled pitch class: letter plus accidental.

    Equality is exact spelling (D♭ != C♯); use is_enharmonic for sound.

    Examples:
        Key(KeyLetter.E, Accidental.FLAT) = E♭
        Key.parse("F#") = F♯
    """

    letter: KeyLetter
    accidental: Accidental = Accidental()

    @property
    def semitones(self) -> int:
        """Letter value plus accidental, not wrapped (B♯ = 12, C♭ = -1)."""
        return self.letter.value + self.accidental.halfsteps

    @property
    def chromatic_offset(self) -> int:
        """Pitch class 0-11."""
        return self.semitones % 12

    def is_enharmonic(self, other: Key) -> bool:
        """Whether two keys sound the same."""
        return self.chromatic_offset == other.chromatic_offset

    def __add__(self, interval: Interval) -> Key:
        """Key a spelled interval above this one."""
        if not isinstance(interval, Interval):
            return NotImplemented
        return (Pitch(self, 4) + interval).key

    def __sub__(self, interval: Interval) -> Key:
        """Key a spelled interval below this one."""
        if not isinstance(interval, Interval):
            return NotImplemented
        return (Pitch(self, 4) - interval).key

    @classmethod
    def parse(cls, name: str) -> Key:
        """Parse a key from a string like 'C', 'F#', 'E♭' or 'Bbb'."""
        match = _KEY_PATTERN.fullmatch(name.strip())
        if match is None:
            raise ValueError(ErrorMessages.UNKNOWN_KEY.format(key=name))
        return cls(KeyLetter.parse(match.group(1)), Accidental.parse(match.group(2)))

    @classmethod
    def from_pitch_class(cls, pitch_class: int, prefer_flats: bool = False) -> Key:
        """Default spelling of a pitch class 0-11."""
        keys = FLAT_KEYS if prefer_flats else SHARP_KEYS
        return keys[pitch_class % 12]

    def __str__(self) -> str:
        return f"{self.letter.name}{self.accidental.symbol}"

    def __repr__(self) -> str:
        return f"Key({self})"


SHARP_KEYS: tuple[Key, ...] = tuple(
    Key.parse(name) for name in ("C C# D D# E F F# G G# A A# B").split()
)
FLAT_KEYS: tuple[Key, ...] = tuple(
    Key.parse(name) for name in ("C Db D Eb E F Gb G Ab A Bb B").split()
)


def _spell(letter: KeyLetter, raw_value: int) -> Pitch:
    """
    Spell a MIDI value on a given letter.

    The octave is the one whose natural letter lies nearest the target,
    so the accidental stays within a tritone of natural.
    """
    octave_index = (raw_value - letter.value + 6) // 12
    accidental = Accidental(raw_value - letter.value - 12 * octave_index)
    return Pitch(Key(letter, accidental), octave_index - 1)


@total_ordering
class Pitch:
    """
    An absolute pitch: a spelled key in an octave.

    raw_value is the MIDI note number (C4 = 60). `==` compares sound
    (E♯4 == F4); is_exactly compares spelling and octave too.

    Immutable and hashable.
    """

    __slots__ = ("_key", "_octave")
    _key: Key
    _octave: int

    def __init__(self, key: Key, octave: int) -> None:
        object.__setattr__(self, "_key", key)
        object.__setattr__(self, "_octave", octave)

    @property
    def key(self) -> Key:
        return self._key

    @property
    def octave(self) -> int:
        return self._octave

    @property
    def raw_value(self) -> int:
        """MIDI note number."""
        return self._key.semitones + (self._octave + 1) * 12

    @property
    def diatonic_index(self) -> int:
        """Letter steps above C0, ignoring accidentals."""
        return self._key.letter.index + 7 * self._octave

    @property
    def frequency(self) -> float:
        """Frequency in Hz with A4 = 440."""
        return float(A4_FREQUENCY * 2.0 ** ((self.raw_value - A4_MIDI) / 12))

    @classmethod
    def from_midi(cls, midi_note: int, prefer_flats: bool = False) -> Pitch:
        """Pitch for a MIDI note with default sharp (or flat) spelling."""
        octave, pitch_class = divmod(midi_note, 12)
        return cls(Key.from_pitch_class(pitch_class, prefer_flats), octave - 1)

    @classmethod
    def parse(cls, name: str) -> Pitch:
        """Parse a pitch from a string like 'C4', 'F#3' or 'B♭-1'."""
        match = _PITCH_PATTERN.fullmatch(name.strip())
        if match is None:
            raise ValueError(ErrorMessages.UNKNOWN_PITCH.format(pitch=name))
        key = Key(KeyLetter.parse(match.group(1)), Accidental.parse(match.group(2)))
        return cls(key, int(match.group(3)))

    def is_exactly(self, other: Pitch) -> bool:
        """Same key spelling and octave, not just the same sound."""
        return self._key == other._key and self._octave == other._octave

    def respelled(self, letter: KeyLetter) -> Pitch:
        """Enharmonic equivalent written on another letter."""
        return _spell(letter, self.raw_value)

    def transposed(self, interval: Interval, direction: TransposeDirection = "up") -> Pitch:
        """Spelled transposition up or down by an interval."""
        return self._transpose(interval, 1 if direction == "up" else -1)

    def _transpose(self, interval: Interval, direction: int) -> Pitch:
        steps = interval.steps if interval.semitones >= 0 else -interval.steps
        letter = self._key.letter.offset(steps * direction)
        return _spell(letter, self.raw_value + interval.semitones * direction)

    def interval_to(self, other: Pitch) -> Interval:
        """
        Interval between two pitches, measured up from the lower one.

        The degree counts letter steps. The quality compares the upper
        pitch with the major scale built on the lower pitch.
        """
        from chuk_mcp_theory.core.scale import Scale, ScaleType

        bottom, top = sorted((self, other), key=lambda p: (p.raw_value, p.diatonic_index))
        semitones = top.raw_value - bottom.raw_value
        degree = top.diatonic_index - bottom.diatonic_index + 1
        if degree < 1:
            return Interval.from_semitones(semitones)

        major_scale = Scale(ScaleType.MAJOR, bottom.key)
        octaves = range(bottom.octave, top.octave + 1)
        if any(p.is_exactly(top) for p in major_scale.pitches(octaves)):
            quality = IntervalQuality.PERFECT if is_perfect_degree(degree) else IntervalQuality.MAJOR
            return Interval(quality, degree, semitones)
        return Interval.for_degree(degree, semitones)

    def __add__(self, other: Interval | int) -> Pitch:
        if isinstance(other, Interval):
            return self._transpose(other, 1)
        if isinstance(other, int):
            return Pitch.from_midi(self.raw_value + other)
        return NotImplemented

    def __sub__(self, other: Interval | int | Pitch) -> Pitch | Interval:  # type: ignore[override]
        if isinstance(other, Pitch):
            return self.interval_to(other)
        if isinstance(other, Interval):
            return self._transpose(other, -1)
        if isinstance(other, int):
            return Pitch.from_midi(self.raw_value - other)
        return NotImplemented

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Pitch):
            return NotImplemented
        return self.raw_value == other.raw_value

    def __lt__(self, other: Pitch) -> bool:
        if not isinstance(other, Pitch):
            return NotImplemented
        return self.raw_value < other.raw_value

    def __hash__(self) -> int:
        return hash(self.raw_value)

    def __str__(self) -> str:
        return f"{self._key}{self._octave}"

    def __repr__(self) -> str:
        return f"Pitch({self})"
