"""
Interval primitives - IntervalQuality and Interval.

An interval is a distance measured two ways at once: in semitones (the
chromatic axis) and in scale degrees (the letter-name axis). The degree and
quality decide how a transposed pitch is spelled; the semitones decide how it
sounds. Equality only looks at the sound.
"""

from __future__ import annotations

import re
from enum import Enum
from functools import total_ordering
from typing import ClassVar

from chuk_mcp_theory.constants import ErrorMessages


class IntervalQuality(str, Enum):
    """Quality of an interval at a given degree."""

    PERFECT = "perfect"
    MAJOR = "major"
    MINOR = "minor"
    AUGMENTED = "augmented"
    DIMINISHED = "diminished"
    CUSTOM = "custom"

    @property
    def abbreviation(self) -> str:
        """Short quality letter (P, M, m, A, d)."""
        return _QUALITY_ABBREVIATIONS[self]


_QUALITY_ABBREVIATIONS: dict[IntervalQuality, str] = {
    IntervalQuality.PERFECT: "P",
    IntervalQuality.MAJOR: "M",
    IntervalQuality.MINOR: "m",
    IntervalQuality.AUGMENTED: "A",
    IntervalQuality.DIMINISHED: "d",
    IntervalQuality.CUSTOM: "",
}

# Semitones above the root of the major scale, by 0-based step
_MAJOR_SCALE_SEMITONES: tuple[int, ...] = (0, 2, 4, 5, 7, 9, 11)

# Steps (0-based, octave-reduced) whose template quality is perfect: 1, 4, 5
_PERFECT_STEPS = frozenset({0, 3, 4})

# Offset from the template semitone count for each quality
_PERFECT_OFFSETS: dict[IntervalQuality, int] = {
    IntervalQuality.DIMINISHED: -1,
    IntervalQuality.PERFECT: 0,
    IntervalQuality.AUGMENTED: 1,
}
_MAJOR_OFFSETS: dict[IntervalQuality, int] = {
    IntervalQuality.DIMINISHED: -2,
    IntervalQuality.MINOR: -1,
    IntervalQuality.MAJOR: 0,
    IntervalQuality.AUGMENTED: 1,
}

# Canonical spelling of each semitone count within one octave
_CANONICAL: dict[int, tuple[IntervalQuality, int]] = {
    0: (IntervalQuality.PERFECT, 1),
    1: (IntervalQuality.MINOR, 2),
    2: (IntervalQuality.MAJOR, 2),
    3: (IntervalQuality.MINOR, 3),
    4: (IntervalQuality.MAJOR, 3),
    5: (IntervalQuality.PERFECT, 4),
    6: (IntervalQuality.DIMINISHED, 5),
    7: (IntervalQuality.PERFECT, 5),
    8: (IntervalQuality.MINOR, 6),
    9: (IntervalQuality.MAJOR, 6),
    10: (IntervalQuality.MINOR, 7),
    11: (IntervalQuality.MAJOR, 7),
    12: (IntervalQuality.PERFECT, 8),
}

_DEGREE_NAMES: dict[int, str] = {
    1: "unison",
    2: "second",
    3: "third",
    4: "fourth",
    5: "fifth",
    6: "sixth",
    7: "seventh",
    8: "octave",
    9: "ninth",
    10: "tenth",
    11: "eleventh",
    12: "twelfth",
    13: "thirteenth",
    14: "fourteenth",
    15: "double octave",
}

_ABBREVIATION_PATTERN = re.compile(r"([PMmAd])(\d+)")


def is_perfect_degree(degree: int) -> bool:
    """Whether a (1-based, possibly compound) degree takes perfect quality."""
    return (degree - 1) % 7 in _PERFECT_STEPS


def template_semitones(degree: int) -> int:
    """
    Semitones of the major or perfect interval at a degree.

    Compound degrees add an octave per seven steps: degree 9 -> 14.
    """
    octaves, step = divmod(degree - 1, 7)
    return _MAJOR_SCALE_SEMITONES[step] + 12 * octaves


def quality_offset(quality: IntervalQuality, degree: int) -> int | None:
    """Semitone offset of a quality from the degree's template, or None if illegal."""
    offsets = _PERFECT_OFFSETS if is_perfect_degree(degree) else _MAJOR_OFFSETS
    return offsets.get(quality)


@total_ordering
class Interval:
    """
    Distance between two pitches by quality, degree and semitones.

    Degree is 1-based (1 = unison, 3 = third, 9 = ninth). Two intervals
    are equal when they span the same number of semitones, regardless of
    spelling: an augmented fourth equals a diminished fifth.

    Immutable and hashable.
    """

    __slots__ = ("_quality", "_degree", "_semitones")
    _quality: IntervalQuality
    _degree: int
    _semitones: int

    # Named intervals (class constants)
    P1: ClassVar[Interval]
    A1: ClassVar[Interval]
    d2: ClassVar[Interval]
    m2: ClassVar[Interval]
    M2: ClassVar[Interval]
    A2: ClassVar[Interval]
    d3: ClassVar[Interval]
    m3: ClassVar[Interval]
    M3: ClassVar[Interval]
    A3: ClassVar[Interval]
    d4: ClassVar[Interval]
    P4: ClassVar[Interval]
    A4: ClassVar[Interval]
    d5: ClassVar[Interval]
    P5: ClassVar[Interval]
    A5: ClassVar[Interval]
    d6: ClassVar[Interval]
    m6: ClassVar[Interval]
    M6: ClassVar[Interval]
    A6: ClassVar[Interval]
    d7: ClassVar[Interval]
    m7: ClassVar[Interval]
    M7: ClassVar[Interval]
    A7: ClassVar[Interval]
    d8: ClassVar[Interval]
    P8: ClassVar[Interval]
    m9: ClassVar[Interval]
    M9: ClassVar[Interval]
    A9: ClassVar[Interval]
    d11: ClassVar[Interval]
    P11: ClassVar[Interval]
    A11: ClassVar[Interval]
    m13: ClassVar[Interval]
    M13: ClassVar[Interval]
    A13: ClassVar[Interval]

    # Long aliases
    UNISON: ClassVar[Interval]
    MINOR_SECOND: ClassVar[Interval]
    MAJOR_SECOND: ClassVar[Interval]
    MINOR_THIRD: ClassVar[Interval]
    MAJOR_THIRD: ClassVar[Interval]
    PERFECT_FOURTH: ClassVar[Interval]
    TRITONE: ClassVar[Interval]
    PERFECT_FIFTH: ClassVar[Interval]
    MINOR_SIXTH: ClassVar[Interval]
    MAJOR_SIXTH: ClassVar[Interval]
    MINOR_SEVENTH: ClassVar[Interval]
    MAJOR_SEVENTH: ClassVar[Interval]
    OCTAVE: ClassVar[Interval]

    def __init__(self, quality: IntervalQuality, degree: int, semitones: int) -> None:
        """
        Create an interval.

        Args:
            quality: Interval quality
            degree: 1-based scale degree, compound degrees allowed
            semitones: Signed semitone distance

        Raises:
            ValueError: If a diatonic quality disagrees with the semitone count
        """
        quality = IntervalQuality(quality)
        if degree < 1:
            raise ValueError(f"Interval degree must be 1 or more, got {degree}")
        if quality != IntervalQuality.CUSTOM:
            offset = quality_offset(quality, degree)
            if offset is None:
                raise ValueError(f"Degree {degree} cannot be {quality.value}")
            expected = template_semitones(degree) + offset
            if semitones != expected:
                raise ValueError(
                    f"A {quality.value} interval at degree {degree} spans {expected} "
                    f"semitones, got {semitones}"
                )
        object.__setattr__(self, "_quality", quality)
        object.__setattr__(self, "_degree", degree)
        object.__setattr__(self, "_semitones", semitones)

    @classmethod
    def from_semitones(cls, semitones: int) -> Interval:
        """
        Spell a semitone count using the canonical table.

        0-12 map to P1, m2, M2, m3, M3, P4, d5, P5, m6, M6, m7, M7, P8.
        Anything else becomes a custom interval whose degree is taken from
        the octave-reduced value.
        """
        if semitones in _CANONICAL:
            quality, degree = _CANONICAL[semitones]
            return cls(quality, degree, semitones)
        octaves, remainder = divmod(abs(semitones), 12)
        _, base_degree = _CANONICAL[remainder]
        return cls(IntervalQuality.CUSTOM, base_degree + 7 * octaves, semitones)

    @classmethod
    def for_degree(cls, degree: int, semitones: int) -> Interval:
        """
        Classify a semitone distance spanning a known number of degrees.

        The distance is compared with the major or perfect template at that
        degree: above it is augmented, below it is minor or diminished.
        Distances no single quality can name fall back to custom.
        """
        perfect = is_perfect_degree(degree)
        offset = semitones - template_semitones(degree)
        offsets = _PERFECT_OFFSETS if perfect else _MAJOR_OFFSETS
        for quality, quality_shift in offsets.items():
            if quality_shift == offset:
                return cls(quality, degree, semitones)
        return cls(IntervalQuality.CUSTOM, degree, semitones)

    @classmethod
    def parse(cls, text: str) -> Interval:
        """Parse an interval abbreviation like 'M3', 'P5', 'A4' or 'm9'."""
        match = _ABBREVIATION_PATTERN.fullmatch(text.strip())
        if match is None:
            raise ValueError(ErrorMessages.UNKNOWN_INTERVAL.format(interval=text))
        quality = next(q for q, abbr in _QUALITY_ABBREVIATIONS.items() if abbr == match.group(1))
        degree = int(match.group(2))
        offset = quality_offset(quality, degree) if degree >= 1 else None
        if offset is None:
            raise ValueError(ErrorMessages.UNKNOWN_INTERVAL.format(interval=text))
        return cls(quality, degree, template_semitones(degree) + offset)

    @property
    def quality(self) -> IntervalQuality:
        return self._quality

    @property
    def degree(self) -> int:
        """1-based degree (1 = unison)."""
        return self._degree

    @property
    def steps(self) -> int:
        """0-based letter steps spanned (0 = unison)."""
        return self._degree - 1

    @property
    def semitones(self) -> int:
        return self._semitones

    @property
    def is_compound(self) -> bool:
        """True for intervals wider than an octave."""
        return abs(self._semitones) > 12

    @property
    def abbreviation(self) -> str:
        """Short name such as 'M3' or 'P11'."""
        if self._quality == IntervalQuality.CUSTOM:
            return f"{self._semitones}st"
        return f"{self._quality.abbreviation}{self._degree}"

    @property
    def description(self) -> str:
        """Long name such as 'major third'."""
        if self._quality == IntervalQuality.CUSTOM:
            return f"{self._semitones} semitones"
        name = _DEGREE_NAMES.get(self._degree, f"{self._degree}th")
        if self._degree in (1, 8, 15) and self._quality == IntervalQuality.PERFECT:
            return name
        return f"{self._quality.value} {name}"

    def scaled(self, octaves: int) -> Interval:
        """
        Extend by whole octaves: M2.scaled(2) is a major ninth.

        octaves=1 leaves the interval unchanged.
        """
        if octaves < 1:
            raise ValueError(f"Octave count must be 1 or more, got {octaves}")
        extra = octaves - 1
        return Interval(self._quality, self._degree + 7 * extra, self._semitones + 12 * extra)

    def __add__(self, other: Interval) -> Interval:
        if not isinstance(other, Interval):
            return NotImplemented
        return Interval.from_semitones(self._semitones + other._semitones)

    def __sub__(self, other: Interval) -> Interval:
        if not isinstance(other, Interval):
            return NotImplemented
        return Interval.from_semitones(self._semitones - other._semitones)

    def __mul__(self, octaves: int) -> Interval:
        if not isinstance(octaves, int):
            return NotImplemented
        return self.scaled(octaves)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Interval):
            return NotImplemented
        return bool(self._semitones == other._semitones)

    def __lt__(self, other: Interval) -> bool:
        if not isinstance(other, Interval):
            return NotImplemented
        return bool(self._semitones < other._semitones)

    def __hash__(self) -> int:
        return hash(self._semitones)

    def __repr__(self) -> str:
        if self._quality != IntervalQuality.CUSTOM:
            named = getattr(Interval, self.abbreviation, None)
            if isinstance(named, Interval) and named._degree == self._degree:
                return f"Interval.{self.abbreviation}"
        return f"Interval({self._quality.value!r}, {self._degree}, {self._semitones})"

    def __str__(self) -> str:
        return self.abbreviation


# Initialize class constants after class is defined
for _abbreviation in (
    "P1 A1 d2 m2 M2 A2 d3 m3 M3 A3 d4 P4 A4 d5 P5 A5 d6 m6 M6 A6 d7 m7 M7 A7 d8 P8 "
    "m9 M9 A9 d11 P11 A11 m13 M13 A13"
).split():
    setattr(Interval, _abbreviation, Interval.parse(_abbreviation))

Interval.UNISON = Interval.P1
Interval.MINOR_SECOND = Interval.m2
Interval.MAJOR_SECOND = Interval.M2
Interval.MINOR_THIRD = Interval.m3
Interval.MAJOR_THIRD = Interval.M3
Interval.PERFECT_FOURTH = Interval.P4
Interval.TRITONE = Interval.d5
Interval.PERFECT_FIFTH = Interval.P5
Interval.MINOR_SIXTH = Interval.m6
Interval.MAJOR_SIXTH = Interval.M6
Interval.MINOR_SEVENTH = Interval.m7
Interval.MAJOR_SEVENTH = Interval.M7
Interval.OCTAVE = Interval.P8
