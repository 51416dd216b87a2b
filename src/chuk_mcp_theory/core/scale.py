"""
Scale primitives - ScaleType and Scale.

Scales are step patterns from a root. A Scale applies a pattern to a spelled
key, one letter per degree, so D major contains F♯ and C♯ rather than G♭
and D♭. The major scale is the template interval classification uses.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import ClassVar

from chuk_mcp_theory.constants import DEFAULT_OCTAVE
from chuk_mcp_theory.core.interval import Interval
from chuk_mcp_theory.core.pitch import Key, Pitch


@dataclass(frozen=True)
class ScaleType:
    """
    A scale defined by its step pattern.

    The steps are from one degree to the next (not cumulative), each a
    spelled second. A major scale is: M2 M2 m2 M2 M2 M2 m2.

    Immutable and hashable.
    """

    steps: tuple[Interval, ...]
    name: str = ""

    # Common scale types (defined after class)
    MAJOR: ClassVar[ScaleType]
    NATURAL_MINOR: ClassVar[ScaleType]
    HARMONIC_MINOR: ClassVar[ScaleType]
    MELODIC_MINOR: ClassVar[ScaleType]
    DORIAN: ClassVar[ScaleType]
    PHRYGIAN: ClassVar[ScaleType]
    LYDIAN: ClassVar[ScaleType]
    MIXOLYDIAN: ClassVar[ScaleType]
    LOCRIAN: ClassVar[ScaleType]

    def __post_init__(self) -> None:
        total = sum(step.semitones for step in self.steps)
        if total != 12:
            raise ValueError(f"Scale steps must sum to 12 semitones, got {total}")

    def degree_intervals(self) -> tuple[Interval, ...]:
        """
        Interval from the root to each degree (the octave is not included).

        Returns:
            One interval per degree, e.g. P1 M2 M3 P4 P5 M6 M7 for major
        """
        intervals = []
        semitones = 0
        for degree, step in enumerate(self.steps, start=1):
            intervals.append(Interval.for_degree(degree, semitones))
            semitones += step.semitones
        return tuple(intervals)

    def __str__(self) -> str:
        return self.name or f"ScaleType({self.steps})"

    def __repr__(self) -> str:
        if self.name:
            return f"ScaleType.{self.name.upper().replace(' ', '_')}"
        return f"ScaleType({self.steps!r})"


_M2 = Interval.M2  # whole step
_m2 = Interval.m2  # half step
_A2 = Interval.A2

ScaleType.MAJOR = ScaleType((_M2, _M2, _m2, _M2, _M2, _M2, _m2), "major")
ScaleType.NATURAL_MINOR = ScaleType((_M2, _m2, _M2, _M2, _m2, _M2, _M2), "natural minor")
ScaleType.HARMONIC_MINOR = ScaleType((_M2, _m2, _M2, _M2, _m2, _A2, _m2), "harmonic minor")
ScaleType.MELODIC_MINOR = ScaleType((_M2, _m2, _M2, _M2, _M2, _M2, _m2), "melodic minor")
ScaleType.DORIAN = ScaleType((_M2, _m2, _M2, _M2, _M2, _m2, _M2), "dorian")
ScaleType.PHRYGIAN = ScaleType((_m2, _M2, _M2, _M2, _m2, _M2, _M2), "phrygian")
ScaleType.LYDIAN = ScaleType((_M2, _M2, _M2, _m2, _M2, _M2, _m2), "lydian")
ScaleType.MIXOLYDIAN = ScaleType((_M2, _M2, _m2, _M2, _M2, _m2, _M2), "mixolydian")
ScaleType.LOCRIAN = ScaleType((_m2, _M2, _M2, _m2, _M2, _M2, _M2), "locrian")

_SCALE_NAMES: dict[str, ScaleType] = {
    "major": ScaleType.MAJOR,
    "minor": ScaleType.NATURAL_MINOR,
    "natural_minor": ScaleType.NATURAL_MINOR,
    "harmonic_minor": ScaleType.HARMONIC_MINOR,
    "melodic_minor": ScaleType.MELODIC_MINOR,
    "dorian": ScaleType.DORIAN,
    "phrygian": ScaleType.PHRYGIAN,
    "lydian": ScaleType.LYDIAN,
    "mixolydian": ScaleType.MIXOLYDIAN,
    "locrian": ScaleType.LOCRIAN,
}


@dataclass(frozen=True)
class Scale:
    """
    A scale type applied to a spelled key.

    Examples:
        Scale(ScaleType.MAJOR, Key.parse("D")).keys() = D E F♯ G A B C♯
        Scale(ScaleType.NATURAL_MINOR, Key.parse("C")).keys() = C D E♭ F G A♭ B♭
    """

    type: ScaleType
    key: Key

    def keys(self) -> tuple[Key, ...]:
        """Spelled keys of the scale, one per letter."""
        return tuple(pitch.key for pitch in self.pitches((DEFAULT_OCTAVE,)))

    def pitches(self, octaves: Iterable[int]) -> list[Pitch]:
        """
        Spelled pitches of the scale starting from the key in each octave.

        Args:
            octaves: Octaves to start a run of the scale in

        Returns:
            Pitches in ascending order
        """
        intervals = self.type.degree_intervals()
        return [Pitch(self.key, octave) + interval for octave in octaves for interval in intervals]

    def contains(self, key: Key) -> bool:
        """Whether a spelled key belongs to the scale."""
        return key in self.keys()

    def __str__(self) -> str:
        if self.type == ScaleType.NATURAL_MINOR:
            return f"{self.key} minor"
        return f"{self.key} {self.type}"

    def __repr__(self) -> str:
        return f"Scale({self.type!r}, {self.key!r})"

    @classmethod
    def parse(cls, name: str) -> Scale:
        """
        Parse a scale from a string like 'C_major', 'D_minor', 'F#_dorian'.

        Args:
            name: Key name and scale name with underscore separator

        Returns:
            Parsed Scale object
        """
        parts = name.split("_")
        if len(parts) < 2:
            raise ValueError(f"Invalid scale format: {name}. Expected 'root_scale' like 'C_major'")

        scale_name = "_".join(parts[1:]).lower()
        if scale_name not in _SCALE_NAMES:
            raise ValueError(f"Unknown scale type: {scale_name}")

        return cls(_SCALE_NAMES[scale_name], Key.parse(parts[0]))
