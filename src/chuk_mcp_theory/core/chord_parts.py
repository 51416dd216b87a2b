"""
Chord parts - the third, fifth, sixth, seventh, suspension and extensions.

Each part knows its interval above the root, its chord-symbol notation and
a human description, and can be recognised back from an interval.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum

from chuk_mcp_theory.core.errors import ChordPartError
from chuk_mcp_theory.core.interval import Interval
from chuk_mcp_theory.core.pitch import Accidental


class ChordThirdType(str, Enum):
    """Major or minor third."""

    MAJOR = "major"
    MINOR = "minor"

    @property
    def interval(self) -> Interval:
        return _THIRD_INTERVALS[self]

    @property
    def notation(self) -> str:
        return "m" if self == ChordThirdType.MINOR else ""

    @property
    def description(self) -> str:
        return self.value.capitalize()

    @classmethod
    def from_interval(cls, interval: Interval) -> ChordThirdType | None:
        return next((t for t, i in _THIRD_INTERVALS.items() if i == interval), None)


# Module level to avoid str-Enum member issues
_THIRD_INTERVALS: dict[ChordThirdType, Interval] = {
    ChordThirdType.MAJOR: Interval.M3,
    ChordThirdType.MINOR: Interval.m3,
}


class ChordFifthType(str, Enum):
    """Perfect, diminished or augmented fifth."""

    PERFECT = "perfect"
    DIMINISHED = "diminished"
    AUGMENTED = "augmented"

    @property
    def interval(self) -> Interval:
        return _FIFTH_INTERVALS[self]

    @property
    def notation(self) -> str:
        """Triad symbol: '' for perfect, '°' diminished, '+' augmented."""
        return _FIFTH_NOTATION[self]

    @property
    def alteration(self) -> str:
        """Parenthesis-ready alteration: '♭5', '♯5' or '' for perfect."""
        return _FIFTH_ALTERATION[self]

    @property
    def description(self) -> str:
        return "" if self == ChordFifthType.PERFECT else self.value.capitalize()

    @classmethod
    def from_interval(cls, interval: Interval) -> ChordFifthType | None:
        return next((t for t, i in _FIFTH_INTERVALS.items() if i == interval), None)


_FIFTH_INTERVALS: dict[ChordFifthType, Interval] = {
    ChordFifthType.PERFECT: Interval.P5,
    ChordFifthType.DIMINISHED: Interval.d5,
    ChordFifthType.AUGMENTED: Interval.A5,
}
_FIFTH_NOTATION: dict[ChordFifthType, str] = {
    ChordFifthType.PERFECT: "",
    ChordFifthType.DIMINISHED: "°",
    ChordFifthType.AUGMENTED: "+",
}
_FIFTH_ALTERATION: dict[ChordFifthType, str] = {
    ChordFifthType.PERFECT: "",
    ChordFifthType.DIMINISHED: "♭5",
    ChordFifthType.AUGMENTED: "♯5",
}


@dataclass(frozen=True)
class ChordSixthType:
    """The added major sixth. There is only one kind."""

    @property
    def interval(self) -> Interval:
        return Interval.M6

    @property
    def notation(self) -> str:
        return "6"

    @property
    def description(self) -> str:
        return "Sixth"

    @classmethod
    def from_interval(cls, interval: Interval) -> ChordSixthType | None:
        return cls() if interval == Interval.M6 else None


class ChordSeventhType(str, Enum):
    """Major, dominant (minor) or diminished seventh."""

    MAJOR = "major"
    DOMINANT = "dominant"
    DIMINISHED = "diminished"

    @property
    def interval(self) -> Interval:
        return _SEVENTH_INTERVALS[self]

    @property
    def notation(self) -> str:
        return _SEVENTH_NOTATION[self]

    @property
    def description(self) -> str:
        return f"{self.value.capitalize()} 7th"

    @classmethod
    def from_interval(cls, interval: Interval) -> ChordSeventhType | None:
        return next((t for t, i in _SEVENTH_INTERVALS.items() if i == interval), None)


_SEVENTH_INTERVALS: dict[ChordSeventhType, Interval] = {
    ChordSeventhType.MAJOR: Interval.M7,
    ChordSeventhType.DOMINANT: Interval.m7,
    ChordSeventhType.DIMINISHED: Interval.d7,
}
_SEVENTH_NOTATION: dict[ChordSeventhType, str] = {
    ChordSeventhType.MAJOR: "M7",
    ChordSeventhType.DOMINANT: "7",
    ChordSeventhType.DIMINISHED: "°7",
}


class ChordSuspendedType(str, Enum):
    """Suspended second or fourth."""

    SUS2 = "sus2"
    SUS4 = "sus4"

    @property
    def interval(self) -> Interval:
        return Interval.M2 if self == ChordSuspendedType.SUS2 else Interval.P4

    @property
    def notation(self) -> str:
        return f"({self.value})"

    @property
    def description(self) -> str:
        return "Suspended 2nd" if self == ChordSuspendedType.SUS2 else "Suspended 4th"

    @classmethod
    def from_interval(cls, interval: Interval) -> ChordSuspendedType | None:
        if interval == Interval.M2:
            return cls.SUS2
        if interval == Interval.P4:
            return cls.SUS4
        return None


class ExtensionType(IntEnum):
    """Upper chord extensions by degree."""

    NINTH = 9
    ELEVENTH = 11
    THIRTEENTH = 13

    @property
    def description(self) -> str:
        return f"{self.value}th"


# Intervals indexed by (extension, accidental halfsteps)
_EXTENSION_INTERVALS: dict[tuple[ExtensionType, int], Interval] = {
    (ExtensionType.NINTH, -1): Interval.m9,
    (ExtensionType.NINTH, 0): Interval.M9,
    (ExtensionType.NINTH, 1): Interval.A9,
    (ExtensionType.ELEVENTH, -1): Interval.d11,
    (ExtensionType.ELEVENTH, 0): Interval.P11,
    (ExtensionType.ELEVENTH, 1): Interval.A11,
    (ExtensionType.THIRTEENTH, -1): Interval.m13,
    (ExtensionType.THIRTEENTH, 0): Interval.M13,
    (ExtensionType.THIRTEENTH, 1): Interval.A13,
}


@dataclass(frozen=True)
class ChordExtensionType:
    """
    A ninth, eleventh or thirteenth with an optional flat or sharp.

    is_added marks an extension stacked directly on a triad ("add9") rather
    than implying the seventh and lower extensions.

    Examples:
        ChordExtensionType(ExtensionType.NINTH) = 9
        ChordExtensionType(ExtensionType.ELEVENTH, Accidental.SHARP) = ♯11
        ChordExtensionType(ExtensionType.NINTH, is_added=True) = add9
    """

    type: ExtensionType
    accidental: Accidental = Accidental.NATURAL
    is_added: bool = False

    def __post_init__(self) -> None:
        if self.accidental.halfsteps not in (-1, 0, 1):
            raise ChordPartError(
                f"Extension accidental must be flat, natural or sharp, got {self.accidental!r}"
            )

    @property
    def interval(self) -> Interval:
        return _EXTENSION_INTERVALS[(self.type, self.accidental.halfsteps)]

    @property
    def notation(self) -> str:
        prefix = "add" if self.is_added else ""
        return f"{prefix}{self.accidental.symbol}{self.type.value}"

    @property
    def description(self) -> str:
        prefix = "Added " if self.is_added else ""
        return f"{prefix}{self.accidental.symbol}{self.type.description}"

    def with_added(self, is_added: bool) -> ChordExtensionType:
        return ChordExtensionType(self.type, self.accidental, is_added)

    @classmethod
    def from_interval(cls, interval: Interval) -> ChordExtensionType | None:
        for (extension, halfsteps), candidate in _EXTENSION_INTERVALS.items():
            if candidate == interval:
                return cls(extension, Accidental(halfsteps))
        return None

    @classmethod
    def all(cls) -> tuple[ChordExtensionType, ...]:
        """Every extension and accidental combination, not added."""
        return tuple(cls(extension, Accidental(halfsteps)) for extension, halfsteps in _EXTENSION_INTERVALS)

    def __str__(self) -> str:
        return self.notation
