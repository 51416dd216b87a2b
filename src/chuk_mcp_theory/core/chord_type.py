"""
Chord types - ChordType and ChordTypeBuilder.

A chord type is the root-independent structure of a chord: which third,
fifth, sixth, seventh, suspension and extensions it has. Two chord types
are equal when they produce the same intervals above the root, however
their parts were assigned.
"""

from __future__ import annotations

import itertools
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Flag, auto
from chuk_mcp_theory.core.chord_parts import (
    ChordExtensionType,
    ChordFifthType,
    ChordSeventhType,
    ChordSixthType,
    ChordSuspendedType,
    ChordThirdType,
    ExtensionType,
)
from chuk_mcp_theory.core.interval import Interval

ChordPart = (
    ChordThirdType
    | ChordFifthType
    | ChordSixthType
    | ChordSeventhType
    | ChordSuspendedType
    | ChordExtensionType
)

# Joint notation of a complete triad
_TRIAD_NOTATION: dict[tuple[ChordThirdType, ChordFifthType], str] = {
    (ChordThirdType.MAJOR, ChordFifthType.PERFECT): "",
    (ChordThirdType.MINOR, ChordFifthType.PERFECT): "m",
    (ChordThirdType.MINOR, ChordFifthType.DIMINISHED): "°",
    (ChordThirdType.MAJOR, ChordFifthType.AUGMENTED): "+",
    (ChordThirdType.MAJOR, ChordFifthType.DIMINISHED): "(♭5)",
    (ChordThirdType.MINOR, ChordFifthType.AUGMENTED): "m(♯5)",
}

_ALTERED_FIFTHS = (ChordFifthType.DIMINISHED, ChordFifthType.AUGMENTED)


@dataclass(frozen=True, eq=False)
class ChordType:
    """
    Structure of a chord independent of its root.

    A lone extension is completed on construction: with a seventh present,
    an eleventh brings a ninth and a thirteenth brings a ninth and an
    eleventh; without a seventh the extension becomes an added tone.

    Examples:
        ChordType() = major triad
        ChordType(ChordThirdType.MINOR, seventh=ChordSeventhType.DOMINANT) = m7
        ChordType(seventh=ChordSeventhType.DOMINANT,
                  extensions=(ChordExtensionType(ExtensionType.THIRTEENTH),)) = 13
    """

    third: ChordThirdType | None = ChordThirdType.MAJOR
    fifth: ChordFifthType | None = ChordFifthType.PERFECT
    sixth: ChordSixthType | None = None
    seventh: ChordSeventhType | None = None
    suspended: ChordSuspendedType | None = None
    extensions: tuple[ChordExtensionType, ...] = ()

    def __post_init__(self) -> None:
        extensions = tuple(self.extensions)
        if len(extensions) == 1:
            extensions = self._complete(extensions[0])
        object.__setattr__(self, "extensions", extensions)

    def _complete(self, extension: ChordExtensionType) -> tuple[ChordExtensionType, ...]:
        if self.seventh is None:
            return (extension.with_added(True),)
        implied = [t for t in ExtensionType if t < extension.type]
        return (extension.with_added(False),) + tuple(ChordExtensionType(t) for t in implied)

    @classmethod
    def exact(
        cls,
        third: ChordThirdType | None = ChordThirdType.MAJOR,
        fifth: ChordFifthType | None = ChordFifthType.PERFECT,
        sixth: ChordSixthType | None = None,
        seventh: ChordSeventhType | None = None,
        suspended: ChordSuspendedType | None = None,
        extensions: Iterable[ChordExtensionType] = (),
    ) -> ChordType:
        """
        Chord type with its parts stored exactly as given.

        Skips the lone-extension completion, so a parsed "11(no9)" keeps
        its eleventh without a ninth and "7(add11)" keeps its added tone.
        """
        chord_type = object.__new__(cls)
        for name, value in (
            ("third", third),
            ("fifth", fifth),
            ("sixth", sixth),
            ("seventh", seventh),
            ("suspended", suspended),
            ("extensions", tuple(extensions)),
        ):
            object.__setattr__(chord_type, name, value)
        return chord_type

    @property
    def sorted_extensions(self) -> tuple[ChordExtensionType, ...]:
        """Extensions ordered by numeral (9, 11, 13)."""
        return tuple(sorted(self.extensions, key=lambda e: e.type))

    @property
    def parts(self) -> tuple[ChordPart, ...]:
        """Present parts in interval order: third, suspension, fifth, sixth, seventh, extensions."""
        parts = (self.third, self.suspended, self.fifth, self.sixth, self.seventh)
        return tuple(p for p in parts if p is not None) + self.sorted_extensions

    @property
    def intervals(self) -> tuple[Interval, ...]:
        """Intervals above the root, starting with the unison."""
        return (Interval.P1,) + tuple(part.interval for part in self.parts)

    def has_chord_parts(self, parts: Iterable[ChordPart]) -> bool:
        """Whether every given part's interval occurs in this chord type."""
        intervals = self.intervals
        return all(part.interval in intervals for part in parts)

    @classmethod
    def from_intervals(cls, intervals: Iterable[Interval]) -> ChordType | None:
        """
        Recognise a chord type from intervals above a root.

        Each interval goes to the first free part it fits, in the order
        third, fifth, sixth, seventh, suspension, extension. Intervals that
        fit nowhere are dropped.

        Returns:
            The chord type, or None if neither a third nor a fifth was found
        """
        slots: dict[str, ChordPart | None] = dict.fromkeys(
            ("third", "fifth", "sixth", "seventh", "suspended")
        )
        classifiers = (
            ("third", ChordThirdType.from_interval),
            ("fifth", ChordFifthType.from_interval),
            ("sixth", ChordSixthType.from_interval),
            ("seventh", ChordSeventhType.from_interval),
            ("suspended", ChordSuspendedType.from_interval),
        )
        extensions: list[ChordExtensionType] = []

        for interval in intervals:
            if interval == Interval.P1:
                continue
            for slot, classify in classifiers:
                if slots[slot] is None and (part := classify(interval)) is not None:
                    slots[slot] = part
                    break
            else:
                extension = ChordExtensionType.from_interval(interval)
                if extension is not None and extension not in extensions:
                    extensions.append(extension)

        if slots["third"] is None and slots["fifth"] is None:
            return None
        if len(extensions) == 1:
            # The interval set is exact, nothing is implied
            extensions[0] = extensions[0].with_added(True)
        return cls.exact(extensions=extensions, **slots)  # type: ignore[arg-type]

    @classmethod
    def all(cls) -> list[ChordType]:
        """
        Every combination of parts with at least one extension.

        2 thirds x 3 fifths x 2 sixths x 4 sevenths x 3 suspensions x 7
        extension subsets, generated in that nesting order.
        """
        extension_types = [ChordExtensionType(t) for t in ExtensionType]
        extension_sets = [
            combination
            for size in (1, 2, 3)
            for combination in itertools.combinations(extension_types, size)
        ]
        sixths: list[ChordSixthType | None] = [ChordSixthType(), None]
        sevenths: list[ChordSeventhType | None] = [*ChordSeventhType, None]
        suspensions: list[ChordSuspendedType | None] = [*ChordSuspendedType, None]

        return [
            cls(third, fifth, sixth, seventh, suspended, extensions)
            for third, fifth, sixth, seventh, suspended, extensions in itertools.product(
                ChordThirdType, ChordFifthType, sixths, sevenths, suspensions, extension_sets
            )
        ]

    @classmethod
    def parse(cls, notation: str) -> ChordType:
        """Parse a chord type symbol like 'm7', 'maj7' or '9(sus4)'."""
        from chuk_mcp_theory.core.notation import parse_chord_type

        return parse_chord_type(notation)

    @property
    def notation(self) -> str:
        """Chord symbol suffix, e.g. 'm7', '7(♭5)', '6/9' or '(add9)'."""
        extensions = self.sorted_extensions
        seventh = self.seventh.notation if self.seventh else ""
        sixth = ""
        if self.sixth is not None:
            sixth = self.sixth.notation + ("/" if self.seventh else "")
        suspended = self.suspended.notation if self.suspended else ""

        extension = ""
        if extensions and all(e.accidental.is_natural for e in extensions[:-1]):
            extension = f"({extensions[-1].notation})"
        elif extensions:
            extension = "(" + "/".join(e.notation for e in extensions) + ")"

        if self.third is not None and self.fifth is not None:
            triad = _TRIAD_NOTATION[(self.third, self.fifth)]
        elif self.fifth is not None:
            triad = "5" if self.fifth == ChordFifthType.PERFECT else self.fifth.notation
        elif self.third is not None:
            triad = f"{self.third.notation}(no 5)"
        else:
            triad = ""

        if self.seventh is not None:
            if self.seventh == ChordSeventhType.MAJOR and extensions:
                seventh = ""
                sixth = self.sixth.notation if self.sixth else ""
            elif self.seventh == ChordSeventhType.MAJOR and self.third == ChordThirdType.MINOR:
                seventh = f"({seventh})"

            if self.fifth in _ALTERED_FIFTHS:
                third = self.third.notation if self.third else ""
                if (
                    self.seventh == ChordSeventhType.DIMINISHED
                    and self.fifth == ChordFifthType.DIMINISHED
                    and self.third == ChordThirdType.MINOR
                ):
                    return f"{sixth}{seventh}{suspended}{extension}"
                return f"{third}{sixth}{seventh}({self.fifth.alteration}){suspended}{extension}"

        return f"{triad}{sixth}{seventh}{suspended}{extension}"

    @property
    def description(self) -> str:
        """Human readable part list, e.g. 'Minor Dominant 7th'."""
        if self.third is not None:
            third = self.third.description
        else:
            third = "(no 3)"
        if self.fifth is not None:
            fifth = self.fifth.description
        else:
            fifth = "(no 5)"

        words = [third, fifth]
        words += [p.description for p in (self.sixth, self.seventh, self.suspended) if p is not None]
        words += [e.description for e in self.sorted_extensions]
        return " ".join(w for w in words if w)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChordType):
            return NotImplemented
        return self._sound() == other._sound()

    def __hash__(self) -> int:
        return hash(self._sound())

    def _sound(self) -> frozenset[int]:
        return frozenset(interval.semitones for interval in self.intervals)

    def __str__(self) -> str:
        return self.notation

    def __repr__(self) -> str:
        return f"ChordType({self.notation!r})"


class Fill(Flag):
    """Parts a builder can fill in with defaults."""

    SEVENTH = auto()
    NINTH = auto()
    ELEVENTH = auto()
    THIRTEENTH = auto()


_FILL_EXTENSIONS: dict[Fill, ExtensionType] = {
    Fill.NINTH: ExtensionType.NINTH,
    Fill.ELEVENTH: ExtensionType.ELEVENTH,
    Fill.THIRTEENTH: ExtensionType.THIRTEENTH,
}


@dataclass
class ChordTypeBuilder:
    """
    Mutable staging area for assembling a ChordType.

    Starts as a major triad. Used within a single construction and then
    discarded; build() produces the immutable value.
    """

    third: ChordThirdType | None = ChordThirdType.MAJOR
    fifth: ChordFifthType | None = ChordFifthType.PERFECT
    sixth: ChordSixthType | None = None
    seventh: ChordSeventhType | None = None
    suspended: ChordSuspendedType | None = None
    extensions: list[ChordExtensionType] = field(default_factory=list)

    def add_extension(self, extension: ChordExtensionType) -> None:
        self.extensions.append(extension)

    def remove_extension(self, extension: ChordExtensionType) -> None:
        """Remove the first matching extension, if present."""
        if extension in self.extensions:
            self.extensions.remove(extension)

    def remove_all_extensions(self, extension_type: ExtensionType) -> None:
        self.extensions = [e for e in self.extensions if e.type != extension_type]

    def add_extension_if_absent(self, extension: ChordExtensionType) -> None:
        """Add an extension unless one of the same numeral is already present."""
        if any(e.type == extension.type for e in self.extensions):
            return
        self.add_extension(extension)

    def fill(self, options: Fill) -> None:
        """
        Fill in every requested part that is missing.

        Args:
            options: Parts to fill; the seventh defaults to dominant and
                extensions default to natural
        """
        if Fill.SEVENTH in options and self.seventh is None:
            self.seventh = ChordSeventhType.DOMINANT
        for flag, extension_type in _FILL_EXTENSIONS.items():
            if flag in options:
                self.add_extension_if_absent(ChordExtensionType(extension_type))

    def build(self) -> ChordType:
        """The staged parts as an immutable ChordType, without re-completing extensions."""
        return ChordType.exact(
            third=self.third,
            fifth=self.fifth,
            sixth=self.sixth,
            seventh=self.seventh,
            suspended=self.suspended,
            extensions=tuple(self.extensions),
        )
