"""
Chord symbol parser.

Turns symbols like "F#m7(b5)(add9)" or "C/E" into chord types and chords.

Grammar, in stages:
    root      letter plus accidentals ("F#", "B♭")
    segment   base token, then up to nine parenthesised modifiers
    base      prefix ("", M, maj, m, min, °, o, dim, +, aug, Ø, ø) and numeral
    numeral   5, 6, 7, 9, 11 or 13
    modifier  add / no / sus / ♭ / ♯ / maj with a numeral, e.g. "add9", "no5"
    bass      optional "/E" selecting the inversion

Anything the grammar does not recognise raises ChordParseError naming the
token and stage.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from typing import TYPE_CHECKING

from chuk_mcp_theory.constants import MAX_MODIFIER_TOKENS
from chuk_mcp_theory.core.chord_parts import (
    ChordExtensionType,
    ChordFifthType,
    ChordSeventhType,
    ChordSixthType,
    ChordSuspendedType,
    ChordThirdType,
    ExtensionType,
)
from chuk_mcp_theory.core.chord_type import ChordType, ChordTypeBuilder, Fill
from chuk_mcp_theory.core.errors import ChordParseError, ParseStage
from chuk_mcp_theory.core.pitch import Accidental, Key

if TYPE_CHECKING:
    from chuk_mcp_theory.core.chord import Chord

logger = logging.getLogger(__name__)

# Chord roots take "##" or "𝄪" for a double sharp, never "x"
_ROOT_PATTERN = re.compile(r"([A-G])([#♯b♭𝄪𝄫]*)")
_UNIT = r"[\w+°♭♯#]"
_MODIFIER_UNIT = r"[\w+°♭♯# ]"
_SEGMENT_PATTERN = re.compile(
    rf"({_UNIT}*)" + rf"(?:\(({_MODIFIER_UNIT}+)\))?" * MAX_MODIFIER_TOKENS
)
_BASE_PATTERN = re.compile(r"((?:[A-Za-z]|[+°Øø])*)(\d+)?")
_MODIFIER_PATTERN = re.compile(r"(add|no|sus|♭|♯|#|b|maj|M|°|\+)?\s?(\d+)?")

# Base prefix -> (third, fifth)
_PREFIXES: dict[str, tuple[ChordThirdType, ChordFifthType]] = {
    "": (ChordThirdType.MAJOR, ChordFifthType.PERFECT),
    "M": (ChordThirdType.MAJOR, ChordFifthType.PERFECT),
    "maj": (ChordThirdType.MAJOR, ChordFifthType.PERFECT),
    "m": (ChordThirdType.MINOR, ChordFifthType.PERFECT),
    "min": (ChordThirdType.MINOR, ChordFifthType.PERFECT),
    "°": (ChordThirdType.MINOR, ChordFifthType.DIMINISHED),
    "o": (ChordThirdType.MINOR, ChordFifthType.DIMINISHED),
    "dim": (ChordThirdType.MINOR, ChordFifthType.DIMINISHED),
    "+": (ChordThirdType.MAJOR, ChordFifthType.AUGMENTED),
    "aug": (ChordThirdType.MAJOR, ChordFifthType.AUGMENTED),
    "Ø": (ChordThirdType.MINOR, ChordFifthType.DIMINISHED),
    "ø": (ChordThirdType.MINOR, ChordFifthType.DIMINISHED),
}
_MAJOR_PREFIXES = frozenset({"M", "maj"})
_DIMINISHED_PREFIXES = frozenset({"°", "o", "dim"})

# Numeral -> parts to fill before adding the extension itself
_STACKED_EXTENSIONS: dict[str, tuple[Fill, ExtensionType]] = {
    "9": (Fill.SEVENTH, ExtensionType.NINTH),
    "11": (Fill.SEVENTH | Fill.NINTH, ExtensionType.ELEVENTH),
    "13": (Fill.SEVENTH | Fill.NINTH | Fill.ELEVENTH, ExtensionType.THIRTEENTH),
}

_SHARP_TAGS = frozenset({"+", "♯", "#"})
_FLAT_TAGS = frozenset({"°", "♭", "b"})
_MAJOR_TAGS = frozenset({"maj", "M"})


class _Parser:
    """Single-use parse of one chord type symbol."""

    def __init__(self, symbol: str) -> None:
        self.symbol = symbol
        self.builder = ChordTypeBuilder()

    def fail(self, reason: str, token: str, stage: ParseStage) -> ChordParseError:
        return ChordParseError(reason, symbol=self.symbol, token=token, stage=stage)

    def parse(self, notation: str) -> ChordType:
        segments = _SEGMENT_PATTERN.fullmatch(notation)
        if segments is None:
            raise self.fail(
                f"Expected a base token and at most {MAX_MODIFIER_TOKENS} parenthesised modifiers",
                notation,
                ParseStage.SEGMENTATION,
            )
        base, *modifiers = segments.groups()
        self.parse_base(base)
        for modifier in modifiers:
            if modifier is not None:
                self.parse_modifier(modifier)
        return self.builder.build()

    def parse_base(self, base: str) -> None:
        match = _BASE_PATTERN.fullmatch(base)
        if match is None:
            raise self.fail("Malformed base token", base, ParseStage.BASE)
        prefix, numeral = match.group(1), match.group(2) or ""

        if prefix not in _PREFIXES:
            raise self.fail("Unknown chord quality", prefix, ParseStage.BASE)
        self.builder.third, self.builder.fifth = _PREFIXES[prefix]

        if numeral == "":
            return
        if numeral == "5":
            self.builder.third = None
        elif numeral == "6":
            self.builder.sixth = ChordSixthType()
        elif numeral == "7":
            if prefix in _MAJOR_PREFIXES:
                self.builder.seventh = ChordSeventhType.MAJOR
            elif prefix in _DIMINISHED_PREFIXES:
                self.builder.seventh = ChordSeventhType.DIMINISHED
            else:
                self.builder.seventh = ChordSeventhType.DOMINANT
        elif numeral in _STACKED_EXTENSIONS:
            self.stack(numeral, Accidental.NATURAL)
        else:
            raise self.fail("Unknown chord numeral", numeral, ParseStage.NUMERAL)

    def stack(self, numeral: str, accidental: Accidental) -> None:
        """Fill the lower stacked parts, then add the extension."""
        fill, extension_type = _STACKED_EXTENSIONS[numeral]
        self.builder.fill(fill)
        self.builder.add_extension(ChordExtensionType(extension_type, accidental))

    def parse_modifier(self, modifier: str) -> None:
        match = _MODIFIER_PATTERN.fullmatch(modifier)
        if match is None:
            raise self.fail("Unknown modifier", modifier, ParseStage.MODIFIER)
        tag, numeral = match.group(1) or "", match.group(2) or ""

        handler = self._handler(tag)
        if not handler(numeral):
            reason = "Numeral needs a modifier" if tag == "" else f"Numeral not valid after {tag!r}"
            raise self.fail(reason, modifier, ParseStage.MODIFIER)

    def _handler(self, tag: str) -> Callable[[str], bool]:
        if tag == "":
            return lambda numeral: numeral == ""
        if tag == "add":
            return self.add
        if tag == "no":
            return self.remove
        if tag == "sus":
            return self.suspend
        if tag in _SHARP_TAGS:
            return lambda numeral: self.alter(numeral, Accidental.SHARP, ChordFifthType.AUGMENTED)
        if tag in _FLAT_TAGS:
            return lambda numeral: self.alter(numeral, Accidental.FLAT, ChordFifthType.DIMINISHED)
        if tag in _MAJOR_TAGS:
            return self.major
        raise self.fail("Unknown modifier", tag, ParseStage.MODIFIER)

    def add(self, numeral: str) -> bool:
        if numeral == "6":
            self.builder.sixth = ChordSixthType()
        elif numeral in ("9", "11"):
            extension_type = ExtensionType(int(numeral))
            self.builder.add_extension(ChordExtensionType(extension_type, is_added=True))
        else:
            return False
        return True

    def remove(self, numeral: str) -> bool:
        if numeral == "3":
            self.builder.third = None
        elif numeral == "5":
            self.builder.fifth = None
        elif numeral == "7":
            self.builder.seventh = None
        elif numeral == "9":
            self.builder.remove_all_extensions(ExtensionType.NINTH)
        else:
            return False
        return True

    def suspend(self, numeral: str) -> bool:
        if numeral == "2":
            self.builder.suspended = ChordSuspendedType.SUS2
        elif numeral == "4":
            self.builder.suspended = ChordSuspendedType.SUS4
        else:
            return False
        return True

    def alter(self, numeral: str, accidental: Accidental, fifth: ChordFifthType) -> bool:
        if numeral == "5":
            self.builder.fifth = fifth
        elif numeral in ("9", "11"):
            self.stack(numeral, accidental)
        else:
            return False
        return True

    def major(self, numeral: str) -> bool:
        if numeral == "7":
            self.builder.seventh = ChordSeventhType.MAJOR
        elif numeral in ("9", "11"):
            self.stack(numeral, Accidental.NATURAL)
        else:
            return False
        return True


def parse_chord_type(notation: str) -> ChordType:
    """
    Parse a chord type symbol without a root.

    Args:
        notation: Symbol such as "m7", "maj7", "9(sus4)" or "" for a major triad

    Returns:
        The parsed ChordType

    Raises:
        ChordParseError: If any token is not part of the chord grammar
    """
    chord_type = _Parser(notation).parse(notation)
    logger.debug("Parsed chord type %r as %s", notation, chord_type.description)
    return chord_type


def parse_chord(symbol: str) -> Chord:
    """
    Parse a full chord symbol: root, type and optional slash bass.

    The bass must be a chord tone; it selects the matching inversion.

    Args:
        symbol: Symbol such as "D9", "F#m7(b5)" or "C/E"

    Returns:
        The parsed Chord

    Raises:
        ChordParseError: If the root, type or bass cannot be parsed
    """
    from chuk_mcp_theory.core.chord import Chord

    text = symbol.strip()
    root = _ROOT_PATTERN.match(text)
    if root is None:
        raise ChordParseError(
            "Expected a root letter A-G", symbol=symbol, token=text[:1], stage=ParseStage.ROOT
        )
    key = Key.parse(root.group(0))
    rest = text[root.end() :]

    bass: Key | None = None
    if "/" in rest:
        head, tail = rest.rsplit("/", 1)
        if _ROOT_PATTERN.fullmatch(tail):
            rest, bass = head, Key.parse(tail)

    chord = Chord(key, _Parser(symbol).parse(rest))
    if bass is not None:
        chord = _invert_to_bass(chord, bass, symbol)
    logger.debug("Parsed chord %r as %s", symbol, chord.description)
    return chord


def _invert_to_bass(chord: Chord, bass: Key, symbol: str) -> Chord:
    for inversion in chord.inversions:
        if inversion.bass.is_enharmonic(bass):
            return inversion
    raise ChordParseError(
        "Bass note is not a chord tone", symbol=symbol, token=str(bass), stage=ParseStage.BASS
    )
