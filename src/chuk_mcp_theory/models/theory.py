"""
Theory models - interchange schemas for the core values.

Each model maps one core value field by field, so it can travel as JSON and
come back unchanged: from_core() builds the model, to_core() rebuilds the
value.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from chuk_mcp_theory.core.chord import Chord
from chuk_mcp_theory.core.chord_parts import (
    ChordExtensionType,
    ChordFifthType,
    ChordSeventhType,
    ChordSixthType,
    ChordSuspendedType,
    ChordThirdType,
    ExtensionType,
)
from chuk_mcp_theory.core.chord_type import ChordType
from chuk_mcp_theory.core.interval import Interval, IntervalQuality
from chuk_mcp_theory.core.pitch import Accidental, Key, KeyLetter, Pitch


class IntervalModel(BaseModel):
    """An interval by quality, degree and semitones."""

    quality: IntervalQuality = Field(description="Interval quality")
    degree: int = Field(ge=1, description="1-based degree (1 = unison, 3 = third)")
    semitones: int = Field(description="Signed semitone distance")

    model_config = {"frozen": True}

    @classmethod
    def from_core(cls, interval: Interval) -> IntervalModel:
        return cls(quality=interval.quality, degree=interval.degree, semitones=interval.semitones)

    def to_core(self) -> Interval:
        return Interval(self.quality, self.degree, self.semitones)


class KeyModel(BaseModel):
    """A spelled pitch class."""

    letter: str = Field(pattern=r"^[A-G]$", description="Letter name A-G")
    accidental: int = Field(default=0, description="Halfsteps: -1 flat, +1 sharp")

    model_config = {"frozen": True}

    @classmethod
    def from_core(cls, key: Key) -> KeyModel:
        return cls(letter=key.letter.name, accidental=key.accidental.halfsteps)

    def to_core(self) -> Key:
        return Key(KeyLetter[self.letter], Accidental(self.accidental))


class PitchModel(BaseModel):
    """A spelled key in an octave."""

    key: KeyModel
    octave: int = Field(description="Octave number (C4 = middle C)")

    model_config = {"frozen": True}

    @classmethod
    def from_core(cls, pitch: Pitch) -> PitchModel:
        return cls(key=KeyModel.from_core(pitch.key), octave=pitch.octave)

    def to_core(self) -> Pitch:
        return Pitch(self.key.to_core(), self.octave)


class ChordExtensionModel(BaseModel):
    """A ninth, eleventh or thirteenth."""

    type: ExtensionType = Field(description="Extension numeral: 9, 11 or 13")
    accidental: int = Field(default=0, ge=-1, le=1, description="-1 flat, 0 natural, +1 sharp")
    is_added: bool = Field(default=False, description="Added tone rather than stacked")

    model_config = {"frozen": True}

    @classmethod
    def from_core(cls, extension: ChordExtensionType) -> ChordExtensionModel:
        return cls(
            type=extension.type,
            accidental=extension.accidental.halfsteps,
            is_added=extension.is_added,
        )

    def to_core(self) -> ChordExtensionType:
        return ChordExtensionType(self.type, Accidental(self.accidental), self.is_added)


class ChordTypeModel(BaseModel):
    """The parts of a chord type; None means the part is absent."""

    third: ChordThirdType | None = ChordThirdType.MAJOR
    fifth: ChordFifthType | None = ChordFifthType.PERFECT
    sixth: bool = False
    seventh: ChordSeventhType | None = None
    suspended: ChordSuspendedType | None = None
    extensions: list[ChordExtensionModel] = Field(default_factory=list)

    model_config = {"frozen": True}

    @classmethod
    def from_core(cls, chord_type: ChordType) -> ChordTypeModel:
        return cls(
            third=chord_type.third,
            fifth=chord_type.fifth,
            sixth=chord_type.sixth is not None,
            seventh=chord_type.seventh,
            suspended=chord_type.suspended,
            extensions=[ChordExtensionModel.from_core(e) for e in chord_type.extensions],
        )

    def to_core(self) -> ChordType:
        return ChordType.exact(
            third=self.third,
            fifth=self.fifth,
            sixth=ChordSixthType() if self.sixth else None,
            seventh=self.seventh,
            suspended=self.suspended,
            extensions=tuple(e.to_core() for e in self.extensions),
        )


class ChordModel(BaseModel):
    """A rooted chord with its inversion."""

    key: KeyModel
    type: ChordTypeModel = Field(default_factory=ChordTypeModel)
    inversion: int = Field(default=0, ge=0, description="0 = root position")

    model_config = {"frozen": True}

    @classmethod
    def from_core(cls, chord: Chord) -> ChordModel:
        return cls(
            key=KeyModel.from_core(chord.key),
            type=ChordTypeModel.from_core(chord.type),
            inversion=chord.inversion,
        )

    def to_core(self) -> Chord:
        return Chord(self.key.to_core(), self.type.to_core(), self.inversion)


class CatalogueEntry(BaseModel):
    """A named chord quality and the symbol that spells it."""

    name: str = Field(description="Quality name, e.g. 'minor seventh'")
    symbol: str = Field(description="Chord type symbol without root, e.g. 'm7'")
    aliases: list[str] = Field(default_factory=list, description="Other accepted symbols")
    description: str = Field(default="", description="Short explanation")

    model_config = {"frozen": True}

    def to_core(self) -> ChordType:
        """Parse the entry's symbol."""
        return ChordType.parse(self.symbol)


class Catalogue(BaseModel):
    """A named collection of chord qualities, loaded from YAML."""

    name: str
    description: str = ""
    entries: list[CatalogueEntry] = Field(default_factory=list)

    model_config = {"frozen": True}
