"""
Tests for the chord symbol parser.

Tests cover:
- Base prefixes and numerals
- Parenthesised modifiers
- Full chord symbols with roots and slash basses
- Rejection of malformed symbols with stage and token
"""

import pytest

from chuk_mcp_theory.core import (
    Accidental,
    Chord,
    ChordExtensionType,
    ChordFifthType,
    ChordParseError,
    ChordSeventhType,
    ChordSixthType,
    ChordSuspendedType,
    ChordThirdType,
    ChordType,
    ExtensionType,
    Key,
    ParseStage,
    parse_chord,
    parse_chord_type,
)


def extension_types(chord_type: ChordType) -> set[ExtensionType]:
    return {e.type for e in chord_type.extensions}


class TestBase:
    """Tests for base tokens."""

    @pytest.mark.parametrize("symbol", ["", "M", "maj"])
    def test_major(self, symbol: str) -> None:
        """Major prefixes."""
        assert parse_chord_type(symbol) == ChordType()

    @pytest.mark.parametrize("symbol", ["m", "min"])
    def test_minor(self, symbol: str) -> None:
        """Minor prefixes."""
        chord_type = parse_chord_type(symbol)
        assert chord_type.third == ChordThirdType.MINOR
        assert chord_type.fifth == ChordFifthType.PERFECT

    @pytest.mark.parametrize("symbol", ["dim", "o", "°", "ø", "Ø"])
    def test_diminished(self, symbol: str) -> None:
        """Diminished and half-diminished prefixes."""
        chord_type = parse_chord_type(symbol)
        assert chord_type.third == ChordThirdType.MINOR
        assert chord_type.fifth == ChordFifthType.DIMINISHED
        assert chord_type.seventh is None

    @pytest.mark.parametrize("symbol", ["aug", "+"])
    def test_augmented(self, symbol: str) -> None:
        """Augmented prefixes."""
        chord_type = parse_chord_type(symbol)
        assert chord_type.third == ChordThirdType.MAJOR
        assert chord_type.fifth == ChordFifthType.AUGMENTED


class TestNumerals:
    """Tests for trailing numerals."""

    def test_power_chord(self) -> None:
        """5 drops the third."""
        chord_type = parse_chord_type("5")
        assert chord_type.third is None
        assert chord_type.fifth == ChordFifthType.PERFECT

    def test_sixth(self) -> None:
        """6 adds a sixth."""
        assert parse_chord_type("6").sixth == ChordSixthType()
        assert parse_chord_type("m6").third == ChordThirdType.MINOR

    @pytest.mark.parametrize(
        "symbol, seventh",
        [
            ("7", ChordSeventhType.DOMINANT),
            ("m7", ChordSeventhType.DOMINANT),
            ("M7", ChordSeventhType.MAJOR),
            ("maj7", ChordSeventhType.MAJOR),
            ("dim7", ChordSeventhType.DIMINISHED),
            ("o7", ChordSeventhType.DIMINISHED),
            ("°7", ChordSeventhType.DIMINISHED),
            ("ø7", ChordSeventhType.DOMINANT),
            ("+7", ChordSeventhType.DOMINANT),
        ],
    )
    def test_seventh_quality_follows_prefix(self, symbol: str, seventh: ChordSeventhType) -> None:
        """The seventh's quality depends on the prefix."""
        assert parse_chord_type(symbol).seventh == seventh

    def test_ninth(self) -> None:
        """9 fills a dominant seventh."""
        chord_type = parse_chord_type("9")
        assert chord_type.seventh == ChordSeventhType.DOMINANT
        assert chord_type.extensions == (ChordExtensionType(ExtensionType.NINTH),)

    def test_eleventh(self) -> None:
        """11 implies the ninth."""
        assert extension_types(parse_chord_type("11")) == {ExtensionType.NINTH, ExtensionType.ELEVENTH}

    def test_thirteenth(self) -> None:
        """13 implies the ninth and eleventh."""
        chord_type = parse_chord_type("13")
        assert extension_types(chord_type) == set(ExtensionType)
        assert [i.semitones for i in chord_type.intervals] == [0, 4, 7, 10, 14, 17, 21]

    def test_minor_ninth(self) -> None:
        """Numerals combine with prefixes."""
        chord_type = parse_chord_type("m9")
        assert chord_type.third == ChordThirdType.MINOR
        assert chord_type.seventh == ChordSeventhType.DOMINANT


class TestModifiers:
    """Tests for parenthesised modifiers."""

    def test_add(self) -> None:
        """add places a tone without stacking."""
        assert parse_chord_type("(add6)").sixth is not None
        add_nine = parse_chord_type("(add9)")
        assert add_nine.seventh is None
        assert add_nine.extensions[0].is_added
        assert extension_types(parse_chord_type("7(add11)")) == {ExtensionType.ELEVENTH}

    def test_no(self) -> None:
        """no removes a part."""
        assert parse_chord_type("(no3)").third is None
        assert parse_chord_type("(no 5)").fifth is None
        assert parse_chord_type("7(no7)").seventh is None
        without_ninth = parse_chord_type("9(no9)")
        assert without_ninth.extensions == ()
        assert without_ninth.seventh == ChordSeventhType.DOMINANT

    def test_no_ninth_leaves_eleventh_alone(self) -> None:
        """Removing the ninth from an eleventh chord does not bring it back."""
        chord_type = parse_chord_type("11(no9)")
        assert extension_types(chord_type) == {ExtensionType.ELEVENTH}
        assert [i.semitones for i in chord_type.intervals] == [0, 4, 7, 10, 17]

    def test_no_ninth_after_sharp_eleven(self) -> None:
        """The ninth filled in by a sharp eleven can be removed."""
        chord_type = parse_chord_type("7(#11)(no9)")
        assert chord_type.extensions == (ChordExtensionType(ExtensionType.ELEVENTH, Accidental.SHARP),)
        assert [i.semitones for i in chord_type.intervals] == [0, 4, 7, 10, 18]

    def test_added_eleventh_over_seventh(self) -> None:
        """An added eleventh keeps its flag over a seventh."""
        chord_type = parse_chord_type("7(add11)")
        assert chord_type.extensions == (ChordExtensionType(ExtensionType.ELEVENTH, is_added=True),)
        assert chord_type.notation == "7(add11)"

    def test_sus(self) -> None:
        """sus sets the suspension."""
        assert parse_chord_type("(sus2)").suspended == ChordSuspendedType.SUS2
        assert parse_chord_type("(sus4)").suspended == ChordSuspendedType.SUS4

    @pytest.mark.parametrize("modifier", ["#5", "♯5", "+5"])
    def test_sharp_fifth(self, modifier: str) -> None:
        """Sharp tags raise the fifth."""
        assert parse_chord_type(f"({modifier})").fifth == ChordFifthType.AUGMENTED

    @pytest.mark.parametrize("modifier", ["b5", "♭5", "°5"])
    def test_flat_fifth(self, modifier: str) -> None:
        """Flat tags lower the fifth."""
        assert parse_chord_type(f"({modifier})").fifth == ChordFifthType.DIMINISHED

    def test_altered_ninth_fills_seventh(self) -> None:
        """An altered ninth brings a dominant seventh."""
        chord_type = parse_chord_type("(b9)")
        assert chord_type.seventh == ChordSeventhType.DOMINANT
        assert chord_type.extensions == (ChordExtensionType(ExtensionType.NINTH, Accidental.FLAT),)

    def test_sharp_eleven_fills_ninth(self) -> None:
        """An altered eleventh brings a natural ninth."""
        chord_type = parse_chord_type("7(#11)")
        assert set(chord_type.extensions) == {
            ChordExtensionType(ExtensionType.NINTH),
            ChordExtensionType(ExtensionType.ELEVENTH, Accidental.SHARP),
        }

    def test_major_tag(self) -> None:
        """maj and M set a major seventh or stack a natural extension."""
        assert parse_chord_type("m(maj7)").seventh == ChordSeventhType.MAJOR
        assert parse_chord_type("m(M7)").third == ChordThirdType.MINOR
        major_eleven = parse_chord_type("(maj11)")
        assert set(major_eleven.extensions) == {
            ChordExtensionType(ExtensionType.NINTH),
            ChordExtensionType(ExtensionType.ELEVENTH),
        }

    def test_several_modifiers(self) -> None:
        """Modifiers apply in order."""
        chord_type = parse_chord_type("9(sus4)(no5)(add6)")
        assert chord_type.fifth is None
        assert chord_type.sixth is not None
        assert chord_type.suspended == ChordSuspendedType.SUS4


class TestChordSymbols:
    """Tests for full chord symbols."""

    @pytest.mark.parametrize(
        "symbol, root, chord_type",
        [
            ("D", "D", ChordType()),
            ("Fmaj", "F", ChordType()),
            ("Em", "E", ChordType(ChordThirdType.MINOR)),
            ("Emin", "E", ChordType(ChordThirdType.MINOR)),
            ("Adim", "A", ChordType(ChordThirdType.MINOR, ChordFifthType.DIMINISHED)),
            ("Ao", "A", ChordType(ChordThirdType.MINOR, ChordFifthType.DIMINISHED)),
            ("A°", "A", ChordType(ChordThirdType.MINOR, ChordFifthType.DIMINISHED)),
            ("B♭aug", "Bb", ChordType(ChordThirdType.MAJOR, ChordFifthType.AUGMENTED)),
            ("B♭+", "Bb", ChordType(ChordThirdType.MAJOR, ChordFifthType.AUGMENTED)),
            ("D7", "D", ChordType(seventh=ChordSeventhType.DOMINANT)),
            ("Fmaj7", "F", ChordType(seventh=ChordSeventhType.MAJOR)),
            ("Em7", "E", ChordType(ChordThirdType.MINOR, seventh=ChordSeventhType.DOMINANT)),
            ("Cmin(maj7)", "C", ChordType(ChordThirdType.MINOR, seventh=ChordSeventhType.MAJOR)),
            (
                "F#ø7",
                "F#",
                ChordType(ChordThirdType.MINOR, ChordFifthType.DIMINISHED, seventh=ChordSeventhType.DOMINANT),
            ),
            ("G♭6", "Gb", ChordType(sixth=ChordSixthType())),
            ("F♯m(♭5)", "F#", ChordType(ChordThirdType.MINOR, ChordFifthType.DIMINISHED)),
            (
                "D9",
                "D",
                ChordType(
                    seventh=ChordSeventhType.DOMINANT,
                    extensions=(ChordExtensionType(ExtensionType.NINTH),),
                ),
            ),
            (
                "G7(b5)",
                "G",
                ChordType(fifth=ChordFifthType.DIMINISHED, seventh=ChordSeventhType.DOMINANT),
            ),
            (
                "C9(sus4)",
                "C",
                ChordType(
                    seventh=ChordSeventhType.DOMINANT,
                    suspended=ChordSuspendedType.SUS4,
                    extensions=(ChordExtensionType(ExtensionType.NINTH),),
                ),
            ),
        ],
    )
    def test_symbols(self, symbol: str, root: str, chord_type: ChordType) -> None:
        """Common chord symbols parse to the expected chord."""
        chord = parse_chord(symbol)
        assert chord.key == Key.parse(root)
        assert chord.type == chord_type
        assert chord == Chord(Key.parse(root), chord_type)

    def test_e_flat_nine_sus_four(self) -> None:
        """Every part of a heavily modified symbol lands in place."""
        chord = parse_chord("E♭9(sus4)(no5)(add6)")
        assert chord.key == Key.parse("Eb")
        assert chord.type.third == ChordThirdType.MAJOR
        assert chord.type.fifth is None
        assert chord.type.sixth is not None
        assert chord.type.seventh == ChordSeventhType.DOMINANT
        assert chord.type.suspended == ChordSuspendedType.SUS4
        assert [e.type for e in chord.type.extensions] == [ExtensionType.NINTH]

    def test_whitespace_ignored_around_symbol(self) -> None:
        """Leading and trailing spaces are stripped."""
        assert parse_chord("  Am7 ") == parse_chord("Am7")

    def test_slash_bass_selects_inversion(self) -> None:
        """The bass note picks the inversion."""
        first = parse_chord("C/E")
        assert first.inversion == 1
        assert first.bass == Key.parse("E")
        assert first.notation == "C/E"
        assert parse_chord("C7/Bb").inversion == 3
        assert parse_chord("Am/C").inversion == 1

    def test_chord_parse_classmethods(self) -> None:
        """Chord.parse and ChordType.parse delegate to the parser."""
        assert Chord.parse("Dm7") == parse_chord("Dm7")
        assert ChordType.parse("m7") == parse_chord_type("m7")


class TestParseErrors:
    """Tests for rejected symbols."""

    def test_unknown_prefix(self) -> None:
        """An unrecognised base is not a default chord."""
        with pytest.raises(ChordParseError) as exc_info:
            parse_chord("Dxyz")
        assert exc_info.value.stage == ParseStage.BASE
        assert exc_info.value.symbol == "Dxyz"
        assert exc_info.value.token == "xyz"

    def test_unknown_prefix_without_root(self) -> None:
        """The offending token is reported."""
        with pytest.raises(ChordParseError) as exc_info:
            parse_chord_type("xyz")
        assert exc_info.value.token == "xyz"
        assert exc_info.value.stage == ParseStage.BASE

    def test_is_value_error(self) -> None:
        """Parse errors are ValueErrors."""
        with pytest.raises(ValueError):
            parse_chord_type("qq")

    def test_unknown_numeral(self) -> None:
        """Only 5, 6, 7, 9, 11 and 13 are numerals."""
        with pytest.raises(ChordParseError) as exc_info:
            parse_chord_type("8")
        assert exc_info.value.stage == ParseStage.NUMERAL
        assert exc_info.value.token == "8"

    def test_malformed_base(self) -> None:
        """Alterations after the numeral need parentheses."""
        with pytest.raises(ChordParseError) as exc_info:
            parse_chord_type("m7b5")
        assert exc_info.value.stage == ParseStage.BASE

    @pytest.mark.parametrize(
        "symbol",
        ["(9)", "(sus3)", "(add7)", "(no6)", "(#7)", "(b13)", "(maj6)", "(foo)", "13(add13)"],
    )
    def test_bad_modifier(self, symbol: str) -> None:
        """Modifiers must pair a known tag with a valid numeral."""
        with pytest.raises(ChordParseError) as exc_info:
            parse_chord_type(symbol)
        assert exc_info.value.stage == ParseStage.MODIFIER

    def test_bare_numeral_message(self) -> None:
        """A bare numeral needs a tag."""
        with pytest.raises(ChordParseError, match="Numeral needs a modifier"):
            parse_chord_type("7(9)")

    def test_unbalanced_parenthesis(self) -> None:
        """Segmentation rejects unclosed modifiers."""
        with pytest.raises(ChordParseError) as exc_info:
            parse_chord_type("7(b9")
        assert exc_info.value.stage == ParseStage.SEGMENTATION

    def test_too_many_modifiers(self) -> None:
        """At most nine modifiers."""
        with pytest.raises(ChordParseError) as exc_info:
            parse_chord_type("7" + "(no9)" * 10)
        assert exc_info.value.stage == ParseStage.SEGMENTATION

    def test_missing_root(self) -> None:
        """Symbols start with a letter A-G."""
        with pytest.raises(ChordParseError) as exc_info:
            parse_chord("H7")
        assert exc_info.value.stage == ParseStage.ROOT
        with pytest.raises(ChordParseError):
            parse_chord("")

    def test_bass_not_in_chord(self) -> None:
        """The slash bass must be a chord tone."""
        with pytest.raises(ChordParseError) as exc_info:
            parse_chord("C/F#")
        assert exc_info.value.stage == ParseStage.BASS
