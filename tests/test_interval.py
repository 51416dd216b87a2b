"""
Tests for the interval model.

Tests cover:
- Construction and validation of quality against semitones
- Canonical spelling from semitone counts
- Arithmetic (add, subtract, octave scaling)
- Equality by sound rather than spelling
"""

import itertools

import pytest

from chuk_mcp_theory.core import Interval, IntervalQuality


class TestIntervalConstruction:
    """Tests for building intervals."""

    def test_named_constants(self) -> None:
        """Named constants carry quality, degree and semitones."""
        assert Interval.M3.quality == IntervalQuality.MAJOR
        assert Interval.M3.degree == 3
        assert Interval.M3.semitones == 4
        assert Interval.P5.semitones == 7
        assert Interval.d7.semitones == 9
        assert Interval.P11.semitones == 17
        assert Interval.A13.semitones == 22

    def test_long_aliases(self) -> None:
        """Long aliases point at the short constants."""
        assert Interval.MAJOR_THIRD is Interval.M3
        assert Interval.TRITONE is Interval.d5
        assert Interval.OCTAVE.semitones == 12

    def test_steps_are_zero_based(self) -> None:
        """steps counts letter steps, degree counts letters."""
        assert Interval.P1.steps == 0
        assert Interval.M3.steps == 2
        assert Interval.M9.steps == 8

    def test_mismatched_quality_rejected(self) -> None:
        """A diatonic quality must agree with its semitone count."""
        with pytest.raises(ValueError):
            Interval(IntervalQuality.MAJOR, 3, 5)

    def test_perfect_degree_cannot_be_major(self) -> None:
        """Unisons, fourths and fifths are perfect, not major."""
        with pytest.raises(ValueError):
            Interval(IntervalQuality.MAJOR, 5, 7)

    def test_custom_quality_accepts_any_count(self) -> None:
        """Custom intervals skip validation."""
        interval = Interval(IntervalQuality.CUSTOM, 3, 7)
        assert interval.semitones == 7

    def test_degree_must_be_positive(self) -> None:
        """Degree zero is rejected."""
        with pytest.raises(ValueError):
            Interval(IntervalQuality.CUSTOM, 0, 0)


class TestIntervalParsing:
    """Tests for abbreviations."""

    def test_parse(self) -> None:
        """Parse short names."""
        assert Interval.parse("A4").semitones == 6
        assert Interval.parse("m9").semitones == 13
        assert Interval.parse("P8").quality == IntervalQuality.PERFECT

    def test_parse_rejects_impossible(self) -> None:
        """A perfect third does not exist."""
        with pytest.raises(ValueError):
            Interval.parse("P3")
        with pytest.raises(ValueError):
            Interval.parse("X3")

    def test_abbreviation_and_description(self) -> None:
        """Short and long names."""
        assert Interval.M3.abbreviation == "M3"
        assert str(Interval.A4) == "A4"
        assert Interval.M3.description == "major third"
        assert Interval.P8.description == "octave"
        assert Interval.P1.description == "unison"
        assert Interval.d5.description == "diminished fifth"

    def test_repr(self) -> None:
        """Named intervals repr as their constant."""
        assert repr(Interval.M3) == "Interval.M3"
        assert repr(Interval.TRITONE) == "Interval.d5"


class TestCanonicalSpelling:
    """Tests for from_semitones and for_degree."""

    def test_from_semitones_table(self) -> None:
        """0-12 map to the canonical table."""
        expected = ["P1", "m2", "M2", "m3", "M3", "P4", "d5", "P5", "m6", "M6", "m7", "M7", "P8"]
        assert [Interval.from_semitones(n).abbreviation for n in range(13)] == expected

    def test_from_semitones_beyond_octave_is_custom(self) -> None:
        """Counts above an octave fall back to custom with a compound degree."""
        interval = Interval.from_semitones(14)
        assert interval.quality == IntervalQuality.CUSTOM
        assert interval.degree == 9
        assert interval.description == "14 semitones"

    def test_for_degree(self) -> None:
        """Classify a distance at a known degree."""
        assert Interval.for_degree(4, 6).quality == IntervalQuality.AUGMENTED
        assert Interval.for_degree(5, 6).quality == IntervalQuality.DIMINISHED
        assert Interval.for_degree(3, 3).quality == IntervalQuality.MINOR
        assert Interval.for_degree(3, 2).quality == IntervalQuality.DIMINISHED
        assert Interval.for_degree(3, 7).quality == IntervalQuality.CUSTOM


class TestIntervalArithmetic:
    """Tests for add, subtract and scaling."""

    def test_add(self) -> None:
        """M3 + m3 = P5."""
        result = Interval.M3 + Interval.m3
        assert result == Interval.P5
        assert result.quality == IntervalQuality.PERFECT

    def test_add_past_octave_is_not_reduced(self) -> None:
        """Sums keep their full size."""
        result = Interval.M3 + Interval.M7
        assert result.semitones == 15
        assert result.quality == IntervalQuality.CUSTOM

    def test_subtract(self) -> None:
        """P5 - M3 = m3."""
        assert Interval.P5 - Interval.M3 == Interval.m3

    def test_additivity(self) -> None:
        """Semitones of a sum are the sum of semitones."""
        sample = [Interval.P1, Interval.m2, Interval.M3, Interval.A4, Interval.P5, Interval.M7, Interval.M9]
        for a, b in itertools.product(sample, repeat=2):
            assert (a + b).semitones == a.semitones + b.semitones

    def test_scaled(self) -> None:
        """Scaling by octaves keeps quality and extends the degree."""
        ninth = Interval.M2.scaled(2)
        assert ninth == Interval.M9
        assert ninth.degree == 9
        assert ninth.quality == IntervalQuality.MAJOR
        assert Interval.M3 * 1 == Interval.M3
        assert (Interval.P5 * 3).semitones == 31

    def test_scaled_rejects_zero(self) -> None:
        """At least one octave."""
        with pytest.raises(ValueError):
            Interval.M3.scaled(0)

    def test_is_compound(self) -> None:
        """Only intervals wider than an octave are compound."""
        assert Interval.M9.is_compound
        assert not Interval.P8.is_compound


class TestIntervalEquality:
    """Tests for sound-based equality."""

    def test_enharmonic_intervals_equal(self) -> None:
        """A4 and d5 both span six semitones."""
        assert Interval.A4 == Interval.d5
        assert hash(Interval.A4) == hash(Interval.d5)
        assert Interval.M6 == Interval.d7

    def test_ordering(self) -> None:
        """Intervals order by semitones."""
        assert Interval.m3 < Interval.M3 < Interval.P4
        assert sorted([Interval.P5, Interval.M2, Interval.M3]) == [Interval.M2, Interval.M3, Interval.P5]
