"""
Tests for caged/rules/chord_tones.py

Run with: pytest tests/test_chord_tones.py -v
"""

import pytest

from caged.exceptions import InvalidNote, UnknownChord
from caged.rules.chord_tones import (
    CHORD_FORMULAS,
    ChordToneOracle,
    base_quality,
    chord_note_names,
    chord_symbol,
    chord_tones,
    is_valid_chord_symbol,
    normalize_quality,
    parse_chord_symbol,
)


class TestNormalizeQuality:

    @pytest.mark.parametrize("label,expected", [
        ("major", "major"),
        ("", "major"),
        ("maj", "major"),
        ("M", "major"),
        ("minor", "minor"),
        ("m", "minor"),
        ("min", "minor"),
        ("Minor", "minor"),
        ("M7", "maj7"),
        ("maj7", "maj7"),
        ("min7", "m7"),
        ("dom7", "7"),
        ("sus", "sus4"),
        (None, "major"),
    ])
    def test_aliases(self, label, expected):
        assert normalize_quality(label) == expected

    def test_unknown(self):
        assert normalize_quality("weird") is None

    def test_case_sensitive_m(self):
        # "M" is major, "m" is minor
        assert normalize_quality("M") != normalize_quality("m")

    def test_base_quality(self):
        assert base_quality("m") == "minor"
        assert base_quality("") == "major"
        assert base_quality("7") is None
        assert base_quality("weird") is None


class TestChordTones:

    def test_major_and_minor(self):
        assert chord_tones("C", "major") == frozenset({0, 4, 7})
        assert chord_tones("A", "minor") == frozenset({9, 0, 4})

    def test_extended(self):
        assert chord_tones("G", "7") == frozenset({7, 11, 2, 5})
        assert chord_tones("C", "sus4") == frozenset({0, 5, 7})
        assert chord_tones("D", "sus2") == frozenset({2, 4, 9})

    def test_flat_root_matches_sharp_root(self):
        assert chord_tones("Bb", "m7") == chord_tones("A#", "m7")

    def test_every_formula_starts_at_root(self):
        for quality in CHORD_FORMULAS:
            assert 0 in chord_tones("C", quality)

    def test_unknown_quality_is_empty(self):
        assert chord_tones("C", "weird") == frozenset()

    def test_invalid_root_raises(self):
        with pytest.raises(InvalidNote):
            chord_tones("H", "major")

    def test_note_names_in_formula_order(self):
        assert chord_note_names("A", "minor") == ["A", "C", "E"]
        assert chord_note_names("C", "7") == ["C", "E", "G", "A#"]
        assert chord_note_names("C", "weird") == []


class TestChordToneOracle:

    def test_delegates(self):
        oracle = ChordToneOracle()
        assert oracle.chord_tones("E", "m") == frozenset({4, 7, 11})
        assert oracle.note_names("E", "m") == ["E", "G", "B"]

    def test_resolve_raises_for_unknown(self):
        with pytest.raises(UnknownChord):
            ChordToneOracle().resolve("C", "weird")

    def test_unknown_chord_is_a_lookup_error(self):
        with pytest.raises(LookupError):
            ChordToneOracle().resolve("C", "weird")


class TestChordSymbols:

    @pytest.mark.parametrize("symbol,expected", [
        ("C", ("C", "major")),
        ("Am", ("A", "minor")),
        ("F#m7", ("F#", "m7")),
        ("Bb", ("A#", "major")),
        ("Ebmaj7", ("D#", "maj7")),
        ("G7", ("G", "7")),
        ("Dsus4", ("D", "sus4")),
        ("Bm", ("B", "minor")),
    ])
    def test_parse(self, symbol, expected):
        assert parse_chord_symbol(symbol) == expected

    def test_b_root_is_not_a_flat(self):
        # "Bb" is B-flat, but "Bm" is B minor
        assert parse_chord_symbol("Bm")[0] == "B"

    def test_unknown_suffix(self):
        with pytest.raises(UnknownChord):
            parse_chord_symbol("Cxyz")

    def test_bad_root(self):
        with pytest.raises(InvalidNote):
            parse_chord_symbol("Hm")
        with pytest.raises(InvalidNote):
            parse_chord_symbol("")

    def test_is_valid_chord_symbol(self):
        assert is_valid_chord_symbol("C")
        assert is_valid_chord_symbol("G7")
        assert not is_valid_chord_symbol("Xyz")

    def test_chord_symbol(self):
        assert chord_symbol("A", "minor") == "Am"
        assert chord_symbol("C", "major") == "C"
        assert chord_symbol("Bb", "7") == "A#7"
        assert chord_symbol("D", "sus") == "Dsus4"
