"""
Tests for caged/rules/notes.py

Run with: pytest tests/test_notes.py -v
"""

import pytest

from caged.exceptions import InvalidFret, InvalidNote
from caged.rules.notes import (
    CHROMATIC_SCALE,
    check_frets,
    compute_base_fret,
    find_fret_for_note,
    find_fret_for_pitch_class,
    fret_pitch_class,
    frets_to_notes,
    frets_to_pitch_classes,
    interval_semitones,
    is_valid_note,
    normalize_note,
    note_name,
    pitch_class_of,
    to_absolute_frets,
    to_relative_frets,
    transpose_note,
)


# =============================================================================
# NOTE NAMES
# =============================================================================

class TestPitchClassOf:

    def test_naturals(self):
        assert pitch_class_of("C") == 0
        assert pitch_class_of("E") == 4
        assert pitch_class_of("A") == 9
        assert pitch_class_of("B") == 11

    def test_every_chromatic_name(self):
        for index, name in enumerate(CHROMATIC_SCALE):
            assert pitch_class_of(name) == index

    @pytest.mark.parametrize("flat,sharp", [
        ("Db", "C#"), ("Eb", "D#"), ("Gb", "F#"), ("Ab", "G#"), ("Bb", "A#"),
    ])
    def test_flats_equal_sharps(self, flat, sharp):
        assert pitch_class_of(flat) == pitch_class_of(sharp)

    def test_unusual_enharmonics(self):
        assert pitch_class_of("Cb") == 11
        assert pitch_class_of("Fb") == 4
        assert pitch_class_of("E#") == 5
        assert pitch_class_of("B#") == 0

    def test_lowercase_letter(self):
        assert pitch_class_of("c") == 0
        assert pitch_class_of("bb") == 10

    @pytest.mark.parametrize("bad", ["H", "X", "", "C##", "Cx", "12", "Dbb"])
    def test_invalid_names_raise(self, bad):
        with pytest.raises(InvalidNote):
            pitch_class_of(bad)

    def test_non_string_raises(self):
        with pytest.raises(InvalidNote):
            pitch_class_of(5)

    def test_invalid_note_is_a_value_error(self):
        with pytest.raises(ValueError):
            pitch_class_of("Z")


def test_normalize_note():
    assert normalize_note("Db") == "C#"
    assert normalize_note("C#") == "C#"
    assert normalize_note("Bb") == "A#"


def test_note_name_wraps():
    assert note_name(0) == "C"
    assert note_name(12) == "C"
    assert note_name(-1) == "B"


def test_is_valid_note():
    assert is_valid_note("F#")
    assert not is_valid_note("X")


def test_transpose_note():
    assert transpose_note("C", 7) == "G"
    assert transpose_note("F#", -1) == "F"
    assert transpose_note("Bb", 12) == "A#"


def test_interval_semitones():
    assert interval_semitones("C", "E") == 4
    assert interval_semitones("C", "G") == 7
    assert interval_semitones("A", "C") == 3


# =============================================================================
# FRETBOARD LOOKUPS
# =============================================================================

class TestFretPitchClass:

    def test_open_strings_are_standard_tuning(self):
        assert [fret_pitch_class(i, 0) for i in range(6)] == [4, 9, 2, 7, 11, 4]

    def test_fretted(self):
        assert fret_pitch_class(1, 3) == 0     # C on the A string
        assert fret_pitch_class(0, 12) == 4    # octave
        assert fret_pitch_class(5, 24) == 4

    def test_muted_has_no_pitch(self):
        assert fret_pitch_class(2, -1) is None

    @pytest.mark.parametrize("string_index,fret", [(6, 0), (-1, 0), (0, -2), (0, 25)])
    def test_out_of_range_raises(self, string_index, fret):
        with pytest.raises(InvalidFret):
            fret_pitch_class(string_index, fret)


class TestFindFret:

    def test_root_positions(self):
        assert find_fret_for_pitch_class(pitch_class_of("C"), 1) == 3
        assert find_fret_for_pitch_class(pitch_class_of("G"), 0) == 3
        assert find_fret_for_pitch_class(pitch_class_of("D"), 2) == 0
        assert find_fret_for_pitch_class(pitch_class_of("A"), 0) == 5

    def test_always_first_octave(self):
        for pc in range(12):
            for string_index in range(6):
                fret = find_fret_for_pitch_class(pc, string_index)
                assert 0 <= fret <= 11
                assert fret_pitch_class(string_index, fret) == pc

    def test_find_fret_for_note(self):
        assert find_fret_for_note("Bb", 1) == 1

    def test_bad_string_raises(self):
        with pytest.raises(InvalidFret):
            find_fret_for_pitch_class(0, 7)


# =============================================================================
# FRET ARRAYS
# =============================================================================

class TestFretArrays:

    def test_check_frets_length(self):
        with pytest.raises(InvalidFret):
            check_frets([0, 2, 2, 1, 0])
        with pytest.raises(InvalidFret):
            check_frets([0, 2, 2, 1, 0, 0, 0])

    def test_check_frets_range(self):
        with pytest.raises(InvalidFret):
            check_frets([0, 2, 2, 1, 0, 30])

    def test_frets_to_notes_open_c(self):
        assert frets_to_notes([-1, 3, 2, 0, 1, 0]) == ["C", "E", "G", "C", "E"]

    def test_frets_to_pitch_classes_keeps_positions(self):
        assert frets_to_pitch_classes([-1, 0, 2, 2, 1, 0]) == [None, 9, 4, 9, 0, 4]

    def test_absolute_relative_round_trip(self):
        relative = [1, 3, 3, 1, 1, 1]
        absolute = to_absolute_frets(relative, 5)
        assert absolute == [5, 7, 7, 5, 5, 5]
        assert to_relative_frets(absolute, 5) == relative

    def test_base_fret_one_is_identity(self):
        assert to_absolute_frets([-1, 3, 2, 0, 1, 0], 1) == [-1, 3, 2, 0, 1, 0]

    def test_muted_and_open_pass_through(self):
        assert to_absolute_frets([-1, 0, 2, 2, 1, 0], 4) == [-1, 0, 5, 5, 4, 0]

    def test_compute_base_fret(self):
        assert compute_base_fret([-1, 3, 2, 0, 1, 0]) == 1     # open string
        assert compute_base_fret([-1, 3, 5, 5, 5, 3]) == 3
        assert compute_base_fret([-1, -1, 10, 12, 13, 12]) == 10
        assert compute_base_fret([-1] * 6) == 1
