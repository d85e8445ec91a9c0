"""
Tests for caged/rules/tablature.py

Run with: pytest tests/test_tablature.py -v
"""

import pytest

from caged.exceptions import InvalidFret
from caged.rules.tablature import (
    TAB_STRING_NAMES,
    format_chord_diagram,
    format_tab,
    frets_to_string,
    parse_fret_string,
)


# =============================================================================
# FRET STRINGS
# =============================================================================

class TestFretStrings:

    def test_string_names_low_to_high(self):
        assert TAB_STRING_NAMES == ("E", "A", "D", "G", "B", "e")

    def test_compact(self):
        assert frets_to_string([-1, 3, 2, 0, 1, 0]) == "x32010"
        assert frets_to_string([3, 2, 0, 0, 0, 3]) == "320003"

    def test_dashed_above_nine(self):
        assert frets_to_string([-1, -1, 10, 12, 13, 12]) == "x-x-10-12-13-12"

    @pytest.mark.parametrize("text,expected", [
        ("x32010", [-1, 3, 2, 0, 1, 0]),
        ("X32010", [-1, 3, 2, 0, 1, 0]),
        ("x-x-10-12-13-12", [-1, -1, 10, 12, 13, 12]),
        ("-1,3,2,0,1,0", [-1, 3, 2, 0, 1, 0]),
        ("x 3 2 0 1 0", [-1, 3, 2, 0, 1, 0]),
        ("  320003  ", [3, 2, 0, 0, 0, 3]),
    ])
    def test_parse(self, text, expected):
        assert parse_fret_string(text) == expected

    def test_parse_reads_back_written_form(self):
        for frets in ([-1, 3, 2, 0, 1, 0], [-1, -1, 10, 12, 13, 12], [8, 10, 10, 9, 8, 8]):
            assert parse_fret_string(frets_to_string(frets)) == frets

    @pytest.mark.parametrize("bad", ["", "x3201", "x32010x", "x3201z", "x-x-10-12-13-30"])
    def test_parse_rejects(self, bad):
        with pytest.raises(InvalidFret):
            parse_fret_string(bad)


# =============================================================================
# ASCII TAB
# =============================================================================

class TestFormatTab:

    def test_two_columns_with_labels(self):
        tab = format_tab([[-1, 3, 2, 0, 1, 0], [3, 2, 0, 0, 0, 3]], labels=["C", "G"])
        assert tab.splitlines() == [
            "   C  G",
            "e|-0--3--|",
            "B|-1--0--|",
            "G|-0--0--|",
            "D|-2--0--|",
            "A|-3--2--|",
            "E|-x--3--|",
        ]

    def test_single_flat_list(self):
        lines = format_tab([-1, 3, 2, 0, 1, 0]).splitlines()
        assert len(lines) == 6
        assert lines[0] == "e|-0--|"
        assert lines[-1] == "E|-x--|"

    def test_high_string_on_top(self):
        lines = format_tab([[0, 2, 2, 1, 0, 0]]).splitlines()
        assert lines[0].startswith("e|")
        assert lines[-1].startswith("E|")

    def test_two_digit_frets_keep_columns_aligned(self):
        lines = format_tab([[-1, -1, 10, 12, 13, 12]]).splitlines()
        assert len({len(line) for line in lines}) == 1

    def test_objects_with_frets(self):
        class Item:
            name = "Am"
            frets = [-1, 0, 2, 2, 1, 0]

        lines = format_tab([Item()]).splitlines()
        assert lines[0].strip() == "Am"
        assert lines[2] == "B|-1--|"


# =============================================================================
# CHORD BOX
# =============================================================================

class TestChordDiagram:

    def test_open_a_minor(self):
        diagram = format_chord_diagram([-1, 0, 2, 2, 1, 0], title="Am")
        assert diagram.splitlines() == [
            "Am",
            "x o       o",
            "===========",
            "| | | | * |",
            "| | * * | |",
            "| | | | | |",
            "| | | | | |",
        ]

    def test_barre_up_the_neck(self):
        lines = format_chord_diagram([5, 7, 7, 6, 5, 5]).splitlines()
        assert lines[1] == "-----------"
        assert lines[2] == "* | | | * *  5fr"
        assert lines[3] == "| | | * | |"
        assert lines[4] == "| * * | | |"

    def test_tall_shapes_get_more_rows(self):
        lines = format_chord_diagram([-1, -1, 10, 12, 14, 12], base_fret=10).splitlines()
        assert len(lines) == 2 + 5

    def test_title_includes_shape(self):
        class Item:
            name = "C"
            shape = "A"
            frets = [-1, 3, 5, 5, 5, 3]
            base_fret = 3

        assert format_chord_diagram(Item()).splitlines()[0] == "C (A shape)"
