"""
Tests for caged/rules/classifier.py

Run with: pytest tests/test_classifier.py -v
"""

import pytest

from caged.exceptions import InvalidFret
from caged.rules.classifier import classify_shape, describe_shape
from caged.rules.transposer import transpose


class TestOpenChords:

    @pytest.mark.parametrize("frets,expected", [
        ([-1, 3, 2, 0, 1, 0], "C"),     # open C
        ([-1, 0, 2, 2, 2, 0], "A"),     # open A
        ([-1, 0, 2, 2, 1, 0], "A"),     # open Am
        ([3, 2, 0, 0, 0, 3], "G"),      # open G
        ([0, 2, 2, 1, 0, 0], "E"),      # open E
        ([0, 2, 2, 0, 0, 0], "E"),      # open Em
        ([-1, -1, 0, 2, 3, 2], "D"),    # open D
        ([-1, -1, 0, 2, 3, 1], "D"),    # open Dm
    ])
    def test_open_forms(self, frets, expected):
        assert classify_shape(frets) == expected


class TestMovedShapes:

    def test_e_shape_barre(self):
        assert classify_shape([1, 3, 3, 2, 1, 1]) == "E"          # F
        assert classify_shape([1, 3, 3, 2, 1, 1], 5) == "E"       # A at the 5th fret

    def test_a_shape_barre(self):
        assert classify_shape([-1, 3, 5, 5, 5, 3]) == "A"         # C

    def test_d_shape_up_the_neck(self):
        assert classify_shape([-1, -1, 10, 12, 13, 12]) == "D"

    def test_moved_g_shape_reads_as_e(self):
        # No open strings left once the G shape leaves the nut
        assert classify_shape([8, 7, 5, 5, 5, 8]) == "E"
        assert classify_shape([5, 3, 2, 2, 5, 5]) == "E"

    def test_moved_c_shape_reads_as_a(self):
        assert classify_shape([-1, 5, 4, 2, 3, 2]) == "A"


class TestFallback:

    def test_low_e_with_few_strings(self):
        assert classify_shape([3, -1, 0, -1, -1, -1]) == "E"

    def test_top_strings_only(self):
        assert classify_shape([-1, -1, -1, 2, 3, 2]) == "E"

    def test_nothing_played(self):
        assert classify_shape([-1] * 6) == "E"

    def test_always_a_caged_letter(self):
        patterns = [
            [0, 0, 0, 0, 0, 0],
            [-1, 2, -1, 2, -1, 2],
            [5, -1, -1, -1, -1, -1],
            [-1, -1, -1, -1, -1, 0],
        ]
        for frets in patterns:
            assert classify_shape(frets) in {"C", "A", "G", "E", "D"}


class TestRoundTrip:

    @pytest.mark.parametrize("shape,quality", [
        ("C", "major"), ("A", "major"), ("D", "major"), ("E", "major"),
        ("A", "minor"), ("D", "minor"), ("E", "minor"),
    ])
    def test_template_on_its_own_root(self, shape, quality):
        assert classify_shape(transpose(shape, shape, quality)) == shape


class TestDescribeShape:

    def test_open_c(self):
        features = describe_shape([-1, 3, 2, 0, 1, 0])
        assert features["played"] == [1, 2, 3, 4, 5]
        assert features["num_played"] == 5
        assert features["lowest"] == 1
        assert features["highest"] == 5
        assert features["has_open"] is True

    def test_relative_frets_are_made_absolute(self):
        features = describe_shape([1, 3, 3, 2, 1, 1], base_fret=5)
        assert features["frets"] == [5, 7, 7, 6, 5, 5]
        assert features["has_open"] is False

    def test_all_muted(self):
        features = describe_shape([-1] * 6)
        assert features["lowest"] is None
        assert features["num_played"] == 0

    def test_wrong_length(self):
        with pytest.raises(InvalidFret):
            describe_shape([0, 2, 2])


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
