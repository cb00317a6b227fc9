"""Tests for normalization helpers and span mapping."""

from hlalign.candidate.span_mapper import map_span_to_orig
from hlalign.preprocess.normalize import (
    clean_punctuation,
    clean_with_map,
    collapse_whitespace,
    collapse_whitespace_with_map,
    find_all,
    lower_with_map,
)


class TestCollapseWhitespace:
    def test_collapse_and_trim(self):
        assert collapse_whitespace("  a \t b\n\nc  ") == "a b c"

    def test_map_points_into_original(self):
        norm, cmap = collapse_whitespace_with_map("  a  b\n c ")
        assert norm == "a b c"
        assert cmap == [2, 3, 5, 6, 8]

    def test_map_same_length_as_output(self):
        norm, cmap = collapse_whitespace_with_map("This  is   a  test.")
        assert len(norm) == len(cmap)


class TestLowerWithMap:
    def test_simple(self):
        assert lower_with_map("AbC") == ("abc", [0, 1, 2])

    def test_length_changing_lowercase(self):
        low, cmap = lower_with_map("İx")
        assert low == "İ".lower() + "x"
        assert cmap == [0] * len("İ".lower()) + [1]

    def test_cyrillic(self):
        assert lower_with_map("ЗНИЖКА")[0] == "знижка"


class TestCleanWithMap:
    def test_punctuation_removed(self):
        cleaned, cmap = clean_with_map("Hello, World!")
        assert cleaned == "hello world"
        assert cmap == [0, 1, 2, 3, 4, 6, 7, 8, 9, 10, 11]

    def test_clean_punctuation_matches_mapped_form(self):
        text = "Well,  we can't; go lower!"
        assert clean_punctuation(text) == clean_with_map(text)[0]


class TestFindAll:
    def test_non_overlapping(self):
        assert find_all("aaaa", "aa") == [0, 2]

    def test_empty_needle(self):
        assert find_all("abc", "") == []

    def test_missing(self):
        assert find_all("abc", "x") == []


class TestMapSpanToOrig:
    def test_maps_last_char_inclusive(self):
        assert map_span_to_orig((0, 3), [2, 3, 5, 6, 8]) == (2, 6)

    def test_base_offset(self):
        assert map_span_to_orig((0, 3), [2, 3, 5, 6, 8], base=10) == (12, 16)
