"""Tests for slipstitch.core.pattern_file — the .slip text format."""

import pytest
from slipstitch.core.editor import new_pattern, toggle
from slipstitch.core.errors import PatternFileError
from slipstitch.core.pattern_file import (
    dump_pattern,
    parse_pattern_file,
    parse_pattern_string,
    write_pattern_file,
)
from slipstitch.core.types import Cell

K = Cell.KNIT
S = Cell.SLIP

SAMPLE = """\
# two-colour mosaic swatch
foundation: #FFFFFF
row 1: KKKK #cc3333
row 2: KSKS #cc3333
row 3: kkkk #3366CC
row 4: SKSK 36c
"""


class TestParsePatternString:
    def test_dimensions(self):
        p = parse_pattern_string(SAMPLE)
        assert p.row_count == 4
        assert p.stitch_count == 4

    def test_foundation_normalised(self):
        assert parse_pattern_string(SAMPLE).foundation_colour == '#ffffff'

    def test_rows_in_order(self):
        p = parse_pattern_string(SAMPLE)
        assert p.grid[0] == (K, K, K, K)
        assert p.grid[1] == (K, S, K, S)
        assert p.grid[3] == (S, K, S, K)

    def test_lowercase_stitches(self):
        assert parse_pattern_string(SAMPLE).grid[2] == (K, K, K, K)

    def test_colours_normalised(self):
        p = parse_pattern_string(SAMPLE)
        assert p.row_colours == ('#cc3333', '#cc3333', '#3366cc', '#3366cc')

    def test_rows_any_order(self):
        p = parse_pattern_string('row 2: S\nrow 1: K\n')
        assert p.grid == ((K,), (S,))

    def test_defaults(self):
        p = parse_pattern_string('row 1: KS\n')
        assert p.row_colours == ('#000000',)
        assert p.foundation_colour == '#cccccc'

    def test_blank_lines_and_comments(self):
        p = parse_pattern_string('\n# hi\n\nrow 1: K #ff0000\n\n')
        assert p.row_count == 1


class TestParseErrors:
    def test_garbage_line(self):
        with pytest.raises(PatternFileError) as exc:
            parse_pattern_string('row 1: K\nhello\n')
        assert exc.value.line == 2

    def test_bad_stitch(self):
        with pytest.raises(PatternFileError):
            parse_pattern_string('row 1: KXK\n')

    def test_bad_colour(self):
        with pytest.raises(PatternFileError) as exc:
            parse_pattern_string('row 1: K #zzzzzz\n')
        assert exc.value.line == 1

    def test_duplicate_row(self):
        with pytest.raises(PatternFileError) as exc:
            parse_pattern_string('row 1: K\nrow 1: S\n')
        assert exc.value.line == 2

    def test_missing_row(self):
        with pytest.raises(PatternFileError):
            parse_pattern_string('row 1: K\nrow 3: S\n')

    def test_row_zero(self):
        with pytest.raises(PatternFileError):
            parse_pattern_string('row 0: K\n')

    def test_ragged_rows(self):
        with pytest.raises(PatternFileError) as exc:
            parse_pattern_string('row 1: KK\nrow 2: K\n')
        assert exc.value.line == 2

    def test_no_rows(self):
        with pytest.raises(PatternFileError):
            parse_pattern_string('foundation: #ffffff\n')


class TestDumpPattern:
    def test_format(self):
        p = toggle(new_pattern(2, 3), 1, 1)
        text = dump_pattern(p)
        assert 'foundation: #cccccc' in text
        assert 'row 1: KKK #000000' in text
        assert 'row 2: KSK #000000' in text

    def test_parses_back(self):
        p = parse_pattern_string(SAMPLE)
        assert parse_pattern_string(dump_pattern(p)) == p


class TestFiles:
    def test_write_then_read(self, tmp_path):
        p = toggle(new_pattern(3, 2, colour='#abcdef'), 2, 0)
        path = tmp_path / 'chart.slip'
        write_pattern_file(p, str(path))
        assert parse_pattern_file(str(path)) == p
