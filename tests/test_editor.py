"""Tests for slipstitch.core.editor — snapshot edits and the import state machine."""

import numpy as np
import pytest
from slipstitch.core.codec import encode
from slipstitch.core.editor import (
    MAX_SIZE,
    Editor,
    ImportSession,
    ImportState,
    new_pattern,
    resize,
    set_foundation_colour,
    set_row_colour,
    toggle,
)
from slipstitch.core.errors import EditorError, InvalidColour, MalformedImage
from slipstitch.core.palette import DEFAULT_FOUNDATION, DEFAULT_PALETTE
from slipstitch.core.types import Cell

K = Cell.KNIT
S = Cell.SLIP


class TestNewPattern:
    def test_all_knit_default_colours(self):
        p = new_pattern(3, 4)
        assert p.row_count == 3
        assert p.stitch_count == 4
        assert all(cell is K for row in p.grid for cell in row)
        assert p.row_colours == ('#000000',) * 3
        assert p.foundation_colour == DEFAULT_FOUNDATION

    def test_custom_colours_normalised(self):
        p = new_pattern(2, 2, colour='#ABC', foundation='FFFFFF')
        assert p.row_colours == ('#aabbcc', '#aabbcc')
        assert p.foundation_colour == '#ffffff'

    @pytest.mark.parametrize('rows, stitches', [(0, 5), (5, 0), (MAX_SIZE + 1, 5), (5, MAX_SIZE + 1)])
    def test_size_limits(self, rows, stitches):
        with pytest.raises(EditorError):
            new_pattern(rows, stitches)

    def test_max_size_allowed(self):
        assert new_pattern(MAX_SIZE, MAX_SIZE).row_count == MAX_SIZE


class TestEdits:
    def test_toggle_returns_new_pattern(self):
        p = new_pattern(2, 2)
        q = toggle(p, 1, 0)
        assert q.grid == ((K, K), (S, K))
        assert p.grid == ((K, K), (K, K))

    def test_toggle_twice_restores(self):
        p = new_pattern(2, 3)
        assert toggle(toggle(p, 0, 2), 0, 2) == p

    def test_toggle_out_of_range(self):
        p = new_pattern(2, 2)
        with pytest.raises(EditorError):
            toggle(p, 2, 0)
        with pytest.raises(EditorError):
            toggle(p, 0, -1)

    def test_set_row_colour(self):
        p = set_row_colour(new_pattern(3, 1), 1, '#CC3333')
        assert p.row_colours == ('#000000', '#cc3333', '#000000')

    def test_set_row_colour_invalid(self):
        with pytest.raises(InvalidColour):
            set_row_colour(new_pattern(1, 1), 0, 'not-a-colour')

    def test_set_row_colour_out_of_range(self):
        with pytest.raises(EditorError):
            set_row_colour(new_pattern(1, 1), 1, '#ffffff')

    def test_set_foundation_colour(self):
        assert set_foundation_colour(new_pattern(1, 1), '#123456').foundation_colour == '#123456'

    def test_resize_starts_over(self):
        p = toggle(set_row_colour(new_pattern(2, 2), 0, '#ff0000'), 0, 0)
        q = resize(p, 3, 4)
        assert q == new_pattern(3, 4, foundation=p.foundation_colour)


class TestEditor:
    def test_default_size(self):
        editor = Editor()
        assert editor.pattern.row_count == 10
        assert editor.pattern.stitch_count == 10
        assert editor.palette == DEFAULT_PALETTE

    def test_edits_replace_snapshot(self):
        editor = Editor(new_pattern(2, 2))
        before = editor.pattern
        editor.toggle(0, 0)
        assert editor.pattern is not before
        assert before.grid[0][0] is K
        assert editor.pattern.grid[0][0] is S

    def test_output_follows_edits(self):
        editor = Editor(new_pattern(2, 1))
        editor.set_row_colour(0, '#ff0000')
        editor.set_row_colour(1, '#00ff00')
        editor.toggle(1, 0)
        assert editor.output() == (('#ff0000',), ('#ff0000',))

    def test_failed_edit_leaves_state(self):
        editor = Editor(new_pattern(2, 2))
        before = editor.pattern
        with pytest.raises(EditorError):
            editor.toggle(5, 5)
        assert editor.pattern is before

    def test_export_image(self):
        editor = Editor(new_pattern(2, 3))
        assert editor.export_image().size == (3, 2)
        assert editor.export_image(include_colour_column=True).size == (4, 3)


def _coloured_image():
    grid = ((K, S), (S, K))
    return encode(grid, ('#ff0000', '#00ff00'), '#0000ff', include_colour_column=True), grid


def _ambiguous_image():
    grid = ((K, S), (S, K))
    return encode(grid, ('#000000', '#ffffff'), '#000000', include_colour_column=True), grid


class TestImportSession:
    def test_direct_import_applies(self):
        img, grid = _coloured_image()
        editor = Editor(new_pattern(1, 1))
        session = ImportSession(editor)
        assert session.begin(img) is ImportState.APPLIED
        assert session.state is ImportState.IDLE
        assert editor.pattern.grid == grid
        assert editor.pattern.row_colours == ('#ff0000', '#00ff00')
        assert editor.pattern.foundation_colour == '#0000ff'

    def test_ambiguous_waits_without_touching_editor(self):
        img, _grid = _ambiguous_image()
        editor = Editor(new_pattern(1, 1))
        before = editor.pattern
        session = ImportSession(editor)
        assert session.begin(img) is ImportState.AWAITING_COLOUR_COLUMN_CHOICE
        assert session.state is ImportState.AWAITING_COLOUR_COLUMN_CHOICE
        assert editor.pattern is before

    def test_answer_yes_uses_colour_column(self):
        img, grid = _ambiguous_image()
        editor = Editor(new_pattern(1, 1))
        session = ImportSession(editor)
        session.begin(img)
        assert session.answer(True) is ImportState.APPLIED
        assert session.state is ImportState.IDLE
        assert editor.pattern.grid == grid
        assert editor.pattern.row_colours == ('#000000', '#ffffff')

    def test_answer_no_uses_full_width(self):
        img, _grid = _ambiguous_image()
        editor = Editor(new_pattern(1, 1))
        session = ImportSession(editor)
        session.begin(img)
        session.answer(False)
        assert editor.pattern.stitch_count == 3
        assert editor.pattern.row_count == 3

    def test_cancel_discards(self):
        img, _grid = _ambiguous_image()
        editor = Editor(new_pattern(1, 1))
        before = editor.pattern
        session = ImportSession(editor)
        session.begin(img)
        session.cancel()
        assert session.state is ImportState.IDLE
        assert session.pending is None
        assert editor.pattern is before

    def test_answer_without_pending(self):
        session = ImportSession(Editor(new_pattern(1, 1)))
        with pytest.raises(EditorError):
            session.answer(True)

    def test_begin_while_waiting(self):
        img, _grid = _ambiguous_image()
        session = ImportSession(Editor(new_pattern(1, 1)))
        session.begin(img)
        with pytest.raises(EditorError):
            session.begin(img)

    def test_malformed_image_leaves_editor(self):
        editor = Editor(new_pattern(1, 1))
        before = editor.pattern
        session = ImportSession(editor)
        red_column = np.zeros((3, 1, 3), dtype=np.uint8)
        red_column[:, :, 0] = 255
        with pytest.raises(MalformedImage):
            session.begin(red_column)
        assert session.state is ImportState.IDLE
        assert editor.pattern is before

    def test_unreadable_buffer_returns_to_idle(self):
        class Unreadable:
            def __array__(self, dtype=None, copy=None):
                raise OSError('read failed')

        editor = Editor(new_pattern(1, 1))
        before = editor.pattern
        session = ImportSession(editor)
        with pytest.raises(OSError):
            session.begin(Unreadable())
        assert session.state is ImportState.IDLE
        assert editor.pattern is before
        # the session is usable again
        img, grid = _coloured_image()
        assert session.begin(img) is ImportState.APPLIED
        assert editor.pattern.grid == grid
