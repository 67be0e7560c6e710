"""Editor state: the single owner of the current pattern, and the import flow.

Every edit builds a new Pattern and swaps it in whole; nothing mutates a
snapshot that a resolver or encoder might be holding.

Import state machine:

    IDLE -> DECODING -> APPLIED -> IDLE
                     -> AWAITING_COLOUR_COLUMN_CHOICE -> (answer) -> APPLIED -> IDLE
                                                      -> (cancel) -> IDLE

A failed decode returns to IDLE with the editor's pattern untouched.
"""

from __future__ import annotations

import enum
import logging

import numpy as np
from PIL import Image

from slipstitch.core.codec import decode, encode_pattern
from slipstitch.core.errors import EditorError
from slipstitch.core.palette import DEFAULT_FOUNDATION, DEFAULT_PALETTE, DEFAULT_ROW_COLOUR
from slipstitch.core.resolver import resolve_pattern
from slipstitch.core.types import Cell, Decoded, OutputMatrix, Pattern, PendingChoice

logger = logging.getLogger(__name__)

MIN_SIZE = 1
MAX_SIZE = 100


def _check_size(name: str, value: int) -> None:
    if not MIN_SIZE <= value <= MAX_SIZE:
        raise EditorError(f'{name} must be between {MIN_SIZE} and {MAX_SIZE}, got {value}')


def new_pattern(
    rows: int,
    stitches: int,
    colour: str = DEFAULT_ROW_COLOUR,
    foundation: str = DEFAULT_FOUNDATION,
) -> Pattern:
    """A fresh all-knit pattern with every row in the same colour."""
    _check_size('rows', rows)
    _check_size('stitches', stitches)
    grid = tuple((Cell.KNIT,) * stitches for _ in range(rows))
    return Pattern(grid=grid, row_colours=(colour,) * rows, foundation_colour=foundation)


def _check_row(pattern: Pattern, row: int) -> None:
    if not 0 <= row < pattern.row_count:
        raise EditorError(f'row {row + 1} out of range 1..{pattern.row_count}')


def toggle(pattern: Pattern, row: int, stitch: int) -> Pattern:
    """Flip one stitch between knit and slip. Indices are 0-based."""
    _check_row(pattern, row)
    if not 0 <= stitch < pattern.stitch_count:
        raise EditorError(f'stitch {stitch + 1} out of range 1..{pattern.stitch_count}')
    old = pattern.grid[row]
    flipped = Cell.SLIP if old[stitch] is Cell.KNIT else Cell.KNIT
    new_row = old[:stitch] + (flipped,) + old[stitch + 1 :]
    grid = pattern.grid[:row] + (new_row,) + pattern.grid[row + 1 :]
    return Pattern(grid=grid, row_colours=pattern.row_colours, foundation_colour=pattern.foundation_colour)


def set_row_colour(pattern: Pattern, row: int, colour: str) -> Pattern:
    _check_row(pattern, row)
    colours = pattern.row_colours[:row] + (colour,) + pattern.row_colours[row + 1 :]
    return Pattern(grid=pattern.grid, row_colours=colours, foundation_colour=pattern.foundation_colour)


def set_foundation_colour(pattern: Pattern, colour: str) -> Pattern:
    return Pattern(grid=pattern.grid, row_colours=pattern.row_colours, foundation_colour=colour)


def resize(pattern: Pattern, rows: int, stitches: int) -> Pattern:
    """Start over at a new size. Like the editor's size controls, this discards the chart."""
    return new_pattern(rows, stitches, foundation=pattern.foundation_colour)


class Editor:
    """Holds the authoritative pattern. Every change replaces it whole."""

    def __init__(self, pattern: Pattern | None = None, rows: int = 10, stitches: int = 10):
        self._pattern = pattern if pattern is not None else new_pattern(rows, stitches)
        self.palette = DEFAULT_PALETTE

    @property
    def pattern(self) -> Pattern:
        return self._pattern

    def replace(self, pattern: Pattern) -> None:
        self._pattern = pattern

    def toggle(self, row: int, stitch: int) -> None:
        self.replace(toggle(self._pattern, row, stitch))

    def set_row_colour(self, row: int, colour: str) -> None:
        self.replace(set_row_colour(self._pattern, row, colour))

    def set_foundation_colour(self, colour: str) -> None:
        self.replace(set_foundation_colour(self._pattern, colour))

    def resize(self, rows: int, stitches: int) -> None:
        self.replace(resize(self._pattern, rows, stitches))

    def output(self) -> OutputMatrix:
        return resolve_pattern(self._pattern)

    def export_image(self, include_colour_column: bool = False) -> Image.Image:
        return encode_pattern(self._pattern, include_colour_column)


class ImportState(enum.Enum):
    IDLE = 'idle'
    DECODING = 'decoding'
    APPLIED = 'applied'
    AWAITING_COLOUR_COLUMN_CHOICE = 'awaiting-colour-column-choice'


class ImportSession:
    """Drives one image import into an Editor, including the colour-column prompt."""

    def __init__(self, editor: Editor):
        self.editor = editor
        self.state = ImportState.IDLE
        self.pending: PendingChoice | None = None

    def begin(self, buffer: Image.Image | np.ndarray) -> ImportState:
        """Decode an image. Returns APPLIED, or AWAITING_COLOUR_COLUMN_CHOICE if the caller must answer."""
        if self.state is not ImportState.IDLE:
            raise EditorError(f'cannot start an import while {self.state.value}')
        self.state = ImportState.DECODING
        try:
            result = decode(buffer)
        except Exception:
            self.state = ImportState.IDLE
            raise

        if isinstance(result, PendingChoice):
            self.pending = result
            self.state = ImportState.AWAITING_COLOUR_COLUMN_CHOICE
            logger.info('import needs a decision: is the last column row colours?')
            return self.state
        return self._apply(result)

    def answer(self, use_colour_column: bool) -> ImportState:
        if self.state is not ImportState.AWAITING_COLOUR_COLUMN_CHOICE or self.pending is None:
            raise EditorError('no import is waiting for a colour-column choice')
        chosen = self.pending.choose(use_colour_column)
        self.pending = None
        return self._apply(chosen)

    def cancel(self) -> None:
        """Drop a pending import. The editor's pattern is left as it was."""
        self.pending = None
        self.state = ImportState.IDLE

    def _apply(self, result: Decoded) -> ImportState:
        self.editor.replace(result.pattern)
        logger.info(
            'imported %dx%d pattern (%s)',
            result.pattern.stitch_count,
            result.pattern.row_count,
            'with row colours' if result.colour_column else 'pattern only',
        )
        self.state = ImportState.IDLE
        return ImportState.APPLIED
