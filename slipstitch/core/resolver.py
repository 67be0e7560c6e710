"""Colour resolution: which colour does each stitch show?

A knitted stitch takes the colour of the row it is knitted in. A slipped
stitch is carried up unworked, so it keeps showing the colour of the most
recent row in which that column was knitted. A column slipped since the
cast-on shows the foundation colour.

Columns are scanned from row 0 (first knitted, bottom) upwards, tracking
the last knit row per column.
"""

import logging
from collections.abc import Sequence

import numpy as np
from PIL import Image

from slipstitch.core.palette import hex_to_rgb
from slipstitch.core.types import Cell, OutputMatrix, Pattern, check_shape

logger = logging.getLogger(__name__)

NO_KNIT = -1


def resolve(grid: Sequence[Sequence[Cell | str]], row_colours: Sequence[str], foundation_colour: str) -> OutputMatrix:
    """Compute the visible colour of every stitch.

    Returns a freshly built matrix with the grid's shape. Raises
    ShapeMismatch when row_colours does not have one entry per row.
    """
    check_shape(grid, row_colours)
    if not grid:
        return ()

    last_knit = [NO_KNIT] * len(grid[0])
    output = []
    for r, row in enumerate(grid):
        out_row = []
        for c, cell in enumerate(row):
            if Cell.parse(cell) is Cell.KNIT:
                last_knit[c] = r
                out_row.append(row_colours[r])
            else:
                k = last_knit[c]
                out_row.append(row_colours[k] if k != NO_KNIT else foundation_colour)
        output.append(tuple(out_row))
    return tuple(output)


def resolve_pattern(pattern: Pattern) -> OutputMatrix:
    return resolve(pattern.grid, pattern.row_colours, pattern.foundation_colour)


def render_output(matrix: OutputMatrix, scale: int = 1) -> Image.Image:
    """Paint a resolved matrix as an RGB image, one scale x scale block per stitch.

    Row 0 is drawn at the bottom, as the fabric is knitted.
    """
    if scale < 1:
        raise ValueError(f'scale must be >= 1, got {scale}')
    if not matrix or not matrix[0]:
        raise ValueError('cannot render an empty output')

    arr = np.array([[hex_to_rgb(colour) for colour in row] for row in matrix], dtype=np.uint8)
    arr = arr[::-1]
    if scale > 1:
        arr = np.repeat(np.repeat(arr, scale, axis=0), scale, axis=1)
    logger.debug('rendered %dx%d output at scale %d', len(matrix[0]), len(matrix), scale)
    return Image.fromarray(np.ascontiguousarray(arr))
