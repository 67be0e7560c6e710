"""PNG serialisation of a pattern: black/white stitches, optional colour column.

Two layouts, selected by include_colour_column on export:

Plain (stitch_count x row_count):
  Knit = #000000, slip = #ffffff. Row r is drawn at y = row_count-1-r, so
  the first knitted row is the last image row. No colour data.

Annotated ((stitch_count+1) x (row_count+1)):
  Image row y = 0 is the foundation row: every stitch pixel black (the
  cast-on is always knit) and the extra rightmost pixel holds the
  foundation colour. Row r is drawn at y = row_count-r, so row 0 is the
  last image row and the top row of the chart sits at y = 1. The
  rightmost pixel of each pattern row holds that row's colour.

Import classifies each stitch pixel by brightness ((r+g+b)/3 < 128 is
knit; alpha is ignored). If any pixel of the rightmost column is not
exactly black or white, that column must be colour data and the
annotated layout is decoded directly. Otherwise the image is ambiguous
and decode() returns a PendingChoice holding both readings; the caller
has to ask.
"""

import logging
from pathlib import Path

import numpy as np
from PIL import Image

from slipstitch.core.errors import MalformedImage, ShapeMismatch
from slipstitch.core.palette import DEFAULT_FOUNDATION, DEFAULT_ROW_COLOUR, hex_to_rgb, rgb_to_hex
from slipstitch.core.types import Cell, Decoded, Grid, Pattern, PendingChoice, check_shape

logger = logging.getLogger(__name__)

# (r+g+b)/3 < 128, kept in integer form
KNIT_SUM_THRESHOLD = 3 * 128


def encode(
    grid: Grid,
    row_colours: tuple[str, ...],
    foundation_colour: str,
    include_colour_column: bool = False,
) -> Image.Image:
    """Draw the pattern as an RGBA image in the plain or annotated layout."""
    check_shape(grid, row_colours)
    if not grid or not grid[0]:
        raise ShapeMismatch('cannot export an empty pattern')

    rows = len(grid)
    stitches = len(grid[0])
    knit = np.array([[Cell.parse(cell) is Cell.KNIT for cell in row] for row in grid], dtype=bool)
    stitch_px = np.full((rows, stitches, 3), 255, dtype=np.uint8)
    stitch_px[knit] = 0
    # Row 0 goes to the bottom of the image
    stitch_px = stitch_px[::-1]

    if not include_colour_column:
        rgb = stitch_px
    else:
        rgb = np.zeros((rows + 1, stitches + 1, 3), dtype=np.uint8)
        rgb[1:, :stitches] = stitch_px
        rgb[0, stitches] = hex_to_rgb(foundation_colour)
        for r, colour in enumerate(row_colours):
            rgb[rows - r, stitches] = hex_to_rgb(colour)

    alpha = np.full(rgb.shape[:2] + (1,), 255, dtype=np.uint8)
    rgba = np.ascontiguousarray(np.concatenate([rgb, alpha], axis=2))
    logger.debug(
        'encoded %dx%d pattern as %s layout (%dx%d px)',
        stitches,
        rows,
        'annotated' if include_colour_column else 'plain',
        rgba.shape[1],
        rgba.shape[0],
    )
    return Image.fromarray(rgba)


def encode_pattern(pattern: Pattern, include_colour_column: bool = False) -> Image.Image:
    return encode(pattern.grid, pattern.row_colours, pattern.foundation_colour, include_colour_column)


def _to_rgb_array(buffer: Image.Image | np.ndarray) -> np.ndarray:
    """Return an (H, W, 3) uint8 array. Alpha, if present, is dropped."""
    if isinstance(buffer, Image.Image):
        arr = np.asarray(buffer.convert('RGBA'))
    else:
        arr = np.asarray(buffer)
        if arr.ndim != 3 or arr.shape[2] not in (3, 4):
            raise MalformedImage(f'expected an (H, W, 3|4) pixel array, got shape {arr.shape}')
        if arr.dtype != np.uint8:
            raise MalformedImage(f'expected 8-bit channels (uint8), got {arr.dtype}')
    return arr[:, :, :3]


def _knit_mask(rgb: np.ndarray) -> np.ndarray:
    # int32 so the channel sum cannot wrap
    return rgb.astype(np.int32).sum(axis=2) < KNIT_SUM_THRESHOLD


def _cells(mask_row: np.ndarray) -> tuple[Cell, ...]:
    return tuple(Cell.KNIT if k else Cell.SLIP for k in mask_row)


def _has_colour_column(rgb: np.ndarray) -> bool:
    """True if any pixel in the rightmost column is neither pure black nor pure white."""
    last = rgb[:, -1]
    black_or_white = np.all(last == 0, axis=1) | np.all(last == 255, axis=1)
    return not bool(black_or_white.all())


def _decode_plain(rgb: np.ndarray, knit: np.ndarray) -> Decoded:
    height = rgb.shape[0]
    grid = tuple(_cells(knit[height - 1 - r]) for r in range(height))
    pattern = Pattern(
        grid=grid,
        row_colours=(DEFAULT_ROW_COLOUR,) * height,
        foundation_colour=DEFAULT_FOUNDATION,
    )
    return Decoded(pattern=pattern, has_colour_info=False, colour_column=False)


def _decode_annotated(rgb: np.ndarray, knit: np.ndarray, has_colour_info: bool) -> Decoded:
    height, width = rgb.shape[:2]
    if height < 2 or width < 2:
        raise MalformedImage(
            f'{width}x{height} image is too small for a colour column and foundation row (need at least 2x2)'
        )
    stitches = width - 1
    grid = []
    colours = []
    for r in range(height - 1):
        y = height - 1 - r
        grid.append(_cells(knit[y, :stitches]))
        colours.append(rgb_to_hex(*rgb[y, stitches]))
    foundation = rgb_to_hex(*rgb[0, stitches])
    pattern = Pattern(grid=tuple(grid), row_colours=tuple(colours), foundation_colour=foundation)
    return Decoded(pattern=pattern, has_colour_info=has_colour_info, colour_column=True)


def decode(buffer: Image.Image | np.ndarray) -> Decoded | PendingChoice:
    """Decode an exported image back into a pattern.

    Returns Decoded when the result is unambiguous, PendingChoice when the
    rightmost column is pure black/white and could be either stitches or
    colours. Raises MalformedImage for images with no pixels, or when the
    colour column is present but the image is too small to hold it.
    """
    rgb = _to_rgb_array(buffer)
    height, width = rgb.shape[:2]
    if width < 1 or height < 1:
        raise MalformedImage(f'image has no pixels ({width}x{height})')

    knit = _knit_mask(rgb)

    if _has_colour_column(rgb):
        logger.debug('rightmost column holds colour data; decoding annotated layout')
        return _decode_annotated(rgb, knit, has_colour_info=True)

    plain = _decode_plain(rgb, knit)
    if width < 2 or height < 2:
        logger.debug('%dx%d image too small for a colour column; decoding plain layout', width, height)
        return plain

    logger.debug('rightmost column is black/white only; deferring layout choice')
    return PendingChoice(plain=plain, annotated=_decode_annotated(rgb, knit, has_colour_info=False))


def save_png(image: Image.Image, path: str | Path) -> None:
    """Write a raster losslessly. Colour columns only survive lossless formats."""
    image.save(path, format='PNG')
    logger.info('wrote %s (%dx%d)', path, image.width, image.height)


def load_png(path: str | Path) -> Image.Image:
    with Image.open(path) as img:
        rgba = img.convert('RGBA')
    logger.info('read %s (%dx%d)', path, rgba.width, rgba.height)
    return rgba
