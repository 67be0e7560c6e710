"""Regex-based reader/writer for .slip pattern text files.

Format:

    # comment
    foundation: #cccccc
    row 1: KSKS #ff0000
    row 2: SSSS #00ff00

Rows are numbered from 1 (the first knitted row). Each row number from 1
to N must appear exactly once; order in the file does not matter. The
colour is optional and defaults to #000000. A missing foundation line
means #cccccc.
"""

import re

from slipstitch.core.errors import InvalidColour, PatternFileError
from slipstitch.core.palette import DEFAULT_FOUNDATION, DEFAULT_ROW_COLOUR, normalise
from slipstitch.core.types import Cell, Pattern

_FOUNDATION = re.compile(r'^foundation\s*:\s*(\S+)\s*$', re.IGNORECASE)
_ROW = re.compile(r'^row\s+(\d+)\s*:\s*([KSks]+)(?:\s+(\S+))?\s*$', re.IGNORECASE)


def parse_pattern_file(path: str) -> Pattern:
    """Parse a .slip file from disk."""
    with open(path, encoding='utf-8') as f:
        text = f.read()
    return parse_pattern_string(text)


def parse_pattern_string(text: str) -> Pattern:
    """Parse .slip text into a Pattern."""
    foundation = DEFAULT_FOUNDATION
    rows: dict[int, tuple[tuple[Cell, ...], str, int]] = {}

    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith('#'):
            continue

        m = _FOUNDATION.match(line)
        if m:
            foundation = _colour(m.group(1), lineno)
            continue

        m = _ROW.match(line)
        if not m:
            raise PatternFileError(f'cannot parse {line!r}', line=lineno)
        number = int(m.group(1))
        if number < 1:
            raise PatternFileError('row numbers start at 1', line=lineno)
        if number in rows:
            raise PatternFileError(f'row {number} defined twice (first on line {rows[number][2]})', line=lineno)
        cells = tuple(Cell.parse(ch) for ch in m.group(2))
        colour = _colour(m.group(3), lineno) if m.group(3) else DEFAULT_ROW_COLOUR
        rows[number] = (cells, colour, lineno)

    if not rows:
        raise PatternFileError('no rows defined')
    missing = [n for n in range(1, len(rows) + 1) if n not in rows]
    if missing:
        raise PatternFileError(f'missing row {missing[0]} ({len(rows)} rows given)')

    ordered = [rows[n] for n in range(1, len(rows) + 1)]
    width = len(ordered[0][0])
    for number, (cells, _, lineno) in enumerate(ordered, start=1):
        if len(cells) != width:
            raise PatternFileError(f'row {number} has {len(cells)} stitches, row 1 has {width}', line=lineno)

    return Pattern(
        grid=tuple(cells for cells, _, _ in ordered),
        row_colours=tuple(colour for _, colour, _ in ordered),
        foundation_colour=foundation,
    )


def _colour(text: str, lineno: int) -> str:
    try:
        return normalise(text)
    except InvalidColour as e:
        raise PatternFileError(str(e), line=lineno) from e


def dump_pattern(pattern: Pattern) -> str:
    """Serialise a Pattern as .slip text, rows in knitting order."""
    lines = [
        f'# {pattern.row_count} rows x {pattern.stitch_count} stitches (row 1 is knitted first)',
        f'foundation: {pattern.foundation_colour}',
    ]
    for i, (row, colour) in enumerate(zip(pattern.grid, pattern.row_colours), start=1):
        stitches = ''.join(cell.symbol for cell in row)
        lines.append(f'row {i}: {stitches} {colour}')
    return '\n'.join(lines) + '\n'


def write_pattern_file(pattern: Pattern, path: str) -> None:
    with open(path, 'w', encoding='utf-8') as f:
        f.write(dump_pattern(pattern))
