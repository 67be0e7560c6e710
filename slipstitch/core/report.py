"""Report builder: text and JSON views of a pattern and its resolved colours."""

import json
from typing import Any

from slipstitch.core.types import OutputMatrix, Pattern


def format_text(pattern: Pattern, output: OutputMatrix, source: str | None = None) -> str:
    """Format a pattern as a chart, top row first, the way it reads on the fabric."""
    lines = []
    header = f'slipstitch: {pattern.stitch_count}×{pattern.row_count}'
    if source:
        header = f'slipstitch: {source} ({pattern.stitch_count}×{pattern.row_count})'
    lines.append(header)
    lines.append('')

    width = len(str(pattern.row_count))
    for r in reversed(range(pattern.row_count)):
        stitches = ' '.join(cell.symbol for cell in pattern.grid[r])
        shown = ' '.join(output[r])
        lines.append(f'row {r + 1:>{width}}  {stitches}  {pattern.row_colours[r]}  → {shown}')

    lines.append(f'foundation  {pattern.foundation_colour}')
    return '\n'.join(lines)


def format_json(pattern: Pattern, output: OutputMatrix, source: str | None = None) -> str:
    """Format a pattern and its output as JSON. Rows are listed in knitting order."""
    obj: dict[str, Any] = {}
    if source:
        obj['pattern'] = source
    obj['dimensions'] = {'rows': pattern.row_count, 'stitches': pattern.stitch_count}
    obj['foundation'] = pattern.foundation_colour
    obj['rows'] = [
        {
            'row': r + 1,
            'stitches': ''.join(cell.symbol for cell in pattern.grid[r]),
            'colour': pattern.row_colours[r],
            'output': list(output[r]),
        }
        for r in range(pattern.row_count)
    ]
    return json.dumps(obj, indent=2)
