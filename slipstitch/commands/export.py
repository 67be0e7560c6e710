"""Export a pattern as a black/white PNG, optionally with its colours.

Knit stitches are black, slipped stitches white. Row 1 (the first knitted
row) is the bottom row of the image.

--colours adds a colour column on the right holding each row's colour,
and a foundation row at the top of the image whose last pixel holds the
foundation colour. Without it only the stitch pattern is saved.

PNG is lossless, so colours come back exactly on import.

Example:
    slipstitch export chart.slip chart.png
    slipstitch export chart.slip chart.png --colours
"""

import sys

from slipstitch.core.codec import encode_pattern, save_png
from slipstitch.core.pattern_file import parse_pattern_file
from slipstitch.core.types import Command

command = Command(name='export', help='Export a pattern as a PNG (optionally with a colour column).')


@command.arguments
def add_arguments(parser) -> None:
    parser.add_argument('pattern', help='Path to a .slip pattern file')
    parser.add_argument('image', help='PNG file to write')
    parser.add_argument(
        '-c',
        '--colours',
        action='store_true',
        help='Embed row colours (extra right column) and the foundation row',
    )


@command.run
def run(args) -> None:
    pattern = parse_pattern_file(args.pattern)
    image = encode_pattern(pattern, include_colour_column=args.colours)
    save_png(image, args.image)
    layout = 'with colours' if args.colours else 'pattern only'
    print(f'slipstitch: exported {args.image} ({image.width}×{image.height}, {layout})', file=sys.stderr)
