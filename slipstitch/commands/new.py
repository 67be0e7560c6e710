"""Create a blank pattern file: every stitch knit, every row one colour.

Rows and stitches default to SLIPSTITCH_DEFAULT_ROWS / SLIPSTITCH_DEFAULT_STITCHES
(10 x 10 if unset). Both must be between 1 and 100. Refuses to overwrite an
existing file unless --force is given.

Example:
    slipstitch new chart.slip --rows 12 --stitches 8
    slipstitch new chart.slip --colour '#3366cc' --foundation '#ffffff'
"""

import os
import sys

from slipstitch.core.editor import new_pattern
from slipstitch.core.env import load_settings
from slipstitch.core.errors import EditorError
from slipstitch.core.palette import DEFAULT_FOUNDATION, DEFAULT_ROW_COLOUR
from slipstitch.core.pattern_file import write_pattern_file
from slipstitch.core.types import Command

command = Command(name='new', help='Create a blank all-knit pattern file.')


@command.arguments
def add_arguments(parser) -> None:
    parser.add_argument('pattern', help='Path of the .slip file to create')
    parser.add_argument('-r', '--rows', type=int, default=None, help='Number of rows (1-100)')
    parser.add_argument('-s', '--stitches', type=int, default=None, help='Stitches per row (1-100)')
    parser.add_argument('-c', '--colour', default=DEFAULT_ROW_COLOUR, help='Colour for every row')
    parser.add_argument('--foundation', default=DEFAULT_FOUNDATION, help='Foundation (cast-on) colour')
    parser.add_argument('-f', '--force', action='store_true', help='Overwrite an existing file')


@command.run
def run(args) -> None:
    if os.path.exists(args.pattern) and not args.force:
        raise EditorError(f'{args.pattern} already exists (use --force to overwrite)')

    settings = load_settings()
    rows = args.rows if args.rows is not None else settings.default_rows
    stitches = args.stitches if args.stitches is not None else settings.default_stitches
    pattern = new_pattern(rows, stitches, colour=args.colour, foundation=args.foundation)
    write_pattern_file(pattern, args.pattern)
    print(f'slipstitch: created {args.pattern} ({stitches}×{rows})', file=sys.stderr)
