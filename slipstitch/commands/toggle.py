"""Flip one stitch between knit and slip.

ROW and STITCH count from 1; row 1 is the first knitted row.

Example:
    slipstitch toggle chart.slip 3 5
"""

from slipstitch.core.editor import Editor
from slipstitch.core.pattern_file import parse_pattern_file, write_pattern_file
from slipstitch.core.types import Command

command = Command(name='toggle', help='Flip a stitch between knit and slip.')


@command.arguments
def add_arguments(parser) -> None:
    parser.add_argument('pattern', help='Path to a .slip pattern file')
    parser.add_argument('row', type=int, help='Row number (1 = first knitted row)')
    parser.add_argument('stitch', type=int, help='Stitch number (1 = leftmost)')


@command.run
def run(args) -> None:
    editor = Editor(parse_pattern_file(args.pattern))
    editor.toggle(args.row - 1, args.stitch - 1)
    write_pattern_file(editor.pattern, args.pattern)
    cell = editor.pattern.grid[args.row - 1][args.stitch - 1]
    print(f'row {args.row}, stitch {args.stitch}: {cell.value}')
