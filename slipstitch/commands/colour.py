"""Set the colour of one row, or of the foundation row.

ROW counts from 1, or is the word `foundation`. Colours are hex
('#rrggbb' or '#rgb'). Palette names are not accepted; the swatch set
is only a convenience of the editor.

Example:
    slipstitch colour chart.slip 2 '#cc3333'
    slipstitch colour chart.slip foundation '#ffffff'
"""

from slipstitch.core.editor import Editor
from slipstitch.core.errors import EditorError
from slipstitch.core.pattern_file import parse_pattern_file, write_pattern_file
from slipstitch.core.types import Command

command = Command(name='colour', help='Set a row colour or the foundation colour.')


@command.arguments
def add_arguments(parser) -> None:
    parser.add_argument('pattern', help='Path to a .slip pattern file')
    parser.add_argument('row', help="Row number (1 = first knitted row) or 'foundation'")
    parser.add_argument('colour', help="Hex colour, e.g. '#cc3333'")


@command.run
def run(args) -> None:
    editor = Editor(parse_pattern_file(args.pattern))
    if args.row.lower() == 'foundation':
        editor.set_foundation_colour(args.colour)
        print(f'foundation: {editor.pattern.foundation_colour}')
    else:
        try:
            row = int(args.row)
        except ValueError:
            raise EditorError(f"row must be a number or 'foundation', got {args.row!r}") from None
        editor.set_row_colour(row - 1, args.colour)
        print(f'row {row}: {editor.pattern.row_colours[row - 1]}')
    write_pattern_file(editor.pattern, args.pattern)
