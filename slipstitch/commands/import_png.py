"""Import a PNG back into a pattern file.

Pixels darker than mid-grey ((r+g+b)/3 < 128) are knit, the rest slipped.
The bottom image row becomes row 1.

If any pixel in the rightmost column is a colour other than pure black or
white, that column is read as row colours and the top image row as the
foundation. If the rightmost column is only black and white, the image is
ambiguous: it may be a plain pattern, or a pattern whose colours happen to
be black and white. Answer with --colour-column yes|no; without it, you are
asked on an interactive terminal, and the import fails otherwise.

Imports without colour data get black rows and a #cccccc foundation.
A failed import never touches the existing pattern file.

Example:
    slipstitch import chart.png chart.slip
    slipstitch import chart.png chart.slip --colour-column no
"""

import sys

from slipstitch.core.codec import load_png
from slipstitch.core.editor import Editor, ImportSession, ImportState
from slipstitch.core.errors import EditorError
from slipstitch.core.pattern_file import write_pattern_file
from slipstitch.core.types import Command

command = Command(name='import', help='Import a PNG (plain or with a colour column) into a pattern file.')

_ANSWERS = {'y': True, 'yes': True, 'n': False, 'no': False}


@command.arguments
def add_arguments(parser) -> None:
    parser.add_argument('image', help='PNG file to read')
    parser.add_argument('pattern', help='Path of the .slip file to write')
    parser.add_argument(
        '--colour-column',
        choices=['yes', 'no'],
        default=None,
        help='Whether an all black/white last column holds row colours (asked if omitted)',
    )


def _ask() -> bool:
    """Prompt until the user answers yes or no."""
    while True:
        reply = input('Use the last column as row colours? [y/n] ').strip().lower()
        if reply in _ANSWERS:
            return _ANSWERS[reply]
        print('Please answer y or n.', file=sys.stderr)


@command.run
def run(args) -> None:
    image = load_png(args.image)
    editor = Editor()
    session = ImportSession(editor)

    state = session.begin(image)
    if state is ImportState.AWAITING_COLOUR_COLUMN_CHOICE:
        if args.colour_column is not None:
            use = _ANSWERS[args.colour_column]
        elif sys.stdin.isatty():
            print(
                f'slipstitch: the last column of {args.image} is only black and white; '
                'it may be stitches or row colours.',
                file=sys.stderr,
            )
            try:
                use = _ask()
            except EOFError:
                session.cancel()
                raise EditorError('import cancelled: no answer to the colour-column question') from None
        else:
            session.cancel()
            raise EditorError('ambiguous last column: pass --colour-column yes or --colour-column no')
        session.answer(use)

    pattern = editor.pattern
    write_pattern_file(pattern, args.pattern)
    print(f'slipstitch: imported {args.pattern} ({pattern.stitch_count}×{pattern.row_count})', file=sys.stderr)
