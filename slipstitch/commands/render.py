"""Resolve the colour every stitch shows and print the chart.

A knit stitch shows its row's colour. A slipped stitch shows the colour of
the last row in which that column was knit, or the foundation colour if it
has been slipped since the cast-on.

Prints rows top-down (the last knitted row first), each with its stitches,
its row colour, and the resolved colours. --json prints the same data in
knitting order. --out also paints the result to a PNG, one block of
--scale pixels per stitch (default SLIPSTITCH_RENDER_SCALE, or 20).

Example:
    slipstitch render chart.slip
    slipstitch render chart.slip --json
    slipstitch render chart.slip --out preview.png --scale 16
"""

import sys

from slipstitch.core.codec import save_png
from slipstitch.core.env import load_settings
from slipstitch.core.pattern_file import parse_pattern_file
from slipstitch.core.report import format_json, format_text
from slipstitch.core.resolver import render_output, resolve_pattern
from slipstitch.core.types import Command

command = Command(name='render', help='Show the colour each stitch ends up showing.')


@command.arguments
def add_arguments(parser) -> None:
    parser.add_argument('pattern', help='Path to a .slip pattern file')
    parser.add_argument('-j', '--json', action='store_true', help='Output JSON instead of text')
    parser.add_argument('-o', '--out', help='Also write the resolved colours as a PNG')
    parser.add_argument('--scale', type=int, default=None, help='Pixels per stitch for --out')


@command.run
def run(args) -> None:
    pattern = parse_pattern_file(args.pattern)
    output = resolve_pattern(pattern)

    if args.json:
        print(format_json(pattern, output, source=args.pattern))
    else:
        print(format_text(pattern, output, source=args.pattern))

    if args.out:
        scale = args.scale if args.scale is not None else load_settings().render_scale
        save_png(render_output(output, scale=scale), args.out)
        print(f'slipstitch: wrote {args.out}', file=sys.stderr)
