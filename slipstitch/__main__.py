"""slipstitch — design slip-stitch colourwork charts and round-trip them through PNG.

Usage: slipstitch <command> [options]

Commands are auto-discovered from slipstitch/commands/.
Each command module's docstring is its documentation.
Run `slipstitch help <command>` for full module docs.

Environment variables / .env loading:
  OS environment variables are always used first.
  If a variable is not set, slipstitch looks for a .env file starting from
  the current directory and walking up, stopping at the nearest .git boundary.
  Use --env-file to override the .env location explicitly.
"""

import argparse
import logging
import sys

from slipstitch import registry
from slipstitch.core.env import load_env, load_settings
from slipstitch.core.errors import SlipStitchError


def _build_parser() -> argparse.ArgumentParser:
    commands = registry.all_commands()

    epilog = (
        'Examples:\n'
        '  slipstitch new chart.slip --rows 12 --stitches 8\n'
        '  slipstitch toggle chart.slip 2 3\n'
        "  slipstitch colour chart.slip 2 '#cc3333'\n"
        '  slipstitch render chart.slip --out preview.png\n'
        '  slipstitch export chart.slip chart.png --colours\n'
        '  slipstitch import chart.png chart.slip --colour-column yes\n'
        '  slipstitch help import\n'
        '\n'
        'Settings (set in .env or environment):\n'
        '  SLIPSTITCH_LOG_LEVEL, SLIPSTITCH_DEFAULT_ROWS,\n'
        '  SLIPSTITCH_DEFAULT_STITCHES, SLIPSTITCH_RENDER_SCALE\n'
    )
    parser = argparse.ArgumentParser(
        prog='slipstitch',
        description='Design slip-stitch colourwork charts and round-trip them through PNG.',
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    # Global options before subcommand
    parser.add_argument(
        '--env-file',
        metavar='PATH',
        default=None,
        help='Path to .env file (default: walk up from cwd to .git boundary)',
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Log debug detail to stderr')
    sub = parser.add_subparsers(dest='command', help='Command to run')

    for name, cmd in sorted(commands.items()):
        p = sub.add_parser(name, help=cmd.summary)
        cmd.add_arguments(p)

    # `help` subcommand — prints full module docstring for a command
    help_parser = sub.add_parser('help', help='Print full docs for a command')
    help_parser.add_argument('topic', nargs='?', help='Command name')

    return parser


def _print_help(topic: str | None) -> None:
    """Print full module docstring for a command."""
    commands = registry.all_commands()

    if topic is None:
        print('Available commands:\n')
        for name, cmd in sorted(commands.items()):
            print(f'  {name:<10} {cmd.summary}')
        print('\nRun: slipstitch help <command> for full docs.')
        return

    if topic not in commands:
        print(f'Unknown command: {topic}', file=sys.stderr)
        print(f'Available: {", ".join(sorted(commands))}', file=sys.stderr)
        sys.exit(1)

    doc = commands[topic].doc.strip()
    if not doc:
        print(f'(No module docs for {topic!r})')
        return
    print(doc)


def _configure_logging(verbose: bool, level_name: str) -> None:
    level = logging.DEBUG if verbose else getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(level=level, format='%(levelname)s %(name)s: %(message)s', stream=sys.stderr)


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    # Load .env before anything else — OS env vars always win
    env_path = load_env(env_file=args.env_file)
    try:
        settings = load_settings()
    except ValueError as e:
        print(f'slipstitch: error: {e}', file=sys.stderr)
        sys.exit(1)
    _configure_logging(args.verbose, settings.log_level)
    if env_path:
        logging.getLogger(__name__).debug('loaded %s', env_path)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == 'help':
        _print_help(args.topic)
        return

    cmd = registry.get(args.command)
    try:
        cmd.execute(args)
    except (SlipStitchError, OSError, ValueError) as e:
        print(f'slipstitch: error: {e}', file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
