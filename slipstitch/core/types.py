"""Shared types for slipstitch: Cell, Pattern, Decoded, PendingChoice, Command."""

from __future__ import annotations

import enum
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from slipstitch.core.errors import ShapeMismatch
from slipstitch.core.palette import DEFAULT_FOUNDATION, normalise


class Cell(enum.Enum):
    """A stitch in the chart: knitted in the current row, or slipped."""

    KNIT = 'knit'
    SLIP = 'slip'

    @property
    def symbol(self) -> str:
        return 'K' if self is Cell.KNIT else 'S'

    @classmethod
    def parse(cls, value: Cell | str) -> Cell:
        """Accept a Cell, 'K'/'S', or 'knit'/'slip' (any case)."""
        if isinstance(value, Cell):
            return value
        text = str(value).strip().lower()
        if text in ('k', 'knit'):
            return cls.KNIT
        if text in ('s', 'slip'):
            return cls.SLIP
        raise ValueError(f'Not a stitch: {value!r} (expected K or S)')


Grid = tuple[tuple[Cell, ...], ...]
OutputMatrix = tuple[tuple[str, ...], ...]


def check_shape(grid: Sequence[Sequence[Cell]], row_colours: Sequence[str]) -> None:
    """Raise ShapeMismatch unless the grid is rectangular with one colour per row."""
    if len(row_colours) != len(grid):
        raise ShapeMismatch(f'{len(row_colours)} row colours for {len(grid)} rows')
    if grid:
        width = len(grid[0])
        for i, row in enumerate(grid):
            if len(row) != width:
                raise ShapeMismatch(f'row {i + 1} has {len(row)} stitches, expected {width}')


@dataclass(frozen=True)
class Pattern:
    """An immutable snapshot of a chart: grid, per-row colours, foundation colour.

    Row 0 is the first knitted row (bottom of the fabric). Edits never
    mutate a Pattern; they build a new one (see slipstitch.core.editor).
    """

    grid: Grid
    row_colours: tuple[str, ...]
    foundation_colour: str = DEFAULT_FOUNDATION

    def __post_init__(self) -> None:
        grid = tuple(tuple(Cell.parse(c) for c in row) for row in self.grid)
        colours = tuple(normalise(c) for c in self.row_colours)
        check_shape(grid, colours)
        object.__setattr__(self, 'grid', grid)
        object.__setattr__(self, 'row_colours', colours)
        object.__setattr__(self, 'foundation_colour', normalise(self.foundation_colour))

    @property
    def row_count(self) -> int:
        return len(self.grid)

    @property
    def stitch_count(self) -> int:
        return len(self.grid[0]) if self.grid else 0


@dataclass(frozen=True)
class Decoded:
    """A fully decoded import, ready to replace the editor's pattern.

    has_colour_info is the heuristic's verdict: True only when the last
    column held a colour other than pure black/white. colour_column records
    whether this interpretation read the last column as row colours.
    """

    pattern: Pattern
    has_colour_info: bool = False
    colour_column: bool = False

    @property
    def grid(self) -> Grid:
        return self.pattern.grid

    @property
    def row_colours(self) -> tuple[str, ...]:
        return self.pattern.row_colours

    @property
    def foundation_colour(self) -> str:
        return self.pattern.foundation_colour


@dataclass(frozen=True)
class PendingChoice:
    """An ambiguous import: the last column may be stitches or row colours.

    Both interpretations are decoded up front. The caller must ask the user
    and call choose(); the codec never picks one itself.
    """

    plain: Decoded
    annotated: Decoded
    has_colour_info: bool = field(default=False, init=False)

    def choose(self, use_colour_column: bool) -> Decoded:
        return self.annotated if use_colour_column else self.plain


class Command:
    """A self-registering CLI subcommand.

    Usage in a command module:

        command = Command(name='render', help='Show the resolved colours')

        @command.arguments
        def add_arguments(parser):
            parser.add_argument('pattern')

        @command.run
        def run(args):
            ...
    """

    def __init__(self, name: str, help: str = ''):
        self.name = name
        self.help = help
        self.doc = ''
        self._run_fn: Callable | None = None
        self._args_fn: Callable | None = None

    @property
    def summary(self) -> str:
        """First line of the command's docs, or its help text."""
        doc = self.doc.strip()
        return doc.splitlines()[0] if doc else self.help

    def run(self, fn: Callable) -> Callable:
        """Decorator to register the run function."""
        self._run_fn = fn
        return fn

    def arguments(self, fn: Callable) -> Callable:
        """Decorator to register the argparse setup function."""
        self._args_fn = fn
        return fn

    def add_arguments(self, parser: Any) -> None:
        if self._args_fn is not None:
            self._args_fn(parser)

    def execute(self, args: Any) -> None:
        """Execute the command's run function."""
        if self._run_fn is None:
            raise RuntimeError(f'Command {self.name} has no run function')
        self._run_fn(args)
