"""Exception hierarchy for slipstitch.

Every error raised by the core derives from SlipStitchError, so the CLI can
turn any of them into a one-line message and exit code 1. Nothing here is
retryable: each operation is a pure function over resident data.
"""


class SlipStitchError(Exception):
    """Base class for all slipstitch errors."""


class MalformedImage(SlipStitchError):
    """Raster dimensions cannot hold a pattern (or a colour column + foundation row)."""


class ShapeMismatch(SlipStitchError):
    """Row colours disagree with the grid's row count, or the grid is ragged/empty."""


class InvalidColour(SlipStitchError, ValueError):
    """A colour string that is not #rrggbb / #rgb hex."""


class PatternFileError(SlipStitchError):
    """Malformed .slip pattern text."""

    def __init__(self, message: str, line: int | None = None):
        self.line = line
        if line is not None:
            message = f'line {line}: {message}'
        super().__init__(message)


class EditorError(SlipStitchError):
    """Out-of-range edit or invalid import-session transition."""
