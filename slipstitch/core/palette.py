"""Colour helpers: parsing, normalisation, and the editor's default palette.

Colours are carried everywhere as canonical lower-case '#rrggbb' strings.
Equality is exact string equality; there is no colour-distance tolerance
anywhere in slipstitch.
"""

import re

from slipstitch.core.errors import InvalidColour

BLACK = '#000000'
WHITE = '#ffffff'

# Colour shown by never-knitted stitches in the editor, and the foundation default.
DEFAULT_FOUNDATION = '#cccccc'
DEFAULT_ROW_COLOUR = BLACK

# Fixed-size swatch set offered by the editor. The core never checks membership.
DEFAULT_PALETTE: tuple[str, str, str, str] = (BLACK, WHITE, '#cc3333', '#3366cc')

_HEX6 = re.compile(r'^#?([0-9a-fA-F]{6})$')
_HEX3 = re.compile(r'^#?([0-9a-fA-F]{3})$')


def normalise(colour: str) -> str:
    """Return the canonical '#rrggbb' form of a hex colour string.

    Accepts '#rrggbb', 'rrggbb', '#rgb' and 'rgb' in any case.
    Raises InvalidColour for anything else.
    """
    text = colour.strip() if isinstance(colour, str) else ''
    m = _HEX6.match(text)
    if m:
        return '#' + m.group(1).lower()
    m = _HEX3.match(text)
    if m:
        return '#' + ''.join(ch * 2 for ch in m.group(1).lower())
    raise InvalidColour(f'Invalid colour: {colour!r} (expected #rrggbb)')


def hex_to_rgb(colour: str) -> tuple[int, int, int]:
    """Convert a hex colour string to an (r, g, b) tuple."""
    h = normalise(colour)
    return (int(h[1:3], 16), int(h[3:5], 16), int(h[5:7], 16))


def rgb_to_hex(r: int, g: int, b: int) -> str:
    return f'#{int(r):02x}{int(g):02x}{int(b):02x}'

