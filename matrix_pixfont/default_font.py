"""Built-in 3x5 pixel font for LED matrix displays.

Uppercase letters, digits and a few punctuation marks; there are no lowercase
glyphs, so the module-level draw_string and measure_string upper-case their
text first. Space is left out on purpose: in variable width mode a missing
glyph advances by the fallback width, which doubles as the space width.
"""

from typing import Any

from .pixel_font import PixelFont
from .surfaces import PixelSurface

GLYPHS_3X5 = {
    'A': (" X ", "X X", "XXX", "X X", "X X"),
    'B': ("XX ", "X X", "XX ", "X X", "XX "),
    'C': (" XX", "X  ", "X  ", "X  ", " XX"),
    'D': ("XX ", "X X", "X X", "X X", "XX "),
    'E': ("XXX", "X  ", "XX ", "X  ", "XXX"),
    'F': ("XXX", "X  ", "XX ", "X  ", "X  "),
    'G': (" XX", "X  ", "X X", "X X", " XX"),
    'H': ("X X", "X X", "XXX", "X X", "X X"),
    'I': ("XXX", " X ", " X ", " X ", "XXX"),
    'J': ("  X", "  X", "  X", "X X", " X "),
    'K': ("X X", "X X", "XX ", "X X", "X X"),
    'L': ("X  ", "X  ", "X  ", "X  ", "XXX"),
    'M': ("X X", "XXX", "XXX", "X X", "X X"),
    'N': ("XX ", "X X", "X X", "X X", "X X"),
    'O': (" X ", "X X", "X X", "X X", " X "),
    'P': ("XX ", "X X", "XX ", "X  ", "X  "),
    'Q': (" X ", "X X", "X X", "XXX", " XX"),
    'R': ("XX ", "X X", "XX ", "X X", "X X"),
    'S': (" XX", "X  ", " X ", "  X", "XX "),
    'T': ("XXX", " X ", " X ", " X ", " X "),
    'U': ("X X", "X X", "X X", "X X", "XXX"),
    'V': ("X X", "X X", "X X", "X X", " X "),
    'W': ("X X", "X X", "XXX", "XXX", "X X"),
    'X': ("X X", "X X", " X ", "X X", "X X"),
    'Y': ("X X", "X X", " X ", " X ", " X "),
    'Z': ("XXX", "  X", " X ", "X  ", "XXX"),
    '0': ("XXX", "X X", "X X", "X X", "XXX"),
    '1': (" X ", "XX ", " X ", " X ", "XXX"),
    '2': ("XX ", "  X", " X ", "X  ", "XXX"),
    '3': ("XX ", "  X", " X ", "  X", "XX "),
    '4': ("X X", "X X", "XXX", "  X", "  X"),
    '5': ("XXX", "X  ", "XX ", "  X", "XX "),
    '6': (" XX", "X  ", "XXX", "X X", "XXX"),
    '7': ("XXX", "  X", " X ", " X ", " X "),
    '8': ("XXX", "X X", "XXX", "X X", "XXX"),
    '9': ("XXX", "X X", "XXX", "  X", "XX "),
    # Punctuation - narrow glyphs keep their ink at the left edge
    '.': ("", "", "", "", "X"),
    ':': ("", "X", "", "X", ""),
    '!': ("X", "X", "X", "", "X"),
    '-': ("", "", "XXX", "", ""),
    '?': ("XX ", "  X", " X ", "", " X "),
    '/': ("  X", "  X", " X ", "X  ", "X  "),
}

DEFAULT_FONT = PixelFont.from_glyphs(3, 5, GLYPHS_3X5, variable_width=True)


def draw_string(surface: PixelSurface, x: int, y: int, text: str, color: Any) -> int:
    """Draw upper-cased text with DEFAULT_FONT, returning the final cursor x."""
    return DEFAULT_FONT.draw_string(surface, x, y, text.upper(), color)


def measure_string(text: str) -> int:
    """Width draw_string would advance for text, e.g. to size a buffer first."""
    return DEFAULT_FONT.measure_string(text.upper())
