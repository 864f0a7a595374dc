"""PixelFont - immutable packed bitmap font with draw and measure operations."""

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Iterable, Tuple

import numpy as np

from .errors import CorruptFont, InvalidGlyph
from .glyph_packer import (INK_MARKER, LANE_BITS, MAX_OFFSET, WORD_BITS,
                           check_dimensions, char_code, decode_glyph,
                           pack_font)
from .surfaces import PixelSurface

logger = logging.getLogger(__name__)

# Gap in pixels added after every glyph, found or not
DEFAULT_SPACING = 1

# Missing glyphs in variable width mode advance by max(3, cell_width // 3)
MIN_FALLBACK_ADVANCE = 3
FALLBACK_ADVANCE_DIVISOR = 3

MAX_WORD = 0xFFFFFFFF


def _as_int(value: Any, what: str) -> int:
    if isinstance(value, (int, np.integer)) and not isinstance(value, bool):
        return int(value)
    raise CorruptFont(f"{what} must be an integer, got {value!r}")


class PixelFont:
    """
    Packed 1-bit pixel font.

    Glyph bitmaps live in a read-only uint32 array (see glyph_packer for the
    layout); the charmap maps character codes to offsets into it. The data is
    validated once on construction, so drawing never indexes out of bounds.

    Two advance modes:
    - fixed (default): every glyph advances cell_width
    - variable: present glyphs advance by their ink extent plus spacing,
      missing glyphs by max(3, cell_width // 3)
    """

    def __init__(
        self,
        cell_width: int,
        cell_height: int,
        charmap: Mapping,
        data: Iterable[int],
        variable_width: bool = False,
        spacing: int = DEFAULT_SPACING,
        fallback_advance: int | None = None,
    ):
        """
        Initialize PixelFont.

        Args:
            cell_width: Glyph cell width in pixels (1-32)
            cell_height: Glyph cell height in pixels (1-255)
            charmap: Mapping of character code (int or one-char str) to 16-bit offset
            data: Packed uint32 words, a multiple of cell_height long
            variable_width: Report ink width instead of cell_width
            spacing: Pixel gap added after every glyph
            fallback_advance: Advance for missing glyphs in variable width mode
                (None = max(3, cell_width // 3))

        Raises:
            InvalidDimension: If cell dimensions are out of range
            CorruptFont: If data and charmap are inconsistent
        """
        check_dimensions(cell_width, cell_height)
        self._cell_width = cell_width
        self._cell_height = cell_height
        self._spacing = spacing
        self._fallback_advance = fallback_advance

        self._data = self._validate_data(data, cell_height)
        self._charmap = MappingProxyType(self._validate_charmap(charmap))

        self._variable_width = False
        self.variable_advance_width = cell_width
        self.set_variable_width(variable_width)

        logger.debug(
            f"Loaded {len(self._charmap)} glyphs ({cell_width}x{cell_height}, "
            f"{len(self._data)} words)"
        )

    @classmethod
    def from_glyphs(cls, cell_width: int, cell_height: int, glyphs: Mapping,
                    ink: str = INK_MARKER, **kwargs) -> 'PixelFont':
        """Pack glyph matrices and wrap the result. Extra kwargs go to __init__."""
        data, charmap = pack_font(cell_width, cell_height, glyphs, ink=ink)
        return cls(cell_width, cell_height, charmap, data, **kwargs)

    @staticmethod
    def _validate_data(data: Iterable[int], cell_height: int) -> np.ndarray:
        try:
            words = [_as_int(word, "Data word") for word in data]
        except TypeError as e:
            raise CorruptFont(f"Data is not a sequence of words: {e}") from e
        if len(words) % cell_height != 0:
            raise CorruptFont(
                f"Data length {len(words)} is not a multiple of cell height {cell_height}"
            )
        for index, word in enumerate(words):
            if not 0 <= word <= MAX_WORD:
                raise CorruptFont(f"Word {index} ({word}) is not a uint32")
        array = np.array(words, dtype=np.uint32)
        array.setflags(write=False)
        return array

    def _validate_charmap(self, charmap: Mapping) -> dict:
        if not isinstance(charmap, Mapping):
            raise CorruptFont(f"Charmap must be a mapping, got {type(charmap).__name__}")
        validated = {}
        for key, offset in charmap.items():
            try:
                code = char_code(key)
            except InvalidGlyph as e:
                raise CorruptFont(f"Bad charmap key: {e}") from e
            offset = _as_int(offset, f"Offset for code {code}")
            if code in validated:
                raise CorruptFont(f"Duplicate charmap entry for character code {code}")
            if not 0 <= offset <= MAX_OFFSET:
                raise CorruptFont(f"Offset {offset} for code {code} is not 16-bit")

            block_index = offset >> 2
            bit_base = (offset & 0b11) * LANE_BITS
            if block_index % self._cell_height != 0:
                raise CorruptFont(
                    f"Offset {offset:#x} for code {code} is not aligned to a row block"
                )
            if block_index + self._cell_height > len(self._data):
                raise CorruptFont(
                    f"Offset {offset:#x} for code {code} points outside data "
                    f"({len(self._data)} words)"
                )
            if bit_base + self._cell_width > WORD_BITS:
                raise CorruptFont(
                    f"Lane {offset & 0b11} for code {code} overflows a "
                    f"{WORD_BITS}-bit word at width {self._cell_width}"
                )
            validated[code] = offset
        return validated

    @property
    def cell_width(self) -> int:
        return self._cell_width

    @property
    def cell_height(self) -> int:
        return self._cell_height

    @property
    def spacing(self) -> int:
        return self._spacing

    @property
    def data(self) -> np.ndarray:
        """Read-only packed words."""
        return self._data

    @property
    def charmap(self) -> Mapping:
        """Read-only {code: offset} mapping."""
        return self._charmap

    @property
    def variable_width(self) -> bool:
        return self._variable_width

    def set_variable_width(self, enabled: bool):
        """Switch between fixed and variable advance widths."""
        self._variable_width = bool(enabled)
        if not self._variable_width:
            self.variable_advance_width = self._cell_width
        elif self._fallback_advance is not None:
            self.variable_advance_width = self._fallback_advance
        else:
            self.variable_advance_width = max(
                MIN_FALLBACK_ADVANCE, self._cell_width // FALLBACK_ADVANCE_DIVISOR
            )

    def __contains__(self, char: Any) -> bool:
        return self._lookup(char) is not None

    def __len__(self) -> int:
        return len(self._charmap)

    def _lookup(self, char: Any) -> int | None:
        code = ord(char) if isinstance(char, str) and len(char) == 1 else char
        return self._charmap.get(code)

    def glyph(self, char: Any) -> np.ndarray | None:
        """Decoded (cell_height, cell_width) bool matrix for char, or None if missing."""
        offset = self._lookup(char)
        if offset is None:
            return None
        return decode_glyph(self._data, offset, self._cell_width, self._cell_height)

    def _advance(self, cells: np.ndarray) -> int:
        if not self._variable_width:
            return self._cell_width
        inked_columns = np.flatnonzero(cells.any(axis=0))
        ink_extent = int(inked_columns[-1]) + 1 if inked_columns.size else 0
        return ink_extent + self._spacing

    def measure_glyph(self, char: Any) -> Tuple[bool, int]:
        """
        Measure one glyph.

        Args:
            char: One-character string or integer character code

        Returns:
            (found, advance_width)
        """
        cells = self.glyph(char)
        if cells is None:
            return False, self.variable_advance_width
        return True, self._advance(cells)

    def draw_glyph(self, surface: PixelSurface, x: int, y: int, char: Any,
                   color: Any) -> Tuple[bool, int]:
        """
        Draw one glyph with its top-left corner at (x, y).

        Only ink pixels are set; everything else on the surface is left as-is.

        Returns:
            (found, advance_width), same as measure_glyph
        """
        cells = self.glyph(char)
        if cells is None:
            return False, self.variable_advance_width

        for yy, xx in np.argwhere(cells):
            surface.set_pixel(x + int(xx), y + int(yy), color)
        return True, self._advance(cells)

    def draw_string(self, surface: PixelSurface, x: int, y: int, text: str,
                    color: Any) -> int:
        """
        Draw text starting at (x, y) and return the final cursor x.

        Characters without a glyph are skipped but still advance the cursor.
        """
        for char in text:
            _, advance = self.draw_glyph(surface, x, y, char, color)
            x += advance + self._spacing
        return x

    def measure_string(self, text: str) -> int:
        """Width the cursor advances when drawing text, trailing gap included."""
        total = 0
        for char in text:
            _, advance = self.measure_glyph(char)
            total += advance + self._spacing
        return total

    def __repr__(self) -> str:
        mode = "variable" if self._variable_width else "fixed"
        return (
            f"PixelFont({self._cell_width}x{self._cell_height}, "
            f"{len(self._charmap)} glyphs, {mode} width)"
        )
