"""Glyph packer - compresses 1-bit glyph matrices into lanes of uint32 words.

Layout: each glyph row occupies an 8-bit-aligned lane of a 32-bit word, with
the leftmost pixel in the least significant bit of the lane. Depending on the
cell width, 4, 2 or 1 glyphs share a word. Rows of the same glyph group are
stored in consecutive words, so a group of glyphs takes ``cell_height`` words.

Example (5x5 cell, four glyphs per word, top byte of row 0 shown first)::

             24      16       8       0
              |       |       |       |
    0      DDDD    CCC     BBBB     A     == 0x0f0e0f04
    1     D   D   C   C   B   B    A A    == 0x1111110a
    ...

The charmap offset of a glyph is ``(first_word_index << 2) | lane``.
"""

import logging
from collections.abc import Mapping
from typing import Any, Dict, Tuple

import numpy as np

from .errors import BitOverflow, InvalidDimension, InvalidGlyph

logger = logging.getLogger(__name__)

# Character that marks an ink cell in string rows
INK_MARKER = "X"

MAX_CELL_WIDTH = 32
MAX_CELL_HEIGHT = 255
MAX_OFFSET = 0xFFFF
MAX_CODE_POINT = 0x10FFFF

WORD_BITS = 32
LANE_BITS = 8
LANES_PER_WORD = WORD_BITS // LANE_BITS


def check_dimensions(cell_width: int, cell_height: int):
    """Raise InvalidDimension unless 1 <= width <= 32 and 1 <= height <= 255."""
    if not 1 <= cell_width <= MAX_CELL_WIDTH:
        raise InvalidDimension(
            f"Cell width {cell_width} out of range (1-{MAX_CELL_WIDTH})"
        )
    if not 1 <= cell_height <= MAX_CELL_HEIGHT:
        raise InvalidDimension(
            f"Cell height {cell_height} out of range (1-{MAX_CELL_HEIGHT})"
        )


def glyph_layout(cell_width: int) -> Tuple[int, int, int]:
    """
    Compute how glyphs of the given width share a word.

    Returns:
        (bytes_per_glyph, glyphs_per_word, lane_stride), one of
        (1, 4, 1), (2, 2, 2), (3, 1, 4) or (4, 1, 4)
    """
    bytes_per_glyph = (cell_width + LANE_BITS - 1) // LANE_BITS
    glyphs_per_word = LANES_PER_WORD // bytes_per_glyph
    lane_stride = LANES_PER_WORD // glyphs_per_word
    return bytes_per_glyph, glyphs_per_word, lane_stride


def char_code(key: Any) -> int:
    """Normalize a glyph key (int code point or one-character str) to an int."""
    if isinstance(key, str):
        if len(key) != 1:
            raise InvalidGlyph(f"Glyph key {key!r} must be a single character")
        return ord(key)
    if isinstance(key, (int, np.integer)) and not isinstance(key, bool):
        if not 0 <= key <= MAX_CODE_POINT:
            raise InvalidGlyph(f"Character code {key} out of range")
        return int(key)
    raise InvalidGlyph(f"Unsupported glyph key {key!r}")


def glyph_cells(matrix: Any, cell_width: int, cell_height: int,
                ink: str = INK_MARKER) -> np.ndarray:
    """
    Convert one glyph's input matrix into a (cell_height, cell_width) bool array.

    Accepted matrices:
    - sparse mapping {row_index: "X  X"} (absent rows are blank)
    - sequence of row strings, or a multi-line string
    - 2D numpy array or nested sequence of 0/1 values (rows may be ragged)

    Short rows are padded with no-ink. Rows and columns past the cell are ignored.
    """
    cells = np.zeros((cell_height, cell_width), dtype=bool)

    if isinstance(matrix, str):
        matrix = matrix.splitlines()
    if isinstance(matrix, Mapping):
        rows = matrix.items()
    else:
        rows = enumerate(matrix)

    clipped = False
    for y, row in rows:
        if isinstance(row, str):
            flags = [ch == ink for ch in row]
        else:
            flags = [bool(v) for v in np.ravel(row)]
        if not 0 <= y < cell_height:
            clipped = clipped or any(flags)
            continue
        if len(flags) > cell_width:
            clipped = clipped or any(flags[cell_width:])
            flags = flags[:cell_width]
        cells[y, :len(flags)] = flags

    if clipped:
        logger.warning(
            f"Glyph exceeds {cell_width}x{cell_height} cell, extra cells ignored"
        )
    return cells


def pack_font(cell_width: int, cell_height: int, glyphs: Mapping,
              ink: str = INK_MARKER) -> Tuple[np.ndarray, Dict[int, int]]:
    """
    Pack glyph matrices into a uint32 word array and a charmap.

    Glyphs are processed in ascending character code order, so the output
    depends only on the glyph set and never on the mapping's iteration order.

    Args:
        cell_width: Glyph cell width in pixels (1-32)
        cell_height: Glyph cell height in pixels (1-255)
        glyphs: Mapping of character code (int or one-char str) to glyph matrix
        ink: Character that marks ink in string rows

    Returns:
        (data, charmap): uint32 array of length blocks * cell_height, and
        {code: (word_index << 2) | lane}

    Raises:
        InvalidDimension: If cell dimensions are out of range
        InvalidGlyph: If a key is not a character code or two keys collide
        BitOverflow: If a lane or offset does not fit its field
    """
    check_dimensions(cell_width, cell_height)

    by_code: Dict[int, Any] = {}
    for key, matrix in glyphs.items():
        code = char_code(key)
        if code in by_code:
            raise InvalidGlyph(f"Duplicate glyph for character code {code}")
        by_code[code] = matrix

    bytes_per_glyph, glyphs_per_word, lane_stride = glyph_layout(cell_width)
    blocks_needed = (len(by_code) + glyphs_per_word - 1) // glyphs_per_word
    data = np.zeros(blocks_needed * cell_height, dtype=np.uint32)
    charmap: Dict[int, int] = {}

    columns = np.arange(cell_width, dtype=np.uint64)

    # u8 counts 8-bit lanes consumed across the whole font
    u8 = 0
    for code in sorted(by_code):
        block_index = (u8 // LANES_PER_WORD) * cell_height
        byte_group = u8 % LANES_PER_WORD

        offset = (block_index << 2) | byte_group
        if offset > MAX_OFFSET:
            raise BitOverflow(
                f"Charmap offset {offset:#x} for code {code} exceeds 16 bits"
            )
        start_bit = byte_group * LANE_BITS
        if start_bit + cell_width > WORD_BITS:
            raise BitOverflow(
                f"Glyph {code} lane at bit {start_bit} overflows a {WORD_BITS}-bit word"
            )
        charmap[code] = offset

        cells = glyph_cells(by_code[code], cell_width, cell_height, ink)
        weights = np.uint64(1) << (columns + np.uint64(start_bit))
        rows = cells.astype(np.uint64) @ weights
        data[block_index:block_index + cell_height] |= rows.astype(np.uint32)

        u8 += lane_stride

    logger.debug(
        f"Packed {len(charmap)} glyphs ({cell_width}x{cell_height}, "
        f"{glyphs_per_word}/word) into {len(data)} words"
    )
    return data, charmap


def decode_glyph(data: np.ndarray, offset: int, cell_width: int,
                 cell_height: int) -> np.ndarray:
    """Decode the (cell_height, cell_width) bool matrix stored at a charmap offset."""
    block_index = offset >> 2
    bit_base = (offset & 0b11) * LANE_BITS
    rows = np.asarray(data[block_index:block_index + cell_height], dtype=np.uint32)
    shifts = np.arange(bit_base, bit_base + cell_width, dtype=np.uint32)
    return ((rows[:, None] >> shifts) & np.uint32(1)).astype(bool)
