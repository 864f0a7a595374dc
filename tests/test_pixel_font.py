#!/usr/bin/env python3
"""
Tests for PixelFont drawing and measuring.

What matters:
1. Fixed vs variable advance widths, including missing glyphs
2. draw_glyph and measure_glyph agree
3. Only ink pixels reach the surface, at the right coordinates
4. draw_string / measure_string cursor arithmetic
5. Corrupt data is rejected at construction, never at draw time
6. Font data and charmap are read-only
"""

import os
import sys

import numpy as np

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from matrix_pixfont import (CorruptFont, InvalidDimension, PixelFont,
                            RenderBuffer, StringDrawable, pack_font)

GLYPHS = {
    'A': ["  X  ", " X X ", "X   X", "XXXXX", "X   X"],
    'B': ["XXXX ", "X   X", "XXXX ", "X   X", "XXXX "],
    'i': ["X", "", "X", "X", "X"],
    '.': {4: "X"},
    ' ': {},
}


class RecordingSurface:
    """Surface that records every set_pixel call."""

    def __init__(self):
        self.calls = []

    def set_pixel(self, x, y, color):
        self.calls.append((x, y, color))

    @property
    def pixels(self):
        return {(x, y) for x, y, _ in self.calls}


def make_font(**kwargs):
    return PixelFont.from_glyphs(5, 5, GLYPHS, **kwargs)


def test_fixed_width_measure():
    """Test fixed mode reports cell width for every glyph."""
    print("\n=== Test: Fixed Width Measure ===")

    font = make_font()
    assert not font.variable_width
    for char in GLYPHS:
        assert font.measure_glyph(char) == (True, 5), char
    assert font.measure_glyph('Z') == (False, 5)
    assert font.measure_glyph(ord('A')) == (True, 5)

    print("✓ Fixed mode always advances cell_width")


def test_variable_width_measure():
    """Test variable mode reports ink extent plus spacing."""
    print("\n=== Test: Variable Width Measure ===")

    font = make_font(variable_width=True)
    assert font.measure_glyph('A') == (True, 5 + 1)
    assert font.measure_glyph('B') == (True, 5 + 1)
    assert font.measure_glyph('i') == (True, 1 + 1)
    assert font.measure_glyph('.') == (True, 1 + 1)
    # Blank glyph measures to the minimum
    assert font.measure_glyph(' ') == (True, 1)

    print("✓ Variable mode measures ink extent")


def test_unknown_glyph_advance():
    """Test missing glyphs advance max(3, width // 3) or cell_width."""
    print("\n=== Test: Unknown Glyph Advance ===")

    font = make_font()
    assert font.measure_glyph('?') == (False, 5)

    font.set_variable_width(True)
    assert font.variable_advance_width == 3
    assert font.measure_glyph('?') == (False, 3)

    font.set_variable_width(False)
    assert font.measure_glyph('?') == (False, 5)

    wide = PixelFont.from_glyphs(12, 2, {'W': ["X" * 12]}, variable_width=True)
    assert wide.measure_glyph('?') == (False, 4)

    tuned = make_font(variable_width=True, fallback_advance=2)
    assert tuned.measure_glyph('?') == (False, 2)

    print("✓ Missing glyph advance follows the mode")


def test_draw_matches_measure():
    """Test draw_glyph returns exactly what measure_glyph returns."""
    print("\n=== Test: Draw Matches Measure ===")

    for variable in (False, True):
        font = make_font(variable_width=variable)
        for char in list(GLYPHS) + ['Z', '?']:
            surface = RecordingSurface()
            assert font.draw_glyph(surface, 0, 0, char, 1) == font.measure_glyph(char), \
                f"{char!r} variable={variable}"

    print("✓ draw_glyph and measure_glyph agree")


def test_draw_glyph_pixels():
    """Test only ink pixels are set, offset by (x, y)."""
    print("\n=== Test: Draw Glyph Pixels ===")

    font = make_font()

    drawable = StringDrawable()
    assert font.draw_glyph(drawable, 0, 0, 'A', None) == (True, 5)
    assert str(drawable) == "  X\n X X\nX   X\nXXXXX\nX   X\n"

    surface = RecordingSurface()
    font.draw_glyph(surface, 10, 20, 'A', (255, 0, 0))
    assert (12, 20) in surface.pixels
    assert (10, 20) not in surface.pixels
    assert len(surface.calls) == 12
    assert all(color == (255, 0, 0) for _, _, color in surface.calls)

    missing = RecordingSurface()
    assert font.draw_glyph(missing, 0, 0, 'Z', 1) == (False, 5)
    assert missing.calls == []

    print("✓ Ink pixels drawn at the right offsets")


def test_draw_leaves_background():
    """Test unset bits never overwrite existing pixels."""
    print("\n=== Test: Draw Leaves Background ===")

    font = make_font()
    buffer = RenderBuffer(8, 8)
    buffer.clear((0, 0, 255))
    font.draw_glyph(buffer, 0, 0, 'A', (255, 255, 255))

    assert buffer.get_pixel(2, 0) == (255, 255, 255, 255)
    assert buffer.get_pixel(0, 0) == (0, 0, 255, 255)
    assert buffer.get_pixel(7, 7) == (0, 0, 255, 255)

    print("✓ Background untouched")


def test_draw_string_cursor():
    """Test cursor advances by advance + spacing, missing glyphs included."""
    print("\n=== Test: Draw String Cursor ===")

    font = make_font()
    surface = RecordingSurface()
    assert font.draw_string(surface, 0, 0, "AB", 1) == 12
    assert font.draw_string(RecordingSurface(), 3, 0, "AZB", 1) == 3 + 18
    assert font.draw_string(RecordingSurface(), 7, 0, "", 1) == 7

    font.set_variable_width(True)
    # i: 2 + 1, missing: 3 + 1, A: 6 + 1
    assert font.draw_string(RecordingSurface(), 0, 0, "i?A", 1) == 3 + 4 + 7

    print("✓ Cursor arithmetic correct")


def test_measure_string_matches_draw():
    """Test measure_string equals the distance draw_string moves the cursor."""
    print("\n=== Test: Measure String Matches Draw ===")

    for variable in (False, True):
        font = make_font(variable_width=variable)
        for text in ("", "A", "AB i.", "ZZZ", "B A?i"):
            final_x = font.draw_string(RecordingSurface(), 4, 0, text, 1)
            assert font.measure_string(text) == final_x - 4, f"{text!r}"

    print("✓ measure_string matches draw_string")


def test_custom_spacing():
    """Test spacing is a per-font parameter."""
    print("\n=== Test: Custom Spacing ===")

    font = make_font(spacing=3)
    assert font.measure_string("AB") == 2 * (5 + 3)

    print("✓ Spacing parameter respected")


def test_idempotent_drawing():
    """Test drawing the same text twice gives identical pixels."""
    print("\n=== Test: Idempotent Drawing ===")

    font = make_font(variable_width=True)
    first = RenderBuffer(40, 5)
    second = RenderBuffer(40, 5)
    font.draw_string(first, 0, 0, "AB.i A", (0, 255, 0))
    font.draw_string(second, 0, 0, "AB.i A", (0, 255, 0))

    assert first.data.tobytes() == second.data.tobytes()

    print("✓ Drawing is idempotent")


def test_glyph_round_trip():
    """Test decoded glyphs reproduce their input."""
    print("\n=== Test: Glyph Round Trip ===")

    font = make_font()
    cells = font.glyph('A')
    assert cells.shape == (5, 5)
    assert ["".join("X" if c else " " for c in row) for row in cells] == GLYPHS['A']
    assert not font.glyph(' ').any()
    assert font.glyph('Z') is None

    assert 'A' in font and 'Z' not in font
    assert len(font) == len(GLYPHS)

    print("✓ Glyphs round trip")


def test_read_only():
    """Test data and charmap cannot be mutated."""
    print("\n=== Test: Read Only ===")

    font = make_font()

    try:
        font.data[0] = 1
    except ValueError:
        pass
    else:
        raise AssertionError("data should be read-only")

    try:
        font.charmap[ord('Z')] = 0
    except TypeError:
        pass
    else:
        raise AssertionError("charmap should be read-only")

    # Caller's containers are copied, not referenced
    data, charmap = pack_font(5, 5, GLYPHS)
    font = PixelFont(5, 5, charmap, data)
    data[:] = 0
    charmap.clear()
    assert font.glyph('A').any()

    print("✓ Font is immutable")


def test_corrupt_fonts_rejected():
    """Test inconsistent data is rejected at construction."""
    print("\n=== Test: Corrupt Fonts Rejected ===")

    cases = [
        # (width, height, charmap, data)
        (5, 5, {65: 0}, [0] * 7),                   # length not a multiple of height
        (5, 5, {65: 5 << 2}, [0] * 5),              # offset past end of data
        (5, 5, {65: 1 << 2}, [0] * 10),             # offset not block-aligned
        (9, 1, {65: 3}, [0]),                       # lane overflows the word
        (5, 1, {65: 0}, [1 << 32]),                 # word wider than 32 bits
        (5, 1, {65: 0}, [-1]),                      # negative word
        (5, 1, {65: 0x10000}, [0]),                 # offset wider than 16 bits
        (5, 1, {'A': 0, 65: 1}, [0]),               # two keys naming the same code
        (5, 1, {65: 0}, [1.9]),                     # non-integral word
        (5, 1, {65: 0}, ["1"]),                     # non-numeric word
        (5, 1, {65: None}, [0]),                    # non-numeric offset
        (5, 1, {65: 0.0}, [0]),                     # non-integral offset
        (5, 1, {65: 0}, None),                      # data not iterable
        (5, 1, [(65, 0)], [0]),                     # charmap not a mapping
    ]
    for width, height, charmap, data in cases:
        try:
            PixelFont(width, height, charmap, data)
        except CorruptFont:
            pass
        else:
            raise AssertionError(f"{width}x{height} {charmap} {data} should be corrupt")

    for width, height in ((0, 5), (33, 5), (5, 0), (5, 256)):
        try:
            PixelFont(width, height, {}, [])
        except InvalidDimension:
            pass
        else:
            raise AssertionError(f"{width}x{height} should be invalid")

    print("✓ Corrupt fonts raise CorruptFont")


def test_numpy_data_accepted():
    """Test data may be any iterable of ints, numpy arrays included."""
    print("\n=== Test: Numpy Data Accepted ===")

    data, charmap = pack_font(5, 5, GLYPHS)
    from_list = PixelFont(5, 5, charmap, [int(w) for w in data])
    from_array = PixelFont(5, 5, {chr(c): o for c, o in charmap.items()}, data)

    assert np.array_equal(from_list.data, from_array.data)
    assert dict(from_list.charmap) == dict(from_array.charmap)

    print("✓ List and array data are equivalent")


if __name__ == "__main__":
    print("=" * 60)
    print("PIXEL FONT TESTS")
    print("=" * 60)

    try:
        test_fixed_width_measure()
        test_variable_width_measure()
        test_unknown_glyph_advance()
        test_draw_matches_measure()
        test_draw_glyph_pixels()
        test_draw_leaves_background()
        test_draw_string_cursor()
        test_measure_string_matches_draw()
        test_custom_spacing()
        test_idempotent_drawing()
        test_glyph_round_trip()
        test_read_only()
        test_corrupt_fonts_rejected()
        test_numpy_data_accepted()

        print("\n" + "=" * 60)
        print("ALL TESTS PASSED ✓")
        print("=" * 60)
    except AssertionError as e:
        print(f"\n✗ TEST FAILED: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)
