"""matrix-pixfont - Packed 1-bit pixel fonts for LED matrices and other pixel surfaces."""

from .component import Component, cache_with_dict
from .default_font import DEFAULT_FONT, draw_string, measure_string
from .errors import (BitOverflow, CorruptFont, InvalidDimension, InvalidGlyph,
                     PixFontError)
from .font_io import font_from_dict, font_to_dict, load_font, save_font
from .glyph_packer import decode_glyph, glyph_layout, pack_font
from .pixel_font import DEFAULT_SPACING, PixelFont
from .render_buffer import RenderBuffer
from .surfaces import PixelSurface, StringDrawable
from .text_component import TextComponent

__all__ = [
    "PixelFont",
    "pack_font",
    "decode_glyph",
    "glyph_layout",
    "DEFAULT_FONT",
    "DEFAULT_SPACING",
    "draw_string",
    "measure_string",
    "PixelSurface",
    "StringDrawable",
    "RenderBuffer",
    "Component",
    "cache_with_dict",
    "TextComponent",
    "font_to_dict",
    "font_from_dict",
    "save_font",
    "load_font",
    "PixFontError",
    "InvalidDimension",
    "InvalidGlyph",
    "BitOverflow",
    "CorruptFont",
]
