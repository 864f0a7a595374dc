"""Exceptions raised while packing, loading, or validating pixel fonts."""


class PixFontError(ValueError):
    """Base class for all pixel font errors."""


class InvalidDimension(PixFontError):
    """Cell width outside 1-32 or cell height outside 1-255."""


class InvalidGlyph(PixFontError):
    """Glyph key is not a usable character code, or two keys collide."""


class BitOverflow(PixFontError):
    """A glyph lane or charmap offset does not fit its fixed-width field."""


class CorruptFont(PixFontError):
    """Encoded font data is inconsistent with its charmap or dimensions."""
