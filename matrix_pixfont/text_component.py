"""Bitmap text component backed by a packed PixelFont."""

from typing import Tuple

from .component import Component, cache_with_dict
from .default_font import DEFAULT_FONT
from .pixel_font import PixelFont
from .render_buffer import RenderBuffer


class TextComponent(Component):
    """
    Single line of pixel font text.

    Sized from the font's measure_string (without the trailing glyph gap) plus
    padding on every side. Characters missing from the font render as blank
    space of the font's fallback width.
    """

    def __init__(
        self,
        text: str,
        font: PixelFont = DEFAULT_FONT,
        fgcolor: Tuple[int, int, int] = (255, 255, 255),
        bgcolor: Tuple[int, int, int] | None = None,
        padding: int = 0,
    ):
        """
        Initialize TextComponent.

        Args:
            text: Text to render
            font: Packed font to draw with
            fgcolor: Foreground (text) color RGB tuple
            bgcolor: Background color RGB tuple (None = transparent)
            padding: Padding around text in pixels
        """
        super().__init__()
        self.font = font
        self.fgcolor = fgcolor
        self.bgcolor = bgcolor
        self.padding = padding
        self.set_text(text)

    def _text_width(self) -> int:
        if not self.text:
            return 0
        return max(0, self.font.measure_string(self.text) - self.font.spacing)

    def set_text(self, text: str):
        """Update text content."""
        self.text = text

    @property
    def width(self) -> int:
        return self._text_width() + 2 * self.padding

    @property
    def height(self) -> int:
        return self.font.cell_height + 2 * self.padding

    def compute_state(self, time: float) -> dict:
        return {
            "text": self.text,
            "font": id(self.font),
            "fgcolor": self.fgcolor,
            "bgcolor": self.bgcolor,
            "padding": self.padding,
            "variable_width": self.font.variable_width,
        }

    @cache_with_dict(maxsize=128)
    def _render_cached(self, state: dict, time: float) -> RenderBuffer:
        buffer = RenderBuffer(self.width, self.height)

        if self.bgcolor is not None:
            buffer.clear(self.bgcolor)

        self.font.draw_string(buffer, self.padding, self.padding, self.text, self.fgcolor)
        return buffer
