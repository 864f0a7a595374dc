"""Pixel surfaces that fonts can draw onto."""

from typing import Any, List, Protocol, runtime_checkable


@runtime_checkable
class PixelSurface(Protocol):
    """Anything with a set_pixel(x, y, color) method."""

    def set_pixel(self, x: int, y: int, color: Any) -> None:
        ...


class StringDrawable:
    """
    Text surface that records set pixels as 'X' characters.

    Grows on demand, so text of any length can be drawn without pre-sizing.
    Colors are ignored. Negative coordinates are clipped.
    """

    def __init__(self, marker: str = "X"):
        self.marker = marker
        self.lines: List[List[str]] = []

    def set_pixel(self, x: int, y: int, color: Any = None):
        if x < 0 or y < 0:
            return
        while len(self.lines) <= y:
            self.lines.append([])
        line = self.lines[y]
        if len(line) <= x:
            line.extend(" " * (x + 1 - len(line)))
        line[x] = self.marker

    def prefix_string(self, prefix: str) -> str:
        """Render all lines with prefix before each, e.g. '# ' for a comment banner."""
        return "".join(prefix + "".join(line) + "\n" for line in self.lines)

    def __str__(self) -> str:
        return self.prefix_string("")
