"""RenderBuffer - Fixed-size RGBA pixel surface for drawing text."""

from typing import Tuple

import numpy as np
from PIL import Image


class RenderBuffer:
    """Fixed-size RGBA pixel buffer using numpy. Satisfies the PixelSurface protocol."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        # Shape: (height, width, 4), RGBA, uint8
        self.data = np.zeros((height, width, 4), dtype=np.uint8)
        self.data[:, :, 3] = 255

    def set_pixel(self, x: int, y: int, color: Tuple[int, int, int] | Tuple[int, int, int, int]):
        """Set pixel at (x, y) to color (r, g, b) or (r, g, b, a). Out-of-bounds pixels are clipped."""
        if 0 <= x < self.width and 0 <= y < self.height:
            if len(color) == 3:
                self.data[y, x, :3] = color
            else:
                self.data[y, x] = color

    def get_pixel(self, x: int, y: int) -> Tuple[int, int, int, int]:
        """Get pixel color at (x, y) as (r, g, b, a)."""
        if 0 <= x < self.width and 0 <= y < self.height:
            return tuple(int(v) for v in self.data[y, x])
        return (0, 0, 0, 0)

    def clear(self, color: Tuple[int, int, int] | Tuple[int, int, int, int] = (0, 0, 0, 0)):
        """Clear buffer to color (r, g, b) or (r, g, b, a). Default is transparent black."""
        if len(color) == 3:
            self.data[:, :, :3] = color
            self.data[:, :, 3] = 255
        else:
            self.data[:, :] = color

    def to_image(self) -> Image.Image:
        """Convert to a Pillow RGBA image, e.g. to save a PNG preview."""
        return Image.fromarray(self.data)
