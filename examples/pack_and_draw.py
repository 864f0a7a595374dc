"""Pack a small font, save it, reload it and draw with it.

Writes tiny_font.json and tiny_font.png next to this script.
"""

import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from matrix_pixfont import (PixelFont, StringDrawable, TextComponent,
                            load_font, save_font)

logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s.%(msecs)03d - %(name)s - %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)

ARROWS = {
    '<': ["   X ", "  X  ", " X   ", "  X  ", "   X "],
    '>': [" X   ", "  X  ", "   X ", "  X  ", " X   "],
    '^': ["  X  ", " X X ", "X   X", "     ", "     "],
    'v': ["     ", "     ", "X   X", " X X ", "  X  "],
    'o': ["     ", " XXX ", " X X ", " XXX ", "     "],
}


def main():
    out_dir = Path(__file__).parent
    font = PixelFont.from_glyphs(5, 5, ARROWS, variable_width=True)

    json_path = out_dir / "tiny_font.json"
    save_font(font, json_path)
    font = load_font(json_path)

    banner = StringDrawable()
    font.draw_string(banner, 0, 0, "<o^v>", None)
    print(banner.prefix_string("# "))

    text = TextComponent("<o> ^v", font=font, fgcolor=(0, 255, 128), padding=1)
    png_path = out_dir / "tiny_font.png"
    text.render(0.0).to_image().save(png_path)
    logger.info(f"Wrote {png_path} ({text.width}x{text.height})")


if __name__ == "__main__":
    main()
