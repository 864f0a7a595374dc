"""Save and load packed fonts as JSON."""

import json
import logging
from pathlib import Path
from typing import Any, Dict

from .errors import CorruptFont
from .pixel_font import PixelFont

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("cell_width", "cell_height", "charmap", "data")


def font_to_dict(font: PixelFont) -> Dict[str, Any]:
    """Serialize a font to plain JSON-compatible types. Charmap keys become decimal strings."""
    return {
        "cell_width": font.cell_width,
        "cell_height": font.cell_height,
        "variable_width": font.variable_width,
        "charmap": {str(code): offset for code, offset in sorted(font.charmap.items())},
        "data": [int(word) for word in font.data],
    }


def font_from_dict(payload: Dict[str, Any], **kwargs) -> PixelFont:
    """
    Rebuild a font from font_to_dict output.

    Extra kwargs (spacing, fallback_advance) go to PixelFont, which validates
    every offset and word.

    Raises:
        CorruptFont: If fields are missing or malformed, or the data is inconsistent
    """
    if not isinstance(payload, dict):
        raise CorruptFont(f"Expected a JSON object, got {type(payload).__name__}")
    missing = [field for field in REQUIRED_FIELDS if field not in payload]
    if missing:
        raise CorruptFont(f"Missing font fields: {', '.join(missing)}")

    try:
        cell_width = int(payload["cell_width"])
        cell_height = int(payload["cell_height"])
        charmap = {int(code): offset for code, offset in payload["charmap"].items()}
    except (AttributeError, TypeError, ValueError) as e:
        raise CorruptFont(f"Malformed font field: {e}") from e

    kwargs.setdefault("variable_width", bool(payload.get("variable_width", False)))
    return PixelFont(cell_width, cell_height, charmap, payload["data"], **kwargs)


def save_font(font: PixelFont, path: str | Path):
    """Write font to path as JSON."""
    path = Path(path)
    path.write_text(json.dumps(font_to_dict(font), indent=2) + "\n", encoding="utf-8")
    logger.debug(f"Saved {font!r} to {path}")


def load_font(path: str | Path, **kwargs) -> PixelFont:
    """
    Load a font saved by save_font.

    Raises:
        CorruptFont: If the file is not valid JSON or fails validation
    """
    path = Path(path)
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise CorruptFont(f"{path} is not valid JSON: {e}") from e

    font = font_from_dict(payload, **kwargs)
    logger.debug(f"Loaded {font!r} from {path}")
    return font
