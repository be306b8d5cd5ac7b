# backend/pages/contrast.py
import math
import re
from typing import Any

BLACK = "#000000"
WHITE = "#ffffff"

_HEX_PREFIX = re.compile(r"^[0-9a-fA-F]+")


def _parse_channel(chunk: str) -> float:
    # parseInt(chunk, 16): longest leading hex run, NaN when there is none
    match = _HEX_PREFIX.match(chunk)
    return float(int(match.group(0), 16)) if match else math.nan


def contrast_color(hex_color: Any) -> str:
    """
    Picks black or white text for the given background colour.

    Malformed or short colours give NaN channels, and NaN luminance is
    never "> 0.5", so they fall back to white text.
    """
    if not hex_color:
        return WHITE
    if not isinstance(hex_color, str):
        return WHITE

    value = hex_color[1:] if hex_color.startswith("#") else hex_color

    r = _parse_channel(value[0:2])
    g = _parse_channel(value[2:4])
    b = _parse_channel(value[4:6])

    luminance = (0.299 * r + 0.587 * g + 0.114 * b) / 255
    return BLACK if luminance > 0.5 else WHITE
