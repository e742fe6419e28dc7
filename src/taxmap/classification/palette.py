"""Green-yellow-red colour ramp for natural-break classes."""

from __future__ import annotations

import math

from taxmap.core.types import RGB, Palette

# Channel values at the ramp's anchor colours
_GREEN = 200
_YELLOW_RED = 204


def generate_palette(num_classes: int) -> Palette:
    """Return ``num_classes`` colours running from green through yellow to red.

    The ramp depends only on the class count, never on the data, so the
    same count always produces the same colours.
    """
    if num_classes < 1:
        raise ValueError(f"num_classes must be >= 1, got {num_classes!r}")

    colors: list[RGB] = []
    for i in range(num_classes):
        ratio = i / (num_classes - 1) if num_classes > 1 else 0.0
        if ratio < 0.5:
            local = ratio * 2
            red = math.floor(local * _YELLOW_RED)
            green = _GREEN
        else:
            local = (ratio - 0.5) * 2
            red = _YELLOW_RED + math.floor(local * (255 - _YELLOW_RED))
            green = _GREEN - math.floor(local * _GREEN)
        colors.append((red, green, 0))
    return tuple(colors)


def rgb_to_hex(rgb: RGB) -> str:
    """Format a colour as ``#rrggbb``."""
    return "#" + "".join(f"{channel:02x}" for channel in rgb)


def rgb_to_css(rgb: RGB) -> str:
    """Format a colour as a CSS ``rgb(r, g, b)`` function."""
    red, green, blue = rgb
    return f"rgb({red}, {green}, {blue})"
