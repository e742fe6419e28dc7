"""Resolve a raw value to its class colour."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from taxmap.classification.assign import classify, is_missing
from taxmap.core.types import FALLBACK_COLOR, RGB, UNCLASSIFIED


def color_for(
    value: Any,
    breaks: Sequence[float],
    palette: Sequence[RGB],
    fallback: RGB = FALLBACK_COLOR,
) -> RGB:
    """Return the palette colour for *value*'s class, or *fallback* when it has none."""
    if is_missing(value) or len(breaks) < 2:
        return fallback

    index = classify(value, breaks)
    if index == UNCLASSIFIED or index >= len(palette):
        return fallback
    return palette[index]
