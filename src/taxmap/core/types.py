"""Core type definitions shared across all taxmap modules."""

from __future__ import annotations

from typing import TypeAlias

RGB: TypeAlias = tuple[int, int, int]
"""An sRGB colour with integer channels in 0-255."""

Sample: TypeAlias = tuple[float, ...]
"""Finite values sorted ascending, duplicates allowed."""

BreakSequence: TypeAlias = tuple[float, ...]
"""Class boundaries, ascending, first = sample minimum, last = sample maximum."""

Palette: TypeAlias = tuple[RGB, ...]
"""One colour per class, ordered from the lowest class to the highest."""

# Returned by classify() for values that fall in no class
UNCLASSIFIED = -1

# Neutral grey for missing or out-of-range values
FALLBACK_COLOR: RGB = (128, 128, 128)
