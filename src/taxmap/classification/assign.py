"""Map a value to the class it falls into for a given set of breaks."""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any

from taxmap.core.types import UNCLASSIFIED


def is_missing(value: Any) -> bool:
    """True for None, NaN and anything that is not a number."""
    if value is None or isinstance(value, bool):
        return True
    try:
        return math.isnan(value)
    except TypeError:
        return True


def classify(value: Any, breaks: Sequence[float]) -> int:
    """Return the zero-based class index of *value*, or ``UNCLASSIFIED`` (-1).

    Classes are lower-inclusive: class ``i`` holds ``breaks[i] <= value <
    breaks[i + 1]``. The last class is closed and also absorbs anything at
    or above its lower boundary, so the sample maximum always classifies.
    Missing values, values below ``breaks[0]`` and break sequences with
    fewer than two entries yield -1.
    """
    if is_missing(value) or len(breaks) < 2:
        return UNCLASSIFIED

    last = len(breaks) - 2
    for i in range(last + 1):
        if breaks[i] <= value < breaks[i + 1]:
            return i

    if value >= breaks[last]:
        return last
    return UNCLASSIFIED
