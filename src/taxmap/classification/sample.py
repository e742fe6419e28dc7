"""Sample preparation: drop unusable entries and sort what remains."""

from __future__ import annotations

import math
from collections.abc import Iterable
from typing import Any

from taxmap.core.types import Sample


def to_finite_float(value: Any) -> float | None:
    """Coerce *value* to a finite float, or return None when it has no usable number.

    Numeric strings such as ``"3.5"`` are accepted since spreadsheet exports
    often keep numbers as text. Booleans are rejected.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def prepare_sample(raw_values: Iterable[Any] | None) -> Sample:
    """Filter out missing and non-finite entries and sort ascending.

    Upstream tax tables frequently have gaps, so invalid entries are
    silently skipped rather than reported.
    """
    if raw_values is None:
        return ()
    cleaned = (to_finite_float(value) for value in raw_values)
    return tuple(sorted(number for number in cleaned if number is not None))
