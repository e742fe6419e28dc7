"""Natural-breaks (Jenks) class boundaries via Fisher's exact dynamic program.

The solver partitions a sorted sample into ``k`` contiguous groups so that
the summed within-group squared deviation from the group mean is minimal.
It is exact and runs in O(n^2 * k) time with O(n * k) memory, which is fine
for the few thousand municipalities a tax table holds but does not scale to
very large samples.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable

from taxmap.classification.assign import classify
from taxmap.core.types import UNCLASSIFIED, BreakSequence

logger = logging.getLogger(__name__)

_LARGE_SAMPLE_WARNING = 5000

# Relative slack absorbing rounding in the prefix-sum SSD
_TIE_TOLERANCE = 1e-9


def compute_breaks(
    sample: Iterable[float],
    num_classes: int,
    *,
    large_sample_warning: int = _LARGE_SAMPLE_WARNING,
) -> BreakSequence:
    """Compute up to ``num_classes + 1`` natural-break boundaries.

    Args:
        sample: Finite values, normally the output of ``prepare_sample``.
        num_classes: Target number of classes (``k``), at least 1.
        large_sample_warning: Sample size above which a warning about the
            quadratic running time is logged.

    Returns:
        Ascending boundaries starting at the sample minimum and ending at
        the sample maximum. Empty for an empty sample. When the sample has
        no more than ``num_classes`` distinct values, the distinct values
        themselves are returned.

    Raises:
        ValueError: If ``num_classes`` is less than 1.
    """
    if num_classes < 1:
        raise ValueError(f"num_classes must be >= 1, got {num_classes!r}")

    values = sorted(sample)
    if not values:
        return ()

    distinct = sorted(set(values))
    if len(distinct) <= num_classes:
        logger.debug(
            "Sample has %d distinct values for %d classes; using them as breaks",
            len(distinct),
            num_classes,
        )
        return tuple(distinct)

    if len(values) > large_sample_warning:
        logger.warning(
            "Computing natural breaks for %d values; running time grows quadratically",
            len(values),
        )

    starts = _optimal_class_starts(values, num_classes)

    candidates = [values[start - 1] for start in starts]
    candidates[0] = values[0]
    candidates.append(values[-1])

    breaks = _collapse_duplicates(candidates)
    logger.debug("Computed %d breaks for %d values", len(breaks), len(values))
    return breaks


def _optimal_class_starts(values: list[float], num_classes: int) -> list[int]:
    """Run the DP and return the 1-based start position of every class."""
    n = len(values)
    sums, squares = _prefix_sums(values)

    # lower[j][i]: 1-based index where class i begins in the best split of
    # the first j values into i classes. cost[j][i]: that split's total SSD.
    lower = [[0] * (num_classes + 1) for _ in range(n + 1)]
    cost = [[0.0] * (num_classes + 1) for _ in range(n + 1)]

    for i in range(1, num_classes + 1):
        lower[1][i] = 1

    for j in range(2, n + 1):
        lower[j][1] = 1
        cost[j][1] = _segment_ssd(sums, squares, 0, j)

    for i in range(2, num_classes + 1):
        previous = [row[i - 1] for row in cost]
        for j in range(2, n + 1):
            best = math.inf
            best_start = 0
            sum_j = sums[j]
            square_j = squares[j]
            # Costs within the tolerance count as ties; the earliest start is kept.
            for start in range(i, j + 1):
                count = j - start + 1
                if count > 1:
                    seg_sum = sum_j - sums[start - 1]
                    ssd = square_j - squares[start - 1] - seg_sum * seg_sum / count
                    if ssd < 0.0:
                        ssd = 0.0
                else:
                    ssd = 0.0
                candidate = previous[start - 1] + ssd
                if best == math.inf or candidate < best - _TIE_TOLERANCE * max(1.0, best):
                    best = candidate
                    best_start = start
            cost[j][i] = best
            lower[j][i] = best_start

    starts = [0] * num_classes
    end = n
    for i in range(num_classes, 0, -1):
        start = lower[end][i]
        starts[i - 1] = start
        end = start - 1
    return starts


def _prefix_sums(values: list[float]) -> tuple[list[float], list[float]]:
    """Cumulative sums and sums of squares of the values shifted by their minimum.

    SSD is shift invariant; shifting keeps the squares small and limits
    cancellation when the values sit far from zero.
    """
    origin = values[0]
    sums = [0.0] * (len(values) + 1)
    squares = [0.0] * (len(values) + 1)
    running_sum = 0.0
    running_square = 0.0
    for idx, value in enumerate(values, start=1):
        shifted = value - origin
        running_sum += shifted
        running_square += shifted * shifted
        sums[idx] = running_sum
        squares[idx] = running_square
    return sums, squares


def _segment_ssd(sums: list[float], squares: list[float], begin: int, end: int) -> float:
    """Sum of squared deviations of values[begin:end]."""
    count = end - begin
    if count < 2:
        return 0.0
    seg_sum = sums[end] - sums[begin]
    ssd = squares[end] - squares[begin] - seg_sum * seg_sum / count
    return max(0.0, ssd)


def _collapse_duplicates(candidates: list[float]) -> BreakSequence:
    collapsed: list[float] = []
    for value in candidates:
        if not collapsed or value != collapsed[-1]:
            collapsed.append(value)
    return tuple(collapsed)


def _sum_squared_deviations(values: list[float]) -> float:
    if len(values) < 2:
        return 0.0
    mean = sum(values) / len(values)
    return sum((value - mean) ** 2 for value in values)


def class_counts(sample: Iterable[float], breaks: BreakSequence) -> tuple[int, ...]:
    """Number of sample values that fall into each class."""
    if len(breaks) < 2:
        return ()
    counts = [0] * (len(breaks) - 1)
    for value in sample:
        index = classify(value, breaks)
        if index != UNCLASSIFIED:
            counts[index] += 1
    return tuple(counts)


def goodness_of_variance_fit(sample: Iterable[float], breaks: BreakSequence) -> float | None:
    """Jenks goodness of variance fit: ``1 - SDCM / SDAM``.

    1.0 means every class is internally uniform. Returns None when the
    measure is undefined (empty sample, fewer than two breaks, or a sample
    with no variance at all).
    """
    values = list(sample)
    if not values or len(breaks) < 2:
        return None

    total = _sum_squared_deviations(values)
    if total == 0.0:
        return None

    groups: list[list[float]] = [[] for _ in range(len(breaks) - 1)]
    for value in values:
        index = classify(value, breaks)
        if index != UNCLASSIFIED:
            groups[index].append(value)

    within = sum(_sum_squared_deviations(group) for group in groups)
    return 1.0 - within / total
