"""Dataset-level natural-breaks classification with memoization.

Breaks are a pure function of the dataset and the class count, and the
solver is quadratic in the sample size, so results are cached per
``(dataset_key, num_classes)`` and reused across renders.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Iterable, Sequence
from typing import Any

from taxmap.classification.breaks import class_counts, compute_breaks, goodness_of_variance_fit
from taxmap.classification.color import color_for
from taxmap.classification.models import Classification, LegendEntry
from taxmap.classification.palette import generate_palette, rgb_to_hex
from taxmap.classification.sample import prepare_sample
from taxmap.core.config import ClassificationConfig
from taxmap.core.types import RGB, BreakSequence, Palette

logger = logging.getLogger(__name__)


def build_legend(
    breaks: BreakSequence,
    palette: Palette,
    sample: Iterable[float] = (),
) -> tuple[LegendEntry, ...]:
    """Pair each class range with its colour and the number of values it holds."""
    if len(breaks) < 2:
        return ()

    counts = class_counts(sample, breaks)
    entries: list[LegendEntry] = []
    for index, color in enumerate(palette[: len(breaks) - 1]):
        lower = breaks[index]
        upper = breaks[index + 1]
        entries.append(
            LegendEntry(
                index=index,
                lower=lower,
                upper=upper,
                color=color,
                hex_color=rgb_to_hex(color),
                label=f"{lower:.2f} - {upper:.2f}",
                count=counts[index],
            )
        )
    return tuple(entries)


class NaturalBreaksClassifier:
    """Classifies datasets into natural-break classes and resolves point colours.

    Each instance keeps its own bounded cache; nothing is shared between
    instances.
    """

    def __init__(
        self,
        num_classes: int | None = None,
        config: ClassificationConfig | None = None,
    ) -> None:
        self._config = config if config is not None else ClassificationConfig()
        self._num_classes = num_classes if num_classes is not None else self._config.num_classes
        if self._num_classes < 1:
            raise ValueError(f"num_classes must be >= 1, got {self._num_classes!r}")
        self._cache: dict[tuple[Hashable, int], Classification] = {}

    @property
    def num_classes(self) -> int:
        return self._num_classes

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    def clear_cache(self) -> None:
        self._cache.clear()

    def classify_dataset(
        self,
        raw_values: Iterable[Any] | None,
        dataset_key: Hashable | None = None,
    ) -> Classification:
        """Compute (or reuse) the classification of a dataset.

        Args:
            raw_values: Raw indicator values; missing and non-numeric
                entries are ignored.
            dataset_key: Identity of the dataset. When omitted the prepared
                sample itself is the key, so equal data shares one entry.

        Returns:
            The breaks, palette and legend for the dataset.
        """
        sample: tuple[float, ...] | None = None
        if dataset_key is None:
            sample = prepare_sample(raw_values)
            dataset_key = sample

        key = (dataset_key, self._num_classes)
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Classification cache hit for %d-class dataset", self._num_classes)
            return cached

        if sample is None:
            sample = prepare_sample(raw_values)

        result = self._classify_sample(sample)
        self._remember(key, result)
        return result

    def color_for(self, value: Any, classification: Classification) -> RGB:
        """Colour for a single data point under *classification*."""
        return color_for(
            value,
            classification.breaks,
            classification.palette,
            fallback=self._config.fallback_color,
        )

    def colors_for(self, values: Sequence[Any], classification: Classification) -> list[RGB]:
        return [self.color_for(value, classification) for value in values]

    def _classify_sample(self, sample: tuple[float, ...]) -> Classification:
        breaks = compute_breaks(
            sample,
            self._num_classes,
            large_sample_warning=self._config.large_sample_warning,
        )
        palette = generate_palette(len(breaks) - 1) if len(breaks) >= 2 else ()
        logger.debug(
            "Classified %d values into %d classes (requested %d)",
            len(sample),
            len(palette),
            self._num_classes,
        )
        return Classification(
            num_classes=self._num_classes,
            breaks=breaks,
            palette=palette,
            legend=build_legend(breaks, palette, sample),
            sample_size=len(sample),
            value_min=sample[0] if sample else None,
            value_max=sample[-1] if sample else None,
            gvf=goodness_of_variance_fit(sample, breaks),
        )

    def _remember(self, key: tuple[Hashable, int], result: Classification) -> None:
        while len(self._cache) >= self._config.cache_size:
            oldest = next(iter(self._cache))
            del self._cache[oldest]
        self._cache[key] = result
