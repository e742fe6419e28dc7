"""Classification result models consumed by the map and legend layers."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class LegendEntry(BaseModel):
    """One swatch of the map legend."""

    model_config = ConfigDict(frozen=True)

    index: int
    lower: float
    upper: float
    color: tuple[int, int, int]
    hex_color: str
    label: str
    count: int = 0


class Classification(BaseModel):
    """Natural-breaks classification of a dataset."""

    model_config = ConfigDict(frozen=True)

    num_classes: int
    breaks: tuple[float, ...] = ()
    palette: tuple[tuple[int, int, int], ...] = ()
    legend: tuple[LegendEntry, ...] = ()
    sample_size: int = 0
    value_min: float | None = None
    value_max: float | None = None
    gvf: float | None = Field(default=None, description="Goodness of variance fit")

    @property
    def class_count(self) -> int:
        """Number of classes actually produced (may be below ``num_classes``)."""
        return max(0, len(self.breaks) - 1)

    @property
    def is_empty(self) -> bool:
        return self.class_count == 0
