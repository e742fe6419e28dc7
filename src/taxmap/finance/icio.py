"""Deterministic ICIO (construction tax) budget estimation engine."""

from __future__ import annotations

import logging
import math
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import Any, TypeVar

import yaml
from pydantic import BaseModel, ValidationError

from taxmap.classification.sample import to_finite_float
from taxmap.core.config import CalculatorConfig
from taxmap.finance.models import (
    BuildType,
    ConstructionType,
    ICIOEstimate,
    ICIOReduction,
    SpecialCondition,
)

logger = logging.getLogger(__name__)

# Shipped as package data next to this module
_DEFAULT_CONFIG: Traversable = resources.files("taxmap.finance") / "icio_calculator.yml"

# Construction types pinned to one end of the PEM range
_MAX_PEM = "new_construction"
_MIN_PEM = "interior_refurbishment"

_NONE = "none"

_Model = TypeVar("_Model", bound=BaseModel)


class ICIOCalculator:
    """Estimates a project's construction budget and the ICIO owed on it.

    Cost tables (building functions, construction types, special
    conditions and ICIO reductions) are loaded from YAML.
    """

    def __init__(self, config_path: str | Path | None = None) -> None:
        if config_path is None:
            config_path = CalculatorConfig().config_path
        self._config_path: Path | Traversable = Path(config_path) if config_path else _DEFAULT_CONFIG
        self._build_types: dict[str, BuildType] = {}
        self._construction_types: dict[str, ConstructionType] = {}
        self._special_conditions: dict[str, SpecialCondition] = {}
        self._reductions: dict[str, ICIOReduction] = {}
        self._load_config()

    def _load_config(self) -> None:
        with self._config_path.open() as fh:
            raw = yaml.safe_load(fh) or {}

        for build_type in _parse_entries(raw.get("build_types", []), BuildType, "build type"):
            self._build_types[build_type.subtype.lower()] = build_type
        for construction in _parse_entries(
            raw.get("construction_types", []), ConstructionType, "construction type"
        ):
            self._construction_types[construction.value.lower()] = construction
        for condition in _parse_entries(
            raw.get("special_conditions", []), SpecialCondition, "special condition"
        ):
            self._special_conditions[condition.value.lower()] = condition
        for reduction in _parse_entries(raw.get("reductions", []), ICIOReduction, "reduction"):
            self._reductions[reduction.value.lower()] = reduction

    @property
    def build_types(self) -> list[BuildType]:
        return list(self._build_types.values())

    @property
    def construction_types(self) -> list[ConstructionType]:
        return list(self._construction_types.values())

    @property
    def special_conditions(self) -> list[SpecialCondition]:
        return list(self._special_conditions.values())

    @property
    def reductions(self) -> list[ICIOReduction]:
        return list(self._reductions.values())

    def unit_cost(self, building_function: str, construction_type: str = _MAX_PEM) -> float:
        """Execution cost per m2 for a building function and kind of works."""
        build_type = _lookup(self._build_types, building_function, "building function")
        construction = _lookup(self._construction_types, construction_type, "construction type")

        key = construction.value.lower()
        if key == _MAX_PEM:
            return build_type.pem_finish
        if key == _MIN_PEM:
            return build_type.pem_start
        pem_range = build_type.pem_finish - build_type.pem_start
        return build_type.pem_start + construction.pem_multiplier * pem_range

    def estimate(
        self,
        icio_rate: Any,
        building_function: str,
        construction_type: str = _MAX_PEM,
        gross_floor_area: float = 100.0,
        special_condition: str | None = _NONE,
        reduction: str | None = _NONE,
        city: str | None = None,
    ) -> ICIOEstimate:
        """Estimate the budget and ICIO for a project in a municipality.

        Args:
            icio_rate: The municipality's ICIO rate in percent. Missing or
                non-numeric rates count as 0.
            building_function: Subtype of a configured build type.
            construction_type: Kind of works, e.g. ``new_construction``.
            gross_floor_area: Gross floor area in m2.
            special_condition: Optional surcharge key.
            reduction: Optional ICIO bonus key.
            city: Municipality name, carried through to the estimate.

        Raises:
            ValueError: For an unknown key, or a negative or non-finite floor area.
        """
        if not math.isfinite(gross_floor_area) or gross_floor_area < 0:
            raise ValueError(f"gross_floor_area must be a finite number >= 0, got {gross_floor_area!r}")

        unit_cost = self.unit_cost(building_function, construction_type)
        total_budget = unit_cost * gross_floor_area

        surcharge_pct = 0.0
        if special_condition and special_condition.lower() != _NONE:
            surcharge_pct = _lookup(
                self._special_conditions, special_condition, "special condition"
            ).percentage
        if surcharge_pct > 0:
            total_budget *= 1 + surcharge_pct / 100.0

        rate = to_finite_float(icio_rate) or 0.0
        gross_icio = total_budget * rate / 100.0

        reduction_pct = 0.0
        if reduction and reduction.lower() != _NONE:
            reduction_pct = _lookup(self._reductions, reduction, "reduction").reduction
        icio_amount = gross_icio
        if reduction_pct > 0:
            icio_amount *= 1 - reduction_pct / 100.0

        return ICIOEstimate(
            city=city,
            icio_rate=rate,
            building_function=building_function,
            construction_type=construction_type,
            gross_floor_area=gross_floor_area,
            unit_cost_per_m2=round(unit_cost, 2),
            special_condition_pct=surcharge_pct,
            reduction_pct=reduction_pct,
            total_budget=round(total_budget, 2),
            gross_icio=round(gross_icio, 2),
            icio_amount=round(icio_amount, 2),
        )


def _parse_entries(entries: list[dict[str, Any]], model: type[_Model], label: str) -> list[_Model]:
    parsed: list[_Model] = []
    for idx, entry in enumerate(entries):
        try:
            parsed.append(model.model_validate(entry))
        except ValidationError as exc:
            logger.warning("Skipping invalid %s entry #%d: %s", label, idx, exc)
    return parsed


def _lookup(table: dict[str, _Model], key: str, label: str) -> _Model:
    item = table.get(key.lower())
    if item is None:
        raise ValueError(f"Unknown {label} {key!r}. Available: {list(table.keys())}")
    return item
