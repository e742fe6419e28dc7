"""Finance data models for the ICIO construction budget calculator."""

from __future__ import annotations

from pydantic import BaseModel, Field


class BuildType(BaseModel):
    """A building function with its reference execution cost range (PEM, EUR/m2)."""

    type: str
    subtype: str
    pem_start: float = 0.0
    pem_finish: float = 0.0
    cte_reference: str = ""
    active_link: str = ""


class ConstructionType(BaseModel):
    """Kind of works; positions the unit cost inside the PEM range."""

    value: str
    label: str
    pem_multiplier: float = Field(default=1.0, ge=0.0, le=1.0)


class SpecialCondition(BaseModel):
    """Site condition that surcharges the construction budget."""

    value: str
    label: str
    percentage: float = 0.0


class ICIOReduction(BaseModel):
    """Municipal bonus that reduces the ICIO payable."""

    value: str
    label: str
    reduction: float = Field(default=0.0, ge=0.0, le=100.0)


class ICIOEstimate(BaseModel):
    """Construction budget and ICIO tax estimate for one project."""

    city: str | None = None
    icio_rate: float
    building_function: str
    construction_type: str
    gross_floor_area: float
    unit_cost_per_m2: float
    special_condition_pct: float = 0.0
    reduction_pct: float = 0.0
    total_budget: float
    gross_icio: float
    icio_amount: float
