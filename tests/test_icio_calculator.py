"""Tests for the ICIO construction budget calculator."""

from __future__ import annotations

import logging
import math
from importlib import resources
from pathlib import Path

import pytest
import yaml

from taxmap.finance.icio import ICIOCalculator
from taxmap.finance.models import BuildType, ICIOEstimate


@pytest.fixture()
def config_path(tmp_path: Path) -> Path:
    """Write a minimal calculator config and return its path."""
    config = {
        "build_types": [
            {"type": "Residential", "subtype": "House", "pem_start": 800, "pem_finish": 1200},
            {"type": "Industrial", "subtype": "Warehouse", "pem_start": 400, "pem_finish": 600},
        ],
        "construction_types": [
            {"value": "new_construction", "label": "New construction", "pem_multiplier": 1.0},
            {"value": "integral_renovation", "label": "Integral renovation", "pem_multiplier": 0.75},
            {"value": "energy_rehabilitation", "label": "Energy rehabilitation", "pem_multiplier": 0.5},
            {"value": "interior_refurbishment", "label": "Interior refurbishment", "pem_multiplier": 0.0},
        ],
        "special_conditions": [
            {"value": "none", "label": "None", "percentage": 0},
            {"value": "complex_geology", "label": "Complex geology", "percentage": 25},
        ],
        "reductions": [
            {"value": "none", "label": "None", "reduction": 0},
            {"value": "vpo", "label": "VPO", "reduction": 90},
        ],
    }
    path = tmp_path / "icio_calculator.yml"
    path.write_text(yaml.dump(config))
    return path


@pytest.fixture()
def calculator(config_path: Path) -> ICIOCalculator:
    return ICIOCalculator(config_path=config_path)


# ---------------------------------------------------------------------------
# Unit cost
# ---------------------------------------------------------------------------


class TestUnitCost:
    def test_new_construction_uses_max(self, calculator):
        assert calculator.unit_cost("House", "new_construction") == 1200

    def test_interior_refurbishment_uses_min(self, calculator):
        assert calculator.unit_cost("House", "interior_refurbishment") == 800

    def test_intermediate_types_interpolate(self, calculator):
        assert calculator.unit_cost("House", "integral_renovation") == 1100
        assert calculator.unit_cost("House", "energy_rehabilitation") == 1000

    def test_case_insensitive(self, calculator):
        assert calculator.unit_cost("house", "NEW_CONSTRUCTION") == 1200

    def test_unknown_building_function(self, calculator):
        with pytest.raises(ValueError, match="Unknown building function"):
            calculator.unit_cost("Castle")

    def test_unknown_construction_type(self, calculator):
        with pytest.raises(ValueError, match="Unknown construction type"):
            calculator.unit_cost("House", "demolition")


# ---------------------------------------------------------------------------
# Estimates
# ---------------------------------------------------------------------------


class TestEstimate:
    def test_basic_estimate(self, calculator):
        est = calculator.estimate(4.0, "House", gross_floor_area=100.0, city="Madrid")
        assert isinstance(est, ICIOEstimate)
        assert est.unit_cost_per_m2 == 1200.0
        assert est.total_budget == 120_000.0
        assert est.gross_icio == 4_800.0
        assert est.icio_amount == 4_800.0
        assert est.city == "Madrid"
        assert est.icio_rate == 4.0

    def test_special_condition_surcharge(self, calculator):
        est = calculator.estimate(4.0, "Warehouse", gross_floor_area=50.0, special_condition="complex_geology")
        assert est.special_condition_pct == 25
        assert est.total_budget == pytest.approx(37_500.0)
        assert est.icio_amount == pytest.approx(1_500.0)

    def test_reduction_applies_to_tax(self, calculator):
        est = calculator.estimate(4.0, "House", gross_floor_area=100.0, reduction="vpo")
        assert est.reduction_pct == 90
        assert est.gross_icio == 4_800.0
        assert est.icio_amount == pytest.approx(480.0)

    def test_none_keys_mean_no_adjustment(self, calculator):
        est = calculator.estimate(2.0, "House", special_condition=None, reduction=None)
        assert est.total_budget == 120_000.0
        assert est.icio_amount == 2_400.0

    @pytest.mark.parametrize("rate", [None, math.nan, "n/a"])
    def test_missing_rate_counts_as_zero(self, calculator, rate):
        est = calculator.estimate(rate, "House")
        assert est.icio_rate == 0.0
        assert est.icio_amount == 0.0
        assert est.total_budget == 120_000.0

    def test_string_rate(self, calculator):
        est = calculator.estimate("3.5", "House", gross_floor_area=10.0)
        assert est.icio_amount == pytest.approx(420.0)

    @pytest.mark.parametrize("area", [-1.0, math.nan, math.inf, -math.inf])
    def test_invalid_area(self, calculator, area):
        with pytest.raises(ValueError, match="gross_floor_area"):
            calculator.estimate(4.0, "House", gross_floor_area=area)

    def test_zero_area(self, calculator):
        est = calculator.estimate(4.0, "House", gross_floor_area=0.0)
        assert est.total_budget == 0.0
        assert est.icio_amount == 0.0

    def test_unknown_special_condition(self, calculator):
        with pytest.raises(ValueError, match="Unknown special condition"):
            calculator.estimate(4.0, "House", special_condition="volcano")

    def test_unknown_reduction(self, calculator):
        with pytest.raises(ValueError, match="Unknown reduction"):
            calculator.estimate(4.0, "House", reduction="friends")

    def test_amounts_rounded(self, calculator):
        est = calculator.estimate(3.333, "House", gross_floor_area=1.0)
        assert est.icio_amount == 40.0


# ---------------------------------------------------------------------------
# Config loading
# ---------------------------------------------------------------------------


class TestCalculatorConfig:
    def test_tables_loaded(self, calculator):
        assert [b.subtype for b in calculator.build_types] == ["House", "Warehouse"]
        assert len(calculator.construction_types) == 4
        assert len(calculator.special_conditions) == 2
        assert len(calculator.reductions) == 2
        assert isinstance(calculator.build_types[0], BuildType)

    def test_invalid_entries_skipped(self, tmp_path, caplog):
        path = tmp_path / "bad.yml"
        path.write_text(
            yaml.dump(
                {
                    "build_types": [
                        {"type": "Residential", "subtype": "House", "pem_start": 1, "pem_finish": 2},
                        {"type": "Residential"},
                    ],
                    "reductions": [{"value": "vpo", "label": "VPO", "reduction": 150}],
                }
            )
        )
        with caplog.at_level(logging.WARNING, logger="taxmap.finance.icio"):
            calc = ICIOCalculator(config_path=path)
        assert len(calc.build_types) == 1
        assert calc.reductions == []
        assert "Skipping invalid" in caplog.text

    def test_empty_config(self, tmp_path):
        path = tmp_path / "empty.yml"
        path.write_text("")
        calc = ICIOCalculator(config_path=path)
        assert calc.build_types == []

    def test_missing_config_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ICIOCalculator(config_path=tmp_path / "nope.yml")

    def test_config_path_from_environment(self, config_path, monkeypatch):
        monkeypatch.setenv("TAXMAP_CALCULATOR_CONFIG_PATH", str(config_path))
        calc = ICIOCalculator()
        assert [b.subtype for b in calc.build_types] == ["House", "Warehouse"]

    def test_packaged_config(self, monkeypatch):
        monkeypatch.delenv("TAXMAP_CALCULATOR_CONFIG_PATH", raising=False)
        calc = ICIOCalculator()
        assert len(calc.construction_types) == 4
        assert len(calc.reductions) == 13
        est = calc.estimate(
            3.2,
            "Single-family house",
            construction_type="integral_renovation",
            gross_floor_area=200.0,
            special_condition="heritage_building",
        )
        assert est.unit_cost_per_m2 == 1262.5
        assert est.total_budget == pytest.approx(303_000.0)
        assert est.icio_amount == pytest.approx(9_696.0)

    def test_default_tables_ship_with_package(self):
        tables = resources.files("taxmap.finance") / "icio_calculator.yml"
        assert tables.is_file()
        raw = yaml.safe_load(tables.read_text())
        assert {"build_types", "construction_types", "special_conditions", "reductions"} <= set(raw)

    def test_explicit_path_overrides_packaged_tables(self, config_path):
        calc = ICIOCalculator(config_path=str(config_path))
        assert [b.subtype for b in calc.build_types] == ["House", "Warehouse"]
