"""Tests for settings loaded from the environment."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from taxmap.core.config import CalculatorConfig, ClassificationConfig, Settings


class TestClassificationConfig:
    def test_defaults(self):
        config = ClassificationConfig()
        assert config.num_classes == 12
        assert config.fallback_color == (128, 128, 128)
        assert config.large_sample_warning == 5000
        assert config.cache_size == 32

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("TAXMAP_CLASSIFICATION_NUM_CLASSES", "7")
        assert ClassificationConfig().num_classes == 7

    def test_rejects_zero_classes(self):
        with pytest.raises(ValidationError):
            ClassificationConfig(num_classes=0)


class TestSettings:
    def test_defaults(self):
        settings = Settings()
        assert settings.environment == "development"
        assert settings.log_level == "INFO"
        assert settings.classification.num_classes == 12
        assert settings.calculator.config_path is None

    def test_calculator_env(self, monkeypatch):
        monkeypatch.setenv("TAXMAP_CALCULATOR_CONFIG_PATH", "/tmp/icio.yml")
        assert CalculatorConfig().config_path == "/tmp/icio.yml"

    def test_log_level_env(self, monkeypatch):
        monkeypatch.setenv("TAXMAP_LOG_LEVEL", "DEBUG")
        assert Settings().log_level == "DEBUG"
