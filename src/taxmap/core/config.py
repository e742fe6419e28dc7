"""Application configuration loaded from environment and config files."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class ClassificationConfig(BaseSettings):
    """Natural-breaks classification configuration."""

    model_config = {"env_prefix": "TAXMAP_CLASSIFICATION_"}

    num_classes: int = Field(default=12, ge=1)
    fallback_color: tuple[int, int, int] = (128, 128, 128)
    large_sample_warning: int = 5000
    cache_size: int = Field(default=32, ge=1)


class CalculatorConfig(BaseSettings):
    """ICIO budget calculator configuration."""

    model_config = {"env_prefix": "TAXMAP_CALCULATOR_"}

    # None selects the icio_calculator.yml shipped in taxmap.finance
    config_path: str | None = None


class Settings(BaseSettings):
    """Root application settings."""

    model_config = {"env_prefix": "TAXMAP_"}

    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    classification: ClassificationConfig = Field(default_factory=ClassificationConfig)
    calculator: CalculatorConfig = Field(default_factory=CalculatorConfig)
