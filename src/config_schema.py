"""Pydantic schema for configuration validation.

All config values are validated at startup. Typos and invalid values
fail fast with clear error messages.

Usage:
    from config_schema import load_validated_config, AppConfig
    config = load_validated_config("config/config.yaml")
    # config is now a validated AppConfig instance
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# BASE MODEL WITH STRICT VALIDATION
# =============================================================================

class StrictModel(BaseModel):
    """Base model that rejects unknown fields (catches typos)."""

    model_config = ConfigDict(extra="forbid")


# =============================================================================
# REGISTRY MODEL
# =============================================================================

class RegistryConfig(StrictModel):
    """Identity and presentation of the registry."""

    registry_id: str = Field(
        default="color_registry",
        min_length=1,
        description="The registry's own principal id (never a valid transfer target)"
    )
    principal: str = Field(
        default="deployer",
        min_length=1,
        description="Initial administrative principal"
    )
    description: str = Field(
        default=(
            "One of 16,777,216 colors. Each color has exactly one owner, "
            "who chooses its name."
        ),
        description="Static description embedded in every metadata document"
    )
    initial_version: str = Field(
        default="1",
        min_length=1,
        description="Implementation version active at deployment"
    )


# =============================================================================
# PRICING MODEL
# =============================================================================

class PricingConfig(StrictModel):
    """Tiered creation pricing.

    Minimum payment for a tier is unit_price * <tier>_multiple.
    """

    unit_price: int = Field(
        default=1_000_000_000_000_000,
        ge=0,
        description="Base unit price in the smallest currency unit"
    )
    regular_multiple: int = Field(default=1, ge=0, description="Multiple for regular colors")
    premium_multiple: int = Field(
        default=10,
        ge=0,
        description="Multiple for the six pure primary/secondary colors"
    )
    extra_premium_multiple: int = Field(
        default=100,
        ge=0,
        description="Multiple for black and white"
    )


# =============================================================================
# NAMES MODEL
# =============================================================================

class NamesConfig(StrictModel):
    """Name length policy.

    max_length null disables the bound entirely.
    """

    max_length: int | None = Field(
        default=24,
        ge=0,
        description="Longest permitted name in characters (null = unbounded)"
    )
    enforce_on_rename: bool = Field(
        default=True,
        description="Apply max_length to rename as well as create"
    )


# =============================================================================
# LOGGING MODEL
# =============================================================================

class LoggingConfig(StrictModel):
    """Logging configuration."""

    output_file: str = Field(
        default="run.jsonl",
        description="JSONL file for committed registry events"
    )
    logs_dir: str = Field(
        default="logs",
        description="Per-run logs directory (e.g., logs/run_20260115_120000/)"
    )
    default_recent: int = Field(
        default=50,
        gt=0,
        description="Default number of recent events to return"
    )
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Python logging level for the runner"
    )

    @field_validator("level", mode="before")
    @classmethod
    def upper_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.upper()
        return value


# =============================================================================
# ROOT MODEL
# =============================================================================

class AppConfig(StrictModel):
    """Root configuration model for the entire application.

    All fields have sensible defaults, so an empty config file is valid.
    """

    registry: RegistryConfig = Field(default_factory=RegistryConfig)
    pricing: PricingConfig = Field(default_factory=PricingConfig)
    names: NamesConfig = Field(default_factory=NamesConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


# =============================================================================
# LOADING FUNCTIONS
# =============================================================================

def load_validated_config(config_path: str | Path = "config/config.yaml") -> AppConfig:
    """Load and validate configuration from YAML file.

    Args:
        config_path: Path to config YAML file.

    Returns:
        Validated AppConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        pydantic.ValidationError: If config is invalid (with detailed error message).
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        raw_config = yaml.safe_load(f) or {}

    return AppConfig.model_validate(raw_config)


def validate_config_dict(config_dict: dict[str, Any]) -> AppConfig:
    """Validate a configuration dictionary.

    Raises:
        pydantic.ValidationError: If config is invalid.
    """
    return AppConfig.model_validate(config_dict)


__all__ = [
    "AppConfig",
    "RegistryConfig",
    "PricingConfig",
    "NamesConfig",
    "LoggingConfig",
    "load_validated_config",
    "validate_config_dict",
]
