"""Tests for Pydantic config schema validation and the config loader."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from src import config as config_module
from src.config_schema import AppConfig, load_validated_config, validate_config_dict
from src.registry import ColorRegistry


class TestValidConfig:
    """Test that valid configs are accepted."""

    def test_empty_config_uses_defaults(self) -> None:
        """Empty config should use all defaults."""
        config = validate_config_dict({})
        assert config.registry.registry_id == "color_registry"
        assert config.pricing.unit_price == 1_000_000_000_000_000
        assert config.names.max_length == 24
        assert config.names.enforce_on_rename is True
        assert config.logging.default_recent == 50

    def test_full_config_loads(self) -> None:
        """Shipped config file loads without errors."""
        config = load_validated_config(config_module.DEFAULT_CONFIG_PATH)
        assert isinstance(config, AppConfig)
        assert config.pricing.premium_multiple == 10

    def test_null_max_length(self) -> None:
        config = validate_config_dict({"names": {"max_length": None}})
        assert config.names.max_length is None

    def test_level_is_uppercased(self) -> None:
        config = validate_config_dict({"logging": {"level": "debug"}})
        assert config.logging.level == "DEBUG"


class TestInvalidConfig:
    """Typos and bad values fail fast."""

    def test_unknown_section_rejected(self) -> None:
        with pytest.raises(ValidationError):
            validate_config_dict({"pricng": {}})

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(ValidationError):
            validate_config_dict({"pricing": {"unit_prize": 1}})

    def test_negative_price_rejected(self) -> None:
        with pytest.raises(ValidationError):
            validate_config_dict({"pricing": {"unit_price": -1}})

    def test_empty_registry_id_rejected(self) -> None:
        with pytest.raises(ValidationError):
            validate_config_dict({"registry": {"registry_id": ""}})

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_validated_config(tmp_path / "nope.yaml")


class TestConfigLoader:
    """Module-level config access."""

    def test_get_dot_path(self) -> None:
        assert config_module.get("pricing.premium_multiple") == 10
        assert config_module.get("pricing.nonexistent", "fallback") == "fallback"

    def test_get_falls_back_to_model_default(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("pricing:\n  unit_price: 7\n")
        config_module.load_config(str(path))
        assert config_module.get("pricing.unit_price") == 7
        assert config_module.get("names.max_length") == 24

    def test_set_config_value_revalidates(self) -> None:
        config_module.set_config_value("names.max_length", 3)
        assert config_module.get_validated_config().names.max_length == 3
        with pytest.raises(ValidationError):
            config_module.set_config_value("names.max_length", -5)

    def test_registry_from_config(self) -> None:
        config_module.use_config_dict({
            "registry": {"registry_id": "palette", "principal": "root"},
            "pricing": {"unit_price": 3},
            "names": {"max_length": 4, "enforce_on_rename": False},
        })
        registry = ColorRegistry.from_config()
        assert registry.registry_id == "palette"
        assert registry.current_principal() == "root"
        assert registry.required_payment("123456") == 3
        assert registry.max_name_length == 4
        assert registry.enforce_name_on_rename is False

    def test_run_id_selects_per_run_log(self, tmp_path: Path) -> None:
        """logging.logs_dir is where a run's events land."""
        config_module.use_config_dict({"logging": {"logs_dir": str(tmp_path / "runs")}})
        registry = ColorRegistry.from_config(run_id="run_test")
        event_logger = registry.events.event_logger
        assert event_logger is not None
        assert event_logger.output_path == tmp_path / "runs" / "run_test" / "events.jsonl"

        registry.create("123456", "n", caller="alice", payment=registry.required_payment("123456"))
        assert [e["event_type"] for e in event_logger.read_recent()] == ["Transfer"]

    def test_no_run_id_no_log(self) -> None:
        registry = ColorRegistry.from_config(validate_config_dict({}))
        assert registry.events.event_logger is None

    def test_principal_override(self) -> None:
        registry = ColorRegistry.from_config(validate_config_dict({}), principal="ops")
        assert registry.current_principal() == "ops"
