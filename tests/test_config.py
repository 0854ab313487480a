"""
Unit tests for threshold configuration loading
"""

from dataclasses import FrozenInstanceError
from pathlib import Path

import pytest

from alerts import DEFAULT_CONFIG, AlertConfig, config_from_mapping, load_config


EXAMPLE_CONFIG = Path(__file__).resolve().parents[1] / "config.example.yaml"


class TestDefaults:

    def test_default_values(self):
        assert DEFAULT_CONFIG.stock.diesel_critical == 5000
        assert DEFAULT_CONFIG.stock.arla_warning == 1000
        assert DEFAULT_CONFIG.consumption.deviation == 0.3
        assert DEFAULT_CONFIG.consumption.min_samples == 3
        assert DEFAULT_CONFIG.hour_meter.max_daily_hours == 24
        assert DEFAULT_CONFIG.hour_meter.zero_critical_count == 10
        assert DEFAULT_CONFIG.odometer.unusual_deviation == 0.5

    def test_no_path_returns_defaults(self):
        assert load_config(None) is DEFAULT_CONFIG
        assert load_config("") is DEFAULT_CONFIG

    def test_example_file_matches_defaults(self):
        assert load_config(str(EXAMPLE_CONFIG)) == DEFAULT_CONFIG

    def test_frozen(self):
        with pytest.raises(FrozenInstanceError):
            DEFAULT_CONFIG.stock.diesel_critical = 1

    def test_to_dict(self):
        data = AlertConfig().to_dict()

        assert set(data) == {"stock", "consumption", "hour_meter", "odometer"}
        assert data["consumption"]["critical_deviation"] == 0.5


class TestOverrides:

    def test_partial_yaml_override(self, tmp_path):
        path = tmp_path / "alerts.yaml"
        path.write_text(
            "stock:\n"
            "  diesel_critical: 8000\n"
            "hour_meter:\n"
            "  max_daily_hours: 20\n"
            "  min_samples: 3\n",
            encoding="utf-8",
        )

        config = load_config(str(path))

        assert config.stock.diesel_critical == 8000.0
        assert config.stock.diesel_warning == 10000.0
        assert config.hour_meter.max_daily_hours == 20.0
        assert config.hour_meter.min_samples == 3
        assert isinstance(config.hour_meter.min_samples, int)
        assert config.consumption == DEFAULT_CONFIG.consumption

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        assert load_config(str(path)) == DEFAULT_CONFIG

    def test_null_section_keeps_defaults(self):
        assert config_from_mapping({"odometer": None}) == DEFAULT_CONFIG

    def test_integral_float_for_int_field(self):
        config = config_from_mapping({"hour_meter": {"zero_critical_count": 12.0}})

        assert config.hour_meter.zero_critical_count == 12
        assert isinstance(config.hour_meter.zero_critical_count, int)

    @pytest.mark.parametrize("data", [
        {"fuel": {"deviation": 0.2}},
        {"stock": {"gasoline_critical": 10}},
        {"stock": [1, 2]},
        {"consumption": {"deviation": "alto"}},
        {"consumption": {"deviation": "0.3"}},
        {"consumption": {"min_samples": True}},
        {"stock": {"diesel_critical": False}},
        {"hour_meter": {"zero_critical_count": 10.9}},
        {"odometer": {"unusual_deviation": float("nan")}},
        ["stock"],
    ])
    def test_invalid(self, data):
        with pytest.raises(ValueError, match="Config inválida"):
            config_from_mapping(data)
