"""
Unit tests for consumption-deviation alerts
"""

import pytest

from alerts import AlertCategory, AlertSeverity, ConsumptionThresholds
from alerts.rules import evaluate_consumption


class TestConsumptionRules:

    def test_high_consumption_critical(self, fuel_events, stats_of, config, clock):
        stats = stats_of(fuel_events("CAM-01", [100, 100, 100, 200]))

        alerts = evaluate_consumption(stats, config.consumption, clock)

        assert len(alerts) == 1
        alert = alerts[0]
        assert alert.id == "consumo-high-CAM-01"
        assert alert.category == AlertCategory.CONSUMPTION
        assert alert.severity == AlertSeverity.CRITICAL
        assert alert.asset_id == "CAM-01"
        assert alert.value == 200
        assert alert.average == 125
        assert alert.deviation == pytest.approx(0.6)
        assert alert.message == "Último abastecimento: 200L (média: 125L) - Desvio de 60%"

    def test_high_consumption_warning(self, fuel_events, stats_of, config, clock):
        stats = stats_of(fuel_events("CAM-01", [100, 100, 100, 150]))

        alerts = evaluate_consumption(stats, config.consumption, clock)

        assert [a.severity for a in alerts] == [AlertSeverity.WARNING]
        assert alerts[0].deviation == pytest.approx(1 / 3)

    @pytest.mark.parametrize("quantities", [
        [100, 100, 100, 120],
        [100, 100, 100, 80],
        [100, 100, 100, 100],
    ])
    def test_within_band_is_quiet(self, fuel_events, stats_of, config, clock, quantities):
        stats = stats_of(fuel_events("CAM-01", quantities))

        assert evaluate_consumption(stats, config.consumption, clock) == []

    def test_low_consumption_info(self, fuel_events, stats_of, config, clock):
        stats = stats_of(fuel_events("ESC-04", [200, 200, 200, 50]))

        alerts = evaluate_consumption(stats, config.consumption, clock)

        assert [a.id for a in alerts] == ["consumo-low-ESC-04"]
        assert alerts[0].severity == AlertSeverity.INFO
        assert alerts[0].title == "Consumo abaixo da média: ESC-04"

    def test_low_consumption_needs_meaningful_average(self, fuel_events, stats_of, config, clock):
        stats = stats_of(fuel_events("GER-01", [40, 40, 40, 10]))

        assert evaluate_consumption(stats, config.consumption, clock) == []

    def test_needs_minimum_samples(self, fuel_events, stats_of, config, clock):
        stats = stats_of(fuel_events("CAM-01", [100, 500]))

        assert evaluate_consumption(stats, config.consumption, clock) == []

    def test_zero_mean_not_evaluable(self, fuel_events, stats_of, config, clock):
        stats = stats_of(fuel_events("CAM-01", [0, 0, 0]))

        assert evaluate_consumption(stats, config.consumption, clock) == []

    def test_one_alert_per_asset(self, fuel_events, stats_of, config, clock):
        events = fuel_events("CAM-01", [100, 100, 100, 200]) + fuel_events("CAM-02", [200, 200, 200, 50])

        alerts = evaluate_consumption(stats_of(events), config.consumption, clock)

        assert [a.id for a in alerts] == ["consumo-high-CAM-01", "consumo-low-CAM-02"]

    def test_custom_deviation(self, fuel_events, stats_of, clock):
        stats = stats_of(fuel_events("CAM-01", [100, 100, 100, 120]))
        thresholds = ConsumptionThresholds(deviation=0.1)

        alerts = evaluate_consumption(stats, thresholds, clock)

        assert [a.severity for a in alerts] == [AlertSeverity.WARNING]
