"""
Unit tests for odometer (KM) alerts
"""

import pytest

from alerts import AlertCategory, AlertSeverity
from alerts.rules import evaluate_odometer


class TestOdometerRules:

    def test_negative_interval(self, odometer_events, stats_of, config, clock):
        stats = stats_of(odometer_events("CAM-03", [100, 120, -50]))

        alerts = evaluate_odometer(stats, config.odometer, clock)

        assert [a.id for a in alerts] == ["km-negative-CAM-03"]
        assert alerts[0].category == AlertCategory.ODOMETER
        assert alerts[0].severity == AlertSeverity.CRITICAL

    def test_increase_is_warning(self, odometer_events, stats_of, config, clock):
        stats = stats_of(odometer_events("CAM-03", [100, 100, 250]))

        alerts = evaluate_odometer(stats, config.odometer, clock)

        assert [a.id for a in alerts] == ["km-deviation-CAM-03"]
        assert alerts[0].severity == AlertSeverity.WARNING
        assert alerts[0].title == "KM acima da média: CAM-03"
        assert alerts[0].deviation == pytest.approx(2 / 3)

    def test_decrease_is_info(self, odometer_events, stats_of, config, clock):
        stats = stats_of(odometer_events("CAM-03", [100, 100, 20]))

        alerts = evaluate_odometer(stats, config.odometer, clock)

        assert alerts[0].severity == AlertSeverity.INFO
        assert alerts[0].title == "KM abaixo da média: CAM-03"

    @pytest.mark.parametrize("deltas", [
        [100, 110, 105],
        [100, 100, 130],
        [100],
    ])
    def test_quiet_cases(self, odometer_events, stats_of, config, clock, deltas):
        stats = stats_of(odometer_events("CAM-03", deltas))

        assert evaluate_odometer(stats, config.odometer, clock) == []

    def test_no_daily_ceiling(self, odometer_events, stats_of, config, clock):
        stats = stats_of(odometer_events("CAM-03", [300, 320, 310]))

        assert evaluate_odometer(stats, config.odometer, clock) == []
