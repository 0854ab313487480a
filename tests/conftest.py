"""
Pytest Configuration for Fleet Alerts Tests
Shared clocks and record builders.
"""

from datetime import datetime, timedelta

import pytest

from alerts import DEFAULT_CONFIG, FixedClock, reset_alert_engine
from analytics.fleet import compute_asset_stats
from core import FuelEvent, HourMeterRecord, HourMeterStatus, PersistedHourMeterRow, StockSnapshot

EVALUATED_AT = datetime(2025, 3, 1, 8, 0, 0)


class TickingClock:
    """Advances one second on every call"""

    def __init__(self, start: datetime = EVALUATED_AT):
        self._current = start

    def now(self) -> datetime:
        self._current += timedelta(seconds=1)
        return self._current


@pytest.fixture
def clock():
    return FixedClock(EVALUATED_AT)


@pytest.fixture
def ticking_clock():
    return TickingClock()


@pytest.fixture
def config():
    return DEFAULT_CONFIG


@pytest.fixture
def fuel_events():
    """Factory: fuel_events(asset, quantities) → chronological FuelEvents"""
    def _build(asset_id, quantities):
        return [FuelEvent(asset_id=asset_id, fuel_quantity=q) for q in quantities]
    return _build


@pytest.fixture
def hour_meter_events():
    """Factory: one FuelEvent per hour-meter interval, readings starting at 1000"""
    def _build(asset_id, deltas, quantity=100.0):
        events = []
        for i, delta in enumerate(deltas):
            previous = 1000.0 + i * 100
            events.append(FuelEvent(
                asset_id=asset_id,
                fuel_quantity=quantity,
                hour_meter_previous=previous,
                hour_meter_current=previous + delta,
            ))
        return events
    return _build


@pytest.fixture
def odometer_events():
    """Factory: one FuelEvent per odometer interval, readings starting at 50000"""
    def _build(asset_id, deltas, quantity=100.0):
        events = []
        for i, delta in enumerate(deltas):
            previous = 50000.0 + i * 1000
            events.append(FuelEvent(
                asset_id=asset_id,
                fuel_quantity=quantity,
                odometer_previous=previous,
                odometer_current=previous + delta,
            ))
        return events
    return _build


@pytest.fixture
def stats_of():
    return compute_asset_stats


@pytest.fixture
def stock():
    def _build(product_name, quantity, minimum=0.0, id="1", location="Tanque 01"):
        return StockSnapshot(
            id=id,
            location=location,
            product_name=product_name,
            quantity=quantity,
            unit="L",
            minimum_threshold=minimum,
        )
    return _build


@pytest.fixture
def hour_meter_record():
    def _build(asset_id, worked_hours, status=HourMeterStatus.SUCCESS):
        return HourMeterRecord(
            asset_id=asset_id,
            previous=1000.0,
            current=1000.0 + worked_hours,
            worked_hours=worked_hours,
            status=status,
        )
    return _build


@pytest.fixture
def zero_row():
    def _build(asset_id, previous=0.0, current=0.0):
        return PersistedHourMeterRow(asset_id=asset_id, previous_value=previous, current_value=current)
    return _build


@pytest.fixture(autouse=True)
def fresh_engine(monkeypatch):
    """Each test gets an engine built from the default config"""
    monkeypatch.delenv("FLEET_ALERTS_CONFIG", raising=False)
    reset_alert_engine()
    yield
    reset_alert_engine()
