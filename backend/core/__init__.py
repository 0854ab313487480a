"""
Core Module
Input data contracts for the fleet alert engine.

Exports:
    Models: FuelEvent, StockSnapshot, HourMeterRecord, PersistedHourMeterRow
    Status: HourMeterStatus, classify_hour_meter_status
    Converters: to_fuel_event, to_stock_snapshot, to_hour_meter_record,
                to_persisted_hour_meter_row, normalize_rows
"""

from .models import (
    FuelEvent,
    StockSnapshot,
    HourMeterRecord,
    PersistedHourMeterRow,
    HourMeterStatus,
    NormalizationResult,
    classify_hour_meter_status,
    parse_number,
    to_fuel_event,
    to_stock_snapshot,
    to_hour_meter_record,
    to_persisted_hour_meter_row,
    normalize_rows,
)

__all__ = [
    # Models
    "FuelEvent",
    "StockSnapshot",
    "HourMeterRecord",
    "PersistedHourMeterRow",
    "HourMeterStatus",
    "NormalizationResult",
    # Parsing
    "classify_hour_meter_status",
    "parse_number",
    # Converters
    "to_fuel_event",
    "to_stock_snapshot",
    "to_hour_meter_record",
    "to_persisted_hour_meter_row",
    "normalize_rows",
]
