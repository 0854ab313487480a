"""
Alert Rules
One module per anomaly category. Every rule is a pure function that reads
its inputs, thresholds and clock and returns a list of Alerts.
"""

from .stock import evaluate_stock
from .consumption import evaluate_consumption
from .hour_meter import (
    evaluate_hour_meter_deviation,
    evaluate_hour_meter_records,
    evaluate_zero_readings,
)
from .odometer import evaluate_odometer

__all__ = [
    "evaluate_stock",
    "evaluate_consumption",
    "evaluate_hour_meter_deviation",
    "evaluate_hour_meter_records",
    "evaluate_zero_readings",
    "evaluate_odometer",
]
