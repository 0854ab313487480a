"""
Alert System
Rule-based anomaly alerts over fleet telemetry snapshots.

Structure:
    alerts/
    ├── models.py    → Alert, AlertCategory, AlertSeverity, AlertSummary
    ├── config.py    → AlertConfig (immutable thresholds) + YAML loader
    ├── clock.py     → Clock, SystemClock, FixedClock
    ├── rules/       → stock, consumption, hour_meter, odometer
    └── engine.py    → AlertEngine (merge + sort)

Usage:
    from alerts import AlertEngine, FixedClock

    engine = AlertEngine(clock=FixedClock(datetime(2025, 3, 1, 8, 0)))
    alerts = engine.evaluate(fuel_events, stock_snapshots, hour_meter_records)

    for alert in alerts:
        print(alert.severity.value, alert.title)
"""

from .models import (
    Alert,
    AlertCategory,
    AlertSeverity,
    AlertSummary,
    SEVERITY_RANK,
)

from .config import (
    AlertConfig,
    StockThresholds,
    ConsumptionThresholds,
    HourMeterThresholds,
    OdometerThresholds,
    DEFAULT_CONFIG,
    config_from_mapping,
    load_config,
)

from .clock import Clock, SystemClock, FixedClock

from .engine import (
    AlertEngine,
    EvaluationContext,
    EVALUATORS,
    generate_all_alerts,
    get_alert_engine,
    reset_alert_engine,
    sort_alerts,
    summarize,
)

__all__ = [
    # Models
    "Alert",
    "AlertCategory",
    "AlertSeverity",
    "AlertSummary",
    "SEVERITY_RANK",
    # Config
    "AlertConfig",
    "StockThresholds",
    "ConsumptionThresholds",
    "HourMeterThresholds",
    "OdometerThresholds",
    "DEFAULT_CONFIG",
    "config_from_mapping",
    "load_config",
    # Clock
    "Clock",
    "SystemClock",
    "FixedClock",
    # Engine
    "AlertEngine",
    "EvaluationContext",
    "EVALUATORS",
    "generate_all_alerts",
    "get_alert_engine",
    "reset_alert_engine",
    "sort_alerts",
    "summarize",
]
