import logging
import os
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from analytics.fleet import compute_asset_stats
from analytics.models import AssetStatistics
from core.models import FuelEvent, HourMeterRecord, PersistedHourMeterRow, StockSnapshot

from .clock import Clock, SystemClock
from .config import AlertConfig, DEFAULT_CONFIG, load_config
from .models import Alert, AlertSummary
from .rules import (
    evaluate_consumption,
    evaluate_hour_meter_deviation,
    evaluate_hour_meter_records,
    evaluate_odometer,
    evaluate_stock,
    evaluate_zero_readings,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EvaluationContext:
    """Read-only state shared by every rule during one evaluation"""
    fuel_events: Tuple[FuelEvent, ...]
    stock_snapshots: Tuple[StockSnapshot, ...]
    hour_meter_records: Tuple[HourMeterRecord, ...]
    persisted_rows: Tuple[PersistedHourMeterRow, ...]
    asset_stats: Dict[str, AssetStatistics]
    config: AlertConfig
    clock: Clock


Evaluator = Callable[[EvaluationContext], List[Alert]]


def _stock(ctx: EvaluationContext) -> List[Alert]:
    return evaluate_stock(ctx.stock_snapshots, ctx.config.stock, ctx.clock)


def _consumption(ctx: EvaluationContext) -> List[Alert]:
    return evaluate_consumption(ctx.asset_stats, ctx.config.consumption, ctx.clock)


def _hour_meter_deviation(ctx: EvaluationContext) -> List[Alert]:
    return evaluate_hour_meter_deviation(ctx.asset_stats, ctx.config.hour_meter, ctx.clock)


def _hour_meter_records(ctx: EvaluationContext) -> List[Alert]:
    return evaluate_hour_meter_records(ctx.hour_meter_records, ctx.config.hour_meter, ctx.clock)


def _zero_readings(ctx: EvaluationContext) -> List[Alert]:
    return evaluate_zero_readings(ctx.persisted_rows, ctx.config.hour_meter, ctx.clock)


def _odometer(ctx: EvaluationContext) -> List[Alert]:
    return evaluate_odometer(ctx.asset_stats, ctx.config.odometer, ctx.clock)


# Concatenation order of the merged list
EVALUATORS: Tuple[Tuple[str, Evaluator], ...] = (
    ("stock", _stock),
    ("consumption", _consumption),
    ("hour_meter_deviation", _hour_meter_deviation),
    ("hour_meter_records", _hour_meter_records),
    ("zero_readings", _zero_readings),
    ("odometer", _odometer),
)


def sort_alerts(alerts: Iterable[Alert]) -> List[Alert]:
    """
    Severity first (critical → info), newest first within a severity.
    Both passes are stable, so equal timestamps keep construction order.
    """
    ordered = sorted(alerts, key=lambda a: a.timestamp, reverse=True)
    ordered.sort(key=lambda a: a.severity.rank)
    return ordered


def summarize(alerts: Iterable[Alert]) -> AlertSummary:
    summary = AlertSummary()
    for alert in alerts:
        summary.total += 1
        summary.by_severity[alert.severity.value] += 1
        summary.by_category[alert.category.value] += 1
    return summary


class AlertEngine:
    """
    Stateless evaluator: every call recomputes from the snapshot it is given.

    Precondition: `fuel_events` is chronological. The most recent reading of
    an asset is its last event in the sequence.
    """

    def __init__(self, config: Optional[AlertConfig] = None, clock: Optional[Clock] = None):
        self._config = config or DEFAULT_CONFIG
        self._clock = clock or SystemClock()

    @property
    def config(self) -> AlertConfig:
        return self._config

    def evaluate(
        self,
        fuel_events: Sequence[FuelEvent],
        stock_snapshots: Sequence[StockSnapshot],
        hour_meter_records: Optional[Sequence[HourMeterRecord]] = None,
        persisted_rows: Optional[Sequence[PersistedHourMeterRow]] = None,
        clock: Optional[Clock] = None,
    ) -> List[Alert]:
        events = tuple(fuel_events or ())
        ctx = EvaluationContext(
            fuel_events=events,
            stock_snapshots=tuple(stock_snapshots or ()),
            hour_meter_records=tuple(hour_meter_records or ()),
            persisted_rows=tuple(persisted_rows or ()),
            asset_stats=compute_asset_stats(events),
            config=self._config,
            clock=clock or self._clock,
        )

        merged: List[Alert] = []
        for name, evaluator in EVALUATORS:
            produced = evaluator(ctx)
            logger.debug("%s: %d alert(s)", name, len(produced))
            merged.extend(produced)

        return sort_alerts(merged)


def generate_all_alerts(
    fuel_events: Sequence[FuelEvent],
    stock_snapshots: Sequence[StockSnapshot],
    hour_meter_records: Optional[Sequence[HourMeterRecord]] = None,
    persisted_rows: Optional[Sequence[PersistedHourMeterRow]] = None,
    *,
    config: Optional[AlertConfig] = None,
    clock: Optional[Clock] = None,
) -> List[Alert]:
    """One-shot evaluation without keeping an engine around"""
    engine = AlertEngine(config=config, clock=clock)
    return engine.evaluate(fuel_events, stock_snapshots, hour_meter_records, persisted_rows)


CONFIG_ENV_VAR = "FLEET_ALERTS_CONFIG"

_alert_engine: Optional[AlertEngine] = None


def get_alert_engine() -> AlertEngine:
    global _alert_engine
    if _alert_engine is None:
        _alert_engine = AlertEngine(config=load_config(os.environ.get(CONFIG_ENV_VAR)))
    return _alert_engine


def reset_alert_engine() -> None:
    """Drop the cached engine so the next call re-reads the config"""
    global _alert_engine
    _alert_engine = None
