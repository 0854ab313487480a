"""
Hour-Meter Rules
Three independent passes over hour-meter data:

    evaluate_hour_meter_deviation → deltas taken from refueling events
    evaluate_hour_meter_records   → pre-classified hour-meter sheet records
    evaluate_zero_readings        → persisted rows stuck at 0 → 0
"""

import logging
from typing import Dict, Iterable, List, Mapping

from analytics.fleet import summarize_deltas
from analytics.models import AssetStatistics
from core.models import HourMeterRecord, HourMeterStatus, PersistedHourMeterRow

from ..clock import Clock
from ..config import HourMeterThresholds
from ..models import Alert, AlertCategory, AlertSeverity
from .formatting import percent, whole

logger = logging.getLogger(__name__)


# =============================================================================
# Deviation pass (refueling events)
# =============================================================================

def evaluate_hour_meter_deviation(
    stats: Mapping[str, AssetStatistics],
    thresholds: HourMeterThresholds,
    clock: Clock,
) -> List[Alert]:
    """
    Per asset: negative last interval → critical (no further checks),
    interval above the daily ceiling → warning, otherwise a large
    deviation from the average interval → info.
    """
    alerts: List[Alert] = []

    for asset_id, asset in stats.items():
        summary = summarize_deltas(asset.hour_meter_deltas, thresholds.min_samples)
        if summary is None:
            continue

        last, avg = summary.last, summary.average

        if last < 0:
            alerts.append(Alert(
                id=f"horimetro-negative-{asset_id}",
                category=AlertCategory.HOUR_METER,
                severity=AlertSeverity.CRITICAL,
                title=f"Horímetro negativo: {asset_id}",
                message=f"Diferença negativa detectada: {whole(last)}h - Verificar leitura ou possível erro",
                asset_id=asset_id,
                value=last,
                average=avg,
                timestamp=clock.now(),
            ))
            continue

        if last > thresholds.max_daily_hours:
            alerts.append(Alert(
                id=f"horimetro-excessive-{asset_id}",
                category=AlertCategory.HOUR_METER,
                severity=AlertSeverity.WARNING,
                title=f"Horímetro excessivo: {asset_id}",
                message=(
                    f"Intervalo de {whole(last)}h detectado - "
                    f"Acima do limite diário de {whole(thresholds.max_daily_hours)}h"
                ),
                asset_id=asset_id,
                value=last,
                average=avg,
                timestamp=clock.now(),
            ))
        elif avg > 0 and summary.deviation > thresholds.unusual_deviation:
            direction = "acima" if last > avg else "abaixo"
            alerts.append(Alert(
                id=f"horimetro-deviation-{asset_id}",
                category=AlertCategory.HOUR_METER,
                severity=AlertSeverity.INFO,
                title=f"Horímetro {direction} da média: {asset_id}",
                message=(
                    f"Intervalo: {whole(last)}h (média: {whole(avg)}h) - "
                    f"Desvio de {percent(summary.deviation)}"
                ),
                asset_id=asset_id,
                value=last,
                average=avg,
                deviation=summary.deviation,
                timestamp=clock.now(),
            ))

    return alerts


# =============================================================================
# Data-quality pass (classified records)
# =============================================================================

def evaluate_hour_meter_records(
    records: Iterable[HourMeterRecord],
    thresholds: HourMeterThresholds,
    clock: Clock,
) -> List[Alert]:
    by_asset: Dict[str, List[HourMeterRecord]] = {}
    for record in records:
        if not record.asset_id:
            logger.debug("Skipping hour-meter record without asset id")
            continue
        by_asset.setdefault(record.asset_id, []).append(record)

    alerts: List[Alert] = []

    for asset_id, items in by_asset.items():
        errors = sum(1 for r in items if r.status == HourMeterStatus.ERROR)
        if errors:
            alerts.append(Alert(
                id=f"horimetro-data-error-{asset_id}",
                category=AlertCategory.HOUR_METER,
                severity=AlertSeverity.CRITICAL,
                title=f"Erro no horímetro: {asset_id}",
                message=f"{errors} registro(s) com erro - Verificar leituras",
                asset_id=asset_id,
                value=float(errors),
                timestamp=clock.now(),
            ))

        warnings = sum(1 for r in items if r.status == HourMeterStatus.WARNING)
        if warnings:
            alerts.append(Alert(
                id=f"horimetro-data-warning-{asset_id}",
                category=AlertCategory.HOUR_METER,
                severity=AlertSeverity.WARNING,
                title=f"Horímetro com alerta: {asset_id}",
                message=f"{warnings} registro(s) com baixa utilização",
                asset_id=asset_id,
                value=float(warnings),
                timestamp=clock.now(),
            ))

        valid = [r.worked_hours for r in items if r.worked_hours >= 0]
        if len(valid) < thresholds.high_usage_min_records:
            continue

        avg = sum(valid) / len(valid)
        last = valid[-1]
        if last > avg * thresholds.high_usage_factor:
            alerts.append(Alert(
                id=f"horimetro-data-high-{asset_id}",
                category=AlertCategory.HOUR_METER,
                severity=AlertSeverity.INFO,
                title=f"Horas acima da média: {asset_id}",
                message=f"Último: {whole(last)}h (média: {whole(avg)}h)",
                asset_id=asset_id,
                value=last,
                average=avg,
                timestamp=clock.now(),
            ))

    return alerts


# =============================================================================
# Zero-reading pass (persisted rows)
# =============================================================================

def evaluate_zero_readings(
    rows: Iterable[PersistedHourMeterRow],
    thresholds: HourMeterThresholds,
    clock: Clock,
) -> List[Alert]:
    per_asset: Dict[str, int] = {}
    for row in rows:
        if not row.asset_id:
            continue
        if row.previous_value == 0 and row.current_value == 0:
            per_asset[row.asset_id] = per_asset.get(row.asset_id, 0) + 1

    total = sum(per_asset.values())
    if total == 0:
        return []

    critical = total > thresholds.zero_critical_count
    alerts = [Alert(
        id="horimetro-zero-records",
        category=AlertCategory.HOUR_METER,
        severity=AlertSeverity.CRITICAL if critical else AlertSeverity.WARNING,
        title=f"{total} horímetros zerados",
        message=(
            "Existem registros com valores zerados que precisam ser corrigidos. "
            f"Veículos afetados: {len(per_asset)}"
        ),
        value=float(total),
        timestamp=clock.now(),
    )]

    for asset_id, count in per_asset.items():
        if count < thresholds.zero_per_asset_min:
            continue
        alerts.append(Alert(
            id=f"horimetro-zero-{asset_id}",
            category=AlertCategory.HOUR_METER,
            severity=AlertSeverity.WARNING,
            title=f"Horímetros zerados: {asset_id}",
            message=f"{count} registro(s) com valores zerados",
            asset_id=asset_id,
            value=float(count),
            timestamp=clock.now(),
        ))

    return alerts
