"""
Odometer (KM) Rules
Same shape as the hour-meter deviation pass, without a daily ceiling.
"""

from typing import List, Mapping

from analytics.fleet import summarize_deltas
from analytics.models import AssetStatistics

from ..clock import Clock
from ..config import OdometerThresholds
from ..models import Alert, AlertCategory, AlertSeverity
from .formatting import percent, whole


def evaluate_odometer(
    stats: Mapping[str, AssetStatistics],
    thresholds: OdometerThresholds,
    clock: Clock,
) -> List[Alert]:
    alerts: List[Alert] = []

    for asset_id, asset in stats.items():
        summary = summarize_deltas(asset.odometer_deltas, thresholds.min_samples)
        if summary is None:
            continue

        last, avg = summary.last, summary.average

        if last < 0:
            alerts.append(Alert(
                id=f"km-negative-{asset_id}",
                category=AlertCategory.ODOMETER,
                severity=AlertSeverity.CRITICAL,
                title=f"KM negativo: {asset_id}",
                message=f"Diferença negativa detectada: {whole(last)} km - Verificar leitura",
                asset_id=asset_id,
                value=last,
                average=avg,
                timestamp=clock.now(),
            ))
            continue

        if avg > 0 and summary.deviation > thresholds.unusual_deviation:
            is_high = last > avg
            alerts.append(Alert(
                id=f"km-deviation-{asset_id}",
                category=AlertCategory.ODOMETER,
                severity=AlertSeverity.WARNING if is_high else AlertSeverity.INFO,
                title=f"KM {'acima' if is_high else 'abaixo'} da média: {asset_id}",
                message=(
                    f"Intervalo: {whole(last)} km (média: {whole(avg)} km) - "
                    f"Desvio de {percent(summary.deviation)}"
                ),
                asset_id=asset_id,
                value=last,
                average=avg,
                deviation=summary.deviation,
                timestamp=clock.now(),
            ))

    return alerts
