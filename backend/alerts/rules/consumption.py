"""
Consumption-Deviation Rules
Flags the most recent refueling of an asset when it strays from the
asset's own mean.
"""

from typing import List, Mapping

from analytics.models import AssetStatistics

from ..clock import Clock
from ..config import ConsumptionThresholds
from ..models import Alert, AlertCategory, AlertSeverity
from .formatting import percent, whole


def evaluate_consumption(
    stats: Mapping[str, AssetStatistics],
    thresholds: ConsumptionThresholds,
    clock: Clock,
) -> List[Alert]:
    alerts: List[Alert] = []

    for asset_id, asset in stats.items():
        if asset.event_count < thresholds.min_samples:
            continue

        mean = asset.mean_fuel_per_event
        if mean <= 0:
            continue

        last = asset.last_fuel_quantity
        deviation = abs(last - mean) / mean
        message = (
            f"Último abastecimento: {whole(last)}L (média: {whole(mean)}L) - "
            f"Desvio de {percent(deviation)}"
        )

        if last > mean * (1 + thresholds.deviation):
            critical = deviation > thresholds.critical_deviation
            alerts.append(Alert(
                id=f"consumo-high-{asset_id}",
                category=AlertCategory.CONSUMPTION,
                severity=AlertSeverity.CRITICAL if critical else AlertSeverity.WARNING,
                title=f"Consumo elevado: {asset_id}",
                message=message,
                asset_id=asset_id,
                value=last,
                average=mean,
                deviation=deviation,
                timestamp=clock.now(),
            ))
        elif last < mean * (1 - thresholds.deviation) and mean > thresholds.low_alert_min_average:
            alerts.append(Alert(
                id=f"consumo-low-{asset_id}",
                category=AlertCategory.CONSUMPTION,
                severity=AlertSeverity.INFO,
                title=f"Consumo abaixo da média: {asset_id}",
                message=message,
                asset_id=asset_id,
                value=last,
                average=mean,
                deviation=deviation,
                timestamp=clock.now(),
            ))

    return alerts
