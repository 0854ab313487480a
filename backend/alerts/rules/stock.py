"""
Stock-Level Rules
Per-location minimums plus fleet-wide diesel/arla totals.
"""

import logging
import math
from typing import Iterable, List, Optional, Set

from core.models import StockSnapshot

from ..clock import Clock
from ..config import StockThresholds
from ..models import Alert, AlertCategory, AlertSeverity
from .formatting import thousands

logger = logging.getLogger(__name__)

DIESEL_KEYWORDS = ("diesel", "s10", "s-10")
ARLA_KEYWORDS = ("arla",)


def product_family(product_name: str) -> Optional[str]:
    """'diesel', 'arla' or None; diesel wins when a name matches both"""
    name = (product_name or "").lower()
    if any(k in name for k in DIESEL_KEYWORDS):
        return "diesel"
    if any(k in name for k in ARLA_KEYWORDS):
        return "arla"
    return None


def evaluate_stock(
    snapshots: Iterable[StockSnapshot],
    thresholds: StockThresholds,
    clock: Clock,
) -> List[Alert]:
    alerts: List[Alert] = []
    totals = {"diesel": 0.0, "arla": 0.0}
    used_keys: Set[str] = set()

    for index, item in enumerate(snapshots):
        if not math.isfinite(item.quantity):
            logger.debug("Skipping stock snapshot %r: quantity not numeric", item.id or index)
            continue

        family = product_family(item.product_name)
        if family is not None:
            totals[family] += item.quantity

        minimum = item.minimum_threshold
        if minimum > 0 and item.quantity < minimum:
            critical = item.quantity < minimum * thresholds.critical_fraction
            alerts.append(Alert(
                id=f"stock-min-{_location_key(item, index, used_keys)}",
                category=AlertCategory.STOCK,
                severity=AlertSeverity.CRITICAL if critical else AlertSeverity.WARNING,
                title=f"{item.product_name} abaixo do mínimo",
                message=(
                    f"{item.location or 'Local não informado'}: {thousands(item.quantity)} {item.unit} "
                    f"(mínimo: {thousands(minimum)} {item.unit})"
                ),
                value=item.quantity,
                average=minimum,
                timestamp=clock.now(),
            ))

    family_alert = _family_alert(
        "diesel", "Diesel", totals["diesel"],
        thresholds.diesel_critical, thresholds.diesel_warning, clock,
    )
    if family_alert:
        alerts.append(family_alert)

    family_alert = _family_alert(
        "arla", "Arla", totals["arla"],
        thresholds.arla_critical, thresholds.arla_warning, clock,
    )
    if family_alert:
        alerts.append(family_alert)

    return alerts


def _location_key(item: StockSnapshot, index: int, used: Set[str]) -> str:
    """Snapshot id (or 1-based position); a repeated key gets the position appended"""
    key = item.id or str(index + 1)
    while key in used:
        key = f"{key}-{index + 1}"
    used.add(key)
    return key


def _family_alert(
    key: str,
    label: str,
    total: float,
    critical_below: float,
    warning_below: float,
    clock: Clock,
) -> Optional[Alert]:
    """At most one alert per family; critical is checked first"""
    if total <= 0:
        return None

    if total < critical_below:
        return Alert(
            id=f"stock-{key}-critical",
            category=AlertCategory.STOCK,
            severity=AlertSeverity.CRITICAL,
            title=f"Estoque {label} Crítico",
            message=f"Estoque total de {label}: {thousands(total)} L - Necessário reabastecimento urgente",
            value=total,
            average=critical_below,
            timestamp=clock.now(),
        )

    if total < warning_below:
        return Alert(
            id=f"stock-{key}-warning",
            category=AlertCategory.STOCK,
            severity=AlertSeverity.WARNING,
            title=f"Estoque {label} Baixo",
            message=f"Estoque total de {label}: {thousands(total)} L - Considere reabastecer",
            value=total,
            average=warning_below,
            timestamp=clock.now(),
        )

    return None
