"""
Fleet Aggregation
Per-asset statistics from refueling events.

Update: Every evaluation (full snapshot)
Use: Input for the consumption, hour-meter and odometer rules

Precondition: events arrive in chronological order. "Last" always means
the last position in the input sequence; nothing here re-sorts by date.
"""

import logging
import math
from typing import Dict, Iterable, List, Optional

from core.models import FuelEvent

from .models import AssetStatistics, DeltaSummary

logger = logging.getLogger(__name__)


def compute_asset_stats(events: Iterable[FuelEvent]) -> Dict[str, AssetStatistics]:
    """
    Group refueling events by asset.

    Args:
        events: Chronological FuelEvents

    Returns:
        Insertion-ordered dict asset_id → AssetStatistics
    """
    stats: Dict[str, AssetStatistics] = {}
    skipped = 0

    for event in events:
        asset_id = event.asset_id
        quantity = event.fuel_quantity
        if not asset_id or not _is_number(quantity):
            skipped += 1
            continue

        asset = stats.get(asset_id)
        if asset is None:
            asset = AssetStatistics(asset_id=asset_id)
            stats[asset_id] = asset

        asset.event_count += 1
        asset.total_fuel += quantity
        asset.fuel_quantities.append(quantity)

        delta = reading_delta(event.hour_meter_previous, event.hour_meter_current)
        if delta is not None:
            asset.hour_meter_deltas.append(delta)

        delta = reading_delta(event.odometer_previous, event.odometer_current)
        if delta is not None:
            asset.odometer_deltas.append(delta)

    for asset in stats.values():
        if asset.event_count > 0:
            asset.mean_fuel_per_event = asset.total_fuel / asset.event_count

    if skipped:
        logger.debug("Skipped %d fuel events without asset id or quantity", skipped)

    return stats


def reading_delta(previous: Optional[float], current: Optional[float]) -> Optional[float]:
    """current - previous, only when both readings are present and positive"""
    if not _is_number(previous) or not _is_number(current):
        return None
    if previous <= 0 or current <= 0:
        return None
    return current - previous


def summarize_deltas(deltas: List[float], min_samples: int = 2) -> Optional[DeltaSummary]:
    """
    Compare the most recent delta with the mean of the non-negative ones.

    The last delta itself may be negative; it still counts as "last".
    Returns None when fewer than `min_samples` non-negative deltas exist.
    """
    valid = [d for d in deltas if d >= 0]
    if len(valid) < min_samples:
        return None

    return DeltaSummary(
        last=deltas[-1],
        average=sum(valid) / len(valid),
        samples=len(valid),
    )


def _is_number(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)
