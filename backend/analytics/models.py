"""
Analytics Output Types
Dataclasses for per-asset statistics.
"""

from dataclasses import dataclass, field
from typing import List


# =============================================================================
# FLEET AGGREGATION OUTPUT TYPES
# =============================================================================

@dataclass
class AssetStatistics:
    """
    Derived statistics for one asset over the current snapshot.

    Call-scoped: rebuilt on every evaluation, never persisted.
    List order follows input order, so the last element is the most recent.
    """
    asset_id: str
    total_fuel: float = 0.0
    event_count: int = 0
    mean_fuel_per_event: float = 0.0
    fuel_quantities: List[float] = field(default_factory=list)
    hour_meter_deltas: List[float] = field(default_factory=list)   # current - previous
    odometer_deltas: List[float] = field(default_factory=list)     # current - previous

    @property
    def last_fuel_quantity(self) -> float:
        return self.fuel_quantities[-1] if self.fuel_quantities else 0.0


@dataclass(frozen=True)
class DeltaSummary:
    """Most recent delta against the mean of the non-negative ones."""
    last: float
    average: float
    samples: int          # non-negative deltas behind the average

    @property
    def deviation(self) -> float:
        return abs(self.last - self.average) / self.average if self.average > 0 else 0.0
