"""
Analytics Module
Per-asset fleet statistics derived from refueling events.

Structure:
    analytics/
    ├── models.py    → Output types (dataclasses)
    └── fleet.py     → Aggregation by asset + delta summaries

Usage:
    from analytics import fleet

    stats = fleet.compute_asset_stats(events)
    summary = fleet.summarize_deltas(stats["ESC-03"].hour_meter_deltas)

Design Principles:
    ✓ ALL functions are PURE (inputs → computation → outputs)
    ✓ NO database access
    ✓ NO state shared between calls
"""

from . import fleet

from .models import (
    AssetStatistics,
    DeltaSummary,
)

__all__ = [
    # Modules
    "fleet",
    # Types
    "AssetStatistics",
    "DeltaSummary",
]
