"""
Alert Models
Data structures for alerts produced by the rule evaluators.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional


class AlertCategory(str, Enum):
    """Which rule family produced the alert"""
    STOCK = "stock"
    CONSUMPTION = "consumption"
    HOUR_METER = "horimetro"
    ODOMETER = "km"
    MAINTENANCE = "manutencao"


class AlertSeverity(str, Enum):
    """Alert severity levels"""
    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"

    @property
    def rank(self) -> int:
        """Sort rank: critical first"""
        return SEVERITY_RANK[self]


SEVERITY_RANK = {
    AlertSeverity.CRITICAL: 0,
    AlertSeverity.WARNING: 1,
    AlertSeverity.INFO: 2,
}


@dataclass(frozen=True)
class Alert:
    """
    One detected anomaly.

    `timestamp` is the evaluation time, not the date of the underlying
    record; it only breaks ties between alerts of equal severity.
    `id` is unique within one evaluation and is not stable across calls.
    """
    id: str
    category: AlertCategory
    severity: AlertSeverity
    title: str
    message: str
    timestamp: datetime
    asset_id: Optional[str] = None
    value: Optional[float] = None
    average: Optional[float] = None
    deviation: Optional[float] = None

    def __post_init__(self):
        for name in ("id", "title", "message"):
            if not getattr(self, name):
                raise ValueError(f"Alert.{name} must not be empty")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "category": self.category.value,
            "severity": self.severity.value,
            "title": self.title,
            "message": self.message,
            "asset_id": self.asset_id,
            "value": _round(self.value, 2),
            "average": _round(self.average, 2),
            "deviation": _round(self.deviation, 4),
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass
class AlertSummary:
    """Badge counts for the notification list"""
    total: int = 0
    by_severity: Dict[str, int] = field(
        default_factory=lambda: {s.value: 0 for s in AlertSeverity}
    )
    by_category: Dict[str, int] = field(
        default_factory=lambda: {c.value: 0 for c in AlertCategory}
    )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "by_severity": dict(self.by_severity),
            "by_category": dict(self.by_category),
        }


def _round(value: Optional[float], digits: int) -> Optional[float]:
    return None if value is None else round(value, digits)
