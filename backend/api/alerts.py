"""
Alerts API
Stateless evaluation of fleet snapshots.

Endpoints:
    POST   /api/alerts/evaluate      → Evaluate typed records
    POST   /api/alerts/evaluate/raw  → Evaluate raw sheet rows
    GET    /api/alerts/config        → Active thresholds
"""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel
from typing import Dict, List, Optional

from alerts import Alert, get_alert_engine, summarize
from core import (
    FuelEvent,
    StockSnapshot,
    HourMeterRecord,
    PersistedHourMeterRow,
    normalize_rows,
    to_fuel_event,
    to_stock_snapshot,
    to_hour_meter_record,
    to_persisted_hour_meter_row,
)

router = APIRouter(prefix="/alerts", tags=["Alerts"])


# =============================================================================
# Request Models
# =============================================================================

class EvaluateRequest(BaseModel):
    """Full snapshot of already-normalized records"""
    fuel_events: List[FuelEvent] = []
    stock_snapshots: List[StockSnapshot] = []
    hour_meter_records: Optional[List[HourMeterRecord]] = None
    persisted_hour_meter_rows: Optional[List[PersistedHourMeterRow]] = None

    class Config:
        json_schema_extra = {
            "example": {
                "fuel_events": [
                    {"asset_id": "CAM-01", "fuel_quantity": 100},
                    {"asset_id": "CAM-01", "fuel_quantity": 100},
                    {"asset_id": "CAM-01", "fuel_quantity": 100},
                    {"asset_id": "CAM-01", "fuel_quantity": 200},
                ],
                "stock_snapshots": [
                    {"location": "Tanque 01", "product_name": "Diesel S10", "quantity": 4000}
                ],
            }
        }


class RawEvaluateRequest(BaseModel):
    """Rows exactly as read from the spreadsheets"""
    fuel_events: List[Dict] = []
    stock_snapshots: List[Dict] = []
    hour_meter_records: List[Dict] = []
    persisted_hour_meter_rows: List[Dict] = []


# =============================================================================
# Evaluation
# =============================================================================

def alerts_response(alerts: List[Alert], **extra) -> dict:
    return {
        "count": len(alerts),
        "summary": summarize(alerts).to_dict(),
        "alerts": [a.to_dict() for a in alerts],
        **extra,
    }


@router.post("/evaluate")
async def evaluate(request: EvaluateRequest):
    """
    Evaluate one snapshot.

    Fuel events must be in chronological order; the last event of each
    asset is treated as its most recent reading.
    """
    engine = get_alert_engine()

    alerts = engine.evaluate(
        request.fuel_events,
        request.stock_snapshots,
        request.hour_meter_records,
        request.persisted_hour_meter_rows,
    )

    return alerts_response(alerts)


@router.post("/evaluate/raw")
async def evaluate_raw(request: RawEvaluateRequest):
    """Normalize raw sheet rows, skipping invalid ones, then evaluate"""
    fuel = normalize_rows(request.fuel_events, to_fuel_event)
    stock = normalize_rows(request.stock_snapshots, to_stock_snapshot, indexed=True)
    hour_meters = normalize_rows(request.hour_meter_records, to_hour_meter_record)
    persisted = normalize_rows(request.persisted_hour_meter_rows, to_persisted_hour_meter_row)

    total_rows = (
        len(request.fuel_events) + len(request.stock_snapshots)
        + len(request.hour_meter_records) + len(request.persisted_hour_meter_rows)
    )
    if total_rows and not (fuel.count or stock.count or hour_meters.count or persisted.count):
        raise HTTPException(400, "No valid records in request")

    engine = get_alert_engine()
    alerts = engine.evaluate(fuel.records, stock.records, hour_meters.records, persisted.records)

    return alerts_response(
        alerts,
        skipped={
            "fuel_events": fuel.errors,
            "stock_snapshots": stock.errors,
            "hour_meter_records": hour_meters.errors,
            "persisted_hour_meter_rows": persisted.errors,
        },
    )


@router.get("/config")
async def get_config():
    """Thresholds used by the running engine"""
    engine = get_alert_engine()
    return engine.config.to_dict()
