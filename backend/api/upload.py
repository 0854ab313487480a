from fastapi import APIRouter, HTTPException, UploadFile, File
import pandas as pd
from io import StringIO
from typing import Dict, List, Optional

from alerts import get_alert_engine
from core import (
    normalize_rows,
    to_fuel_event,
    to_stock_snapshot,
    to_hour_meter_record,
)

from .alerts import alerts_response

router = APIRouter(prefix="/upload", tags=["Upload"])


@router.post("/csv")
async def upload_csv(
    fuel_events: Optional[UploadFile] = File(default=None),
    stock_snapshots: Optional[UploadFile] = File(default=None),
    hour_meters: Optional[UploadFile] = File(default=None),
):
    """
    Evaluate CSV exports of the fuel, stock and hour-meter sheets.

    Row order of the fuel export is taken as chronological.
    """
    if fuel_events is None and stock_snapshots is None and hour_meters is None:
        raise HTTPException(400, "Upload at least one CSV file")

    fuel = normalize_rows(await _read_rows(fuel_events), to_fuel_event)
    stock = normalize_rows(await _read_rows(stock_snapshots), to_stock_snapshot, indexed=True)
    records = normalize_rows(await _read_rows(hour_meters), to_hour_meter_record)

    engine = get_alert_engine()
    alerts = engine.evaluate(fuel.records, stock.records, records.records)

    return alerts_response(
        alerts,
        skipped={
            "fuel_events": fuel.errors,
            "stock_snapshots": stock.errors,
            "hour_meters": records.errors,
        },
    )


async def _read_rows(file: Optional[UploadFile]) -> List[Dict]:
    if file is None:
        return []

    content = await file.read()
    try:
        text = content.decode('utf-8-sig')
        df = pd.read_csv(StringIO(text), sep=_delimiter(text), dtype=str, keep_default_na=False)
    except (UnicodeDecodeError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise HTTPException(400, f"Invalid CSV '{file.filename}': {e}")

    df.columns = df.columns.str.strip()
    return df.to_dict(orient='records')


def _delimiter(text: str) -> str:
    # pt-BR sheet exports use ';'
    header = text.split('\n', 1)[0]
    return ';' if header.count(';') > header.count(',') else ','
