"""
Domain Models
The SINGLE SOURCE OF TRUTH for telemetry input formats.

After normalization, the alert engine only sees these types.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# Hour-meter status
# =============================================================================

class HourMeterStatus(str, Enum):
    """Upstream classification of an hour-meter reading"""
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


LOW_USAGE_HOURS = 10.0


def classify_hour_meter_status(worked_hours: float) -> HourMeterStatus:
    """error if the counter went backwards, warning on low usage"""
    if worked_hours < 0:
        return HourMeterStatus.ERROR
    if worked_hours < LOW_USAGE_HOURS:
        return HourMeterStatus.WARNING
    return HourMeterStatus.SUCCESS


# =============================================================================
# FuelEvent: The Core Data Contract
# =============================================================================

class FuelEvent(BaseModel):
    """
    A single refueling occurrence.

    Sequences of FuelEvents are chronological: the engine treats the last
    event of an asset as its most recent one and never re-sorts by date.

    Fields:
        asset_id: Vehicle/equipment code (CAM-01, ESC-03)
        fuel_quantity: Liters delivered
        hour_meter_previous/current: Optional hour-meter pair
        odometer_previous/current: Optional odometer pair
    """
    model_config = ConfigDict(frozen=True)

    asset_id: str
    fuel_quantity: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    hour_meter_previous: Optional[float] = None
    hour_meter_current: Optional[float] = None
    odometer_previous: Optional[float] = None
    odometer_current: Optional[float] = None

    @field_validator('asset_id', mode='before')
    @classmethod
    def strip_asset_id(cls, v):
        return v.strip() if isinstance(v, str) else v


class StockSnapshot(BaseModel):
    """Current level of one product at one storage location"""
    model_config = ConfigDict(frozen=True)

    id: str = ""
    location: str = ""
    product_name: str
    quantity: float = Field(default=0.0, allow_inf_nan=False)
    unit: str = "L"
    minimum_threshold: float = Field(default=0.0, allow_inf_nan=False)
    maximum_threshold: float = Field(default=0.0, allow_inf_nan=False)


class HourMeterRecord(BaseModel):
    """
    Hour-meter reading with its status already assigned upstream.

    The engine trusts `status` as given; use `to_hour_meter_record` to build
    one from a raw row with the standard classification.
    """
    model_config = ConfigDict(frozen=True)

    asset_id: str
    previous: float = 0.0
    current: float = 0.0
    worked_hours: float = Field(default=0.0, allow_inf_nan=False)
    status: HourMeterStatus = HourMeterStatus.SUCCESS

    @field_validator('asset_id', mode='before')
    @classmethod
    def strip_asset_id(cls, v):
        return v.strip() if isinstance(v, str) else v


class PersistedHourMeterRow(BaseModel):
    """Hour-meter row as stored in the database (zero-reading check only)"""
    model_config = ConfigDict(frozen=True)

    asset_id: str
    previous_value: float = 0.0
    current_value: float = 0.0

    @field_validator('asset_id', mode='before')
    @classmethod
    def strip_asset_id(cls, v):
        return v.strip() if isinstance(v, str) else v


# =============================================================================
# Normalization Results
# =============================================================================

@dataclass
class NormalizationResult:
    """Result of converting raw rows"""
    records: List = field(default_factory=list)
    errors: int = 0

    @property
    def count(self) -> int:
        return len(self.records)


# =============================================================================
# Parsing helpers
# =============================================================================

_NUMBER_JUNK = re.compile(r"[^\d.,-]")


def parse_number(value) -> float:
    """
    Parse a spreadsheet number.

    Handles both "1.234,56" (pt-BR) and "1,234.56" styles, plus the
    ambiguous single-separator cases ("12,5" → 12.5, "1.500" → 1500).
    Empty or unparseable values become 0.0.
    """
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value) if value == value else 0.0

    cleaned = _NUMBER_JUNK.sub("", str(value)).strip()
    if not cleaned:
        return 0.0

    has_comma = "," in cleaned
    has_dot = "." in cleaned

    if has_comma and has_dot:
        if cleaned.rfind(",") > cleaned.rfind("."):
            cleaned = cleaned.replace(".", "").replace(",", ".", 1)
        else:
            cleaned = cleaned.replace(",", "")
    elif has_comma:
        if cleaned.count(",") == 1:
            cleaned = cleaned.replace(",", ".")
        else:
            cleaned = cleaned.replace(",", "")
    elif has_dot:
        if cleaned.count(".") > 1:
            cleaned = cleaned.replace(".", "")
        else:
            whole, frac = cleaned.split(".")
            # "1.500" is a thousands separator, "0.500" is not
            if len(frac) == 3 and _leading_int(whole) >= 1:
                cleaned = whole + frac

    try:
        return float(cleaned)
    except ValueError:
        return 0.0


def _leading_int(text: str) -> int:
    digits = re.match(r"-?\d+", text)
    return int(digits.group()) if digits else 0


def _first(row: Dict, *keys, default=None):
    """First non-empty value among column-name variants"""
    for key in keys:
        val = row.get(key)
        if val is None or (isinstance(val, float) and val != val):
            continue
        if isinstance(val, str) and not val.strip():
            continue
        return val
    return default


def _optional_number(row: Dict, *keys) -> Optional[float]:
    val = _first(row, *keys)
    if val is None:
        return None
    return parse_number(val)


# =============================================================================
# Converters: External → Internal
# =============================================================================

def to_fuel_event(data: Dict) -> FuelEvent:
    """
    Convert a raw refueling row to FuelEvent.

    This is the NORMALIZATION POINT for fuel sheets.
    Handles the column variants of the field app and the legacy sheets.
    """
    return FuelEvent(
        asset_id=str(_first(data, 'asset_id', 'Veiculo', 'veiculo', 'Veículo', default='')),
        fuel_quantity=parse_number(_first(
            data, 'fuel_quantity', 'Quantidade', 'Quantidade_Combustivel', 'quantidade_combustivel'
        )),
        hour_meter_previous=_optional_number(
            data, 'hour_meter_previous', 'Horimetro_Anterior_Eq', 'Horimetro_Anterior', 'horimetro_anterior'
        ),
        hour_meter_current=_optional_number(
            data, 'hour_meter_current', 'Horimetro_Atual_Eq', 'Horimetro_Atual', 'horimetro_atual'
        ),
        odometer_previous=_optional_number(
            data, 'odometer_previous', 'Km_Anterior_Eq', 'Km_Anterior', 'km_anterior'
        ),
        odometer_current=_optional_number(
            data, 'odometer_current', 'Km_Atual_Eq', 'Km_Atual', 'km_atual'
        ),
    )


def to_stock_snapshot(data: Dict, index: int = 0) -> StockSnapshot:
    """Convert a raw stock row; `index` provides a fallback id"""
    product = _first(data, 'product_name', 'Produto', 'produto', 'Item', 'item', 'Descricao')
    if product is None:
        raise ValueError("Stock row without product name")

    return StockSnapshot(
        id=str(_first(data, 'id', 'Id', 'ID', default=index + 1)),
        location=str(_first(data, 'location', 'Local', 'local', default='')),
        product_name=str(product),
        quantity=parse_number(_first(
            data, 'quantity', 'Quantidade', 'quantidade', 'Qtd', 'qtd', 'EstoqueAtual'
        )),
        unit=str(_first(data, 'unit', 'Unidade', 'unidade', default='L')),
        minimum_threshold=parse_number(_first(data, 'minimum_threshold', 'Minimo', 'minimo', 'Mínimo')),
        maximum_threshold=parse_number(_first(data, 'maximum_threshold', 'Maximo', 'maximo', 'Máximo')),
    )


def to_hour_meter_record(data: Dict) -> HourMeterRecord:
    """Convert a raw hour-meter row, computing worked hours and status"""
    previous = parse_number(_first(
        data, 'previous', 'Hor_Anterior', 'Horimetro_Anterior', 'Anterior', 'anterior'
    ))
    current = parse_number(_first(
        data, 'current', 'Hor_Atual', 'Horimetro_Atual', 'Atual', 'atual'
    ))
    worked = current - previous

    return HourMeterRecord(
        asset_id=str(_first(data, 'asset_id', 'Veiculo', 'veiculo', 'Veículo', default='')),
        previous=previous,
        current=current,
        worked_hours=worked,
        status=classify_hour_meter_status(worked),
    )


def to_persisted_hour_meter_row(data: Dict) -> PersistedHourMeterRow:
    """Convert a database row (snake_case columns)"""
    return PersistedHourMeterRow(
        asset_id=str(_first(data, 'asset_id', 'veiculo', 'Veiculo', default='')),
        previous_value=parse_number(_first(data, 'previous_value', 'horimetro_anterior')),
        current_value=parse_number(_first(data, 'current_value', 'horimetro_atual')),
    )


T = TypeVar("T", bound=BaseModel)


def normalize_rows(rows: List[Dict], converter: Callable[..., T], indexed: bool = False) -> NormalizationResult:
    """
    Apply a converter to every row.

    Rows failing validation are counted and skipped; the remaining records
    keep their input order.
    """
    records = []
    errors = 0

    for index, row in enumerate(rows):
        try:
            record = converter(row, index) if indexed else converter(row)
        except (ValueError, TypeError):
            errors += 1
            continue
        records.append(record)

    return NormalizationResult(records=records, errors=errors)
