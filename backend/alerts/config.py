from __future__ import annotations

import math
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping

import yaml


@dataclass(frozen=True)
class StockThresholds:
    diesel_critical: float = 5000.0
    diesel_warning: float = 10000.0
    arla_critical: float = 500.0
    arla_warning: float = 1000.0

    # fração do mínimo abaixo da qual o alerta por local vira crítico
    critical_fraction: float = 0.5


@dataclass(frozen=True)
class ConsumptionThresholds:
    deviation: float = 0.3
    critical_deviation: float = 0.5
    min_samples: int = 3
    low_alert_min_average: float = 50.0


@dataclass(frozen=True)
class HourMeterThresholds:
    max_daily_hours: float = 24.0
    unusual_deviation: float = 0.4
    min_samples: int = 2

    # registros de horímetro já classificados
    high_usage_factor: float = 1.5
    high_usage_min_records: int = 3

    # leituras zeradas no banco
    zero_critical_count: int = 10
    zero_per_asset_min: int = 3


@dataclass(frozen=True)
class OdometerThresholds:
    unusual_deviation: float = 0.5
    min_samples: int = 2


@dataclass(frozen=True)
class AlertConfig:
    stock: StockThresholds = StockThresholds()
    consumption: ConsumptionThresholds = ConsumptionThresholds()
    hour_meter: HourMeterThresholds = HourMeterThresholds()
    odometer: OdometerThresholds = OdometerThresholds()

    def to_dict(self) -> dict[str, dict[str, Any]]:
        return asdict(self)


DEFAULT_CONFIG = AlertConfig()

_SECTIONS = {f.name for f in fields(AlertConfig)}


def _apply_section(base: Any, raw: Any, path: str) -> Any:
    if raw is None:
        return base
    if not isinstance(raw, Mapping):
        raise ValueError(f"Config inválida: '{path}' deve ser um mapa (dict).")

    known = {f.name: f for f in fields(base)}
    changes: dict[str, Any] = {}

    for key, val in raw.items():
        f = known.get(str(key))
        if f is None:
            raise ValueError(f"Config inválida: campo desconhecido '{path}.{key}'.")

        changes[f.name] = _number(val, isinstance(getattr(base, f.name), int), f"{path}.{key}")

    return replace(base, **changes)


def _number(val: Any, integral: bool, path: str) -> int | float:
    if isinstance(val, bool) or not isinstance(val, (int, float)):
        raise ValueError(f"Config inválida: '{path}' deve ser numérico: {val!r}")
    if not math.isfinite(val):
        raise ValueError(f"Config inválida: '{path}' deve ser finito: {val!r}")
    if integral:
        if isinstance(val, float) and not val.is_integer():
            raise ValueError(f"Config inválida: '{path}' deve ser inteiro: {val!r}")
        return int(val)
    return float(val)


def config_from_mapping(data: Mapping[str, Any] | None) -> AlertConfig:
    """
    Espera:
      stock:
        diesel_critical: 5000
      consumption:
        deviation: 0.3
      hour_meter:
        max_daily_hours: 24
      odometer:
        unusual_deviation: 0.5
    """
    if not data:
        return DEFAULT_CONFIG
    if not isinstance(data, Mapping):
        raise ValueError("Config inválida: raiz deve ser um mapa (dict).")

    unknown = sorted(str(k) for k in data.keys() if k not in _SECTIONS)
    if unknown:
        raise ValueError(f"Config inválida: seções desconhecidas {unknown}.")

    return AlertConfig(
        stock=_apply_section(DEFAULT_CONFIG.stock, data.get("stock"), "stock"),
        consumption=_apply_section(DEFAULT_CONFIG.consumption, data.get("consumption"), "consumption"),
        hour_meter=_apply_section(DEFAULT_CONFIG.hour_meter, data.get("hour_meter"), "hour_meter"),
        odometer=_apply_section(DEFAULT_CONFIG.odometer, data.get("odometer"), "odometer"),
    )


def load_config(path: str | None = None) -> AlertConfig:
    if not path:
        return DEFAULT_CONFIG

    p = Path(path)
    data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    return config_from_mapping(data)
