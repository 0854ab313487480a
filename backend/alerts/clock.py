from __future__ import annotations

from datetime import datetime
from typing import Protocol


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    def now(self) -> datetime:
        return datetime.now()


class FixedClock:
    """
    Relógio congelado (testes, reprocessamento).
    Todas as chamadas devolvem o mesmo instante.
    """

    def __init__(self, at: datetime):
        self._at = at

    def now(self) -> datetime:
        return self._at
