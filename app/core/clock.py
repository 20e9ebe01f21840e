"""
Fuente de tiempo inyectable.

Los servicios reciben un ``Clock`` por constructor y nunca llaman a
``datetime.now()`` directamente. Los tiempos son UTC sin zona horaria, igual
que las columnas ``DateTime`` de la base de datos.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Optional


class Clock(ABC):
    """Interfaz de reloj"""

    @abstractmethod
    def now(self) -> datetime:
        """Hora actual en UTC (naive)"""
        ...


class SystemClock(Clock):
    """Reloj de producción"""

    def now(self) -> datetime:
        return datetime.now(timezone.utc).replace(tzinfo=None)


class DeterministicClock(Clock):
    """
    Reloj controlado para pruebas.

    ``now()`` devuelve el mismo valor hasta que se llame ``advance()`` o
    ``set_time()``.
    """

    def __init__(self, fixed_time: Optional[datetime] = None):
        self._fixed_time = fixed_time or datetime(2024, 1, 1, 12, 0, 0)
        self._advance_seconds = 0

    def now(self) -> datetime:
        return self._fixed_time + timedelta(seconds=self._advance_seconds)

    def set_time(self, time: datetime) -> None:
        self._fixed_time = time
        self._advance_seconds = 0

    def advance(self, seconds: int = 1) -> None:
        self._advance_seconds += seconds


_system_clock = SystemClock()


def get_clock() -> Clock:
    """Clock dependency for FastAPI"""
    return _system_clock
