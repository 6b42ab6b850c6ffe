from __future__ import annotations

from typing import Protocol

from .events import StatusEvent


class LoadSourceError(RuntimeError):
    """Falha ao obter o load average (local ou via HTTP)."""


class Clock(Protocol):
    def now_ms(self) -> int: ...


class LoadSource(Protocol):
    def read_load_average(self) -> float:
        """Load average normalizado. Levanta LoadSourceError em falha."""
        ...


class EventSink(Protocol):
    def publish(self, event: StatusEvent) -> None: ...
