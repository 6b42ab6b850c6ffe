from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Optional

from .models import Classification, EventType, Sample


# textos exibidos ao usuário (alerta / log de eventos)
EVENT_TEXT: Dict[EventType, Dict[str, str]] = {
    EventType.HIGH: {
        "title": "High Load",
        "message": "Caution! The CPU has been under high load for an extended period of time.",
    },
    EventType.RECOVERED: {
        "title": "Recovered",
        "message": "The CPU has recovered from a period of high load and has returned to normal.",
    },
}


@dataclass(frozen=True)
class StatusEvent:
    """
    Evento de status detectado (high / recovered).
    """
    type: EventType
    timestamp: int  # epoch ms da amostra que disparou

    @property
    def title(self) -> str:
        return EVENT_TEXT[self.type]["title"]

    @property
    def message(self) -> str:
        return EVENT_TEXT[self.type]["message"]


@dataclass(frozen=True)
class StatusReport:
    """
    Resultado de um tick de polling.
    """
    sample: Sample
    classification: Classification
    event: Optional[StatusEvent] = None
