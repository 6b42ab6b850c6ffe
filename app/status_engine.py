from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import List, Optional, Tuple

from domain.classifier import classify, sequence_span_ms
from domain.events import StatusEvent
from domain.models import Classification, EngineState, EventType, SampleSequence


@dataclass
class StatusEngineConfig:
    status_window_ms: int = 2 * 60 * 1000


def evaluate(
    samples: SampleSequence,
    state: EngineState,
    status_window_ms: int,
    classification: Optional[Classification] = None,
) -> Tuple[Optional[StatusEvent], EngineState]:
    """
    Decide se a sequência atual gera um evento.

    Guardas (em ordem):
      1. sequência vazia -> nada
      2. span da sequência inteira < status_window_ms -> nada (histórico insuficiente)
    Transições:
      - HIGH   e último em {None, RECOVERED} -> evento high
      - NORMAL e último == HIGH              -> evento recovered
      - resto (MIXED, repetições)            -> nada
    Nunca levanta exceção; entrada malformada vira "nada".
    """
    if not samples:
        return None, state

    if sequence_span_ms(samples) < status_window_ms:
        return None, state

    if classification is None:
        classification = classify(samples, status_window_ms)

    last = state.last_emitted_type
    newest_ts = int(samples[-1].timestamp)

    if classification == Classification.HIGH and last in (None, EventType.RECOVERED):
        return (
            StatusEvent(type=EventType.HIGH, timestamp=newest_ts),
            EngineState(last_emitted_type=EventType.HIGH),
        )

    if classification == Classification.NORMAL and last == EventType.HIGH:
        return (
            StatusEvent(type=EventType.RECOVERED, timestamp=newest_ts),
            EngineState(last_emitted_type=EventType.RECOVERED),
        )

    return None, state


class StatusEventMonitor:
    """
    Mantém o EngineState e o log de eventos (append-only).
    Não publica nada: apenas gera StatusEvent.
    """

    def __init__(self, cfg: StatusEngineConfig | None = None):
        self._cfg = cfg or StatusEngineConfig()
        self._lock = threading.Lock()
        self._state = EngineState()
        self._events: List[StatusEvent] = []

    @property
    def status_window_ms(self) -> int:
        return self._cfg.status_window_ms

    @property
    def state(self) -> EngineState:
        with self._lock:
            return self._state

    @property
    def events(self) -> List[StatusEvent]:
        with self._lock:
            return list(self._events)

    def classify(self, samples: SampleSequence) -> Classification:
        return classify(samples, self._cfg.status_window_ms)

    def observe(
        self,
        samples: SampleSequence,
        classification: Optional[Classification] = None,
    ) -> Optional[StatusEvent]:
        # escritor único: estado + append no log na mesma seção crítica
        with self._lock:
            event, new_state = evaluate(
                samples,
                self._state,
                self._cfg.status_window_ms,
                classification=classification,
            )
            if event is None:
                return None

            self._state = new_state
            self._events.append(event)
            return event
