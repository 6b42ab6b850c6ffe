from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from domain.events import StatusEvent, StatusReport
from domain.models import Sample, WindowSnapshot
from domain.ports import Clock, EventSink, LoadSource, LoadSourceError
from infra.window_buffer import RetentionWindow

from .status_engine import StatusEventMonitor

logger = logging.getLogger(__name__)


@dataclass
class WindowPolicy:
    retention_ms: int = 10 * 60 * 1000


class LoadStatusPipeline:
    """
    Pipeline de um tick de polling.

    - lê o load average da fonte (local ou HTTP)
    - carimba com o clock (ms) e guarda na janela de retenção
    - classifica a janela recente e avalia o motor de eventos
    - publica o evento (se houver) no sink
    """

    def __init__(
        self,
        source: LoadSource,
        clock: Clock,
        monitor: StatusEventMonitor,
        policy: WindowPolicy,
        *,
        sink: Optional[EventSink] = None,
    ):
        self.source = source
        self.clock = clock
        self.monitor = monitor
        self.policy = policy
        self.sink = sink

        self.window = RetentionWindow(policy.retention_ms)

        self.total_ticks = 0
        self.total_failed = 0

    def tick(self) -> Optional[StatusReport]:
        self.total_ticks += 1
        try:
            value = self.source.read_load_average()
        except LoadSourceError as e:
            # fetch falhou: não registra amostra neste tick
            self.total_failed += 1
            logger.warning("skipping tick: %s", e)
            return None

        now = self.clock.now_ms()
        sample = Sample(timestamp=now, value=float(value))
        samples = self.window.append(sample, now_ms=now)

        # classificação recalculada do zero a cada tick (janela desliza)
        classification = self.monitor.classify(samples)
        event = self.monitor.observe(samples, classification=classification)

        if event is not None:
            logger.info("status event: %s at %d", event.type.value, event.timestamp)
            if self.sink is not None:
                self.sink.publish(event)

        return StatusReport(sample=sample, classification=classification, event=event)

    def snapshot(self) -> WindowSnapshot:
        samples = self.window.snapshot()
        return WindowSnapshot(samples=samples, classification=self.monitor.classify(samples))

    @property
    def events(self) -> List[StatusEvent]:
        return self.monitor.events
