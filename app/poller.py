from __future__ import annotations

import logging
import threading
import time
from typing import Optional

from .pipeline import LoadStatusPipeline

logger = logging.getLogger(__name__)


def next_deadline(deadline: float, now: float, interval: float) -> float:
    """
    Próximo instante da grade fixa (deadline + k * interval) estritamente após now.
    Ticks atrasados pulam os slots perdidos em vez de acumular deriva.
    """
    deadline += interval
    if deadline <= now:
        missed = int((now - deadline) // interval) + 1
        deadline += missed * interval
    return deadline


class StatusPoller:
    """
    Thread única que dispara pipeline.tick() em cadência fixa (refetch_interval).
    Um tick imediato no start, depois na grade start + k * intervalo,
    independente da duração de cada tick.
    """

    def __init__(self, pipeline: LoadStatusPipeline, interval_sec: float):
        self.pipeline = pipeline
        self.interval_sec = float(interval_sec)

        self.stop_event = threading.Event()
        self.thread: Optional[threading.Thread] = None

    def start(self) -> None:
        if self.thread is not None:
            return
        self.stop_event.clear()
        self.thread = threading.Thread(target=self._worker, name="status-poller", daemon=True)
        self.thread.start()

    def _worker(self) -> None:
        deadline = time.monotonic()
        while not self.stop_event.is_set():
            try:
                self.pipeline.tick()
            except Exception:
                logger.exception("status poll tick failed")

            now = time.monotonic()
            deadline = next_deadline(deadline, now, self.interval_sec)
            # wait() retorna cedo quando shutdown() é chamado
            self.stop_event.wait(deadline - now)

    def shutdown(self, timeout: float = 5.0) -> None:
        self.stop_event.set()
        if self.thread is not None:
            self.thread.join(timeout=timeout)
            self.thread = None
