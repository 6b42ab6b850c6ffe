from __future__ import annotations

import threading
from collections import deque
from typing import Deque, Tuple

from domain.models import Sample


class RetentionWindow:
    """
    - Mantém as amostras dos últimos retention_ms (relativo ao "now" do append).
    - Ordem de inserção = ordem de timestamp (o poller é quem garante).
    - snapshot() devolve tupla imutável para o classificador / motor.
    """

    def __init__(self, retention_ms: int):
        self.retention_ms = int(retention_ms)

        self._lock = threading.Lock()
        self._buffer: Deque[Sample] = deque()

    def __len__(self) -> int:
        with self._lock:
            return len(self._buffer)

    def append(self, sample: Sample, now_ms: int) -> Tuple[Sample, ...]:
        """
        Acrescenta a amostra e descarta tudo com timestamp < now_ms - retention_ms.
        Retorna o snapshot já podado.
        """
        cutoff = int(now_ms) - self.retention_ms
        with self._lock:
            self._buffer.append(sample)
            # poda a janela inteira (não assume ordem estrita)
            self._buffer = deque(s for s in self._buffer if s.timestamp >= cutoff)
            return tuple(self._buffer)

    def snapshot(self) -> Tuple[Sample, ...]:
        with self._lock:
            return tuple(self._buffer)

    def clear(self) -> None:
        with self._lock:
            self._buffer.clear()
