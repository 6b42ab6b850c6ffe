from __future__ import annotations

from typing import List

from .models import Classification, Sample, SampleSequence
from .thresholds import is_high_load, is_normal_load


def sequence_span_ms(samples: SampleSequence) -> int:
    """Distância (ms) entre a primeira e a última amostra da sequência inteira."""
    if not samples:
        return 0
    return int(samples[-1].timestamp) - int(samples[0].timestamp)


def recent_samples(samples: SampleSequence, status_window_ms: int) -> List[Sample]:
    """
    Sub-janela final: amostras com timestamp >= (última - status_window_ms).
    Não aplica retenção; só recorta o que veio na sequência.
    """
    if not samples:
        return []
    window_start = samples[-1].timestamp - status_window_ms
    return [s for s in samples if s.timestamp >= window_start]


def classify(samples: SampleSequence, status_window_ms: int) -> Classification:
    """
    Classifica a sub-janela mais recente:
      - todas > 1   -> HIGH
      - todas <= 1  -> NORMAL
      - misturadas  -> MIXED
    Sequência vazia é NORMAL. Recalculado a cada chamada (a janela anda com a última amostra).
    """
    recent = recent_samples(samples, status_window_ms)
    if not recent:
        return Classification.NORMAL

    if all(is_high_load(s.value) for s in recent):
        return Classification.HIGH
    if all(is_normal_load(s.value) for s in recent):
        return Classification.NORMAL
    return Classification.MIXED
