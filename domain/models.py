from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple


@dataclass(frozen=True)
class Sample:
    timestamp: int  # epoch ms
    value: float    # load average normalizado (1 min / nº de CPUs)


# sequência ordenada por timestamp (snapshot, nunca mutada pelo core)
SampleSequence = Sequence[Sample]


class Classification(str, Enum):
    NORMAL = "normal"
    HIGH = "high"
    MIXED = "mixed"


class EventType(str, Enum):
    HIGH = "high"
    RECOVERED = "recovered"


@dataclass(frozen=True)
class EngineState:
    """
    Último tipo de evento emitido.
    None = nenhum evento ainda (estado inicial).
    """
    last_emitted_type: Optional[EventType] = None


@dataclass(frozen=True)
class WindowSnapshot:
    samples: Tuple[Sample, ...]
    classification: Classification
