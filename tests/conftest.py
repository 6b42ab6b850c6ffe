"""Shared fakes and sample builders for the load status tests."""

from __future__ import annotations

from typing import Iterable, List, Optional

import pytest

from domain.models import Sample
from domain.ports import LoadSourceError

STATUS_WINDOW_MS = 2 * 60 * 1000
TICK_MS = 10 * 1000
START_MS = 1_700_000_000_000

NORMAL_VALUE = 0.4
HIGH_VALUE = 2.5


def make_samples(
    duration_ms: int,
    value: float,
    *,
    start_ms: int = START_MS,
    tick_ms: int = TICK_MS,
) -> List[Sample]:
    """One sample per tick from start_ms while elapsed < duration_ms."""
    samples: List[Sample] = []
    elapsed = 0
    while elapsed < duration_ms:
        samples.append(Sample(timestamp=start_ms + elapsed, value=value))
        elapsed += tick_ms
    return samples


class FakeClock:
    def __init__(self, start_ms: int = START_MS, step_ms: int = TICK_MS) -> None:
        self.current = start_ms - step_ms
        self.step_ms = step_ms

    def now_ms(self) -> int:
        self.current += self.step_ms
        return self.current


class ScriptedSource:
    """Returns the scripted values in order; None entries fail the read."""

    def __init__(self, values: Iterable[Optional[float]], default: float = NORMAL_VALUE) -> None:
        self._values = list(values)
        self._default = default
        self.reads = 0

    def read_load_average(self) -> float:
        self.reads += 1
        if not self._values:
            return self._default
        value = self._values.pop(0)
        if value is None:
            raise LoadSourceError("scripted failure")
        return value


class RecordingSink:
    def __init__(self) -> None:
        self.published = []

    def publish(self, event) -> None:
        self.published.append(event)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()
