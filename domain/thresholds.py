from __future__ import annotations

# Fronteira fixa de "carga alta": load average normalizado > 1
# (mais processos prontos que CPUs disponíveis).
HIGH_LOAD_THRESHOLD: float = 1.0


def is_high_load(value: float) -> bool:
    return value > HIGH_LOAD_THRESHOLD


def is_normal_load(value: float) -> bool:
    return value <= HIGH_LOAD_THRESHOLD
