from __future__ import annotations

import psutil

from domain.ports import LoadSource, LoadSourceError


class PsutilLoadSource(LoadSource):
    """
    Load average de 1 minuto normalizado pelo número de CPUs.
    1.0 = todas as CPUs ocupadas em média.
    """

    def read_load_average(self) -> float:
        try:
            one_minute, _five, _fifteen = psutil.getloadavg()
            cpu_count = psutil.cpu_count() or 1
        except (OSError, AttributeError) as e:
            raise LoadSourceError(f"could not read host load average: {e}") from e
        return float(one_minute) / float(cpu_count)
