from __future__ import annotations

import logging
import time
from typing import Optional

import httpx

from domain.ports import LoadSource, LoadSourceError

logger = logging.getLogger(__name__)

STATUS_PATH = "/api/system/status"


class HttpLoadSource(LoadSource):
    """
    Lê o load average de uma API de status remota:
      GET {base_url}/api/system/status -> {"loadAverage": float}
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout_sec: float = 2.0,
        max_retries: int = 3,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._url = base_url.rstrip("/") + STATUS_PATH
        self._timeout = timeout_sec
        self._max_retries = max_retries
        self._transport = transport
        self._client: Optional[httpx.Client] = None

        # métricas simples (opcional)
        self.total_requests = 0
        self.total_failed = 0

    def start(self) -> None:
        if self._client is not None:
            return
        self._client = httpx.Client(timeout=self._timeout, transport=self._transport)

    def stop(self) -> None:
        if self._client:
            self._client.close()
            self._client = None

    def read_load_average(self) -> float:
        if self._client is None:
            self.start()
        assert self._client is not None

        attempt = 0
        while True:
            self.total_requests += 1
            try:
                r = self._client.get(self._url, headers={"Cache-Control": "no-store"})
                r.raise_for_status()
                payload = r.json()
                break
            except (httpx.HTTPError, ValueError) as e:
                attempt += 1
                if attempt > self._max_retries:
                    self.total_failed += 1
                    raise LoadSourceError(f"could not reach status API at {self._url}: {e}") from e
                logger.debug("status API attempt %d failed: %s", attempt, e)
                time.sleep(min(0.25 * (2 ** (attempt - 1)), 2.0))

        value = payload.get("loadAverage") if isinstance(payload, dict) else None
        # resposta sem loadAverage conta como 0
        if value is None:
            return 0.0
        try:
            return float(value)
        except (TypeError, ValueError) as e:
            raise LoadSourceError(f"invalid loadAverage in status response: {value!r}") from e
