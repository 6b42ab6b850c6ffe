"""Status API: load average atual e log de eventos para o dashboard."""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Optional

import uvicorn
from fastapi import APIRouter, FastAPI, HTTPException, Response

from app.pipeline import LoadStatusPipeline
from domain.events import StatusEvent
from domain.ports import LoadSource, LoadSourceError

logger = logging.getLogger(__name__)


def _event_to_dict(ev: StatusEvent) -> Dict[str, Any]:
    return {
        "type": ev.type.value,
        "timestamp": ev.timestamp,
        "title": ev.title,
        "message": ev.message,
    }


def create_app(source: LoadSource, pipeline: Optional[LoadStatusPipeline] = None) -> FastAPI:
    app = FastAPI(title="loadwatch", version="0.1.0")
    router = APIRouter()

    @router.get("/health")
    def health():
        return {"status": "ok"}

    @router.get("/api/system/status")
    def system_status(response: Response):
        # nunca cachear: cada GET é uma leitura nova
        response.headers["Cache-Control"] = "no-store"
        try:
            load_average = source.read_load_average()
        except LoadSourceError as e:
            logger.warning("status endpoint: %s", e)
            raise HTTPException(status_code=503, detail="load average unavailable")
        return {"loadAverage": load_average}

    @router.get("/api/system/events")
    def system_events(response: Response):
        response.headers["Cache-Control"] = "no-store"
        if pipeline is None:
            raise HTTPException(status_code=404, detail="event monitor not running")

        snap = pipeline.snapshot()
        return {
            "classification": snap.classification.value,
            "samples": [{"timestamp": s.timestamp, "value": s.value} for s in snap.samples],
            "events": [_event_to_dict(ev) for ev in pipeline.events],
        }

    app.include_router(router)
    return app


class StatusApiServer:
    """uvicorn numa thread daemon (o processo principal fica no poller)."""

    def __init__(self, app: FastAPI, host: str, port: int, log_level: str = "warning"):
        self._server = uvicorn.Server(
            uvicorn.Config(app, host=host, port=port, log_level=log_level.lower())
        )
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self._server.run, name="status-api", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        if self._thread is None:
            return
        self._server.should_exit = True
        self._thread.join(timeout=5)
        self._thread = None
