import logging
import sys

from config import load_config
from app.pipeline import LoadStatusPipeline, WindowPolicy
from app.poller import StatusPoller
from app.status_engine import StatusEngineConfig, StatusEventMonitor
from infra.clock import SystemClock
from infra.load_source import PsutilLoadSource
from infra.sinks import PrintSink
from infra.status_api import StatusApiServer, create_app
from infra.status_client import HttpLoadSource


def main():
    path = sys.argv[1] if len(sys.argv) > 1 else "config.yaml"
    try:
        cfg = load_config(path)
    except ValueError as e:
        raise SystemExit(str(e))

    logging.basicConfig(
        level=getattr(logging, cfg.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    local_source = PsutilLoadSource()

    # ---- fonte das amostras: leitura local ou API de status remota ----
    http_source = None
    if cfg.source.kind == "http":
        http_source = HttpLoadSource(
            cfg.source.url,
            timeout_sec=cfg.source.timeout_sec,
            max_retries=cfg.source.max_retries,
        )
        http_source.start()
        source = http_source
        print(f"[source] http url={cfg.source.url}")
    else:
        source = local_source
        print("[source] local (psutil)")

    # ---- motor de eventos ----
    monitor = StatusEventMonitor(StatusEngineConfig(status_window_ms=cfg.status_window_ms))
    pipeline = LoadStatusPipeline(
        source=source,
        clock=SystemClock(),
        monitor=monitor,
        policy=WindowPolicy(retention_ms=cfg.retention_ms),
        sink=PrintSink(),
    )
    poller = StatusPoller(pipeline, interval_sec=cfg.refetch_interval_sec)

    print(
        f"[events] status_window={cfg.status_window_sec}s retention={cfg.retention_sec}s "
        f"refetch={cfg.refetch_interval_sec}s"
    )

    # ---- API de status (opcional) ----
    api_server = None
    if cfg.api.enabled:
        api_server = StatusApiServer(
            create_app(local_source, pipeline),
            host=cfg.api.host,
            port=cfg.api.port,
        )
        api_server.start()
        print(f"[api] listening on http://{cfg.api.host}:{cfg.api.port}")
    else:
        print("[api] enabled=False")

    try:
        poller.start()
        print("Monitoring. Press ENTER to stop...")
        input()
    finally:
        try:
            poller.shutdown()
        finally:
            try:
                if api_server is not None:
                    api_server.stop()
            finally:
                if http_source is not None:
                    http_source.stop()


if __name__ == "__main__":
    main()
