from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml


SOURCE_KINDS = ("local", "http")


@dataclass(frozen=True)
class SourceConfig:
    kind: str = "local"

    # somente para kind == "http"
    url: str = "http://127.0.0.1:8000"
    timeout_sec: float = 2.0
    max_retries: int = 3


@dataclass(frozen=True)
class ApiConfig:
    enabled: bool = True
    host: str = "127.0.0.1"
    port: int = 8000


@dataclass(frozen=True)
class AppConfig:
    status_window_sec: int = 120
    retention_sec: int = 600
    refetch_interval_sec: float = 10.0

    log_level: str = "INFO"

    source: SourceConfig = field(default_factory=SourceConfig)
    api: ApiConfig = field(default_factory=ApiConfig)

    @property
    def status_window_ms(self) -> int:
        return int(self.status_window_sec * 1000)

    @property
    def retention_ms(self) -> int:
        return int(self.retention_sec * 1000)


def _req(d: Mapping[str, Any], path: str) -> Any:
    cur: Any = d
    for part in path.split("."):
        if not isinstance(cur, Mapping) or part not in cur:
            raise ValueError(f"Config inválida: campo obrigatório '{path}' ausente.")
        cur = cur[part]
    return cur


def _opt(d: Mapping[str, Any], path: str, default: Any) -> Any:
    cur: Any = d
    for part in path.split("."):
        if not isinstance(cur, Mapping) or part not in cur:
            return default
        cur = cur[part]
    return cur


def _positive(value: Any, path: str) -> float:
    try:
        out = float(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Config inválida: '{path}' deve ser numérico, recebido {value!r}.") from e
    if out <= 0:
        raise ValueError(f"Config inválida: '{path}' deve ser > 0.")
    return out


def _positive_int(value: Any, path: str) -> int:
    out = _positive(value, path)
    # não trunca silenciosamente (1.5 -> 1)
    if not out.is_integer():
        raise ValueError(f"Config inválida: '{path}' deve ser inteiro, recebido {value!r}.")
    return int(out)


def _to_source(x: Any) -> SourceConfig:
    if x is None:
        return SourceConfig()
    if not isinstance(x, Mapping):
        raise ValueError("Config inválida: 'source' deve ser um mapa (dict).")

    kind = str(_opt(x, "kind", "local")).lower()
    if kind not in SOURCE_KINDS:
        raise ValueError(f"Config inválida: 'source.kind' deve ser um de {SOURCE_KINDS}, recebido {kind!r}.")

    if kind == "http":
        url = str(_req(x, "url"))
    else:
        url = str(_opt(x, "url", SourceConfig.url))

    max_retries = int(_opt(x, "max_retries", 3))
    if max_retries < 0:
        raise ValueError("Config inválida: 'source.max_retries' deve ser >= 0.")

    return SourceConfig(
        kind=kind,
        url=url,
        timeout_sec=_positive(_opt(x, "timeout_sec", 2.0), "source.timeout_sec"),
        max_retries=max_retries,
    )


def _to_api(x: Any) -> ApiConfig:
    if x is None:
        return ApiConfig()
    if not isinstance(x, Mapping):
        raise ValueError("Config inválida: 'api' deve ser um mapa (dict).")

    port = int(_opt(x, "port", 8000))
    if port < 1 or port > 65535:
        raise ValueError(f"Config inválida: 'api.port' fora do intervalo: {port}")

    return ApiConfig(
        enabled=bool(_opt(x, "enabled", True)),
        host=str(_opt(x, "host", "127.0.0.1")),
        port=port,
    )


def parse_config(data: Mapping[str, Any]) -> AppConfig:
    status_window_sec = _positive_int(_opt(data, "status_window_sec", 120), "status_window_sec")
    retention_sec = _positive_int(_opt(data, "retention_sec", 600), "retention_sec")
    refetch_interval_sec = _positive(_opt(data, "refetch_interval_sec", 10.0), "refetch_interval_sec")

    # retenção mínima: janela de status + 1 intervalo (span retido precisa alcançar a janela)
    min_retention = status_window_sec + refetch_interval_sec
    if retention_sec < min_retention:
        raise ValueError(
            "Config inválida: 'retention_sec' deve ser >= 'status_window_sec' + 'refetch_interval_sec' "
            f"({retention_sec} < {min_retention:g})."
        )

    return AppConfig(
        status_window_sec=status_window_sec,
        retention_sec=retention_sec,
        refetch_interval_sec=refetch_interval_sec,
        log_level=str(_opt(data, "log_level", "INFO")).upper(),
        source=_to_source(_opt(data, "source", None)),
        api=_to_api(_opt(data, "api", None)),
    )


def load_config(path: str = "config.yaml") -> AppConfig:
    p = Path(path)
    if not p.exists():
        return AppConfig()
    data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(data, Mapping):
        raise ValueError(f"Config inválida: o topo de {path} deve ser um mapa (dict).")
    return parse_config(data)
