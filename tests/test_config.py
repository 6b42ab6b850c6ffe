"""Tests for YAML configuration loading."""

from __future__ import annotations

import pytest

from config import AppConfig, load_config, parse_config


def test_defaults() -> None:
    cfg = parse_config({})

    assert cfg == AppConfig()
    assert cfg.status_window_ms == 120_000
    assert cfg.retention_ms == 600_000
    assert cfg.refetch_interval_sec == 10.0
    assert cfg.source.kind == "local"
    assert cfg.api.enabled is True


def test_missing_file_yields_defaults(tmp_path) -> None:
    assert load_config(str(tmp_path / "absent.yaml")) == AppConfig()


def test_load_yaml_file(tmp_path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text(
        "\n".join(
            [
                "status_window_sec: 60",
                "retention_sec: 300",
                "refetch_interval_sec: 5",
                "log_level: debug",
                "source:",
                "  kind: http",
                "  url: http://10.0.0.5:8000",
                "  max_retries: 0",
                "api:",
                "  enabled: false",
                "  port: 9000",
            ]
        ),
        encoding="utf-8",
    )

    cfg = load_config(str(path))

    assert cfg.status_window_ms == 60_000
    assert cfg.retention_ms == 300_000
    assert cfg.refetch_interval_sec == 5.0
    assert cfg.log_level == "DEBUG"
    assert cfg.source.kind == "http"
    assert cfg.source.url == "http://10.0.0.5:8000"
    assert cfg.source.max_retries == 0
    assert cfg.api.enabled is False
    assert cfg.api.port == 9000


@pytest.mark.parametrize(
    "data",
    [
        {"status_window_sec": 0},
        {"refetch_interval_sec": -1},
        {"status_window_sec": 300, "retention_sec": 120},
        {"status_window_sec": 120, "retention_sec": 120},
        {"status_window_sec": 120, "retention_sec": 125, "refetch_interval_sec": 10},
        {"status_window_sec": 1.5},
        {"retention_sec": 600.5},
        {"source": {"kind": "snmp"}},
        {"source": {"kind": "http"}},
        {"source": {"max_retries": -1}},
        {"source": "local"},
        {"api": {"port": 70000}},
        {"status_window_sec": "soon"},
    ],
)
def test_invalid_values_are_rejected(data) -> None:
    with pytest.raises(ValueError, match="Config inválida"):
        parse_config(data)


def test_retention_must_leave_one_poll_interval_of_slack() -> None:
    cfg = parse_config({"status_window_sec": 120, "retention_sec": 130, "refetch_interval_sec": 10})

    assert cfg.retention_ms == cfg.status_window_ms + 10_000

    with pytest.raises(ValueError, match="retention_sec"):
        parse_config({"status_window_sec": 120, "retention_sec": 129, "refetch_interval_sec": 10})


def test_integral_durations_are_not_truncated() -> None:
    cfg = parse_config({"status_window_sec": 60.0, "retention_sec": "90"})

    assert cfg.status_window_sec == 60
    assert isinstance(cfg.status_window_sec, int)
    assert cfg.retention_sec == 90

    with pytest.raises(ValueError, match="inteiro"):
        parse_config({"status_window_sec": 1.5})
