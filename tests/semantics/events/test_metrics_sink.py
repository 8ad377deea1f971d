"""
Semantic test: Prometheus gauges mirror run progress.

Invariant:
The metrics sink keeps one gauge per metric (re-used across events), reflects
the latest written total and disk sample, and never pushes when no
Pushgateway is configured.
"""

from __future__ import annotations

from disk_pressure.core.events.events import (
    DiskUsageSampledEvent,
    RunStateTransitionEvent,
    StepWrittenEvent,
)
from disk_pressure.core.events.sinks.metrics_sink import PrometheusMetricsSink
from disk_pressure.runtime.prometheus_metrics import PrometheusMetricsClient


def test_gauges_track_latest_values(monkeypatch) -> None:
    monkeypatch.delenv("PROMETHEUS_PUSHGATEWAY_URL", raising=False)
    client = PrometheusMetricsClient()
    sink = PrometheusMetricsSink(client, target_dir="/data/tmp")

    for step, cum in [(1, 10), (2, 25)]:
        sink.on_event(
            StepWrittenEvent(
                ts_ns=step,
                run_id="r",
                step=step,
                total_steps=2,
                size_mb=cum,
                cum_written_mb=cum,
                path="/data/tmp/f.bin",
            )
        )
    sink.on_event(
        DiskUsageSampledEvent(ts_ns=3, run_id="r", path="/data/tmp", used_percent=73, high_water_percent=99)
    )
    sink.on_event(RunStateTransitionEvent(ts_ns=4, run_id="r", prev_state="running", next_state="completed"))

    labels = {"target_dir": "/data/tmp"}
    registry = client.registry
    assert registry.get_sample_value("disk_pressure_written_megabytes", labels) == 25
    assert registry.get_sample_value("disk_pressure_steps_completed", labels) == 2
    assert registry.get_sample_value("disk_pressure_disk_used_percent", labels) == 73
    assert registry.get_sample_value("disk_pressure_run_status", labels) == 2

    assert not client.is_enabled()
    sink.close()


def test_invalid_grouping_key_is_ignored(monkeypatch) -> None:
    monkeypatch.setenv("PROMETHEUS_PUSHGATEWAY_GROUPING_KEY_JSON", "{not json")

    client = PrometheusMetricsClient(pushgateway_url="http://localhost:9091")

    assert client.is_enabled()
    assert client._grouping_key == {}
