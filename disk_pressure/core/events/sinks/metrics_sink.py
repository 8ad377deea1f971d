"""
Prometheus metrics event sink.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from disk_pressure.core.events.events import (
    DiskUsageSampledEvent,
    RunStateTransitionEvent,
    StepWrittenEvent,
)

if TYPE_CHECKING:
    from disk_pressure.runtime.prometheus_metrics import PrometheusMetricsClient

LOGGER = logging.getLogger(__name__)

METRICS_JOB = "disk_pressure"

# Gauge value per run status, so dashboards can plot the lifecycle.
_STATUS_CODES: dict[str, int] = {
    "idle": 0,
    "running": 1,
    "completed": 2,
    "canceled": 3,
    "aborted": 4,
}


class PrometheusMetricsSink:
    """Mirrors run progress into gauges and pushes them when the bus closes."""

    def __init__(self, client: PrometheusMetricsClient, *, target_dir: str) -> None:
        self._client = client
        self._labels = {"target_dir": target_dir}

    def on_event(self, event: Any) -> None:
        if isinstance(event, StepWrittenEvent):
            self._client.set_gauge(
                name="disk_pressure_written_megabytes",
                value=event.cum_written_mb,
                labels=self._labels,
                documentation="Megabytes written by the current run.",
            )
            self._client.set_gauge(
                name="disk_pressure_steps_completed",
                value=event.step,
                labels=self._labels,
                documentation="Steps written by the current run.",
            )
        elif isinstance(event, DiskUsageSampledEvent):
            self._client.set_gauge(
                name="disk_pressure_disk_used_percent",
                value=event.used_percent,
                labels=self._labels,
                documentation="Last disk usage sample at the target directory.",
            )
        elif isinstance(event, RunStateTransitionEvent):
            self._client.set_gauge(
                name="disk_pressure_run_status",
                value=_STATUS_CODES.get(event.next_state, -1),
                labels=self._labels,
                documentation="0 idle, 1 running, 2 completed, 3 canceled, 4 aborted.",
            )

    def close(self) -> None:
        try:
            self._client.push_all(job=METRICS_JOB)
        except OSError as exc:
            LOGGER.warning("Prometheus push failed: %s", exc, extra={"job": METRICS_JOB})
