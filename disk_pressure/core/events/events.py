"""
Run event models.

These events represent immutable facts observed during a run.
They are consumed by loggers, recorders, progress renderers and metrics.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class RunStateTransitionEvent:
    ts_ns: int
    run_id: str
    prev_state: str
    next_state: str

    # Human-readable cause for terminal transitions (error message or "canceled").
    reason: str | None = None


@dataclass(slots=True)
class DiskUsageSampledEvent:
    ts_ns: int
    run_id: str
    path: str

    used_percent: int
    high_water_percent: int


@dataclass(slots=True)
class StepWrittenEvent:
    ts_ns: int
    run_id: str

    step: int
    # None for unbounded (uniform) runs.
    total_steps: int | None

    size_mb: int
    cum_written_mb: int

    path: str
