from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import TYPE_CHECKING, TextIO

from disk_pressure.allocation.strategies import PlannedAllocation, UniformAllocation
from disk_pressure.core.domain.types import MB

if TYPE_CHECKING:
    from disk_pressure.allocation.base import AllocationStrategy
    from disk_pressure.core.ports.disk_usage import DiskUsageProbe
    from disk_pressure.scheduler.schedule_config import ScheduleConfig

# A day of one-minute steps.
MANY_STEPS_WARNING = 1440

_RULE = "-" * 58


# ---------------------------------------------------------------------------
# Data models
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ScheduleSummary:
    mode: str
    target_dir: str
    step_delay_seconds: float
    high_water_percent: int

    step_count: int | None
    total_mb: int | None
    sizes: tuple[int, ...] | None

    min_mb: int | None
    max_mb: int | None

    used_percent: int | None
    free_mb: int | None

    warnings: list[str]


# ---------------------------------------------------------------------------
# Summary builder
# ---------------------------------------------------------------------------

def summarize_schedule(
    *,
    cfg: ScheduleConfig,
    allocation: AllocationStrategy,
    probe: DiskUsageProbe | None = None,
) -> ScheduleSummary:
    warnings: list[str] = []

    sizes: tuple[int, ...] | None = None
    total_mb: int | None = None
    if isinstance(allocation, PlannedAllocation):
        sizes = allocation.plan.sizes
        total_mb = allocation.plan.total_mb

    min_mb = allocation.min_mb if isinstance(allocation, UniformAllocation) else None
    max_mb = allocation.max_mb if isinstance(allocation, UniformAllocation) else None

    used_percent: int | None = None
    free_mb: int | None = None
    if probe is not None:
        used_percent = probe.used_percent(cfg.target_dir)
        free_mb = probe.free_bytes(cfg.target_dir) // MB

    high_water = cfg.guard.high_water_percent

    if used_percent is not None and used_percent >= high_water:
        warnings.append(
            f"Disk is already {used_percent}% used (high-water mark {high_water}%); "
            "the first write will be refused"
        )

    if total_mb is not None and free_mb is not None and total_mb > free_mb:
        warnings.append(
            f"Planned total {total_mb} MB exceeds free space ({free_mb} MB); "
            "the disk guard will stop the run early"
        )

    step_count = allocation.step_count
    if step_count is not None and step_count > MANY_STEPS_WARNING:
        warnings.append(f"High number of steps ({step_count}); runtime may be long")

    return ScheduleSummary(
        mode=allocation.name,
        target_dir=str(cfg.target_dir),
        step_delay_seconds=cfg.step_delay_seconds,
        high_water_percent=high_water,
        step_count=step_count,
        total_mb=total_mb,
        sizes=sizes,
        min_mb=min_mb,
        max_mb=max_mb,
        used_percent=used_percent,
        free_mb=free_mb,
        warnings=warnings,
    )


# ---------------------------------------------------------------------------
# Pretty printer
# ---------------------------------------------------------------------------

def print_schedule_summary(summary: ScheduleSummary, stream: TextIO | None = None) -> None:
    out = stream if stream is not None else sys.stdout

    def line(text: str = "") -> None:
        print(text, file=out)

    line(_RULE)
    if summary.total_mb is not None:
        line(f"Total write:        {summary.total_mb} MB")
        line(f"Steps:              {summary.step_count}")
    else:
        line(f"Size range:         {summary.min_mb}..{summary.max_mb} MB per file (unbounded)")
    line(f"Pattern mode:       {summary.mode}")
    line(f"Step delay:         {summary.step_delay_seconds:g} s")
    line(f"Output directory:   {summary.target_dir}")
    line(f"Safety stop:        hard stop at >= {summary.high_water_percent}% disk usage")
    if summary.used_percent is not None:
        line(f"Current usage:      {summary.used_percent}% ({summary.free_mb} MB free)")
    line(_RULE)

    if summary.sizes is not None:
        line("File sizes by step:")
        for index, size in enumerate(summary.sizes, start=1):
            line(f"  Step {index}: {size} MB")
        line(_RULE)

    if summary.warnings:
        line("Warnings:")
        for w in summary.warnings:
            line(f"  - {w}")
        line(_RULE)
