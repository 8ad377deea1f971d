"""
Semantic test: the pre-run summary warns about doomed schedules.

Invariant:
The summary lists the planned size of every bounded step and warns when the
plan cannot finish: usage already at the high-water mark, or a total larger
than the free space at the target.
"""

from __future__ import annotations

import io

from disk_pressure.allocation.factory import build_allocation
from disk_pressure.core.domain.types import MB
from disk_pressure.runtime.summary import print_schedule_summary, summarize_schedule
from disk_pressure.scheduler.schedule_config import ScheduleConfig


def _cfg(tmp_path, allocation: dict) -> ScheduleConfig:
    return ScheduleConfig.from_json_obj({"target_dir": str(tmp_path), "allocation": allocation})


def test_bounded_summary_lists_sizes(tmp_path, make_probe) -> None:
    cfg = _cfg(tmp_path, {"mode": "fib", "total_mb": 12, "steps": 5})

    summary = summarize_schedule(cfg=cfg, allocation=build_allocation(cfg.allocation), probe=make_probe(10))

    assert summary.sizes == (1, 1, 2, 3, 5)
    assert summary.total_mb == 12
    assert summary.warnings == []


def test_total_above_free_space_warns(tmp_path, make_probe) -> None:
    cfg = _cfg(tmp_path, {"mode": "fixed", "total_mb": 100, "steps": 4})
    probe = make_probe(10, free_bytes=50 * MB)

    summary = summarize_schedule(cfg=cfg, allocation=build_allocation(cfg.allocation), probe=probe)

    assert summary.free_mb == 50
    assert any("exceeds free space" in w for w in summary.warnings)


def test_full_disk_warns(tmp_path, make_probe) -> None:
    cfg = _cfg(tmp_path, {"mode": "uniform", "min_mb": 1, "max_mb": 3})

    summary = summarize_schedule(cfg=cfg, allocation=build_allocation(cfg.allocation), probe=make_probe(99))

    assert summary.sizes is None
    assert (summary.min_mb, summary.max_mb) == (1, 3)
    assert any("already 99% used" in w for w in summary.warnings)

    out = io.StringIO()
    print_schedule_summary(summary, out)
    assert "Size range:         1..3 MB per file (unbounded)" in out.getvalue()
    assert "Warnings:" in out.getvalue()
