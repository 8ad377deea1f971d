"""Public API for the disk_pressure package.

Only symbols imported here are considered part of the stable,
supported external interface.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

# ----------------------------------------------------------------------
# Allocation API
# ----------------------------------------------------------------------
from disk_pressure.allocation.allocation_config import AllocationConfig
from disk_pressure.allocation.base import AllocationStrategy
from disk_pressure.allocation.factory import build_allocation
from disk_pressure.allocation.plans import compute_plan
from disk_pressure.allocation.strategies import (
    FibonacciAllocation,
    FixedAllocation,
    UniformAllocation,
)

# ----------------------------------------------------------------------
# Domain Types
# ----------------------------------------------------------------------
from disk_pressure.core.domain.errors import (
    ConfigError,
    DiskExhaustedError,
    DiskProbeError,
    DiskPressureError,
    WriteFailedError,
)
from disk_pressure.core.domain.types import DiskUsageSample, WritePlan

# ----------------------------------------------------------------------
# Guard + progress
# ----------------------------------------------------------------------
from disk_pressure.core.guard.disk_guard import DiskGuard
from disk_pressure.core.guard.guard_config import GuardConfig
from disk_pressure.core.progress import render_progress

# ----------------------------------------------------------------------
# Scheduler API
# ----------------------------------------------------------------------
from disk_pressure.scheduler.cancellation import CancellationToken
from disk_pressure.scheduler.run_result import RunResult
from disk_pressure.scheduler.schedule_config import ScheduleConfig
from disk_pressure.scheduler.write_scheduler import WriteScheduler

# ----------------------------------------------------------------------
# Public API definition
# ----------------------------------------------------------------------

__all__ = [
    # Allocation
    "AllocationConfig",
    "AllocationStrategy",
    "FixedAllocation",
    "FibonacciAllocation",
    "UniformAllocation",
    "build_allocation",
    "compute_plan",

    # Domain
    "WritePlan",
    "DiskUsageSample",
    "DiskPressureError",
    "ConfigError",
    "DiskExhaustedError",
    "DiskProbeError",
    "WriteFailedError",

    # Guard + progress
    "DiskGuard",
    "GuardConfig",
    "render_progress",

    # Scheduler
    "WriteScheduler",
    "ScheduleConfig",
    "CancellationToken",
    "RunResult",

    # Version
    "__version__",
]

# ----------------------------------------------------------------------
# Package version
# ----------------------------------------------------------------------

try:
    __version__ = version("disk-pressure")
except PackageNotFoundError:
    __version__ = "0.0.0"
