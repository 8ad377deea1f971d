"""Error taxonomy for disk-pressure runs.

Every error is terminal for the run that raised it. Cancellation is not an
error and has no exception type: it is the ``canceled`` terminal status.
"""

from __future__ import annotations

from pathlib import Path


class DiskPressureError(Exception):
    """Base class for all errors raised by this package."""


class ConfigError(DiskPressureError, ValueError):
    """Invalid or inconsistent configuration, detected before any write."""


class DiskExhaustedError(DiskPressureError):
    """Filesystem usage reached the high-water mark."""

    def __init__(self, path: Path, used_percent: int, high_water_percent: int) -> None:
        super().__init__(
            f"disk usage at {path} is {used_percent}% "
            f"(high-water mark {high_water_percent}%)"
        )
        self.path = path
        self.used_percent = used_percent
        self.high_water_percent = high_water_percent


class WriteFailedError(DiskPressureError):
    """The file writer failed to materialize a step."""

    def __init__(self, path: Path, size_mb: int, reason: str) -> None:
        super().__init__(f"failed to write {size_mb} MB to {path}: {reason}")
        self.path = path
        self.size_mb = size_mb
        self.reason = reason


class DiskProbeError(DiskPressureError):
    """Disk usage could not be sampled, so the guard cannot vouch for a write."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"cannot sample disk usage at {path}: {reason}")
        self.path = path
        self.reason = reason
