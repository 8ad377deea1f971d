"""Disk usage probe backed by ``shutil.disk_usage``."""

from __future__ import annotations

import shutil
from pathlib import Path


class ShutilDiskUsageProbe:
    """Reports usage the way ``df -P`` prints its ``Use%`` column.

    ``df`` computes ``used / (used + available)`` and rounds up, so blocks
    reserved for root do not count as available.
    """

    def used_percent(self, path: Path) -> int:
        usage = shutil.disk_usage(path)
        denominator = usage.used + usage.free
        if denominator <= 0:
            return 100
        # Integer ceiling
        return min(100, -(-usage.used * 100 // denominator))

    def free_bytes(self, path: Path) -> int:
        return shutil.disk_usage(path).free
