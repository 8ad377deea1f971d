"""Disk usage probe port."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class DiskUsageProbe(Protocol):
    """Reads capacity figures of the filesystem holding a path."""

    def used_percent(self, path: Path) -> int:
        """Return used capacity as an integer percentage in 0..100."""

    def free_bytes(self, path: Path) -> int:
        """Return bytes available to an unprivileged writer."""
