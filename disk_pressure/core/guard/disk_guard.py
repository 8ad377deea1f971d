"""Disk usage safety ceiling."""

from __future__ import annotations

import logging
from pathlib import Path

from disk_pressure.core.domain.errors import DiskExhaustedError
from disk_pressure.core.domain.types import DiskUsageSample
from disk_pressure.core.guard.guard_config import GuardConfig
from disk_pressure.core.ports.disk_usage import DiskUsageProbe

LOGGER = logging.getLogger(__name__)


class DiskGuard:
    """Refuses to let a write start once usage reaches the high-water mark.

    Stateless: every call takes a fresh sample, because other processes may
    consume the same filesystem between steps.
    """

    def __init__(self, *, probe: DiskUsageProbe, guard_cfg: GuardConfig | None = None) -> None:
        self._probe = probe
        self._cfg = guard_cfg if guard_cfg is not None else GuardConfig()

    @property
    def high_water_percent(self) -> int:
        return self._cfg.high_water_percent

    def sample(self, path: Path) -> DiskUsageSample:
        return DiskUsageSample(
            path=str(path),
            used_percent=self._probe.used_percent(path),
        )

    def check_safe(self, path: Path) -> DiskUsageSample:
        """Return the current sample, or raise DiskExhaustedError."""
        sample = self.sample(path)

        if sample.used_percent >= self._cfg.high_water_percent:
            LOGGER.error(
                "Disk usage %d%% at %s reached high-water mark %d%%",
                sample.used_percent,
                path,
                self._cfg.high_water_percent,
            )
            raise DiskExhaustedError(
                path=Path(path),
                used_percent=sample.used_percent,
                high_water_percent=self._cfg.high_water_percent,
            )

        return sample
