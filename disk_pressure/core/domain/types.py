"""Core value types shared by the allocation and scheduling layers."""

from __future__ import annotations

from dataclasses import dataclass

# One allocation unit. Sizes are always whole megabytes (dd bs=1M).
MB = 1024 * 1024


@dataclass(frozen=True, slots=True)
class WritePlan:
    """
    Ordered, immutable per-step sizes in whole megabytes.

    Built once before a bounded run starts.
    """

    sizes: tuple[int, ...]

    def __post_init__(self) -> None:
        if not self.sizes:
            raise ValueError("a write plan needs at least one step")
        if any(size < 1 for size in self.sizes):
            raise ValueError(f"every planned size must be >= 1 MB: {self.sizes}")

    def __len__(self) -> int:
        return len(self.sizes)

    def __iter__(self):
        return iter(self.sizes)

    @property
    def total_mb(self) -> int:
        return sum(self.sizes)


@dataclass(frozen=True, slots=True)
class DiskUsageSample:
    """Point-in-time usage of the filesystem holding ``path``."""

    path: str
    used_percent: int
