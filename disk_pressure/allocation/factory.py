"""Builds allocation strategies from configuration."""

from __future__ import annotations

from random import Random

from disk_pressure.allocation.allocation_config import AllocationConfig
from disk_pressure.allocation.base import AllocationStrategy
from disk_pressure.allocation.strategies import (
    FibonacciAllocation,
    FixedAllocation,
    UniformAllocation,
)
from disk_pressure.core.domain.errors import ConfigError


def build_allocation(cfg: AllocationConfig) -> AllocationStrategy:
    """Instantiate the strategy selected by ``cfg.mode``."""
    if cfg.mode == "uniform":
        if cfg.min_mb is None or cfg.max_mb is None:
            raise ConfigError("uniform mode requires min_mb and max_mb")
        return UniformAllocation(cfg.min_mb, cfg.max_mb, rng=Random(cfg.seed))

    if cfg.total_mb is None or cfg.steps is None:
        raise ConfigError(f"{cfg.mode} mode requires total_mb and steps")
    if cfg.mode == "fib":
        return FibonacciAllocation(cfg.total_mb, cfg.steps)
    return FixedAllocation(cfg.total_mb, cfg.steps)
