"""Concrete allocation strategies."""

from __future__ import annotations

from random import Random
from typing import Iterator

from disk_pressure.allocation.base import AllocationStrategy
from disk_pressure.allocation.plans import fibonacci_plan, fixed_plan
from disk_pressure.core.domain.errors import ConfigError
from disk_pressure.core.domain.types import WritePlan


class PlannedAllocation(AllocationStrategy):
    """Bounded strategy backed by a precomputed WritePlan."""

    def __init__(self, plan: WritePlan) -> None:
        self._plan = plan

    @property
    def plan(self) -> WritePlan:
        return self._plan

    @property
    def step_count(self) -> int:
        return len(self._plan)

    def sizes(self) -> Iterator[int]:
        return iter(self._plan)


class FixedAllocation(PlannedAllocation):
    """Every step writes the same share of the total."""

    def __init__(self, total_mb: int, steps: int) -> None:
        super().__init__(fixed_plan(total_mb, steps))

    @property
    def name(self) -> str:
        return "fixed"


class FibonacciAllocation(PlannedAllocation):
    """Step sizes ramp up along a scaled Fibonacci curve."""

    def __init__(self, total_mb: int, steps: int) -> None:
        super().__init__(fibonacci_plan(total_mb, steps))

    @property
    def name(self) -> str:
        return "fib"


class UniformAllocation(AllocationStrategy):
    """Unbounded: each step size is drawn uniformly from ``[min_mb, max_mb]``."""

    file_prefix = "random"

    def __init__(self, min_mb: int, max_mb: int, *, rng: Random | None = None) -> None:
        if min_mb < 1:
            raise ConfigError(f"min_mb must be >= 1 (got {min_mb})")
        if max_mb < min_mb:
            raise ConfigError(f"max_mb ({max_mb}) must be >= min_mb ({min_mb})")

        self.min_mb = min_mb
        self.max_mb = max_mb
        self._rng = rng if rng is not None else Random()

    @property
    def name(self) -> str:
        return "uniform"

    @property
    def step_count(self) -> None:
        return None

    def next_size(self) -> int:
        return self._rng.randint(self.min_mb, self.max_mb)

    def sizes(self) -> Iterator[int]:
        while True:
            yield self.next_size()
