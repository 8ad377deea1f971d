"""
Semantic test: fixed plans split the total exactly.

Invariant:
For every total >= steps >= 1, fixed plan sizes sum to the total, every size
is >= 1 MB, and every size except the last is equal. The integer-division
remainder lands entirely in the last step.
"""

from __future__ import annotations

import pytest

from disk_pressure.allocation.plans import compute_plan, fixed_plan
from disk_pressure.core.domain.errors import ConfigError


@pytest.mark.parametrize(
    ("total_mb", "steps"),
    [(1, 1), (7, 7), (100, 4), (101, 4), (1000, 7), (59, 59), (12345, 60)],
)
def test_fixed_plan_sums_exactly(total_mb: int, steps: int) -> None:
    plan = fixed_plan(total_mb, steps)

    assert len(plan) == steps
    assert plan.total_mb == total_mb
    assert all(size >= 1 for size in plan)
    assert len(set(plan.sizes[:-1])) <= 1


def test_fixed_plan_even_split() -> None:
    assert compute_plan(100, 4, "fixed").sizes == (25, 25, 25, 25)


def test_fixed_plan_remainder_goes_to_last_step() -> None:
    assert compute_plan(101, 4, "fixed").sizes == (25, 25, 25, 26)


def test_fixed_plan_rejects_total_below_steps() -> None:
    with pytest.raises(ConfigError):
        compute_plan(5, 10, "fixed")


@pytest.mark.parametrize(("total_mb", "steps"), [(0, 1), (1, 0), (-3, 2)])
def test_fixed_plan_rejects_non_positive_inputs(total_mb: int, steps: int) -> None:
    with pytest.raises(ConfigError):
        fixed_plan(total_mb, steps)


def test_unknown_plan_mode_is_config_error() -> None:
    with pytest.raises(ConfigError):
        compute_plan(10, 2, "exponential")  # type: ignore[arg-type]
