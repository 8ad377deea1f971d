"""
Size plan computation.

Bounded allocation policies turn a total volume and a step count into an
ordered ``WritePlan`` whose sizes sum exactly to the total. All rounding slack
lands in the last step.
"""

from __future__ import annotations

from typing import Literal

from disk_pressure.core.domain.errors import ConfigError
from disk_pressure.core.domain.types import WritePlan

PlanMode = Literal["fixed", "fib"]


def _validate_plan_inputs(total_mb: int, steps: int) -> None:
    if total_mb < 1:
        raise ConfigError(f"total_mb must be >= 1 (got {total_mb})")
    if steps < 1:
        raise ConfigError(f"steps must be >= 1 (got {steps})")
    if total_mb < steps:
        raise ConfigError(
            f"total_mb ({total_mb}) must be >= steps ({steps}) "
            "so that every step writes at least 1 MB"
        )


def fixed_plan(total_mb: int, steps: int) -> WritePlan:
    """Equal shares, with the integer-division remainder added to the last step."""
    _validate_plan_inputs(total_mb, steps)

    base, remainder = divmod(total_mb, steps)
    sizes = [base] * steps
    sizes[-1] += remainder

    return WritePlan(tuple(sizes))


def fibonacci_sequence(length: int) -> list[int]:
    """Return ``1, 1, 2, 3, 5, ...`` truncated to ``length`` terms."""
    if length < 1:
        return []

    seq = [1, 1][:length]
    while len(seq) < length:
        seq.append(seq[-1] + seq[-2])
    return seq


def fibonacci_plan(total_mb: int, steps: int) -> WritePlan:
    """
    Sizes proportional to a Fibonacci sequence, scaled to sum to ``total_mb``.

    Each provisional size is ``floor(fib[i] * total / sum(fib))``, computed
    in integer arithmetic so the floor is exact. The shortfall is added to
    the last step.

    When ``total_mb`` is small relative to the sequence sum some provisional
    sizes floor to 0. Those are clamped to 1 and the overshoot is taken back
    by levelling the largest steps, see ``_take_back_overshoot``.
    """
    _validate_plan_inputs(total_mb, steps)

    fib = fibonacci_sequence(steps)
    raw_sum = sum(fib)

    sizes = [max(1, value * total_mb // raw_sum) for value in fib]

    missing = total_mb - sum(sizes)
    if missing >= 0:
        sizes[-1] += missing
        return WritePlan(tuple(sizes))

    return WritePlan(tuple(_take_back_overshoot(sizes, -missing)))


def _take_back_overshoot(sizes: list[int], overshoot: int) -> list[int]:
    """
    Remove ``overshoot`` MB from the top of a non-decreasing list.

    The ``m`` largest steps are flattened to an even level, with the odd
    units on the rightmost ones, where ``m`` is the smallest count whose
    level does not drop below the step to its left. This is the result of
    repeatedly decrementing the leftmost largest step, in a single pass.
    Requires ``sum(sizes) - overshoot >= len(sizes)``.
    """
    n = len(sizes)
    top_sum = 0

    for m in range(1, n + 1):
        top_sum += sizes[n - m]
        left = sizes[n - m - 1] if m < n else 1
        if top_sum - overshoot >= m * left:
            level, extra = divmod(top_sum - overshoot, m)
            return sizes[: n - m] + [level] * (m - extra) + [level + 1] * extra

    raise ConfigError("overshoot exceeds what the plan can give back")


def compute_plan(total_mb: int, steps: int, mode: PlanMode) -> WritePlan:
    """Build the plan for a bounded allocation mode."""
    if mode == "fixed":
        return fixed_plan(total_mb, steps)
    if mode == "fib":
        return fibonacci_plan(total_mb, steps)
    raise ConfigError(f"unknown plan mode {mode!r} (expected 'fixed' or 'fib')")
