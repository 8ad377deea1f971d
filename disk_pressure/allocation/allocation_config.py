"""Allocation configuration model.

JSON examples:
    "allocation": {"mode": "fib", "total_mb": 500, "steps": 60}
    "allocation": {"mode": "uniform", "min_mb": 5, "max_mb": 20, "seed": 7}
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

AllocationMode = Literal["fixed", "fib", "uniform"]


class AllocationConfig(BaseModel):
    """Selects an allocation strategy and carries its parameters."""

    mode: AllocationMode = "fixed"

    # Bounded modes (fixed, fib)
    total_mb: int | None = Field(default=None, ge=1)
    steps: int | None = Field(default=None, ge=1)

    # Unbounded mode (uniform)
    min_mb: int | None = Field(default=None, ge=1)
    max_mb: int | None = Field(default=None, ge=1)
    seed: int | None = None

    model_config = ConfigDict(extra="forbid", frozen=True)

    @classmethod
    def from_json_obj(cls, allocation_obj: dict[str, Any]) -> AllocationConfig:
        """Create an AllocationConfig instance from a JSON-compatible object."""
        return cls.model_validate(allocation_obj)

    @model_validator(mode="after")
    def validate_consistency(self) -> AllocationConfig:
        """Require exactly the parameters the selected mode uses."""
        if self.mode == "uniform":
            if self.min_mb is None or self.max_mb is None:
                raise ValueError("uniform mode requires min_mb and max_mb")
            if self.max_mb < self.min_mb:
                raise ValueError("max_mb must be greater than or equal to min_mb")
            if self.total_mb is not None or self.steps is not None:
                raise ValueError("uniform mode does not accept total_mb or steps")
            return self

        if self.total_mb is None or self.steps is None:
            raise ValueError(f"{self.mode} mode requires total_mb and steps")
        if self.total_mb < self.steps:
            raise ValueError(
                f"total_mb must be >= steps in {self.mode} mode "
                "(minimum 1 MB per step)"
            )
        if self.min_mb is not None or self.max_mb is not None or self.seed is not None:
            raise ValueError(f"{self.mode} mode does not accept min_mb, max_mb or seed")
        return self
