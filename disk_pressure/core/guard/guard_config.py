"""Disk guard configuration model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Usage at or above this percentage is treated as "effectively full".
DEFAULT_HIGH_WATER_PERCENT = 99


class GuardConfig(BaseModel):
    """Safety ceiling applied before every write."""

    high_water_percent: int = Field(default=DEFAULT_HIGH_WATER_PERCENT, ge=1, le=100)

    model_config = ConfigDict(extra="forbid", frozen=True)

    @classmethod
    def from_json_obj(cls, guard_obj: dict[str, Any]) -> GuardConfig:
        """Create a GuardConfig instance from a JSON-compatible object."""
        return cls.model_validate(guard_obj)
