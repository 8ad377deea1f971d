"""Schedule configuration model.

This module defines the ScheduleConfig schema used to parse and normalize
run configuration, from either command-line arguments or a JSON file.

JSON example:
    {
      "target_dir": "/data/tmp",
      "step_delay_seconds": 60,
      "allocation": {"mode": "fixed", "total_mb": 500, "steps": 60},
      "guard": {"high_water_percent": 99}
    }
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from disk_pressure.allocation.allocation_config import AllocationConfig
from disk_pressure.core.domain.errors import ConfigError
from disk_pressure.core.guard.guard_config import GuardConfig

DEFAULT_TARGET_DIR = Path("/data/tmp")
DEFAULT_STEP_DELAY_SECONDS = 60.0
MAX_STEP_DELAY_SECONDS = 30 * 24 * 3600.0


class ScheduleConfig(BaseModel):
    """Everything the scheduler needs to execute one run."""

    target_dir: Path = DEFAULT_TARGET_DIR
    step_delay_seconds: float = Field(
        default=DEFAULT_STEP_DELAY_SECONDS, ge=0, le=MAX_STEP_DELAY_SECONDS
    )

    allocation: AllocationConfig
    guard: GuardConfig = Field(default_factory=GuardConfig)

    # Optional JSONL event log.
    events_path: Path | None = None

    model_config = ConfigDict(extra="forbid", frozen=True)

    @classmethod
    def from_json_obj(cls, schedule_obj: dict[str, Any]) -> ScheduleConfig:
        """Create a ScheduleConfig from a JSON-compatible object.

        Validation failures are reported as ConfigError.
        """
        try:
            return cls.model_validate(schedule_obj)
        except ValidationError as exc:
            raise ConfigError(_format_validation_error(exc)) from exc


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        location = ".".join(str(item) for item in err["loc"]) or "config"
        parts.append(f"{location}: {err['msg']}")
    return "; ".join(parts)
