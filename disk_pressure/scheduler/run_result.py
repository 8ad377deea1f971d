from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class RunResult:
    """Outcome of one scheduler run.

    ``error`` holds the first error that terminated the run, if any.
    Canceled and completed runs have no error.
    """

    run_id: str
    status: str
    steps_completed: int
    written_mb: int
    error: Exception | None = None
    written_paths: tuple[str, ...] = field(default_factory=tuple)

    @property
    def succeeded(self) -> bool:
        return self.status in ("completed", "canceled")
