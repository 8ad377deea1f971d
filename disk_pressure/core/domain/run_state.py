"""Mutable execution state of a single scheduler run."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from disk_pressure.core.domain.run_state_machine import (
    is_terminal_state,
    is_valid_transition,
)
from disk_pressure.core.events.events import RunStateTransitionEvent

if TYPE_CHECKING:
    from disk_pressure.core.events.event_bus import EventBus


class ScheduleRun:
    """Step index, cumulative total and lifecycle status of one run.

    Owned by the scheduler that created it. Every status change is validated
    against the run state machine and published on the event bus.
    """

    def __init__(
        self,
        *,
        run_id: str,
        event_bus: EventBus,
        clock: Callable[[], int],
    ) -> None:
        self.run_id = run_id
        self._event_bus = event_bus
        self._clock = clock

        self.status: str = "idle"
        self.steps_completed = 0
        self.written_mb = 0
        self.written_paths: list[str] = []

    @property
    def is_terminal(self) -> bool:
        return is_terminal_state(self.status)

    def transition(self, next_state: str, *, reason: str | None = None) -> None:
        prev_state = self.status
        if not is_valid_transition(prev_state, next_state):
            raise RuntimeError(
                f"invalid run transition {prev_state!r} -> {next_state!r}"
            )

        self.status = next_state
        self._event_bus.emit(
            RunStateTransitionEvent(
                ts_ns=self._clock(),
                run_id=self.run_id,
                prev_state=prev_state,
                next_state=next_state,
                reason=reason,
            )
        )

    def record_step(self, *, size_mb: int, path: str) -> None:
        self.steps_completed += 1
        self.written_mb += size_mb
        self.written_paths.append(path)
