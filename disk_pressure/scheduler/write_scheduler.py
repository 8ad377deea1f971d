"""Rate-controlled write loop."""

from __future__ import annotations

import logging
import time
import uuid
from pathlib import Path
from typing import TYPE_CHECKING, Callable

from disk_pressure.core.domain.errors import (
    DiskExhaustedError,
    DiskProbeError,
    WriteFailedError,
)
from disk_pressure.core.domain.run_state import ScheduleRun
from disk_pressure.core.events.events import DiskUsageSampledEvent, StepWrittenEvent
from disk_pressure.io.naming import build_file_name
from disk_pressure.scheduler.cancellation import CancellationToken
from disk_pressure.scheduler.run_result import RunResult

if TYPE_CHECKING:
    from disk_pressure.allocation.base import AllocationStrategy
    from disk_pressure.core.events.event_bus import EventBus
    from disk_pressure.core.guard.disk_guard import DiskGuard
    from disk_pressure.core.ports.file_writer import FileWriter

LOGGER = logging.getLogger(__name__)


class WriteScheduler:
    """Writes one file per step, guarded, paced and cancellable.

    Invariants:
    - Steps run strictly one after another; a step's write and its progress
      event complete before the next step's guard check.
    - The disk guard is consulted immediately before every write.
    - Cancellation is observed before each step and during each delay, so a
      cancel during a delay prevents the next write.
    - The first error ends the run; nothing is retried or skipped.
    """

    def __init__(
        self,
        *,
        target_dir: Path,
        step_delay_seconds: float,
        guard: DiskGuard,
        writer: FileWriter,
        event_bus: EventBus,
        clock: Callable[[], int] = time.time_ns,
    ) -> None:
        if step_delay_seconds < 0:
            raise ValueError("step_delay_seconds must be >= 0")

        self._target_dir = Path(target_dir)
        self._step_delay_seconds = step_delay_seconds
        self._guard = guard
        self._writer = writer
        self._event_bus = event_bus
        self._clock = clock

    def run(
        self,
        allocation: AllocationStrategy,
        token: CancellationToken | None = None,
    ) -> RunResult:
        """Drive ``allocation`` to a terminal state and return the outcome."""
        # pylint: disable=too-many-locals,too-many-statements
        token = token if token is not None else CancellationToken()
        total_steps = allocation.step_count

        run = ScheduleRun(
            run_id=uuid.uuid4().hex,
            event_bus=self._event_bus,
            clock=self._clock,
        )
        run.transition("running")

        LOGGER.info(
            "Run %s started: mode=%s steps=%s target=%s",
            run.run_id,
            allocation.name,
            total_steps if total_steps is not None else "unbounded",
            self._target_dir,
            extra={"run_id": run.run_id},
        )

        error: Exception | None = None

        for size_mb in allocation.sizes():
            if token.is_canceled:
                run.transition("canceled", reason="canceled")
                break

            # -----------------------------------------------------------------
            # Safety ceiling
            # -----------------------------------------------------------------
            try:
                sample = self._guard.check_safe(self._target_dir)
            except DiskExhaustedError as exc:
                self._emit_usage(run, exc.used_percent)
                error = exc
                run.transition("aborted", reason=str(exc))
                break
            except OSError as exc:
                error = DiskProbeError(path=self._target_dir, reason=str(exc))
                error.__cause__ = exc
                LOGGER.error("%s", error, extra={"run_id": run.run_id})
                run.transition("aborted", reason=str(error))
                break

            self._emit_usage(run, sample.used_percent)

            # -----------------------------------------------------------------
            # Write
            # -----------------------------------------------------------------
            ts_ns = self._clock()
            path = self._target_dir / build_file_name(allocation.file_prefix, size_mb, ts_ns)

            LOGGER.info(
                "Writing %d MB -> %s",
                size_mb,
                path,
                extra={"run_id": run.run_id, "step": run.steps_completed + 1},
            )

            try:
                self._writer.write_file(path, size_mb)
            except OSError as exc:
                error = WriteFailedError(path=path, size_mb=size_mb, reason=str(exc))
                error.__cause__ = exc
                run.transition("aborted", reason=str(error))
                break

            run.record_step(size_mb=size_mb, path=str(path))

            self._event_bus.emit(
                StepWrittenEvent(
                    ts_ns=self._clock(),
                    run_id=run.run_id,
                    step=run.steps_completed,
                    total_steps=total_steps,
                    size_mb=size_mb,
                    cum_written_mb=run.written_mb,
                    path=str(path),
                )
            )

            # -----------------------------------------------------------------
            # Pace
            # -----------------------------------------------------------------
            more_steps = total_steps is None or run.steps_completed < total_steps
            if more_steps and token.wait(self._step_delay_seconds):
                run.transition("canceled", reason="canceled")
                break

        if not run.is_terminal:
            run.transition("completed")

        LOGGER.info(
            "Run %s %s: %d steps, %d MB written",
            run.run_id,
            run.status,
            run.steps_completed,
            run.written_mb,
            extra={"run_id": run.run_id, "status": run.status},
        )

        return RunResult(
            run_id=run.run_id,
            status=run.status,
            steps_completed=run.steps_completed,
            written_mb=run.written_mb,
            error=error,
            written_paths=tuple(run.written_paths),
        )

    def _emit_usage(self, run: ScheduleRun, used_percent: int) -> None:
        self._event_bus.emit(
            DiskUsageSampledEvent(
                ts_ns=self._clock(),
                run_id=run.run_id,
                path=str(self._target_dir),
                used_percent=used_percent,
                high_water_percent=self._guard.high_water_percent,
            )
        )
