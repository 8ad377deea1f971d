"""
Semantic test: an unreadable disk aborts the run.

Invariant:
If the usage probe raises OSError (for example because the target directory
was removed by a cleanup job), no write is attempted for that step. The run
transitions to "aborted" and returns a RunResult carrying a DiskProbeError
chained to the OSError.
"""

from __future__ import annotations

from pathlib import Path

from disk_pressure.allocation.strategies import FixedAllocation
from disk_pressure.core.domain.errors import DiskProbeError
from disk_pressure.core.events.events import RunStateTransitionEvent
from disk_pressure.core.guard.disk_guard import DiskGuard
from disk_pressure.scheduler.write_scheduler import WriteScheduler


class _VanishingDirProbe:
    """Reports low usage once, then behaves as if the directory is gone."""

    def __init__(self) -> None:
        self.calls = 0

    def used_percent(self, path: Path) -> int:
        self.calls += 1
        if self.calls > 1:
            raise FileNotFoundError(2, "No such file or directory", str(path))
        return 10

    def free_bytes(self, path: Path) -> int:
        return 1 << 40


def test_probe_oserror_aborts_with_typed_error(tmp_path, make_writer, event_bus, sink) -> None:
    writer = make_writer()

    scheduler = WriteScheduler(
        target_dir=tmp_path,
        step_delay_seconds=0,
        guard=DiskGuard(probe=_VanishingDirProbe()),
        writer=writer,
        event_bus=event_bus,
    )

    result = scheduler.run(FixedAllocation(4, 2))

    assert result.status == "aborted"
    assert not result.succeeded
    assert isinstance(result.error, DiskProbeError)
    assert isinstance(result.error.__cause__, FileNotFoundError)
    assert result.error.path == tmp_path
    assert result.steps_completed == 1
    assert len(writer.writes) == 1

    last = sink.of_type(RunStateTransitionEvent)[-1]
    assert (last.prev_state, last.next_state) == ("running", "aborted")
