"""
Semantic test: steps never overlap.

Invariant:
Step N+1's disk check and write never start before step N's write call has
returned and its progress event has been emitted. The disk guard samples
usage immediately before every write.
"""

from __future__ import annotations

from typing import Any

from disk_pressure.allocation.strategies import FixedAllocation
from disk_pressure.core.events.event_bus import EventBus
from disk_pressure.core.events.events import StepWrittenEvent
from disk_pressure.core.guard.disk_guard import DiskGuard
from disk_pressure.scheduler.write_scheduler import WriteScheduler


class _JournalProbe:
    def __init__(self, journal: list[str]) -> None:
        self._journal = journal

    def used_percent(self, path) -> int:
        self._journal.append("check")
        return 10

    def free_bytes(self, path) -> int:
        return 1 << 40


class _JournalSink:
    def __init__(self, journal: list[str]) -> None:
        self._journal = journal

    def on_event(self, event: Any) -> None:
        if isinstance(event, StepWrittenEvent):
            self._journal.append(f"progress:{event.step}")


def test_steps_execute_strictly_in_sequence(tmp_path, make_writer) -> None:
    journal: list[str] = []
    writer = make_writer(journal=journal)

    scheduler = WriteScheduler(
        target_dir=tmp_path,
        step_delay_seconds=0,
        guard=DiskGuard(probe=_JournalProbe(journal)),
        writer=writer,
        event_bus=EventBus(sinks=[_JournalSink(journal)]),
    )

    scheduler.run(FixedAllocation(3, 3))

    assert journal == [
        "check", "write-start:1", "write-end:1", "progress:1",
        "check", "write-start:2", "write-end:2", "progress:2",
        "check", "write-start:3", "write-end:3", "progress:3",
    ]
