"""
Semantic test: a pre-canceled token writes nothing.

Invariant:
Cancellation is checked at the top of every step, so a run started with a
canceled token goes idle -> running -> canceled without touching the disk.
"""

from __future__ import annotations

from disk_pressure.allocation.strategies import FixedAllocation
from disk_pressure.core.events.events import RunStateTransitionEvent
from disk_pressure.core.guard.disk_guard import DiskGuard
from disk_pressure.scheduler.cancellation import CancellationToken
from disk_pressure.scheduler.write_scheduler import WriteScheduler


def test_pre_canceled_run_writes_nothing(tmp_path, make_probe, make_writer, event_bus, sink) -> None:
    token = CancellationToken()
    token.cancel()
    probe = make_probe(10)
    writer = make_writer()

    scheduler = WriteScheduler(
        target_dir=tmp_path,
        step_delay_seconds=0,
        guard=DiskGuard(probe=probe),
        writer=writer,
        event_bus=event_bus,
    )

    result = scheduler.run(FixedAllocation(10, 2), token)

    assert result.status == "canceled"
    assert result.steps_completed == 0
    assert writer.writes == []
    assert probe.calls == []

    states = [e.next_state for e in sink.of_type(RunStateTransitionEvent)]
    assert states == ["running", "canceled"]


def test_token_wait_returns_immediately_once_canceled() -> None:
    token = CancellationToken()
    assert token.wait(0) is False

    token.cancel()

    assert token.is_canceled
    assert token.wait(3600) is True
