"""
Semantic test: progress sink output.

Invariant:
Bounded runs redraw one line in place and close it when the run reaches a
terminal state; unbounded runs print one counter line per step.
"""

from __future__ import annotations

import io

from disk_pressure.core.events.events import RunStateTransitionEvent, StepWrittenEvent
from disk_pressure.core.events.sinks.progress_sink import ProgressSink


def _step(step: int, total: int | None, cum: int) -> StepWrittenEvent:
    return StepWrittenEvent(
        ts_ns=1,
        run_id="run",
        step=step,
        total_steps=total,
        size_mb=1,
        cum_written_mb=cum,
        path="/data/tmp/x.bin",
    )


def test_bounded_progress_redraws_in_place() -> None:
    out = io.StringIO()
    sink = ProgressSink(out)

    sink.on_event(_step(1, 2, 1))
    sink.on_event(_step(2, 2, 2))
    sink.on_event(RunStateTransitionEvent(ts_ns=2, run_id="run", prev_state="running", next_state="completed"))

    text = out.getvalue()
    assert text.count("\r") == 2
    assert text.endswith("100% (2/2)\n")


def test_unbounded_progress_prints_counter_lines() -> None:
    out = io.StringIO()
    sink = ProgressSink(out)

    sink.on_event(_step(1, None, 4))
    sink.on_event(_step(2, None, 9))
    sink.close()

    assert out.getvalue() == "step 1, 4 MB written\nstep 2, 9 MB written\n"
