"""
Progress bar event sink.
"""
from __future__ import annotations

import sys
from typing import Any, TextIO

from disk_pressure.core.domain.run_state_machine import is_terminal_state
from disk_pressure.core.events.events import RunStateTransitionEvent, StepWrittenEvent
from disk_pressure.core.progress import render_progress


class ProgressSink:
    """Redraws a progress bar on every written step.

    Bounded runs redraw a single line in place. Unbounded runs have no total,
    so each step prints a running counter line instead.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream if stream is not None else sys.stdout
        self._line_open = False

    def on_event(self, event: Any) -> None:
        if isinstance(event, StepWrittenEvent):
            if event.total_steps is None:
                self._stream.write(
                    f"step {event.step}, {event.cum_written_mb} MB written\n"
                )
            else:
                self._stream.write(
                    "\r" + render_progress(event.step, event.total_steps)
                )
                self._line_open = True
            self._stream.flush()
            return

        if isinstance(event, RunStateTransitionEvent) and is_terminal_state(event.next_state):
            self._end_line()

    def _end_line(self) -> None:
        if self._line_open:
            self._stream.write("\n")
            self._stream.flush()
            self._line_open = False

    def close(self) -> None:
        self._end_line()
