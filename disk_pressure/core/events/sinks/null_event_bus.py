from __future__ import annotations

from disk_pressure.core.events.event_bus import EventBus


class NullEventBus(EventBus):
    """EventBus with no sinks.

    For driving a ScheduleRun or WriteScheduler where nobody observes the
    events, such as unit tests of the run state machine.
    """

    def __init__(self) -> None:
        super().__init__(sinks=[])
