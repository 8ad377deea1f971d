"""Shared fakes for the semantic test suite.

The fakes stand in for the scheduler's external collaborators (disk usage
probe, file writer) and record every call so tests can assert on ordering.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Iterable

import pytest

from disk_pressure.core.events.event_bus import EventBus


class FakeDiskUsageProbe:
    """Returns scripted usage percentages; repeats the last one when exhausted."""

    def __init__(self, percents: int | Iterable[int], free_bytes: int = 1 << 40) -> None:
        self._percents = [percents] if isinstance(percents, int) else list(percents)
        self._free_bytes = free_bytes
        self.calls: list[Path] = []

    def used_percent(self, path: Path) -> int:
        index = min(len(self.calls), len(self._percents) - 1)
        self.calls.append(Path(path))
        return self._percents[index]

    def free_bytes(self, path: Path) -> int:
        return self._free_bytes


class RecordingWriter:
    """Records writes; optionally fails on a given call or runs a hook after each write."""

    def __init__(
        self,
        *,
        fail_on_call: int | None = None,
        after_write: Callable[[int], None] | None = None,
        journal: list[str] | None = None,
    ) -> None:
        self.writes: list[tuple[Path, int]] = []
        self._fail_on_call = fail_on_call
        self._after_write = after_write
        self.journal = journal if journal is not None else []
        self._calls = 0

    def write_file(self, path: Path, size_mb: int) -> None:
        self._calls += 1
        self.journal.append(f"write-start:{self._calls}")
        if self._fail_on_call == self._calls:
            raise OSError(28, "No space left on device")
        self.writes.append((Path(path), size_mb))
        self.journal.append(f"write-end:{self._calls}")
        if self._after_write is not None:
            self._after_write(self._calls)


class RecordingSink:
    """Collects every event emitted on the bus."""

    def __init__(self) -> None:
        self.events: list[Any] = []
        self.closed = False

    def on_event(self, event: Any) -> None:
        self.events.append(event)

    def of_type(self, event_type: type) -> list[Any]:
        return [e for e in self.events if isinstance(e, event_type)]

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def event_bus(sink: RecordingSink) -> EventBus:
    return EventBus(sinks=[sink])


@pytest.fixture
def make_probe() -> Callable[..., FakeDiskUsageProbe]:
    return FakeDiskUsageProbe


@pytest.fixture
def make_writer() -> Callable[..., RecordingWriter]:
    return RecordingWriter
