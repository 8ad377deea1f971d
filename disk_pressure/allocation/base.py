"""Allocation strategy interface.

An allocation strategy decides how big each scheduled write is. The
scheduler drives every strategy the same way: it pulls sizes one at a time
from ``sizes()`` and stops when the iterator is exhausted or the run ends.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterator


class AllocationStrategy(ABC):
    """Strategy interface implemented by all allocation policies."""

    # Filename prefix for files written under this strategy.
    file_prefix: str = "file"

    @property
    @abstractmethod
    def name(self) -> str:
        """Short mode name, as accepted on the command line."""

    @property
    @abstractmethod
    def step_count(self) -> int | None:
        """Number of planned steps, or None when the run is unbounded."""

    @abstractmethod
    def sizes(self) -> Iterator[int]:
        """Yield per-step sizes in whole megabytes, in execution order."""

    @property
    def is_bounded(self) -> bool:
        return self.step_count is not None
