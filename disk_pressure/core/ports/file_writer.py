"""File writer port.

The scheduler only cares that a file of the requested size ends up at the
requested path. Content bytes are irrelevant.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class FileWriter(Protocol):
    """Bulk byte-writing boundary."""

    def write_file(self, path: Path, size_mb: int) -> None:
        """Materialize ``size_mb`` whole megabytes at ``path``.

        Raises ``OSError`` on any filesystem failure.
        """
