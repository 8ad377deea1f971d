"""Zero-filled local file writer."""

from __future__ import annotations

import os
from pathlib import Path

from disk_pressure.core.domain.types import MB

# Write in 1 MB chunks
CHUNK_SIZE = MB


class ZeroFillFileWriter:
    """Writes ``size_mb`` megabytes of zeros, then fsyncs.

    The fsync makes the new blocks count against filesystem usage before the
    next guard check samples it. A failed write leaves the partial file in
    place.
    """

    def __init__(self, *, fsync: bool = True) -> None:
        self._fsync = fsync
        self._block = bytes(CHUNK_SIZE)

    def write_file(self, path: Path, size_mb: int) -> None:
        with Path(path).open("wb") as fh:
            for _ in range(size_mb):
                fh.write(self._block)
            fh.flush()
            if self._fsync:
                os.fsync(fh.fileno())
