"""Output file naming."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone


def build_file_name(prefix: str, size_mb: int, ts_ns: int) -> str:
    """Return ``<prefix>_<size>MB_<YYYYmmdd_HHMMSS>_<8 hex>.bin``."""
    stamp = datetime.fromtimestamp(ts_ns / 1e9, tz=timezone.utc).strftime("%Y%m%d_%H%M%S")
    return f"{prefix}_{size_mb}MB_{stamp}_{uuid.uuid4().hex[:8]}.bin"
