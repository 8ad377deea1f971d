"""
Logging event sink.
"""
from __future__ import annotations

import logging
from dataclasses import asdict, is_dataclass
from typing import Any


class LoggingEventSink:
    """Logs run events using the standard logging module."""

    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    def on_event(self, event: Any) -> None:
        fields = asdict(event) if is_dataclass(event) else {"event": event}
        self._logger.debug(
            "%s %s",
            type(event).__name__,
            fields,
            extra={"event": event},
        )
