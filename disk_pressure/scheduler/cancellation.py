"""Cooperative cancellation for scheduler runs."""

from __future__ import annotations

import logging
import signal
import time
from types import FrameType

LOGGER = logging.getLogger(__name__)

# Upper bound on how long a canceled token can go unnoticed inside wait().
DEFAULT_POLL_INTERVAL_SECONDS = 0.05


class CancellationToken:
    """Cancellation flag observed at step boundaries and during delays.

    Cancelling never interrupts a write in progress; the scheduler notices the
    flag once the current step has returned.

    ``cancel()`` only assigns a bool and takes no lock, so it is safe to call
    from a signal handler that interrupts ``wait()`` on the same thread.
    """

    def __init__(self, poll_interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS) -> None:
        if poll_interval_seconds <= 0:
            raise ValueError("poll_interval_seconds must be > 0")
        self._canceled = False
        self._poll_interval_seconds = poll_interval_seconds

    @property
    def is_canceled(self) -> bool:
        return self._canceled

    def cancel(self) -> None:
        self._canceled = True

    def wait(self, seconds: float) -> bool:
        """Sleep up to ``seconds``; return True as soon as the token is canceled."""
        deadline = time.monotonic() + max(seconds, 0.0)

        while not self._canceled:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return False
            time.sleep(min(remaining, self._poll_interval_seconds))

        return True


def install_signal_handlers(
    token: CancellationToken,
    signals: tuple[signal.Signals, ...] = (signal.SIGINT, signal.SIGTERM),
) -> dict[signal.Signals, object]:
    """Route the given signals to ``token.cancel()``.

    Returns the previous handlers so callers can restore them.
    Must be called from the main thread.
    """

    def _handler(signum: int, _frame: FrameType | None) -> None:
        token.cancel()
        LOGGER.info("Received %s, stopping after the current step", signal.Signals(signum).name)

    previous: dict[signal.Signals, object] = {}
    for sig in signals:
        previous[sig] = signal.getsignal(sig)
        signal.signal(sig, _handler)
    return previous


def restore_signal_handlers(previous: dict[signal.Signals, object]) -> None:
    for sig, handler in previous.items():
        signal.signal(sig, handler)
