"""
Run lifecycle state machine definitions.

This module defines the canonical run states and the allowed transitions
between them. It is validation-only: ``ScheduleRun`` consults it before
moving to a new state.
"""

from __future__ import annotations

from typing import Literal

RunStatus = Literal["idle", "running", "completed", "aborted", "canceled"]

# Terminal run states: once reached, the run is over.
RUN_TERMINAL_STATES: frozenset[str] = frozenset(
    {
        "completed",
        "aborted",
        "canceled",
    }
)


# Allowed run state transitions.
#
# Key   : current state
# Value : set of allowed next states
#
# Notes:
# - Only bounded plans can reach "completed".
# - Terminal states have no outgoing transitions.
RUN_ALLOWED_TRANSITIONS: dict[str, frozenset[str]] = {
    "idle": frozenset({"running"}),

    "running": frozenset(
        {
            "completed",
            "aborted",
            "canceled",
        }
    ),
}


def is_terminal_state(state: str) -> bool:
    """Return True if the given state is terminal."""
    return state in RUN_TERMINAL_STATES


def is_valid_transition(prev_state: str, next_state: str) -> bool:
    """Return True if the transition prev_state -> next_state is allowed."""
    allowed = RUN_ALLOWED_TRANSITIONS.get(prev_state)
    if allowed is None:
        return False
    return next_state in allowed
