"""Textual progress bar rendering."""

from __future__ import annotations

DEFAULT_BAR_WIDTH = 40


def render_progress(current: int, total: int, width: int = DEFAULT_BAR_WIDTH) -> str:
    """
    Render ``current/total`` as a fixed-width bar, e.g. ``[####----]  50% (2/4)``.

    ``current`` is clamped to ``0..total``. ``total`` must be >= 1.
    """
    if total < 1:
        raise ValueError("total must be >= 1")
    if width < 1:
        raise ValueError("width must be >= 1")

    current = min(max(current, 0), total)

    percent = 100 * current // total
    filled = width * current // total
    empty = width - filled

    return f"[{'#' * filled}{'-' * empty}] {percent:3d}% ({current}/{total})"
