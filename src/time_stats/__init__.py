"""Easy timing info for marked regions of code.

Usage::

    from time_stats import clear, mark, stats

    clear()
    mark()
    do_work()
    mark()
    stats()
"""

from __future__ import annotations

from typing import TextIO

from .config import config as _config
from .schemas import TimingSnapshot
from .tracker import IntervalKey, IntervalTracker

__version__ = "0.3.0"

_tracker = IntervalTracker.from_config(_config)


def get_tracker() -> IntervalTracker:
    """Return the process-wide tracker behind the module-level functions."""

    return _tracker


def mark() -> None:
    """Flag the calling line; time between marks in the same file is summed."""

    _tracker.mark(stacklevel=2)


def clear() -> None:
    """Remove all data currently tracked, in all files."""

    _tracker.clear()


def stats(stream: TextIO | None = None) -> None:
    """Print timings per file to stderr, slowest intervals first."""

    _tracker.stats(stream)


def snapshot() -> TimingSnapshot:
    """Return the accumulated timings as a pydantic model, slowest ranges first."""

    return _tracker.snapshot()


__all__ = ["mark", "clear", "stats", "snapshot", "get_tracker", "IntervalKey", "IntervalTracker"]
