"""Accumulates time spent between successive marks in the same file."""

from __future__ import annotations

import logging
import sys
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from threading import Lock
from typing import NamedTuple, TextIO

from .callsite import caller_location
from .config import TrackerConfig, resolve_clock
from .report import write_report
from .schemas import IntervalTiming, SourceTimings, TimingSnapshot

logger = logging.getLogger("time_stats.tracker")


class IntervalKey(NamedTuple):
    """Pair of line numbers bounding a timed interval."""

    start: int
    end: int


@dataclass(frozen=True)
class LastMark:
    """Most recent mark seen for a source file."""

    position: int
    timestamp: float


class IntervalTracker:
    """Sums elapsed time between marks, keyed by file and line range.

    Marks inside a loop land on the same pair of lines every iteration, so
    their intervals add up under one key. A mark whose line is not greater
    than the previous mark's line in the same file (for example the jump
    back to the top of a loop) records nothing but still becomes the new
    starting point.
    """

    def __init__(
        self,
        clock: Callable[[], float] | None = None,
        *,
        clock_name: str = "perf_counter",
        enabled: bool = True,
    ) -> None:
        self._clock = clock or resolve_clock(clock_name)
        self._clock_name = clock_name
        self.enabled = enabled
        self._last_marks: dict[str, LastMark] = {}
        self._durations: defaultdict[str, defaultdict[IntervalKey, float]] = defaultdict(
            lambda: defaultdict(float)
        )
        self._lock = Lock()

    @classmethod
    def from_config(cls, cfg: TrackerConfig) -> IntervalTracker:
        return cls(clock_name=cfg.clock_name, enabled=cfg.enabled)

    @property
    def clock_name(self) -> str:
        return self._clock_name

    def mark(
        self,
        source: str | None = None,
        position: int | None = None,
        *,
        stacklevel: int = 1,
    ) -> None:
        """Flag a point in the code.

        ``source`` and ``position`` default to the file and line of the
        caller; ``stacklevel`` picks a frame further up the stack when the
        call is made through a wrapper.
        """

        if not self.enabled:
            return

        now = self._clock()
        if source is None or position is None:
            site = caller_location(stacklevel)
            source = site.source if source is None else source
            position = site.position if position is None else position

        with self._lock:
            previous = self._last_marks.get(source)
            if previous is not None:
                if previous.position < position:
                    key = IntervalKey(previous.position, position)
                    # time.time() can step backwards; totals never shrink.
                    self._durations[source][key] += max(now - previous.timestamp, 0.0)
                else:
                    logger.debug(
                        "skipping non-increasing mark source=%s previous=%d current=%d",
                        source,
                        previous.position,
                        position,
                    )
            self._last_marks[source] = LastMark(position, now)

    def clear(self) -> None:
        """Remove all data currently tracked, in all files."""

        with self._lock:
            self._last_marks.clear()
            self._durations.clear()
        logger.debug("cleared interval tracker")

    def last_mark(self, source: str) -> LastMark | None:
        with self._lock:
            return self._last_marks.get(source)

    def totals(self) -> dict[str, dict[IntervalKey, float]]:
        """Return a copy of the accumulated seconds per file and line range."""

        with self._lock:
            return {source: dict(intervals) for source, intervals in self._durations.items()}

    def snapshot(self) -> TimingSnapshot:
        """Return the accumulated timings with each file's slowest ranges first."""

        sources = []
        for source, intervals in self.totals().items():
            ordered = sorted(intervals.items(), key=lambda item: item[1], reverse=True)
            sources.append(
                SourceTimings(
                    source=source,
                    intervals=[
                        IntervalTiming(start=key.start, end=key.end, duration_s=duration)
                        for key, duration in ordered
                    ],
                )
            )
        return TimingSnapshot(captured_at=datetime.now(UTC), clock=self._clock_name, sources=sources)

    def stats(self, stream: TextIO | None = None) -> None:
        """Print a per-file synopsis to ``stream`` (stderr by default)."""

        write_report(self.snapshot(), stream if stream is not None else sys.stderr)
