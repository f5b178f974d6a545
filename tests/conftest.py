from __future__ import annotations

from collections.abc import Iterator

import pytest

import time_stats
from time_stats.tracker import IntervalTracker


class FakeClock:
    """Clock that only moves when a test advances it."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def set(self, value: float) -> None:
        self.now = value


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def tracker(clock: FakeClock) -> IntervalTracker:
    return IntervalTracker(clock, clock_name="fake")


@pytest.fixture()
def clean_default_tracker() -> Iterator[IntervalTracker]:
    default = time_stats.get_tracker()
    default.clear()
    yield default
    default.clear()
