"""Runtime configuration and environment helpers for the interval tracker."""

from __future__ import annotations

import os
import time
from collections.abc import Callable
from dataclasses import dataclass

_DEFAULT_CLOCK = "perf_counter"

_CLOCKS: dict[str, Callable[[], float]] = {
    "perf_counter": time.perf_counter,
    "monotonic": time.monotonic,
    "time": time.time,
}


@dataclass(frozen=True)
class TrackerConfig:
    """Immutable tracker configuration."""

    enabled: bool
    clock_name: str


def _parse_bool(value: str | None, fallback: bool) -> bool:
    if value is None:
        return fallback
    return value.lower() in {"1", "true", "yes", "on"}


def _parse_clock(value: str | None, fallback: str) -> str:
    if value is None:
        return fallback
    name = value.strip().lower()
    return name if name in _CLOCKS else fallback


def resolve_clock(name: str) -> Callable[[], float]:
    """Return the ``time`` function registered under ``name``."""

    try:
        return _CLOCKS[name]
    except KeyError:
        raise ValueError(f"Unknown clock {name!r}; expected one of {sorted(_CLOCKS)}") from None


def load_config() -> TrackerConfig:
    """Load configuration from environment variables, applying defaults."""

    enabled = _parse_bool(os.getenv("TIME_STATS_ENABLED"), True)
    clock_name = _parse_clock(os.getenv("TIME_STATS_CLOCK"), _DEFAULT_CLOCK)

    return TrackerConfig(enabled=enabled, clock_name=clock_name)


config = load_config()
"""Singleton config loaded at import time for convenience."""
