"""Pydantic models describing a point-in-time view of accumulated timings."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, model_validator


class IntervalTiming(BaseModel):
    """Total time spent between two marked lines of one file."""

    start: int = Field(..., description="Line of the mark that opened the interval.")
    end: int = Field(..., description="Line of the mark that closed the interval.")
    duration_s: float = Field(..., ge=0, description="Accumulated seconds across every visit.")

    @model_validator(mode="after")
    def _ensure_forward_range(self) -> IntervalTiming:
        if self.start >= self.end:
            raise ValueError("Interval start line must be lower than its end line.")
        return self

    @property
    def label(self) -> str:
        return f"{self.start}-{self.end}"


class SourceTimings(BaseModel):
    """Intervals recorded for a single source file, slowest first."""

    source: str = Field(..., description="File the marks were placed in.")
    intervals: list[IntervalTiming] = Field(default_factory=list)

    @property
    def total_s(self) -> float:
        return sum(interval.duration_s for interval in self.intervals)


class TimingSnapshot(BaseModel):
    """Everything the tracker has accumulated at ``captured_at``."""

    captured_at: datetime = Field(..., description="UTC timestamp when the snapshot was taken.")
    clock: str = Field(..., description="Name of the clock used to measure intervals.")
    sources: list[SourceTimings] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.sources
