"""Text rendering for timing snapshots."""

from __future__ import annotations

from pathlib import Path
from typing import TextIO

from .schemas import TimingSnapshot


def render_report(snapshot: TimingSnapshot) -> list[str]:
    """Return the report lines for ``snapshot``, one block per source file."""

    lines: list[str] = []
    for source in snapshot.sources:
        lines.append(f"File: {source.source}")
        for interval in source.intervals:
            lines.append(f"Lines {interval.start} to {interval.end}: {interval.duration_s}")
    return lines


def write_report(snapshot: TimingSnapshot, stream: TextIO) -> None:
    for line in render_report(snapshot):
        stream.write(line)
        stream.write("\n")


def load_snapshot(path: Path) -> TimingSnapshot:
    """Parse a snapshot previously written with ``model_dump_json``."""

    return TimingSnapshot.model_validate_json(path.read_text(encoding="utf-8"))
