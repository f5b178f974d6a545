from __future__ import annotations

import io
from datetime import UTC, datetime
from pathlib import Path

import pytest
from pydantic import ValidationError

from time_stats.report import load_snapshot, render_report, write_report
from time_stats.schemas import IntervalTiming, SourceTimings, TimingSnapshot


def _build_snapshot() -> TimingSnapshot:
    return TimingSnapshot(
        captured_at=datetime(2025, 1, 1, tzinfo=UTC),
        clock="perf_counter",
        sources=[
            SourceTimings(
                source="app/main.py",
                intervals=[
                    IntervalTiming(start=10, end=50, duration_s=0.05),
                    IntervalTiming(start=5, end=10, duration_s=0.002),
                ],
            ),
            SourceTimings(
                source="app/db.py",
                intervals=[IntervalTiming(start=3, end=4, duration_s=1.5)],
            ),
        ],
    )


def test_render_report_uses_stats_format() -> None:
    assert render_report(_build_snapshot()) == [
        "File: app/main.py",
        "Lines 10 to 50: 0.05",
        "Lines 5 to 10: 0.002",
        "File: app/db.py",
        "Lines 3 to 4: 1.5",
    ]


def test_write_report_terminates_lines() -> None:
    stream = io.StringIO()
    write_report(_build_snapshot(), stream)

    assert stream.getvalue().endswith("Lines 3 to 4: 1.5\n")
    assert stream.getvalue().count("\n") == 5


def test_empty_snapshot_renders_nothing() -> None:
    snapshot = TimingSnapshot(captured_at=datetime.now(UTC), clock="time")

    assert snapshot.is_empty
    assert render_report(snapshot) == []


def test_interval_rejects_backward_range() -> None:
    with pytest.raises(ValidationError):
        IntervalTiming(start=20, end=10, duration_s=0.1)


def test_interval_rejects_negative_duration() -> None:
    with pytest.raises(ValidationError):
        IntervalTiming(start=1, end=2, duration_s=-0.1)


def test_load_snapshot_reads_json_dump(tmp_path: Path) -> None:
    target = tmp_path / "snapshot.json"
    snapshot = _build_snapshot()
    target.write_text(snapshot.model_dump_json(), encoding="utf-8")

    loaded = load_snapshot(target)

    assert loaded.sources[0].intervals[0].label == "10-50"
    assert loaded.sources[1].total_s == pytest.approx(1.5)
