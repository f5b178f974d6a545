#!/usr/bin/env python
"""Local benchmark for the per-call overhead of IntervalTracker.mark()."""

from __future__ import annotations

import argparse
import json
import math
from datetime import datetime, timezone
from pathlib import Path
from time import perf_counter
from typing import List

from time_stats.tracker import IntervalTracker


def percentile(values: List[float], pct: float) -> float:
    if not values:
        return 0.0
    ordered = sorted(values)
    if len(ordered) == 1:
        return ordered[0]
    position = pct * (len(ordered) - 1)
    lower = math.floor(position)
    upper = math.ceil(position)
    if lower == upper:
        return ordered[int(position)]
    weight = position - lower
    return ordered[lower] * (1 - weight) + ordered[upper] * weight


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Benchmark mark() overhead locally.")
    parser.add_argument("--n", type=int, default=10_000, help="Number of mark pairs per round.")
    parser.add_argument("--rounds", type=int, default=20, help="Number of timed rounds.")
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("outputs/benchmarks/mark_overhead.json"),
        help="Path where benchmark metrics JSON will be written.",
    )
    return parser.parse_args()


def _time_round(tracker: IntervalTracker, n: int, *, explicit: bool) -> float:
    start = perf_counter()
    if explicit:
        for _ in range(n):
            tracker.mark("bench", 1)
            tracker.mark("bench", 2)
    else:
        for _ in range(n):
            tracker.mark()
            tracker.mark()
    return (perf_counter() - start) * 1e9 / (2 * n)


def main() -> None:
    args = parse_args()
    output_path = args.output
    output_path.parent.mkdir(parents=True, exist_ok=True)

    tracker = IntervalTracker()
    per_call_ns: dict[str, list[float]] = {"callsite": [], "explicit": []}
    for _ in range(args.rounds):
        tracker.clear()
        per_call_ns["callsite"].append(_time_round(tracker, args.n, explicit=False))
        tracker.clear()
        per_call_ns["explicit"].append(_time_round(tracker, args.n, explicit=True))

    payload = {
        "marks_per_round": 2 * args.n,
        "rounds": args.rounds,
        "per_call_ns": {
            mode: {"p50": percentile(values, 0.5), "p95": percentile(values, 0.95)}
            for mode, values in per_call_ns.items()
        },
        "generated_at": datetime.now(timezone.utc).isoformat(),
    }

    output_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    print(f"Benchmark complete → {output_path}")
    for mode, stats in payload["per_call_ns"].items():
        print(f"{mode}: p50={stats['p50']:.0f}ns p95={stats['p95']:.0f}ns")


if __name__ == "__main__":
    main()
