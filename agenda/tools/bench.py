#!/usr/bin/env python3
from __future__ import annotations

import argparse
import datetime as dt
import random
import statistics
import sys
import time
from typing import Any, Dict, List, Tuple

from agenda.grid import grid_mappings, layout_days
from agenda.layout import compute_event_layout
from agenda.model import GridConfig


def _die(msg: str, rc: int = 2) -> int:
    print(f"[agenda-bench] ERROR: {msg}", file=sys.stderr)
    return rc


def _now_ns() -> int:
    return time.perf_counter_ns()


def _time_one(fn, *, repeats: int, warmup: int) -> Tuple[float, float, float]:
    for _ in range(max(0, warmup)):
        fn()

    samples_ms: List[float] = []
    for _ in range(max(1, repeats)):
        t0 = _now_ns()
        fn()
        t1 = _now_ns()
        samples_ms.append((t1 - t0) / 1_000_000.0)

    return (min(samples_ms), statistics.fmean(samples_ms), max(samples_ms))


def synthetic_appointments(n: int, seed: int, *, day_minutes: int = 15 * 60) -> List[Dict[str, Any]]:
    """Random appointments on 2025-03-10 (UTC), starting from 06:00, on a 5-minute grid."""
    rng = random.Random(seed)
    base = dt.datetime(2025, 3, 10, 6, 0, tzinfo=dt.timezone.utc)
    slots = max(1, day_minutes // 5)
    out: List[Dict[str, Any]] = []
    for i in range(max(0, n)):
        start = base + dt.timedelta(minutes=5 * rng.randrange(slots))
        dur = rng.choice((15, 30, 30, 45, 60, 90))
        out.append(
            {
                "id": f"bench-{i:06d}",
                "schedules": {
                    "start_time": start.isoformat(),
                    "end_time": (start + dt.timedelta(minutes=dur)).isoformat(),
                },
                "services": {"duration_minutes": dur},
            }
        )
    return out


def main(argv: List[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="agenda-bench", description="Micro-benchmark the agenda layout engine.")
    ap.add_argument("--n", type=int, default=250, help="Number of synthetic appointments")
    ap.add_argument("--seed", type=int, default=1, help="RNG seed")
    ap.add_argument("--repeats", type=int, default=1, help="Measurement repeats (min/avg/max over repeats)")
    ap.add_argument("--warmup", type=int, default=0, help="Warmup runs per step before measuring")
    ap.add_argument("--day-minutes", type=int, default=15 * 60, help="Width of the start-time window in minutes")
    ns = ap.parse_args(argv)

    if ns.n < 0:
        return _die(f"--n must be >= 0 (got {ns.n})")
    if ns.day_minutes <= 0:
        return _die(f"--day-minutes must be positive (got {ns.day_minutes})")

    events = synthetic_appointments(int(ns.n), int(ns.seed), day_minutes=int(ns.day_minutes))
    cfg = GridConfig(tz="UTC")
    get_top, get_height = grid_mappings(cfg)

    print(f"[agenda-bench] n={ns.n} seed={ns.seed} repeats={ns.repeats} warmup={ns.warmup}")

    def _layout() -> None:
        out = compute_event_layout(events, get_top, get_height)
        if len(out) != len(events):
            raise RuntimeError("layout changed the event count")

    def _days() -> None:
        _ = layout_days(events, cfg)

    mn, av, mx = _time_one(_layout, repeats=int(ns.repeats), warmup=int(ns.warmup))
    print(f"[agenda-bench] layout: {mn:.2f}/{av:.2f}/{mx:.2f} ms (min/avg/max)")

    mn, av, mx = _time_one(_days, repeats=int(ns.repeats), warmup=int(ns.warmup))
    print(f"[agenda-bench] days:   {mn:.2f}/{av:.2f}/{mx:.2f} ms (min/avg/max)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
