# agenda/layout.py
from __future__ import annotations

import math
from typing import Any, Callable, Iterable, List, Tuple

from .interval import appointment_times
from .model import EventTimes, HeightFn, Layout, LayoutedEvent, TopFn

MIN_EVENT_HEIGHT = 28.0

# (event, times, column, top, height)
_Placed = Tuple[Any, EventTimes, int, float, float]


def _span_max(a: float, b: float) -> float:
    # NaN is sticky: a cluster with an unreadable end never closes.
    if math.isnan(a) or math.isnan(b):
        return math.nan
    return a if a >= b else b


def _sort_key(item: Tuple[Any, EventTimes]) -> Tuple[float, float]:
    times = item[1]
    return (times.start_ms, -times.duration_min)


def _assign_columns(
    items: List[Tuple[Any, EventTimes]],
    get_top: TopFn,
    get_height: HeightFn,
) -> List[_Placed]:
    """First-fit packing: each event goes to the first column (by creation order)
    whose last event ends at or before the event's start."""
    column_ends: List[float] = []
    placed: List[_Placed] = []

    for event, times in items:
        col = -1
        for i, last_end in enumerate(column_ends):
            if times.start_ms >= last_end:
                col = i
                break
        if col < 0:
            col = len(column_ends)
            column_ends.append(times.end_ms)
        else:
            column_ends[col] = times.end_ms

        top = get_top(times.start)
        height = max(get_height(times.start, times.duration_min), MIN_EVENT_HEIGHT)
        placed.append((event, times, col, top, height))

    return placed


def _resolve_clusters(placed: List[_Placed]) -> List[LayoutedEvent]:
    clusters: List[List[_Placed]] = []
    current: List[_Placed] = []
    cluster_end = 0.0

    for entry in placed:
        times = entry[1]
        if not current:
            current = [entry]
            cluster_end = times.end_ms
        elif times.start_ms >= cluster_end:
            clusters.append(current)
            current = [entry]
            cluster_end = times.end_ms
        else:
            current.append(entry)
            cluster_end = _span_max(cluster_end, times.end_ms)
    if current:
        clusters.append(current)

    out: List[LayoutedEvent] = []
    for cluster_id, cluster in enumerate(clusters):
        total_cols = 1 + max(col for _, _, col, _, _ in cluster)
        width = 100.0 / total_cols
        for event, _times, col, top, height in cluster:
            out.append(
                LayoutedEvent(
                    event=event,
                    layout=Layout(top=top, height=height, left=(col / total_cols) * 100.0, width=width),
                    column=col,
                    cluster=cluster_id,
                )
            )
    return out


def compute_event_layout(
    events: Iterable[Any],
    get_top: TopFn,
    get_height: HeightFn,
    *,
    times: Callable[[Any], EventTimes] = appointment_times,
) -> List[LayoutedEvent]:
    """
    Position possibly-overlapping events side by side in a day column.

    Passes:
      1) sort by start ascending, ties by duration descending
      2) first-fit column assignment; top/height come from the caller's
         mappings (each called once per event), height floored at 28
      3) group into clusters of transitively overlapping events; every member
         gets width = 100 / columns-in-cluster and left = column * width

    Intervals are half-open: an event starting exactly at a previous end
    neither collides with it nor extends its cluster.

    The result is in time-sorted order and has one entry per input event.
    Input records are never modified. Nothing is validated: unreadable
    instants (NaN) never fit an existing column and never close a cluster.
    """
    items = [(event, times(event)) for event in events]
    if not items:
        return []
    items.sort(key=_sort_key)

    placed = _assign_columns(items, get_top, get_height)
    return _resolve_clusters(placed)


__all__ = ["MIN_EVENT_HEIGHT", "compute_event_layout"]
