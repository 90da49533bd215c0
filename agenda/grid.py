# agenda/grid.py
"""Day/week time-grid geometry for the agenda views.

The grid is a stack of hour rows of `hour_height` pixels. The collapsed view
shows 06:00-20:59 and pins earlier/later starts to its edges; the expanded
view shows the full day.
"""
from __future__ import annotations

import datetime as dt
from typing import Any, Callable, Dict, Iterable, List, Optional

from .interval import appointment_times
from .layout import compute_event_layout
from .model import EventTimes, GridConfig, HeightFn, LayoutedEvent, TopFn
from .util.tz import day_key_from_ms, local_hour_minute, resolve_tz

NORMAL_HEIGHT = 64.0

TimesFn = Callable[[Any], EventTimes]


def visible_hours(cfg: GridConfig) -> List[int]:
    if cfg.expanded:
        return list(range(24))
    return list(range(cfg.collapsed_start_hour, cfg.collapsed_end_hour + 1))


def grid_height(cfg: GridConfig) -> float:
    return len(visible_hours(cfg)) * float(cfg.hour_height)


def top_offset(instant: Optional[dt.datetime], cfg: GridConfig, tzinfo: Optional[dt.tzinfo] = None) -> float:
    """Pixels from the top of the grid to `instant` (wall clock in cfg.tz)."""
    if instant is None:
        return 0.0
    tz = tzinfo if tzinfo is not None else resolve_tz(cfg.tz)
    h, m = local_hour_minute(instant, tz)

    effective_h = h
    if not cfg.expanded:
        effective_h = max(cfg.collapsed_start_hour, min(cfg.collapsed_end_hour, h))

    start_hour = 0 if cfg.expanded else cfg.collapsed_start_hour
    hours_passed = max(0, effective_h - start_hour)
    return hours_passed * cfg.hour_height + (m / 60.0) * cfg.hour_height


def duration_height(instant: Optional[dt.datetime], duration_min: float, cfg: GridConfig) -> float:
    return (duration_min / 60.0) * cfg.hour_height


def grid_mappings(cfg: GridConfig) -> tuple[TopFn, HeightFn]:
    """(get_top, get_height) bound to cfg, with the timezone resolved once."""
    tzinfo = resolve_tz(cfg.tz)

    def get_top(instant: Optional[dt.datetime]) -> float:
        return top_offset(instant, cfg, tzinfo)

    def get_height(instant: Optional[dt.datetime], duration_min: float) -> float:
        return duration_height(instant, duration_min, cfg)

    return get_top, get_height


def week_days(anchor: dt.date, week_starts_on: int = 6) -> List[dt.date]:
    offset = (anchor.weekday() - int(week_starts_on)) % 7
    first = anchor - dt.timedelta(days=offset)
    return [first + dt.timedelta(days=i) for i in range(7)]


def bucket_by_day(
    events: Iterable[Any],
    cfg: GridConfig,
    *,
    times: TimesFn = appointment_times,
) -> Dict[str, List[Any]]:
    """Group events by the local date of their start.

    Events without a readable start are skipped. In the collapsed view,
    events starting before the first or after the last visible hour are
    skipped too.
    """
    tzinfo = resolve_tz(cfg.tz)
    out: Dict[str, List[Any]] = {}
    for event in events:
        tm = times(event)
        if tm.start is None:
            continue
        if not cfg.expanded:
            h, _m = local_hour_minute(tm.start, tzinfo)
            if h < cfg.collapsed_start_hour or h > cfg.collapsed_end_hour:
                continue
        day = day_key_from_ms(tm.start_ms, tzinfo)
        if day is None:
            continue
        out.setdefault(day, []).append(event)
    return out


def layout_days(
    events: Iterable[Any],
    cfg: GridConfig,
    *,
    times: TimesFn = appointment_times,
) -> Dict[str, List[LayoutedEvent]]:
    get_top, get_height = grid_mappings(cfg)
    buckets = bucket_by_day(events, cfg, times=times)
    return {
        day: compute_event_layout(items, get_top, get_height, times=times)
        for day, items in sorted(buckets.items())
    }


def layout_week(
    events: Iterable[Any],
    anchor: dt.date,
    cfg: GridConfig,
    *,
    times: TimesFn = appointment_times,
) -> Dict[str, List[LayoutedEvent]]:
    """Per-day layouts for the 7 days of the week holding `anchor` (empty days included)."""
    laid = layout_days(events, cfg, times=times)
    return {d.isoformat(): laid.get(d.isoformat(), []) for d in week_days(anchor, cfg.week_starts_on)}
