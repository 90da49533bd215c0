# agenda/interval.py
from __future__ import annotations

import datetime as dt
import math
from typing import Any, Mapping, Optional

from .model import EventTimes
from .util.timeparse import parse_iso_datetime

MIN_MS = 60_000
NAN = float("nan")


def parse_instant_ms(value: Any) -> float:
    """Epoch milliseconds for a start/end value, NaN when it cannot be read.

    Accepts ISO-8601 strings, datetime/date objects and epoch-ms numbers.
    Never raises: bad values flow on as NaN.
    """
    if value is None or isinstance(value, bool):
        return NAN
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, dt.datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=dt.timezone.utc)
        return value.timestamp() * 1000.0
    if isinstance(value, dt.date):
        aware = dt.datetime(value.year, value.month, value.day, tzinfo=dt.timezone.utc)
        return aware.timestamp() * 1000.0
    if isinstance(value, str):
        try:
            return parse_iso_datetime(value).timestamp() * 1000.0
        except ValueError:
            return NAN
    return NAN


def instant_from_ms(ms: float) -> Optional[dt.datetime]:
    if not math.isfinite(ms):
        return None
    try:
        return dt.datetime.fromtimestamp(ms / 1000.0, tz=dt.timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


def _section(record: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    sub = record.get(key)
    return sub if isinstance(sub, Mapping) else {}


def _number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def appointment_times(record: Mapping[str, Any]) -> EventTimes:
    """
    Read start/end/duration from an appointment record.

    Lookup order:
      - schedules.start_time / schedules.end_time, services.duration_minutes
      - flat start_time / end_time / duration_minutes
      - duration falls back to (end - start) in minutes, then 0
    """
    if not isinstance(record, Mapping):
        return EventTimes(start_ms=NAN, end_ms=NAN, duration_min=0.0, start=None)

    schedules = _section(record, "schedules")
    services = _section(record, "services")

    start_raw = schedules.get("start_time", record.get("start_time"))
    end_raw = schedules.get("end_time", record.get("end_time"))
    start_ms = parse_instant_ms(start_raw)
    end_ms = parse_instant_ms(end_raw)

    duration = _number(services.get("duration_minutes"))
    if duration is None:
        duration = _number(record.get("duration_minutes"))
    if duration is None:
        if math.isfinite(start_ms) and math.isfinite(end_ms):
            duration = (end_ms - start_ms) / MIN_MS
        else:
            duration = 0.0

    return EventTimes(
        start_ms=start_ms,
        end_ms=end_ms,
        duration_min=duration,
        start=instant_from_ms(start_ms),
    )


def is_valid_times(times: EventTimes) -> bool:
    return math.isfinite(times.start_ms) and math.isfinite(times.end_ms)
