"""Event validation helpers (caller-side pre-filtering).

The layout engine accepts anything; these helpers let callers reject or drop
events whose times would degrade the layout.
"""

from __future__ import annotations

import math
from typing import Any, Callable, Iterable, List

from .interval import appointment_times
from .model import EventTimes


class EventValidationError(ValueError):
    """Raised when an event set fails validation."""


def _event_errors(times: EventTimes, *, where: str) -> List[str]:
    errs: List[str] = []
    start_ok = math.isfinite(times.start_ms)
    end_ok = math.isfinite(times.end_ms)
    if not start_ok:
        errs.append(f"{where}: start_time is missing or not a valid instant")
    if not end_ok:
        errs.append(f"{where}: end_time is missing or not a valid instant")
    if start_ok and end_ok and times.end_ms <= times.start_ms:
        errs.append(f"{where}: end_time must be after start_time")
    if not math.isfinite(times.duration_min) or times.duration_min < 0:
        errs.append(f"{where}: duration_minutes must be a non-negative number")
    return errs


def validate_events(
    events: Iterable[Any],
    *,
    times: Callable[[Any], EventTimes] = appointment_times,
    label: str = "events",
) -> List[str]:
    errs: List[str] = []
    for i, event in enumerate(events):
        errs.extend(_event_errors(times(event), where=f"{label}[{i}]"))
    return errs


def assert_valid_events(
    events: Iterable[Any],
    *,
    times: Callable[[Any], EventTimes] = appointment_times,
) -> None:
    errs = validate_events(events, times=times)
    if errs:
        raise EventValidationError(errs[0])


def filter_valid_events(
    events: Iterable[Any],
    *,
    times: Callable[[Any], EventTimes] = appointment_times,
) -> List[Any]:
    """Events with readable start/end and end after start."""
    out: List[Any] = []
    for event in events:
        tm = times(event)
        if math.isfinite(tm.start_ms) and math.isfinite(tm.end_ms) and tm.end_ms > tm.start_ms:
            out.append(event)
    return out


__all__ = [
    "EventValidationError",
    "assert_valid_events",
    "filter_valid_events",
    "validate_events",
]
