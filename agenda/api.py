"""agenda.api

Stable *library* entrypoint for the agenda layout package.

Policy:
  - Only names listed in __all__ are considered public API.
  - Everything else is internal and may change without notice.
"""

from __future__ import annotations

from .grid import (
    NORMAL_HEIGHT,
    bucket_by_day,
    duration_height,
    grid_height,
    grid_mappings,
    layout_days,
    layout_week,
    top_offset,
    visible_hours,
    week_days,
)
from .interval import appointment_times, instant_from_ms, is_valid_times, parse_instant_ms
from .io import days_to_jsonable, load_appointments
from .layout import MIN_EVENT_HEIGHT, compute_event_layout
from .model import EventTimes, GridConfig, Layout, LayoutedEvent
from .validate import EventValidationError, assert_valid_events, filter_valid_events, validate_events

# --- Public API exports ---------------------------------------------------
_PUBLIC_EXPORTS = (
    "EventTimes",
    "EventValidationError",
    "GridConfig",
    "Layout",
    "LayoutedEvent",
    "MIN_EVENT_HEIGHT",
    "NORMAL_HEIGHT",
    "appointment_times",
    "assert_valid_events",
    "bucket_by_day",
    "compute_event_layout",
    "days_to_jsonable",
    "duration_height",
    "filter_valid_events",
    "grid_height",
    "grid_mappings",
    "instant_from_ms",
    "is_valid_times",
    "layout_days",
    "layout_week",
    "load_appointments",
    "parse_instant_ms",
    "top_offset",
    "validate_events",
    "visible_hours",
    "week_days",
)

__all__ = [n for n in _PUBLIC_EXPORTS if n in globals()]
# --- /Public API exports --------------------------------------------------
