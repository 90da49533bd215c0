# agenda/model.py
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

# Appointment records as returned by the backend (opaque mappings).
Appointment = Dict[str, Any]

TopFn = Callable[[Optional[dt.datetime]], float]
HeightFn = Callable[[Optional[dt.datetime], float], float]


@dataclass(frozen=True)
class EventTimes:
    start_ms: float        # epoch ms, NaN when unparseable
    end_ms: float          # epoch ms, NaN when unparseable
    duration_min: float    # feeds height only, never overlap detection
    start: Optional[dt.datetime]


@dataclass(frozen=True)
class Layout:
    top: float
    height: float
    left: float    # % of the day column width
    width: float   # % of the day column width

    def as_dict(self) -> Dict[str, float]:
        return {"top": self.top, "height": self.height, "left": self.left, "width": self.width}


@dataclass(frozen=True)
class LayoutedEvent:
    event: Any
    layout: Layout
    column: int
    cluster: int

    def to_dict(self) -> Dict[str, Any]:
        """Shallow copy of the event mapping with a `layout` key added."""
        base = dict(self.event) if isinstance(self.event, dict) else {"event": self.event}
        base["layout"] = self.layout.as_dict()
        return base


@dataclass(frozen=True)
class GridConfig:
    hour_height: float = 64.0
    expanded: bool = False
    tz: str = "local"
    collapsed_start_hour: int = 6
    collapsed_end_hour: int = 20
    week_starts_on: int = 6  # datetime.weekday() of the first column (6 = Sunday)


__all__ = [
    "Appointment",
    "TopFn",
    "HeightFn",
    "EventTimes",
    "Layout",
    "LayoutedEvent",
    "GridConfig",
]
