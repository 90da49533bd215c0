"""Appointment export I/O helpers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping

from .model import LayoutedEvent

try:
    import orjson  # type: ignore
except Exception:  # pragma: no cover
    orjson = None  # type: ignore


def load_appointments(path: Path) -> List[Dict[str, Any]]:
    """Load appointment records from a JSON export.

    Accepted shapes:
      [ {...}, {...} ]
      { "data": [ {...}, ... ] }   (backend query response)
    """
    obj = json.loads(path.read_text(encoding="utf-8", errors="replace"))
    if isinstance(obj, dict):
        obj = obj.get("data")
    if not isinstance(obj, list):
        raise ValueError("appointments must be a JSON list (or an object with a 'data' list)")

    out: List[Dict[str, Any]] = []
    for i, rec in enumerate(obj):
        if not isinstance(rec, dict):
            raise ValueError(f"appointments[{i}] must be an object")
        out.append(rec)
    return out


def days_to_jsonable(days: Mapping[str, List[LayoutedEvent]]) -> Dict[str, List[Dict[str, Any]]]:
    return {day: [ev.to_dict() for ev in items] for day, items in days.items()}


def dumps(data: Any) -> str:
    if orjson is not None:
        return orjson.dumps(data, option=orjson.OPT_INDENT_2).decode("utf-8")
    return json.dumps(data, ensure_ascii=False, indent=2)
