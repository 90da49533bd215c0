# agenda/util/timeparse.py
from __future__ import annotations

import datetime as dt


def parse_date_yyyy_mm_dd(s: str) -> dt.date:
    return dt.datetime.strptime(s.strip(), "%Y-%m-%d").date()


def parse_iso_datetime(s: str) -> dt.datetime:
    """Parse an ISO-8601 timestamp as the backend serializes it.

    A trailing "Z" means UTC. Naive values are read as UTC.
    Raises ValueError on malformed input.
    """
    ss = s.strip()
    if ss.endswith(("Z", "z")):
        ss = ss[:-1] + "+00:00"
    # "2025-03-10 10:00:00+00" (postgres text form) -> pad the bare hour offset.
    if len(ss) >= 3 and ss[-3] in "+-" and ss[-2:].isdigit() and ":" in ss[-9:-3]:
        ss = ss + ":00"
    value = dt.datetime.fromisoformat(ss)
    if value.tzinfo is None:
        value = value.replace(tzinfo=dt.timezone.utc)
    return value
