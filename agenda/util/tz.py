# agenda/util/tz.py
from __future__ import annotations

import datetime as dt
import math
import re
from typing import Optional, Tuple

try:
    from zoneinfo import ZoneInfo  # py3.9+
except Exception:  # pragma: no cover
    ZoneInfo = None  # type: ignore

_OFFSET_RE = re.compile(r"^([+-])(\d{2}):?(\d{2})$")


def normalize_tz_name(name: Optional[str]) -> str:
    """Canonical timezone identifier for the agenda display.

    Accepted forms:
      - None/"" / "local" / "system" -> "local" (machine timezone)
      - "UTC" / "Z" / "GMT" -> "UTC"
      - IANA names, e.g. "America/Sao_Paulo"
      - fixed offsets: "-03:00", "-0300"
    """
    if name is None:
        return "local"
    s = str(name).strip()
    if not s:
        return "local"

    low = s.lower()
    if low in {"local", "system", "native"}:
        return "local"
    if low in {"utc", "z", "gmt", "utc0", "utc+0"}:
        return "UTC"
    return s


def resolve_tz(name: Optional[str]) -> dt.tzinfo:
    """Resolve a timezone name into a tzinfo.

    Raises ValueError for identifiers that are neither a known alias,
    a fixed offset nor a zoneinfo key.
    """
    tz_name = normalize_tz_name(name)

    if tz_name == "UTC":
        return dt.timezone.utc

    if tz_name == "local":
        tz = dt.datetime.now().astimezone().tzinfo
        return tz or dt.timezone.utc

    m = _OFFSET_RE.match(tz_name)
    if m:
        sign_s, hh_s, mm_s = m.groups()
        hh = int(hh_s)
        mm = int(mm_s)
        if hh > 23 or mm > 59:
            raise ValueError(f"Invalid timezone offset: {tz_name!r}")
        sign = 1 if sign_s == "+" else -1
        return dt.timezone(dt.timedelta(minutes=sign * (hh * 60 + mm)))

    if ZoneInfo is not None:
        try:
            return ZoneInfo(tz_name)  # type: ignore[misc]
        except Exception as ex:
            raise ValueError(f"Invalid timezone identifier: {tz_name!r}") from ex

    raise ValueError(f"Invalid timezone identifier: {tz_name!r} (zoneinfo unavailable)")


def today_date(tz: dt.tzinfo) -> dt.date:
    return dt.datetime.now(tz=tz).date()


def _to_local(ms: Optional[float], tz: dt.tzinfo) -> Optional[dt.datetime]:
    if ms is None or not math.isfinite(ms):
        return None
    try:
        return dt.datetime.fromtimestamp(ms / 1000.0, tz=tz)
    except (OverflowError, OSError, ValueError):
        return None


def day_key_from_ms(ms: Optional[float], tz: dt.tzinfo) -> Optional[str]:
    """YYYY-MM-DD of an epoch-ms instant in `tz`, None when not representable."""
    local = _to_local(ms, tz)
    return local.date().isoformat() if local is not None else None


def local_hour_minute(instant: dt.datetime, tz: dt.tzinfo) -> Tuple[int, int]:
    # Naive datetimes are taken as UTC wall time.
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=dt.timezone.utc)
    local = instant.astimezone(tz)
    return local.hour, local.minute
