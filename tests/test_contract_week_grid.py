from __future__ import annotations

import datetime as dt
import unittest

from agenda.grid import (
    NORMAL_HEIGHT,
    bucket_by_day,
    duration_height,
    grid_height,
    layout_days,
    layout_week,
    top_offset,
    visible_hours,
    week_days,
)
from agenda.model import GridConfig

UTC = dt.timezone.utc
COLLAPSED = GridConfig(tz="UTC")
EXPANDED = GridConfig(tz="UTC", expanded=True)


def _at(h: int, m: int = 0, day: int = 10) -> dt.datetime:
    return dt.datetime(2025, 3, day, h, m, tzinfo=UTC)


def _appt(ident: str, start: dt.datetime, minutes: int) -> dict:
    return {
        "id": ident,
        "schedules": {
            "start_time": start.isoformat(),
            "end_time": (start + dt.timedelta(minutes=minutes)).isoformat(),
        },
        "services": {"duration_minutes": minutes},
    }


class TestWeekGridContract(unittest.TestCase):
    def test_visible_hours(self) -> None:
        self.assertEqual(visible_hours(COLLAPSED), list(range(6, 21)))
        self.assertEqual(visible_hours(EXPANDED), list(range(24)))
        self.assertEqual(grid_height(COLLAPSED), 15 * NORMAL_HEIGHT)
        self.assertEqual(grid_height(EXPANDED), 24 * NORMAL_HEIGHT)

    def test_top_offset_collapsed_and_expanded(self) -> None:
        self.assertEqual(top_offset(_at(10, 30), COLLAPSED), 4 * 64 + 32)
        self.assertEqual(top_offset(_at(10, 30), EXPANDED), 10 * 64 + 32)
        self.assertEqual(top_offset(_at(6), COLLAPSED), 0.0)
        self.assertEqual(top_offset(None, COLLAPSED), 0.0)

    def test_top_offset_clamps_hour_in_collapsed_view(self) -> None:
        # Hour pinned to the window edge, minutes kept.
        self.assertEqual(top_offset(_at(5, 15), COLLAPSED), 16.0)
        self.assertEqual(top_offset(_at(22, 0), COLLAPSED), 14 * 64.0)
        self.assertEqual(top_offset(_at(22, 0), EXPANDED), 22 * 64.0)

    def test_top_offset_uses_display_timezone(self) -> None:
        cfg = GridConfig(tz="-03:00")
        self.assertEqual(top_offset(_at(13, 0), cfg), 4 * 64.0)

    def test_duration_height_scales_with_hour_height(self) -> None:
        self.assertEqual(duration_height(None, 90, COLLAPSED), 96.0)
        self.assertEqual(duration_height(None, 30, GridConfig(hour_height=120.0)), 60.0)

    def test_week_days_start_on_sunday(self) -> None:
        days = week_days(dt.date(2025, 3, 12))
        self.assertEqual(days[0], dt.date(2025, 3, 9))
        self.assertEqual(days[-1], dt.date(2025, 3, 15))
        self.assertEqual(len(days), 7)
        self.assertEqual(week_days(dt.date(2025, 3, 9))[0], dt.date(2025, 3, 9))
        self.assertEqual(week_days(dt.date(2025, 3, 12), week_starts_on=0)[0], dt.date(2025, 3, 10))

    def test_collapsed_bucketing_drops_hours_outside_window(self) -> None:
        events = [
            _appt("early", _at(5, 59), 30),
            _appt("first", _at(6, 0), 30),
            _appt("last", _at(20, 59), 30),
            _appt("late", _at(21, 0), 30),
            {"id": "nostart", "schedules": {"start_time": None}},
        ]
        got = bucket_by_day(events, COLLAPSED)
        self.assertEqual([e["id"] for e in got["2025-03-10"]], ["first", "last"])

        got = bucket_by_day(events, EXPANDED)
        self.assertEqual([e["id"] for e in got["2025-03-10"]], ["early", "first", "last", "late"])

    def test_bucketing_uses_local_date(self) -> None:
        # 01:30Z on the 11th is 22:30 on the 10th at -03:00.
        ev = _appt("night", _at(1, 30, day=11), 30)
        self.assertEqual(bucket_by_day([ev], GridConfig(tz="-03:00")), {})
        got = bucket_by_day([ev], GridConfig(tz="-03:00", expanded=True))
        self.assertEqual(list(got), ["2025-03-10"])

    def test_layout_days_per_day(self) -> None:
        events = [
            _appt("a", _at(9), 60),
            _appt("b", _at(9, 30), 60),
            _appt("c", _at(9, day=11), 60),
        ]
        days = layout_days(events, COLLAPSED)
        self.assertEqual(list(days), ["2025-03-10", "2025-03-11"])
        mon = {ev.event["id"]: ev for ev in days["2025-03-10"]}
        self.assertEqual(mon["a"].layout.width, 50.0)
        self.assertEqual(mon["b"].layout.left, 50.0)
        self.assertEqual(mon["a"].layout.top, 3 * 64.0)
        self.assertEqual(mon["b"].layout.top, 3.5 * 64.0)
        self.assertEqual(mon["a"].layout.height, 64.0)
        self.assertEqual(days["2025-03-11"][0].layout.width, 100.0)

    def test_layout_week_lists_every_day(self) -> None:
        events = [_appt("a", _at(9), 60), _appt("other-week", _at(9, day=20), 60)]
        week = layout_week(events, dt.date(2025, 3, 12), COLLAPSED)
        self.assertEqual(list(week), [(dt.date(2025, 3, 9) + dt.timedelta(days=i)).isoformat() for i in range(7)])
        self.assertEqual([ev.event["id"] for ev in week["2025-03-10"]], ["a"])
        self.assertEqual(sum(len(v) for v in week.values()), 1)

    def test_invalid_timezone_raises_value_error(self) -> None:
        with self.assertRaises(ValueError):
            layout_days([], GridConfig(tz="No/Such_Zone"))


if __name__ == "__main__":
    unittest.main(verbosity=2)
