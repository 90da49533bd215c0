from __future__ import annotations

import datetime as dt
import math
import unittest

from agenda.interval import appointment_times, instant_from_ms, is_valid_times, parse_instant_ms

# 2025-03-10T10:00:00Z
T10 = 1741600800000.0


class TestEventTimesContract(unittest.TestCase):
    def test_parse_instant_forms(self) -> None:
        self.assertEqual(parse_instant_ms("2025-03-10T10:00:00Z"), T10)
        self.assertEqual(parse_instant_ms("2025-03-10T10:00:00+00:00"), T10)
        self.assertEqual(parse_instant_ms("2025-03-10T07:00:00-03:00"), T10)
        self.assertEqual(parse_instant_ms("2025-03-10 10:00:00+00"), T10)
        self.assertEqual(parse_instant_ms("2025-03-10T10:00:00"), T10)  # naive -> UTC
        self.assertEqual(parse_instant_ms(dt.datetime(2025, 3, 10, 10, 0)), T10)
        self.assertEqual(parse_instant_ms(dt.datetime(2025, 3, 10, 10, 0, tzinfo=dt.timezone.utc)), T10)
        self.assertEqual(parse_instant_ms(T10), T10)
        self.assertEqual(parse_instant_ms(int(T10)), T10)

    def test_unreadable_values_become_nan(self) -> None:
        for bad in (None, "", "tomorrow", "2025-13-40T99:00", True, {"x": 1}, []):
            self.assertTrue(math.isnan(parse_instant_ms(bad)), repr(bad))

    def test_instant_from_ms(self) -> None:
        d = instant_from_ms(T10)
        self.assertEqual(d, dt.datetime(2025, 3, 10, 10, 0, tzinfo=dt.timezone.utc))
        self.assertIsNone(instant_from_ms(math.nan))
        self.assertIsNone(instant_from_ms(math.inf))

    def test_nested_appointment_fields(self) -> None:
        rec = {
            "schedules": {"start_time": "2025-03-10T10:00:00Z", "end_time": "2025-03-10T10:30:00Z"},
            "services": {"duration_minutes": 45},
        }
        tm = appointment_times(rec)
        self.assertEqual(tm.start_ms, T10)
        self.assertEqual(tm.end_ms, T10 + 30 * 60000)
        # Duration is taken as given even when it disagrees with the end.
        self.assertEqual(tm.duration_min, 45.0)
        self.assertEqual(tm.start.hour, 10)
        self.assertTrue(is_valid_times(tm))

    def test_flat_fields_and_derived_duration(self) -> None:
        tm = appointment_times({"start_time": "2025-03-10T10:00:00Z", "end_time": "2025-03-10T11:15:00Z"})
        self.assertEqual(tm.duration_min, 75.0)

        tm = appointment_times(
            {"start_time": "2025-03-10T10:00:00Z", "end_time": "2025-03-10T11:15:00Z", "duration_minutes": 20}
        )
        self.assertEqual(tm.duration_min, 20.0)

    def test_broken_record(self) -> None:
        tm = appointment_times({"schedules": "nope", "services": None})
        self.assertFalse(is_valid_times(tm))
        self.assertIsNone(tm.start)
        self.assertEqual(tm.duration_min, 0.0)

        tm = appointment_times("not a mapping")  # type: ignore[arg-type]
        self.assertFalse(is_valid_times(tm))


if __name__ == "__main__":
    unittest.main(verbosity=2)
