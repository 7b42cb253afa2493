"""Tests for open/closed checks and forward searches in services/business/hours.py."""

from __future__ import annotations

import unittest
from datetime import datetime

from restaurant_hours.services.business.hours import (
    DayOfWeek,
    DaySchedule,
    get_current_status_text,
    get_day_progress_percentage,
    get_next_closing_time,
    get_next_opening_time,
    get_next_status_change_text,
    is_currently_open,
    is_open_at,
)
from tests.fixtures import all_closed, at, week

MON = DayOfWeek.MONDAY
TUE = DayOfWeek.TUESDAY
WED = DayOfWeek.WEDNESDAY
FRI = DayOfWeek.FRIDAY
SAT = DayOfWeek.SATURDAY
SUN = DayOfWeek.SUNDAY


class TestIsOpenAt(unittest.TestCase):

    def test_boundaries_are_inclusive(self):
        hours = week("09:00", "18:00")
        self.assertTrue(is_open_at(hours, at(MON, 9, 0)))
        self.assertTrue(is_open_at(hours, at(MON, 18, 0)))
        self.assertFalse(is_open_at(hours, at(MON, 8, 59)))
        self.assertFalse(is_open_at(hours, at(MON, 18, 1)))

    def test_crossing_midnight(self):
        hours = week("22:00", "02:00")
        self.assertTrue(is_open_at(hours, at(WED, 23, 30)))
        self.assertTrue(is_open_at(hours, at(WED, 1, 30)))
        self.assertFalse(is_open_at(hours, at(WED, 10, 0)))

    def test_closed_day(self):
        hours = week(closed={TUE})
        self.assertFalse(is_open_at(hours, at(TUE, 12, 0)))
        self.assertTrue(is_open_at(hours, at(WED, 12, 0)))

    def test_previous_day_tail_is_not_consulted(self):
        # Sunday runs until 02:00 but Monday's own schedule says closed
        hours = week(closed={MON}, sunday=DaySchedule("22:00", "02:00"))
        self.assertFalse(is_open_at(hours, at(MON, 1, 0)))

    def test_seconds_are_ignored(self):
        hours = week("09:00", "18:00")
        self.assertTrue(is_open_at(hours, datetime(2026, 10, 19, 18, 0, 59)))

    def test_missing_day_reads_as_closed(self):
        hours = week()
        del hours[MON]
        self.assertFalse(is_open_at(hours, at(MON, 12, 0)))

    def test_is_currently_open_uses_given_now(self):
        hours = week("09:00", "18:00")
        self.assertTrue(is_currently_open(hours, at(FRI, 10, 0)))
        self.assertFalse(is_currently_open(hours, at(FRI, 20, 0)))


class TestNextOpeningTime(unittest.TestCase):

    def test_later_today(self):
        self.assertEqual(get_next_opening_time(week(), at(MON, 8, 0)), at(MON, 9, 0))

    def test_opening_instant_itself_does_not_count(self):
        self.assertEqual(get_next_opening_time(week(), at(MON, 9, 0)), at(TUE, 9, 0))

    def test_inside_todays_window_skips_to_tomorrow(self):
        start = at(MON, 12, 0)
        opening = get_next_opening_time(week(), start)
        self.assertGreater(opening, start)
        self.assertEqual(opening, at(TUE, 9, 0))

    def test_skips_closed_days(self):
        hours = week(closed={TUE, WED})
        self.assertEqual(get_next_opening_time(hours, at(MON, 19, 0)), at(DayOfWeek.THURSDAY, 9, 0))

    def test_all_closed(self):
        self.assertIsNone(get_next_opening_time(all_closed(), at(MON, 12, 0)))

    def test_same_weekday_next_week_is_beyond_horizon(self):
        hours = week(closed=set(DayOfWeek) - {MON})
        self.assertIsNone(get_next_opening_time(hours, at(MON, 12, 0)))
        self.assertEqual(get_next_opening_time(hours, at(MON, 7, 0)), at(MON, 9, 0))

    def test_wraps_into_next_week(self):
        hours = week(closed={SAT, SUN})
        self.assertEqual(get_next_opening_time(hours, at(FRI, 20, 0)), datetime(2026, 10, 26, 9, 0))


class TestNextClosingTime(unittest.TestCase):

    def test_inside_regular_window(self):
        self.assertEqual(get_next_closing_time(week(), at(MON, 12, 0)), at(MON, 18, 0))

    def test_after_close_uses_next_day(self):
        self.assertEqual(get_next_closing_time(week(), at(MON, 19, 0)), at(TUE, 18, 0))

    def test_before_open_uses_next_day(self):
        self.assertEqual(get_next_closing_time(week(), at(MON, 7, 0)), at(TUE, 18, 0))

    def test_crossing_window_after_opening_closes_tomorrow(self):
        hours = week("22:00", "02:00")
        self.assertEqual(get_next_closing_time(hours, at(FRI, 23, 0)), at(SAT, 2, 0))

    def test_crossing_window_early_morning_closes_today(self):
        hours = week("22:00", "02:00")
        self.assertEqual(get_next_closing_time(hours, at(FRI, 1, 0)), at(FRI, 2, 0))

    def test_later_crossing_day_closes_on_following_date(self):
        hours = week(closed={MON}, tuesday=DaySchedule("22:00", "02:00"))
        self.assertEqual(get_next_closing_time(hours, at(MON, 10, 0)), at(WED, 2, 0))

    def test_all_closed(self):
        self.assertIsNone(get_next_closing_time(all_closed(), at(MON, 12, 0)))


class TestStatusChangeText(unittest.TestCase):

    def test_closing_in_minutes(self):
        self.assertEqual(get_next_status_change_text(week(), at(MON, 17, 30)), "Cierra en 30 min")

    def test_closing_in_hours(self):
        self.assertEqual(get_next_status_change_text(week(), at(MON, 12, 0)), "Cierra en 6h")

    def test_opening_in_minutes(self):
        self.assertEqual(get_next_status_change_text(week(), at(MON, 8, 15)), "Abre en 45 min")

    def test_opening_in_hours(self):
        self.assertEqual(get_next_status_change_text(week(), at(MON, 19, 0)), "Abre en 14h")

    def test_opening_in_days(self):
        hours = week(closed={TUE, WED})
        # Monday 19:00 -> Thursday 09:00 is 62 hours
        self.assertEqual(get_next_status_change_text(hours, at(MON, 19, 0)), "Abre en 3d")

    def test_closed_indefinitely(self):
        self.assertEqual(get_next_status_change_text(all_closed(), at(MON, 12, 0)), "Cerrado indefinidamente")


class TestCurrentStatusText(unittest.TestCase):

    def test_open_now(self):
        self.assertEqual(get_current_status_text(week(), at(MON, 12, 0)), "Abierto ahora")

    def test_hours_are_rounded_up(self):
        self.assertEqual(get_current_status_text(week(), at(MON, 7, 30)), "Abre en 2 horas")

    def test_far_opening_shows_date(self):
        hours = week(closed={TUE, WED})
        self.assertEqual(get_current_status_text(hours, at(MON, 19, 0)), "Abre el 22/10/2026")

    def test_closed_permanently(self):
        self.assertEqual(get_current_status_text(all_closed(), at(MON, 12, 0)), "Cerrado permanentemente")


class TestDayProgress(unittest.TestCase):

    def test_closed_day_is_zero(self):
        schedule = DaySchedule("10:00", "14:00", closed=True)
        for hour in (0, 10, 12, 14, 23):
            self.assertEqual(get_day_progress_percentage(schedule, at(MON, hour)), 0)

    def test_midpoint(self):
        self.assertEqual(get_day_progress_percentage(DaySchedule("10:00", "14:00"), at(MON, 12, 0)), 50)

    def test_window_edges(self):
        schedule = DaySchedule("10:00", "14:00")
        self.assertEqual(get_day_progress_percentage(schedule, at(MON, 10, 0)), 0)
        self.assertEqual(get_day_progress_percentage(schedule, at(MON, 14, 0)), 100)

    def test_outside_window(self):
        schedule = DaySchedule("10:00", "14:00")
        self.assertEqual(get_day_progress_percentage(schedule, at(MON, 9, 0)), 0)
        self.assertEqual(get_day_progress_percentage(schedule, at(MON, 15, 0)), 0)

    def test_crossing_window_before_midnight(self):
        schedule = DaySchedule("22:00", "02:00")
        self.assertEqual(get_day_progress_percentage(schedule, at(MON, 23, 0)), 25)

    def test_crossing_window_after_midnight(self):
        schedule = DaySchedule("22:00", "02:00")
        self.assertEqual(get_day_progress_percentage(schedule, at(MON, 1, 0)), 75)

    def test_crossing_window_outside(self):
        schedule = DaySchedule("22:00", "02:00")
        self.assertEqual(get_day_progress_percentage(schedule, at(MON, 10, 0)), 0)


class TestWeekWithClosedSunday(unittest.TestCase):
    """open 08:00-22:00 every day except Sunday."""

    def setUp(self):
        self.hours = week("08:00", "22:00", closed={SUN})

    def test_sunday_is_closed(self):
        self.assertFalse(is_currently_open(self.hours, at(SUN, 12, 0)))

    def test_sunday_next_opening_is_monday(self):
        self.assertEqual(get_next_opening_time(self.hours, at(SUN, 12, 0)), datetime(2026, 10, 26, 8, 0))

    def test_saturday_late_is_closed(self):
        self.assertFalse(is_currently_open(self.hours, at(SAT, 23, 0)))

    def test_saturday_late_skips_closed_sunday(self):
        start = at(SAT, 23, 0)
        opening = get_next_opening_time(self.hours, start)
        self.assertEqual(opening, datetime(2026, 10, 26, 8, 0))
        self.assertEqual((opening - start).total_seconds(), 33 * 3600)
        # 33 hours is over a day away and rounds to one day
        self.assertEqual(get_next_status_change_text(self.hours, start), "Abre en 1d")
        self.assertEqual(get_current_status_text(self.hours, start), "Abre el 26/10/2026")


if __name__ == "__main__":
    unittest.main()
