# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for proleptic Gregorian dates and times of day."""

import math

import pytest


class TestDate:
    """Validation and day counting from J2000."""

    def test_leap_year_rule(self):
        from almagest.domain.calendar_dates import is_leap_year
        assert is_leap_year(2000)
        assert is_leap_year(2024)
        assert not is_leap_year(1900)
        assert not is_leap_year(2023)
        assert is_leap_year(0)

    @pytest.mark.parametrize("ymd", [(1900, 2, 29), (2023, 2, 29), (2000, 13, 1), (2000, 4, 31), (2000, 1, 0)])
    def test_invalid(self, ymd):
        from almagest.domain.calendar_dates import Date, InvalidDate
        with pytest.raises(InvalidDate):
            Date(*ymd)

    def test_days_since_j2000(self):
        from almagest.domain.calendar_dates import Date
        assert Date(2000, 1, 1).days_since_j2000() == 0
        assert Date(1999, 12, 31).days_since_j2000() == -1
        assert Date(2000, 3, 1).days_since_j2000() == 60
        assert Date(0, 1, 1).days_since_j2000() == -730485

    def test_day_count_round_trip(self):
        from almagest.domain.calendar_dates import Date
        for days in range(-800000, 3000000, 9973):
            assert Date.from_days_since_j2000(days).days_since_j2000() == days

    def test_round_trip_from_date(self):
        from almagest.domain.calendar_dates import Date
        for date in (Date(0, 1, 1), Date(-1, 12, 31), Date(1582, 10, 15), Date(9999, 12, 31)):
            assert Date.from_days_since_j2000(date.days_since_j2000()) == date

    def test_day_of_year(self):
        from almagest.domain.calendar_dates import Date
        assert Date(2024, 2, 29).day_of_year() == 60
        assert Date(2023, 12, 31).day_of_year() == 365
        assert Date.from_day_of_year(2024, 366) == Date(2024, 12, 31)
        assert Date.from_day_of_year(2023, 60) == Date(2023, 3, 1)

    def test_day_366_on_common_year(self):
        from almagest.domain.calendar_dates import Date, NonLeapYear
        with pytest.raises(NonLeapYear):
            Date.from_day_of_year(2023, 366)

    def test_iso(self):
        from almagest.domain.calendar_dates import Date
        assert Date.from_iso("2024-02-29") == Date(2024, 2, 29)
        assert str(Date(2024, 2, 9)) == "2024-02-09"
        assert str(Date(-1, 1, 1)) == "-0001-01-01"
        assert Date.from_iso("-0001-01-01") == Date(-1, 1, 1)

    def test_invalid_iso(self):
        from almagest.domain.calendar_dates import Date, InvalidIsoString
        with pytest.raises(InvalidIsoString):
            Date.from_iso("2024/02/29")

    def test_from_seconds_since_j2000(self):
        from almagest.domain.calendar_dates import Date
        assert Date.from_seconds_since_j2000(0) == Date(2000, 1, 1)
        assert Date.from_seconds_since_j2000(-43201) == Date(1999, 12, 31)
        assert Date.from_seconds_since_j2000(43200) == Date(2000, 1, 2)
        assert Date(2000, 1, 1).seconds_since_j2000() == -43200


class TestTimeOfDay:
    """Hour, minute and second validation, including second 60."""

    def test_from_hms_splits_seconds(self):
        from almagest.domain.time_of_day import TimeOfDay
        t = TimeOfDay.from_hms(12, 34, 56.25)
        assert (t.hour, t.minute, t.second) == (12, 34, 56)
        assert t.subsecond.milliseconds == 250

    @pytest.mark.parametrize("hms, field", [
        ((24, 0, 0), "hour"),
        ((0, 60, 0), "minute"),
        ((0, 0, 61), "second"),
    ])
    def test_invalid_fields(self, hms, field):
        from almagest.domain.time_of_day import InvalidTime, TimeOfDay
        with pytest.raises(InvalidTime) as excinfo:
            TimeOfDay(*hms)
        assert excinfo.value.field == field

    def test_leap_second_slot(self):
        from almagest.domain.time_of_day import TimeOfDay
        assert TimeOfDay(23, 59, 60).second == 60

    def test_invalid_float_seconds(self):
        from almagest.domain.time_of_day import InvalidSeconds, NonFiniteSeconds, TimeOfDay
        with pytest.raises(InvalidSeconds):
            TimeOfDay.from_hms(0, 0, 61.0)
        with pytest.raises(InvalidSeconds):
            TimeOfDay.from_hms(0, 0, -0.5)
        with pytest.raises(NonFiniteSeconds):
            TimeOfDay.from_hms(0, 0, math.nan)

    def test_second_of_day(self):
        from almagest.domain.time_of_day import TimeOfDay
        assert TimeOfDay.from_second_of_day(0) == TimeOfDay()
        assert TimeOfDay.from_second_of_day(86399) == TimeOfDay(23, 59, 59)
        assert TimeOfDay.from_second_of_day(86400) == TimeOfDay(23, 59, 60)
        assert TimeOfDay(1, 2, 3).second_of_day() == 3723

    def test_second_of_day_out_of_range(self):
        from almagest.domain.time_of_day import InvalidTime, TimeOfDay
        with pytest.raises(InvalidTime):
            TimeOfDay.from_second_of_day(86401)

    def test_iso(self):
        from almagest.domain.time_of_day import TimeOfDay
        t = TimeOfDay.from_iso("10:27:13.145")
        assert (t.hour, t.minute, t.second, t.subsecond.milliseconds) == (10, 27, 13, 145)
        assert str(TimeOfDay(1, 2, 3)) == "01:02:03.000"

    def test_invalid_iso(self):
        from almagest.domain.time_of_day import InvalidIsoTime, TimeOfDay
        with pytest.raises(InvalidIsoTime):
            TimeOfDay.from_iso("1:2:3")

    def test_format_never_rounds_up(self):
        from almagest.domain.subsecond import Subsecond
        from almagest.domain.time_of_day import TimeOfDay
        t = TimeOfDay(23, 59, 59, Subsecond(0.9999))
        assert t.format(3) == "23:59:59.999"
        assert t.format(0) == "23:59:59"
