from datetime import date, datetime, timedelta

import pytest

from hrms.common.datetime_utils import (
    days_in_month,
    inclusive_days,
    minutes_between,
    month_bounds,
    parse_hhmm,
    working_days,
)


def test_working_days_skips_weekends():
    # 2024-03-01 is a Friday.
    days = working_days(date(2024, 3, 1), date(2024, 3, 11))

    assert days == [
        date(2024, 3, 1),
        date(2024, 3, 4),
        date(2024, 3, 5),
        date(2024, 3, 6),
        date(2024, 3, 7),
        date(2024, 3, 8),
        date(2024, 3, 11),
    ]


@pytest.mark.parametrize(
    "start,end",
    [
        (date(2024, 1, 1), date(2024, 1, 1)),
        (date(2024, 2, 1), date(2024, 2, 29)),
        (date(2023, 12, 25), date(2024, 1, 14)),
        (date(2024, 6, 8), date(2024, 6, 9)),
    ],
)
def test_working_days_properties(start, end):
    days = working_days(start, end)
    span = (end - start).days + 1
    every_date = [start + timedelta(days=i) for i in range(span)]

    assert len(days) <= span
    assert len(set(days)) == len(days)
    assert days == sorted(days)
    assert all(d.weekday() < 5 for d in days)
    assert [d for d in every_date if d.weekday() < 5] == days


def test_working_days_single_saturday_is_empty():
    assert working_days(date(2024, 6, 8), date(2024, 6, 8)) == []


def test_working_days_inverted_range_is_empty():
    assert working_days(date(2024, 6, 10), date(2024, 6, 3)) == []


def test_inclusive_days_counts_both_ends():
    assert inclusive_days(date(2024, 1, 10), date(2024, 1, 14)) == 5
    assert inclusive_days(date(2024, 1, 10), date(2024, 1, 10)) == 1


def test_days_in_month_handles_leap_years():
    assert days_in_month(2024, 2) == 29
    assert days_in_month(2023, 2) == 28
    assert month_bounds(2024, 4) == (date(2024, 4, 1), date(2024, 4, 30))


def test_minutes_between_floors():
    assert minutes_between(datetime(2024, 1, 1, 9, 0, 0), datetime(2024, 1, 1, 9, 1, 59)) == 1


def test_parse_hhmm():
    assert parse_hhmm(" 09:30 ").hour == 9
