from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from event_predict.dates import between, epoch_seconds, read_date_part, shift, truncate
from event_predict.errors import MissingCapability


def test_date_parts_of_second_monday_in_june() -> None:
    d = datetime(2003, 6, 9, 13, 45, 12, 5)

    assert read_date_part(d, "day_of_week") == 1
    assert read_date_part(d, "weekday") == 2
    assert read_date_part(d, "day_of_year") == 160
    assert read_date_part(d, "quarter") == 2
    assert read_date_part(d, "day_of_quarter") == 70
    assert read_date_part(d, "week_number") == 24
    assert read_date_part(d, "week_of_month") == 2
    assert read_date_part(d, "nanosecond") == 5000


def test_read_date_part_rejects_plain_date() -> None:
    with pytest.raises(MissingCapability):
        read_date_part(date(2009, 1, 1), "hour")


def test_shift_is_calendar_correct() -> None:
    d = datetime(2009, 1, 31)
    assert shift(d, "months", 1) == datetime(2009, 2, 28)
    assert shift(d, "quarters", -1) == datetime(2008, 10, 31)
    assert shift(d, "days", 0) is d
    assert d == datetime(2009, 1, 31)


def test_between_splits_weeks_and_days() -> None:
    dur = between(datetime(2009, 1, 10, 6), datetime(2009, 1, 1))
    assert dur.weeks == 1
    assert dur.days == 2
    assert dur.hours == 6
    assert dur.total_seconds == 9 * 86400 + 6 * 3600

    assert between(datetime(1969, 1, 1), datetime(1966, 1, 1)).years == 3


def test_truncate_zeroes_finer_parts() -> None:
    d = datetime(2009, 5, 17, 13, 45, 12, 500)
    assert truncate(d, "second") == datetime(2009, 5, 17, 13, 45, 12)
    assert truncate(d, "day") == datetime(2009, 5, 17)
    assert truncate(d, "month") == datetime(2009, 5, 1)
    assert truncate(d, "quarter") == datetime(2009, 4, 1)
    assert truncate(d, "nanosecond") == d


def test_epoch_seconds_naive_is_utc() -> None:
    assert epoch_seconds(datetime(1970, 1, 2)) == 86400
    assert epoch_seconds(datetime(1970, 1, 2, tzinfo=timezone.utc)) == 86400
