"""UTC instant and civil date helpers."""
from datetime import date, datetime, time, timedelta, timezone

import pytest

from appointment_scheduler.core.exceptions import ValidationError
from appointment_scheduler.utils.timeutils import (
    anchor,
    date_range,
    ensure_utc,
    format_instant,
    parse_date,
    parse_instant,
)

UTC = timezone.utc


def test_anchor_pins_time_of_day_to_utc_date():
    assert anchor(date(2024, 1, 1), time(9, 30)) == datetime(2024, 1, 1, 9, 30, tzinfo=UTC)


def test_parse_instant_accepts_z_and_offsets():
    expected = datetime(2024, 1, 1, 9, 0, tzinfo=UTC)

    assert parse_instant("2024-01-01T09:00:00Z") == expected
    assert parse_instant("2024-01-01T09:00:00+00:00") == expected
    assert parse_instant("2024-01-01T11:00:00+02:00") == expected
    assert parse_instant("2024-01-01T09:00:00") == expected


@pytest.mark.parametrize("value", [None, "", "yesterday", "2024-13-01T09:00:00Z"])
def test_parse_instant_rejects_garbage(value):
    with pytest.raises(ValidationError):
        parse_instant(value)


def test_parse_date():
    assert parse_date("2024-01-01") == date(2024, 1, 1)
    with pytest.raises(ValidationError):
        parse_date("01/01/2024", "start_date")
    with pytest.raises(ValidationError):
        parse_date(None, "start_date")


def test_format_round_trips_through_parse():
    instant = datetime(2024, 1, 1, 9, 0, tzinfo=UTC)

    assert format_instant(instant) == "2024-01-01T09:00:00+00:00"
    assert parse_instant(format_instant(instant)) == instant


def test_ensure_utc_converts_offsets():
    plus_two = timezone(timedelta(hours=2))

    assert ensure_utc(datetime(2024, 1, 1, 11, 0, tzinfo=plus_two)) == datetime(2024, 1, 1, 9, 0, tzinfo=UTC)
    assert ensure_utc(datetime(2024, 1, 1, 9, 0)).tzinfo == UTC


def test_date_range_is_inclusive():
    assert list(date_range(date(2024, 1, 1), date(2024, 1, 3))) == [
        date(2024, 1, 1), date(2024, 1, 2), date(2024, 1, 3)
    ]
