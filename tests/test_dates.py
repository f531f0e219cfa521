# tests/test_dates.py

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

from referral_network.dates import (
    day_end,
    day_start,
    local_day,
    parse_day,
    parse_join_date,
    resolve_timezone,
)


def test_iso_with_z_suffix():
    d = parse_join_date("2024-01-15T10:00:00.000Z")
    assert d == datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc)


def test_iso_with_offset_keeps_instant():
    d = parse_join_date("2024-01-15T10:00:00+05:30")
    assert d.utcoffset() == timedelta(hours=5, minutes=30)
    assert d.astimezone(timezone.utc).hour == 4


def test_naive_values_are_pinned_to_timezone():
    d = parse_join_date("2024-01-15 10:00:00")
    assert d.tzinfo is timezone.utc

    d = parse_join_date(datetime(2024, 1, 15, 10, 0))
    assert d.tzinfo is timezone.utc


def test_plain_date_is_midnight():
    assert parse_join_date(date(2024, 1, 15)) == datetime(2024, 1, 15, tzinfo=timezone.utc)
    assert parse_join_date("2024-01-15") == datetime(2024, 1, 15, tzinfo=timezone.utc)


def test_epoch_seconds_and_milliseconds():
    expected = datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc)
    seconds = int(expected.timestamp())

    assert parse_join_date(seconds) == expected
    assert parse_join_date(seconds * 1000) == expected
    assert parse_join_date(str(seconds * 1000)) == expected


def test_fallback_formats():
    assert parse_join_date("15/01/2024").date() == date(2024, 1, 15)
    assert parse_join_date("15 Jan 2024").date() == date(2024, 1, 15)


def test_unparseable_values():
    assert parse_join_date(None) is None
    assert parse_join_date("") is None
    assert parse_join_date("Unknown") is None
    assert parse_join_date(True) is None
    assert parse_join_date({"$date": 1}) is None


def test_day_bounds():
    d = date(2024, 1, 15)
    assert day_start(d) == datetime(2024, 1, 15, 0, 0, tzinfo=timezone.utc)
    assert day_end(d).date() == d
    assert day_end(d) > datetime(2024, 1, 15, 23, 59, 59, tzinfo=timezone.utc)


def test_parse_day():
    assert parse_day("2024-01-15") == date(2024, 1, 15)
    assert parse_day("2024-01-15T23:00:00Z") == date(2024, 1, 15)
    assert parse_day(datetime(2024, 1, 15, 5)) == date(2024, 1, 15)
    assert parse_day("nope") is None


def test_local_day_respects_timezone():
    tz = timezone(timedelta(hours=5, minutes=30))
    late_utc = datetime(2024, 1, 15, 20, 0, tzinfo=timezone.utc)
    assert local_day(late_utc, tz) == date(2024, 1, 16)
    assert local_day(late_utc) == date(2024, 1, 15)


def test_unknown_timezone_falls_back_to_utc():
    assert resolve_timezone("Not/AZone") is timezone.utc
    assert resolve_timezone(None) is timezone.utc
