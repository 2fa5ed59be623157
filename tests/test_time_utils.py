from datetime import UTC, date, datetime, time, timedelta, timezone

from backend.app.core.time import day_bounds, to_naive_utc, utc_now


def test_utc_now_is_timezone_aware_utc():
    value = utc_now()
    assert value.tzinfo is UTC


def test_to_naive_utc_converts_offsets():
    aware = datetime(2025, 3, 3, 10, 0, tzinfo=timezone(timedelta(hours=2)))
    assert to_naive_utc(aware) == datetime(2025, 3, 3, 8, 0)
    naive = datetime(2025, 3, 3, 10, 0)
    assert to_naive_utc(naive) is naive


def test_day_bounds_cover_whole_days():
    start, end = day_bounds(date(2025, 3, 1), date(2025, 3, 31))
    assert start == datetime(2025, 3, 1, 0, 0)
    assert end == datetime.combine(date(2025, 3, 31), time.max)
