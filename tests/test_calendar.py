"""Tests for calendar arithmetic and range resolution."""

from datetime import UTC, datetime, timedelta

from chili_diary.domain.calendar import (
    TICK,
    Calendar,
    DateRange,
    RangePreset,
    resolve_range,
)
from tests.conftest import NOW


def test_date_range_orders_bounds_and_is_inclusive() -> None:
    start = datetime(2024, 3, 1, tzinfo=UTC)
    end = datetime(2024, 3, 2, tzinfo=UTC)

    date_range = DateRange(start=end, end=start)

    assert date_range.start == start
    assert date_range.end == end
    assert date_range.contains(start)
    assert date_range.contains(end)
    assert not date_range.contains(end + TICK)
    assert date_range.clamp(end + timedelta(days=3)) == end


def test_resolve_today() -> None:
    date_range = resolve_range(RangePreset.TODAY, Calendar(), NOW)

    assert date_range.start == datetime(2024, 3, 13, tzinfo=UTC)
    assert date_range.end == datetime(2024, 3, 13, 23, 59, 59, 999999, tzinfo=UTC)


def test_resolve_last7_spans_seven_days() -> None:
    calendar = Calendar()
    date_range = resolve_range(RangePreset.LAST7, calendar, NOW)

    assert date_range.start == datetime(2024, 3, 7, tzinfo=UTC)
    assert len(list(calendar.iter_days(date_range))) == 7


def test_resolve_this_week_respects_first_weekday() -> None:
    monday_first = resolve_range(RangePreset.THIS_WEEK, Calendar(), NOW)
    sunday_first = resolve_range(
        RangePreset.THIS_WEEK, Calendar(first_weekday=6), NOW
    )

    assert monday_first.start == datetime(2024, 3, 11, tzinfo=UTC)
    assert monday_first.end == datetime(2024, 3, 17, 23, 59, 59, 999999, tzinfo=UTC)
    assert sunday_first.start == datetime(2024, 3, 10, tzinfo=UTC)


def test_resolve_this_month_handles_december() -> None:
    calendar = Calendar()

    march = resolve_range(RangePreset.THIS_MONTH, calendar, NOW)
    december = calendar.month_bounds(datetime(2024, 12, 15, tzinfo=UTC))

    assert march.start == datetime(2024, 3, 1, tzinfo=UTC)
    assert march.end == datetime(2024, 3, 31, 23, 59, 59, 999999, tzinfo=UTC)
    assert december.end == datetime(2024, 12, 31, 23, 59, 59, 999999, tzinfo=UTC)


def test_custom_range_resolves_to_itself() -> None:
    custom = DateRange(start=NOW - timedelta(days=2), end=NOW)

    assert resolve_range(custom, Calendar(), NOW) is custom


def test_day_stepping_across_dst_lands_on_local_midnight() -> None:
    calendar = Calendar(timezone="Europe/Berlin")
    date_range = DateRange(
        start=calendar.start_of_day(datetime(2024, 3, 30, 12, tzinfo=UTC)),
        end=calendar.end_of_day(datetime(2024, 4, 1, 12, tzinfo=UTC)),
    )

    days = list(calendar.iter_days(date_range))

    assert [day.day for day in days] == [30, 31, 1]
    assert all(day.hour == 0 for day in days)
    short_day = days[1]
    length = (calendar.end_of_day(short_day) + TICK).astimezone(
        UTC
    ) - short_day.astimezone(UTC)
    assert length == timedelta(hours=23)


def test_add_days_keeps_wall_clock_time() -> None:
    calendar = Calendar(timezone="America/New_York")
    before_change = calendar.start_of_day(datetime(2024, 3, 9, 12, tzinfo=UTC))

    after_change = calendar.add_days(before_change, 1)

    assert after_change.day == 10
    assert after_change.hour == 0


def test_same_day_depends_on_timezone() -> None:
    late = datetime(2024, 3, 13, 23, 30, tzinfo=UTC)
    early = datetime(2024, 3, 14, 1, 0, tzinfo=UTC)

    assert not Calendar().is_same_day(late, early)
    assert Calendar(timezone="Asia/Tokyo").is_same_day(late, early)


def test_at_time_of_day_and_shift() -> None:
    calendar = Calendar()
    stamped = calendar.at_time_of_day(NOW, 7, 45)
    week = resolve_range(RangePreset.THIS_WEEK, calendar, NOW)

    assert stamped == datetime(2024, 3, 13, 7, 45, tzinfo=UTC)
    assert week.shifted(-7, calendar).start == datetime(2024, 3, 4, tzinfo=UTC)
