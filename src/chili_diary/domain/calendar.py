"""Calendar arithmetic and date ranges."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import UTC, datetime, time, timedelta
from enum import StrEnum
from zoneinfo import ZoneInfo

TICK = timedelta(microseconds=1)
DECEMBER = 12


@dataclass(frozen=True)
class DateRange:
    """Closed interval of instants; start and end are both included."""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.start > self.end:
            start, end = self.end, self.start
            object.__setattr__(self, "start", start)
            object.__setattr__(self, "end", end)

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end

    def clamp(self, moment: datetime) -> datetime:
        if moment < self.start:
            return self.start
        if moment > self.end:
            return self.end
        return moment

    def shifted(self, days: int, calendar: "Calendar") -> "DateRange":
        return DateRange(
            start=calendar.add_days(self.start, days),
            end=calendar.add_days(self.end, days),
        )


class RangePreset(StrEnum):
    """Named date-range selectors."""

    TODAY = "today"
    LAST7 = "last7"
    THIS_WEEK = "thisWeek"
    THIS_MONTH = "thisMonth"


DateRangeKind = RangePreset | DateRange


@dataclass(frozen=True)
class Calendar:
    """Calendar rules for a timezone and week start.

    Day arithmetic happens on local wall-clock time, so stepping one day
    across a DST change still lands on the next local midnight.
    """

    timezone: str = "UTC"
    first_weekday: int = 0
    tz: ZoneInfo = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "tz", ZoneInfo(self.timezone))

    def local(self, moment: datetime) -> datetime:
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=UTC)
        return moment.astimezone(self.tz)

    def start_of_day(self, moment: datetime) -> datetime:
        return datetime.combine(self.local(moment).date(), time(), tzinfo=self.tz)

    def add_days(self, moment: datetime, days: int) -> datetime:
        local = self.local(moment)
        shifted = local.replace(tzinfo=None) + timedelta(days=days)
        return shifted.replace(tzinfo=self.tz)

    def end_of_day(self, moment: datetime) -> datetime:
        return self.add_days(self.start_of_day(moment), 1) - TICK

    def day_interval(self, moment: datetime) -> DateRange:
        return DateRange(start=self.start_of_day(moment), end=self.end_of_day(moment))

    def start_of_week(self, moment: datetime) -> datetime:
        day = self.start_of_day(moment)
        offset = (day.weekday() - self.first_weekday) % 7
        return self.add_days(day, -offset)

    def month_bounds(self, moment: datetime) -> DateRange:
        start = self.start_of_day(moment).replace(day=1)
        if start.month == DECEMBER:
            following = start.replace(year=start.year + 1, month=1)
        else:
            following = start.replace(month=start.month + 1)
        return DateRange(start=start, end=following - TICK)

    def hour(self, moment: datetime) -> int:
        return self.local(moment).hour

    def at_time_of_day(self, day: datetime, hour: int, minute: int) -> datetime:
        """Return ``day`` with its wall-clock time set to ``hour:minute:00``."""
        local_day = self.local(day).date()
        return datetime.combine(local_day, time(hour, minute), tzinfo=self.tz)

    def is_same_day(self, first: datetime, second: datetime) -> bool:
        return self.local(first).date() == self.local(second).date()

    def iter_days(self, date_range: DateRange) -> Iterator[datetime]:
        """Yield the start of every calendar day touched by the range."""
        day = self.start_of_day(date_range.start)
        last = self.start_of_day(date_range.end)
        while day <= last:
            yield day
            day = self.add_days(day, 1)


def resolve_range(
    kind: DateRangeKind, calendar: Calendar, now: datetime
) -> DateRange:
    """Turn a preset or custom range into concrete bounds around ``now``."""
    if isinstance(kind, DateRange):
        return kind
    today = calendar.start_of_day(now)
    end_of_today = calendar.add_days(today, 1) - TICK
    if kind is RangePreset.TODAY:
        return DateRange(start=today, end=end_of_today)
    if kind is RangePreset.LAST7:
        return DateRange(start=calendar.add_days(today, -6), end=end_of_today)
    if kind is RangePreset.THIS_WEEK:
        start = calendar.start_of_week(now)
        return DateRange(start=start, end=calendar.add_days(start, 7) - TICK)
    if kind is RangePreset.THIS_MONTH:
        return calendar.month_bounds(now)
    raise ValueError(f"Unknown range kind: {kind!r}")
