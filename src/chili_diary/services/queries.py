"""Filtering, sorting, grouping and light aggregation over diary records.

Everything here is a pure function of its arguments. Range presets are
resolved against the ``now`` argument, which defaults to the current time.
"""

from collections import Counter, defaultdict
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum

from chili_diary.domain.calendar import (
    Calendar,
    DateRangeKind,
    RangePreset,
    resolve_range,
)
from chili_diary.domain.models import (
    EnergyLevel,
    FlavorTag,
    MealEntry,
    MealType,
    SnackEvent,
    SnackReason,
)
from chili_diary.domain.stats import EnergyAverages


class MealSortKey(StrEnum):
    BY_TIME_ASC = "timeAsc"
    BY_TIME_DESC = "timeDesc"
    BY_SATIETY_DESC = "satietyDesc"
    BY_ENERGY_DESC = "energyDesc"
    BY_NAME = "name"


class SnackSortKey(StrEnum):
    BY_TIME_ASC = "timeAsc"
    BY_TIME_DESC = "timeDesc"
    BY_HUNGER_DESC = "hungerDesc"
    BY_REASON = "reason"


class TimeBucket(StrEnum):
    """Part of the day a meal falls into, by local hour."""

    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    NIGHT = "night"

    @classmethod
    def for_date(cls, moment: datetime, calendar: Calendar) -> "TimeBucket":
        hour = calendar.hour(moment)
        if 5 <= hour <= 11:
            return cls.MORNING
        if 12 <= hour <= 16:
            return cls.AFTERNOON
        if 17 <= hour <= 21:
            return cls.EVENING
        return cls.NIGHT


@dataclass
class MealFilters:
    """Active meal filters; empty sets and None mean "no constraint"."""

    range_kind: DateRangeKind = RangePreset.TODAY
    flavors: set[FlavorTag] = field(default_factory=set)
    types: set[MealType] = field(default_factory=set)
    min_satiety: int | None = None
    energy_in: set[EnergyLevel] = field(default_factory=set)
    search: str = ""


@dataclass
class SnackFilters:
    """Active snack filters."""

    range_kind: DateRangeKind = RangePreset.TODAY
    reasons: set[SnackReason] = field(default_factory=set)
    min_hunger: int | None = None
    search: str = ""


def filter_meals(
    source: Iterable[MealEntry],
    filters: MealFilters,
    calendar: Calendar,
    now: datetime | None = None,
) -> list[MealEntry]:
    """Return the meals that pass every active filter."""
    date_range = resolve_range(filters.range_kind, calendar, now or _now())
    needle = filters.search.strip().lower()
    result = []
    for meal in source:
        if not date_range.contains(meal.date):
            continue
        if filters.flavors and filters.flavors.isdisjoint(meal.flavor_tags):
            continue
        if filters.types and meal.type not in filters.types:
            continue
        if filters.min_satiety is not None and meal.satiety_level < filters.min_satiety:
            continue
        if filters.energy_in and meal.energy_after not in filters.energy_in:
            continue
        if needle and needle not in f"{meal.name} {meal.notes or ''}".lower():
            continue
        result.append(meal)
    return result


def sort_meals(items: Iterable[MealEntry], key: MealSortKey) -> list[MealEntry]:
    if key is MealSortKey.BY_TIME_ASC:
        return sorted(items, key=lambda meal: meal.date)
    if key is MealSortKey.BY_TIME_DESC:
        return sorted(items, key=lambda meal: meal.date, reverse=True)
    if key is MealSortKey.BY_SATIETY_DESC:
        return sorted(
            items, key=lambda meal: (meal.satiety_level, meal.date), reverse=True
        )
    if key is MealSortKey.BY_ENERGY_DESC:
        return sorted(
            items, key=lambda meal: (meal.energy_after.score, meal.date), reverse=True
        )
    return sorted(items, key=lambda meal: meal.name.casefold())


def filter_snacks(
    source: Iterable[SnackEvent],
    filters: SnackFilters,
    calendar: Calendar,
    now: datetime | None = None,
) -> list[SnackEvent]:
    """Return the snacks that pass every active filter."""
    date_range = resolve_range(filters.range_kind, calendar, now or _now())
    needle = filters.search.strip().lower()
    result = []
    for snack in source:
        if not date_range.contains(snack.date):
            continue
        if filters.reasons and snack.reason not in filters.reasons:
            continue
        if filters.min_hunger is not None and snack.hunger_level < filters.min_hunger:
            continue
        if needle and needle not in (snack.note or "").lower():
            continue
        result.append(snack)
    return result


def sort_snacks(items: Iterable[SnackEvent], key: SnackSortKey) -> list[SnackEvent]:
    if key is SnackSortKey.BY_TIME_ASC:
        return sorted(items, key=lambda snack: snack.date)
    if key is SnackSortKey.BY_TIME_DESC:
        return sorted(items, key=lambda snack: snack.date, reverse=True)
    if key is SnackSortKey.BY_HUNGER_DESC:
        return sorted(
            items, key=lambda snack: (snack.hunger_level, snack.date), reverse=True
        )
    return sorted(items, key=lambda snack: snack.reason.value)


def group_meals_by_day(
    meals: Iterable[MealEntry], calendar: Calendar
) -> list[tuple[datetime, list[MealEntry]]]:
    return _group_by_day(meals, calendar)


def group_snacks_by_day(
    snacks: Iterable[SnackEvent], calendar: Calendar
) -> list[tuple[datetime, list[SnackEvent]]]:
    return _group_by_day(snacks, calendar)


def _group_by_day(records: Iterable, calendar: Calendar) -> list[tuple[datetime, list]]:
    buckets: dict[datetime, list] = defaultdict(list)
    for record in records:
        buckets[calendar.start_of_day(record.date)].append(record)
    return [
        (day, sorted(buckets[day], key=lambda record: record.date))
        for day in sorted(buckets)
    ]


@dataclass(frozen=True)
class FlavorDistribution:
    """Number of meals carrying each flavor tag."""

    counts: dict[FlavorTag, int]

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def count(self, tag: FlavorTag) -> int:
        return self.counts.get(tag, 0)

    def ratio(self, tag: FlavorTag) -> float:
        total = self.total
        if total == 0:
            return 0.0
        return self.count(tag) / total

    def nonzero_tags(self) -> list[FlavorTag]:
        return [tag for tag in FlavorTag if self.count(tag) > 0]


def flavor_distribution(meals: Iterable[MealEntry]) -> FlavorDistribution:
    counter: Counter[FlavorTag] = Counter()
    for meal in meals:
        counter.update(set(meal.flavor_tags))
    return FlavorDistribution(
        counts={tag: counter[tag] for tag in FlavorTag if counter[tag]}
    )


def energy_averages(
    bucket: TimeBucket, meals: Iterable[MealEntry], calendar: Calendar
) -> EnergyAverages:
    """Energy profile of the meals eaten in one part of the day.

    ``average`` is the mean energy score across the bucket; ``low``, ``medium``
    and ``high`` are the share of the bucket's meals at each level.
    """
    subset = [
        meal for meal in meals if TimeBucket.for_date(meal.date, calendar) is bucket
    ]
    if not subset:
        return EnergyAverages(meal_count=0, average=0.0, low=0.0, medium=0.0, high=0.0)
    levels = Counter(meal.energy_after for meal in subset)
    count = len(subset)
    return EnergyAverages(
        meal_count=count,
        average=sum(meal.energy_after.score for meal in subset) / count,
        low=levels[EnergyLevel.LOW] / count,
        medium=levels[EnergyLevel.MEDIUM] / count,
        high=levels[EnergyLevel.HIGH] / count,
    )


def _now() -> datetime:
    return datetime.now(tz=UTC)
