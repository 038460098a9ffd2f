"""Statistics service for diary records."""

from collections import Counter
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TypeVar

from chili_diary.domain.calendar import (
    Calendar,
    DateRange,
    DateRangeKind,
    resolve_range,
)
from chili_diary.domain.models import FlavorTag, MealEntry, SnackEvent, SnackReason
from chili_diary.domain.stats import DailySummary, TrendPoint, WeeklyStats
from chili_diary.services.queries import flavor_distribution
from chili_diary.services.store import DiaryStore


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class StatsService:
    """Computes summaries and trends from the store's live collections."""

    store: DiaryStore
    clock: Callable[[], datetime] = field(default=_utc_now)

    @property
    def calendar(self) -> Calendar:
        return self.store.calendar

    def resolve(self, kind: DateRangeKind) -> DateRange:
        return resolve_range(kind, self.calendar, self.clock())

    def make_daily_summary(self, day: datetime) -> DailySummary:
        """Return totals and averages for the meals of ``day``."""
        meals = self.store.meals_on(day)
        return DailySummary(
            date=day,
            total_meals=len(meals),
            avg_satiety=average_satiety(meals),
            avg_energy=average_energy(meals),
            favorite_flavor=most_frequent_flavor(meals),
        )

    def make_weekly_stats(self, kind: DateRangeKind) -> WeeklyStats:
        """Return counts, averages and flavor/reason shares for a range."""
        date_range = self.resolve(kind)
        meals = self.store.meals_in(date_range)
        snacks = self.store.snacks_in(date_range)

        flavors = flavor_distribution(meals)
        reasons = reason_distribution(snacks)
        reason_total = max(1, sum(reasons.values()))

        return WeeklyStats(
            range=date_range,
            total_meals=len(meals),
            total_snacks=len(snacks),
            avg_satiety=average_satiety(meals),
            avg_energy=average_energy(meals),
            avg_hunger=average_hunger(snacks),
            flavor_ratios={tag: flavors.ratio(tag) for tag in FlavorTag},
            reason_ratios={
                reason: count / reason_total for reason, count in reasons.items()
            },
        )

    def satiety_trend(self, kind: DateRangeKind) -> list[TrendPoint]:
        return [
            TrendPoint(day=day, value=average_satiety(self.store.meals_on(day)))
            for day in self.calendar.iter_days(self.resolve(kind))
        ]

    def energy_trend(self, kind: DateRangeKind) -> list[TrendPoint]:
        return [
            TrendPoint(day=day, value=average_energy(self.store.meals_on(day)))
            for day in self.calendar.iter_days(self.resolve(kind))
        ]

    def hunger_trend(self, kind: DateRangeKind) -> list[TrendPoint]:
        return [
            TrendPoint(day=day, value=average_hunger(self.store.snacks_on(day)))
            for day in self.calendar.iter_days(self.resolve(kind))
        ]


def average_satiety(meals: Sequence[MealEntry]) -> float:
    if not meals:
        return 0.0
    return sum(meal.satiety_level for meal in meals) / len(meals)


def average_energy(meals: Sequence[MealEntry]) -> float:
    if not meals:
        return 0.0
    return sum(meal.energy_after.score for meal in meals) / len(meals)


def average_hunger(snacks: Sequence[SnackEvent]) -> float:
    if not snacks:
        return 0.0
    return sum(snack.hunger_level for snack in snacks) / len(snacks)


def most_frequent_flavor(meals: Iterable[MealEntry]) -> FlavorTag | None:
    """Most common tag, ties going to the earlier tag in enumeration order."""
    counts = flavor_distribution(meals)
    return first_max({tag: counts.count(tag) for tag in FlavorTag})


def reason_distribution(snacks: Iterable[SnackEvent]) -> dict[SnackReason, int]:
    """Snack counts per reason, for occurring reasons only, in enumeration order."""
    counts = Counter(snack.reason for snack in snacks)
    return {reason: counts[reason] for reason in SnackReason if counts[reason]}


K = TypeVar("K")


def first_max(values: dict[K, float]) -> K | None:
    """Key with the largest positive value; the first one wins on ties."""
    best_key: K | None = None
    best_value = 0.0
    for key, value in values.items():
        if value > best_value:
            best_key, best_value = key, value
    return best_key
