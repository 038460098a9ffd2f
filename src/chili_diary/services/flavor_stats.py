"""Flavor breakdown for a range of meals."""

from collections import Counter
from collections.abc import Iterable

from chili_diary.domain.calendar import DateRange, DateRangeKind
from chili_diary.domain.models import FlavorTag, MealEntry
from chili_diary.domain.stats import DailyFlavorPoint, FlavorSlice, FlavorStatsReport
from chili_diary.services.highlights import balance_text
from chili_diary.services.stats import StatsService


class FlavorStatsService:
    """Flavor slices, variety label and per-day counts for selected flavors."""

    def __init__(self, stats: StatsService) -> None:
        self.stats = stats

    def compute(
        self,
        kind: DateRangeKind,
        included: Iterable[FlavorTag] | None = None,
    ) -> FlavorStatsReport:
        selected = set(FlavorTag) if included is None else set(included)
        date_range = self.stats.resolve(kind)
        meals = self.stats.store.meals_in(date_range)

        counts: Counter[FlavorTag] = Counter()
        for meal in meals:
            counts.update(selected.intersection(meal.flavor_tags))
        total = max(1, sum(counts.values()))
        slices = sorted(
            (
                FlavorSlice(tag=tag, count=counts[tag], ratio=counts[tag] / total)
                for tag in FlavorTag
                if tag in selected
            ),
            key=lambda item: item.count,
            reverse=True,
        )
        eaten = sum(1 for item in slices if item.count > 0)

        return FlavorStatsReport(
            range=date_range,
            total_meals=len(meals),
            slices=slices,
            top_flavor=slices[0].tag if slices and slices[0].count else None,
            balance_text=balance_text(eaten),
            daily_trend=self._daily_trend(date_range, meals, selected),
        )

    def _daily_trend(
        self, date_range: DateRange, meals: list[MealEntry], selected: set[FlavorTag]
    ) -> list[DailyFlavorPoint]:
        calendar = self.stats.calendar
        points = []
        for day in calendar.iter_days(date_range):
            count = sum(
                1
                for meal in meals
                if calendar.is_same_day(meal.date, day)
                and not selected.isdisjoint(meal.flavor_tags)
            )
            points.append(DailyFlavorPoint(day=day, count=count))
        return points
