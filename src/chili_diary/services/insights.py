"""Rule-based insights and the live insights board."""

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from chili_diary.domain.calendar import DateRangeKind, RangePreset
from chili_diary.domain.models import InsightCategory, InsightItem
from chili_diary.domain.stats import InsightsReport, WeeklyStats
from chili_diary.services.formatting import insight_summary
from chili_diary.services.highlights import (
    balance_summary,
    snack_reason_ranking,
    top_energizing_meals,
    top_heavy_meals,
)
from chili_diary.services.stats import StatsService, first_max

_logger = logging.getLogger(__name__)

LOW_ENERGY = 1.5
HIGH_ENERGY = 2.5
LIGHT_SATIETY = 2
HEAVY_SATIETY = 4
MIN_VARIETY = 3


def generate_insights(
    week: WeeklyStats, now: datetime | None = None
) -> list[InsightItem]:
    """Apply the insight rules in order; each contributes at most one item."""
    stamp = now or datetime.now(tz=UTC)
    insights: list[InsightItem] = []

    def add(title: str, description: str, category: InsightCategory) -> None:
        insights.append(
            InsightItem(
                title=title, description=description, category=category, date=stamp
            )
        )

    top_flavor = first_max(week.flavor_ratios)
    if top_flavor is not None:
        add(
            f"Your week tastes like {top_flavor.title}",
            f"Most of your meals leaned toward {top_flavor.title.lower()} flavor.",
            InsightCategory.FLAVOR,
        )

    if week.avg_energy < LOW_ENERGY:
        add(
            "Low Energy",
            "Meals this week may have been too heavy or unbalanced.",
            InsightCategory.ENERGY,
        )
    elif week.avg_energy > HIGH_ENERGY:
        add(
            "High Energy",
            "You seem to respond well to recent meals.",
            InsightCategory.ENERGY,
        )

    if week.avg_satiety < LIGHT_SATIETY:
        add(
            "Light meals",
            "Most meals left you not fully satisfied.",
            InsightCategory.SATIETY,
        )
    elif week.avg_satiety > HEAVY_SATIETY:
        add(
            "Heavy eating",
            "Satiety scores are high; portion size could be reduced.",
            InsightCategory.SATIETY,
        )

    top_reason = first_max(week.reason_ratios)
    if top_reason is not None:
        add(
            "Snack Trigger",
            f"Most snacks were triggered by {top_reason.label.lower()}.",
            InsightCategory.HABITS,
        )

    flavors_eaten = sum(1 for ratio in week.flavor_ratios.values() if ratio > 0)
    if flavors_eaten < MIN_VARIETY:
        add(
            "Limited Variety",
            "Try exploring more flavor profiles for better balance.",
            InsightCategory.BALANCE,
        )

    return insights


class InsightsBoard:
    """Keeps an insights report current for one range.

    The board listens to the store and recomputes synchronously on every
    write, so ``report`` never lags behind the store.
    """

    def __init__(
        self, stats: StatsService, range_kind: DateRangeKind = RangePreset.THIS_WEEK
    ) -> None:
        self.stats = stats
        self._range_kind = range_kind
        self._listeners: list[Callable[[InsightsReport], None]] = []
        self.report = self._compute()
        self._unsubscribe = stats.store.subscribe(self.refresh)

    @property
    def range_kind(self) -> DateRangeKind:
        return self._range_kind

    def set_range(self, kind: DateRangeKind) -> None:
        self._range_kind = kind
        self.refresh()

    def on_change(self, listener: Callable[[InsightsReport], None]) -> None:
        self._listeners.append(listener)

    def refresh(self) -> None:
        self.report = self._compute()
        for listener in list(self._listeners):
            listener(self.report)

    def close(self) -> None:
        self._unsubscribe()

    def _compute(self) -> InsightsReport:
        return build_insights_report(self.stats, self._range_kind)


def build_insights_report(stats: StatsService, kind: DateRangeKind) -> InsightsReport:
    """Compute the full insights report for one range."""
    weekly = stats.make_weekly_stats(kind)
    insights = generate_insights(weekly, now=stats.clock())
    meals = stats.store.meals_in(weekly.range)
    snacks = stats.store.snacks_in(weekly.range)
    _logger.debug(
        "Computed insights: meals=%s snacks=%s insights=%s",
        weekly.total_meals,
        weekly.total_snacks,
        len(insights),
    )
    return InsightsReport(
        weekly=weekly,
        insights=insights,
        satiety_trend=stats.satiety_trend(kind),
        energy_trend=stats.energy_trend(kind),
        hunger_trend=stats.hunger_trend(kind),
        top_energizing_meals=top_energizing_meals(meals),
        top_heavy_meals=top_heavy_meals(meals),
        top_snack_reasons=snack_reason_ranking(snacks),
        balance_summary=balance_summary(weekly.flavor_ratios),
        insight_summary=insight_summary(insights),
    )
