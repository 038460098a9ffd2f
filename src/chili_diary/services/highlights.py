"""Highlight lists and summary labels derived from a range of records."""

from collections import Counter
from collections.abc import Iterable

from chili_diary.domain.models import (
    EnergyLevel,
    FlavorTag,
    MealEntry,
    SnackEvent,
    SnackReason,
)
from chili_diary.domain.stats import NameCount, ReasonRatio
from chili_diary.services.stats import reason_distribution

TOP_NAMES_LIMIT = 5
HEAVY_SATIETY = 4


def top_meal_names(
    meals: Iterable[MealEntry], limit: int = TOP_NAMES_LIMIT
) -> list[NameCount]:
    """Most frequent non-empty meal names, most frequent first."""
    names = (meal.name.strip() for meal in meals)
    counts = Counter(name for name in names if name)
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [NameCount(name=name, count=count) for name, count in ranked[:limit]]


def top_energizing_meals(meals: Iterable[MealEntry]) -> list[NameCount]:
    return top_meal_names(
        meal for meal in meals if meal.energy_after is EnergyLevel.HIGH
    )


def top_heavy_meals(meals: Iterable[MealEntry]) -> list[NameCount]:
    return top_meal_names(
        meal
        for meal in meals
        if meal.satiety_level >= HEAVY_SATIETY
        and meal.energy_after is EnergyLevel.LOW
    )


def snack_reason_ranking(snacks: Iterable[SnackEvent]) -> list[ReasonRatio]:
    """Every reason with its count and share, most frequent first.

    Reasons with equal counts keep enumeration order.
    """
    counts = reason_distribution(snacks)
    total = max(1, sum(counts.values()))
    ranking = [
        ReasonRatio(
            reason=reason,
            count=counts.get(reason, 0),
            ratio=counts.get(reason, 0) / total,
        )
        for reason in SnackReason
    ]
    return sorted(ranking, key=lambda item: item.count, reverse=True)


def balance_text(nonzero_flavors: int) -> str:
    """Describe flavor variety from the number of flavors actually eaten."""
    if nonzero_flavors == 0:
        return "No data"
    if nonzero_flavors < 3:
        return "Low variety"
    if nonzero_flavors == 3:
        return "Balanced"
    return "Rich variety"


def balance_summary(flavor_ratios: dict[FlavorTag, float]) -> str:
    return balance_text(sum(1 for ratio in flavor_ratios.values() if ratio > 0))
