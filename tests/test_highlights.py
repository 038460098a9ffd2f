"""Tests for highlight lists and balance labels."""

import pytest

from chili_diary.domain.models import EnergyLevel, FlavorTag, SnackReason
from chili_diary.services.highlights import (
    balance_summary,
    balance_text,
    snack_reason_ranking,
    top_energizing_meals,
    top_heavy_meals,
    top_meal_names,
)
from tests.conftest import make_meal, make_snack


def test_top_meal_names_counts_and_limits() -> None:
    meals = [make_meal(name=name) for name in "ABBCCCDEFG"]
    meals.append(make_meal(name="   "))

    ranked = top_meal_names(meals)

    assert [(item.name, item.count) for item in ranked[:3]] == [
        ("C", 3),
        ("B", 2),
        ("A", 1),
    ]
    assert len(ranked) == 5


def test_energizing_and_heavy_meals() -> None:
    meals = [
        make_meal(name="Salad", energy=EnergyLevel.HIGH, satiety=2),
        make_meal(name="Salad", energy=EnergyLevel.HIGH, satiety=3),
        make_meal(name="Lasagna", energy=EnergyLevel.LOW, satiety=5),
        make_meal(name="Toast", energy=EnergyLevel.LOW, satiety=3),
    ]

    assert [(item.name, item.count) for item in top_energizing_meals(meals)] == [
        ("Salad", 2)
    ]
    assert [item.name for item in top_heavy_meals(meals)] == ["Lasagna"]


def test_snack_reason_ranking_covers_every_reason() -> None:
    snacks = [
        make_snack(reason=SnackReason.ROUTINE),
        make_snack(reason=SnackReason.ROUTINE),
        make_snack(reason=SnackReason.STRESS),
    ]

    ranking = snack_reason_ranking(snacks)

    assert [item.reason for item in ranking] == [
        SnackReason.ROUTINE,
        SnackReason.STRESS,
        SnackReason.HUNGER,
        SnackReason.CRAVE_SWEET,
    ]
    assert ranking[0].ratio == pytest.approx(2 / 3)
    assert all(item.ratio == 0.0 for item in snack_reason_ranking([]))


@pytest.mark.parametrize(
    ("nonzero", "label"),
    [
        (0, "No data"),
        (1, "Low variety"),
        (2, "Low variety"),
        (3, "Balanced"),
        (5, "Rich variety"),
    ],
)
def test_balance_text(nonzero, label) -> None:
    assert balance_text(nonzero) == label


def test_balance_summary_counts_nonzero_ratios() -> None:
    ratios = {FlavorTag.SWEET: 0.5, FlavorTag.SOUR: 0.5, FlavorTag.BITTER: 0.0}

    assert balance_summary(ratios) == "Low variety"
