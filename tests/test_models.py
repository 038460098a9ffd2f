"""Tests for diary entities and drafts."""

from dataclasses import FrozenInstanceError
from datetime import UTC, datetime

import pytest

from chili_diary.domain.drafts import MealDraft, SnackDraft
from chili_diary.domain.errors import EmptyNameError, LevelOutOfRangeError
from chili_diary.domain.models import (
    EnergyLevel,
    FlavorTag,
    MealEntry,
    MealType,
    SnackEvent,
    SnackReason,
    canonical_flavors,
    clamp_level,
)
from tests.conftest import NOW, make_meal


def test_meal_entry_normalizes_fields() -> None:
    meal = MealEntry(
        name="  Soup ",
        date=datetime(2024, 3, 13, 8, 30),
        satiety_level=9,
        flavor_tags=(FlavorTag.SPICY, FlavorTag.SWEET, FlavorTag.SPICY),
        notes="",
    )

    assert meal.name == "Soup"
    assert meal.date.tzinfo is UTC
    assert meal.satiety_level == 5
    assert meal.flavor_tags == (FlavorTag.SWEET, FlavorTag.SPICY)
    assert meal.notes is None


def test_meal_entry_accepts_raw_values() -> None:
    meal = MealEntry(name="Tea", type="breakfast", energy_after="high")

    assert meal.type is MealType.BREAKFAST
    assert meal.energy_after is EnergyLevel.HIGH


def test_meal_entry_is_immutable() -> None:
    meal = make_meal()

    with pytest.raises(FrozenInstanceError):
        meal.name = "Other"  # type: ignore[misc]


def test_snack_event_clamps_hunger() -> None:
    assert SnackEvent(reason=SnackReason.STRESS, hunger_level=0).hunger_level == 1


def test_enum_labels() -> None:
    assert SnackReason.CRAVE_SWEET.value == "craveSweet"
    assert SnackReason.CRAVE_SWEET.label == "Crave Sweet"
    assert SnackReason.ROUTINE.label == "Routine"
    assert FlavorTag.BITTER.title == "Bitter"
    assert MealType.DINNER.title == "Dinner"
    assert [level.score for level in EnergyLevel] == [1, 2, 3]


def test_level_helpers() -> None:
    assert clamp_level(-3) == 1
    assert clamp_level(3) == 3
    assert clamp_level(12) == 5
    assert canonical_flavors(["sour", "sweet", "sour"]) == (
        FlavorTag.SWEET,
        FlavorTag.SOUR,
    )


def test_meal_draft_requires_name() -> None:
    draft = MealDraft(name="   ")

    with pytest.raises(EmptyNameError, match="Name is required."):
        draft.validate()


def test_meal_draft_rejects_out_of_range_satiety() -> None:
    draft = MealDraft(name="Soup", satiety=6)

    with pytest.raises(LevelOutOfRangeError, match=r"Satiety must be 1\.\.\.5\."):
        draft.to_entry(NOW)


def test_meal_draft_toggle_and_commit() -> None:
    draft = MealDraft(name="Curry", satiety=4, energy=EnergyLevel.HIGH)
    draft.toggle_flavor(FlavorTag.SPICY)
    draft.toggle_flavor(FlavorTag.SALTY)
    draft.toggle_flavor(FlavorTag.SALTY)

    entry = draft.to_entry(NOW)

    assert entry.name == "Curry"
    assert entry.date == NOW
    assert entry.flavor_tags == (FlavorTag.SPICY,)
    assert entry.energy_after is EnergyLevel.HIGH


def test_meal_draft_apply_keeps_identity() -> None:
    original = make_meal(name="Soup", notes="hot")
    draft = MealDraft.from_entry(original)
    draft.name = "Stew"
    draft.notes = ""

    updated = draft.apply_to(original)

    assert updated.id == original.id
    assert updated.date == original.date
    assert updated.name == "Stew"
    assert updated.notes is None


def test_snack_draft_validation_and_round_trip() -> None:
    with pytest.raises(LevelOutOfRangeError, match="Hunger must be 1...5."):
        SnackDraft(hunger=0).validate()

    event = SnackDraft(reason=SnackReason.ROUTINE, hunger=2, note="tea").to_event(NOW)
    draft = SnackDraft.from_event(event)

    assert draft == SnackDraft(reason=SnackReason.ROUTINE, hunger=2, note="tea")
