"""Domain models for the meal and snack diary."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from uuid import UUID, uuid4

MIN_LEVEL = 1
MAX_LEVEL = 5


class MealType(StrEnum):
    """Kind of meal being logged."""

    MEAL = "meal"
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"

    @property
    def title(self) -> str:
        return self.value.capitalize()


class EnergyLevel(StrEnum):
    """Self-reported energy after a meal."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def score(self) -> int:
        """Numeric mapping used for averages and sorting."""
        return _ENERGY_SCORES[self]


_ENERGY_SCORES = {EnergyLevel.LOW: 1, EnergyLevel.MEDIUM: 2, EnergyLevel.HIGH: 3}


class FlavorTag(StrEnum):
    """Taste category attached to a meal."""

    SWEET = "sweet"
    SALTY = "salty"
    SPICY = "spicy"
    SOUR = "sour"
    BITTER = "bitter"

    @property
    def title(self) -> str:
        return self.value.capitalize()


class SnackReason(StrEnum):
    """Trigger for a snacking event."""

    HUNGER = "hunger"
    STRESS = "stress"
    ROUTINE = "routine"
    CRAVE_SWEET = "craveSweet"

    @property
    def label(self) -> str:
        if self is SnackReason.CRAVE_SWEET:
            return "Crave Sweet"
        return self.value.capitalize()


class InsightCategory(StrEnum):
    """Category of a generated insight."""

    BALANCE = "balance"
    ENERGY = "energy"
    SATIETY = "satiety"
    HABITS = "habits"
    FLAVOR = "flavor"

    @property
    def label(self) -> str:
        return self.value.capitalize()


def clamp_level(value: int) -> int:
    """Clamp a satiety or hunger level into the 1..5 scale."""
    return max(MIN_LEVEL, min(int(value), MAX_LEVEL))


def canonical_flavors(tags: Iterable[FlavorTag | str]) -> tuple[FlavorTag, ...]:
    """Collapse duplicate tags and order them by enumeration order."""
    present = {FlavorTag(tag) for tag in tags}
    return tuple(tag for tag in FlavorTag if tag in present)


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


def _ensure_aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _optional_text(value: str | None) -> str | None:
    if value is None or value == "":
        return None
    return value


@dataclass(frozen=True)
class MealEntry:
    """One logged meal or snack consumption record."""

    name: str
    date: datetime = field(default_factory=_utc_now)
    type: MealType = MealType.MEAL
    satiety_level: int = 3
    energy_after: EnergyLevel = EnergyLevel.MEDIUM
    flavor_tags: tuple[FlavorTag, ...] = ()
    notes: str | None = None
    id: UUID = field(default_factory=uuid4)

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", self.name.strip())
        object.__setattr__(self, "date", _ensure_aware(self.date))
        object.__setattr__(self, "type", MealType(self.type))
        object.__setattr__(self, "satiety_level", clamp_level(self.satiety_level))
        object.__setattr__(self, "energy_after", EnergyLevel(self.energy_after))
        object.__setattr__(self, "flavor_tags", canonical_flavors(self.flavor_tags))
        object.__setattr__(self, "notes", _optional_text(self.notes))


@dataclass(frozen=True)
class SnackEvent:
    """One snack or impulse-eating record."""

    reason: SnackReason
    date: datetime = field(default_factory=_utc_now)
    hunger_level: int = 3
    note: str | None = None
    id: UUID = field(default_factory=uuid4)

    def __post_init__(self) -> None:
        object.__setattr__(self, "reason", SnackReason(self.reason))
        object.__setattr__(self, "date", _ensure_aware(self.date))
        object.__setattr__(self, "hunger_level", clamp_level(self.hunger_level))
        object.__setattr__(self, "note", _optional_text(self.note))


@dataclass(frozen=True)
class InsightItem:
    """Generated observation about a period of eating."""

    title: str
    description: str
    category: InsightCategory
    date: datetime = field(default_factory=_utc_now)
    id: UUID = field(default_factory=uuid4)

    def __post_init__(self) -> None:
        object.__setattr__(self, "category", InsightCategory(self.category))
        object.__setattr__(self, "date", _ensure_aware(self.date))


@dataclass(frozen=True)
class DiarySnapshot:
    """Point-in-time copy of the three diary collections."""

    meals: tuple[MealEntry, ...] = ()
    snacks: tuple[SnackEvent, ...] = ()
    insights: tuple[InsightItem, ...] = ()
