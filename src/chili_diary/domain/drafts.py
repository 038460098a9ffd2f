"""Draft objects staged and validated before they become diary records."""

from dataclasses import dataclass, field, replace
from datetime import datetime

from chili_diary.domain.errors import EmptyNameError, LevelOutOfRangeError
from chili_diary.domain.models import (
    MAX_LEVEL,
    MIN_LEVEL,
    EnergyLevel,
    FlavorTag,
    MealEntry,
    MealType,
    SnackEvent,
    SnackReason,
)


@dataclass
class MealDraft:
    """Editable meal fields before commit."""

    name: str = ""
    type: MealType = MealType.MEAL
    satiety: int = 3
    energy: EnergyLevel = EnergyLevel.MEDIUM
    flavors: set[FlavorTag] = field(default_factory=set)
    notes: str = ""

    @classmethod
    def from_entry(cls, entry: MealEntry) -> "MealDraft":
        return cls(
            name=entry.name,
            type=entry.type,
            satiety=entry.satiety_level,
            energy=entry.energy_after,
            flavors=set(entry.flavor_tags),
            notes=entry.notes or "",
        )

    def toggle_flavor(self, tag: FlavorTag) -> None:
        if tag in self.flavors:
            self.flavors.discard(tag)
        else:
            self.flavors.add(tag)

    def validate(self) -> None:
        """Raise a validation error if the draft cannot be committed."""
        if not self.name.strip():
            raise EmptyNameError()
        if not MIN_LEVEL <= self.satiety <= MAX_LEVEL:
            raise LevelOutOfRangeError("satiety", self.satiety)

    def to_entry(self, date: datetime) -> MealEntry:
        self.validate()
        return MealEntry(
            name=self.name,
            date=date,
            type=self.type,
            satiety_level=self.satiety,
            energy_after=self.energy,
            flavor_tags=tuple(self.flavors),
            notes=self.notes,
        )

    def apply_to(self, entry: MealEntry) -> MealEntry:
        """Return ``entry`` with the draft's fields, keeping its id and date."""
        self.validate()
        return replace(
            entry,
            name=self.name,
            type=self.type,
            satiety_level=self.satiety,
            energy_after=self.energy,
            flavor_tags=tuple(self.flavors),
            notes=self.notes,
        )


@dataclass
class SnackDraft:
    """Editable snack fields before commit."""

    reason: SnackReason = SnackReason.HUNGER
    hunger: int = 3
    note: str = ""

    @classmethod
    def from_event(cls, event: SnackEvent) -> "SnackDraft":
        return cls(
            reason=event.reason, hunger=event.hunger_level, note=event.note or ""
        )

    def validate(self) -> None:
        if not MIN_LEVEL <= self.hunger <= MAX_LEVEL:
            raise LevelOutOfRangeError("hunger", self.hunger)

    def to_event(self, date: datetime) -> SnackEvent:
        self.validate()
        return SnackEvent(
            reason=self.reason, date=date, hunger_level=self.hunger, note=self.note
        )

    def apply_to(self, event: SnackEvent) -> SnackEvent:
        self.validate()
        return replace(
            event, reason=self.reason, hunger_level=self.hunger, note=self.note
        )
