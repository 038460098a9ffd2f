"""Request models and shared query parameters for the diary API."""

from datetime import UTC, datetime

from fastapi import HTTPException, Query, status
from pydantic import AwareDatetime, BaseModel, Field

from chili_diary.domain.calendar import DateRange, DateRangeKind, RangePreset
from chili_diary.domain.drafts import MealDraft, SnackDraft
from chili_diary.domain.models import EnergyLevel, FlavorTag, MealType, SnackReason


class MealPayload(BaseModel):
    """Fields accepted when creating or editing a meal."""

    name: str
    type: MealType = MealType.MEAL
    satiety: int = 3
    energy: EnergyLevel = EnergyLevel.MEDIUM
    flavors: list[FlavorTag] = Field(default_factory=list)
    notes: str = ""
    date: AwareDatetime | None = None

    def to_draft(self) -> MealDraft:
        return MealDraft(
            name=self.name,
            type=self.type,
            satiety=self.satiety,
            energy=self.energy,
            flavors=set(self.flavors),
            notes=self.notes,
        )


class SnackPayload(BaseModel):
    """Fields accepted when creating or editing a snack."""

    reason: SnackReason = SnackReason.HUNGER
    hunger: int = 3
    note: str = ""
    date: AwareDatetime | None = None

    def to_draft(self) -> SnackDraft:
        return SnackDraft(reason=self.reason, hunger=self.hunger, note=self.note)


def range_kind(
    preset: RangePreset = Query(default=RangePreset.THIS_WEEK, alias="range"),
    start: datetime | None = None,
    end: datetime | None = None,
) -> DateRangeKind:
    """Resolve the ``range``/``start``/``end`` query parameters.

    A custom range needs both bounds and takes precedence over the preset.
    """
    if start is None and end is None:
        return preset
    if start is None or end is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Both start and end are required for a custom range.",
        )
    return DateRange(start=as_utc(start), end=as_utc(end))


def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value
