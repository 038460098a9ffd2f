"""Pydantic models for the on-disk store document."""

import json
from datetime import UTC, datetime
from uuid import UUID

from pydantic import (
    AwareDatetime,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_serializer,
)

from chili_diary.domain.errors import DecodeFailedError, EncodeFailedError
from chili_diary.domain.models import (
    DiarySnapshot,
    EnergyLevel,
    FlavorTag,
    InsightCategory,
    InsightItem,
    MealEntry,
    MealType,
    SnackEvent,
    SnackReason,
)

SCHEMA_VERSION = 1


def format_timestamp(value: datetime) -> str:
    """Render an instant as ISO-8601 UTC with a ``Z`` suffix."""
    text = value.astimezone(UTC).replace(tzinfo=None).isoformat()
    return f"{text}Z"


class _Record(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_serializer("date", check_fields=False)
    def _serialize_date(self, value: datetime) -> str:
        return format_timestamp(value)


class MealRecord(_Record):
    """Wire form of a meal entry."""

    id: UUID
    date: AwareDatetime
    name: str
    type: MealType
    satiety_level: int = Field(alias="satietyLevel")
    energy_after: EnergyLevel = Field(alias="energyAfter")
    flavor_tags: list[FlavorTag] = Field(alias="flavorTags")
    notes: str | None = None

    @classmethod
    def from_domain(cls, entry: MealEntry) -> "MealRecord":
        return cls(
            id=entry.id,
            date=entry.date,
            name=entry.name,
            type=entry.type,
            satiety_level=entry.satiety_level,
            energy_after=entry.energy_after,
            flavor_tags=list(entry.flavor_tags),
            notes=entry.notes,
        )

    def to_domain(self) -> MealEntry:
        return MealEntry(
            id=self.id,
            date=self.date,
            name=self.name,
            type=self.type,
            satiety_level=self.satiety_level,
            energy_after=self.energy_after,
            flavor_tags=tuple(self.flavor_tags),
            notes=self.notes,
        )


class SnackRecord(_Record):
    """Wire form of a snack event."""

    id: UUID
    date: AwareDatetime
    reason: SnackReason
    hunger_level: int = Field(alias="hungerLevel")
    note: str | None = None

    @classmethod
    def from_domain(cls, event: SnackEvent) -> "SnackRecord":
        return cls(
            id=event.id,
            date=event.date,
            reason=event.reason,
            hunger_level=event.hunger_level,
            note=event.note,
        )

    def to_domain(self) -> SnackEvent:
        return SnackEvent(
            id=self.id,
            date=self.date,
            reason=self.reason,
            hunger_level=self.hunger_level,
            note=self.note,
        )


class InsightRecord(_Record):
    """Wire form of an insight."""

    id: UUID
    date: AwareDatetime
    title: str
    description: str
    category: InsightCategory

    @classmethod
    def from_domain(cls, item: InsightItem) -> "InsightRecord":
        return cls(
            id=item.id,
            date=item.date,
            title=item.title,
            description=item.description,
            category=item.category,
        )

    def to_domain(self) -> InsightItem:
        return InsightItem(
            id=self.id,
            date=self.date,
            title=self.title,
            description=self.description,
            category=self.category,
        )


class StoreDocument(BaseModel):
    """Top-level store document."""

    version: int
    meals: list[MealRecord]
    snacks: list[SnackRecord]
    insights: list[InsightRecord]


def encode_snapshot(snapshot: DiarySnapshot, version: int = SCHEMA_VERSION) -> bytes:
    """Serialize a snapshot with sorted keys so equal state gives equal bytes."""
    try:
        document = StoreDocument(
            version=version,
            meals=[MealRecord.from_domain(meal) for meal in snapshot.meals],
            snacks=[SnackRecord.from_domain(snack) for snack in snapshot.snacks],
            insights=[InsightRecord.from_domain(item) for item in snapshot.insights],
        )
        payload = document.model_dump(mode="json", by_alias=True, exclude_none=True)
        text = json.dumps(payload, sort_keys=True, separators=(",", ":"))
    except (ValidationError, TypeError, ValueError) as exc:
        raise EncodeFailedError(str(exc)) from exc
    return text.encode("utf-8")


def decode_snapshot(data: bytes) -> DiarySnapshot:
    """Parse store bytes back into a snapshot."""
    try:
        document = StoreDocument.model_validate_json(data)
    except ValidationError as exc:
        raise DecodeFailedError(str(exc)) from exc
    return DiarySnapshot(
        meals=tuple(record.to_domain() for record in document.meals),
        snacks=tuple(record.to_domain() for record in document.snacks),
        insights=tuple(record.to_domain() for record in document.insights),
    )
