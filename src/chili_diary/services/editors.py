"""Day-scoped edit sessions for meals and snacks."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from chili_diary.domain.drafts import MealDraft, SnackDraft
from chili_diary.domain.errors import InvalidEditStateError
from chili_diary.domain.models import (
    EnergyLevel,
    FlavorTag,
    MealEntry,
    SnackEvent,
    SnackReason,
    clamp_level,
)
from chili_diary.domain.stats import DailySummary
from chili_diary.services.diary import DiaryService
from chili_diary.services.queries import (
    MealFilters,
    SnackFilters,
    filter_meals,
    filter_snacks,
)
from chili_diary.services.stats import StatsService, average_hunger


class _DayCursor:
    """Selected day shared by both editors."""

    stats: StatsService
    selected_day: datetime

    def _start(self, day: datetime | None) -> None:
        calendar = self.stats.calendar
        self.selected_day = calendar.start_of_day(day or self.stats.clock())

    def go_to_today(self) -> None:
        self.selected_day = self.stats.calendar.start_of_day(self.stats.clock())

    def previous_day(self) -> None:
        self.selected_day = self.stats.calendar.add_days(self.selected_day, -1)

    def next_day(self) -> None:
        self.selected_day = self.stats.calendar.add_days(self.selected_day, 1)

    def _stamp(self) -> datetime:
        """Current hour and minute on the selected day."""
        calendar = self.stats.calendar
        now = calendar.local(self.stats.clock())
        return calendar.at_time_of_day(self.selected_day, now.hour, now.minute)


@dataclass
class MealFilterState:
    min_satiety: int | None = None
    energy_in: set[EnergyLevel] = field(default_factory=set)
    flavor_in: set[FlavorTag] = field(default_factory=set)
    search: str = ""


class MealEditor(_DayCursor):
    """Edit session for the meals of one selected day."""

    def __init__(
        self, diary: DiaryService, stats: StatsService, day: datetime | None = None
    ) -> None:
        self.diary = diary
        self.stats = stats
        self.draft = MealDraft()
        self.filters = MealFilterState()
        self._editing_id: UUID | None = None
        self._start(day)

    @property
    def is_editing(self) -> bool:
        return self._editing_id is not None

    def meals_for_day(self) -> list[MealEntry]:
        meals = self.diary.store.meals_on(self.selected_day)
        return sorted(meals, key=lambda meal: meal.date)

    def summary(self) -> DailySummary:
        return self.stats.make_daily_summary(self.selected_day)

    def filtered_meals(self) -> list[MealEntry]:
        calendar = self.stats.calendar
        filters = MealFilters(
            range_kind=calendar.day_interval(self.selected_day),
            flavors=self.filters.flavor_in,
            min_satiety=self.filters.min_satiety,
            energy_in=self.filters.energy_in,
            search=self.filters.search,
        )
        return filter_meals(self.meals_for_day(), filters, calendar)

    def reset(self) -> None:
        self.draft = MealDraft()
        self._editing_id = None

    def load(self, entry: MealEntry) -> None:
        self.draft = MealDraft.from_entry(entry)
        self._editing_id = entry.id

    def add(self) -> MealEntry:
        created = self.diary.add_meal(self.draft, self._stamp())
        self.reset()
        return created

    def update(self) -> MealEntry:
        if self._editing_id is None:
            raise InvalidEditStateError()
        updated = self.diary.update_meal(self._editing_id, self.draft)
        self.reset()
        return updated

    def delete(self, meal_id: UUID) -> None:
        self.diary.delete_meal(meal_id)


@dataclass
class SnackFilterState:
    min_hunger: int | None = None
    reason_in: set[SnackReason] = field(default_factory=set)
    search: str = ""


class SnackEditor(_DayCursor):
    """Edit session for the snacks of one selected day."""

    def __init__(
        self, diary: DiaryService, stats: StatsService, day: datetime | None = None
    ) -> None:
        self.diary = diary
        self.stats = stats
        self.draft = SnackDraft()
        self.filters = SnackFilterState()
        self._editing_id: UUID | None = None
        self._start(day)

    @property
    def is_editing(self) -> bool:
        return self._editing_id is not None

    def snacks_for_day(self) -> list[SnackEvent]:
        snacks = self.diary.store.snacks_on(self.selected_day)
        return sorted(snacks, key=lambda snack: snack.date)

    def average_hunger(self) -> float:
        return average_hunger(self.snacks_for_day())

    def filtered_snacks(self) -> list[SnackEvent]:
        calendar = self.stats.calendar
        filters = SnackFilters(
            range_kind=calendar.day_interval(self.selected_day),
            reasons=self.filters.reason_in,
            min_hunger=self.filters.min_hunger,
            search=self.filters.search,
        )
        return filter_snacks(self.snacks_for_day(), filters, calendar)

    def quick_select(self, reason: SnackReason) -> None:
        self.draft.reason = reason

    def set_hunger(self, level: int) -> None:
        self.draft.hunger = clamp_level(level)

    def reset(self) -> None:
        self.draft = SnackDraft()
        self._editing_id = None

    def load(self, event: SnackEvent) -> None:
        self.draft = SnackDraft.from_event(event)
        self._editing_id = event.id

    def add(self) -> SnackEvent:
        created = self.diary.add_snack(self.draft, self._stamp())
        self.reset()
        return created

    def update(self) -> SnackEvent:
        if self._editing_id is None:
            raise InvalidEditStateError()
        updated = self.diary.update_snack(self._editing_id, self.draft)
        self.reset()
        return updated

    def delete(self, snack_id: UUID) -> None:
        self.diary.delete_snack(snack_id)
