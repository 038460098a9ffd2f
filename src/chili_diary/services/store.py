"""In-memory diary store mirrored to a single JSON document."""

import dataclasses
import logging
import threading
from collections.abc import Callable, Iterable
from datetime import datetime
from pathlib import Path
from uuid import UUID, uuid4

from chili_diary.adapters.json_file_repository import DocumentRepository, write_atomic
from chili_diary.adapters.store_document import (
    SCHEMA_VERSION,
    decode_snapshot,
    encode_snapshot,
)
from chili_diary.domain.calendar import Calendar, DateRange
from chili_diary.domain.errors import StoreError
from chili_diary.domain.models import DiarySnapshot, InsightItem, MealEntry, SnackEvent
from chili_diary.services.autosave import DebouncedSaver

_logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class DiaryStore:
    """Single source of truth for meals, snacks and insights.

    Meals and snacks are kept sorted ascending by date, insights descending.
    Every write bumps ``version``, notifies listeners synchronously and
    schedules a debounced save.
    """

    def __init__(
        self,
        repository: DocumentRepository,
        calendar: Calendar | None = None,
        autosave_delay_seconds: float = 0.6,
    ) -> None:
        self.repository = repository
        self.calendar = calendar or Calendar()
        self._lock = threading.RLock()
        self._write_lock = threading.Lock()
        self._meals: list[MealEntry] = []
        self._snacks: list[SnackEvent] = []
        self._insights: list[InsightItem] = []
        self._listeners: list[Listener] = []
        self._version = 0
        self._autosave = DebouncedSaver(self._write_current, autosave_delay_seconds)
        self._load()

    @property
    def meals(self) -> list[MealEntry]:
        with self._lock:
            return list(self._meals)

    @property
    def snacks(self) -> list[SnackEvent]:
        with self._lock:
            return list(self._snacks)

    @property
    def insights(self) -> list[InsightItem]:
        with self._lock:
            return list(self._insights)

    @property
    def version(self) -> int:
        return self._version

    def snapshot(self) -> DiarySnapshot:
        with self._lock:
            return DiarySnapshot(
                meals=tuple(self._meals),
                snacks=tuple(self._snacks),
                insights=tuple(self._insights),
            )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener and return a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # Meals

    def add_meal(self, entry: MealEntry) -> MealEntry:
        """Insert a meal, issuing a fresh id if the given one is taken."""
        with self._lock:
            if any(meal.id == entry.id for meal in self._meals):
                entry = dataclasses.replace(entry, id=uuid4())
            self._meals.append(entry)
            self._sort_meals()
        self._changed()
        return entry

    def update_meal(self, entry: MealEntry) -> None:
        with self._lock:
            index = _index_of(self._meals, entry.id)
            if index is None:
                return
            self._meals[index] = entry
            self._sort_meals()
        self._changed()

    def remove_meal(self, meal_id: UUID) -> None:
        with self._lock:
            remaining = [meal for meal in self._meals if meal.id != meal_id]
            if len(remaining) == len(self._meals):
                return
            self._meals = remaining
        self._changed()

    # Snacks

    def add_snack(self, event: SnackEvent) -> SnackEvent:
        """Insert a snack, issuing a fresh id if the given one is taken."""
        with self._lock:
            if any(snack.id == event.id for snack in self._snacks):
                event = dataclasses.replace(event, id=uuid4())
            self._snacks.append(event)
            self._sort_snacks()
        self._changed()
        return event

    def update_snack(self, event: SnackEvent) -> None:
        with self._lock:
            index = _index_of(self._snacks, event.id)
            if index is None:
                return
            self._snacks[index] = event
            self._sort_snacks()
        self._changed()

    def remove_snack(self, snack_id: UUID) -> None:
        with self._lock:
            remaining = [snack for snack in self._snacks if snack.id != snack_id]
            if len(remaining) == len(self._snacks):
                return
            self._snacks = remaining
        self._changed()

    # Insights

    def add_insight(self, item: InsightItem) -> InsightItem:
        with self._lock:
            if any(existing.id == item.id for existing in self._insights):
                item = dataclasses.replace(item, id=uuid4())
            self._insights.append(item)
            self._sort_insights()
        self._changed()
        return item

    def remove_insight(self, insight_id: UUID) -> None:
        with self._lock:
            remaining = [item for item in self._insights if item.id != insight_id]
            if len(remaining) == len(self._insights):
                return
            self._insights = remaining
        self._changed()

    # Queries

    def meals_in(self, date_range: DateRange) -> list[MealEntry]:
        with self._lock:
            return [meal for meal in self._meals if date_range.contains(meal.date)]

    def snacks_in(self, date_range: DateRange) -> list[SnackEvent]:
        with self._lock:
            return [
                snack for snack in self._snacks if date_range.contains(snack.date)
            ]

    def meals_on(self, day: datetime) -> list[MealEntry]:
        return self.meals_in(self.calendar.day_interval(day))

    def snacks_on(self, day: datetime) -> list[SnackEvent]:
        return self.snacks_in(self.calendar.day_interval(day))

    # Export / import

    def export_data(self) -> bytes:
        """Encode the current state; equal state always yields equal bytes."""
        return encode_snapshot(self.snapshot(), SCHEMA_VERSION)

    def export_to(self, path: Path) -> None:
        write_atomic(path, self.export_data())

    def import_data(self, data: bytes, replace: bool = True) -> None:
        """Load a store document, replacing or merging, then save immediately.

        Merging only appends records whose id is not present yet. Within the
        incoming document the first record with a given id wins.
        """
        incoming = decode_snapshot(data)
        with self._lock:
            if replace:
                self._meals = []
                self._snacks = []
                self._insights = []
            self._merge(incoming)
            self._sort_meals()
            self._sort_snacks()
            self._sort_insights()
            self._bump()
        try:
            self.save_now()
        finally:
            self._notify()

    def wipe_all(self) -> None:
        with self._lock:
            self._meals = []
            self._snacks = []
            self._insights = []
            self._bump()
        try:
            self.save_now()
        finally:
            self._notify()

    # Saving

    def save_now(self) -> None:
        """Write the current state synchronously; raises StoreError on failure."""
        self._autosave.cancel()
        self._write_current()

    def flush(self) -> None:
        """Run a pending debounced save right away."""
        self._autosave.flush()

    def close(self) -> None:
        self.flush()
        self._autosave.cancel()

    # Internals

    def _load(self) -> None:
        data = self.repository.read()
        if data is None:
            _logger.info("No diary document found; starting empty")
            try:
                self.save_now()
            except StoreError:
                _logger.warning("Failed to write initial diary document", exc_info=True)
            return
        try:
            snapshot = decode_snapshot(data)
        except StoreError:
            _logger.warning(
                "Diary document is unreadable; starting empty", exc_info=True
            )
            return
        self._merge(snapshot)
        self._sort_meals()
        self._sort_snacks()
        self._sort_insights()

    def _merge(self, incoming: DiarySnapshot) -> None:
        _append_new(self._meals, incoming.meals)
        _append_new(self._snacks, incoming.snacks)
        _append_new(self._insights, incoming.insights)

    def _sort_meals(self) -> None:
        self._meals.sort(key=lambda meal: meal.date)

    def _sort_snacks(self) -> None:
        self._snacks.sort(key=lambda snack: snack.date)

    def _sort_insights(self) -> None:
        self._insights.sort(key=lambda item: item.date, reverse=True)

    def _bump(self) -> None:
        self._version += 1

    def _changed(self) -> None:
        with self._lock:
            self._bump()
        self._autosave.trigger()
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()

    def _write_current(self) -> None:
        # Encode inside the lock; the last writer always carries the latest state.
        with self._write_lock:
            self.repository.write(self.export_data())


def _index_of(records: list, record_id: UUID) -> int | None:
    for index, record in enumerate(records):
        if record.id == record_id:
            return index
    return None


def _append_new(target: list, records: Iterable) -> None:
    """Append records whose id is not in ``target`` yet, first occurrence wins."""
    seen = {record.id for record in target}
    for record in records:
        if record.id in seen:
            continue
        seen.add(record.id)
        target.append(record)
