"""Validated writes of meals and snacks into the store."""

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from uuid import UUID

from chili_diary.domain.drafts import MealDraft, SnackDraft
from chili_diary.domain.errors import RecordNotFoundError
from chili_diary.domain.models import MealEntry, SnackEvent
from chili_diary.services.store import DiaryStore

_logger = logging.getLogger(__name__)


@dataclass
class DiaryService:
    """Turns drafts into stored records."""

    store: DiaryStore

    def get_meal(self, meal_id: UUID) -> MealEntry | None:
        return next((meal for meal in self.store.meals if meal.id == meal_id), None)

    def get_snack(self, snack_id: UUID) -> SnackEvent | None:
        return next(
            (snack for snack in self.store.snacks if snack.id == snack_id), None
        )

    def add_meal(self, draft: MealDraft, when: datetime) -> MealEntry:
        """Validate the draft and store it as a new meal."""
        created = self.store.add_meal(draft.to_entry(when))
        _logger.info("Logged meal: id=%s type=%s", created.id, created.type)
        return created

    def update_meal(
        self, meal_id: UUID, draft: MealDraft, when: datetime | None = None
    ) -> MealEntry:
        """Apply a validated draft to an existing meal."""
        draft.validate()
        current = self.get_meal(meal_id)
        if current is None:
            raise RecordNotFoundError(meal_id)
        updated = draft.apply_to(current)
        if when is not None:
            updated = replace(updated, date=when)
        self.store.update_meal(updated)
        return updated

    def delete_meal(self, meal_id: UUID) -> None:
        self.store.remove_meal(meal_id)

    def add_snack(self, draft: SnackDraft, when: datetime) -> SnackEvent:
        created = self.store.add_snack(draft.to_event(when))
        _logger.info("Logged snack: id=%s reason=%s", created.id, created.reason)
        return created

    def update_snack(
        self, snack_id: UUID, draft: SnackDraft, when: datetime | None = None
    ) -> SnackEvent:
        draft.validate()
        current = self.get_snack(snack_id)
        if current is None:
            raise RecordNotFoundError(snack_id)
        updated = draft.apply_to(current)
        if when is not None:
            updated = replace(updated, date=when)
        self.store.update_snack(updated)
        return updated

    def delete_snack(self, snack_id: UUID) -> None:
        self.store.remove_snack(snack_id)
