"""Shared test fixtures."""

import threading
import time
from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

import pytest

from chili_diary.adapters.json_file_repository import DocumentRepository
from chili_diary.config import Settings
from chili_diary.containers import AppContainer
from chili_diary.domain.calendar import Calendar
from chili_diary.domain.errors import WriteFailedError
from chili_diary.domain.models import (
    EnergyLevel,
    FlavorTag,
    MealEntry,
    MealType,
    SnackEvent,
    SnackReason,
)
from chili_diary.services.diary import DiaryService
from chili_diary.services.flavor_stats import FlavorStatsService
from chili_diary.services.insights import InsightsBoard
from chili_diary.services.stats import StatsService
from chili_diary.services.store import DiaryStore

# Wednesday; the Monday-first week runs 2024-03-11 .. 2024-03-17.
NOW = datetime(2024, 3, 13, 12, 0, tzinfo=UTC)

# Long enough that no debounced save fires on its own during a test.
SLOW_AUTOSAVE = 60.0


@dataclass
class InMemoryDocumentRepository(DocumentRepository):
    """In-memory store document for tests."""

    data: bytes | None = None
    writes: list[bytes] = field(default_factory=list)
    fail_writes: bool = False

    def read(self) -> bytes | None:
        return self.data

    def write(self, data: bytes) -> None:
        if self.fail_writes:
            raise WriteFailedError("disk full")
        self.writes.append(data)
        self.data = data


@dataclass
class SlowDocumentRepository(InMemoryDocumentRepository):
    """Repository whose writes take a while, to overlap saves."""

    delay_seconds: float = 0.3
    write_started: threading.Event = field(default_factory=threading.Event)

    def write(self, data: bytes) -> None:
        self.write_started.set()
        time.sleep(self.delay_seconds)
        super().write(data)


@dataclass
class FixedClock:
    """Clock returning a settable instant."""

    now: datetime = NOW

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


def make_meal(  # noqa: PLR0913
    name: str = "Soup",
    date: datetime = NOW,
    satiety: int = 3,
    energy: EnergyLevel = EnergyLevel.MEDIUM,
    flavors: tuple[FlavorTag, ...] = (),
    meal_type: MealType = MealType.MEAL,
    notes: str | None = None,
) -> MealEntry:
    return MealEntry(
        name=name,
        date=date,
        type=meal_type,
        satiety_level=satiety,
        energy_after=energy,
        flavor_tags=flavors,
        notes=notes,
    )


def make_snack(
    reason: SnackReason = SnackReason.HUNGER,
    date: datetime = NOW,
    hunger: int = 3,
    note: str | None = None,
) -> SnackEvent:
    return SnackEvent(reason=reason, date=date, hunger_level=hunger, note=note)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        store_path=tmp_path / "store.json",
        timezone="UTC",
        first_weekday=0,
        autosave_debounce_seconds=SLOW_AUTOSAVE,
    )


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def repository() -> InMemoryDocumentRepository:
    return InMemoryDocumentRepository()


@pytest.fixture
def store(repository: InMemoryDocumentRepository) -> Iterator[DiaryStore]:
    diary_store = DiaryStore(
        repository, Calendar(), autosave_delay_seconds=SLOW_AUTOSAVE
    )
    yield diary_store
    diary_store.close()


@pytest.fixture
def stats(store: DiaryStore, clock: FixedClock) -> StatsService:
    return StatsService(store, clock=clock)


@pytest.fixture
def container(
    settings: Settings,
    repository: InMemoryDocumentRepository,
    clock: FixedClock,
) -> Iterator[AppContainer]:
    calendar = Calendar()
    store = DiaryStore(
        repository, calendar, autosave_delay_seconds=SLOW_AUTOSAVE
    )
    stats_service = StatsService(store, clock=clock)
    insights_board = InsightsBoard(stats_service)

    def close_resources() -> None:
        insights_board.close()
        store.close()

    app_container = AppContainer(
        settings=settings,
        calendar=calendar,
        store=store,
        diary_service=DiaryService(store),
        stats_service=stats_service,
        flavor_stats_service=FlavorStatsService(stats_service),
        insights_board=insights_board,
        close_resources=close_resources,
    )
    yield app_container
    close_resources()
