"""Dependency container wiring for the application."""

from collections.abc import Callable
from dataclasses import dataclass

from chili_diary.adapters.json_file_repository import (
    DocumentRepository,
    JsonFileDocumentRepository,
)
from chili_diary.config import Settings
from chili_diary.domain.calendar import Calendar
from chili_diary.services.diary import DiaryService
from chili_diary.services.flavor_stats import FlavorStatsService
from chili_diary.services.insights import InsightsBoard
from chili_diary.services.stats import StatsService
from chili_diary.services.store import DiaryStore


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    calendar: Calendar
    store: DiaryStore
    diary_service: DiaryService
    stats_service: StatsService
    flavor_stats_service: FlavorStatsService
    insights_board: InsightsBoard
    close_resources: Callable[[], None]


def build_container(
    settings: Settings | None = None,
    repository: DocumentRepository | None = None,
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    calendar = Calendar(
        timezone=resolved_settings.timezone,
        first_weekday=resolved_settings.first_weekday,
    )
    repository = repository or JsonFileDocumentRepository(resolved_settings.store_path)
    store = DiaryStore(
        repository=repository,
        calendar=calendar,
        autosave_delay_seconds=resolved_settings.autosave_debounce_seconds,
    )
    stats_service = StatsService(store)
    insights_board = InsightsBoard(stats_service)

    def close_resources() -> None:
        insights_board.close()
        store.close()

    return AppContainer(
        settings=resolved_settings,
        calendar=calendar,
        store=store,
        diary_service=DiaryService(store),
        stats_service=stats_service,
        flavor_stats_service=FlavorStatsService(stats_service),
        insights_board=insights_board,
        close_resources=close_resources,
    )
