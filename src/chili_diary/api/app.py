"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from uuid import UUID

from fastapi import Depends, FastAPI, Query, Request, status
from fastapi.responses import JSONResponse

from chili_diary.api.data import router as data_router
from chili_diary.api.schemas import MealPayload, SnackPayload, range_kind
from chili_diary.api.stats import router as stats_router
from chili_diary.app_logging import configure_logging
from chili_diary.containers import AppContainer
from chili_diary.domain.calendar import DateRangeKind
from chili_diary.domain.errors import (
    DecodeFailedError,
    RecordNotFoundError,
    StoreError,
    ValidationError,
)
from chili_diary.domain.models import EnergyLevel, FlavorTag, MealType, SnackReason
from chili_diary.services.formatting import insight_summary
from chili_diary.services.insights import build_insights_report
from chili_diary.services.queries import (
    MealFilters,
    MealSortKey,
    SnackFilters,
    SnackSortKey,
    filter_meals,
    filter_snacks,
    group_meals_by_day,
    group_snacks_by_day,
    sort_meals,
    sort_snacks,
)


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(stats_router)
    app.include_router(data_router)

    @app.exception_handler(RecordNotFoundError)
    async def not_found(request: Request, exc: RecordNotFoundError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)}
        )

    @app.exception_handler(ValidationError)
    async def invalid_input(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": str(exc)},
        )

    @app.exception_handler(DecodeFailedError)
    async def unreadable_document(
        request: Request, exc: DecodeFailedError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": "Could not read diary document."},
        )

    @app.exception_handler(StoreError)
    async def store_failure(request: Request, exc: StoreError) -> JSONResponse:
        logger.error("Diary store failure on %s", request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Failed to save diary."},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/meals")
    async def list_meals(  # noqa: PLR0913
        request: Request,
        kind: DateRangeKind = Depends(range_kind),
        flavors: list[FlavorTag] = Query(default=[]),
        types: list[MealType] = Query(default=[]),
        min_satiety: int | None = None,
        energy: list[EnergyLevel] = Query(default=[]),
        search: str = "",
        sort: MealSortKey = MealSortKey.BY_TIME_ASC,
    ) -> dict[str, object]:
        """Return meals in a range that pass every given filter."""
        state_container: AppContainer = request.app.state.container
        filters = MealFilters(
            range_kind=kind,
            flavors=set(flavors),
            types=set(types),
            min_satiety=min_satiety,
            energy_in=set(energy),
            search=search,
        )
        meals = filter_meals(
            state_container.store.meals,
            filters,
            state_container.calendar,
            now=state_container.stats_service.clock(),
        )
        return {"meals": sort_meals(meals, sort)}

    @app.post("/meals", status_code=status.HTTP_201_CREATED)
    async def create_meal(payload: MealPayload, request: Request) -> dict[str, object]:
        """Log a new meal, stamped now unless a date is given."""
        state_container: AppContainer = request.app.state.container
        when = payload.date or state_container.stats_service.clock()
        meal = state_container.diary_service.add_meal(payload.to_draft(), when)
        return {"meal": meal}

    @app.put("/meals/{meal_id}")
    async def update_meal(
        meal_id: UUID, payload: MealPayload, request: Request
    ) -> dict[str, object]:
        """Replace the editable fields of a meal."""
        state_container: AppContainer = request.app.state.container
        meal = state_container.diary_service.update_meal(
            meal_id, payload.to_draft(), when=payload.date
        )
        return {"meal": meal}

    @app.delete("/meals/{meal_id}")
    async def delete_meal(meal_id: UUID, request: Request) -> dict[str, str]:
        state_container: AppContainer = request.app.state.container
        diary = state_container.diary_service
        if diary.get_meal(meal_id) is None:
            raise RecordNotFoundError(meal_id)
        diary.delete_meal(meal_id)
        return {"status": "ok"}

    @app.get("/snacks")
    async def list_snacks(
        request: Request,
        kind: DateRangeKind = Depends(range_kind),
        reasons: list[SnackReason] = Query(default=[]),
        min_hunger: int | None = None,
        search: str = "",
        sort: SnackSortKey = SnackSortKey.BY_TIME_ASC,
    ) -> dict[str, object]:
        """Return snacks in a range that pass every given filter."""
        state_container: AppContainer = request.app.state.container
        filters = SnackFilters(
            range_kind=kind,
            reasons=set(reasons),
            min_hunger=min_hunger,
            search=search,
        )
        snacks = filter_snacks(
            state_container.store.snacks,
            filters,
            state_container.calendar,
            now=state_container.stats_service.clock(),
        )
        return {"snacks": sort_snacks(snacks, sort)}

    @app.post("/snacks", status_code=status.HTTP_201_CREATED)
    async def create_snack(
        payload: SnackPayload, request: Request
    ) -> dict[str, object]:
        """Log a new snack, stamped now unless a date is given."""
        state_container: AppContainer = request.app.state.container
        when = payload.date or state_container.stats_service.clock()
        snack = state_container.diary_service.add_snack(payload.to_draft(), when)
        return {"snack": snack}

    @app.put("/snacks/{snack_id}")
    async def update_snack(
        snack_id: UUID, payload: SnackPayload, request: Request
    ) -> dict[str, object]:
        state_container: AppContainer = request.app.state.container
        snack = state_container.diary_service.update_snack(
            snack_id, payload.to_draft(), when=payload.date
        )
        return {"snack": snack}

    @app.delete("/snacks/{snack_id}")
    async def delete_snack(snack_id: UUID, request: Request) -> dict[str, str]:
        state_container: AppContainer = request.app.state.container
        diary = state_container.diary_service
        if diary.get_snack(snack_id) is None:
            raise RecordNotFoundError(snack_id)
        diary.delete_snack(snack_id)
        return {"status": "ok"}

    @app.get("/days")
    async def list_days(
        request: Request, kind: DateRangeKind = Depends(range_kind)
    ) -> dict[str, object]:
        """Return meals and snacks grouped by calendar day, oldest day first."""
        state_container: AppContainer = request.app.state.container
        store = state_container.store
        calendar = state_container.calendar
        date_range = state_container.stats_service.resolve(kind)
        meals = dict(group_meals_by_day(store.meals_in(date_range), calendar))
        snacks = dict(group_snacks_by_day(store.snacks_in(date_range), calendar))
        return {
            "days": [
                {
                    "day": day,
                    "meals": meals.get(day, []),
                    "snacks": snacks.get(day, []),
                }
                for day in sorted(meals.keys() | snacks.keys())
            ]
        }

    @app.get("/insights")
    async def insights(
        request: Request, kind: DateRangeKind = Depends(range_kind)
    ) -> dict[str, object]:
        """Return the insights report for a range."""
        state_container: AppContainer = request.app.state.container
        board = state_container.insights_board
        if kind == board.range_kind:
            report = board.report
        else:
            report = build_insights_report(state_container.stats_service, kind)
        logger.debug("Serving insights: %s", insight_summary(report.insights))
        return {"report": report}

    return app
