"""Statistics endpoints."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Query, Request

from chili_diary.api.schemas import as_utc, range_kind
from chili_diary.domain.calendar import DateRangeKind  # noqa: TC001
from chili_diary.domain.models import FlavorTag
from chili_diary.services.formatting import (
    energy_label,
    hunger_label,
    satiety_label,
    top_flavor_text,
)
from chili_diary.services.highlights import balance_summary, snack_reason_ranking
from chili_diary.services.queries import TimeBucket, energy_averages

if TYPE_CHECKING:
    from chili_diary.containers import AppContainer

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("/daily")
async def daily_stats(
    request: Request, day: datetime | None = None
) -> dict[str, object]:
    """Return the summary for one calendar day, today by default."""
    container: AppContainer = request.app.state.container
    stats = container.stats_service
    summary = stats.make_daily_summary(as_utc(day) if day else stats.clock())
    return {
        "summary": summary,
        "satiety_label": satiety_label(summary.avg_satiety),
        "energy_label": energy_label(summary.avg_energy),
    }


@router.get("/weekly")
async def weekly_stats(
    request: Request, kind: DateRangeKind = Depends(range_kind)
) -> dict[str, object]:
    """Return totals, averages and flavor/reason shares for a range."""
    container: AppContainer = request.app.state.container
    weekly = container.stats_service.make_weekly_stats(kind)
    snacks = container.store.snacks_in(weekly.range)
    return {
        "stats": weekly,
        "top_flavor": top_flavor_text(weekly.flavor_ratios),
        "balance": balance_summary(weekly.flavor_ratios),
        "hunger_label": hunger_label(weekly.avg_hunger),
        "snack_reasons": snack_reason_ranking(snacks),
    }


@router.get("/trends")
async def trends(
    request: Request, kind: DateRangeKind = Depends(range_kind)
) -> dict[str, object]:
    """Return one point per calendar day for satiety, energy and hunger."""
    container: AppContainer = request.app.state.container
    stats = container.stats_service
    return {
        "satiety": stats.satiety_trend(kind),
        "energy": stats.energy_trend(kind),
        "hunger": stats.hunger_trend(kind),
    }


@router.get("/flavors")
async def flavor_stats(
    request: Request,
    kind: DateRangeKind = Depends(range_kind),
    flavors: list[FlavorTag] = Query(default=[]),
) -> dict[str, object]:
    """Return the flavor breakdown, limited to ``flavors`` when given."""
    container: AppContainer = request.app.state.container
    report = container.flavor_stats_service.compute(kind, included=flavors or None)
    return {"report": report}


@router.get("/energy")
async def energy_by_time_of_day(
    request: Request, kind: DateRangeKind = Depends(range_kind)
) -> dict[str, object]:
    """Return the energy profile for each part of the day."""
    container: AppContainer = request.app.state.container
    meals = container.store.meals_in(container.stats_service.resolve(kind))
    return {
        "buckets": {
            bucket: energy_averages(bucket, meals, container.calendar)
            for bucket in TimeBucket
        }
    }
