"""Domain models for derived statistics."""

from dataclasses import dataclass
from datetime import datetime

from chili_diary.domain.calendar import DateRange
from chili_diary.domain.models import FlavorTag, InsightItem, SnackReason


@dataclass(frozen=True)
class DailySummary:
    """Aggregates for the meals of one calendar day."""

    date: datetime
    total_meals: int
    avg_satiety: float
    avg_energy: float
    favorite_flavor: FlavorTag | None = None


@dataclass(frozen=True)
class WeeklyStats:
    """Aggregates for the meals and snacks of a date range."""

    range: DateRange
    total_meals: int
    total_snacks: int
    avg_satiety: float
    avg_energy: float
    avg_hunger: float
    flavor_ratios: dict[FlavorTag, float]
    reason_ratios: dict[SnackReason, float]


@dataclass(frozen=True)
class TrendPoint:
    """Daily value for a trend chart."""

    day: datetime
    value: float


@dataclass(frozen=True)
class NameCount:
    """How often a meal name occurs."""

    name: str
    count: int


@dataclass(frozen=True)
class ReasonRatio:
    """Share of snacks triggered by a reason."""

    reason: SnackReason
    count: int
    ratio: float


@dataclass(frozen=True)
class FlavorSlice:
    """Share of a flavor among the selected flavors."""

    tag: FlavorTag
    count: int
    ratio: float


@dataclass(frozen=True)
class DailyFlavorPoint:
    """Meals on a day that carry any selected flavor."""

    day: datetime
    count: int


@dataclass(frozen=True)
class FlavorStatsReport:
    """Flavor breakdown for a range."""

    range: DateRange
    total_meals: int
    slices: list[FlavorSlice]
    top_flavor: FlavorTag | None
    balance_text: str
    daily_trend: list[DailyFlavorPoint]


@dataclass(frozen=True)
class EnergyAverages:
    """Energy profile of the meals eaten in one time-of-day bucket."""

    meal_count: int
    average: float
    low: float
    medium: float
    high: float


@dataclass(frozen=True)
class InsightsReport:
    """Everything derived for the insights view of a range."""

    weekly: WeeklyStats
    insights: list[InsightItem]
    satiety_trend: list[TrendPoint]
    energy_trend: list[TrendPoint]
    hunger_trend: list[TrendPoint]
    top_energizing_meals: list[NameCount]
    top_heavy_meals: list[NameCount]
    top_snack_reasons: list[ReasonRatio]
    balance_summary: str
    insight_summary: str
