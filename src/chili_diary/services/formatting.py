"""Human-readable labels for diary values."""

from collections.abc import Sequence
from datetime import datetime

from chili_diary.domain.calendar import Calendar
from chili_diary.domain.models import FlavorTag, InsightItem
from chili_diary.services.stats import first_max

NO_VALUE = "-"


def energy_label(value: float) -> str:
    if value == 0:
        return NO_VALUE
    if value < 1.5:
        return "Low"
    if value < 2.5:
        return "Medium"
    return "High"


def satiety_label(value: float) -> str:
    if value == 0:
        return NO_VALUE
    if value < 2.0:
        return "Low"
    if value < 4.0:
        return "Medium"
    return "High"


def hunger_label(value: float) -> str:
    if value == 0:
        return NO_VALUE
    if value < 2.0:
        return "Light"
    if value < 4.0:
        return "Moderate"
    return "Strong"


def percent_text(ratio: float) -> str:
    return f"{round(ratio * 100)}%"


def top_flavor_text(flavor_ratios: dict[FlavorTag, float]) -> str:
    top = first_max({tag: flavor_ratios.get(tag, 0.0) for tag in FlavorTag})
    if top is None:
        return NO_VALUE
    return f"{top.title} {percent_text(flavor_ratios[top])}"


def insight_summary(insights: Sequence[InsightItem]) -> str:
    if not insights:
        return "No insights yet"
    return ", ".join(item.title for item in insights)


def part_of_day(moment: datetime, calendar: Calendar) -> str:
    hour = calendar.hour(moment)
    if 5 <= hour < 12:
        return "Morning"
    if 12 <= hour < 17:
        return "Afternoon"
    if 17 <= hour < 22:
        return "Evening"
    return "Night"


def time_ago(moment: datetime, now: datetime) -> str:
    """Coarse relative time such as ``"5m ago"`` or ``"Yesterday"``."""
    diff = int((now - moment).total_seconds())
    if diff < 60:
        return f"{diff}s ago"
    if diff < 3600:
        return f"{diff // 60}m ago"
    if diff < 86400:
        return f"{diff // 3600}h ago"
    if diff < 172800:
        return "Yesterday"
    return f"{diff // 86400}d ago"
