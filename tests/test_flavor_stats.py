"""Tests for the flavor statistics service."""

from datetime import timedelta

from chili_diary.domain.calendar import RangePreset
from chili_diary.domain.models import FlavorTag
from chili_diary.services.flavor_stats import FlavorStatsService
from tests.conftest import NOW, make_meal


def test_flavor_report_for_week(store, stats) -> None:
    store.add_meal(make_meal(flavors=(FlavorTag.SPICY, FlavorTag.SALTY)))
    store.add_meal(make_meal(flavors=(FlavorTag.SPICY,)))
    store.add_meal(
        make_meal(flavors=(FlavorTag.SOUR,), date=NOW - timedelta(days=1))
    )
    store.add_meal(make_meal(name="Water"))

    report = FlavorStatsService(stats).compute(RangePreset.THIS_WEEK)

    assert report.total_meals == 4
    assert report.top_flavor is FlavorTag.SPICY
    assert [(item.tag, item.count) for item in report.slices[:3]] == [
        (FlavorTag.SPICY, 2),
        (FlavorTag.SALTY, 1),
        (FlavorTag.SOUR, 1),
    ]
    assert report.slices[0].ratio == 0.5
    assert report.balance_text == "Balanced"
    assert [point.count for point in report.daily_trend] == [0, 1, 2, 0, 0, 0, 0]


def test_flavor_report_limited_to_selection(store, stats) -> None:
    store.add_meal(make_meal(flavors=(FlavorTag.SPICY, FlavorTag.SALTY)))
    store.add_meal(make_meal(flavors=(FlavorTag.SWEET,)))

    report = FlavorStatsService(stats).compute(
        RangePreset.TODAY, included={FlavorTag.SWEET, FlavorTag.BITTER}
    )

    assert [item.tag for item in report.slices] == [
        FlavorTag.SWEET,
        FlavorTag.BITTER,
    ]
    assert report.slices[0].ratio == 1.0
    assert report.balance_text == "Low variety"
    assert [point.count for point in report.daily_trend] == [1]


def test_flavor_report_without_meals(stats) -> None:
    report = FlavorStatsService(stats).compute(RangePreset.TODAY)

    assert report.total_meals == 0
    assert report.top_flavor is None
    assert report.balance_text == "No data"
    assert all(item.ratio == 0.0 for item in report.slices)
