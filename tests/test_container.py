"""Tests for container wiring."""

from chili_diary.containers import build_container
from tests.conftest import make_meal


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)

    assert container.store is container.diary_service.store
    assert container.calendar.timezone == "UTC"
    assert settings.store_path.exists()
    container.close_resources()


def test_close_resources_flushes_pending_save(settings) -> None:
    container = build_container(settings)
    container.store.add_meal(make_meal(name="Late snack"))

    container.close_resources()

    reopened = build_container(settings)
    assert [meal.name for meal in reopened.store.meals] == ["Late snack"]
    reopened.close_resources()
