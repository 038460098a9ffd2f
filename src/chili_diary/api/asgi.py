"""ASGI entrypoint for the chili diary API."""

from chili_diary.api.app import create_app
from chili_diary.containers import build_container

app = create_app(build_container())
