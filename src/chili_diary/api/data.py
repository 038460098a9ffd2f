"""Export, import and wipe endpoints for the whole diary document."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, Response
from fastapi.concurrency import run_in_threadpool

if TYPE_CHECKING:
    from chili_diary.containers import AppContainer

router = APIRouter(prefix="/data", tags=["data"])

_logger = logging.getLogger(__name__)


@router.get("/export")
async def export_data(request: Request) -> Response:
    """Return the current store document as JSON bytes."""
    container: AppContainer = request.app.state.container
    return Response(
        content=container.store.export_data(), media_type="application/json"
    )


@router.post("/import")
async def import_data(request: Request, replace: bool = True) -> dict[str, object]:
    """Load a store document, replacing or merging with the current records."""
    container: AppContainer = request.app.state.container
    store = container.store
    body = await request.body()
    await run_in_threadpool(store.import_data, body, replace=replace)
    _logger.info(
        "Imported diary document: replace=%s meals=%s snacks=%s",
        replace,
        len(store.meals),
        len(store.snacks),
    )
    return {
        "status": "ok",
        "meals": len(store.meals),
        "snacks": len(store.snacks),
        "insights": len(store.insights),
    }


@router.delete("")
async def wipe_data(request: Request) -> dict[str, str]:
    """Remove every meal, snack and insight."""
    container: AppContainer = request.app.state.container
    await run_in_threadpool(container.store.wipe_all)
    _logger.info("Wiped diary data")
    return {"status": "ok"}
