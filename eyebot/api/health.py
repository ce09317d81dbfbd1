"""Health check."""

from __future__ import annotations

from fastapi import APIRouter, Request

from eyebot import __version__
from eyebot.engine.label_tables import LABEL_TABLES_VERSION
from eyebot.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(request: Request) -> HealthResponse:
    pool = getattr(request.app.state, "pool", None)
    return HealthResponse(
        status="ok" if pool is not None else "starting",
        version=__version__,
        overlays_loaded=len(pool) if pool is not None else 0,
        label_tables_version=LABEL_TABLES_VERSION,
    )
