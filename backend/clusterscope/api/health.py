"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from clusterscope.config import Settings
from clusterscope.dependencies import get_settings
from clusterscope.engine.registry import get_registry
from clusterscope.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(settings: Settings = Depends(get_settings)) -> HealthResponse:
    return HealthResponse(
        status="ok",
        version="0.1.0",
        derivations_registered=get_registry().count,
        datasets=list(settings.datasets),
    )
