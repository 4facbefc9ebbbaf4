"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from sashiko.config import Settings
from sashiko.dependencies import get_settings
from sashiko.models.responses import HealthResponse
from sashiko.pdf.paper import available_paper_sizes

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(settings: Settings = Depends(get_settings)) -> HealthResponse:
    return HealthResponse(
        status="ok",
        version="0.1.0",
        env=settings.sashiko_env,
        paper_sizes=available_paper_sizes(),
    )
