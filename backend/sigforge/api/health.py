"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from sigforge.dependencies import get_font_provider
from sigforge.fonts.provider import FontProvider
from sigforge.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(fonts: FontProvider = Depends(get_font_provider)) -> HealthResponse:
    return HealthResponse(
        status="ok",
        version="0.1.0",
        fonts_available=len(fonts.available()),
    )
