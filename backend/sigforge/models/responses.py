"""API response models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    fonts_available: int = 0


class PathsResponse(BaseModel):
    paths: list[dict[str, Any]] = Field(default_factory=list)
    viewBox: dict[str, float] = Field(default_factory=dict)
    shareUrl: str | None = None
