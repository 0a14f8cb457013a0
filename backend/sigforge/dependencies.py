"""FastAPI dependency injection."""

from __future__ import annotations

from functools import lru_cache

from sigforge.config import settings
from sigforge.fonts.provider import FontProvider
from sigforge.strokes.cache import StrokeCache
from sigforge.strokes.source import HanziStrokeSource


def get_settings():
    return settings


@lru_cache(maxsize=1)
def get_font_provider() -> FontProvider:
    return FontProvider(font_dir=settings.font_dir or None, timeout=settings.font_timeout_s)


@lru_cache(maxsize=1)
def get_stroke_source() -> HanziStrokeSource:
    return HanziStrokeSource(
        cache=StrokeCache(max_size=settings.stroke_cache_size),
        url_template=settings.stroke_data_url,
        timeout=settings.stroke_timeout_s,
    )
