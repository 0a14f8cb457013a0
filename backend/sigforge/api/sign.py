"""GET /api/sign — render a signature as SVG, JSON paths, PNG or animated GIF."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response

from sigforge.config import Settings
from sigforge.dependencies import get_font_provider, get_settings, get_stroke_source
from sigforge.engine.glyphs import extract_paths
from sigforge.engine.query import id_prefix_from_query, sign_api_url, style_from_query
from sigforge.engine.raster import RasterExportError, export_gif, export_still
from sigforge.engine.synthesizer import RenderMode, synthesize
from sigforge.fonts.provider import FontLoadError, FontProvider
from sigforge.models.responses import PathsResponse
from sigforge.strokes.source import HanziStrokeSource

logger = logging.getLogger(__name__)

router = APIRouter()

_CACHE_HEADERS = {"Cache-Control": "s-maxage=86400, immutable"}

_MEDIA_TYPES = {
    "svg": "image/svg+xml; charset=utf-8",
    "png": "image/png",
    "gif": "image/gif",
}


def _int_param(value: str | None) -> int | None:
    if not value:
        return None
    try:
        v = int(value)
    except ValueError:
        return None
    return v if v > 0 else None


def _float_param(value: str | None, default: float) -> float:
    if not value:
        return default
    try:
        v = float(value)
    except ValueError:
        return default
    return v if 0 < v <= 60 else default


@router.get("/sign")
async def sign(
    request: Request,
    fonts: FontProvider = Depends(get_font_provider),
    strokes: HanziStrokeSource = Depends(get_stroke_source),
    settings: Settings = Depends(get_settings),
) -> Response:
    params = request.query_params
    fmt = params.get("format") or "svg"

    try:
        style = style_from_query(params)
        face = await fonts.load(style.font)
        extraction = await extract_paths(face, style, strokes)

        if not extraction.records:
            return Response("No paths generated", status_code=400)

        records, window = extraction.records, extraction.window

        if fmt == "json":
            body = PathsResponse(
                paths=[r.to_dict() for r in records],
                viewBox=window.to_dict(),
                shareUrl=sign_api_url(style, origin=str(request.base_url)),
            )
            return JSONResponse(body.model_dump(), headers=_CACHE_HEADERS)

        width = _int_param(params.get("width"))
        height = _int_param(params.get("height"))

        if fmt == "gif":
            data = await export_gif(
                records,
                window,
                style,
                fps=_float_param(params.get("fps"), settings.gif_fps),
                width=width,
                height=height,
                max_side=settings.max_raster_side,
                max_frames=settings.max_gif_frames,
            )
            return Response(data, media_type=_MEDIA_TYPES["gif"], headers=_CACHE_HEADERS)

        if fmt == "png":
            data = await export_still(
                records, window, style, fmt="png", width=width, height=height,
                max_side=settings.max_raster_side,
            )
            return Response(data, media_type=_MEDIA_TYPES["png"], headers=_CACHE_HEADERS)

        mode = RenderMode.STATIC if params.get("static") in ("1", "true") else RenderMode.ANIMATED
        id_prefix = id_prefix_from_query(params.get("idPrefix"))
        svg = synthesize(records, window, style, mode=mode, id_prefix=id_prefix)
        return Response(svg, media_type=_MEDIA_TYPES["svg"], headers=_CACHE_HEADERS)

    except FontLoadError as e:
        logger.error("Font load failed: %s", e)
        return Response("Failed to load font", status_code=502)
    except RasterExportError:
        logger.exception("Raster export failed")
        return Response("Failed to render image", status_code=500)
    except Exception:
        logger.exception("Error in /api/sign")
        return Response("Failed to generate signature", status_code=500)
