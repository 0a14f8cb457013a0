"""Raster exporter — CairoSVG renders, Pillow encodes.

Animated GIFs are built by sampling the animation at a fixed frame rate and
rasterizing a static-equivalent document per timestamp. Frames are rendered
strictly one after another; any failure aborts the whole export.
"""

from __future__ import annotations

import asyncio
import io
import logging
import math
from collections.abc import Sequence
from functools import partial

import cairosvg
from PIL import Image

from sigforge.engine.synthesizer import (
    RenderMode,
    canvas_for,
    synthesize,
    synthesize_frame,
)
from sigforge.engine.timing import allocate_timing, total_duration
from sigforge.models.paths import PathRecord, ViewWindow
from sigforge.models.style import StyleConfig
from sigforge.utils.math_helpers import finite_or

logger = logging.getLogger(__name__)

DEFAULT_FPS = 30.0
# Longest output side in pixels
MAX_SIDE = 800
# Animated frames per GIF; longer animations are sampled at a lower rate
MAX_FRAMES = 300
# Seconds the finished signature stays on screen before the GIF loops
DEFAULT_HOLD_S = 1.0

STILL_FORMATS = ("png", "gif")


class RasterExportError(RuntimeError):
    """Rasterization or encoding failed; no partial output exists."""


def output_size(
    canvas_w: float,
    canvas_h: float,
    width: int | None = None,
    height: int | None = None,
    max_side: int = MAX_SIDE,
) -> tuple[int, int]:
    """Pixel size: explicit dimensions win, missing ones follow the canvas aspect.

    The result is scaled down (aspect preserved) so its longest side ≤ max_side.
    """
    aspect = canvas_w / canvas_h if canvas_w > 0 and canvas_h > 0 else 1.0
    if width and height:
        w, h = float(width), float(height)
    elif width:
        w, h = float(width), width / aspect
    elif height:
        w, h = height * aspect, float(height)
    else:
        w, h = canvas_w, canvas_h

    longest = max(w, h)
    if longest > max_side:
        scale = max_side / longest
        w, h = w * scale, h * scale
    return max(1, round(w)), max(1, round(h))


def _render_png(svg: str, width: int, height: int) -> bytes:
    return cairosvg.svg2png(
        bytestring=svg.encode("utf-8"),
        output_width=width,
        output_height=height,
    )


async def rasterize(svg: str, width: int, height: int) -> Image.Image:
    """Render one document to an RGBA image off the event loop."""
    loop = asyncio.get_running_loop()
    try:
        png = await loop.run_in_executor(None, partial(_render_png, svg, width, height))
        image = Image.open(io.BytesIO(png)).convert("RGBA")
    except Exception as e:
        raise RasterExportError(f"Rasterization failed: {e}") from e
    if image.size != (width, height):
        image = image.resize((width, height), Image.Resampling.LANCZOS)
    return image


def encode_gif(frames: Sequence[Image.Image], durations_ms: Sequence[float]) -> bytes:
    """Looping GIF with transparency; one duration per frame."""
    if not frames:
        raise RasterExportError("No frames to encode")
    buf = io.BytesIO()
    try:
        frames[0].save(
            buf,
            format="GIF",
            save_all=True,
            append_images=list(frames[1:]),
            duration=[round(d) for d in durations_ms],
            loop=0,
            disposal=2,
        )
    except Exception as e:
        raise RasterExportError(f"GIF encoding failed: {e}") from e
    return buf.getvalue()


async def export_gif(
    records: Sequence[PathRecord],
    window: ViewWindow,
    style: StyleConfig,
    fps: float = DEFAULT_FPS,
    width: int | None = None,
    height: int | None = None,
    hold: float = DEFAULT_HOLD_S,
    max_side: int = MAX_SIDE,
    max_frames: int = MAX_FRAMES,
) -> bytes:
    """Animated GIF of the draw-in, ending on the finished signature."""
    fps = finite_or(fps, DEFAULT_FPS, minimum=0)
    timings = allocate_timing(records, style.speed)
    duration = total_duration(records, style.speed)
    max_frames = max(1, max_frames)
    if duration * fps > max_frames:
        capped = max_frames / duration
        logger.info("GIF export: %.2fs at %.0f fps exceeds %d frames, sampling at %.2f fps",
                    duration, fps, max_frames, capped)
        fps = capped
    frame_count = min(math.ceil(duration * fps), max_frames)

    canvas = canvas_for(window, style)
    size = output_size(canvas.width, canvas.height, width, height, max_side)
    frame_ms = 1000.0 / fps

    logger.info(
        "GIF export: %d frames at %.0f fps, %.2fs, %d×%d",
        frame_count, fps, duration, size[0], size[1],
    )

    frames: list[Image.Image] = []
    durations: list[float] = []
    for i in range(frame_count):
        svg = synthesize_frame(records, window, style, timings, i / fps, id_prefix=f"frame{i}-")
        frames.append(await rasterize(svg, *size))
        durations.append(frame_ms)
        logger.debug("Rendered frame %d/%d", i + 1, frame_count)

    if hold > 0 or not frames:
        final = synthesize(records, window, style, mode=RenderMode.STATIC, id_prefix="final-")
        frames.append(await rasterize(final, *size))
        durations.append(max(hold * 1000.0, frame_ms))

    return encode_gif(frames, durations)


async def export_still(
    records: Sequence[PathRecord],
    window: ViewWindow,
    style: StyleConfig,
    fmt: str = "png",
    width: int | None = None,
    height: int | None = None,
    max_side: int = MAX_SIDE,
) -> bytes:
    """Single raster of the static (fully drawn) document."""
    if fmt not in STILL_FORMATS:
        raise ValueError(f"Unsupported still format: {fmt}")

    canvas = canvas_for(window, style)
    size = output_size(canvas.width, canvas.height, width, height, max_side)

    svg = synthesize(records, window, style, mode=RenderMode.STATIC)
    image = await rasterize(svg, *size)
    if fmt == "gif":
        return encode_gif([image], [0])

    buf = io.BytesIO()
    try:
        image.save(buf, format="PNG")
    except Exception as e:
        raise RasterExportError(f"PNG encoding failed: {e}") from e
    return buf.getvalue()
