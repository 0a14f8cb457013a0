"""Glyph extractor — text + font + optional stroke data → ordered PathRecords.

Glyphs are placed left to right on a fixed baseline. A CJK character with
stroke data (when stroke mode is on) becomes one record per brush stroke;
everything else becomes one outline record per glyph.
"""

from __future__ import annotations

import asyncio
import logging
import math
import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol

from sigforge.engine.layout import BASELINE_Y, ORIGIN_X, BoundsAccumulator
from sigforge.models.paths import STROKE_UNITS, PathRecord, ViewWindow
from sigforge.models.style import StyleConfig
from sigforge.svg.measure import measure_path, path_length
from sigforge.utils.math_helpers import clamp, finite_or

logger = logging.getLogger(__name__)

DEFAULT_FONT_SIZE = 120.0
DEFAULT_UNITS_PER_EM = 1000.0

# CJK Unified Ideographs covered by the stroke data set
_CJK_RE = re.compile(r"[\u4e00-\u9fa5]")


def is_cjk(char: str) -> bool:
    return bool(char) and _CJK_RE.fullmatch(char) is not None


@dataclass(frozen=True)
class GlyphOutline:
    d: str
    # (xmin, ymin, xmax, ymax) in document units; None → measured from `d`
    bbox: tuple[float, float, float, float] | None = None


class ShapedGlyph(Protocol):
    advance_width: float

    def outline_to_path(self, x: float, y: float, font_size: float) -> GlyphOutline: ...


class FontFace(Protocol):
    units_per_em: float

    def shape(self, text: str) -> Sequence[ShapedGlyph]: ...


class StrokeSource(Protocol):
    async def lookup(self, char: str) -> list[str] | None: ...


@dataclass
class Extraction:
    records: list[PathRecord] = field(default_factory=list)
    window: ViewWindow | None = None
    # Cursor position after the last glyph
    cursor: float = ORIGIN_X


async def _safe_lookup(source: StrokeSource, char: str) -> list[str] | None:
    try:
        return await source.lookup(char)
    except Exception as e:
        logger.warning("Stroke lookup failed for %r, using outline: %s", char, e)
        return None


async def prefetch_strokes(source: StrokeSource, text: str) -> dict[str, list[str] | None]:
    """Look up every distinct CJK character of `text` concurrently."""
    wanted = sorted({c for c in text if is_cjk(c)})
    if not wanted:
        return {}
    results = await asyncio.gather(*(_safe_lookup(source, c) for c in wanted))
    return dict(zip(wanted, results))


def _stroke_records(
    strokes: Sequence[str],
    index: int,
    x: float,
    font_size: float,
) -> list[PathRecord] | None:
    """One record per stroke, or None if any stroke cannot be measured."""
    scale = font_size / STROKE_UNITS
    records: list[PathRecord] = []
    for k, d in enumerate(strokes):
        try:
            length = path_length(d, scale=scale)
        except Exception as e:
            logger.warning("Unmeasurable stroke %d of char #%d: %s", k, index, e)
            return None
        records.append(PathRecord(
            d=d,
            length=length,
            index=index,
            is_stroke=True,
            x=x,
            font_size=font_size,
            stroke_index=k,
            total_strokes=len(strokes),
        ))
    return records


def _outline_record(
    glyph: ShapedGlyph,
    index: int,
    x: float,
    font_size: float,
    bounds: BoundsAccumulator,
) -> PathRecord | None:
    outline = glyph.outline_to_path(x, BASELINE_Y, font_size)
    if not outline.d or not outline.d.strip():
        return None
    try:
        metrics = measure_path(outline.d)
    except Exception as e:
        logger.warning("Skipping glyph #%d with unparseable outline: %s", index, e)
        return None

    box = outline.bbox or metrics.bbox
    if box is not None:
        bounds.add(*box)
    return PathRecord(d=outline.d, length=float(math.ceil(metrics.length)), index=index)


async def extract_paths(
    face: FontFace,
    style: StyleConfig,
    strokes: StrokeSource | None = None,
) -> Extraction:
    """Lay out `style.text` and emit PathRecords in character-then-stroke order.

    Zero records (nothing drawable) is a valid result; the window then falls
    back to the default 100×100 box.
    """
    font_size = finite_or(style.font_size, DEFAULT_FONT_SIZE, minimum=0)
    units_per_em = finite_or(face.units_per_em, DEFAULT_UNITS_PER_EM, minimum=0)
    spacing = clamp(finite_or(style.char_spacing, 0.0) / 100, -1.0, 1.0)
    unit_scale = font_size / units_per_em

    chars = list(style.text)
    stroke_data: dict[str, list[str] | None] = {}
    if style.use_hanzi_data and strokes is not None:
        stroke_data = await prefetch_strokes(strokes, style.text)

    bounds = BoundsAccumulator()
    records: list[PathRecord] = []
    cursor = ORIGIN_X

    for i, glyph in enumerate(face.shape(style.text)):
        char = chars[i] if i < len(chars) else ""

        emitted = None
        stroke_list = stroke_data.get(char)
        if stroke_list:
            emitted = _stroke_records(stroke_list, i, cursor, font_size)
        if emitted:
            records.extend(emitted)
            bounds.add_cell(cursor, BASELINE_Y, font_size)
        else:
            record = _outline_record(glyph, i, cursor, font_size, bounds)
            if record is not None:
                records.append(record)

        advance = finite_or(glyph.advance_width, 0.0) * unit_scale * (1 + spacing)
        cursor += max(advance, 0.0)

    logger.debug("Extracted %d paths from %d chars", len(records), len(chars))
    return Extraction(records=records, window=bounds.to_window(), cursor=cursor)
