"""Composite document synthesizer.

Folds path records, the view window, timing entries and a StyleConfig into one
standalone SVG document. Paint order (later layers cover earlier ones):

    canvas sizing → gradient defs → filter defs → texture tile def
    → background card → texture overlay → path layer

Output is a pure function of its inputs: same records, window, style, mode
and id prefix always give byte-identical markup.
"""

from __future__ import annotations

import enum
import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass

from sigforge.engine.layout import BASELINE_Y
from sigforge.engine.textures import texture_defs, texture_id
from sigforge.engine.timing import (
    FILL_FADE_S,
    FINAL_STATE,
    PathState,
    allocate_timing,
    fill_start,
    path_state_at,
)
from sigforge.models.paths import PathRecord, TimingEntry, ViewWindow
from sigforge.models.style import StyleConfig
from sigforge.svg.serializer import element, fmt, serialize_svg

logger = logging.getLogger(__name__)

# Outline width in document units when the stroke layer is enabled
STROKE_WIDTH = 2.0

# Stroke data puts the top of the em box at y=900 (Y up, 1024 units)
_STROKE_TOP = 900.0

# Seconds are written with millisecond precision
_TIME_DIGITS = 3

# Prefixes end up in ids, url() references and CSS keyframe names
ID_PREFIX_RE = re.compile(r"[A-Za-z0-9_-]*")


class RenderMode(str, enum.Enum):
    ANIMATED = "animated"
    STATIC = "static"


@dataclass(frozen=True)
class Canvas:
    """Final document bounds; the text window is centered inside it."""

    x: float
    y: float
    width: float
    height: float
    offset_x: float
    offset_y: float


def canvas_for(window: ViewWindow, style: StyleConfig) -> Canvas:
    """Custom cards grow the canvas per axis; auto mode uses the window as-is."""
    width, height = window.width, window.height
    card = style.custom_card
    if card is not None:
        width = max(width, card[0])
        height = max(height, card[1])
    return Canvas(
        x=window.x,
        y=window.y,
        width=width,
        height=height,
        offset_x=(width - window.width) / 2,
        offset_y=(height - window.height) / 2,
    )


def color_for(colors: Sequence[str], index: int, fallback: str) -> str:
    """Per-character override with fallback; never indexes out of bounds."""
    if 0 <= index < len(colors) and colors[index]:
        return colors[index]
    return fallback


def is_valid_id_prefix(id_prefix: str) -> bool:
    return ID_PREFIX_RE.fullmatch(id_prefix) is not None


# ── Paint resolution ──


def fill_paint(style: StyleConfig, index: int, id_prefix: str = "") -> str:
    if style.fill_mode == "gradient":
        return f"url(#{id_prefix}grad-fill)"
    if style.fill_mode == "multi":
        return color_for(style.char_colors, index, style.fill1)
    return style.fill1


def stroke_paint(style: StyleConfig, index: int, id_prefix: str = "") -> str:
    if not style.stroke_enabled:
        return "none"
    if style.stroke_mode == "gradient":
        return f"url(#{id_prefix}grad-stroke)"
    if style.stroke_mode == "multi":
        return color_for(style.stroke_char_colors, index, style.stroke)
    return style.stroke


def filter_ref(style: StyleConfig, id_prefix: str = "") -> str | None:
    """At most one filter per path; shadow takes precedence over glow."""
    if style.use_shadow:
        return f"url(#{id_prefix}shadow)"
    if style.use_glow:
        return f"url(#{id_prefix}glow)"
    return None


# ── Defs ──


def _linear_gradient(gradient_id: str, start: str, end: str) -> str:
    return element(
        "linearGradient",
        {"id": gradient_id, "x1": "0%", "y1": "0%", "x2": "100%", "y2": "0%"},
        [
            element("stop", {"offset": "0%", "stop-color": start}),
            element("stop", {"offset": "100%", "stop-color": end}),
        ],
    )


def _glow_filter(id_prefix: str) -> str:
    return element(
        "filter",
        {"id": f"{id_prefix}glow", "x": "-50%", "y": "-50%", "width": "200%", "height": "200%"},
        [
            element("feGaussianBlur", {"stdDeviation": 3.5, "result": "coloredBlur"}),
            element("feMerge", {}, [
                element("feMergeNode", {"in": "coloredBlur"}),
                element("feMergeNode", {"in": "SourceGraphic"}),
            ]),
        ],
    )


def _shadow_filter(id_prefix: str) -> str:
    return element(
        "filter",
        {"id": f"{id_prefix}shadow", "x": "-50%", "y": "-50%", "width": "200%", "height": "200%"},
        [element("feDropShadow", {"dx": 4, "dy": 4, "stdDeviation": 3, "flood-opacity": 0.6})],
    )


def _defs(style: StyleConfig, id_prefix: str) -> list[str]:
    defs: list[str] = []

    if style.fill_mode == "gradient":
        defs.append(_linear_gradient(f"{id_prefix}grad-fill", style.fill1, style.fill2))
    if style.stroke_enabled and style.stroke_mode == "gradient":
        defs.append(_linear_gradient(f"{id_prefix}grad-stroke", style.stroke, style.stroke2))
    if not style.bg_transparent and style.bg_mode == "gradient":
        defs.append(_linear_gradient(f"{id_prefix}bg-grad", style.bg, style.bg2))

    if style.use_glow:
        defs.append(_glow_filter(id_prefix))
    if style.use_shadow:
        defs.append(_shadow_filter(id_prefix))

    if style.texture != "none":
        tile = texture_defs(
            style.texture,
            style.tex_color,
            style.tex_size,
            style.tex_opacity,
            style.tex_thickness,
            id_prefix=id_prefix,
        )
        if tile:
            defs.append(tile)

    return defs


# ── Background + texture ──


def _card_rect(canvas: Canvas, style: StyleConfig) -> tuple[float, float, float, float]:
    """(x, y, w, h) of the background card, centered on the canvas."""
    rect_w, rect_h = canvas.width, canvas.height
    card = style.custom_card
    if card is not None:
        rect_w, rect_h = card
    return (
        canvas.x + (canvas.width - rect_w) / 2,
        canvas.y + (canvas.height - rect_h) / 2,
        rect_w,
        rect_h,
    )


def _background_layers(canvas: Canvas, style: StyleConfig, id_prefix: str) -> list[str]:
    layers: list[str] = []
    rect = (canvas.x, canvas.y, canvas.width, canvas.height)

    if not style.bg_transparent:
        rect = _card_rect(canvas, style)
        paint = f"url(#{id_prefix}bg-grad)" if style.bg_mode == "gradient" else style.bg
        layers.append(element("rect", {
            "x": rect[0], "y": rect[1], "width": rect[2], "height": rect[3],
            "fill": paint, "rx": style.border_radius,
        }))

    if style.texture != "none" and style.tex_size > 0:
        x, y, w, h = rect
        pad = max(0.0, min(style.card_padding, min(canvas.width, canvas.height) / 4))
        layers.append(element("rect", {
            "x": x + pad,
            "y": y + pad,
            "width": max(0.0, w - 2 * pad),
            "height": max(0.0, h - 2 * pad),
            "fill": f"url(#{texture_id(style.texture, id_prefix)})",
            "class": f"{id_prefix}texture-overlay",
            "data-texture": style.texture,
            "pointer-events": "none",
        }))

    return layers


# ── Path layer ──


def _stroke_transform(record: PathRecord) -> str | None:
    """Map 1024-unit, Y-up stroke data onto the character's document cell."""
    if not record.is_stroke or record.x is None or record.font_size is None:
        return None
    s = record.scale
    top = BASELINE_Y - record.font_size
    return f"translate({fmt(record.x)}, {fmt(top + _STROKE_TOP * s)}) scale({fmt(s, 6)}, {fmt(-s, 6)})"


def _time(seconds: float) -> str:
    return f"{fmt(seconds, _TIME_DIGITS)}s"


def _path_element(
    record: PathRecord,
    order: int,
    style: StyleConfig,
    id_prefix: str,
    state: PathState,
    timing: TimingEntry | None,
) -> str:
    transform = _stroke_transform(record)
    width = STROKE_WIDTH if style.stroke_enabled else 0.0
    if transform is not None:
        width = width / record.scale

    css = [
        f"stroke-dasharray: {fmt(record.dash_length)}",
        f"stroke-dashoffset: {fmt(state.dash_offset)}",
        f"fill-opacity: {fmt(state.fill_opacity, 3)}",
    ]
    if timing is not None:
        css.append(
            f"animation: {id_prefix}draw-{order} {_time(timing.duration)} ease-out "
            f"{_time(timing.delay)} forwards, "
            f"{id_prefix}fill-fade-{order} {_time(FILL_FADE_S)} ease-out "
            f"{_time(fill_start(timing))} forwards"
        )

    return element("path", {
        "d": record.d,
        "fill": fill_paint(style, record.index, id_prefix),
        "stroke": stroke_paint(style, record.index, id_prefix),
        "stroke-width": width,
        "stroke-linecap": "round",
        "stroke-linejoin": "round",
        "filter": filter_ref(style, id_prefix),
        "transform": transform,
        "class": f"{id_prefix}sig-path",
        "data-char": record.index,
        "data-stroke": record.stroke_index if record.is_stroke else None,
        "style": "; ".join(css) + ";",
    })


def _keyframes(count: int, id_prefix: str) -> list[str]:
    css: list[str] = []
    for i in range(count):
        css.append(f"@keyframes {id_prefix}draw-{i} {{ to {{ stroke-dashoffset: 0; }} }}")
        css.append(f"@keyframes {id_prefix}fill-fade-{i} {{ to {{ fill-opacity: 1; }} }}")
    return css


def _draw_order(records: Sequence[PathRecord]) -> list[int]:
    """Positions in character-then-stroke order (stable for equal keys)."""
    return sorted(range(len(records)), key=lambda p: records[p].sort_key)


def _compose(
    records: Sequence[PathRecord],
    window: ViewWindow,
    style: StyleConfig,
    id_prefix: str,
    states: Sequence[PathState],
    timings: Sequence[TimingEntry] | None,
) -> str:
    if not is_valid_id_prefix(id_prefix):
        raise ValueError(f"Invalid id prefix: {id_prefix!r}")
    canvas = canvas_for(window, style)
    defs = _defs(style, id_prefix)
    body = _background_layers(canvas, style, id_prefix)

    paths: list[str] = []
    for order, pos in enumerate(_draw_order(records)):
        timing = timings[pos] if timings is not None else None
        paths.append(_path_element(records[pos], order, style, id_prefix, states[pos], timing))

    body.append(element(
        "g",
        {"transform": f"translate({fmt(canvas.offset_x)}, {fmt(canvas.offset_y)})"},
        paths,
    ))

    css = _keyframes(len(records), id_prefix) if timings is not None else None
    return serialize_svg((canvas.x, canvas.y, canvas.width, canvas.height), defs, body, css)


def synthesize(
    records: Sequence[PathRecord],
    window: ViewWindow,
    style: StyleConfig,
    timings: Sequence[TimingEntry] | None = None,
    mode: RenderMode = RenderMode.ANIMATED,
    id_prefix: str = "",
) -> str:
    """Render the signature document.

    ANIMATED: paths start undrawn and CSS keyframes reveal them per timing entry.
    STATIC: final frame (dash offset 0, fill fully opaque, no keyframes).
    Empty input always renders the static placeholder (background only).
    """
    mode = RenderMode(mode)
    if mode is RenderMode.STATIC or not records:
        return _compose(records, window, style, id_prefix, [FINAL_STATE] * len(records), None)

    if timings is None:
        timings = allocate_timing(records, style.speed)
    if len(timings) != len(records):
        raise ValueError(f"Expected {len(records)} timing entries, got {len(timings)}")

    states = [
        PathState(dash_offset=-r.dash_length if r.is_stroke else r.dash_length, fill_opacity=0.0)
        for r in records
    ]
    return _compose(records, window, style, id_prefix, states, timings)


def synthesize_frame(
    records: Sequence[PathRecord],
    window: ViewWindow,
    style: StyleConfig,
    timings: Sequence[TimingEntry],
    at: float,
    id_prefix: str = "",
) -> str:
    """Static-equivalent document of the animation at time `at` (seconds)."""
    if len(timings) != len(records):
        raise ValueError(f"Expected {len(records)} timing entries, got {len(timings)}")
    states = [path_state_at(r, e, at) for r, e in zip(records, timings)]
    return _compose(records, window, style, id_prefix, states, None)
