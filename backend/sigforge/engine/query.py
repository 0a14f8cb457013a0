"""Query-string boundary: URL parameters ⇄ StyleConfig.

All defaulting and sanitizing happens here so the rendering core can trust
its input: unknown enum values, non-finite numbers and out-of-range sizes are
ignored and the preset/default value is kept.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable, Mapping
from typing import Any
from urllib.parse import urlencode

from sigforge.engine.synthesizer import color_for, is_valid_id_prefix
from sigforge.engine.themes import THEMES, Theme, cycle_colors
from sigforge.models.style import TEXTURES, StyleConfig

PLACEHOLDER_TEXT = "Demo"
DEFAULT_ORIGIN = "https://sign.yunique.cc"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}
_COLOR_SPLIT_RE = re.compile(r"[,-]")

_FILL_MODES = ("single", "gradient", "multi")
_BG_MODES = ("solid", "gradient")
_BG_SIZE_MODES = ("auto", "custom")


_HEX_RE = re.compile(r"#?([0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})")
_NAMED_RE = re.compile(r"[a-zA-Z]{3,20}")


def _color(value: str) -> str | None:
    """`#`-prefixed hex or a bare CSS color name; anything else is rejected."""
    value = value.strip()
    match = _HEX_RE.fullmatch(value)
    if match:
        return f"#{match.group(1)}"
    if _NAMED_RE.fullmatch(value):
        return value.lower()
    return None


def _bool(value: str | None) -> bool | None:
    if value is None:
        return None
    v = value.strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    return None


def _number(value: str | None, valid: Callable[[float], bool]) -> float | None:
    if value is None or value.strip() == "":
        return None
    try:
        v = float(value)
    except ValueError:
        return None
    if not math.isfinite(v) or not valid(v):
        return None
    return v


def _positive(v: float) -> bool:
    return v > 0


def _non_negative(v: float) -> bool:
    return v >= 0


def _color_list(value: str | None) -> list[str]:
    if not value:
        return []
    colors = (_color(c) for c in _COLOR_SPLIT_RE.split(value) if c.strip())
    return [c for c in colors if c is not None]


# query name → (field, validator)
_NUMERIC: dict[str, tuple[str, Callable[[float], bool]]] = {
    "fontSize": ("font_size", _positive),
    "speed": ("speed", _positive),
    "charSpacing": ("char_spacing", lambda v: -100 <= v <= 100),
    "borderRadius": ("border_radius", _non_negative),
    "cardPadding": ("card_padding", _non_negative),
    "bgWidth": ("bg_width", _positive),
    "bgHeight": ("bg_height", _positive),
    "texSize": ("tex_size", _positive),
    "texThickness": ("tex_thickness", _positive),
    "texOpacity": ("tex_opacity", lambda v: 0 <= v <= 1),
}

_COLORS = {
    "fill1": "fill1",
    "fill2": "fill2",
    "stroke": "stroke",
    "stroke2": "stroke2",
    "bg2": "bg2",
    "texColor": "tex_color",
}

_FLAGS = {
    "strokeEnabled": "stroke_enabled",
    "useGlow": "use_glow",
    "useShadow": "use_shadow",
    "useHanziData": "use_hanzi_data",
}

_CHOICES: dict[str, tuple[str, tuple[str, ...]]] = {
    "fill": ("fill_mode", _FILL_MODES),
    "strokeMode": ("stroke_mode", _FILL_MODES),
    "bgMode": ("bg_mode", _BG_MODES),
    "bgSizeMode": ("bg_size_mode", _BG_SIZE_MODES),
    "texture": ("texture", TEXTURES),
}


def style_from_query(params: Mapping[str, str]) -> StyleConfig:
    """Build a sanitized StyleConfig from flat query parameters.

    Precedence: defaults < theme preset < explicit parameters. Empty text
    becomes the "Demo" placeholder.
    """
    fields: dict[str, Any] = {}

    theme: Theme | None = THEMES.get(params.get("theme") or "")
    if theme is not None:
        fields.update(theme.fields)

    for key in ("text", "font"):
        value = params.get(key)
        if value:
            fields[key] = value

    for name, (field, valid) in _NUMERIC.items():
        v = _number(params.get(name), valid)
        if v is not None:
            fields[field] = v

    for name, field in _COLORS.items():
        color = _color(params.get(name) or "")
        if color is not None:
            fields[field] = color

    for name, field in _FLAGS.items():
        flag = _bool(params.get(name))
        if flag is not None:
            fields[field] = flag

    for name, (field, allowed) in _CHOICES.items():
        value = params.get(name)
        if value in allowed:
            fields[field] = value

    bg = params.get("bg")
    if bg:
        if bg == "transparent":
            fields["bg_transparent"] = True
        elif (color := _color(bg)) is not None:
            fields["bg_transparent"] = False
            fields["bg"] = color

    colors = _color_list(params.get("colors"))
    if colors:
        fields["char_colors"] = colors
        fields["fill_mode"] = "multi"

    stroke_colors = _color_list(params.get("strokeColors"))
    if stroke_colors:
        fields["stroke_char_colors"] = stroke_colors
        fields["stroke_mode"] = "multi"

    if not fields.get("text"):
        fields["text"] = PLACEHOLDER_TEXT

    _backfill_colors(fields, theme)
    return StyleConfig(**fields)


def _backfill_colors(fields: dict[str, Any], theme: Theme | None) -> None:
    """Give multi-color modes one color per character when none were supplied."""
    text = fields["text"]

    if fields.get("fill_mode") == "multi" and not fields.get("char_colors"):
        if theme is not None and theme.char_colors_fn is not None:
            fields["char_colors"] = theme.char_colors_fn(text)
        else:
            fields["char_colors"] = cycle_colors(text)

    if fields.get("stroke_mode") == "multi" and not fields.get("stroke_char_colors"):
        if theme is not None and theme.stroke_char_colors_fn is not None:
            fields["stroke_char_colors"] = theme.stroke_char_colors_fn(text)
        elif fields.get("char_colors"):
            fields["stroke_char_colors"] = list(fields["char_colors"])
        else:
            fields["stroke_char_colors"] = cycle_colors(text)


def id_prefix_from_query(value: str | None) -> str:
    """`idPrefix` parameter, or "" when it would not form safe ids."""
    if value and is_valid_id_prefix(value):
        return value
    return ""


def sign_api_url(style: StyleConfig, fmt: str | None = None, origin: str = DEFAULT_ORIGIN) -> str:
    """Shareable /api/sign URL reproducing the main fields of `style`."""
    defaults = StyleConfig()
    params: dict[str, str] = {"text": style.text, "font": style.font}

    if style.fill_mode != "single":
        params["fill"] = style.fill_mode
    if style.texture != "none":
        params["texture"] = style.texture

    if style.bg_transparent:
        params["bg"] = "transparent"
    elif style.bg != defaults.bg:
        params["bg"] = style.bg.lstrip("#")

    if style.bg_size_mode == "custom":
        params["bgSizeMode"] = "custom"
        if style.bg_width:
            params["bgWidth"] = f"{style.bg_width:g}"
        if style.bg_height:
            params["bgHeight"] = f"{style.bg_height:g}"

    if style.fill_mode == "multi" and style.text:
        params["colors"] = "-".join(
            color_for(style.char_colors, i, style.fill1).lstrip("#")
            for i in range(len(style.text))
        )

    if fmt:
        params["format"] = fmt

    return f"{origin.rstrip('/')}/api/sign?{urlencode(params)}"
