"""Font catalog, theme presets and default per-character palettes."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class FontEntry:
    value: str
    label: str
    url: str
    category: str


_FONTSOURCE = "https://cdn.jsdelivr.net/npm/@fontsource"

FONTS: tuple[FontEntry, ...] = (
    FontEntry("great-vibes", "Great Vibes",
              f"{_FONTSOURCE}/great-vibes@5.0.8/files/great-vibes-latin-400-normal.woff", "script"),
    FontEntry("dancing-script", "Dancing Script",
              f"{_FONTSOURCE}/dancing-script@5.0.8/files/dancing-script-latin-400-normal.woff", "script"),
    FontEntry("allura", "Allura",
              f"{_FONTSOURCE}/allura@5.0.20/files/allura-latin-400-normal.woff", "script"),
    FontEntry("sacramento", "Sacramento",
              f"{_FONTSOURCE}/sacramento@5.0.8/files/sacramento-latin-400-normal.woff", "script"),
    FontEntry("lobster", "Lobster",
              f"{_FONTSOURCE}/lobster@5.0.8/files/lobster-latin-400-normal.woff", "brand"),
    FontEntry("pacifico", "Pacifico",
              f"{_FONTSOURCE}/pacifico@5.0.8/files/pacifico-latin-400-normal.woff", "brand"),
    FontEntry("permanent-marker", "Permanent Marker",
              f"{_FONTSOURCE}/permanent-marker@5.0.8/files/permanent-marker-latin-400-normal.woff", "brand"),
    FontEntry("ma-shan-zheng", "Ma Shan Zheng",
              f"{_FONTSOURCE}/ma-shan-zheng@5.0.13/files/ma-shan-zheng-latin-400-normal.woff", "local"),
)

DEFAULT_FONT = "great-vibes"

DEFAULT_CHAR_COLORS: tuple[str, ...] = (
    "#ef4444", "#f97316", "#f59e0b", "#84cc16", "#10b981",
    "#06b6d4", "#3b82f6", "#8b5cf6", "#d946ef",
)


def cycle_colors(text: str, palette: tuple[str, ...] = DEFAULT_CHAR_COLORS) -> list[str]:
    """One palette color per character, wrapping around."""
    return [palette[i % len(palette)] for i in range(len(text))]


def rainbow_colors(text: str) -> list[str]:
    """Evenly spaced hues, red through magenta, across the text."""
    n = max(len(text), 1)
    colors: list[str] = []
    for i in range(len(text)):
        hue = (i * 300 / n) % 360
        colors.append(_hsl_hex(hue, 0.85, 0.55))
    return colors


def _hsl_hex(h: float, s: float, l: float) -> str:
    c = (1 - abs(2 * l - 1)) * s
    x = c * (1 - abs((h / 60) % 2 - 1))
    m = l - c / 2
    sector = int(h // 60) % 6
    r, g, b = [
        (c, x, 0), (x, c, 0), (0, c, x), (0, x, c), (x, 0, c), (c, 0, x),
    ][sector]
    return "#" + "".join(f"{round((v + m) * 255):02x}" for v in (r, g, b))


@dataclass(frozen=True)
class Theme:
    # Partial StyleConfig fields (snake_case)
    fields: dict[str, Any]
    char_colors_fn: Callable[[str], list[str]] | None = None
    stroke_char_colors_fn: Callable[[str], list[str]] | None = None


THEMES: dict[str, Theme] = {
    "default": Theme({
        "bg": "#ffffff", "bg_transparent": False, "stroke": "#333333", "stroke_enabled": True,
        "fill_mode": "single", "fill1": "#333333", "font": "great-vibes",
        "use_glow": False, "use_shadow": False, "border_radius": 12, "texture": "none",
    }),
    "school": Theme({
        "bg": "#ffffff", "bg_transparent": False, "stroke": "#1e3a8a", "stroke_enabled": True,
        "fill_mode": "single", "fill1": "#1d4ed8", "font": "dancing-script",
        "use_glow": False, "use_shadow": False, "border_radius": 4, "texture": "lines",
        "tex_color": "#e2e8f0", "tex_size": 25, "tex_thickness": 1,
    }),
    "blueprint": Theme({
        "bg": "#1e3a8a", "bg_transparent": False, "stroke": "#ffffff", "stroke_enabled": True,
        "fill_mode": "single", "fill1": "#ffffff", "font": "sacramento",
        "use_glow": False, "use_shadow": False, "border_radius": 0, "texture": "grid",
        "tex_color": "#ffffff", "tex_opacity": 0.2, "tex_size": 30,
    }),
    "laser": Theme({
        "bg": "#000000", "bg_transparent": False, "stroke": "#00ffff", "stroke_enabled": True,
        "fill_mode": "gradient", "fill1": "#00ffff", "fill2": "#ff00ff", "font": "sacramento",
        "use_glow": True, "use_shadow": True, "border_radius": 0, "texture": "grid",
        "tex_color": "#333333",
    }),
    "coke": Theme({
        "bg": "#f40009", "bg_transparent": False, "stroke": "#ffffff", "stroke_enabled": True,
        "fill_mode": "single", "fill1": "#ffffff", "font": "lobster",
        "use_glow": False, "use_shadow": True, "border_radius": 20, "texture": "none",
    }),
    "sprite": Theme({
        "bg": "#008b47", "bg_transparent": False, "stroke": "#f8cd2b", "stroke_enabled": True,
        "fill_mode": "single", "fill1": "#f8cd2b", "font": "permanent-marker",
        "use_glow": False, "use_shadow": True, "border_radius": 8, "texture": "dots",
        "tex_color": "#ffffff", "tex_opacity": 0.2, "tex_size": 10,
    }),
    "cyber": Theme({
        "bg": "#0f172a", "bg_transparent": False, "stroke": "#facc15", "stroke_enabled": True,
        "fill_mode": "gradient", "fill1": "#facc15", "fill2": "#d946ef", "font": "pacifico",
        "use_glow": True, "use_shadow": True, "border_radius": 4, "texture": "cross",
        "tex_color": "#334155", "tex_size": 40,
    }),
    "chinese": Theme({
        "bg": "#fff1f2", "bg_transparent": False, "stroke": "#7f1d1d", "stroke_enabled": True,
        "fill_mode": "single", "fill1": "#991b1b", "font": "ma-shan-zheng",
        "use_glow": False, "use_shadow": False, "border_radius": 4, "texture": "none",
    }),
    "rainbow": Theme(
        {
            "bg": "#ffffff", "bg_transparent": False, "stroke": "#333333", "stroke_enabled": True,
            "fill_mode": "multi", "fill1": "#333333", "font": "dancing-script",
            "use_glow": False, "use_shadow": False, "border_radius": 16, "texture": "none",
        },
        char_colors_fn=rainbow_colors,
    ),
}


def find_font(font_id: str) -> FontEntry | None:
    for entry in FONTS:
        if entry.value == font_id:
            return entry
    return None
