"""StyleConfig — the immutable per-request rendering configuration."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

FillMode = Literal["single", "gradient", "multi"]
StrokeMode = Literal["single", "gradient", "multi"]
BgMode = Literal["solid", "gradient"]
BgSizeMode = Literal["auto", "custom"]
TextureType = Literal["none", "grid", "dots", "lines", "cross", "tianzige", "mizige"]

TEXTURES: tuple[str, ...] = ("none", "grid", "dots", "lines", "cross", "tianzige", "mizige")


class StyleConfig(BaseModel):
    """Everything needed to turn text into a signature document.

    Field values are assumed sanitized (see engine.query.style_from_query);
    the core only guards against non-finite sizes and speeds.
    """

    model_config = ConfigDict(frozen=True)

    # Content
    text: str = "yunique"
    font: str = "great-vibes"
    font_size: float = 120
    speed: float = 0.4
    # Percent of each glyph's advance width, clamped to [-100, 100] at use
    char_spacing: float = 0

    # Background
    bg: str = "#ffffff"
    bg2: str = "#e2e8f0"
    bg_mode: BgMode = "solid"
    bg_transparent: bool = False
    border_radius: float = 12
    card_padding: float = 0
    bg_size_mode: BgSizeMode = "auto"
    bg_width: float | None = None
    bg_height: float | None = None

    # Stroke (outline)
    stroke: str = "#333333"
    stroke_enabled: bool = True
    stroke_mode: StrokeMode = "single"
    stroke2: str = "#ec4899"
    stroke_char_colors: tuple[str, ...] = Field(default_factory=tuple)

    # Fill (body)
    fill_mode: FillMode = "single"
    fill1: str = "#333333"
    fill2: str = "#ec4899"
    char_colors: tuple[str, ...] = Field(default_factory=tuple)

    # Texture
    texture: TextureType = "none"
    tex_color: str = "#cbd5e1"
    tex_size: float = 20
    tex_thickness: float = 1
    tex_opacity: float = 0.5

    # Effects
    use_glow: bool = False
    use_shadow: bool = False

    # Per-stroke rendering of Chinese characters
    use_hanzi_data: bool = False

    @property
    def custom_card(self) -> tuple[float, float] | None:
        """(width, height) of a custom background card, or None in auto mode."""
        if self.bg_size_mode != "custom" or not self.bg_width or not self.bg_height:
            return None
        return (self.bg_width, self.bg_height)
