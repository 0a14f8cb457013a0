"""Font loading and glyph shaping — facade over fontTools.

FontProvider resolves a catalog id to font bytes (local font_dir first, then
the catalog URL via httpx), parses them once with TTFont and hands out
FontToolsFace objects implementing the extractor's FontFace protocol.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path

import httpx
from fontTools.pens.boundsPen import BoundsPen
from fontTools.pens.svgPathPen import SVGPathPen
from fontTools.pens.transformPen import TransformPen
from fontTools.ttLib import TTFont

from sigforge.engine.glyphs import GlyphOutline
from sigforge.engine.themes import DEFAULT_FONT, FONTS, FontEntry, find_font
from sigforge.svg.serializer import fmt

logger = logging.getLogger(__name__)

_LOCAL_SUFFIXES = (".ttf", ".otf", ".woff", ".woff2")


class FontLoadError(RuntimeError):
    """Font could not be resolved, fetched or parsed."""


class FontToolsGlyph:
    """One shaped glyph; outlines are drawn Y-down around the given baseline."""

    def __init__(self, glyph_set, name: str, advance_width: float, units_per_em: float) -> None:
        self._glyph_set = glyph_set
        self.name = name
        self.advance_width = float(advance_width)
        self._units_per_em = units_per_em

    def outline_to_path(self, x: float, y: float, font_size: float) -> GlyphOutline:
        if self.name not in self._glyph_set:
            return GlyphOutline(d="")

        scale = font_size / self._units_per_em
        # Font units are Y-up; flip around the baseline
        transform = (scale, 0, 0, -scale, x, y)

        svg_pen = SVGPathPen(self._glyph_set, ntos=fmt)
        bounds_pen = BoundsPen(self._glyph_set)
        glyph = self._glyph_set[self.name]
        glyph.draw(TransformPen(svg_pen, transform))
        glyph.draw(TransformPen(bounds_pen, transform))

        return GlyphOutline(d=svg_pen.getCommands(), bbox=bounds_pen.bounds)


class FontToolsFace:
    """One glyph per character via the best Unicode cmap (.notdef when unmapped)."""

    def __init__(self, font: TTFont) -> None:
        self.font = font
        self.units_per_em = float(font["head"].unitsPerEm)
        self._glyph_set = font.getGlyphSet()
        self._cmap = font.getBestCmap() or {}
        self._metrics = font["hmtx"].metrics

    def shape(self, text: str) -> list[FontToolsGlyph]:
        glyphs: list[FontToolsGlyph] = []
        for ch in text:
            name = self._cmap.get(ord(ch), ".notdef")
            advance = self._metrics.get(name, (0, 0))[0]
            glyphs.append(FontToolsGlyph(self._glyph_set, name, advance, self.units_per_em))
        return glyphs


class FontProvider:
    """Catalog-backed font loader with a per-process cache of parsed faces."""

    def __init__(
        self,
        font_dir: str | Path | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
        catalog: tuple[FontEntry, ...] = FONTS,
    ) -> None:
        self.font_dir = Path(font_dir) if font_dir else None
        self.timeout = timeout
        self._transport = transport
        self._catalog = {entry.value: entry for entry in catalog}
        self._faces: dict[str, FontToolsFace] = {}

    def resolve(self, font_id: str) -> FontEntry:
        """Catalog entry for font_id, falling back to the default font."""
        entry = self._catalog.get(font_id) or self._catalog.get(DEFAULT_FONT) or find_font(DEFAULT_FONT)
        if entry is None:
            raise FontLoadError("Font is not configured")
        return entry

    def available(self) -> list[str]:
        return sorted(self._catalog)

    async def load(self, font_id: str) -> FontToolsFace:
        entry = self.resolve(font_id)
        face = self._faces.get(entry.value)
        if face is not None:
            return face

        data = self._read_local(entry.value)
        if data is None:
            data = await self._download(entry)

        try:
            face = FontToolsFace(TTFont(io.BytesIO(data)))
        except Exception as e:
            raise FontLoadError(f"Failed to parse font {entry.value}: {e}") from e

        self._faces[entry.value] = face
        return face

    def _read_local(self, font_id: str) -> bytes | None:
        if self.font_dir is None:
            return None
        for suffix in _LOCAL_SUFFIXES:
            candidate = self.font_dir / f"{font_id}{suffix}"
            if candidate.is_file():
                logger.debug("Loading font %s from %s", font_id, candidate)
                return candidate.read_bytes()
        return None

    async def _download(self, entry: FontEntry) -> bytes:
        logger.info("Downloading font %s", entry.value)
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(entry.url)
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise FontLoadError(f"Failed to load font {entry.value}: {e}") from e
        return response.content
