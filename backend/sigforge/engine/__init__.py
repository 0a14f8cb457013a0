"""Signature rendering engine: glyph extraction → layout → timing → SVG → raster."""

from sigforge.engine.glyphs import Extraction, GlyphOutline, extract_paths, is_cjk
from sigforge.engine.layout import BoundsAccumulator
from sigforge.engine.synthesizer import RenderMode, synthesize, synthesize_frame
from sigforge.engine.timing import allocate_timing, total_duration

__all__ = [
    "Extraction",
    "GlyphOutline",
    "extract_paths",
    "is_cjk",
    "BoundsAccumulator",
    "RenderMode",
    "synthesize",
    "synthesize_frame",
    "allocate_timing",
    "total_duration",
]
