"""Shared test fixtures."""

from __future__ import annotations

import io

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

from sigforge.engine.glyphs import GlyphOutline
from sigforge.models.paths import PathRecord, ViewWindow
from sigforge.models.style import StyleConfig


# Stroke data for 你, in the 1024-unit Y-up box of hanzi-writer-data
NI_STROKES = [
    "M 100 100 L 900 100",
    "M 512 0 L 512 900",
]


class BoxGlyph:
    """Glyph drawn as a square of half the font size, sitting on the baseline."""

    def __init__(self, advance_width: float = 500.0, blank: bool = False) -> None:
        self.advance_width = advance_width
        self.blank = blank

    def outline_to_path(self, x: float, y: float, font_size: float) -> GlyphOutline:
        if self.blank:
            return GlyphOutline(d="")
        side = font_size / 2
        d = f"M {x} {y} L {x + side} {y} L {x + side} {y - side} L {x} {y - side} Z"
        return GlyphOutline(d=d, bbox=(x, y - side, x + side, y))


class BoxFace:
    """1000-unit face where every glyph advances 500 units; spaces draw nothing."""

    units_per_em = 1000.0

    def shape(self, text: str) -> list[BoxGlyph]:
        return [BoxGlyph(blank=ch.isspace()) for ch in text]


class FakeStrokeSource:
    def __init__(self, data: dict[str, list[str]] | None = None, fail: bool = False) -> None:
        self.data = data if data is not None else {"你": NI_STROKES}
        self.fail = fail
        self.calls: list[str] = []

    async def lookup(self, char: str) -> list[str] | None:
        self.calls.append(char)
        if self.fail:
            raise RuntimeError("stroke service down")
        return self.data.get(char)


class FakeFontProvider:
    def __init__(self, face=None) -> None:
        self.face = face or BoxFace()
        self.loaded: list[str] = []

    def available(self) -> list[str]:
        return ["great-vibes", "lobster"]

    async def load(self, font_id: str):
        self.loaded.append(font_id)
        return self.face


def _box_glyph():
    pen = TTGlyphPen(None)
    pen.moveTo((100, 0))
    pen.lineTo((100, 700))
    pen.lineTo((500, 700))
    pen.lineTo((500, 0))
    pen.closePath()
    return pen.glyph()


def build_test_font() -> bytes:
    """Tiny TrueType font: A and B are 400×700 boxes, space is empty."""
    fb = FontBuilder(1000, isTTF=True)
    fb.setupGlyphOrder([".notdef", "A", "B", "space"])
    fb.setupCharacterMap({ord("A"): "A", ord("B"): "B", ord(" "): "space"})
    fb.setupGlyf({
        ".notdef": _box_glyph(),
        "A": _box_glyph(),
        "B": _box_glyph(),
        "space": TTGlyphPen(None).glyph(),
    })
    fb.setupHorizontalMetrics({
        ".notdef": (600, 100),
        "A": (600, 100),
        "B": (600, 100),
        "space": (250, 0),
    })
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable({"familyName": "Sigforge Test", "styleName": "Regular"})
    fb.setupOS2(sTypoAscender=800, usWinAscent=800, usWinDescent=200)
    fb.setupPost()
    buf = io.BytesIO()
    fb.save(buf)
    return buf.getvalue()


def outline_record(index: int, length: float = 100.0, x: float = 10.0) -> PathRecord:
    d = f"M {x} 150 L {x + length} 150"
    return PathRecord(d=d, length=length, index=index)


def stroke_record(index: int, stroke_index: int, total: int = 2, length: float = 80.0) -> PathRecord:
    return PathRecord(
        d=NI_STROKES[stroke_index % len(NI_STROKES)],
        length=length,
        index=index,
        is_stroke=True,
        x=10.0,
        font_size=102.4,
        stroke_index=stroke_index,
        total_strokes=total,
    )


WINDOW = ViewWindow(x=0.0, y=0.0, width=200.0, height=100.0)


@pytest.fixture
def face() -> BoxFace:
    return BoxFace()


@pytest.fixture
def strokes() -> FakeStrokeSource:
    return FakeStrokeSource()


@pytest.fixture
def records() -> list[PathRecord]:
    return [outline_record(0), outline_record(1, length=50.0, x=70.0), outline_record(2, x=130.0)]


@pytest.fixture
def window() -> ViewWindow:
    return WINDOW


@pytest.fixture
def style() -> StyleConfig:
    return StyleConfig(text="abc")


@pytest.fixture
def font_bytes() -> bytes:
    return build_test_font()
