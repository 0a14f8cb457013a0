"""Tests for glyph extraction: layout, spacing, CJK stroke records."""

from __future__ import annotations

import asyncio
import math

from sigforge.engine.glyphs import extract_paths, is_cjk, prefetch_strokes
from sigforge.engine.layout import DEFAULT_WINDOW, PAD
from sigforge.models.style import StyleConfig
from tests.conftest import BoxFace, FakeStrokeSource


def _extract(text: str, strokes=None, **fields):
    style = StyleConfig(text=text, font_size=100, **fields)
    return asyncio.run(extract_paths(BoxFace(), style, strokes))


def test_is_cjk():
    assert is_cjk("你")
    assert not is_cjk("A")
    assert not is_cjk("")
    assert not is_cjk("你好")


def test_one_record_per_drawable_char():
    result = _extract("A B")
    assert [r.index for r in result.records] == [0, 2]
    assert all(not r.is_stroke for r in result.records)
    assert all(r.length == math.ceil(r.length) for r in result.records)


def test_window_wraps_glyphs_with_padding():
    result = _extract("AB")
    # Boxes of side 50 at x=10 and x=60 on baseline 150
    assert result.window.x == 10 - PAD
    assert result.window.y == 100 - PAD
    assert result.window.width == 100 + 2 * PAD
    assert result.window.height == 50 + 2 * PAD
    assert result.cursor == 110


def test_positive_spacing_widens_window():
    tight = _extract("AB", char_spacing=0)
    loose = _extract("AB", char_spacing=50)
    assert loose.window.width > tight.window.width
    assert loose.window.width == tight.window.width + 25


def test_spacing_extremes_stay_finite():
    for spacing in (-100, 100):
        result = _extract("ABC", char_spacing=spacing)
        assert math.isfinite(result.window.width)
        assert result.window.width > 0
        assert result.cursor >= 10

    collapsed = _extract("ABC", char_spacing=-100)
    assert {r.d.split()[1] for r in collapsed.records} == {"10.0"}


def test_empty_text_gives_default_window():
    result = _extract("   ")
    assert result.records == []
    assert result.window == DEFAULT_WINDOW


def test_cjk_strokes_become_separate_records():
    source = FakeStrokeSource()
    result = _extract("A你", strokes=source, use_hanzi_data=True)

    assert len(result.records) == 3
    stroke_recs = [r for r in result.records if r.is_stroke]
    assert [r.index for r in stroke_recs] == [1, 1]
    assert [r.stroke_index for r in stroke_recs] == [0, 1]
    assert all(r.total_strokes == 2 for r in stroke_recs)
    assert all(r.x == 60 and r.font_size == 100 for r in stroke_recs)
    # 800 and 900 stroke units at 100/1024
    assert [r.length for r in stroke_recs] == [79, 88]
    assert source.calls == ["你"]


def test_cjk_cell_counts_toward_bounds():
    result = _extract("你", strokes=FakeStrokeSource(), use_hanzi_data=True)
    assert result.window.x == 10 - PAD
    assert result.window.y == 50 - PAD
    assert result.window.width == 100 + 2 * PAD


def test_cjk_without_stroke_mode_uses_outline():
    source = FakeStrokeSource()
    result = _extract("你", strokes=source, use_hanzi_data=False)
    assert len(result.records) == 1
    assert not result.records[0].is_stroke
    assert source.calls == []


def test_failed_lookup_falls_back_to_outline():
    result = _extract("你好", strokes=FakeStrokeSource(fail=True), use_hanzi_data=True)
    assert [r.index for r in result.records] == [0, 1]
    assert not any(r.is_stroke for r in result.records)


def test_missing_stroke_data_falls_back_to_outline():
    result = _extract("好", strokes=FakeStrokeSource(), use_hanzi_data=True)
    assert len(result.records) == 1
    assert not result.records[0].is_stroke


def test_prefetch_looks_up_each_char_once():
    source = FakeStrokeSource()
    found = asyncio.run(prefetch_strokes(source, "你A你好"))
    assert sorted(source.calls) == ["你", "好"]
    assert found["你"] is not None
    assert found["好"] is None
