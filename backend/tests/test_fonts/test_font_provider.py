"""Tests for font loading and glyph outlines via fontTools."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from sigforge.engine.glyphs import extract_paths
from sigforge.fonts.provider import FontLoadError, FontProvider
from sigforge.models.style import StyleConfig


def test_resolve_falls_back_to_default_font():
    provider = FontProvider()
    assert provider.resolve("lobster").value == "lobster"
    assert provider.resolve("comic-sans").value == "great-vibes"
    assert "great-vibes" in provider.available()


def test_loads_local_font_file(tmp_path, font_bytes):
    (tmp_path / "great-vibes.ttf").write_bytes(font_bytes)
    provider = FontProvider(font_dir=tmp_path)

    face = asyncio.run(provider.load("great-vibes"))
    assert face.units_per_em == 1000
    assert asyncio.run(provider.load("great-vibes")) is face


def test_glyph_outline_is_flipped_onto_the_baseline(tmp_path, font_bytes):
    (tmp_path / "great-vibes.ttf").write_bytes(font_bytes)
    face = asyncio.run(FontProvider(font_dir=tmp_path).load("great-vibes"))

    glyph_a, space = face.shape("A ")
    assert glyph_a.advance_width == 600
    assert space.advance_width == 250

    outline = glyph_a.outline_to_path(10, 150, 100)
    assert outline.d.startswith("M")
    assert outline.bbox == pytest.approx((20, 80, 60, 150))
    assert space.outline_to_path(70, 150, 100).d == ""


def test_unmapped_chars_use_notdef(tmp_path, font_bytes):
    (tmp_path / "great-vibes.ttf").write_bytes(font_bytes)
    face = asyncio.run(FontProvider(font_dir=tmp_path).load("great-vibes"))
    (glyph,) = face.shape("Z")
    assert glyph.name == ".notdef"


def test_extracts_real_font_outlines(tmp_path, font_bytes):
    (tmp_path / "great-vibes.ttf").write_bytes(font_bytes)
    face = asyncio.run(FontProvider(font_dir=tmp_path).load("great-vibes"))

    result = asyncio.run(extract_paths(face, StyleConfig(text="A B", font_size=100)))
    assert [r.index for r in result.records] == [0, 2]
    # 400×700 box at 0.1 scale
    assert result.records[0].length == 220
    assert result.window.width == pytest.approx((145 - 20) + 80)


def test_downloads_missing_font(font_bytes):
    urls: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        urls.append(str(request.url))
        return httpx.Response(200, content=font_bytes)

    provider = FontProvider(transport=httpx.MockTransport(handler))
    face = asyncio.run(provider.load("lobster"))
    assert face.units_per_em == 1000
    assert len(urls) == 1
    assert "lobster" in urls[0]


def test_download_failure_raises_font_load_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404)

    provider = FontProvider(transport=httpx.MockTransport(handler))
    with pytest.raises(FontLoadError):
        asyncio.run(provider.load("lobster"))


def test_garbage_font_bytes_raise_font_load_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"definitely not a font")

    provider = FontProvider(transport=httpx.MockTransport(handler))
    with pytest.raises(FontLoadError):
        asyncio.run(provider.load("lobster"))
