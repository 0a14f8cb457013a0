"""Tests for the bounds accumulator and view windows."""

from __future__ import annotations

import math

import pytest

from sigforge.engine.layout import DEFAULT_WINDOW, PAD, BoundsAccumulator
from sigforge.models.paths import PathRecord, ViewWindow


def test_empty_accumulator_gives_default_window():
    acc = BoundsAccumulator()
    assert acc.is_empty
    assert acc.to_window() == DEFAULT_WINDOW


def test_window_is_padded_union():
    acc = BoundsAccumulator()
    acc.add(10, 20, 50, 60)
    acc.add(40, 0, 90, 30)
    window = acc.to_window()
    assert window == ViewWindow(x=10 - PAD, y=0 - PAD, width=80 + 2 * PAD, height=60 + 2 * PAD)


def test_non_finite_boxes_are_ignored():
    acc = BoundsAccumulator()
    acc.add(math.nan, 0, 10, 10)
    acc.add(0, 0, math.inf, 10)
    assert acc.is_empty

    acc.add(0, 0, 10, 10)
    assert acc.to_window().width == 10 + 2 * PAD


def test_cell_sits_on_the_baseline():
    acc = BoundsAccumulator()
    acc.add_cell(10, 150, 100)
    assert (acc.min_x, acc.min_y, acc.max_x, acc.max_y) == (10, 50, 110, 150)


def test_zero_area_without_padding_falls_back():
    acc = BoundsAccumulator()
    acc.add(5, 5, 5, 5)
    assert acc.to_window(pad=0) == DEFAULT_WINDOW


def test_view_window_rejects_bad_geometry():
    with pytest.raises(ValueError):
        ViewWindow(x=0, y=0, width=0, height=10)
    with pytest.raises(ValueError):
        ViewWindow(x=math.nan, y=0, width=10, height=10)


def test_path_record_serialization_drops_unset_fields():
    outline = PathRecord(d="M0 0", length=10, index=0)
    assert outline.to_dict() == {"d": "M0 0", "length": 10, "index": 0}

    stroke = PathRecord(
        d="M0 0", length=10, index=1, is_stroke=True, x=5.0, font_size=102.4,
        stroke_index=0, total_strokes=3,
    )
    data = stroke.to_dict()
    assert data["is_stroke"] is True
    assert data["stroke_index"] == 0
    assert stroke.dash_length == pytest.approx(100)
    assert stroke.sort_key == (1, 0)
