"""Layout accumulator — folds per-glyph bounds into one padded ViewWindow."""

from __future__ import annotations

import math

from sigforge.models.paths import ViewWindow

# Padding around the text bounds, in document units
PAD = 40.0

# Substituted when no finite geometry was recorded
DEFAULT_WINDOW = ViewWindow(x=0.0, y=0.0, width=100.0, height=100.0)

# Glyph placement: first cursor position and baseline
ORIGIN_X = 10.0
BASELINE_Y = 150.0


class BoundsAccumulator:
    """Running min/max over every emitted box. Non-finite boxes are ignored."""

    def __init__(self) -> None:
        self.min_x = math.inf
        self.min_y = math.inf
        self.max_x = -math.inf
        self.max_y = -math.inf

    @property
    def is_empty(self) -> bool:
        return not all(math.isfinite(v) for v in (self.min_x, self.min_y, self.max_x, self.max_y))

    def add(self, x1: float, y1: float, x2: float, y2: float) -> None:
        if not all(math.isfinite(v) for v in (x1, y1, x2, y2)):
            return
        self.min_x = min(self.min_x, x1, x2)
        self.min_y = min(self.min_y, y1, y2)
        self.max_x = max(self.max_x, x1, x2)
        self.max_y = max(self.max_y, y1, y2)

    def add_cell(self, x: float, baseline: float, size: float) -> None:
        """Square glyph cell of side `size` sitting on the baseline."""
        self.add(x, baseline - size, x + size, baseline)

    def to_window(self, pad: float = PAD) -> ViewWindow:
        if self.is_empty:
            return DEFAULT_WINDOW
        width = (self.max_x - self.min_x) + 2 * pad
        height = (self.max_y - self.min_y) + 2 * pad
        if width <= 0 or height <= 0:
            return DEFAULT_WINDOW
        return ViewWindow(
            x=self.min_x - pad,
            y=self.min_y - pad,
            width=width,
            height=height,
        )
