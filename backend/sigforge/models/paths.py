"""Path records, view windows and timing entries — the values flowing between pipeline stages.

PathRecord → produced once per extraction pass, never mutated.
ViewWindow → padded bounds of every emitted record.
TimingEntry → derived 1:1 from PathRecord by the timing allocator.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Any

# hanzi-writer stroke data is authored in a 1024-unit square
STROKE_UNITS = 1024.0


@dataclass(frozen=True)
class PathRecord:
    """One drawable unit: a glyph outline or a single CJK brush stroke."""

    d: str
    # Total length in document units (drives dash animation and timing share)
    length: float
    # Character index in the source text, the primary ordering key
    index: int
    # True when the record is a stroke from external stroke data
    is_stroke: bool = False
    # Cell origin x and font size, required when is_stroke is set
    x: float | None = None
    font_size: float | None = None
    # Stroke order within the character (stroke records only)
    stroke_index: int | None = None
    total_strokes: int | None = None

    @property
    def scale(self) -> float:
        """Factor mapping stroke units to document units (1.0 for outlines)."""
        if not self.is_stroke or not self.font_size:
            return 1.0
        return self.font_size / STROKE_UNITS

    @property
    def dash_length(self) -> float:
        """Length in the path's own coordinate space, used for stroke-dasharray."""
        return self.length / self.scale

    @property
    def sort_key(self) -> tuple[int, int]:
        return (self.index, self.stroke_index or 0)

    def to_dict(self) -> dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None and v is not False}


@dataclass(frozen=True)
class ViewWindow:
    """Padded bounding rectangle of all emitted geometry."""

    x: float
    y: float
    width: float
    height: float

    def __post_init__(self) -> None:
        for name in ("x", "y", "width", "height"):
            if not math.isfinite(getattr(self, name)):
                raise ValueError(f"ViewWindow.{name} must be finite")
        if self.width <= 0 or self.height <= 0:
            raise ValueError("ViewWindow width and height must be positive")

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y, "w": self.width, "h": self.height}


@dataclass(frozen=True)
class TimingEntry:
    """Start delay and draw duration (seconds) for one PathRecord."""

    delay: float
    duration: float

    @property
    def end(self) -> float:
        return self.delay + self.duration
