"""Path measurement — facade over svgpathtools.

Length and exact bounds of an SVG path string, with optional uniform scaling.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from svgpathtools import parse_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PathMetrics:
    length: float
    # (xmin, ymin, xmax, ymax), None for paths without segments
    bbox: tuple[float, float, float, float] | None


def measure_path(d: str, scale: float = 1.0) -> PathMetrics:
    """Measure a path string; length and bounds are multiplied by `scale`.

    Raises ValueError when the path data cannot be parsed.
    """
    path = parse_path(d)
    if len(path) == 0:
        return PathMetrics(length=0.0, bbox=None)

    length = float(path.length()) * scale
    xmin, xmax, ymin, ymax = path.bbox()
    bbox = (xmin * scale, ymin * scale, xmax * scale, ymax * scale)
    if not all(math.isfinite(v) for v in bbox):
        bbox = None
    if not math.isfinite(length):
        length = 0.0
    return PathMetrics(length=length, bbox=bbox)


def path_length(d: str, scale: float = 1.0) -> float:
    """Rounded-up drawable length, 0 for empty paths."""
    return float(math.ceil(measure_path(d, scale).length))
