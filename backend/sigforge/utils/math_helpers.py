"""Math helpers — clamping, finite guards, easing. No engine imports."""

from __future__ import annotations

import math


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def finite_or(value: float | None, default: float, minimum: float | None = None) -> float:
    """Return value if finite (and > minimum when given), else default."""
    if value is None:
        return default
    try:
        v = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(v):
        return default
    if minimum is not None and v <= minimum:
        return default
    return v


# CSS `ease-out` = cubic-bezier(0, 0, 0.58, 1)
_EASE_OUT = (0.0, 0.0, 0.58, 1.0)
_BEZIER_ITERATIONS = 24


def _bezier(t: float, p1: float, p2: float) -> float:
    # 1D cubic Bézier with endpoints fixed at 0 and 1
    u = 1.0 - t
    return 3 * u * u * t * p1 + 3 * u * t * t * p2 + t * t * t


def cubic_bezier(progress: float, x1: float, y1: float, x2: float, y2: float) -> float:
    """Evaluate a CSS cubic-bezier timing function at `progress` (0..1).

    Solves x(t) = progress by bisection (x is monotonic for x1, x2 in [0, 1]).
    """
    if progress <= 0.0:
        return 0.0
    if progress >= 1.0:
        return 1.0
    lo, hi = 0.0, 1.0
    t = progress
    for _ in range(_BEZIER_ITERATIONS):
        t = (lo + hi) / 2
        if _bezier(t, x1, x2) < progress:
            lo = t
        else:
            hi = t
    return _bezier(t, y1, y2)


def ease_out(progress: float) -> float:
    return cubic_bezier(progress, *_EASE_OUT)
