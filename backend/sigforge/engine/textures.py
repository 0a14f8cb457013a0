"""Repeating tile patterns painted over the background card.

The tile size is used directly as the pattern size in document units, so
10 reads as a fine texture and 100 as a coarse one.
"""

from __future__ import annotations

from sigforge.svg.serializer import element, fmt

# Dash pattern for the guide lines of practice grids
_GUIDE_DASH = "3,3"


def texture_id(texture: str, id_prefix: str = "") -> str:
    return f"{id_prefix}texture-{texture}"


def _line_paint(color: str, opacity: float, thickness: float) -> dict[str, object]:
    return {"stroke": color, "stroke-width": thickness, "stroke-opacity": opacity}


def _tile_children(texture: str, s: float, color: str, opacity: float, t: float) -> list[str]:
    half = s / 2
    paint = _line_paint(color, opacity, t)

    if texture == "grid":
        # Top and left edges of every tile form the grid
        return [element("path", {"d": f"M {fmt(s)} 0 L 0 0 0 {fmt(s)}", "fill": "none", **paint})]
    if texture == "dots":
        return [element("circle", {
            "cx": half, "cy": half, "r": t * 1.5, "fill": color, "fill-opacity": opacity,
        })]
    if texture == "lines":
        return [element("path", {"d": f"M 0 {fmt(half)} L {fmt(s)} {fmt(half)}", **paint})]
    if texture == "cross":
        q, q3 = s / 4, s * 0.75
        d = f"M {fmt(q)} {fmt(q)} L {fmt(q3)} {fmt(q3)} M {fmt(q3)} {fmt(q)} L {fmt(q)} {fmt(q3)}"
        return [element("path", {"d": d, **paint})]

    box = element("rect", {"width": s, "height": s, "fill": "none", **paint})
    center_cross = f"M{fmt(half)} 0 L{fmt(half)} {fmt(s)} M0 {fmt(half)} L{fmt(s)} {fmt(half)}"
    if texture == "tianzige":
        # 田字格: bordered box with a dashed center cross
        return [box, element("path", {"d": center_cross, **paint, "stroke-dasharray": _GUIDE_DASH})]
    if texture == "mizige":
        # 米字格: tianzige plus dashed diagonals
        d = f"M0 0 L{fmt(s)} {fmt(s)} M{fmt(s)} 0 L0 {fmt(s)} {center_cross}"
        return [box, element("path", {"d": d, **paint, "stroke-dasharray": _GUIDE_DASH})]
    return []


def texture_defs(
    texture: str,
    color: str,
    size: float,
    opacity: float,
    thickness: float = 1,
    id_prefix: str = "",
) -> str:
    """One <pattern> definition for the texture, or "" for none/unknown kinds."""
    if size <= 0:
        return ""
    children = _tile_children(texture, size, color, opacity, thickness)
    if not children:
        return ""
    return element(
        "pattern",
        {
            "id": texture_id(texture, id_prefix),
            "x": 0,
            "y": 0,
            "width": size,
            "height": size,
            "patternUnits": "userSpaceOnUse",
        },
        children,
    )
