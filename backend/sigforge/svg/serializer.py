"""Write clean SVG markup: number formatting, element lines, document wrapper."""

from __future__ import annotations

from typing import Any
from xml.sax.saxutils import escape


def fmt(value: float, digits: int = 2) -> str:
    """Shortest fixed-point form: 50.0 → "50", 12.3456 → "12.35", -0.0 → "0"."""
    text = f"{float(value):.{digits}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        return "0"
    return text


# Attributes are always double-quoted
_ATTR_ENTITIES = {'"': "&quot;"}


def _attr_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return fmt(value)
    return escape(str(value), _ATTR_ENTITIES)


def element(tag: str, attrs: dict[str, Any], children: list[str] | None = None) -> str:
    """Render one element; attributes whose value is None are dropped, the rest escaped."""
    attr_str = " ".join(f'{k}="{_attr_value(v)}"' for k, v in attrs.items() if v is not None)
    head = f"<{tag} {attr_str}" if attr_str else f"<{tag}"
    if not children:
        return f"{head}/>"
    inner = "\n".join(f"  {c}" for c in children)
    return f"{head}>\n{inner}\n</{tag}>"


def serialize_svg(
    viewbox: tuple[float, float, float, float],
    defs: list[str],
    body: list[str],
    css: list[str] | None = None,
) -> str:
    """Generate a standalone SVG document sized to its viewBox."""
    x, y, w, h = viewbox
    lines = [
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="{fmt(x)} {fmt(y)} {fmt(w)} {fmt(h)}"'
        f' width="{fmt(w)}" height="{fmt(h)}">',
    ]

    if defs or css:
        lines.append("<defs>")
        lines.extend(defs)
        if css:
            lines.append("<style>")
            lines.extend(css)
            lines.append("</style>")
        lines.append("</defs>")

    lines.extend(body)
    lines.append("</svg>")
    return "\n".join(lines)
