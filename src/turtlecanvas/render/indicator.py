"""Turtle glyph drawn over the drawing to show pose.

The glyph is a small triangle defined in turtle-local coordinates (see
``indicator`` in ``values.yml``). It is rotated by the heading, translated to
the position, filled, then outlined. Callers are responsible for restoring
the clean snapshot first so that only one glyph is ever visible.
"""

from __future__ import annotations

from typing import List

from turtlecanvas.core.geometry import Vector2, rotate
from turtlecanvas.render.surface import DrawingSurface
from turtlecanvas.settings.values import INDICATOR_STYLE, IndicatorStyle

__all__ = ["indicator_points", "draw_indicator"]


def indicator_points(
    position: Vector2, heading: float, style: IndicatorStyle = INDICATOR_STYLE
) -> List[Vector2]:
    """Return the glyph outline in surface coordinates."""
    return [position + rotate(Vector2(x, y), heading) for x, y in style.points]


def draw_indicator(
    surface: DrawingSurface,
    position: Vector2,
    heading: float,
    style: IndicatorStyle = INDICATOR_STYLE,
) -> None:
    pts = indicator_points(position, heading, style)
    surface.begin_path()
    surface.move_to(pts[0].x, pts[0].y)
    for p in pts[1:]:
        surface.line_to(p.x, p.y)
    surface.close_path()
    surface.fill(style.fill)
    surface.stroke(style.outline, style.outline_width)
