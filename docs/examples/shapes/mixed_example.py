"""Every shape kind in one scene."""

from __future__ import annotations

from shapekit.modeling import Circle, Ellipse, Line, Polygon, Rectangle, RegularPolygon


def build():
    return [
        Rectangle(),
        Circle(radius=0.5, center=(2.0, 0.0)),
        Ellipse(radii=(1.0, 0.5), center=(4.0, 0.0)),
        Polygon(points=[(6.0, -0.5), (7.0, -0.5), (6.5, 0.5)], closed=True),
        RegularPolygon(sides=5, center=(8.5, 0.0)),
        Line((0.0, -2.0), (8.5, -2.0)),
    ]
