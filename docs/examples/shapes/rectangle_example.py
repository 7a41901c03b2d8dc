"""Rectangles pivoted on different origins."""

from __future__ import annotations

from shapekit.modeling import CustomCenter, Rectangle, RectangleOrigin


def build():
    return [
        Rectangle(width=2.0, height=1.0),
        Rectangle(width=1.0, height=1.0, origin=RectangleOrigin.BOTTOM_LEFT),
        Rectangle(width=1.5, height=0.5, origin=CustomCenter((3.0, 2.0))),
    ]
