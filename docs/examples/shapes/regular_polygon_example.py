"""Regular polygons sized by radius, apothem and side length."""

from __future__ import annotations

from shapekit.modeling import Apothem, Radius, RegularPolygon, SideLength


def build():
    return [
        RegularPolygon(sides=3, center=(-3.0, 0.0), feature=Radius(1.0)),
        RegularPolygon(sides=6, center=(0.0, 0.0), feature=Apothem(1.0)),
        RegularPolygon(sides=8, center=(3.0, 0.0), feature=SideLength(0.75)),
    ]
