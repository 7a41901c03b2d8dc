"""Modeling utilities: shapes, the geometry contract, and path builders."""

from __future__ import annotations

from .builder import PathBuilder, PathRecorder, Point, Winding, convert
from .geometry import Geometry, GeometryBuilder
from .shapes import (
    Apothem,
    Circle,
    CustomCenter,
    Ellipse,
    Line,
    Polygon,
    Radius,
    Rectangle,
    RectangleOrigin,
    RegularPolygon,
    RegularPolygonFeature,
    SideLength,
)
from .drawing2d import Path2D, Path2DBuilder

__all__ = [
    "Apothem",
    "Circle",
    "CustomCenter",
    "Ellipse",
    "Geometry",
    "GeometryBuilder",
    "Line",
    "Path2D",
    "Path2DBuilder",
    "PathBuilder",
    "PathRecorder",
    "Point",
    "Polygon",
    "Radius",
    "Rectangle",
    "RectangleOrigin",
    "RegularPolygon",
    "RegularPolygonFeature",
    "SideLength",
    "Winding",
    "convert",
]
