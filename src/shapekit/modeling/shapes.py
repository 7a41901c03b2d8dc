"""Common shapes that can be emitted into a path builder.

Every class here implements :class:`~shapekit.modeling.geometry.Geometry`. Numeric
parameters are forwarded to the builder as given; only the regular polygon's side
count is checked.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence

import numpy as np

from shapekit.validation import require_sides

from .builder import PathBuilder, Point, Winding, convert
from .geometry import Geometry


def _to_point(value: Sequence[float]) -> Point:
    try:
        return convert(value)
    except (TypeError, ValueError) as exc:
        raise ValueError("Expected a 2D coordinate.") from exc


def _to_points(values: Iterable[Sequence[float]]) -> tuple[Point, ...]:
    return tuple(_to_point(v) for v in values)


class RectangleOrigin(Enum):
    """Where the pivot of a :class:`Rectangle` sits."""

    CENTER = "center"
    BOTTOM_LEFT = "bottom_left"
    BOTTOM_RIGHT = "bottom_right"
    TOP_RIGHT = "top_right"
    TOP_LEFT = "top_left"


@dataclass(frozen=True)
class CustomCenter:
    """Pivot placed so the rectangle is centered on ``center``."""

    center: Point

    def __post_init__(self) -> None:
        object.__setattr__(self, "center", _to_point(self.center))


Origin = RectangleOrigin | CustomCenter


@dataclass(frozen=True)
class Rectangle(Geometry):
    width: float = 1.0
    height: float = 1.0
    origin: Origin = RectangleOrigin.CENTER

    @classmethod
    def default(cls) -> "Rectangle":
        return cls()

    def anchor(self) -> Point:
        """Lower-left corner of the rectangle for the configured origin."""

        w, h = float(self.width), float(self.height)
        origin = self.origin
        if isinstance(origin, CustomCenter):
            cx, cy = origin.center
            return Point(cx - w / 2.0, cy - h / 2.0)
        if origin is RectangleOrigin.CENTER:
            return Point(-w / 2.0, -h / 2.0)
        if origin is RectangleOrigin.BOTTOM_LEFT:
            return Point(0.0, 0.0)
        if origin is RectangleOrigin.BOTTOM_RIGHT:
            return Point(-w, 0.0)
        if origin is RectangleOrigin.TOP_RIGHT:
            return Point(-w, -h)
        if origin is RectangleOrigin.TOP_LEFT:
            return Point(0.0, -h)
        raise TypeError(f"Unknown rectangle origin: {origin!r}")

    def emit_boundary(self, builder: PathBuilder) -> None:
        builder.add_rectangle(self.anchor(), float(self.width), float(self.height), Winding.POSITIVE)


@dataclass(frozen=True)
class Circle(Geometry):
    radius: float = 1.0
    center: Point = Point(0.0, 0.0)

    def __post_init__(self) -> None:
        object.__setattr__(self, "center", _to_point(self.center))

    @classmethod
    def default(cls) -> "Circle":
        return cls()

    def emit_boundary(self, builder: PathBuilder) -> None:
        builder.add_circle(convert(self.center), float(self.radius), Winding.POSITIVE)


@dataclass(frozen=True)
class Ellipse(Geometry):
    radii: Point = Point(1.0, 1.0)
    center: Point = Point(0.0, 0.0)

    def __post_init__(self) -> None:
        object.__setattr__(self, "radii", _to_point(self.radii))
        object.__setattr__(self, "center", _to_point(self.center))

    @classmethod
    def default(cls) -> "Ellipse":
        return cls()

    def emit_boundary(self, builder: PathBuilder) -> None:
        builder.add_ellipse(convert(self.center), convert(self.radii), 0.0, Winding.POSITIVE)


@dataclass(frozen=True)
class Polygon(Geometry):
    points: tuple[Point, ...] = ()
    closed: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "points", _to_points(self.points))

    @classmethod
    def default(cls) -> "Polygon":
        return cls()

    def emit_boundary(self, builder: PathBuilder) -> None:
        builder.add_polygon([convert(p) for p in self.points], self.closed)


@dataclass(frozen=True)
class Radius:
    """Radius of the polygon's circumcircle."""

    value: float


@dataclass(frozen=True)
class Apothem:
    """Radius of the polygon's incircle."""

    value: float


@dataclass(frozen=True)
class SideLength:
    """Length of one side of the polygon."""

    value: float


RegularPolygonFeature = Radius | Apothem | SideLength


@dataclass(frozen=True)
class RegularPolygon(Geometry):
    sides: int = 3
    center: Point = Point(0.0, 0.0)
    feature: RegularPolygonFeature = Radius(1.0)

    def __post_init__(self) -> None:
        object.__setattr__(self, "center", _to_point(self.center))

    @classmethod
    def default(cls) -> "RegularPolygon":
        return cls()

    def radius(self) -> float:
        """Circumradius derived from the configured feature."""

        ratio = np.pi / require_sides(self.sides)
        feature = self.feature
        if isinstance(feature, Radius):
            return float(feature.value)
        if isinstance(feature, Apothem):
            return float(feature.value * np.tan(ratio) / np.sin(ratio))
        if isinstance(feature, SideLength):
            return float(feature.value / (2.0 * np.sin(ratio)))
        raise TypeError(f"Unknown regular polygon feature: {feature!r}")

    def vertices(self) -> np.ndarray:
        """Return the (sides, 2) vertex array in counter-clockwise order.

        The first vertex is rotated by half the internal angle so the bottom edge
        lies parallel to the x-axis.
        """

        n = require_sides(self.sides)
        radius = self.radius()
        internal = (n - 2) * np.pi / n
        offset = -internal / 2.0
        step = 2.0 * np.pi / n
        angles = np.arange(n) * step + offset
        return np.column_stack([np.cos(angles), np.sin(angles)]) * radius + np.asarray(self.center)

    def emit_boundary(self, builder: PathBuilder) -> None:
        builder.add_polygon([convert(p) for p in self.vertices()], True)


@dataclass(frozen=True)
class Line(Geometry):
    """A line segment between two points."""

    start: Point
    end: Point

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", _to_point(self.start))
        object.__setattr__(self, "end", _to_point(self.end))

    def emit_boundary(self, builder: PathBuilder) -> None:
        builder.add_polygon([convert(self.start), convert(self.end)], False)


__all__ = [
    "Apothem",
    "Circle",
    "CustomCenter",
    "Ellipse",
    "Line",
    "Origin",
    "Polygon",
    "Radius",
    "Rectangle",
    "RectangleOrigin",
    "RegularPolygon",
    "RegularPolygonFeature",
    "SideLength",
]
