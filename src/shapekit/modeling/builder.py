"""Path builder surface consumed by shapes, plus a recording implementation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, NamedTuple, Protocol, Sequence, Tuple, Union

import numpy as np


class Point(NamedTuple):
    """Point in the builder's coordinate space."""

    x: float
    y: float


class Winding(Enum):
    """Traversal direction of a closed boundary."""

    POSITIVE = "positive"
    NEGATIVE = "negative"


def convert(point: Sequence[float]) -> Point:
    """Map a host 2D vector onto the builder's point type."""

    x, y = np.asarray(point, dtype=float).reshape(2)
    return Point(float(x), float(y))


class PathBuilder(Protocol):
    """Commands a shape may issue while emitting its boundary."""

    def add_rectangle(self, origin: Point, width: float, height: float, winding: Winding) -> None:
        ...

    def add_circle(self, center: Point, radius: float, winding: Winding) -> None:
        ...

    def add_ellipse(self, center: Point, radii: Point, rotation: float, winding: Winding) -> None:
        ...

    def add_polygon(self, points: Sequence[Point], closed: bool) -> None:
        ...


@dataclass(frozen=True)
class RectangleCommand:
    origin: Point
    width: float
    height: float
    winding: Winding


@dataclass(frozen=True)
class CircleCommand:
    center: Point
    radius: float
    winding: Winding


@dataclass(frozen=True)
class EllipseCommand:
    center: Point
    radii: Point
    rotation: float
    winding: Winding


@dataclass(frozen=True)
class PolygonCommand:
    points: Tuple[Point, ...]
    closed: bool


PathCommand = Union[RectangleCommand, CircleCommand, EllipseCommand, PolygonCommand]


@dataclass
class PathRecorder:
    """PathBuilder that keeps every command it receives, in order."""

    commands: List[PathCommand] = field(default_factory=list)

    def add_rectangle(self, origin: Point, width: float, height: float, winding: Winding) -> None:
        self.commands.append(RectangleCommand(Point(*origin), float(width), float(height), winding))

    def add_circle(self, center: Point, radius: float, winding: Winding) -> None:
        self.commands.append(CircleCommand(Point(*center), float(radius), winding))

    def add_ellipse(self, center: Point, radii: Point, rotation: float, winding: Winding) -> None:
        self.commands.append(EllipseCommand(Point(*center), Point(*radii), float(rotation), winding))

    def add_polygon(self, points: Sequence[Point], closed: bool) -> None:
        self.commands.append(PolygonCommand(tuple(Point(*p) for p in points), bool(closed)))

    def replay(self, builder: PathBuilder) -> None:
        """Issue the recorded commands again on another builder."""

        for command in self.commands:
            if isinstance(command, RectangleCommand):
                builder.add_rectangle(command.origin, command.width, command.height, command.winding)
            elif isinstance(command, CircleCommand):
                builder.add_circle(command.center, command.radius, command.winding)
            elif isinstance(command, EllipseCommand):
                builder.add_ellipse(command.center, command.radii, command.rotation, command.winding)
            else:
                builder.add_polygon(command.points, command.closed)

    def clear(self) -> None:
        self.commands.clear()

    def __len__(self) -> int:
        return len(self.commands)

    def __iter__(self) -> Iterator[PathCommand]:
        return iter(self.commands)


def command_to_dict(command: PathCommand) -> dict[str, object]:
    """Return a JSON-friendly description of a recorded command."""

    if isinstance(command, RectangleCommand):
        return {
            "command": "add_rectangle",
            "origin": list(command.origin),
            "width": command.width,
            "height": command.height,
            "winding": command.winding.value,
        }
    if isinstance(command, CircleCommand):
        return {
            "command": "add_circle",
            "center": list(command.center),
            "radius": command.radius,
            "winding": command.winding.value,
        }
    if isinstance(command, EllipseCommand):
        return {
            "command": "add_ellipse",
            "center": list(command.center),
            "radii": list(command.radii),
            "rotation": command.rotation,
            "winding": command.winding.value,
        }
    return {
        "command": "add_polygon",
        "points": [list(p) for p in command.points],
        "closed": command.closed,
    }


__all__ = [
    "CircleCommand",
    "EllipseCommand",
    "PathBuilder",
    "PathCommand",
    "PathRecorder",
    "Point",
    "PolygonCommand",
    "RectangleCommand",
    "Winding",
    "command_to_dict",
    "convert",
]
