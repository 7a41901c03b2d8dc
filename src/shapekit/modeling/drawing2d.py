from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

import numpy as np

from .builder import Point, Winding


def _require_vec2(value: Sequence[float], label: str) -> np.ndarray:
    try:
        arr = np.asarray(value, dtype=float).reshape(2)
    except Exception as exc:
        raise ValueError(f"{label} must be a 2D coordinate.") from exc
    if not np.all(np.isfinite(arr)):
        raise ValueError(f"{label} must be finite.")
    return arr


def _sweep(start_deg: float, end_deg: float, clockwise: bool) -> tuple[float, float]:
    start = np.deg2rad(start_deg)
    end = np.deg2rad(end_deg)
    if clockwise:
        if end > start:
            end -= 2 * np.pi
    else:
        if end < start:
            end += 2 * np.pi
    return start, end


def _steps(span: float, segments_per_circle: int) -> int:
    if segments_per_circle < 3:
        raise ValueError("segments_per_circle must be >= 3.")
    return max(int(np.ceil(segments_per_circle * (abs(span) / (2 * np.pi)))), 2)


@dataclass(frozen=True)
class Line2D:
    start: np.ndarray
    end: np.ndarray

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", _require_vec2(self.start, "start"))
        object.__setattr__(self, "end", _require_vec2(self.end, "end"))

    def sample(self) -> np.ndarray:
        return np.vstack([self.start, self.end])


@dataclass(frozen=True)
class Arc2D:
    center: np.ndarray
    radius: float
    start_angle_deg: float
    end_angle_deg: float
    clockwise: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "center", _require_vec2(self.center, "center"))
        if not np.isfinite(self.radius) or self.radius <= 0:
            raise ValueError("radius must be positive.")

    def sample(self, segments_per_circle: int) -> np.ndarray:
        start, end = _sweep(self.start_angle_deg, self.end_angle_deg, self.clockwise)
        angles = np.linspace(start, end, _steps(end - start, segments_per_circle), endpoint=True)
        x = self.center[0] + self.radius * np.cos(angles)
        y = self.center[1] + self.radius * np.sin(angles)
        return np.column_stack([x, y])


@dataclass(frozen=True)
class EllipseArc2D:
    """Elliptical arc; ``rotation`` is in radians, angles are parametric degrees."""

    center: np.ndarray
    radii: np.ndarray
    rotation: float
    start_angle_deg: float
    end_angle_deg: float
    clockwise: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "center", _require_vec2(self.center, "center"))
        object.__setattr__(self, "radii", _require_vec2(self.radii, "radii"))
        if np.any(self.radii <= 0):
            raise ValueError("radii must be positive.")

    def sample(self, segments_per_circle: int) -> np.ndarray:
        start, end = _sweep(self.start_angle_deg, self.end_angle_deg, self.clockwise)
        t = np.linspace(start, end, _steps(end - start, segments_per_circle), endpoint=True)
        local = np.column_stack([self.radii[0] * np.cos(t), self.radii[1] * np.sin(t)])
        c, s = np.cos(self.rotation), np.sin(self.rotation)
        rot = np.array([[c, -s], [s, c]])
        return local @ rot.T + self.center


Segment2D = Line2D | Arc2D | EllipseArc2D


@dataclass
class Path2D:
    segments: List[Segment2D] = field(default_factory=list)
    closed: bool = False

    @classmethod
    def from_points(cls, points: Iterable[Sequence[float]], closed: bool = True) -> "Path2D":
        pts = [_require_vec2(p, "point") for p in points]
        if len(pts) < 2:
            raise ValueError("Path2D requires at least two points.")
        segments = [Line2D(pts[i], pts[i + 1]) for i in range(len(pts) - 1)]
        if closed and not np.allclose(pts[0], pts[-1]):
            segments.append(Line2D(pts[-1], pts[0]))
        return cls(segments=segments, closed=closed)

    def sample(self, segments_per_circle: int = 64) -> np.ndarray:
        if not self.segments:
            return np.zeros((0, 2), dtype=float)
        points = []
        for idx, segment in enumerate(self.segments):
            if isinstance(segment, Line2D):
                seg_points = segment.sample()
            else:
                seg_points = segment.sample(segments_per_circle)
            if idx > 0 and seg_points.shape[0] > 0:
                seg_points = seg_points[1:]
            points.append(seg_points)
        pts = np.vstack(points)
        if self.closed and pts.shape[0] > 0 and not np.allclose(pts[0], pts[-1]):
            pts = np.vstack([pts, pts[0]])
        return pts

    @property
    def is_empty(self) -> bool:
        return not self.segments


class Path2DBuilder:
    """PathBuilder that turns each command into a :class:`Path2D` outline.

    Degenerate input (non-positive radii, fewer than two polygon points) yields an
    empty path rather than an error.
    """

    def __init__(self) -> None:
        self.paths: List[Path2D] = []

    def add_rectangle(self, origin: Point, width: float, height: float, winding: Winding) -> None:
        x0, y0 = float(origin[0]), float(origin[1])
        x1, y1 = x0 + float(width), y0 + float(height)
        if winding is Winding.POSITIVE:
            corners = [(x0, y0), (x1, y0), (x1, y1), (x0, y1)]
        else:
            corners = [(x0, y0), (x0, y1), (x1, y1), (x1, y0)]
        self.paths.append(Path2D.from_points(corners, closed=True))

    def add_circle(self, center: Point, radius: float, winding: Winding) -> None:
        if radius <= 0:
            self.paths.append(Path2D(closed=True))
            return
        clockwise = winding is Winding.NEGATIVE
        end = -360.0 if clockwise else 360.0
        arc = Arc2D(center=center, radius=float(radius), start_angle_deg=0.0, end_angle_deg=end, clockwise=clockwise)
        self.paths.append(Path2D(segments=[arc], closed=True))

    def add_ellipse(self, center: Point, radii: Point, rotation: float, winding: Winding) -> None:
        if radii[0] <= 0 or radii[1] <= 0:
            self.paths.append(Path2D(closed=True))
            return
        clockwise = winding is Winding.NEGATIVE
        end = -360.0 if clockwise else 360.0
        arc = EllipseArc2D(
            center=center,
            radii=radii,
            rotation=float(rotation),
            start_angle_deg=0.0,
            end_angle_deg=end,
            clockwise=clockwise,
        )
        self.paths.append(Path2D(segments=[arc], closed=True))

    def add_polygon(self, points: Sequence[Point], closed: bool) -> None:
        if len(points) < 2:
            self.paths.append(Path2D(closed=closed))
            return
        self.paths.append(Path2D.from_points(points, closed=closed))


__all__ = [
    "Arc2D",
    "EllipseArc2D",
    "Line2D",
    "Path2D",
    "Path2DBuilder",
]
