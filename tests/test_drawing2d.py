from __future__ import annotations

import numpy as np
import pytest

from shapekit.modeling.builder import Point, Winding
from shapekit.modeling.drawing2d import (
    Arc2D,
    EllipseArc2D,
    Line2D,
    Path2D,
    Path2DBuilder,
)
from shapekit.modeling.geometry import GeometryBuilder
from shapekit.modeling.shapes import Circle, Line, Polygon, Rectangle, RectangleOrigin, RegularPolygon


def test_line2d_sample_positive():
    line = Line2D(start=(0, 0), end=(1, 1))
    pts = line.sample()
    assert pts.shape == (2, 2)
    assert np.allclose(pts[0], [0, 0])
    assert np.allclose(pts[1], [1, 1])


def test_line2d_invalid_coordinate():
    with pytest.raises(ValueError):
        Line2D(start=(0, 0, 0), end=(1, 1))


def test_arc2d_sample_positive():
    arc = Arc2D(center=(0, 0), radius=1.0, start_angle_deg=0, end_angle_deg=90)
    pts = arc.sample(segments_per_circle=32)
    assert pts.shape[1] == 2
    assert np.allclose(pts[0], [1.0, 0.0], atol=1e-6)
    assert np.allclose(pts[-1], [0.0, 1.0], atol=1e-6)


def test_arc2d_invalid_radius():
    with pytest.raises(ValueError):
        Arc2D(center=(0, 0), radius=0.0, start_angle_deg=0, end_angle_deg=90)


def test_arc2d_rejects_coarse_sampling():
    arc = Arc2D(center=(0, 0), radius=1.0, start_angle_deg=0, end_angle_deg=90)
    with pytest.raises(ValueError):
        arc.sample(segments_per_circle=2)


def test_ellipse_arc_rotation():
    arc = EllipseArc2D(center=(1, 1), radii=(2, 1), rotation=np.pi / 2, start_angle_deg=0, end_angle_deg=360)
    pts = arc.sample(segments_per_circle=16)
    # The major axis now points along +y.
    assert np.allclose(pts[0], [1.0, 3.0])
    assert np.allclose(pts[0], pts[-1])


def test_ellipse_arc_invalid_radii():
    with pytest.raises(ValueError):
        EllipseArc2D(center=(0, 0), radii=(1, 0), rotation=0.0, start_angle_deg=0, end_angle_deg=360)


def test_path2d_open_closed():
    open_path = Path2D.from_points([(0, 0), (1, 0.5), (2, 0)], closed=False)
    closed_path = Path2D.from_points([(0, 0), (1, 0), (1, 1), (0, 1)], closed=True)
    assert not open_path.closed
    assert closed_path.closed
    open_pts = open_path.sample()
    closed_pts = closed_path.sample()
    assert not np.allclose(open_pts[0], open_pts[-1])
    assert np.allclose(closed_pts[0], closed_pts[-1])


def test_path2d_requires_two_points():
    with pytest.raises(ValueError):
        Path2D.from_points([(0, 0)], closed=False)


def test_builder_rectangle_positive_winding():
    builder = Path2DBuilder()
    Rectangle(width=2.0, height=1.0, origin=RectangleOrigin.BOTTOM_LEFT).emit_boundary(builder)
    pts = builder.paths[0].sample()
    assert np.allclose(pts, [(0, 0), (2, 0), (2, 1), (0, 1), (0, 0)])


def test_builder_rectangle_negative_winding():
    builder = Path2DBuilder()
    builder.add_rectangle(Point(0, 0), 2.0, 1.0, Winding.NEGATIVE)
    pts = builder.paths[0].sample()
    assert np.allclose(pts, [(0, 0), (0, 1), (2, 1), (2, 0), (0, 0)])


@pytest.mark.parametrize("winding, sign", [(Winding.POSITIVE, 1.0), (Winding.NEGATIVE, -1.0)])
def test_builder_circle_winding(winding, sign):
    builder = Path2DBuilder()
    builder.add_circle(Point(1, 2), 3.0, winding)
    pts = builder.paths[0].sample(segments_per_circle=32)
    assert np.allclose(np.linalg.norm(pts - [1, 2], axis=1), 3.0)
    assert np.allclose(pts[0], pts[-1])
    # Second sample sits above the start point for counter-clockwise travel.
    assert np.sign(pts[1][1] - pts[0][1]) == sign


def test_builder_ellipse_outline():
    builder = Path2DBuilder()
    builder.add_ellipse(Point(0, 0), Point(2, 1), 0.0, Winding.POSITIVE)
    pts = builder.paths[0].sample(segments_per_circle=64)
    assert np.allclose((pts[:, 0] / 2) ** 2 + pts[:, 1] ** 2, 1.0)


def test_builder_degenerate_inputs_yield_empty_paths():
    builder = Path2DBuilder()
    Circle(radius=0.0).emit_boundary(builder)
    builder.add_ellipse(Point(0, 0), Point(-1, 1), 0.0, Winding.POSITIVE)
    Polygon().emit_boundary(builder)
    builder.add_polygon([Point(0, 0)], False)
    assert len(builder.paths) == 4
    assert all(path.is_empty for path in builder.paths)
    assert builder.paths[0].sample().shape == (0, 2)


def test_builder_line_and_regular_polygon():
    builder = Path2DBuilder()
    GeometryBuilder().add(Line((0, 0), (1, 1))).add(RegularPolygon(sides=6)).emit_into(builder)
    line, hexagon = builder.paths
    assert not line.closed
    assert np.allclose(line.sample(), [(0, 0), (1, 1)])
    assert hexagon.closed
    # Six vertices plus the repeated start point.
    assert hexagon.sample().shape == (7, 2)
