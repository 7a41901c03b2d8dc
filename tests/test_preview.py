from __future__ import annotations

import numpy as np
import pytest

from shapekit._config import SamplingSettings, UnitSettings
from shapekit.modeling.shapes import Circle, Line, Polygon, Rectangle, RegularPolygon
from shapekit.preview import (
    PathPreviewer,
    PreviewBackendError,
    collect_geometries,
    emit_outlines,
    outline_to_polydata,
)


def test_collect_geometries_flattens_nested_scene():
    shapes = collect_geometries([Rectangle(), (Circle(), [Line((0, 0), (1, 0))]), None])
    assert [type(shape) for shape in shapes] == [Rectangle, Circle, Line]


def test_collect_geometries_rejects_foreign_objects():
    with pytest.raises(PreviewBackendError):
        collect_geometries([Rectangle(), "not a shape"])


def test_collect_geometries_requires_shapes():
    with pytest.raises(PreviewBackendError):
        collect_geometries([])


def test_emit_outlines_one_path_per_shape():
    outlines = emit_outlines([Rectangle(), RegularPolygon(sides=5), Polygon()])
    assert len(outlines) == 3
    assert outlines[2].is_empty


@pytest.mark.preview
def test_outline_to_polydata_line_cells():
    outlines = emit_outlines([Rectangle(), Line((0, 0), (2, 0)), Polygon()])
    poly = outline_to_polydata(outlines, z=1.5)
    assert poly.n_lines == 2
    # Closed rectangle repeats its first corner; the open line does not.
    assert poly.n_points == 5 + 2
    assert np.allclose(poly.points[:, 2], 1.5)


@pytest.mark.preview
def test_outline_to_polydata_empty():
    poly = outline_to_polydata(emit_outlines([Polygon()]))
    assert poly.n_points == 0


@pytest.mark.preview
def test_previewer_uses_sampling_settings():
    previewer = PathPreviewer(
        console=None,
        unit_settings=UnitSettings(name="inches", label="in", scale_to_mm=25.4),
        sampling=SamplingSettings(segments_per_circle=12),
    )
    assert previewer.unit_label == "in"
    poly = previewer.build_polydata(Circle(radius=2.0))
    assert poly.n_lines == 1
    assert poly.n_points == 12
    assert np.allclose(np.linalg.norm(poly.points[:, :2], axis=1), 2.0)


@pytest.mark.preview
def test_previewer_rejects_degenerate_scene():
    previewer = PathPreviewer(console=None)
    with pytest.raises(PreviewBackendError):
        previewer.build_polydata([Polygon(), Circle(radius=0.0)])
