from __future__ import annotations

import operator


class ValidationError(ValueError):
    """Raised when validation constraints are violated."""


class ShapeError(ValidationError):
    """Raised when a shape cannot produce a boundary at all."""


def require_sides(sides: int) -> int:
    try:
        sides = operator.index(sides)
    except TypeError as exc:
        raise ShapeError(f"Polygon side count must be an integer, got {sides!r}.") from exc
    if sides < 3:
        raise ShapeError("Polygons must have at least 3 sides.")
    return sides
