from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from .builder import PathBuilder, PathRecorder


class Geometry(ABC):
    """Anything that can describe its boundary to a path builder.

    Subclasses append their commands in a single pass and keep no state between
    calls, so emitting into two fresh builders yields the same commands.
    """

    @abstractmethod
    def emit_boundary(self, builder: PathBuilder) -> None:
        """Append the commands describing this shape's boundary to ``builder``."""


class GeometryBuilder:
    """Collects several shapes and emits them into one builder."""

    def __init__(self) -> None:
        self._shapes: List[Geometry] = []

    def add(self, shape: Geometry) -> "GeometryBuilder":
        if not isinstance(shape, Geometry):
            raise TypeError(f"{type(shape).__name__} does not implement Geometry.")
        self._shapes.append(shape)
        return self

    @property
    def shapes(self) -> tuple[Geometry, ...]:
        return tuple(self._shapes)

    def emit_into(self, builder: PathBuilder) -> None:
        for shape in self._shapes:
            shape.emit_boundary(builder)

    def build(self) -> PathRecorder:
        recorder = PathRecorder()
        self.emit_into(recorder)
        return recorder

    @classmethod
    def build_as(cls, shape: Geometry) -> PathRecorder:
        return cls().add(shape).build()

    def __len__(self) -> int:
        return len(self._shapes)
