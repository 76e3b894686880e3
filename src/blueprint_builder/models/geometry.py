"""Geometric primitives for building elements."""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict


class Point2D(BaseModel):
    """2D point in the XY plane (millimetres)."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float

    def distance_to(self, other: Point2D) -> float:
        """Euclidean distance to another point."""
        return math.sqrt((self.x - other.x) ** 2 + (self.y - other.y) ** 2)

    def lift(self, z: float) -> Point3D:
        """Same point placed at height z."""
        return Point3D(x=self.x, y=self.y, z=z)

    @classmethod
    def from_pair(cls, pair: tuple[float, float]) -> Point2D:
        return cls(x=pair[0], y=pair[1])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Point2D):
            return NotImplemented
        return math.isclose(self.x, other.x, abs_tol=1e-6) and math.isclose(
            self.y, other.y, abs_tol=1e-6
        )

    def __hash__(self) -> int:
        return hash((round(self.x, 6), round(self.y, 6)))


class Point3D(BaseModel):
    """3D point (millimetres)."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    z: float

    def distance_to(self, other: Point3D) -> float:
        """Euclidean distance to another point."""
        return math.sqrt(
            (self.x - other.x) ** 2
            + (self.y - other.y) ** 2
            + (self.z - other.z) ** 2
        )
