"""
Conversion between v3d geometry and numpy arrays.

Arrays coming in are converted exactly: every float becomes the rational
it represents. Arrays going out are rounded at a precision context first,
so the floats are the nearest doubles to correctly rounded values.
"""

from typing import Any, Iterable

import numpy as np

from v3d.core.environment import resolve_precision
from v3d.core.exceptions import ConstructionError
from v3d.core.precision import RoundingMode, as_rational, round_rational
from v3d.geometry.aabb import AABB
from v3d.geometry.point import Point
from v3d.geometry.vector import Vector


class GeometryConverter:
    """
    Converter between v3d primitives and numpy arrays.

    Example:
        >>> pts = GeometryConverter.points_from_array(np.array([[0, 0, 0], [1, 2, 3]]))
        >>> GeometryConverter.points_to_array(pts, oom=0)
        array([[0., 0., 0.],
               [1., 2., 3.]])
    """

    @staticmethod
    def points_from_array(array: Any) -> list[Point]:
        """
        Build points from an ``(n, 3)`` array.

        Args:
            array: Array-like of shape ``(n, 3)``, integer or floating

        Returns:
            List of points with exact coordinates

        Raises:
            ConstructionError: If the array does not have shape ``(n, 3)``
        """
        data = np.asarray(array)
        if data.ndim != 2 or data.shape[1] != 3:
            raise ConstructionError(
                "Point array must have shape (n, 3)",
                details={"shape": list(data.shape)},
            )
        if not np.issubdtype(data.dtype, np.number):
            raise ConstructionError(
                "Point array must be numeric",
                details={"dtype": str(data.dtype)},
            )
        if np.issubdtype(data.dtype, np.floating) and not np.all(np.isfinite(data)):
            raise ConstructionError("Point array contains non-finite values")
        return [Point(*(as_rational(c.item()) for c in row)) for row in data]

    @staticmethod
    def vector_from_array(array: Any) -> Vector:
        data = np.asarray(array).reshape(-1)
        if data.shape != (3,):
            raise ConstructionError(
                "Vector array must have three components",
                details={"shape": list(np.asarray(array).shape)},
            )
        return Vector(*(as_rational(c.item()) for c in data))

    @staticmethod
    def points_to_array(
        points: Iterable[Point],
        oom: int | None = None,
        rm: RoundingMode | None = None,
    ) -> np.ndarray:
        """
        Coordinates as an ``(n, 3)`` float array, rounded at ``oom`` first.
        """
        oom, rm = resolve_precision(oom, rm)
        rows = [[float(round_rational(c, oom, rm)) for c in pt.coordinates] for pt in points]
        return np.array(rows, dtype=float).reshape(-1, 3)

    @staticmethod
    def aabb_from_array(array: Any) -> AABB:
        """Bounding box of an ``(n, 3)`` point array."""
        return AABB.from_points(*GeometryConverter.points_from_array(array))
