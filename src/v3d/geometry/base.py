"""
Base class for all geometries and the query surface they share.

Every primitive answers the same four questions about any other primitive.
The answers come from the pairwise routines registered in
:mod:`v3d.engine.dispatch`.
"""

from enum import Enum
from fractions import Fraction
from typing import TYPE_CHECKING, ClassVar, Optional

from v3d.core.precision import RoundingMode

if TYPE_CHECKING:
    from v3d.geometry.aabb import AABB


class Kind(Enum):
    """Primitive kinds used to index the dispatch tables."""

    POINT = "point"
    LINE = "line"
    RAY = "ray"
    SEGMENT = "segment"
    PLANE = "plane"
    TRIANGLE = "triangle"
    TETRAHEDRON = "tetrahedron"
    HULL = "hull"


class Geometry:
    """Base class for points, lines, planes, triangles, tetrahedra and hulls."""

    kind: ClassVar[Kind]

    @property
    def aabb(self) -> Optional["AABB"]:
        """Axis-aligned bounding box, or ``None`` for unbounded geometries."""
        return None

    def intersects(self, other: "Geometry") -> bool:
        """True if the two geometries share at least one point."""
        from v3d.engine import dispatch

        return dispatch.intersects(self, other)

    def get_intersection(self, other: "Geometry") -> Optional["Geometry"]:
        """
        The shared point set as a geometry, or ``None`` if there is none.

        Intersections in this kernel are linear, so the result is exact.

        Raises:
            UnsupportedOperationError: If no algorithm exists for the pair
        """
        from v3d.engine import dispatch

        return dispatch.get_intersection(self, other)

    def get_distance_squared(self, other: "Geometry") -> Fraction:
        """Exact squared minimum distance."""
        from v3d.engine import dispatch

        return dispatch.get_distance_squared(self, other)

    def get_distance(
        self,
        other: "Geometry",
        oom: int | None = None,
        rm: RoundingMode | None = None,
    ) -> Fraction:
        """
        Minimum distance rounded at ``oom``.

        The result is approximate unless the squared distance is a perfect
        square. Prefer ``get_distance_squared`` for comparisons.
        """
        from v3d.engine import dispatch

        return dispatch.get_distance(self, other, oom, rm)
