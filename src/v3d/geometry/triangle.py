"""
Triangles.
"""

from typing import Sequence

from v3d.core.environment import Environment
from v3d.core.exceptions import ConstructionError
from v3d.geometry.base import Kind
from v3d.geometry.point import Point
from v3d.geometry.polygon import ConvexPolygon
from v3d.geometry.segment import LineSegment


class Triangle(ConvexPolygon):
    """
    The triangle ``p, q, r``.

    The normal is ``(q - p) x (r - p)``, so the vertices are counter-clockwise
    about it.

    Args:
        p, q, r: Vertices. They are re-expressed in a frame owned by the
            triangle.
        env: Environment to draw an ``id`` from

    Raises:
        ConstructionError: If the points are collinear
    """

    kind = Kind.TRIANGLE

    def __init__(self, p: Point, q: Point, r: Point, env: Environment | None = None) -> None:
        n = (q - p).cross(r - p)
        if n.is_zero():
            raise ConstructionError(
                "Triangle points are collinear",
                details={"points": [repr(p), repr(q), repr(r)]},
            )
        super().__init__(n, (p, q, r), env)

    @property
    def p(self) -> Point:
        return self.points[0]

    @property
    def q(self) -> Point:
        return self.points[1]

    @property
    def r(self) -> Point:
        return self.points[2]

    @property
    def pq(self) -> LineSegment:
        return self.edges[0]

    @property
    def qr(self) -> LineSegment:
        return self.edges[1]

    @property
    def rp(self) -> LineSegment:
        return self.edges[2]

    @property
    def triangles(self) -> tuple["Triangle", ...]:
        return (self,)

    def _from_vertices(self, points: Sequence[Point]) -> "Triangle":
        return Triangle(*points)
