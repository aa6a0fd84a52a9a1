"""
Coplanar convex hulls.

The hull is built by recursive partitioning. The two points furthest apart
among the per-axis extremes form a diameter, which splits the other points
into the two sides of the plane through the diameter spanned by the normal.
Each side is solved on its own: the point furthest from the current edge is
a hull vertex, the points inside the triangle it forms with the edge are
discarded, and the two new edges are solved recursively.
"""

from functools import cached_property
from typing import Sequence

from v3d.core.environment import Environment
from v3d.core.exceptions import ConstructionError
from v3d.core.logging import get_logger
from v3d.geometry.base import Geometry, Kind
from v3d.geometry.point import Point
from v3d.geometry.polygon import ConvexPolygon, edge_side
from v3d.geometry.segment import LineSegment
from v3d.geometry.triangle import Triangle
from v3d.geometry.vector import Vector

logger = get_logger(__name__)


def is_rectangle(p: Point, q: Point, r: Point, s: Point) -> bool:
    """True if ``p, q, r, s`` in order are the corners of a rectangle."""
    pq = q - p
    return pq == (r - s) and not pq.is_zero() and pq.dot(r - q) == 0 and r != q


def _unique(points: Sequence[Point]) -> list[Point]:
    seen = set()
    result = []
    for pt in points:
        if pt not in seen:
            seen.add(pt)
            result.append(pt)
    return result


def _diameter(points: Sequence[Point]) -> tuple[Point, Point, int]:
    """The pair of per-axis extremes furthest apart, and its axis."""
    best = None
    for axis in range(3):
        # Ties break on the other axes so that each extreme is a hull vertex.
        def key(pt: Point, axis: int = axis) -> tuple:
            return (pt[axis], pt[(axis + 1) % 3], pt[(axis + 2) % 3])

        lo = min(points, key=key)
        hi = max(points, key=key)
        d2 = lo.distance_squared(hi)
        if best is None or d2 > best[0]:
            best = (d2, lo, hi, axis)
    return best[1], best[2], best[3]


def _right_of(a: Point, b: Point, points: Sequence[Point], n: Vector) -> list[Point]:
    # Strictly right of a -> b; points on the line are never hull vertices.
    return [pt for pt in points if edge_side(a, b, pt, n) < 0]


def _quick(a: Point, b: Point, points: list[Point], n: Vector) -> list[Point]:
    """Hull vertices strictly between ``a`` and ``b`` on the right of ``a -> b``."""
    if not points:
        return []
    if len(points) == 1:
        return points
    c = min(points, key=lambda pt: edge_side(a, b, pt, n))
    # Points inside triangle a, c, b are on neither outer side.
    return (
        _quick(a, c, _right_of(a, c, points, n), n)
        + [c]
        + _quick(c, b, _right_of(c, b, points, n), n)
    )


def convex_hull(n: Vector, points: Sequence[Point]) -> list[Point]:
    """
    Vertices of the convex hull of coplanar ``points``, counter-clockwise
    about ``n``.

    Points that lie on a hull edge between two vertices are not returned.

    Raises:
        ConstructionError: If there are fewer than three distinct points,
            the points are collinear, or they do not lie in a plane normal
            to ``n``
    """
    if n.is_zero():
        raise ConstructionError("Hull normal must be non-zero")
    pts = _unique(points)
    if len(pts) < 3:
        raise ConstructionError(
            "Convex hull needs at least three distinct points",
            details={"count": len(pts)},
        )
    origin = pts[0]
    if any((pt - origin).dot(n) != 0 for pt in pts):
        raise ConstructionError(
            "Hull points are not coplanar with the normal",
            details={"normal": repr(n)},
        )

    a, b, axis = _diameter(pts)
    right = _right_of(a, b, pts, n)
    left = _right_of(b, a, pts, n)
    if not right and not left:
        raise ConstructionError("Hull points are collinear", details={"count": len(pts)})

    hull = [a] + _quick(a, b, right, n) + [b] + _quick(b, a, left, n)
    logger.debug("hull_built", points=len(pts), vertices=len(hull), diameter_axis=axis)
    return hull


class ConvexHullCoplanar(ConvexPolygon):
    """
    The convex hull of a set of coplanar points.

    Args:
        n: Normal of the plane the points lie in. The hull is wound
            counter-clockwise about it.
        *points: Input points. Duplicates and interior points are dropped.
        env: Environment to draw an ``id`` from

    Raises:
        ConstructionError: If the points do not span a polygon

    Example:
        >>> hull = ConvexHullCoplanar(Vector(0, 0, 1), Point(0, 0), Point(2, 0), Point(1, 1), Point(1, 0))
        >>> len(hull.points)
        3
    """

    kind = Kind.HULL

    _position_cache = ConvexPolygon._position_cache + ("triangles",)

    def __init__(self, n: Vector, *points: Point, env: Environment | None = None) -> None:
        super().__init__(n, convex_hull(n, points), env)

    @classmethod
    def from_triangles(cls, *triangles: Triangle, env: Environment | None = None) -> "ConvexHullCoplanar":
        """
        Hull of the vertices of coplanar triangles, oriented by the first.

        Raises:
            ConstructionError: If no triangles are given
        """
        if not triangles:
            raise ConstructionError("Convex hull needs at least one triangle")
        points = [pt for t in triangles for pt in t.points]
        return cls(triangles[0].normal, *points, env=env)

    @cached_property
    def triangles(self) -> tuple[Triangle, ...]:
        """Fan triangulation from the first vertex."""
        first = self.points[0]
        return tuple(Triangle(first, b, c) for b, c in zip(self.points[1:], self.points[2:]))

    def is_triangle(self) -> bool:
        return len(self.points) == 3

    def is_rectangle(self) -> bool:
        return len(self.points) == 4 and is_rectangle(*self.points)

    def simplify(self) -> "ConvexPolygon":
        """A Triangle if the hull has three vertices, otherwise the hull."""
        if self.is_triangle():
            return Triangle(*self.points)
        return self

    def contains_point(self, pt: Point) -> bool:
        return self.contains(pt)

    def _from_vertices(self, points: Sequence[Point]) -> "ConvexHullCoplanar":
        # Consecutive hull vertices are never collinear.
        a, b, c = points[:3]
        return ConvexHullCoplanar((b - a).cross(c - a), *points)


def hull_geometry(*points: Point, normal: Vector | None = None) -> Geometry:
    """
    The convex hull of coplanar points as the simplest geometry.

    Returns:
        A Point, LineSegment, Triangle or ConvexHullCoplanar

    Raises:
        ConstructionError: If no points are given
    """
    pts = _unique(points)
    if not pts:
        raise ConstructionError("Cannot build a hull from no points")
    if len(pts) == 1:
        return pts[0]

    origin = pts[0]
    direction = pts[1] - origin
    if normal is None:
        for pt in pts[2:]:
            cross = direction.cross(pt - origin)
            if not cross.is_zero():
                normal = cross
                break
    if normal is None or all(direction.cross(pt - origin).is_zero() for pt in pts[2:]):
        lo = min(pts, key=lambda pt: (pt - origin).dot(direction))
        hi = max(pts, key=lambda pt: (pt - origin).dot(direction))
        return LineSegment(lo, hi)
    return ConvexHullCoplanar(normal, *pts).simplify()

