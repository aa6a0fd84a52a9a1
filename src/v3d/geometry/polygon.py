"""
Shared behaviour of planar convex shapes.

Triangles and coplanar convex hulls are both a cycle of vertices wound
counter-clockwise about a normal. Every vertex lives in one frame that the
shape owns, so ``translate`` only moves that frame.
"""

from fractions import Fraction
from functools import cached_property
from typing import TYPE_CHECKING, ClassVar, Sequence

from v3d.core.environment import Environment, resolve_precision
from v3d.core.precision import Rational, RationalSqrt, RoundingMode, round_rational
from v3d.geometry.base import Geometry
from v3d.geometry.plane import Plane
from v3d.geometry.point import Frame, Point
from v3d.geometry.segment import LineSegment
from v3d.geometry.vector import ZERO, Vector, rotation_matrix

if TYPE_CHECKING:
    from v3d.geometry.aabb import AABB
    from v3d.geometry.line import Line


def edge_side(a: Point, b: Point, pt: Point, n: Vector) -> Fraction:
    """Positive when ``pt`` is left of ``a -> b`` looking down ``n``."""
    return (b - a).cross(pt - a).dot(n)


class ConvexPolygon(Geometry):
    """
    Base class for planar convex shapes.

    Equality and hash are taken over the vertex positions, so they change
    when the shape is translated.

    Args:
        normal: Normal the vertices are wound counter-clockwise about
        points: Vertices in order
        env: Environment to draw an ``id`` from
    """

    # Cached fields that depend on the frame offset.
    _position_cache: ClassVar[tuple[str, ...]] = ("plane", "edges", "aabb", "centroid")

    def __init__(
        self,
        normal: Vector,
        points: Sequence[Point],
        env: Environment | None = None,
    ) -> None:
        self.frame = Frame()
        self.points: tuple[Point, ...] = tuple(p.rebase(self.frame) for p in points)
        self.normal = normal
        self.id = env.next_id() if env is not None else None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({', '.join(repr(p) for p in self.points)})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConvexPolygon):
            return NotImplemented
        return frozenset(self.points) == frozenset(other.points)

    def __hash__(self) -> int:
        return hash(frozenset(self.points))

    def __len__(self) -> int:
        return len(self.points)

    @cached_property
    def plane(self) -> Plane:
        return Plane(self.points[0], self.normal)

    @cached_property
    def edges(self) -> tuple[LineSegment, ...]:
        pts = self.points
        return tuple(LineSegment(pts[i], pts[(i + 1) % len(pts)]) for i in range(len(pts)))

    @cached_property
    def aabb(self) -> "AABB":
        from v3d.geometry.aabb import AABB

        return AABB.from_points(*self.points)

    @cached_property
    def centroid(self) -> Point:
        """Centre of mass of the enclosed area."""
        origin = self.points[0]
        total = Fraction(0)
        moment = ZERO
        for b, c in zip(self.points[1:], self.points[2:]):
            w = (b - origin).cross(c - origin).dot(self.normal)
            total += w
            moment = moment + (origin.vector + b.vector + c.vector) * (w / 3)
        return Point.at(moment / total)

    @property
    def vector_area(self) -> Vector:
        """Twice the area times the unit normal, exactly."""
        origin = self.points[0]
        area = ZERO
        for b, c in zip(self.points[1:], self.points[2:]):
            area = area + (b - origin).cross(c - origin)
        return area

    @property
    def area_squared(self) -> Fraction:
        return self.vector_area.magnitude_squared / 4

    def area(self, oom: int | None = None, rm: RoundingMode | None = None) -> Fraction:
        """Area rounded at ``oom``."""
        oom, rm = resolve_precision(oom, rm)
        return RationalSqrt(self.area_squared).to_fraction(oom, rm)

    def perimeter(self, oom: int | None = None, rm: RoundingMode | None = None) -> Fraction:
        """
        Perimeter rounded at ``oom``.

        Edge lengths are summed two places below ``oom`` before the final
        rounding, so the result can be off by one unit in the last place.
        """
        oom, rm = resolve_precision(oom, rm)
        total = sum((e.length(oom - 2, rm) for e in self.edges), Fraction(0))
        return round_rational(total, oom, rm)

    def contains(self, pt: Point) -> bool:
        """True if ``pt`` is inside or on the boundary."""
        if not self.plane.contains(pt):
            return False
        pts = self.points
        return all(
            edge_side(pts[i], pts[(i + 1) % len(pts)], pt, self.normal) >= 0
            for i in range(len(pts))
        )

    def translate(self, v: Vector) -> None:
        """Move the shape in place by moving its frame."""
        self.frame.translate(v)
        self._reset_cache()

    def rotated(
        self,
        axis: "Line",
        theta: Rational,
        oom: int | None = None,
        rm: RoundingMode | None = None,
    ) -> "ConvexPolygon":
        """
        A new shape turned ``theta`` radians about the line ``axis``.

        Every vertex goes through one rotation matrix whose entries are
        rounded at ``oom``, so the result is still planar and convex. This
        shape is left as it is and the new one has no ``id``.

        Raises:
            ConstructionError: If the rounded matrix collapses the shape,
                which only a very coarse ``oom`` can cause
        """
        rows = rotation_matrix(axis.v, theta, oom, rm)
        return self._from_vertices([pt.transformed(rows, axis.p) for pt in self.points])

    def _from_vertices(self, points: Sequence[Point]) -> "ConvexPolygon":
        raise NotImplementedError

    def _reset_cache(self) -> None:
        for name in self._position_cache:
            self.__dict__.pop(name, None)
