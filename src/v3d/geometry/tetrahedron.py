"""
Tetrahedra.
"""

from fractions import Fraction
from functools import cached_property
from typing import TYPE_CHECKING

from v3d.core.environment import Environment, resolve_precision
from v3d.core.exceptions import ConstructionError
from v3d.core.precision import Rational, RoundingMode, round_rational
from v3d.geometry.base import Geometry, Kind
from v3d.geometry.point import Frame, Point
from v3d.geometry.segment import LineSegment
from v3d.geometry.triangle import Triangle
from v3d.geometry.vector import Vector, rotation_matrix

if TYPE_CHECKING:
    from v3d.geometry.aabb import AABB
    from v3d.geometry.line import Line


def orientation(p: Point, q: Point, r: Point, s: Point) -> Fraction:
    """Six times the signed volume of ``p, q, r, s``."""
    return (q - p).cross(r - p).dot(s - p)


class Tetrahedron(Geometry):
    """
    The tetrahedron ``p, q, r, s``.

    The faces are ``pqr, qsr, spr, psq``. ``q`` and ``r`` are swapped on
    construction if needed so that every face normal points outward.

    Raises:
        ConstructionError: If the points are coplanar
    """

    kind = Kind.TETRAHEDRON

    _position_cache = ("faces", "edges", "aabb", "centroid")

    def __init__(
        self, p: Point, q: Point, r: Point, s: Point, env: Environment | None = None
    ) -> None:
        orient = orientation(p, q, r, s)
        if orient == 0:
            raise ConstructionError(
                "Tetrahedron points are coplanar",
                details={"points": [repr(p), repr(q), repr(r), repr(s)]},
            )
        if orient > 0:
            q, r = r, q
        self.frame = Frame()
        self.p, self.q, self.r, self.s = (pt.rebase(self.frame) for pt in (p, q, r, s))
        self.id = env.next_id() if env is not None else None

    def __repr__(self) -> str:
        return f"Tetrahedron(p={self.p!r}, q={self.q!r}, r={self.r!r}, s={self.s!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tetrahedron):
            return NotImplemented
        return frozenset(self.points) == frozenset(other.points)

    def __hash__(self) -> int:
        return hash(frozenset(self.points))

    @property
    def points(self) -> tuple[Point, ...]:
        return (self.p, self.q, self.r, self.s)

    @cached_property
    def faces(self) -> tuple[Triangle, Triangle, Triangle, Triangle]:
        p, q, r, s = self.points
        return (Triangle(p, q, r), Triangle(q, s, r), Triangle(s, p, r), Triangle(p, s, q))

    @cached_property
    def edges(self) -> tuple[LineSegment, ...]:
        p, q, r, s = self.points
        return (
            LineSegment(p, q),
            LineSegment(q, r),
            LineSegment(r, p),
            LineSegment(p, s),
            LineSegment(q, s),
            LineSegment(r, s),
        )

    @cached_property
    def aabb(self) -> "AABB":
        from v3d.geometry.aabb import AABB

        return AABB.from_points(*self.points)

    @cached_property
    def centroid(self) -> Point:
        return Point.at((self.p.vector + self.q.vector + self.r.vector + self.s.vector) / 4)

    @property
    def volume(self) -> Fraction:
        """Exact volume."""
        return abs(orientation(self.p, self.q, self.r, self.s)) / 6

    def area(self, oom: int | None = None, rm: RoundingMode | None = None) -> Fraction:
        """Surface area rounded at ``oom``."""
        oom, rm = resolve_precision(oom, rm)
        total = sum((f.area(oom - 2, rm) for f in self.faces), Fraction(0))
        return round_rational(total, oom, rm)

    def contains(self, pt: Point) -> bool:
        """True if ``pt`` is inside or on the boundary."""
        return all(face.plane.side(pt) <= 0 for face in self.faces)

    def translate(self, v: Vector) -> None:
        """Move the tetrahedron in place by moving its frame."""
        self.frame.translate(v)
        for name in self._position_cache:
            self.__dict__.pop(name, None)

    def rotated(
        self,
        axis: "Line",
        theta: Rational,
        oom: int | None = None,
        rm: RoundingMode | None = None,
    ) -> "Tetrahedron":
        """
        A new tetrahedron turned ``theta`` radians about the line ``axis``.

        All four vertices go through one rotation matrix rounded at ``oom``.
        This tetrahedron is left as it is and the new one has no ``id``.
        """
        rows = rotation_matrix(axis.v, theta, oom, rm)
        return Tetrahedron(*(pt.transformed(rows, axis.p) for pt in self.points))
