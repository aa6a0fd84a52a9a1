"""
Infinite lines and the parametric machinery shared by rays and segments.

A linear geometry is ``p + t * v`` for ``t`` in an interval. The interval is
unbounded for a :class:`Line`, ``[0, inf)`` for a ray and ``[0, 1]`` for a
segment. Bounds of ``None`` mean unbounded.
"""

from fractions import Fraction
from typing import ClassVar

from v3d.core.exceptions import ConstructionError
from v3d.core.precision import Rational, RoundingMode
from v3d.geometry.base import Geometry, Kind
from v3d.geometry.point import Point
from v3d.geometry.vector import Vector, rotation_matrix

Bound = Fraction | None


def intersect_denominator(
    p1: Point, p2: Point, p3: Point, p4: Point, axes: tuple[int, int] = (0, 1)
) -> Fraction:
    """
    Determinant of the line through ``p1, p2`` and the line through ``p3, p4``
    projected onto ``axes``.

    ``(x1 - x2)(y3 - y4) - (y1 - y2)(x3 - x4)``. Zero when the projections
    are parallel.
    """
    i, j = axes
    return (p1[i] - p2[i]) * (p3[j] - p4[j]) - (p1[j] - p2[j]) * (p3[i] - p4[i])


def intersect_parameter(
    p1: Point, p2: Point, p3: Point, p4: Point, axes: tuple[int, int] = (0, 1)
) -> Fraction | None:
    """
    Parameter along ``p1 -> p2`` where it crosses the line ``p3 -> p4`` in the
    projection onto ``axes``, or ``None`` if the projections are parallel.
    """
    den = intersect_denominator(p1, p2, p3, p4, axes)
    if den == 0:
        return None
    i, j = axes
    num = (p1[i] - p3[i]) * (p3[j] - p4[j]) - (p1[j] - p3[j]) * (p3[i] - p4[i])
    return num / den


class Line(Geometry):
    """
    An infinite line through ``p`` with direction ``v``.

    Args:
        p: A point on the line
        v: Direction vector, or a second point ``q`` with ``v = q - p``

    Raises:
        ConstructionError: If the direction is zero
    """

    kind = Kind.LINE
    t_min: ClassVar[Bound] = None
    t_max: ClassVar[Bound] = None

    def __init__(self, p: Point, v: Vector | Point) -> None:
        if isinstance(v, Point):
            q, v = v, v - p
        else:
            q = p + v
        if v.is_zero():
            raise ConstructionError(
                f"{type(self).__name__} needs two distinct points",
                details={"p": repr(p)},
            )
        self.p = p
        self.q = q
        self.v = v

    def __repr__(self) -> str:
        return f"{type(self).__name__}(p={self.p!r}, v={self.v!r})"

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.is_collinear(other)

    __hash__ = None  # type: ignore[assignment]

    @property
    def points(self) -> tuple[Point, ...]:
        return (self.p, self.q)

    @property
    def line(self) -> "Line":
        """The infinite carrier line."""
        return Line(self.p, self.v)

    def point_at(self, t: Fraction) -> Point:
        return Point.at(self.p.vector + self.v * t)

    def parameter_of(self, pt: Point) -> Fraction:
        """Parameter of the foot of ``pt`` on the carrier line."""
        return (pt - self.p).dot(self.v) / self.v.magnitude_squared

    def in_range(self, t: Fraction) -> bool:
        return (self.t_min is None or t >= self.t_min) and (self.t_max is None or t <= self.t_max)

    def clamp(self, t: Fraction) -> Fraction:
        if self.t_min is not None and t < self.t_min:
            return self.t_min
        if self.t_max is not None and t > self.t_max:
            return self.t_max
        return t

    def on_carrier(self, pt: Point) -> bool:
        return (pt - self.p).cross(self.v).is_zero()

    def contains(self, pt: Point) -> bool:
        return self.on_carrier(pt) and self.in_range(self.parameter_of(pt))

    def project(self, pt: Point) -> Point:
        """Foot of the perpendicular from ``pt`` to the carrier line."""
        return self.point_at(self.parameter_of(pt))

    def is_parallel(self, other: "Line") -> bool:
        return self.v.is_scalar_multiple(other.v)

    def is_collinear(self, other: "Line") -> bool:
        return self.is_parallel(other) and self.on_carrier(other.p)

    def is_coplanar(self, other: "Line") -> bool:
        return (other.p - self.p).dot(self.v.cross(other.v)) == 0

    def translated(self, v: Vector) -> "Line":
        return type(self)(self.p.translated(v), self.v)

    def rotated(
        self,
        axis: "Line",
        theta: Rational,
        oom: int | None = None,
        rm: RoundingMode | None = None,
    ) -> "Line":
        """A new geometry of the same kind turned ``theta`` radians about ``axis``."""
        rows = rotation_matrix(axis.v, theta, oom, rm)
        return type(self)(self.p.transformed(rows, axis.p), self.q.transformed(rows, axis.p))

    def restrict(self, lo: Bound, hi: Bound) -> Geometry | None:
        """
        The part of the carrier line with parameter in ``[lo, hi]``.

        Returns:
            ``None`` for an empty range, a Point when it collapses, otherwise
            a Line, Ray or LineSegment
        """
        from v3d.geometry.ray import Ray
        from v3d.geometry.segment import LineSegment

        if lo is not None and hi is not None:
            if lo > hi:
                return None
            if lo == hi:
                return self.point_at(lo)
            return LineSegment(self.point_at(lo), self.point_at(hi))
        if lo is not None:
            return Ray(self.point_at(lo), self.v)
        if hi is not None:
            return Ray(self.point_at(hi), -self.v)
        return Line(self.p, self.v)

    def overlap(self, other: "Line") -> tuple[Bound, Bound]:
        """
        Parameter range of ``other`` expressed on this carrier line,
        intersected with this geometry's own range.

        Only meaningful when the two are collinear.
        """
        base = self.parameter_of(other.p)
        scale = other.v.dot(self.v) / self.v.magnitude_squared
        lo = None if other.t_min is None else base + scale * other.t_min
        hi = None if other.t_max is None else base + scale * other.t_max
        if scale < 0:
            lo, hi = hi, lo
        return _max_bound(lo, self.t_min), _min_bound(hi, self.t_max)


def _max_bound(a: Bound, b: Bound) -> Bound:
    if a is None:
        return b
    if b is None:
        return a
    return max(a, b)


def _min_bound(a: Bound, b: Bound) -> Bound:
    if a is None:
        return b
    if b is None:
        return a
    return min(a, b)
