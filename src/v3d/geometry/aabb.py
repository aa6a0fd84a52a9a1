"""
Axis-aligned bounding boxes.

Boxes are used to reject pairs of geometries cheaply before any exact test
runs. All comparisons are closed: boxes that only touch still intersect.
"""

from fractions import Fraction
from functools import cached_property
from itertools import product
from typing import TYPE_CHECKING, Iterable

from v3d.core.exceptions import ConstructionError
from v3d.core.precision import Rational, as_rational
from v3d.geometry.base import Geometry
from v3d.geometry.point import Point
from v3d.geometry.vector import Vector

if TYPE_CHECKING:
    from v3d.geometry.aabb2d import AABBX, AABBY, AABBZ
    from v3d.geometry.line import Line
    from v3d.geometry.plane import Plane

Span = tuple[Fraction, Fraction, Fraction]

AXIS_NAMES = ("x", "y", "z")


class Box:
    """
    Closed extents in 3D, ``lo[i] <= c[i] <= hi[i]`` for each axis.

    Subclasses decide how a span maps back to a box with
    :meth:`_from_span`.
    """

    lo: Span
    hi: Span

    @classmethod
    def _from_span(cls, lo: Span, hi: Span) -> "Box":
        raise NotImplementedError

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Box):
            return NotImplemented
        return type(self) is type(other) and self.lo == other.lo and self.hi == other.hi

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.lo, self.hi))

    def is_beyond(self, other: "Box") -> bool:
        """True if the extents are strictly apart on some axis."""
        return any(self.hi[i] < other.lo[i] or self.lo[i] > other.hi[i] for i in range(3))

    def intersects(self, other: "Box") -> bool:
        return not self.is_beyond(other) or not other.is_beyond(self)

    def contains(self, other: "Box | Point") -> bool:
        """True if ``other`` lies inside or on the boundary."""
        if isinstance(other, Point):
            return all(self.lo[i] <= other[i] <= self.hi[i] for i in range(3))
        return all(self.lo[i] <= other.lo[i] and other.hi[i] <= self.hi[i] for i in range(3))

    def intersects_point(self, pt: Point) -> bool:
        return self.contains(pt)

    def union(self, other: "Box") -> "Box":
        """
        Smallest box of this type holding both. Returns ``self`` when it
        already contains ``other``.
        """
        if self.contains(other):
            return self
        lo = tuple(min(a, b) for a, b in zip(self.lo, other.lo))
        hi = tuple(max(a, b) for a, b in zip(self.hi, other.hi))
        return self._from_span(lo, hi)

    def get_intersect(self, other: "Box") -> "Box | None":
        """The overlap of the two boxes, or ``None``."""
        if not self.intersects(other):
            return None
        lo = tuple(max(a, b) for a, b in zip(self.lo, other.lo))
        hi = tuple(min(a, b) for a, b in zip(self.hi, other.hi))
        return self._from_span(lo, hi)

    @cached_property
    def centroid(self) -> Point:
        return Point(*((a + b) / 2 for a, b in zip(self.lo, self.hi)))

    def translated(self, v: Vector) -> "Box":
        return self._from_span(
            tuple(a + d for a, d in zip(self.lo, v)),
            tuple(b + d for b, d in zip(self.hi, v)),
        )

    def intersects_line(self, line: "Line") -> bool:
        """Slab test of a line, ray or segment against the box."""
        t_lo, t_hi = line.t_min, line.t_max
        for i in range(3):
            p, v = line.p[i], line.v[i]
            if v == 0:
                if p < self.lo[i] or p > self.hi[i]:
                    return False
                continue
            t1 = (self.lo[i] - p) / v
            t2 = (self.hi[i] - p) / v
            if t1 > t2:
                t1, t2 = t2, t1
            t_lo = t1 if t_lo is None else max(t_lo, t1)
            t_hi = t2 if t_hi is None else min(t_hi, t2)
            if t_lo > t_hi:
                return False
        return True

    def intersects_plane(self, plane: "Plane") -> bool:
        """True if corners lie on both sides of the plane, or on it."""
        signs = {plane.sign(Point(*c)) for c in product(*zip(self.lo, self.hi))}
        return 0 in signs or len(signs) > 1


class AABB(Box):
    """
    A 3D axis-aligned box.

    May be degenerate on any axis. The corners are named by lower (``l``) or
    upper (``u``) bound on x, y and z, so ``lul`` is ``(x_min, y_max, z_min)``.
    The faces ``l, r, b, t, a, f`` are axis-locked boxes at x_min, x_max,
    y_min, y_max, z_min and z_max.

    Raises:
        ConstructionError: If a minimum exceeds its maximum
    """

    def __init__(
        self,
        x_min: Rational,
        x_max: Rational,
        y_min: Rational,
        y_max: Rational,
        z_min: Rational,
        z_max: Rational,
    ) -> None:
        self.lo = (as_rational(x_min), as_rational(y_min), as_rational(z_min))
        self.hi = (as_rational(x_max), as_rational(y_max), as_rational(z_max))
        for i in range(3):
            if self.lo[i] > self.hi[i]:
                raise ConstructionError(
                    f"AABB {AXIS_NAMES[i]}_min exceeds {AXIS_NAMES[i]}_max",
                    details={"min": str(self.lo[i]), "max": str(self.hi[i])},
                )

    @classmethod
    def _from_span(cls, lo: Span, hi: Span) -> "AABB":
        return cls(lo[0], hi[0], lo[1], hi[1], lo[2], hi[2])

    @classmethod
    def from_points(cls, *points: Point) -> "AABB":
        """
        Smallest box holding every point.

        Raises:
            ConstructionError: If no points are given
        """
        if not points:
            raise ConstructionError("Cannot build an AABB from no points")
        coords = [pt.coordinates for pt in points]
        lo = tuple(min(c[i] for c in coords) for i in range(3))
        hi = tuple(max(c[i] for c in coords) for i in range(3))
        return cls._from_span(lo, hi)

    @classmethod
    def from_geometries(cls, geometries: Iterable[Geometry]) -> "AABB":
        """
        Union of the boxes of bounded geometries.

        Raises:
            ConstructionError: If there are no geometries or one is unbounded
        """
        result = None
        for g in geometries:
            box = g.aabb
            if box is None:
                raise ConstructionError(
                    "Unbounded geometry has no AABB",
                    details={"kind": g.kind.value},
                )
            result = box if result is None else result.union(box)
        if result is None:
            raise ConstructionError("Cannot build an AABB from no geometries")
        return result

    def __repr__(self) -> str:
        return (
            f"AABB(x=[{self.x_min}, {self.x_max}], y=[{self.y_min}, {self.y_max}], "
            f"z=[{self.z_min}, {self.z_max}])"
        )

    @property
    def x_min(self) -> Fraction:
        return self.lo[0]

    @property
    def x_max(self) -> Fraction:
        return self.hi[0]

    @property
    def y_min(self) -> Fraction:
        return self.lo[1]

    @property
    def y_max(self) -> Fraction:
        return self.hi[1]

    @property
    def z_min(self) -> Fraction:
        return self.lo[2]

    @property
    def z_max(self) -> Fraction:
        return self.hi[2]

    @property
    def dimension(self) -> int:
        """Number of axes with a non-zero extent."""
        return sum(1 for a, b in zip(self.lo, self.hi) if a != b)

    # Corners

    @cached_property
    def lll(self) -> Point:
        return Point(self.x_min, self.y_min, self.z_min)

    @cached_property
    def llu(self) -> Point:
        return Point(self.x_min, self.y_min, self.z_max)

    @cached_property
    def lul(self) -> Point:
        return Point(self.x_min, self.y_max, self.z_min)

    @cached_property
    def luu(self) -> Point:
        return Point(self.x_min, self.y_max, self.z_max)

    @cached_property
    def ull(self) -> Point:
        return Point(self.x_max, self.y_min, self.z_min)

    @cached_property
    def ulu(self) -> Point:
        return Point(self.x_max, self.y_min, self.z_max)

    @cached_property
    def uul(self) -> Point:
        return Point(self.x_max, self.y_max, self.z_min)

    @cached_property
    def uuu(self) -> Point:
        return Point(self.x_max, self.y_max, self.z_max)

    @property
    def corners(self) -> tuple[Point, ...]:
        return (self.lll, self.llu, self.lul, self.luu, self.ull, self.ulu, self.uul, self.uuu)

    # Faces

    @cached_property
    def l(self) -> "AABBX":  # noqa: E743
        from v3d.geometry.aabb2d import AABBX

        return AABBX(self.x_min, self.y_min, self.y_max, self.z_min, self.z_max)

    @cached_property
    def r(self) -> "AABBX":
        from v3d.geometry.aabb2d import AABBX

        return AABBX(self.x_max, self.y_min, self.y_max, self.z_min, self.z_max)

    @cached_property
    def b(self) -> "AABBY":
        from v3d.geometry.aabb2d import AABBY

        return AABBY(self.y_min, self.x_min, self.x_max, self.z_min, self.z_max)

    @cached_property
    def t(self) -> "AABBY":
        from v3d.geometry.aabb2d import AABBY

        return AABBY(self.y_max, self.x_min, self.x_max, self.z_min, self.z_max)

    @cached_property
    def a(self) -> "AABBZ":
        from v3d.geometry.aabb2d import AABBZ

        return AABBZ(self.z_min, self.x_min, self.x_max, self.y_min, self.y_max)

    @cached_property
    def f(self) -> "AABBZ":
        from v3d.geometry.aabb2d import AABBZ

        return AABBZ(self.z_max, self.x_min, self.x_max, self.y_min, self.y_max)

    @property
    def faces(self) -> tuple["AABBX", "AABBX", "AABBY", "AABBY", "AABBZ", "AABBZ"]:
        return (self.l, self.r, self.b, self.t, self.a, self.f)

    # Face geometries: a Point, LineSegment or rectangle depending on degeneracy.

    @property
    def left(self) -> Geometry:
        return self.l.geometry

    @property
    def right(self) -> Geometry:
        return self.r.geometry

    @property
    def bottom(self) -> Geometry:
        return self.b.geometry

    @property
    def top(self) -> Geometry:
        return self.t.geometry

    @property
    def aft(self) -> Geometry:
        return self.a.geometry

    @property
    def front(self) -> Geometry:
        return self.f.geometry
