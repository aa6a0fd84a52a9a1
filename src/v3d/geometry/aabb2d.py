"""
Axis-locked bounding boxes.

An ``AABBX`` is a rectangle in the plane ``x = value``, and likewise for
``AABBY`` and ``AABBZ``. Each has two free axes, called ``a`` and ``b`` here:

* ``AABBX``: ``a = y``, ``b = z``
* ``AABBY``: ``a = x``, ``b = z``
* ``AABBZ``: ``a = x``, ``b = y``

The corners are ``ll = (a_min, b_min)``, ``lu = (a_min, b_max)``,
``uu = (a_max, b_max)`` and ``ul = (a_max, b_min)``.
"""

from fractions import Fraction
from functools import cached_property
from typing import ClassVar

from v3d.core.exceptions import ConstructionError
from v3d.core.precision import Rational, as_rational
from v3d.geometry.aabb import AXIS_NAMES, AABB, Box, Span
from v3d.geometry.base import Geometry
from v3d.geometry.line import Line, intersect_denominator
from v3d.geometry.plane import Plane
from v3d.geometry.point import Point
from v3d.geometry.segment import LineSegment
from v3d.geometry.vector import AXES


class AABB2D(Box):
    """
    Base class for the axis-locked boxes.

    Args:
        value: The locked coordinate
        a_min, a_max: Extent on the first free axis
        b_min, b_max: Extent on the second free axis

    Raises:
        ConstructionError: If a minimum exceeds its maximum
    """

    axis: ClassVar[int]
    free_axes: ClassVar[tuple[int, int]]

    def __init__(
        self,
        value: Rational,
        a_min: Rational,
        a_max: Rational,
        b_min: Rational,
        b_max: Rational,
    ) -> None:
        value = as_rational(value)
        a_min, a_max = as_rational(a_min), as_rational(a_max)
        b_min, b_max = as_rational(b_min), as_rational(b_max)
        if a_min > a_max or b_min > b_max:
            raise ConstructionError(
                f"{type(self).__name__} minimum exceeds maximum",
                details={"a": [str(a_min), str(a_max)], "b": [str(b_min), str(b_max)]},
            )
        i, j = self.free_axes
        lo = [value] * 3
        hi = [value] * 3
        lo[i], hi[i] = a_min, a_max
        lo[j], hi[j] = b_min, b_max
        self.lo = tuple(lo)
        self.hi = tuple(hi)

    @classmethod
    def _from_span(cls, lo: Span, hi: Span) -> "AABB2D":
        if lo[cls.axis] != hi[cls.axis]:
            raise ConstructionError(
                f"{cls.__name__} cannot span more than one {AXIS_NAMES[cls.axis]} value",
                details={"min": str(lo[cls.axis]), "max": str(hi[cls.axis])},
            )
        i, j = cls.free_axes
        return cls(lo[cls.axis], lo[i], hi[i], lo[j], hi[j])

    @classmethod
    def from_points(cls, *points: Point) -> "AABB2D":
        """
        Smallest box holding every point.

        Raises:
            ConstructionError: If no points are given, or they do not all
                share the locked coordinate
        """
        if not points:
            raise ConstructionError(f"Cannot build an {cls.__name__} from no points")
        value = points[0][cls.axis]
        stray = [repr(pt) for pt in points if pt[cls.axis] != value]
        if stray:
            raise ConstructionError(
                f"{cls.__name__} points must share {AXIS_NAMES[cls.axis]} = {value}",
                details={"points": stray},
            )
        i, j = cls.free_axes
        return cls(
            value,
            min(pt[i] for pt in points),
            max(pt[i] for pt in points),
            min(pt[j] for pt in points),
            max(pt[j] for pt in points),
        )

    def __repr__(self) -> str:
        i, j = self.free_axes
        return (
            f"{type(self).__name__}({AXIS_NAMES[self.axis]}={self.value}, "
            f"{AXIS_NAMES[i]}=[{self.a_min}, {self.a_max}], "
            f"{AXIS_NAMES[j]}=[{self.b_min}, {self.b_max}])"
        )

    @property
    def value(self) -> Fraction:
        return self.lo[self.axis]

    @property
    def a_min(self) -> Fraction:
        return self.lo[self.free_axes[0]]

    @property
    def a_max(self) -> Fraction:
        return self.hi[self.free_axes[0]]

    @property
    def b_min(self) -> Fraction:
        return self.lo[self.free_axes[1]]

    @property
    def b_max(self) -> Fraction:
        return self.hi[self.free_axes[1]]

    def _point(self, a: Fraction, b: Fraction) -> Point:
        coords = [self.value] * 3
        i, j = self.free_axes
        coords[i], coords[j] = a, b
        return Point(*coords)

    @cached_property
    def ll(self) -> Point:
        return self._point(self.a_min, self.b_min)

    @cached_property
    def lu(self) -> Point:
        return self._point(self.a_min, self.b_max)

    @cached_property
    def uu(self) -> Point:
        return self._point(self.a_max, self.b_max)

    @cached_property
    def ul(self) -> Point:
        return self._point(self.a_max, self.b_min)

    @property
    def corners(self) -> tuple[Point, Point, Point, Point]:
        return (self.ll, self.lu, self.uu, self.ul)

    @cached_property
    def plane(self) -> Plane:
        return Plane(self.ll, AXES[self.axis])

    # Edges collapse to points when the extent along them is zero.

    @cached_property
    def left(self) -> Point | LineSegment:
        return self.ll if self.b_min == self.b_max else LineSegment(self.ll, self.lu)

    @cached_property
    def right(self) -> Point | LineSegment:
        return self.ul if self.b_min == self.b_max else LineSegment(self.ul, self.uu)

    @cached_property
    def bottom(self) -> Point | LineSegment:
        return self.ll if self.a_min == self.a_max else LineSegment(self.ll, self.ul)

    @cached_property
    def top(self) -> Point | LineSegment:
        return self.lu if self.a_min == self.a_max else LineSegment(self.lu, self.uu)

    @property
    def edges(self) -> tuple[Point | LineSegment, ...]:
        return (self.left, self.right, self.bottom, self.top)

    @cached_property
    def geometry(self) -> Geometry:
        """The box as a Point, LineSegment or rectangle."""
        from v3d.geometry.hull import ConvexHullCoplanar

        if self.a_min == self.a_max:
            return self.left
        if self.b_min == self.b_max:
            return self.bottom
        i, j = self.free_axes
        return ConvexHullCoplanar(AXES[i].cross(AXES[j]), self.ll, self.ul, self.uu, self.lu)

    def to_aabb(self) -> AABB:
        return AABB._from_span(self.lo, self.hi)

    def intersect_denominator(self, l1: Line, l2: Line) -> Fraction:
        """
        Line-line determinant on this box's free axes. Zero when the
        projections of the two lines are parallel.
        """
        return intersect_denominator(l1.p, l1.q, l2.p, l2.q, self.free_axes)


class AABBX(AABB2D):
    """A box in the plane ``x = x``."""

    axis = 0
    free_axes = (1, 2)

    def __init__(
        self,
        x: Rational,
        y_min: Rational,
        y_max: Rational,
        z_min: Rational,
        z_max: Rational,
    ) -> None:
        super().__init__(x, y_min, y_max, z_min, z_max)

    @property
    def x(self) -> Fraction:
        return self.lo[0]

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


class AABBY(AABB2D):
    """A box in the plane ``y = y``."""

    axis = 1
    free_axes = (0, 2)

    def __init__(
        self,
        y: Rational,
        x_min: Rational,
        x_max: Rational,
        z_min: Rational,
        z_max: Rational,
    ) -> None:
        super().__init__(y, x_min, x_max, z_min, z_max)

    @property
    def y(self) -> Fraction:
        return self.lo[1]

    @property
    def x_min(self) -> Fraction:
        return self.lo[0]

    @property
    def x_max(self) -> Fraction:
        return self.hi[0]

    @property
    def z_min(self) -> Fraction:
        return self.lo[2]

    @property
    def z_max(self) -> Fraction:
        return self.hi[2]


class AABBZ(AABB2D):
    """A box in the plane ``z = z``."""

    axis = 2
    free_axes = (0, 1)

    def __init__(
        self,
        z: Rational,
        x_min: Rational,
        x_max: Rational,
        y_min: Rational,
        y_max: Rational,
    ) -> None:
        super().__init__(z, x_min, x_max, y_min, y_max)

    @property
    def z(self) -> Fraction:
        return self.lo[2]

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
