"""
Line segments.
"""

from fractions import Fraction
from functools import cached_property
from typing import TYPE_CHECKING

from v3d.core.environment import resolve_precision
from v3d.core.precision import RationalSqrt, RoundingMode
from v3d.geometry.base import Kind
from v3d.geometry.line import Line
from v3d.geometry.point import Point
from v3d.geometry.vector import Vector

if TYPE_CHECKING:
    from v3d.geometry.aabb import AABB


class LineSegment(Line):
    """
    The closed segment from ``p`` to ``q``, ``p + t * (q - p)`` for ``t`` in
    ``[0, 1]``.

    Segments are equal when they have the same endpoints, in either order.
    """

    kind = Kind.SEGMENT
    t_min = Fraction(0)
    t_max = Fraction(1)

    def __init__(self, p: Point, q: Point) -> None:
        super().__init__(p, q)
        self._aabb: tuple[tuple[Vector, Vector], "AABB"] | None = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LineSegment):
            return NotImplemented
        return {self.p, self.q} == {other.p, other.q}

    def __hash__(self) -> int:
        return hash(frozenset((self.p, self.q)))

    @cached_property
    def length2(self) -> Fraction:
        """Exact squared length."""
        return self.v.magnitude_squared

    @property
    def aabb(self) -> "AABB":
        """
        Bounding box of the endpoints.

        The endpoints may live in the frame of a triangle or tetrahedron, so
        the box is cached against the frame offsets it was built from.
        """
        offsets = (self.p.frame.offset, self.q.frame.offset)
        cached = self._aabb
        if cached is None or cached[0][0] is not offsets[0] or cached[0][1] is not offsets[1]:
            from v3d.geometry.aabb import AABB

            cached = (offsets, AABB.from_points(self.p, self.q))
            self._aabb = cached
        return cached[1]

    def length(self, oom: int | None = None, rm: RoundingMode | None = None) -> Fraction:
        """Length rounded at ``oom``."""
        oom, rm = resolve_precision(oom, rm)
        return RationalSqrt(self.length2).to_fraction(oom, rm)

    @property
    def midpoint(self) -> Point:
        return self.p.midpoint(self.q)

    def reversed(self) -> "LineSegment":
        return LineSegment(self.q, self.p)

    def translated(self, v: Vector) -> "LineSegment":
        return LineSegment(self.p.translated(v), self.q.translated(v))
