"""
Planes.
"""

from fractions import Fraction

from v3d.core.exceptions import ConstructionError
from v3d.core.precision import Rational, RoundingMode
from v3d.geometry.base import Geometry, Kind
from v3d.geometry.line import Line
from v3d.geometry.point import Point
from v3d.geometry.vector import I, J, Vector, rotation_matrix


class Plane(Geometry):
    """
    The plane through ``p`` with normal ``n``.

    Two planes are equal when they are the same point set. The normals may
    differ in length and sign; use :meth:`equals_with_orientation` to also
    compare orientation.

    Raises:
        ConstructionError: If the normal is zero
    """

    kind = Kind.PLANE

    def __init__(self, p: Point, n: Vector) -> None:
        if n.is_zero():
            raise ConstructionError("Plane normal must be non-zero", details={"p": repr(p)})
        self.p = p
        self.n = n

    @classmethod
    def from_points(cls, p: Point, q: Point, r: Point) -> "Plane":
        """
        Plane through three points, with normal ``(q - p) x (r - p)``.

        Raises:
            ConstructionError: If the points are collinear
        """
        n = (q - p).cross(r - p)
        if n.is_zero():
            raise ConstructionError(
                "Cannot build a plane from collinear points",
                details={"points": [repr(p), repr(q), repr(r)]},
            )
        return cls(p, n)

    def __repr__(self) -> str:
        return f"Plane(p={self.p!r}, n={self.n!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Plane):
            return NotImplemented
        return self.is_parallel(other) and self.contains(other.p)

    __hash__ = None  # type: ignore[assignment]

    @property
    def d(self) -> Fraction:
        """Constant of the plane equation ``n . x = d``."""
        return self.n.dot(self.p.vector)

    @property
    def points(self) -> tuple[Point, ...]:
        return (self.p,)

    def side(self, pt: Point) -> Fraction:
        """
        Signed plane equation value at ``pt``.

        Positive on the side the normal points to, zero on the plane.
        """
        return self.n.dot(pt.vector) - self.d

    def sign(self, pt: Point) -> int:
        s = self.side(pt)
        return (s > 0) - (s < 0)

    def contains(self, pt: Point) -> bool:
        return self.side(pt) == 0

    def distance_squared(self, pt: Point) -> Fraction:
        s = self.side(pt)
        return s * s / self.n.magnitude_squared

    def project(self, pt: Point) -> Point:
        """Foot of the perpendicular from ``pt``."""
        return Point.at(pt.vector - self.n * (self.side(pt) / self.n.magnitude_squared))

    def is_parallel(self, other: "Plane") -> bool:
        return self.n.is_scalar_multiple(other.n)

    def is_parallel_to_line(self, line: Line) -> bool:
        return self.n.is_orthogonal(line.v)

    def equals_with_orientation(self, other: "Plane") -> bool:
        return self == other and self.n.dot(other.n) > 0

    def flipped(self) -> "Plane":
        return Plane(self.p, -self.n)

    def translated(self, v: Vector) -> "Plane":
        return Plane(self.p.translated(v), self.n)

    def rotated(
        self,
        axis: Line,
        theta: Rational,
        oom: int | None = None,
        rm: RoundingMode | None = None,
    ) -> "Plane":
        """
        A new plane turned ``theta`` radians about the line ``axis``.

        Two in-plane directions are rotated and the normal is rebuilt from
        them, so the new plane holds the rotated image of every point of this
        one and keeps its orientation.
        """
        rows = rotation_matrix(axis.v, theta, oom, rm)
        u = self.n.cross(I)
        if u.is_zero():
            u = self.n.cross(J)
        w = self.n.cross(u)
        return Plane.from_points(
            self.p.transformed(rows, axis.p),
            (self.p + u).transformed(rows, axis.p),
            (self.p + w).transformed(rows, axis.p),
        )

    def line_parameter(self, line: Line) -> Fraction | None:
        """
        Parameter where the carrier of ``line`` crosses the plane, or
        ``None`` if it is parallel.
        """
        den = self.n.dot(line.v)
        if den == 0:
            return None
        return (self.d - self.n.dot(line.p.vector)) / den

    def intersection_line(self, other: "Plane") -> Line | None:
        """
        The line two planes share, or ``None`` if they are parallel.

        The line passes through ``((d1 n2 - d2 n1) x u) / |u|^2`` with
        direction ``u = n1 x n2``.
        """
        u = self.n.cross(other.n)
        if u.is_zero():
            return None
        v = (other.n * self.d - self.n * other.d).cross(u) / u.magnitude_squared
        return Line(Point.at(v), u)

    def get_intersection_3(self, a: "Plane", b: "Plane") -> Point | None:
        """
        The single point shared by three planes.

        Returns:
            The point, or ``None`` when the normals are linearly dependent
            so there is no unique point
        """
        det = self.n.dot(a.n.cross(b.n))
        if det == 0:
            return None
        v = a.n.cross(b.n) * self.d + b.n.cross(self.n) * a.d + self.n.cross(a.n) * b.d
        return Point.at(v / det)
