"""
Points and the frames they are expressed in.

A :class:`Point` is a relative vector inside a :class:`Frame`. Its absolute
position is ``frame.offset + rel``. Compound shapes put all their vertices
in one frame, so moving the shape only changes that frame's offset.
"""

from fractions import Fraction
from typing import TYPE_CHECKING, Optional

from v3d.core.precision import Rational, RoundingMode
from v3d.geometry.base import Geometry, Kind
from v3d.geometry.vector import ZERO, Matrix, Vector, rotation_matrix

if TYPE_CHECKING:
    from v3d.geometry.aabb import AABB
    from v3d.geometry.line import Line


class Frame:
    """A shared, mutable translation."""

    __slots__ = ("offset",)

    def __init__(self, offset: Vector = ZERO) -> None:
        self.offset = offset

    def __repr__(self) -> str:
        return f"Frame(offset={self.offset!r})"

    def translate(self, v: Vector) -> None:
        self.offset = self.offset + v


class Point(Geometry):
    """
    A position in space.

    ``Point(x, y, z)`` creates a point in a frame of its own. Use
    :meth:`relative` to create one inside an existing frame.

    Two points are equal when their absolute coordinates are equal, however
    the position is split between frame offset and relative vector. The hash
    follows the absolute coordinates too, so a vertex of a triangle, hull or
    tetrahedron hashes differently once its shape is translated. Sets and
    dict keys holding such vertices must be rebuilt after a translate.
    """

    kind = Kind.POINT

    __slots__ = ("frame", "rel")

    def __init__(self, x: Rational = 0, y: Rational = 0, z: Rational = 0) -> None:
        self.frame = Frame()
        self.rel = Vector(x, y, z)

    @classmethod
    def relative(cls, frame: Frame, rel: Vector) -> "Point":
        point = cls.__new__(cls)
        point.frame = frame
        point.rel = rel
        return point

    @classmethod
    def at(cls, v: Vector) -> "Point":
        """Point at the position vector ``v``."""
        return cls.relative(Frame(), v)

    def __repr__(self) -> str:
        return f"Point(x={self.x}, y={self.y}, z={self.z})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return self.vector == other.vector

    def __hash__(self) -> int:
        return hash(self.vector)

    def __sub__(self, other: "Point") -> Vector:
        return self.vector - other.vector

    def __add__(self, v: Vector) -> "Point":
        """Offset within the same frame."""
        return Point.relative(self.frame, self.rel + v)

    def __getitem__(self, axis: int) -> Fraction:
        return self.vector[axis]

    @property
    def vector(self) -> Vector:
        """Position vector from the origin."""
        return self.frame.offset + self.rel

    @property
    def x(self) -> Fraction:
        return self.frame.offset.dx + self.rel.dx

    @property
    def y(self) -> Fraction:
        return self.frame.offset.dy + self.rel.dy

    @property
    def z(self) -> Fraction:
        return self.frame.offset.dz + self.rel.dz

    @property
    def coordinates(self) -> tuple[Fraction, Fraction, Fraction]:
        return (self.x, self.y, self.z)

    @property
    def points(self) -> tuple["Point", ...]:
        return (self,)

    @property
    def aabb(self) -> "AABB":
        from v3d.geometry.aabb import AABB

        return AABB.from_points(self)

    def rebase(self, frame: Frame) -> "Point":
        """The same position expressed in ``frame``."""
        return Point.relative(frame, self.vector - frame.offset)

    def translated(self, v: Vector) -> "Point":
        """A new point moved by ``v``. This point and its frame are untouched."""
        return Point.at(self.vector + v)

    def transformed(self, rows: Matrix, origin: Optional["Point"] = None) -> "Point":
        """A new point mapped by the matrix ``rows`` about ``origin`` (default the origin)."""
        if origin is None:
            return Point.at(self.vector.transformed(rows))
        return Point.at(origin.vector + (self - origin).transformed(rows))

    def rotated(
        self,
        axis: "Line",
        theta: Rational,
        oom: int | None = None,
        rm: RoundingMode | None = None,
    ) -> "Point":
        """
        A new point turned ``theta`` radians about the line ``axis``.

        Any linear geometry serves as the axis; only its point and direction
        are used. See :func:`~v3d.geometry.vector.rotation_matrix` for how
        ``oom`` bounds the result.
        """
        return self.transformed(rotation_matrix(axis.v, theta, oom, rm), axis.p)

    def distance_squared(self, other: "Point") -> Fraction:
        return (self - other).magnitude_squared

    def midpoint(self, other: "Point") -> "Point":
        return Point.at((self.vector + other.vector) / 2)


ORIGIN = Point(0, 0, 0)
