"""
Exact 3D vectors.
"""

from dataclasses import dataclass
from fractions import Fraction
from functools import cached_property

from v3d.core.angle import arccos_ratio, guard_oom, guarded_sin_cos
from v3d.core.environment import resolve_precision
from v3d.core.precision import Rational, RationalSqrt, RoundingMode, as_rational, round_rational


@dataclass(frozen=True, init=False)
class Vector:
    """
    An immutable direction or offset with rational components.

    Equality is exact and component-wise. The squared magnitude is cached.
    The magnitude itself is a deferred :class:`RationalSqrt`.
    """

    dx: Fraction
    dy: Fraction
    dz: Fraction

    def __init__(self, dx: Rational = 0, dy: Rational = 0, dz: Rational = 0) -> None:
        object.__setattr__(self, "dx", as_rational(dx))
        object.__setattr__(self, "dy", as_rational(dy))
        object.__setattr__(self, "dz", as_rational(dz))

    def __repr__(self) -> str:
        return f"Vector(dx={self.dx}, dy={self.dy}, dz={self.dz})"

    def __iter__(self):
        yield self.dx
        yield self.dy
        yield self.dz

    def __getitem__(self, axis: int) -> Fraction:
        return (self.dx, self.dy, self.dz)[axis]

    def __add__(self, other: "Vector") -> "Vector":
        return Vector(self.dx + other.dx, self.dy + other.dy, self.dz + other.dz)

    def __sub__(self, other: "Vector") -> "Vector":
        return Vector(self.dx - other.dx, self.dy - other.dy, self.dz - other.dz)

    def __neg__(self) -> "Vector":
        return Vector(-self.dx, -self.dy, -self.dz)

    def __mul__(self, s: Rational) -> "Vector":
        s = as_rational(s)
        return Vector(self.dx * s, self.dy * s, self.dz * s)

    __rmul__ = __mul__

    def __truediv__(self, s: Rational) -> "Vector":
        s = as_rational(s)
        if s == 0:
            raise ZeroDivisionError("Vector division by zero")
        return Vector(self.dx / s, self.dy / s, self.dz / s)

    def reverse(self) -> "Vector":
        return -self

    def is_zero(self) -> bool:
        return self.dx == 0 and self.dy == 0 and self.dz == 0

    def dot(self, other: "Vector") -> Fraction:
        return self.dx * other.dx + self.dy * other.dy + self.dz * other.dz

    def cross(self, other: "Vector") -> "Vector":
        return Vector(
            self.dy * other.dz - self.dz * other.dy,
            self.dz * other.dx - self.dx * other.dz,
            self.dx * other.dy - self.dy * other.dx,
        )

    @cached_property
    def magnitude_squared(self) -> Fraction:
        return self.dot(self)

    @property
    def magnitude(self) -> RationalSqrt:
        return RationalSqrt(self.magnitude_squared)

    def get_magnitude(self, oom: int | None = None, rm: RoundingMode | None = None) -> Fraction:
        """Magnitude rounded at ``oom``."""
        oom, rm = resolve_precision(oom, rm)
        return self.magnitude.to_fraction(oom, rm)

    def is_scalar_multiple(self, other: "Vector") -> bool:
        """True if the vectors are parallel (or both zero)."""
        if self.is_zero() or other.is_zero():
            return self.is_zero() and other.is_zero()
        return self.cross(other).is_zero()

    def is_same_direction(self, other: "Vector") -> bool:
        """True if ``other`` is a positive multiple of this vector."""
        return self.is_scalar_multiple(other) and self.dot(other) > 0

    def is_orthogonal(self, other: "Vector") -> bool:
        return self.dot(other) == 0

    def get_unit_vector(self, oom: int | None = None, rm: RoundingMode | None = None) -> "Vector":
        """
        Direction of magnitude one.

        Exact when the magnitude is rational. Otherwise the magnitude is
        rounded at ``oom - 2`` first, so the result is approximate.
        """
        if self.is_zero():
            raise ZeroDivisionError("Zero vector has no direction")
        exact = self.magnitude.sqrt()
        if exact is None:
            oom, rm = resolve_precision(oom, rm)
            exact = self.magnitude.to_fraction(oom - 2, rm)
        return self / exact

    def get_direction(self) -> int:
        """Octant of the vector, 1 to 8, counting zero components as positive."""
        return (
            1
            + (4 if self.dx < 0 else 0)
            + (2 if self.dy < 0 else 0)
            + (1 if self.dz < 0 else 0)
        )

    def get_angle(
        self, other: "Vector", oom: int | None = None, rm: RoundingMode | None = None
    ) -> Fraction:
        """
        Angle to ``other`` in radians, in ``[0, pi]``, rounded at ``oom``.

        Exact for parallel vectors (``0``). Orthogonal and opposite vectors
        give pi over two and pi, rounded.

        Raises:
            ZeroDivisionError: If either vector is zero
        """
        if self.is_zero() or other.is_zero():
            raise ZeroDivisionError("Zero vector has no direction")
        return arccos_ratio(
            self.dot(other), self.magnitude_squared * other.magnitude_squared, oom, rm
        )

    def transformed(self, rows: "Matrix") -> "Vector":
        """Image under the matrix with the given rows."""
        return Vector(rows[0].dot(self), rows[1].dot(self), rows[2].dot(self))

    def rotated(
        self,
        axis: "Vector",
        theta: Rational,
        oom: int | None = None,
        rm: RoundingMode | None = None,
    ) -> "Vector":
        """This vector turned ``theta`` radians about ``axis``. See :func:`rotation_matrix`."""
        if as_rational(theta) == 0:
            return self
        return self.transformed(rotation_matrix(axis, theta, oom, rm))


ZERO = Vector(0, 0, 0)
I = Vector(1, 0, 0)  # noqa: E741
J = Vector(0, 1, 0)
K = Vector(0, 0, 1)

AXES = (I, J, K)

Matrix = tuple[Vector, Vector, Vector]


def _unit_component(a: Fraction, m: Fraction, oom: int) -> Fraction:
    root = RationalSqrt(a * a / m).to_fraction(oom)
    return root if a >= 0 else -root


def rotation_matrix(
    axis: Vector,
    theta: Rational,
    oom: int | None = None,
    rm: RoundingMode | None = None,
) -> Matrix:
    """
    Rows of the matrix turning ``theta`` radians about ``axis``.

    Positive angles turn counter-clockwise when looking back down ``axis``.
    The sine, cosine and unit axis are worked out well below ``oom`` and each
    entry is then rounded at ``oom``. Applying the matrix is exact, so points
    that were coplanar or collinear stay so. ``theta == 0`` gives the
    identity.

    Raises:
        ZeroDivisionError: If ``axis`` is zero

    Example:
        >>> from v3d.core.angle import pi
        >>> rotation_matrix(K, pi(-10) / 2, -3)[0]
        Vector(dx=0, dy=-1, dz=0)
    """
    if axis.is_zero():
        raise ZeroDivisionError("Cannot rotate about a zero axis")
    oom, rm = resolve_precision(oom, rm)
    theta = as_rational(theta)
    s, c = guarded_sin_cos(theta, oom)
    t = 1 - c
    m = axis.magnitude_squared
    g = guard_oom(oom, theta)
    ux, uy, uz = (_unit_component(a, m, g) for a in axis)
    ax, ay, az = axis
    entries = (
        (c + ax * ax / m * t, ax * ay / m * t - uz * s, ax * az / m * t + uy * s),
        (ay * ax / m * t + uz * s, c + ay * ay / m * t, ay * az / m * t - ux * s),
        (az * ax / m * t - uy * s, az * ay / m * t + ux * s, c + az * az / m * t),
    )
    return tuple(Vector(*(round_rational(e, oom, rm) for e in row)) for row in entries)
