"""
Rays.
"""

from fractions import Fraction

from v3d.geometry.base import Kind
from v3d.geometry.line import Line


class Ray(Line):
    """The half line ``p + t * v`` for ``t >= 0``."""

    kind = Kind.RAY
    t_min = Fraction(0)
    t_max = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ray):
            return NotImplemented
        return self.p == other.p and self.v.is_same_direction(other.v)

    __hash__ = None  # type: ignore[assignment]
