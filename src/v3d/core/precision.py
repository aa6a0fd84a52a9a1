"""
Precision handling for v3d.

All geometry is held in exact rational arithmetic (``fractions.Fraction``).
A precision context is the pair ``(oom, rm)``:

* ``oom`` is an order-of-magnitude exponent. The result is accurate to the
  place value ``10**oom``, so ``oom=-3`` means "to one thousandth".
* ``rm`` is a :class:`RoundingMode`.

The context is only applied where an irrational value, in practice a square
root, has to be materialised. Everything else stays exact.
"""

from decimal import (
    ROUND_CEILING,
    ROUND_DOWN,
    ROUND_FLOOR,
    ROUND_HALF_DOWN,
    ROUND_HALF_EVEN,
    ROUND_HALF_UP,
    ROUND_UP,
    Decimal,
)
from enum import Enum
from fractions import Fraction
from functools import total_ordering
from math import isqrt
from typing import Union

Rational = Union[int, float, str, Decimal, Fraction]

_HALF = Fraction(1, 2)


class RoundingMode(str, Enum):
    """Rounding policy applied when a value is materialised at an ``oom``."""

    FLOOR = ROUND_FLOOR
    CEILING = ROUND_CEILING
    DOWN = ROUND_DOWN  # Towards zero
    UP = ROUND_UP  # Away from zero
    HALF_UP = ROUND_HALF_UP
    HALF_DOWN = ROUND_HALF_DOWN
    HALF_EVEN = ROUND_HALF_EVEN


def as_rational(value: Rational) -> Fraction:
    """
    Coerce a number to an exact ``Fraction``.

    Floats are converted exactly, so ``0.1`` becomes the binary fraction
    nearest to one tenth, not ``1/10``. Pass ``"0.1"`` for the decimal value.

    Args:
        value: int, float, str, Decimal or Fraction

    Returns:
        The exact rational value

    Raises:
        TypeError: If the value is not a number
    """
    if isinstance(value, Fraction):
        return value
    if isinstance(value, bool):
        raise TypeError("Booleans are not coordinates")
    if isinstance(value, (int, float, str, Decimal)):
        return Fraction(value)
    raise TypeError(f"Cannot convert {type(value).__name__} to a rational")


def _place(oom: int) -> Fraction:
    return Fraction(10) ** oom


def _round_quotient(n: int, rem: Fraction, negative: bool, rm: RoundingMode) -> int:
    """Round ``n + rem`` (``0 < rem < 1``) to an integer per ``rm``."""
    rm = RoundingMode(rm)
    if rm is RoundingMode.FLOOR:
        return n
    if rm is RoundingMode.CEILING:
        return n + 1
    if rm is RoundingMode.DOWN:
        return n + 1 if negative else n
    if rm is RoundingMode.UP:
        return n if negative else n + 1
    if rem > _HALF:
        return n + 1
    if rem < _HALF:
        return n
    # Exact tie
    if rm is RoundingMode.HALF_UP:
        return n if negative else n + 1
    if rm is RoundingMode.HALF_DOWN:
        return n + 1 if negative else n
    return n if n % 2 == 0 else n + 1


def round_rational(x: Rational, oom: int, rm: RoundingMode = RoundingMode.HALF_UP) -> Fraction:
    """
    Round an exact rational to a multiple of ``10**oom``.

    Args:
        x: Value to round
        oom: Order of magnitude of the last retained place
        rm: Rounding policy

    Returns:
        ``k * 10**oom`` for the integer ``k`` selected by ``rm``
    """
    x = as_rational(x)
    place = _place(oom)
    q = x / place
    n = q.numerator // q.denominator
    rem = q - n
    if rem == 0:
        return x
    return _round_quotient(n, rem, x < 0, rm) * place


def to_decimal(x: Rational, oom: int, rm: RoundingMode = RoundingMode.HALF_UP) -> Decimal:
    """Round ``x`` at ``oom`` and return it as a ``Decimal`` with exponent ``oom``."""
    r = round_rational(x, oom, rm) / _place(oom)
    return Decimal(r.numerator // r.denominator).scaleb(oom)


@total_ordering
class RationalSqrt:
    """
    The square root of a non-negative rational, held exactly as its square.

    The root is only computed on demand. When ``x`` is a perfect rational
    square, ``sqrt()`` gives it exactly. Otherwise ``to_fraction`` gives a
    correctly rounded value at the requested precision.
    """

    __slots__ = ("x", "_sqrt", "_checked")

    def __init__(self, x: Rational) -> None:
        x = as_rational(x)
        if x < 0:
            raise ValueError(f"Square root of negative value: {x}")
        self.x = x
        self._sqrt: Fraction | None = None
        self._checked = False

    def __repr__(self) -> str:
        return f"RationalSqrt(x={self.x})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RationalSqrt):
            return self.x == other.x
        return NotImplemented

    def __lt__(self, other: "RationalSqrt") -> bool:
        if isinstance(other, RationalSqrt):
            return self.x < other.x
        return NotImplemented

    def __hash__(self) -> int:
        return hash(("sqrt", self.x))

    def __mul__(self, other: "RationalSqrt") -> "RationalSqrt":
        return RationalSqrt(self.x * other.x)

    def sqrt(self) -> Fraction | None:
        """Exact root, or ``None`` if the root is irrational."""
        if not self._checked:
            n, d = self.x.numerator, self.x.denominator
            rn, rd = isqrt(n), isqrt(d)
            if rn * rn == n and rd * rd == d:
                self._sqrt = Fraction(rn, rd)
            self._checked = True
        return self._sqrt

    def is_exact(self) -> bool:
        return self.sqrt() is not None

    def to_fraction(self, oom: int, rm: RoundingMode = RoundingMode.HALF_UP) -> Fraction:
        """
        Materialise the root rounded to a multiple of ``10**oom``.

        Args:
            oom: Order of magnitude of the last retained place
            rm: Rounding policy

        Returns:
            Rounded root as a Fraction
        """
        exact = self.sqrt()
        if exact is not None:
            return round_rational(exact, oom, rm)
        # sqrt(x) / 10**oom == sqrt(x / 10**(2*oom))
        y = self.x / _place(2 * oom)
        r = isqrt(y.numerator // y.denominator)
        # The root is irrational, so r < sqrt(y) < r + 1 and ties cannot occur.
        rm = RoundingMode(rm)
        if rm in (RoundingMode.FLOOR, RoundingMode.DOWN):
            k = r
        elif rm in (RoundingMode.CEILING, RoundingMode.UP):
            k = r + 1
        else:
            k = r + 1 if y > r * r + r + Fraction(1, 4) else r
        return k * _place(oom)

    def to_decimal(self, oom: int, rm: RoundingMode = RoundingMode.HALF_UP) -> Decimal:
        return to_decimal(self.to_fraction(oom, rm), oom, rm)
