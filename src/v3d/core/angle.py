"""
Angles at a caller-chosen precision.

Angles are rational radians. Pi, and the sine and cosine of a non-zero
rational, are irrational. They are evaluated in fixed-point integer
arithmetic carrying ``GUARD_DIGITS`` more places than ``oom`` asks for,
then rounded once at ``oom`` in the same way as ``RationalSqrt.to_fraction``.

Usage::

    from v3d.core.angle import cos, pi

    pi(-5)                  # Fraction(314159, 100000)
    cos(pi(-12) / 3, -3)    # Fraction(1, 2)
"""

from fractions import Fraction
from functools import lru_cache

from v3d.core.environment import resolve_precision
from v3d.core.precision import Rational, RoundingMode, as_rational, round_rational

GUARD_DIGITS = 6


def guard_oom(oom: int, theta: Fraction = Fraction(0)) -> int:
    """
    Working order of magnitude for a result wanted at ``oom``.

    Large angles lose places to the reduction modulo two pi, so each digit
    of ``theta``'s integer part buys one more working place.
    """
    extra = len(str(abs(theta.numerator) // theta.denominator))
    return min(oom, 0) - GUARD_DIGITS - extra


def _div(a: int, b: int) -> int:
    # Truncates towards zero so a shrinking series term reaches exactly 0.
    q = abs(a) // b
    return q if a >= 0 else -q


def _arctan_inv(n: int, scale: int) -> int:
    """``scale * arctan(1 / n)`` by its alternating series."""
    power = scale // n
    total = power
    n2 = n * n
    k = 1
    while power:
        power //= n2
        term = power // (2 * k + 1)
        total += -term if k % 2 else term
        k += 1
    return total


@lru_cache(maxsize=32)
def _pi(scale: int) -> int:
    """``scale * pi`` by Machin's formula."""
    return 4 * (4 * _arctan_inv(5, scale) - _arctan_inv(239, scale))


def _sin_cos(x: int, scale: int) -> tuple[int, int]:
    """``scale * sin`` and ``scale * cos`` of the angle ``x / scale``."""
    two_pi = 2 * _pi(scale)
    x %= two_pi
    if 2 * x > two_pi:
        x -= two_pi
    den = scale * scale
    x2 = x * x

    sin_sum = term = x
    k = 1
    while term:
        term = _div(-term * x2, den * (2 * k) * (2 * k + 1))
        sin_sum += term
        k += 1

    cos_sum = term = scale
    k = 1
    while term:
        term = _div(-term * x2, den * (2 * k - 1) * (2 * k))
        cos_sum += term
        k += 1
    return sin_sum, cos_sum


def guarded_sin_cos(theta: Rational, oom: int) -> tuple[Fraction, Fraction]:
    """
    Unrounded sine and cosine of ``theta``, accurate well beyond ``oom``.

    For callers that combine them further before rounding once themselves.
    ``theta == 0`` gives exactly ``(0, 1)``.
    """
    theta = as_rational(theta)
    if theta == 0:
        return Fraction(0), Fraction(1)
    scale = 10 ** -guard_oom(oom, theta)
    s, c = _sin_cos(round(theta * scale), scale)
    return Fraction(s, scale), Fraction(c, scale)


def pi(oom: int | None = None, rm: RoundingMode | None = None) -> Fraction:
    """Pi rounded at ``oom``."""
    oom, rm = resolve_precision(oom, rm)
    scale = 10 ** -guard_oom(oom)
    return round_rational(Fraction(_pi(scale), scale), oom, rm)


def sin(theta: Rational, oom: int | None = None, rm: RoundingMode | None = None) -> Fraction:
    """Sine of ``theta`` radians rounded at ``oom``."""
    oom, rm = resolve_precision(oom, rm)
    return round_rational(guarded_sin_cos(theta, oom)[0], oom, rm)


def cos(theta: Rational, oom: int | None = None, rm: RoundingMode | None = None) -> Fraction:
    """Cosine of ``theta`` radians rounded at ``oom``."""
    oom, rm = resolve_precision(oom, rm)
    return round_rational(guarded_sin_cos(theta, oom)[1], oom, rm)


def _cos_exceeds(k: Fraction, num: Fraction, den2: Fraction) -> bool:
    """True if ``k > num / sqrt(den2)``, decided exactly."""
    if k >= 0 > num:
        return True
    if num >= 0 > k:
        return False
    if k >= 0:
        return k * k * den2 > num * num
    return k * k * den2 < num * num


def arccos_ratio(
    num: Rational,
    den_squared: Rational,
    oom: int | None = None,
    rm: RoundingMode | None = None,
) -> Fraction:
    """
    ``arccos(num / sqrt(den_squared))`` in ``[0, pi]``, rounded at ``oom``.

    The cosine is passed as a numerator over a squared denominator, so the
    angle between two vectors, ``a.b / sqrt(|a|^2 |b|^2)``, needs no square
    root. The angle is found by bisection on the cosine.

    Args:
        num: Numerator of the cosine
        den_squared: Square of the (positive) denominator of the cosine
        oom: Order of magnitude of the last retained place
        rm: Rounding policy

    Raises:
        ValueError: If ``den_squared`` is not positive or the cosine is
            outside ``[-1, 1]``
    """
    num, den2 = as_rational(num), as_rational(den_squared)
    if den2 <= 0:
        raise ValueError(f"Denominator squared must be positive: {den2}")
    if num * num > den2:
        raise ValueError(f"Cosine {num}/sqrt({den2}) is outside [-1, 1]")
    oom, rm = resolve_precision(oom, rm)
    scale = 10 ** -guard_oom(oom)
    if num * num == den2:
        return Fraction(0) if num > 0 else pi(oom, rm)
    if num == 0:
        return round_rational(Fraction(_pi(scale), 2 * scale), oom, rm)

    lo, hi = 0, _pi(scale)
    while hi - lo > 1:
        mid = (lo + hi) // 2
        if _cos_exceeds(Fraction(_sin_cos(mid, scale)[1], scale), num, den2):
            lo = mid
        else:
            hi = mid
    return round_rational(Fraction(lo + hi, 2 * scale), oom, rm)
