"""
Pairwise dispatch for intersection and distance queries.

Each query has a table keyed by ``(Kind, Kind)``. Routines register for
groups of kinds with the decorators below. A routine registered for
``(A, B)`` also serves ``(B, A)`` with its arguments swapped, unless
``(B, A)`` is itself registered.

Bounding boxes are compared first, and pairs whose boxes are apart never
reach the exact routines.
"""

from fractions import Fraction
from typing import Any, Callable, Iterable

from v3d.core.environment import resolve_precision
from v3d.core.exceptions import UnsupportedOperationError
from v3d.core.logging import get_logger
from v3d.core.precision import RationalSqrt, RoundingMode
from v3d.geometry.base import Geometry, Kind

logger = get_logger(__name__)

Routine = Callable[[Any, Any], Any]
Table = dict[tuple[Kind, Kind], Routine]

POINT = (Kind.POINT,)
LINEAR = (Kind.LINE, Kind.RAY, Kind.SEGMENT)
PLANE = (Kind.PLANE,)
POLYGON = (Kind.TRIANGLE, Kind.HULL)
TETRAHEDRON = (Kind.TETRAHEDRON,)

INTERSECTS: Table = {}
INTERSECTION: Table = {}
DISTANCE_SQUARED: Table = {}


def _swapped(fn: Routine) -> Routine:
    def swapped(a: Any, b: Any) -> Any:
        return fn(b, a)

    swapped.__name__ = f"{fn.__name__}_swapped"
    return swapped


def _register(table: Table, first: Iterable[Kind], second: Iterable[Kind]) -> Callable[[Routine], Routine]:
    first, second = tuple(first), tuple(second)

    def decorator(fn: Routine) -> Routine:
        pairs = {(a, b) for a in first for b in second}
        for a, b in pairs:
            table[(a, b)] = fn
        for a, b in pairs:
            if (b, a) not in pairs:
                table[(b, a)] = _swapped(fn)
        return fn

    return decorator


def intersects_for(first: Iterable[Kind], second: Iterable[Kind]) -> Callable[[Routine], Routine]:
    """Register a boolean intersection test."""
    return _register(INTERSECTS, first, second)


def intersection_for(first: Iterable[Kind], second: Iterable[Kind]) -> Callable[[Routine], Routine]:
    """Register a routine returning the shared geometry or ``None``."""
    return _register(INTERSECTION, first, second)


def distance_for(first: Iterable[Kind], second: Iterable[Kind]) -> Callable[[Routine], Routine]:
    """Register a routine returning the exact squared distance."""
    return _register(DISTANCE_SQUARED, first, second)


def _unsupported(operation: str, a: Geometry, b: Geometry) -> UnsupportedOperationError:
    kinds = (a.kind.value, b.kind.value)
    logger.warning("unsupported_operation", operation=operation, kinds=kinds)
    return UnsupportedOperationError(
        f"{operation} is not supported for {kinds[0]} and {kinds[1]}",
        operation=operation,
        kinds=kinds,
    )


def boxes_apart(a: Geometry, b: Geometry) -> bool:
    """True if both geometries are bounded and their boxes do not meet."""
    box_a = a.aabb
    if box_a is None:
        return False
    box_b = b.aabb
    return box_b is not None and not box_a.intersects(box_b)


def intersects(a: Geometry, b: Geometry) -> bool:
    """
    True if ``a`` and ``b`` share a point.

    Uses a dedicated test when one is registered, otherwise checks whether
    the intersection is empty.
    """
    if boxes_apart(a, b):
        return False
    fn = INTERSECTS.get((a.kind, b.kind))
    if fn is not None:
        return fn(a, b)
    return get_intersection(a, b) is not None


def get_intersection(a: Geometry, b: Geometry) -> Geometry | None:
    """
    The shared point set of ``a`` and ``b``, or ``None``.

    Raises:
        UnsupportedOperationError: If no routine exists for the pair
    """
    fn = INTERSECTION.get((a.kind, b.kind))
    if fn is None:
        raise _unsupported("get_intersection", a, b)
    if boxes_apart(a, b):
        return None
    return fn(a, b)


def get_distance_squared(a: Geometry, b: Geometry) -> Fraction:
    """
    Exact squared minimum distance between ``a`` and ``b``.

    Raises:
        UnsupportedOperationError: If no routine exists for the pair
    """
    fn = DISTANCE_SQUARED.get((a.kind, b.kind))
    if fn is None:
        raise _unsupported("get_distance_squared", a, b)
    return fn(a, b)


def get_distance(
    a: Geometry,
    b: Geometry,
    oom: int | None = None,
    rm: RoundingMode | None = None,
) -> Fraction:
    """
    Minimum distance rounded at ``oom``.

    Zero distances are returned exactly without taking a root.
    """
    d2 = get_distance_squared(a, b)
    if d2 == 0:
        return Fraction(0)
    oom, rm = resolve_precision(oom, rm)
    return RationalSqrt(d2).to_fraction(oom, rm)
