"""
Pairwise intersection routines.

Every intersection here is linear, so every result is exact. Results are
the simplest geometry describing the shared point set: a Point, a linear
geometry, a plane, a polygon, or ``None`` when nothing is shared.
"""

from fractions import Fraction
from itertools import combinations
from typing import Callable, Iterable, Sequence

from v3d.engine import dispatch
from v3d.engine.dispatch import (
    LINEAR,
    PLANE,
    POINT,
    POLYGON,
    TETRAHEDRON,
    intersection_for,
    intersects_for,
)
from v3d.geometry.base import Geometry
from v3d.geometry.hull import hull_geometry
from v3d.geometry.line import Line, intersect_parameter
from v3d.geometry.plane import Plane
from v3d.geometry.point import Point
from v3d.geometry.polygon import ConvexPolygon, edge_side
from v3d.geometry.tetrahedron import Tetrahedron
from v3d.geometry.vector import Vector

# A linear constraint f0 + f1 * t >= 0 on a line parameter.
Constraint = tuple[Fraction, Fraction]
# A function that is >= 0 on the kept side of a clipping boundary.
Clip = Callable[[Point], Fraction]

_PROJECTIONS = ((0, 1), (1, 2), (2, 0))


def _crossing_parameter(a: Line, b: Line) -> Fraction:
    # Non-parallel coplanar lines cross in at least one axis projection.
    for axes in _PROJECTIONS:
        t = intersect_parameter(a.p, a.q, b.p, b.q, axes)
        if t is not None:
            return t
    raise ValueError("Lines are parallel")


def clip_linear(line: Line, constraints: Iterable[Constraint]) -> Geometry | None:
    """Restrict ``line`` to the parameters satisfying every constraint."""
    lo, hi = line.t_min, line.t_max
    for f0, f1 in constraints:
        if f1 == 0:
            if f0 < 0:
                return None
            continue
        t = -f0 / f1
        if f1 > 0:
            lo = t if lo is None else max(lo, t)
        else:
            hi = t if hi is None else min(hi, t)
    return line.restrict(lo, hi)


def clip_polygon(points: Sequence[Point], clips: Iterable[Clip]) -> list[Point]:
    """
    Clip a planar convex polygon against half-spaces.

    Each clip function is non-negative on the side that is kept.
    """
    out = list(points)
    for clip in clips:
        if not out:
            break
        src, out = out, []
        for i, cur in enumerate(src):
            prev = src[i - 1]
            g_cur, g_prev = clip(cur), clip(prev)
            if g_cur >= 0:
                if g_prev < 0:
                    out.append(_crossing(prev, cur, g_prev, g_cur))
                out.append(cur)
            elif g_prev > 0:
                out.append(_crossing(prev, cur, g_prev, g_cur))
    return out


def _crossing(a: Point, b: Point, g_a: Fraction, g_b: Fraction) -> Point:
    return Point.at(a.vector + (b - a) * (g_a / (g_a - g_b)))


def _polygon_clips(poly: ConvexPolygon) -> list[Clip]:
    pts = poly.points
    return [
        (lambda pt, a=a, b=b: edge_side(a, b, pt, poly.normal))
        for a, b in zip(pts, pts[1:] + pts[:1])
    ]


def _tetrahedron_clips(tet: Tetrahedron) -> list[Clip]:
    return [(lambda pt, plane=face.plane: -plane.side(pt)) for face in tet.faces]


def _as_geometry(points: Sequence[Point], normal: Vector) -> Geometry | None:
    if not points:
        return None
    return hull_geometry(*points, normal=normal)


# Point


@intersection_for(POINT, POINT)
def point_point(a: Point, b: Point) -> Point | None:
    return a if a == b else None


@intersection_for(POINT, LINEAR)
def point_linear(pt: Point, line: Line) -> Point | None:
    return pt if line.contains(pt) else None


@intersection_for(POINT, PLANE)
def point_plane(pt: Point, plane: Plane) -> Point | None:
    return pt if plane.contains(pt) else None


@intersection_for(POINT, POLYGON)
def point_polygon(pt: Point, poly: ConvexPolygon) -> Point | None:
    return pt if poly.contains(pt) else None


@intersection_for(POINT, TETRAHEDRON)
def point_tetrahedron(pt: Point, tet: Tetrahedron) -> Point | None:
    return pt if tet.contains(pt) else None


# Linear


@intersection_for(LINEAR, LINEAR)
def linear_linear(a: Line, b: Line) -> Geometry | None:
    """
    Collinear pairs give their overlap, which may be a point. Other pairs
    give the crossing point if it is within both ranges.
    """
    if a.is_parallel(b):
        if not a.on_carrier(b.p):
            return None
        return a.restrict(*a.overlap(b))
    if not a.is_coplanar(b):
        return None
    t = _crossing_parameter(a, b)
    if not a.in_range(t):
        return None
    pt = a.point_at(t)
    return pt if b.contains(pt) else None


@intersection_for(LINEAR, PLANE)
def linear_plane(line: Line, plane: Plane) -> Geometry | None:
    t = plane.line_parameter(line)
    if t is None:
        return line if plane.contains(line.p) else None
    return line.point_at(t) if line.in_range(t) else None


@intersection_for(LINEAR, POLYGON)
def linear_polygon(line: Line, poly: ConvexPolygon) -> Geometry | None:
    plane = poly.plane
    t = plane.line_parameter(line)
    if t is None:
        if not plane.contains(line.p):
            return None
        n = poly.normal
        pts = poly.points
        constraints = [
            (edge_side(a, b, line.p, n), (b - a).cross(line.v).dot(n))
            for a, b in zip(pts, pts[1:] + pts[:1])
        ]
        return clip_linear(line, constraints)
    if not line.in_range(t):
        return None
    pt = line.point_at(t)
    return pt if poly.contains(pt) else None


@intersection_for(LINEAR, TETRAHEDRON)
def linear_tetrahedron(line: Line, tet: Tetrahedron) -> Geometry | None:
    constraints = [
        (-face.plane.side(line.p), -face.plane.n.dot(line.v)) for face in tet.faces
    ]
    return clip_linear(line, constraints)


# Plane


@intersection_for(PLANE, PLANE)
def plane_plane(a: Plane, b: Plane) -> Geometry | None:
    """The shared line, the plane itself when coincident, or ``None``."""
    if a.is_parallel(b):
        return a if a.contains(b.p) else None
    return a.intersection_line(b)


@intersection_for(PLANE, POLYGON)
def plane_polygon(plane: Plane, poly: ConvexPolygon) -> Geometry | None:
    if plane.is_parallel(poly.plane):
        return poly if plane.contains(poly.points[0]) else None
    return linear_polygon(plane.intersection_line(poly.plane), poly)


@intersection_for(PLANE, TETRAHEDRON)
def plane_tetrahedron(plane: Plane, tet: Tetrahedron) -> Geometry | None:
    sides = {pt: plane.side(pt) for pt in tet.points}
    points = [pt for pt, s in sides.items() if s == 0]
    for a, b in combinations(tet.points, 2):
        if sides[a] * sides[b] < 0:
            points.append(_crossing(a, b, sides[a], sides[b]))
    return _as_geometry(points, plane.n)


# Polygon


@intersection_for(POLYGON, POLYGON)
def polygon_polygon(a: ConvexPolygon, b: ConvexPolygon) -> Geometry | None:
    """
    Coplanar polygons are clipped against each other. Otherwise each is cut
    by the line the two planes share and the two cuts are intersected.
    """
    if a.plane.is_parallel(b.plane):
        if not a.plane.contains(b.points[0]):
            return None
        return _as_geometry(clip_polygon(a.points, _polygon_clips(b)), a.normal)
    line = a.plane.intersection_line(b.plane)
    cut_a = linear_polygon(line, a)
    if cut_a is None:
        return None
    cut_b = linear_polygon(line, b)
    if cut_b is None:
        return None
    return dispatch.get_intersection(cut_a, cut_b)


@intersection_for(POLYGON, TETRAHEDRON)
def polygon_tetrahedron(poly: ConvexPolygon, tet: Tetrahedron) -> Geometry | None:
    return _as_geometry(clip_polygon(poly.points, _tetrahedron_clips(tet)), poly.normal)


# Tetrahedron pairs only have a predicate. Their shared solid is not computed.


def _separated(axis: Vector, a: Sequence[Point], b: Sequence[Point]) -> bool:
    if axis.is_zero():
        return False
    da = [axis.dot(pt.vector) for pt in a]
    db = [axis.dot(pt.vector) for pt in b]
    return max(da) < min(db) or max(db) < min(da)


@intersects_for(TETRAHEDRON, TETRAHEDRON)
def tetrahedron_tetrahedron(a: Tetrahedron, b: Tetrahedron) -> bool:
    """Separating axis test over face normals and edge cross products."""
    axes = [f.normal for f in a.faces] + [f.normal for f in b.faces]
    axes += [ea.v.cross(eb.v) for ea in a.edges for eb in b.edges]
    return not any(_separated(axis, a.points, b.points) for axis in axes)
