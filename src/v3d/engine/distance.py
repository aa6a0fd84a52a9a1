"""
Pairwise exact squared-distance routines.

Squared distances of rational geometry are rational, so every routine here
is exact. Bounded shapes reduce to their boundary: when two convex shapes
do not meet, the closest pair always involves a vertex, an edge or a face.
"""

from fractions import Fraction

from v3d.engine import dispatch
from v3d.engine.dispatch import (
    LINEAR,
    PLANE,
    POINT,
    POLYGON,
    TETRAHEDRON,
    distance_for,
)
from v3d.geometry.line import Line
from v3d.geometry.plane import Plane
from v3d.geometry.point import Point
from v3d.geometry.polygon import ConvexPolygon
from v3d.geometry.tetrahedron import Tetrahedron


def _endpoints(line: Line) -> list[Point]:
    """Points at the finite ends of ``line``'s range."""
    return [line.point_at(t) for t in (line.t_min, line.t_max) if t is not None]


# Point


@distance_for(POINT, POINT)
def point_point(a: Point, b: Point) -> Fraction:
    return a.distance_squared(b)


@distance_for(POINT, LINEAR)
def point_linear(pt: Point, line: Line) -> Fraction:
    """Squared distance to the closest point of the clamped range."""
    foot = line.point_at(line.clamp(line.parameter_of(pt)))
    return pt.distance_squared(foot)


@distance_for(POINT, PLANE)
def point_plane(pt: Point, plane: Plane) -> Fraction:
    return plane.distance_squared(pt)


@distance_for(POINT, POLYGON)
def point_polygon(pt: Point, poly: ConvexPolygon) -> Fraction:
    if poly.contains(poly.plane.project(pt)):
        return poly.plane.distance_squared(pt)
    return min(point_linear(pt, edge) for edge in poly.edges)


@distance_for(POINT, TETRAHEDRON)
def point_tetrahedron(pt: Point, tet: Tetrahedron) -> Fraction:
    if tet.contains(pt):
        return Fraction(0)
    return min(point_polygon(pt, face) for face in tet.faces)


# Linear


@distance_for(LINEAR, LINEAR)
def linear_linear(a: Line, b: Line) -> Fraction:
    """
    For skew or crossing pairs the unconstrained closest parameters are
    used when both are in range. Otherwise the minimum lies on a finite end
    of one of the ranges.
    """
    if a.is_parallel(b):
        lo, hi = a.overlap(b)
        if lo is None or hi is None or lo <= hi:
            return point_linear(b.p, a.line)
    else:
        w = a.p - b.p
        aa, ab, bb = a.v.dot(a.v), a.v.dot(b.v), b.v.dot(b.v)
        aw, bw = a.v.dot(w), b.v.dot(w)
        den = aa * bb - ab * ab
        s = (ab * bw - bb * aw) / den
        t = (aa * bw - ab * aw) / den
        if a.in_range(s) and b.in_range(t):
            return a.point_at(s).distance_squared(b.point_at(t))
    candidates = [point_linear(pt, b) for pt in _endpoints(a)]
    candidates += [point_linear(pt, a) for pt in _endpoints(b)]
    return min(candidates)


@distance_for(LINEAR, PLANE)
def linear_plane(line: Line, plane: Plane) -> Fraction:
    if dispatch.intersects(line, plane):
        return Fraction(0)
    if plane.is_parallel_to_line(line):
        return plane.distance_squared(line.p)
    return min(plane.distance_squared(pt) for pt in _endpoints(line))


@distance_for(LINEAR, POLYGON)
def linear_polygon(line: Line, poly: ConvexPolygon) -> Fraction:
    if dispatch.intersects(line, poly):
        return Fraction(0)
    candidates = [linear_linear(line, edge) for edge in poly.edges]
    candidates += [point_polygon(pt, poly) for pt in _endpoints(line)]
    return min(candidates)


@distance_for(LINEAR, TETRAHEDRON)
def linear_tetrahedron(line: Line, tet: Tetrahedron) -> Fraction:
    if dispatch.intersects(line, tet):
        return Fraction(0)
    return min(linear_polygon(line, face) for face in tet.faces)


# Plane


@distance_for(PLANE, PLANE)
def plane_plane(a: Plane, b: Plane) -> Fraction:
    if a.is_parallel(b):
        return a.distance_squared(b.p)
    return Fraction(0)


@distance_for(PLANE, POLYGON)
def plane_polygon(plane: Plane, poly: ConvexPolygon) -> Fraction:
    if dispatch.intersects(plane, poly):
        return Fraction(0)
    return min(plane.distance_squared(pt) for pt in poly.points)


@distance_for(PLANE, TETRAHEDRON)
def plane_tetrahedron(plane: Plane, tet: Tetrahedron) -> Fraction:
    if dispatch.intersects(plane, tet):
        return Fraction(0)
    return min(plane.distance_squared(pt) for pt in tet.points)


# Polygon and tetrahedron


@distance_for(POLYGON, POLYGON)
def polygon_polygon(a: ConvexPolygon, b: ConvexPolygon) -> Fraction:
    if dispatch.intersects(a, b):
        return Fraction(0)
    candidates = [linear_polygon(edge, b) for edge in a.edges]
    candidates += [linear_polygon(edge, a) for edge in b.edges]
    return min(candidates)


@distance_for(POLYGON, TETRAHEDRON)
def polygon_tetrahedron(poly: ConvexPolygon, tet: Tetrahedron) -> Fraction:
    if dispatch.intersects(poly, tet):
        return Fraction(0)
    return min(polygon_polygon(poly, face) for face in tet.faces)


@distance_for(TETRAHEDRON, TETRAHEDRON)
def tetrahedron_tetrahedron(a: Tetrahedron, b: Tetrahedron) -> Fraction:
    if dispatch.intersects(a, b):
        return Fraction(0)
    return min(polygon_polygon(fa, fb) for fa in a.faces for fb in b.faces)
