"""
Geometry module - exact primitives, bounding boxes and coplanar hulls.
"""

from v3d.geometry.aabb import AABB
from v3d.geometry.aabb2d import AABB2D, AABBX, AABBY, AABBZ
from v3d.geometry.base import Geometry, Kind
from v3d.geometry.hull import ConvexHullCoplanar, convex_hull, hull_geometry, is_rectangle
from v3d.geometry.line import Line, intersect_denominator
from v3d.geometry.plane import Plane
from v3d.geometry.point import ORIGIN, Frame, Point
from v3d.geometry.polygon import ConvexPolygon
from v3d.geometry.ray import Ray
from v3d.geometry.segment import LineSegment
from v3d.geometry.tetrahedron import Tetrahedron
from v3d.geometry.triangle import Triangle
from v3d.geometry.vector import AXES, ZERO, Vector

__all__ = [
    # Base
    "Geometry",
    "Kind",
    # Primitives
    "Vector",
    "ZERO",
    "AXES",
    "Frame",
    "Point",
    "ORIGIN",
    "Line",
    "Ray",
    "LineSegment",
    "Plane",
    "intersect_denominator",
    # Shapes
    "ConvexPolygon",
    "Triangle",
    "Tetrahedron",
    "ConvexHullCoplanar",
    "convex_hull",
    "hull_geometry",
    "is_rectangle",
    # Bounding boxes
    "AABB",
    "AABB2D",
    "AABBX",
    "AABBY",
    "AABBZ",
]
