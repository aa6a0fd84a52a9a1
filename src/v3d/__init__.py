"""
v3d - Exact-arithmetic 3D geometry kernel

Rational primitives (points, lines, planes, triangles, tetrahedra), bounding
boxes and coplanar convex hulls, with intersection and distance queries that
stay exact until a root has to be taken at a caller-chosen precision.
"""

__version__ = "0.1.0"
__author__ = "v3d Contributors"

from v3d.core.environment import Environment
from v3d.core.precision import RoundingMode
from v3d.geometry import (
    AABB,
    AABBX,
    AABBY,
    AABBZ,
    ConvexHullCoplanar,
    Line,
    LineSegment,
    Plane,
    Point,
    Ray,
    Tetrahedron,
    Triangle,
    Vector,
)

__all__ = [
    "__version__",
    "Environment",
    "RoundingMode",
    "Vector",
    "Point",
    "Line",
    "Ray",
    "LineSegment",
    "Plane",
    "Triangle",
    "Tetrahedron",
    "ConvexHullCoplanar",
    "AABB",
    "AABBX",
    "AABBY",
    "AABBZ",
]
