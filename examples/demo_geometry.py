"""
Demonstration of v3d exact geometry.

This script shows how to:
1. Build points, segments and triangles from exact rationals
2. Intersect them without rounding
3. Measure distances at a chosen precision
4. Bound geometry with axis-aligned boxes
"""

from fractions import Fraction

from v3d import AABB, ConvexHullCoplanar, LineSegment, Plane, Point, Tetrahedron, Triangle, Vector
from v3d.core.logging import configure_logging


def main():
    """Run geometry demonstration."""
    configure_logging(level="DEBUG")

    print("=" * 60)
    print("v3d Geometry Demo")
    print("=" * 60)

    # 1. Exact primitives
    print("\n1. Creating primitives")
    triangle = Triangle(Point(0, 0, 0), Point(2, 0, 0), Point(0, 2, 0))
    segment = LineSegment(Point("1/3", "1/3", -1), Point("1/3", "1/3", 1))
    tetrahedron = Tetrahedron(Point(0, 0, 0), Point(1, 0, 0), Point(0, 1, 0), Point(0, 0, 1))
    print(f"   [OK] {triangle!r}")
    print(f"   [OK] area = {triangle.area()}")
    print(f"   [OK] tetrahedron volume = {tetrahedron.volume}")

    # 2. Intersections stay exact
    print("\n2. Intersections")
    hit = segment.get_intersection(triangle)
    print(f"   segment x triangle -> {hit!r}")
    cut = Plane(Point(0, 0, Fraction(1, 2)), Vector(0, 0, 1)).get_intersection(tetrahedron)
    print(f"   plane x tetrahedron -> {cut!r}")

    # 3. Distances are rounded only when a root is taken
    print("\n3. Distances")
    far = Point(3, 3, 0)
    print(f"   squared distance = {far.get_distance_squared(triangle)}")
    for oom in (-1, -3, -6):
        print(f"   distance at 10^{oom}: {float(far.get_distance(triangle, oom=oom))}")

    # 4. Boxes and hulls
    print("\n4. Bounding boxes and hulls")
    box = AABB.from_geometries([triangle, tetrahedron])
    print(f"   [OK] {box!r}")
    print(f"   [OK] box contains hit point: {box.contains(hit)}")
    corners = [Point(0, 0, 0), Point(2, 0, 0), Point(2, 1, 0), Point(0, 1, 0)]
    hull = ConvexHullCoplanar(Vector(0, 0, 1), *corners, Point(1, "0.5", 0))
    print(f"   [OK] hull has {len(hull)} vertices, rectangle: {hull.is_rectangle()}")

    print("\n" + "=" * 60)
    print("Demo complete")
    print("=" * 60)


if __name__ == "__main__":
    main()
