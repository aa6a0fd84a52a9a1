"""
Unit tests for axis-locked bounding boxes.
"""

import pytest

from v3d.core.exceptions import ConstructionError
from v3d.geometry.aabb import AABB
from v3d.geometry.aabb2d import AABBX, AABBY, AABBZ
from v3d.geometry.line import Line
from v3d.geometry.point import Point
from v3d.geometry.segment import LineSegment
from v3d.geometry.vector import Vector


class TestAxisAccessors:
    """Each accessor reads its own axis."""

    def test_aabbx(self):
        """Test the x-locked accessors."""
        box = AABBX(9, 1, 2, 3, 4)
        assert (box.x, box.y_min, box.y_max, box.z_min, box.z_max) == (9, 1, 2, 3, 4)

    def test_aabby(self):
        """Test the y-locked accessors."""
        box = AABBY(9, 1, 2, 3, 4)
        assert (box.y, box.x_min, box.x_max, box.z_min, box.z_max) == (9, 1, 2, 3, 4)

    def test_aabbz(self):
        """Test the z-locked accessors."""
        box = AABBZ(9, 1, 2, 3, 4)
        assert (box.z, box.x_min, box.x_max, box.y_min, box.y_max) == (9, 1, 2, 3, 4)

    def test_aabby_from_points(self):
        """Test a y-locked box spans the x and z extremes."""
        box = AABBY.from_points(Point(1, 5, 3), Point(-2, 5, 8))
        assert box.y == 5
        assert (box.x_min, box.x_max) == (-2, 1)
        assert (box.z_min, box.z_max) == (3, 8)


class TestAABB2DConstruction:
    """Tests for building axis-locked boxes."""

    def test_points_must_share_locked_value(self):
        """Test points off the locked value are rejected with details."""
        with pytest.raises(ConstructionError) as exc_info:
            AABBZ.from_points(Point(0, 0, 0), Point(1, 1, 1))
        assert "points" in exc_info.value.details

    def test_no_points(self):
        """Test no points is an error."""
        with pytest.raises(ConstructionError):
            AABBX.from_points()

    def test_inverted_extent(self):
        """Test a lower bound above the upper bound is rejected."""
        with pytest.raises(ConstructionError):
            AABBZ(0, 1, 0, 0, 1)

    def test_contains_every_input_point(self):
        """Test input points are inside and off-axis points are not."""
        points = [Point(0, 0, 2), Point(3, -1, 2), Point(1, 4, 2)]
        box = AABBZ.from_points(*points)
        assert all(box.contains(p) for p in points)
        assert not box.contains(Point(1, 1, 3))


class TestAABB2DCornersAndEdges:
    """Tests for corners, edges and degeneracy."""

    def test_corners(self):
        """Test corner names pick lower or upper per free axis."""
        box = AABBZ(0, 0, 2, 0, 1)
        assert box.ll == Point(0, 0, 0)
        assert box.lu == Point(0, 1, 0)
        assert box.uu == Point(2, 1, 0)
        assert box.ul == Point(2, 0, 0)

    def test_edges(self):
        """Test the four edges of a rectangle."""
        box = AABBZ(0, 0, 2, 0, 1)
        assert box.left == LineSegment(Point(0, 0, 0), Point(0, 1, 0))
        assert box.right == LineSegment(Point(2, 0, 0), Point(2, 1, 0))
        assert box.bottom == LineSegment(Point(0, 0, 0), Point(2, 0, 0))
        assert box.top == LineSegment(Point(0, 1, 0), Point(2, 1, 0))

    def test_single_point_edges_are_points(self):
        """Test every edge of a point box is the point."""
        box = AABBX.from_points(Point(1, 2, 3))
        for edge in (box.top, box.bottom, box.left, box.right):
            assert isinstance(edge, Point)
            assert edge == Point(1, 2, 3)

    def test_collapsed_extent(self):
        """Test a box flat in one free axis has point and segment edges."""
        box = AABBY(0, 0, 0, 0, 5)
        assert box.left == LineSegment(Point(0, 0, 0), Point(0, 0, 5))
        assert box.bottom == Point(0, 0, 0)
        assert box.top == Point(0, 0, 5)
        assert box.geometry == box.left

    def test_plane(self):
        """Test the plane normal to the locked axis."""
        box = AABBY(3, 0, 1, 0, 1)
        assert box.plane.contains(Point(7, 3, -2))
        assert box.plane.n == Vector(0, 1, 0)

    def test_rectangle_geometry(self):
        """Test a full box is a rectangle."""
        geometry = AABBY(3, 0, 2, 0, 1).geometry
        assert geometry.is_rectangle()
        assert geometry.area() == 2


class TestAABB2DPredicates:
    """Tests for predicates shared with 3D boxes."""

    def test_touching_intersect(self):
        """Test boxes sharing an edge intersect."""
        a = AABBZ(0, 0, 1, 0, 1)
        b = AABBZ(0, 1, 2, 0, 1)
        assert a.intersects(b)
        assert b.intersects(a)

    def test_different_locked_values_do_not_intersect(self):
        """Test parallel boxes apart never intersect."""
        assert not AABBZ(0, 0, 1, 0, 1).intersects(AABBZ(1, 0, 1, 0, 1))

    def test_union(self):
        """Test the union holds both boxes."""
        a = AABBX(0, 0, 1, 0, 1)
        b = AABBX(0, 2, 3, -1, 0)
        union = a.union(b)
        assert union == AABBX(0, 0, 3, -1, 1)
        assert union.contains(a) and union.contains(b)
        assert a.union(AABBX(0, 0, 1, 0, 0)) is a

    def test_union_across_locked_values(self):
        """Test boxes at different locked values have no union."""
        with pytest.raises(ConstructionError):
            AABBX(0, 0, 1, 0, 1).union(AABBX(1, 0, 1, 0, 1))

    def test_get_intersect(self):
        """Test the overlap of two boxes."""
        overlap = AABBZ(0, 0, 2, 0, 2).get_intersect(AABBZ(0, 1, 3, 1, 3))
        assert overlap == AABBZ(0, 1, 2, 1, 2)

    def test_to_aabb(self):
        """Test the equivalent 3D box."""
        assert AABBZ(4, 0, 1, 2, 3).to_aabb() == AABB(0, 1, 2, 3, 4, 4)

    def test_translated(self):
        """Test a translated box moves its locked value."""
        assert AABBZ(0, 0, 1, 0, 1).translated(Vector(1, 1, 1)) == AABBZ(1, 1, 2, 1, 2)

    def test_intersect_denominator(self):
        """Test the denominator for crossing and parallel lines."""
        box = AABBX(0, 0, 1, 0, 1)
        a = Line(Point(0, 0, 0), Vector(0, 1, 0))
        b = Line(Point(0, 0, 0), Vector(0, 0, 1))
        assert box.intersect_denominator(a, b) == 1
        assert box.intersect_denominator(a, a) == 0
