"""
Unit tests for points and frames.
"""

from fractions import Fraction

from v3d.geometry.point import ORIGIN, Frame, Point
from v3d.geometry.ray import Ray
from v3d.geometry.vector import Vector


class TestPoint:
    """Tests for Point."""

    def test_coordinates(self):
        """Test coordinates are exact and indexable."""
        p = Point(1, "1/2", 0.5)
        assert p.coordinates == (1, Fraction(1, 2), Fraction(1, 2))
        assert p[1] == Fraction(1, 2)

    def test_equality_ignores_frame_split(self):
        """Test points are equal by resolved position only."""
        frame = Frame(Vector(10, 0, 0))
        a = Point.relative(frame, Vector(-9, 2, 3))
        b = Point(1, 2, 3)
        assert a == b
        assert hash(a) == hash(b)

    def test_subtract_gives_vector(self):
        """Test the difference of points is a vector."""
        assert Point(3, 2, 1) - Point(1, 1, 1) == Vector(2, 1, 0)

    def test_add_vector_stays_in_frame(self):
        """Test adding a vector keeps the frame."""
        frame = Frame()
        p = Point.relative(frame, Vector(1, 0, 0))
        q = p + Vector(0, 1, 0)
        assert q.frame is frame
        assert q == Point(1, 1, 0)

    def test_frame_translation_moves_points(self):
        """Test moving a frame moves every point in it."""
        frame = Frame()
        a = Point.relative(frame, Vector(1, 0, 0))
        b = Point.relative(frame, Vector(0, 1, 0))
        frame.translate(Vector(0, 0, 5))
        assert a == Point(1, 0, 5)
        assert b == Point(0, 1, 5)
        assert a.rel == Vector(1, 0, 0)

    def test_rebase(self):
        """Test rebasing keeps the position in a new frame."""
        frame = Frame(Vector(1, 1, 1))
        p = Point(2, 3, 4).rebase(frame)
        assert p.frame is frame
        assert p.rel == Vector(1, 2, 3)
        assert p == Point(2, 3, 4)

    def test_translated_is_independent(self):
        """Test translated leaves the point it is called on alone."""
        p = Point(1, 2, 3)
        moved = p.translated(Vector(1, 1, 1))
        assert moved == Point(2, 3, 4)
        assert p == Point(1, 2, 3)

    def test_distance_squared(self):
        """Test the exact squared distance."""
        assert Point(0, 0, 0).distance_squared(Point(1, 2, 2)) == 9

    def test_midpoint(self):
        """Test the midpoint is exact."""
        assert Point(0, 0, 0).midpoint(Point(1, 2, 3)) == Point("1/2", 1, "3/2")

    def test_aabb_is_degenerate(self):
        """Test a point's box has no extent."""
        box = Point(1, 2, 3).aabb
        assert box.lo == box.hi == (1, 2, 3)

    def test_origin(self):
        """Test the origin constant."""
        assert ORIGIN == Point()
        assert ORIGIN.points == (ORIGIN,)


class TestPointRotation:
    """Tests for rotating points."""

    def test_about_axis_through_origin(self, z_axis, quarter_turn):
        """Test a quarter turn about the z axis."""
        assert Point(2, 0, 5).rotated(z_axis, quarter_turn, -3) == Point(0, 2, 5)

    def test_about_offset_axis(self, quarter_turn):
        """Test the axis point is the centre of the turn."""
        axis = Ray(Point(1, 0, 0), Vector(0, 0, 1))
        p = Point(2, 0, 5)
        assert p.rotated(axis, quarter_turn, -3) == Point(1, 1, 5)
        assert p == Point(2, 0, 5)
        assert axis.p.rotated(axis, quarter_turn, -3) == Point(1, 0, 0)

    def test_transformed(self):
        """Test applying a matrix about a chosen origin."""
        swap = (Vector(0, 1, 0), Vector(1, 0, 0), Vector(0, 0, 1))
        assert Point(1, 2, 3).transformed(swap) == Point(2, 1, 3)
        assert Point(1, 2, 3).transformed(swap, Point(1, 1, 0)) == Point(2, 1, 3)
        assert Point(3, 0, 0).transformed(swap, Point(1, 1, 0)) == Point(0, 3, 0)
