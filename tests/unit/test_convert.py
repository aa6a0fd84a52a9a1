"""
Unit tests for numpy conversion.
"""

from fractions import Fraction

import numpy as np
import pytest

from v3d.convert import GeometryConverter
from v3d.core.exceptions import ConstructionError
from v3d.core.precision import RoundingMode
from v3d.geometry import AABB, Point, Vector


class TestPointsFromArray:
    """Tests for building points from arrays."""

    def test_integer_array(self):
        """Test one point per row."""
        points = GeometryConverter.points_from_array(np.array([[0, 0, 0], [1, 2, 3]]))
        assert points == [Point(0, 0, 0), Point(1, 2, 3)]

    def test_floats_are_exact(self):
        """Test floats convert to their exact binary value."""
        points = GeometryConverter.points_from_array(np.array([[0.5, 0.25, 0.1]]))
        assert points[0].x == Fraction(1, 2)
        assert points[0].y == Fraction(1, 4)
        assert points[0].z == Fraction(0.1)

    def test_nested_lists(self):
        """Test plain lists are accepted."""
        assert GeometryConverter.points_from_array([[1, 1, 1]]) == [Point(1, 1, 1)]

    def test_empty_array(self):
        """Test an empty array gives no points."""
        assert GeometryConverter.points_from_array(np.zeros((0, 3))) == []

    @pytest.mark.parametrize("shape", [(3,), (2, 2), (2, 3, 1)])
    def test_bad_shape(self, shape):
        """Test arrays not shaped (N, 3) are rejected with their shape."""
        with pytest.raises(ConstructionError) as exc_info:
            GeometryConverter.points_from_array(np.zeros(shape))
        assert exc_info.value.details["shape"] == list(shape)

    def test_non_numeric(self):
        """Test strings are rejected."""
        with pytest.raises(ConstructionError):
            GeometryConverter.points_from_array(np.array([["a", "b", "c"]]))

    def test_non_finite(self):
        """Test NaN is rejected."""
        with pytest.raises(ConstructionError):
            GeometryConverter.points_from_array(np.array([[0.0, np.nan, 1.0]]))


class TestVectorFromArray:
    """Tests for building vectors from arrays."""

    def test_vector(self):
        """Test a flat array of three."""
        assert GeometryConverter.vector_from_array(np.array([1, -2, 3])) == Vector(1, -2, 3)

    def test_column_vector(self):
        """Test a column of three."""
        assert GeometryConverter.vector_from_array(np.array([[1], [0], [0]])) == Vector(1, 0, 0)

    def test_wrong_length(self):
        """Test two components are rejected."""
        with pytest.raises(ConstructionError):
            GeometryConverter.vector_from_array(np.array([1, 2]))


class TestPointsToArray:
    """Tests for exporting points."""

    def test_round_to_precision(self):
        """Test components are rounded at oom."""
        points = [Point(Fraction(1, 3), Fraction(2, 3), 1)]
        array = GeometryConverter.points_to_array(points, oom=-2)
        np.testing.assert_array_equal(array, np.array([[0.33, 0.67, 1.0]]))

    def test_rounding_mode(self):
        """Test the rounding mode applies."""
        points = [Point(Fraction(2, 3), 0, 0)]
        array = GeometryConverter.points_to_array(points, oom=-2, rm=RoundingMode.FLOOR)
        assert array[0, 0] == 0.66

    def test_empty(self):
        """Test no points gives an empty (0, 3) array."""
        assert GeometryConverter.points_to_array([]).shape == (0, 3)


def test_aabb_from_array():
    """Test the box of an array of points."""
    box = GeometryConverter.aabb_from_array(np.array([[0, 5, -1], [2, 1, 3], [1, 1, 1]]))
    assert box == AABB(0, 2, 1, 5, -1, 3)
