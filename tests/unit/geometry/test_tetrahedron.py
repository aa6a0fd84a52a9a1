"""
Unit tests for tetrahedra.
"""

from fractions import Fraction

import pytest

from v3d.core.environment import Environment
from v3d.core.exceptions import ConstructionError
from v3d.geometry.point import Point
from v3d.geometry.tetrahedron import Tetrahedron, orientation
from v3d.geometry.vector import Vector


@pytest.fixture
def tetrahedron(unit_tetrahedron_points):
    return Tetrahedron(*unit_tetrahedron_points)


class TestTetrahedron:
    """Tests for Tetrahedron."""

    def test_coplanar_rejected(self, unit_square):
        """Test four coplanar points do not make a tetrahedron."""
        with pytest.raises(ConstructionError):
            Tetrahedron(*unit_square)

    def test_volume(self, tetrahedron):
        """Test the volume of the unit corner tetrahedron."""
        assert tetrahedron.volume == Fraction(1, 6)

    def test_orientation_normalised(self, unit_tetrahedron_points):
        """Test the stored vertices always have negative orientation."""
        p, q, r, s = unit_tetrahedron_points
        for tet in (Tetrahedron(p, q, r, s), Tetrahedron(p, r, q, s)):
            assert orientation(*tet.points) < 0

    @pytest.mark.parametrize("swap", [False, True])
    def test_face_normals_point_outward(self, unit_tetrahedron_points, swap):
        """Test every face has the centroid behind it."""
        p, q, r, s = unit_tetrahedron_points
        tet = Tetrahedron(p, r, q, s) if swap else Tetrahedron(p, q, r, s)
        centroid = tet.centroid
        for face in tet.faces:
            assert face.plane.side(centroid) < 0

    def test_faces_and_edges(self, tetrahedron):
        """Test there are four distinct faces and six edges."""
        assert len(tetrahedron.faces) == 4
        assert len(tetrahedron.edges) == 6
        assert len({frozenset(f.points) for f in tetrahedron.faces}) == 4

    def test_contains(self, tetrahedron):
        """Test interior, vertex and face points, and an outside point."""
        assert tetrahedron.contains(Point("0.1", "0.1", "0.1"))
        assert tetrahedron.contains(Point(0, 0, 0))
        assert tetrahedron.contains(Point("0.5", "0.5", 0))
        assert not tetrahedron.contains(Point("0.5", "0.5", "0.5"))

    def test_surface_area(self, tetrahedron):
        """Test the surface area rounded at the given place."""
        # Three right triangles of area 1/2 and one equilateral of area sqrt(3)/2.
        assert tetrahedron.area(-3) == Fraction(2366, 1000)

    def test_translate(self, tetrahedron):
        """Test translating moves faces, containment and bounds."""
        faces = tetrahedron.faces
        tetrahedron.translate(Vector(0, 0, 10))
        assert tetrahedron.faces is not faces
        assert tetrahedron.contains(Point("0.1", "0.1", "10.1"))
        assert tetrahedron.volume == Fraction(1, 6)
        assert tetrahedron.aabb.lo == (0, 0, 10)

    def test_held_edges_follow_translate(self, tetrahedron):
        """Test edges taken before a translate move with the tetrahedron."""
        edges = tetrahedron.edges
        boxes = [edge.aabb for edge in edges]
        tetrahedron.translate(Vector(0, 0, 10))

        for edge, box in zip(edges, boxes):
            assert edge.aabb.lo[2] == box.lo[2] + 10
            assert edge.intersects(edge.midpoint)

    def test_equality(self, unit_tetrahedron_points):
        """Test vertex order does not matter for equality."""
        p, q, r, s = unit_tetrahedron_points
        assert Tetrahedron(p, q, r, s) == Tetrahedron(s, r, q, p)

    def test_id(self, unit_tetrahedron_points):
        """Test the id comes from the environment."""
        env = Environment()
        env.next_id()
        assert Tetrahedron(*unit_tetrahedron_points, env=env).id == 1

    def test_rotated(self, tetrahedron, z_axis, quarter_turn):
        """Test a quarter turn about the z axis."""
        turned = tetrahedron.rotated(z_axis, quarter_turn, -3)
        expected = Tetrahedron(Point(0, 0, 0), Point(0, 1, 0), Point(-1, 0, 0), Point(0, 0, 1))
        assert turned == expected
        assert turned.volume == Fraction(1, 6)
        assert orientation(*turned.points) < 0
        assert tetrahedron.contains(Point("0.1", "0.1", "0.1"))
