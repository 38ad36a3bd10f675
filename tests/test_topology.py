"""Tests for cg4d.topology."""
import numpy as np
import pytest

from cg4d.errors import TopologyError
from cg4d.topology import Topology


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def square():
    """A single square face in the plane z = w = 0."""
    verts = np.array([
        [0.0, 0.0, 0.0, 0.0],
        [1.0, 0.0, 0.0, 0.0],
        [1.0, 1.0, 0.0, 0.0],
        [0.0, 1.0, 0.0, 0.0],
    ])
    return Topology(
        vertices=verts,
        edges=(0, 1, 1, 2, 2, 3, 3, 0),
        faces=(0, 1, 2, 3),
        vertices_per_face=4,
        faces_per_cell=1,
    )


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

class TestConstruction:

    def test_counts(self, square):
        assert square.num_vertices == 4
        assert square.num_edges == 4
        assert square.num_faces == 1

    def test_face_length_not_multiple(self):
        with pytest.raises(TopologyError):
            Topology(np.zeros((4, 4)), edges=(0, 1), faces=(0, 1, 2), vertices_per_face=4)

    def test_edge_length_not_multiple(self):
        with pytest.raises(TopologyError):
            Topology(np.zeros((4, 4)), edges=(0, 1, 2), faces=(0, 1, 2, 3))

    def test_index_out_of_range(self):
        with pytest.raises(TopologyError):
            Topology(np.zeros((4, 4)), edges=(0, 4), faces=(0, 1, 2, 3))

    def test_negative_index(self):
        with pytest.raises(TopologyError):
            Topology(np.zeros((4, 4)), edges=(0, 1), faces=(0, 1, 2, -1))

    def test_non_finite_vertices(self):
        verts = np.zeros((4, 4))
        verts[2, 1] = np.inf
        with pytest.raises(TopologyError):
            Topology(verts, edges=(0, 1), faces=(0, 1, 2, 3))

    def test_wrong_vertex_shape(self):
        with pytest.raises(TopologyError):
            Topology(np.zeros((4, 3)), edges=(0, 1), faces=(0, 1, 2, 3))

    def test_non_positive_arity(self):
        with pytest.raises(TopologyError):
            Topology(np.zeros((4, 4)), edges=(0, 1), faces=(0, 1, 2, 3), faces_per_cell=0)

    def test_vertices_are_read_only_copy(self, square):
        src = np.zeros((4, 4))
        topo = Topology(src, edges=(0, 1), faces=(0, 1, 2, 3))
        src[0, 0] = 7.0
        assert topo.vertices[0, 0] == 0.0
        with pytest.raises(ValueError):
            square.vertices[0, 0] = 1.0

    def test_from_arrays(self):
        topo = Topology.from_arrays(
            np.eye(4), edges=[[0, 1], [1, 2]], faces=[[0, 1, 2], [1, 2, 3]], faces_per_cell=2,
        )
        assert topo.vertices_per_face == 3
        assert topo.faces == (0, 1, 2, 1, 2, 3)
        assert topo.num_edges == 2


# ---------------------------------------------------------------------------
# Accessors
# ---------------------------------------------------------------------------

class TestAccessors:

    def test_vertex_and_edge(self, square):
        np.testing.assert_allclose(square.vertex(2), [1.0, 1.0, 0.0, 0.0])
        a, b = square.vertices_for_edge(3)
        np.testing.assert_allclose(a, square.vertex(3))
        np.testing.assert_allclose(b, square.vertex(0))

    def test_face(self, square):
        assert square.face(0) == (0, 1, 2, 3)
        assert square.vertices_for_face(0).shape == (4, 4)
        with pytest.raises(IndexError):
            square.face(1)

    def test_arrays(self, square):
        assert square.face_array().shape == (1, 4)
        assert square.edge_array().tolist() == [[0, 1], [1, 2], [2, 3], [3, 0]]

    def test_faces_containing(self, tesseract):
        topo, _ = tesseract
        # every vertex of the tesseract touches 6 squares
        assert len(topo.faces_containing([0])) == 6
        a, b = topo.edge(0)
        assert len(topo.faces_containing([a, b])) == 3
