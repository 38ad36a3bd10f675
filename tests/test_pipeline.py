"""Tests for cg4d.pipeline (apex-fan tetrahedralization)."""
from itertools import combinations, product

import numpy as np
import pytest

from cg4d.cells import Cell, reconstruct_cells
from cg4d.hyperplane import Hyperplane
from cg4d.pipeline import build_tetrahedra, cell_centroid, tetrahedralize
from cg4d.polychora import Polychoron, load
from cg4d.topology import Topology


class TestCounts:

    @pytest.mark.parametrize("shape, expected", [
        (Polychoron.CELL_5, 5),
        (Polychoron.CELL_8, 48),
        (Polychoron.CELL_16, 16),
        (Polychoron.CELL_24, 96),
        (Polychoron.CELL_600, 600),
        (Polychoron.CELL_120, 3240),
    ])
    def test_tetrahedra_count(self, shape, expected):
        topo, planes = load(shape)
        assert len(build_tetrahedra(topo, planes)) == expected

    def test_deterministic(self, tesseract):
        topo, planes = tesseract
        first = build_tetrahedra(topo, planes)
        second = build_tetrahedra(topo, planes)
        assert len(first) == len(second)
        for a, b in zip(first, second):
            assert a.vertex_ids == b.vertex_ids
            assert a.cell_index == b.cell_index
            np.testing.assert_array_equal(a.vertices, b.vertices)


class TestStructure:

    def test_partition_by_cell(self, tesseract, tesseract_tets):
        topo, planes = tesseract
        cells = reconstruct_cells(topo, planes)
        for tet in tesseract_tets:
            cell = cells[tet.cell_index]
            allowed = {v for f in cell for v in topo.face(f)}
            assert set(tet.vertex_ids) <= allowed
            assert np.all(cell.hyperplane.inside(tet.vertices))

    def test_apex_is_first_vertex_of_first_face(self, tesseract, tesseract_tets):
        topo, planes = tesseract
        cells = reconstruct_cells(topo, planes)
        for tet in tesseract_tets:
            cell = cells[tet.cell_index]
            assert tet.vertex_ids[3] == topo.face(cell.face_indices[0])[0]

    def test_tesseract_volume(self, tesseract_tets):
        # 8 cubes of edge 2
        assert sum(t.volume() for t in tesseract_tets) == pytest.approx(64.0)

    def test_no_degenerate_tetrahedra(self, tesseract_tets):
        assert min(t.volume() for t in tesseract_tets) > 1e-9

    def test_cell_centroid(self, tesseract):
        topo, planes = tesseract
        cells = reconstruct_cells(topo, planes)
        for cell in cells:
            c = cell_centroid(topo, cell)
            # centre of a cube facet is its unit normal
            np.testing.assert_allclose(c, cell.hyperplane.normal, atol=1e-12)

    def test_tetrahedra_carry_cell_centroid(self, tesseract, tesseract_tets):
        topo, planes = tesseract
        cells = reconstruct_cells(topo, planes)
        tet = tesseract_tets[0]
        np.testing.assert_allclose(tet.cell_centroid, cell_centroid(topo, cells[tet.cell_index]))


class TestDegenerateInput:

    def test_empty_cell_is_skipped(self, tesseract, log_messages):
        topo, _ = tesseract
        empty = Cell(Hyperplane((0.0, 0.0, 0.0, 1.0), -5.0), ())
        assert tetrahedralize(topo, [empty]) == []
        assert any("no faces" in m for m in log_messages)

    def test_empty_cell_does_not_abort_others(self, tesseract):
        topo, planes = tesseract
        cells = reconstruct_cells(topo, planes)
        empty = Cell(Hyperplane((0.0, 0.0, 0.0, 1.0), -5.0), ())
        tets = tetrahedralize(topo, [empty] + cells)
        assert len(tets) == 48
        assert min(t.cell_index for t in tets) == 1


# ---------------------------------------------------------------------------
# Faces given in arbitrary (non-cyclic) vertex order
# ---------------------------------------------------------------------------

def _lexicographic_tesseract():
    """
    Tesseract whose square faces list their vertices lexicographically,
    i.e. (--, -+, +-, ++): taken as a cycle, every square is crossed.
    """
    verts = np.array(list(product((-1.0, 1.0), repeat=4)))
    index = {tuple(v): i for i, v in enumerate(verts)}

    edges, faces = [], []
    for axis in range(4):
        for v in verts[verts[:, axis] < 0]:
            w = v.copy()
            w[axis] = 1.0
            edges.append((index[tuple(v)], index[tuple(w)]))
    for a, b in combinations(range(4), 2):
        fixed = [k for k in range(4) if k not in (a, b)]
        for signs in product((-1.0, 1.0), repeat=2):
            face = []
            for sa, sb in product((-1.0, 1.0), repeat=2):
                p = np.zeros(4)
                p[fixed] = signs
                p[a], p[b] = sa, sb
                face.append(index[tuple(p)])
            faces.append(face)

    topo = Topology.from_arrays(verts, edges, faces, faces_per_cell=6, cells=8)
    planes = [Hyperplane(s * np.eye(4)[k], -1.0) for k in range(4) for s in (-1.0, 1.0)]
    return topo, planes


def _contains(tet, p, tol=1e-9):
    """Barycentric test for a point lying in the tetrahedron's 3-flat."""
    m = (tet.vertices[1:] - tet.vertices[0]).T
    lam = np.linalg.lstsq(m, p - tet.vertices[0], rcond=None)[0]
    bary = np.concatenate([[1.0 - lam.sum()], lam])
    return bool(np.all(bary >= -tol))


class TestUnorderedFaces:

    def test_faces_are_stored_crossed(self, convex_cycle):
        topo, _ = _lexicographic_tesseract()
        assert topo.num_faces == 24 and topo.num_edges == 32
        # face 0 spans axes 0 and 1
        assert not convex_cycle(topo.vertices_for_face(0)[:, :3])

    def test_each_cell_is_covered_exactly_once(self):
        topo, planes = _lexicographic_tesseract()
        tets = build_tetrahedra(topo, planes)
        assert len(tets) == 48
        assert sum(t.volume() for t in tets) == pytest.approx(64.0)

        rng = np.random.default_rng(11)
        wrong = 0
        for ci, hp in enumerate(planes):
            own = [t for t in tets if t.cell_index == ci]
            axis = int(np.argmax(np.abs(hp.normal)))
            samples = rng.uniform(-0.95, 0.95, size=(100, 4))
            samples[:, axis] = -hp.displacement * hp.normal[axis]
            for p in samples:
                if sum(_contains(t, p) for t in own) != 1:
                    wrong += 1
        assert wrong == 0
