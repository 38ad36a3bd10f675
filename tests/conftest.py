"""Shared fixtures for the cg4d test-suite."""
import numpy as np
import pytest

from cg4d.logging import logger
from cg4d.pipeline import build_tetrahedra
from cg4d.polychora import Polychoron, load
from cg4d.tetrahedron import Tetrahedron


# ---------------------------------------------------------------------------
# Shapes
# ---------------------------------------------------------------------------

@pytest.fixture(scope="session")
def tesseract():
    """(Topology, hyperplanes) of the 8-cell with vertices (±1, ±1, ±1, ±1)."""
    return load(Polychoron.CELL_8)


@pytest.fixture(scope="session")
def tesseract_tets(tesseract):
    topo, planes = tesseract
    return build_tetrahedra(topo, planes)


@pytest.fixture
def unit_tet():
    """Tetrahedron {0, e1, e2, e3}, lying entirely in w = 0."""
    return Tetrahedron(np.array([
        [0.0, 0.0, 0.0, 0.0],
        [1.0, 0.0, 0.0, 0.0],
        [0.0, 1.0, 0.0, 0.0],
        [0.0, 0.0, 1.0, 0.0],
    ]))


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

@pytest.fixture
def log_messages():
    """Collects loguru messages (DEBUG and up) emitted during a test."""
    messages = []
    sink_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(sink_id)


def _is_convex_cycle(points, tol=1e-12):
    """True when 3D points, taken in order, turn the same way at every corner."""
    p = np.asarray(points, dtype=float)
    n = len(p)
    c = p.mean(axis=0)
    normal = sum(np.cross(p[i] - c, p[(i + 1) % n] - c) for i in range(n))
    turns = [
        np.dot(np.cross(p[(i + 1) % n] - p[i], p[(i + 2) % n] - p[(i + 1) % n]), normal)
        for i in range(n)
    ]
    return all(t > tol for t in turns) or all(t < -tol for t in turns)


@pytest.fixture
def convex_cycle():
    return _is_convex_cycle
