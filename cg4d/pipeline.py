from __future__ import annotations
from typing import List, Optional, Sequence

import numpy as np

from .cells import Cell, reconstruct_cells
from .config import Settings
from .hyperplane import Hyperplane
from .logging import logger
from .ordering import fan_triangles, planar_order
from .tetrahedron import Tetrahedron
from .topology import Topology


def cell_centroid(topology: Topology, cell: Cell) -> np.ndarray:
    """Центр комірки як середнє центрів її граней."""
    centers = [topology.vertices_for_face(f).mean(axis=0) for f in cell.face_indices]
    return np.mean(centers, axis=0)


def tetrahedralize(topology: Topology, cells: Sequence[Cell]) -> List[Tetrahedron]:
    """
    Розбиває кожну комірку на тетраедри «віялом з вершини»:
      - апекс — перша вершина першої грані комірки;
      - кожна грань без апекса впорядковується по колу (`planar_order`
        у гіперплощині комірки) і розбивається віялом на трикутники;
      - кожен трикутник разом з апексом дає тетраедр.

    Порядок і кількість тетраедрів повністю визначаються входом.
    Комірка без граней пропускається з попередженням.
    """
    out: List[Tetrahedron] = []
    for ci, cell in enumerate(cells):
        if not len(cell):
            logger.warning("Cell {} has no faces; skipped", ci)
            continue

        center = cell_centroid(topology, cell)
        apex = topology.face(cell.face_indices[0])[0]
        apex_point = topology.vertex(apex)

        before = len(out)
        for f in cell.face_indices:
            ids = topology.face(f)
            if apex in ids:
                continue
            pts = topology.vertices[list(ids)]
            ring = [ids[i] for i in planar_order(pts, cell.hyperplane)]
            for a, b, c in fan_triangles(len(ring)):
                vid = (ring[a], ring[b], ring[c], apex)
                verts = np.vstack([topology.vertices[list(vid[:3])], apex_point])
                out.append(Tetrahedron(verts, ci, center, vid))
        logger.debug("Cell {}: {} faces -> {} tetrahedra", ci, len(cell), len(out) - before)

    logger.info("Tetrahedralized {} cells into {} tetrahedra", len(cells), len(out))
    return out


def build_tetrahedra(
    topology: Topology,
    hyperplanes: Sequence[Hyperplane],
    settings: Optional[Settings] = None,
) -> List[Tetrahedron]:
    """Реконструкція комірок і тетраедралізація одним викликом."""
    return tetrahedralize(topology, reconstruct_cells(topology, hyperplanes, settings))
